"""Typed accessors layered on ``CryptolSession.call``."""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from contracts.v1.schemas import Answer

from .config import SUITE_B_MODULE
from .errors import DecodeError
from .session import CryptolSession

_HEX_RE = re.compile(r"^[0-9a-fA-F]*$")


class HashDigest(BaseModel):
    """Bit-vector value returned by the SHA-2 functions.

    Example::

        {"data": "5d13bb39...80f7b", "encoding": "hex", "expression": "bits", "width": 384}
    """

    model_config = ConfigDict(extra="ignore")

    data: str
    encoding: str
    expression: str
    width: int = Field(ge=0)

    @model_validator(mode="after")
    def _hex_data_is_hex(self) -> "HashDigest":
        if self.encoding == "hex" and not _HEX_RE.match(self.data):
            raise ValueError("hex-encoded digest data contains non-hex characters")
        return self

    @property
    def formatted(self) -> str:
        return format_hex(self)


def decode_hash_digest(answer: Answer) -> HashDigest:
    """Decode ``answer.value`` as a hash digest bit vector."""
    if not isinstance(answer.value, dict):
        raise DecodeError(
            f"Expected a bit-vector object, got {type(answer.value).__name__}"
        )
    try:
        return HashDigest.model_validate(answer.value)
    except ValidationError as e:
        raise DecodeError(f"Answer value is not a hash digest: {e}") from e


def format_hex(digest: HashDigest) -> str:
    """Render a hex-encoded digest with a ``0x`` radix prefix."""
    if digest.encoding != "hex":
        raise DecodeError(f"Cannot format {digest.encoding!r} digest as hex")
    if not _HEX_RE.match(digest.data):
        raise DecodeError(f"Digest data is not hex: {digest.data!r}")
    return f"0x{digest.data}"


def hash_digest(
    session: CryptolSession,
    function: str,
    expression: str,
    *,
    module: str = SUITE_B_MODULE,
) -> str:
    """Load ``module``, call ``function`` on ``expression`` and format the digest."""
    session.load_module(module)
    answer = session.call(function, [expression])
    return format_hex(decode_hash_digest(answer))


def sha224(session: CryptolSession, expression: str) -> str:
    return hash_digest(session, "sha224", expression)


def sha256(session: CryptolSession, expression: str) -> str:
    return hash_digest(session, "sha256", expression)


def sha384(session: CryptolSession, expression: str) -> str:
    """SHA-384 of a Cryptol expression, e.g. ``"0x0001"`` or ``'(join "Hello World")'``."""
    return hash_digest(session, "sha384", expression)


def sha512(session: CryptolSession, expression: str) -> str:
    return hash_digest(session, "sha512", expression)
