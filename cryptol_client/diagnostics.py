"""Decoding of server-side error bodies and flattened error messages."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from contracts.v1.schemas import ErrorPayload

logger = logging.getLogger(__name__)

_MODULE_NOT_FOUND_RE = re.compile(r"Could not find module\s+(?P<module>\S+)")
_SEARCHED_PATHS_HEADER = "Searched paths:"


@dataclass
class ModuleNotFound:
    module_name: str
    search_paths: list[str] = field(default_factory=list)


def decode_error_payload(body: Any) -> ErrorPayload | None:
    """Return the structured error body, or None when it is not recoverable."""
    if not isinstance(body, dict):
        return None
    try:
        return ErrorPayload.model_validate(body)
    except ValidationError as e:
        logger.debug("Error body does not match ErrorPayload: %s", e)
        return None


def parse_module_not_found(message: str | None) -> ModuleNotFound | None:
    """Parse a ``Could not find module`` message into module name and search paths.

    Returns None when the message does not follow that convention.
    """
    if not message:
        return None
    match = _MODULE_NOT_FOUND_RE.search(message)
    if match is None:
        return None

    paths: list[str] = []
    lines = message.splitlines()
    try:
        start = next(i for i, line in enumerate(lines) if line.strip() == _SEARCHED_PATHS_HEADER)
    except StopIteration:
        start = None
    if start is not None:
        for line in lines[start + 1:]:
            # Paths are indented; the trailing hint is not.
            if not line.startswith((" ", "\t")):
                break
            stripped = line.strip()
            if stripped:
                paths.append(stripped)

    return ModuleNotFound(module_name=match.group("module"), search_paths=paths)


def summarize_message(message: str | None) -> str:
    """Strip the ``[error]`` tag and return the first line of a server message."""
    if not message:
        return "remote error"
    first = message.strip().splitlines()[0] if message.strip() else ""
    if first.startswith("[error]"):
        first = first[len("[error]"):].strip()
    return first or "remote error"
