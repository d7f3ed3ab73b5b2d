"""Stateful session over cryptol-remote-api.

The server keeps no per-connection state. Every reply carries a ``state``
token naming the evaluation context it produced; the next request must send
that token back. ``CryptolSession`` holds the latest token and raw answer and
only replaces them once a request has fully succeeded.

Lifecycle::

    uninitialized --connect--> idle --load_module--> module_ready --call*--> module_ready
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, Literal

from pydantic import ValidationError

from contracts.v1.schemas import Answer, CallParams, Envelope, LoadModuleParams

from .config import PRELUDE_MODULE, resolve_server_url, resolve_timeout_seconds
from .diagnostics import decode_error_payload, parse_module_not_found, summarize_message
from .errors import (
    DecodeError,
    EvaluationError,
    RemoteModuleNotFoundError,
    RpcError,
    ServerConnectionError,
)
from .ports import RpcChannelPort
from .rpc_channel import RpcChannel, RpcChannelError, RpcChannelRemoteError

logger = logging.getLogger(__name__)

SessionPhase = Literal["uninitialized", "idle", "module_ready"]

LOAD_MODULE_METHOD = "load module"
CALL_METHOD = "call"


def _decode_envelope(result: Any, method: str) -> Envelope:
    try:
        return Envelope.model_validate(result)
    except ValidationError as e:
        raise DecodeError(f"Malformed reply to {method!r}: {e}") from e


class CryptolSession:
    """Client-held session state: endpoint, current token, last raw answer."""

    def __init__(self, *, channel: RpcChannelPort):
        self._channel = channel
        self._token: str | None = None
        self._last_answer: Any = None
        self._last_output: tuple[str, str] = ("", "")
        self._phase: SessionPhase = "uninitialized"
        self._loaded_module: str | None = None

    @property
    def endpoint(self) -> str:
        return self._channel.endpoint

    @property
    def token(self) -> str | None:
        return self._token

    @property
    def last_answer(self) -> Any:
        return self._last_answer

    @property
    def last_output(self) -> tuple[str, str]:
        """``(stdout, stderr)`` captured by the server for the last successful request."""
        return self._last_output

    @property
    def phase(self) -> SessionPhase:
        return self._phase

    @property
    def loaded_module(self) -> str | None:
        return self._loaded_module

    def _send(self, method: str, params: dict[str, Any]) -> Envelope:
        result = self._channel.request(method, params)
        envelope = _decode_envelope(result, method)
        if envelope.stdout or envelope.stderr:
            logger.debug("%s stdout=%r stderr=%r", method, envelope.stdout, envelope.stderr)
        return envelope

    def _commit(self, envelope: Envelope) -> None:
        self._token = envelope.state
        self._last_answer = envelope.answer
        self._last_output = (envelope.stdout, envelope.stderr)

    def bootstrap(self) -> None:
        """Load the prelude with a null token and seed the session from the reply."""
        params = LoadModuleParams(state=None, module_name=PRELUDE_MODULE)
        try:
            envelope = self._send(LOAD_MODULE_METHOD, params.model_dump(by_alias=True))
        except RpcChannelRemoteError as e:
            raise ServerConnectionError(
                f"Loading {PRELUDE_MODULE} on {self.endpoint} failed: {summarize_message(e.message)}"
            ) from e
        except RpcChannelError as e:
            raise ServerConnectionError(f"Could not reach cryptol-remote-api at {self.endpoint}: {e}") from e
        except DecodeError as e:
            raise ServerConnectionError(f"Unexpected reply from {self.endpoint}: {e}") from e

        self._commit(envelope)
        self._phase = "idle"
        self._loaded_module = PRELUDE_MODULE
        logger.info("Connected to cryptol-remote-api at %s", self.endpoint)

    def load_module(self, module_name: str) -> None:
        """Load ``module_name`` from the server's search path.

        Raises ``RemoteModuleNotFoundError`` when the module cannot be located
        and ``RpcError`` for any other rejection.
        """
        params = LoadModuleParams(state=self._token, module_name=module_name)
        try:
            envelope = self._send(LOAD_MODULE_METHOD, params.model_dump(by_alias=True))
        except RpcChannelRemoteError as e:
            raise self._load_module_error(module_name, e) from e
        except RpcChannelError as e:
            raise RpcError(f"load module {module_name!r} failed: {e}") from e

        self._commit(envelope)
        self._phase = "module_ready"
        self._loaded_module = module_name
        logger.debug("Loaded module %s", module_name)

    def call(self, function: str, arguments: Sequence[Any] = ()) -> Answer:
        """Call ``function`` with ``arguments`` and return the decoded answer.

        The token is advanced as soon as the server accepts the call, even if
        the answer does not decode.
        """
        if isinstance(arguments, (str, bytes)):
            raise TypeError("arguments must be a sequence of expressions, not a single string")
        params = CallParams(state=self._token, function=function, arguments=list(arguments))
        try:
            envelope = self._send(CALL_METHOD, params.model_dump(by_alias=True))
        except RpcChannelRemoteError as e:
            payload = decode_error_payload(e.body)
            logger.warning("call %s rejected: %s", function, summarize_message(e.message))
            raise EvaluationError(
                f"call {function!r} failed: {summarize_message(e.message)}",
                function=function,
                code=e.code,
                payload=payload,
            ) from e
        except RpcChannelError as e:
            raise RpcError(f"call {function!r} failed: {e}") from e

        self._commit(envelope)
        return decode_answer(envelope.answer)

    @staticmethod
    def _load_module_error(module_name: str, exc: RpcChannelRemoteError) -> RpcError:
        payload = decode_error_payload(exc.body)
        message = payload.message if payload is not None else exc.message
        summary = summarize_message(message)
        logger.warning("load module %s rejected: %s", module_name, summary)

        not_found = parse_module_not_found(message)
        if not_found is not None:
            search_paths = not_found.search_paths
            if payload is not None and payload.search_paths:
                search_paths = payload.search_paths
            return RemoteModuleNotFoundError(
                summary,
                module_name=not_found.module_name,
                search_paths=search_paths,
                code=exc.code,
                payload=payload,
            )
        return RpcError(summary, code=exc.code, payload=payload)


def decode_answer(raw: Any) -> Answer:
    """Decode a raw ``answer`` field into an ``Answer``."""
    if not isinstance(raw, dict):
        raise DecodeError(f"Expected an answer object, got {type(raw).__name__}")
    try:
        return Answer.model_validate(raw)
    except ValidationError as e:
        raise DecodeError(f"Answer does not match the expected shape: {e}") from e


def connect(
    endpoint: str | None = None,
    *,
    channel: RpcChannelPort | None = None,
    timeout_seconds: float | None = None,
) -> CryptolSession:
    """Open a session against cryptol-remote-api.

    ``endpoint`` falls back to ``CRYPTOL_SERVER_URL``. A missing endpoint
    raises ``ServerConnectionError`` without touching the network.
    """
    if channel is None:
        url = resolve_server_url(endpoint)
        if url is None:
            raise ServerConnectionError(
                "No cryptol-remote-api endpoint configured; pass one or set CRYPTOL_SERVER_URL"
            )
        logger.info("Attempting to connect to cryptol-remote-api at %s", url)
        channel = RpcChannel(
            endpoint=url,
            timeout_seconds=resolve_timeout_seconds(timeout_seconds),
            keep_alive=True,
        )

    session = CryptolSession(channel=channel)
    session.bootstrap()
    return session
