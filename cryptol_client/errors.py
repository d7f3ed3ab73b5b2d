"""Exception taxonomy surfaced by the session protocol."""

from __future__ import annotations

from contracts.v1.schemas import ErrorPayload


class CryptolClientError(Exception):
    """Base exception for cryptol client failures."""


class ServerConnectionError(CryptolClientError):
    """Raised when the endpoint is unset, unreachable, or the prelude fails to load."""


class DecodeError(CryptolClientError):
    """Raised when a successful reply does not have the expected shape."""


class RpcError(CryptolClientError):
    """Raised when the server rejects a request.

    ``payload`` holds the structured error body when the transport exposed
    one; otherwise only ``message`` (and possibly ``code``) is known.
    """

    def __init__(
        self,
        message: str,
        *,
        code: int | None = None,
        payload: ErrorPayload | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code if code is not None else (payload.code if payload else None)
        self.payload = payload


class RemoteModuleNotFoundError(RpcError):
    """Raised when ``load module`` cannot locate the module on the search path."""

    def __init__(
        self,
        message: str,
        *,
        module_name: str,
        search_paths: list[str] | None = None,
        code: int | None = None,
        payload: ErrorPayload | None = None,
    ):
        super().__init__(message, code=code, payload=payload)
        self.module_name = module_name
        self.search_paths = list(search_paths or [])


class EvaluationError(RpcError):
    """Raised when the evaluator rejects a ``call`` request."""

    def __init__(
        self,
        message: str,
        *,
        function: str,
        code: int | None = None,
        payload: ErrorPayload | None = None,
    ):
        super().__init__(message, code=code, payload=payload)
        self.function = function
