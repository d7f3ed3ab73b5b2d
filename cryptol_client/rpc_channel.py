"""JSON-RPC over HTTP channel with timeout and error mapping."""

from __future__ import annotations

import itertools
import json
import logging
import socket
from typing import Any
from urllib import error, request

from .config import DEFAULT_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)


class RpcChannelError(Exception):
    """Base exception for RPC channel failures."""


class RpcChannelHTTPError(RpcChannelError):
    """Raised for non-success HTTP responses without a JSON-RPC error body."""

    def __init__(self, status_code: int, detail: str):
        super().__init__(f"RPC endpoint error {status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail


class RpcChannelRemoteError(RpcChannelError):
    """Raised when the server answers with a JSON-RPC ``error`` object.

    ``body`` is the raw error object, kept so callers can attempt structured
    decoding of the server's diagnostics.
    """

    def __init__(self, message: str, *, code: int | None = None, body: Any = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.body = body


class RpcChannel:
    """HTTP adapter for a single JSON-RPC endpoint."""

    def __init__(
        self,
        *,
        endpoint: str,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        keep_alive: bool = True,
    ):
        self.endpoint = endpoint
        self.timeout_seconds = timeout_seconds
        self.headers = {"Content-Type": "application/json"}
        if keep_alive:
            self.headers["Connection"] = "keep-alive"
        self._ids = itertools.count(1)

    def request(self, method: str, params: dict[str, Any]) -> Any:
        """Send ``method`` with ``params`` and return the JSON-RPC ``result``."""
        request_id = next(self._ids)
        payload = {"jsonrpc": "2.0", "id": request_id, "method": method, "params": params}
        data = json.dumps(payload).encode("utf-8")
        logger.debug("RPC #%d %s -> %s", request_id, method, self.endpoint)

        req = request.Request(self.endpoint, data=data, headers=self.headers, method="POST")
        try:
            with request.urlopen(req, timeout=self.timeout_seconds) as resp:
                raw = resp.read().decode("utf-8")
        except error.HTTPError as e:
            body = self._read_http_error_body(e)
            if isinstance(body, dict) and body.get("error") is not None:
                raise self._remote_error(body["error"]) from e
            detail = body if isinstance(body, str) else json.dumps(body)
            raise RpcChannelHTTPError(e.code, detail or str(e.reason or "HTTP error")) from e
        except (error.URLError, TimeoutError, socket.timeout) as e:
            raise RpcChannelError(f"RPC request to {self.endpoint} failed: {e}") from e

        try:
            reply = json.loads(raw) if raw else {}
        except json.JSONDecodeError as e:
            raise RpcChannelError(f"RPC endpoint returned invalid JSON: {e}") from e

        if not isinstance(reply, dict):
            raise RpcChannelError("RPC endpoint returned a non-object reply")
        if reply.get("error") is not None:
            raise self._remote_error(reply["error"])
        if "result" not in reply:
            raise RpcChannelError("RPC reply has neither 'result' nor 'error'")
        return reply["result"]

    @staticmethod
    def _remote_error(body: Any) -> RpcChannelRemoteError:
        if isinstance(body, dict):
            message = str(body.get("message") or "remote error")
            code = body.get("code")
            return RpcChannelRemoteError(
                message,
                code=code if isinstance(code, int) else None,
                body=body,
            )
        return RpcChannelRemoteError(str(body), body=body)

    @staticmethod
    def _read_http_error_body(exc: error.HTTPError) -> Any:
        try:
            body = exc.read().decode("utf-8")
        except Exception:
            return str(exc.reason or "HTTP error")
        if not body:
            return str(exc.reason or "HTTP error")
        try:
            return json.loads(body)
        except json.JSONDecodeError:
            return body
