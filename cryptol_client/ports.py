"""Ports the session protocol depends on."""

from __future__ import annotations

from typing import Any, Protocol


class RpcChannelPort(Protocol):
    """Port for sending one named remote procedure and returning its raw result.

    Implementations raise ``RpcChannelRemoteError`` when the server replies
    with a JSON-RPC error object, and ``RpcChannelError`` for transport
    failures.
    """

    endpoint: str

    def request(self, method: str, params: dict[str, Any]) -> Any:
        ...
