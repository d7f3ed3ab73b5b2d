"""Client for sessions against a running cryptol-remote-api server."""

__version__ = "0.1.0"

from .errors import (
    CryptolClientError,
    DecodeError,
    EvaluationError,
    RemoteModuleNotFoundError,
    RpcError,
    ServerConnectionError,
)
from .facade import (
    HashDigest,
    decode_hash_digest,
    format_hex,
    hash_digest,
    sha224,
    sha256,
    sha384,
    sha512,
)
from .rpc_channel import (
    RpcChannel,
    RpcChannelError,
    RpcChannelHTTPError,
    RpcChannelRemoteError,
)
from .session import CryptolSession, connect, decode_answer

__all__ = [
    "__version__",
    "CryptolClientError",
    "CryptolSession",
    "DecodeError",
    "EvaluationError",
    "HashDigest",
    "RemoteModuleNotFoundError",
    "RpcChannel",
    "RpcChannelError",
    "RpcChannelHTTPError",
    "RpcChannelRemoteError",
    "RpcError",
    "ServerConnectionError",
    "connect",
    "decode_answer",
    "decode_hash_digest",
    "format_hex",
    "hash_digest",
    "sha224",
    "sha256",
    "sha384",
    "sha512",
]
