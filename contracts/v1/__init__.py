"""v1 contract schemas for the cryptol-remote-api JSON-RPC surface."""

__version__ = "1.0.0"

from .schemas import (
    Answer,
    CallParams,
    Envelope,
    ErrorData,
    ErrorDetail,
    ErrorPayload,
    LoadModuleParams,
)

__all__ = [
    "__version__",
    "Answer",
    "CallParams",
    "Envelope",
    "ErrorData",
    "ErrorDetail",
    "ErrorPayload",
    "LoadModuleParams",
]
