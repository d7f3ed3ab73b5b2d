"""
Configuration constants for the cryptol client.
"""

import os

# Environment variable naming the cryptol-remote-api endpoint
SERVER_URL_ENV = "CRYPTOL_SERVER_URL"

_TIMEOUT_SECONDS_ENV = "CRYPTOL_CLIENT_TIMEOUT_SECONDS"

# Remote evaluation can be slow, so requests get an hour by default.
DEFAULT_TIMEOUT_SECONDS = 60 * 60

# Module loaded by the server on connect.
PRELUDE_MODULE = "Cryptol"

# Module holding the SHA-2 family.
SUITE_B_MODULE = "SuiteB"


def _to_int_env(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def resolve_server_url(explicit: str | None = None) -> str | None:
    """Return the endpoint from the explicit argument or ``CRYPTOL_SERVER_URL``.

    Blank values count as unset.
    """
    if explicit is not None and explicit.strip():
        return explicit.strip()
    value = os.environ.get(SERVER_URL_ENV, "").strip()
    return value or None


def resolve_timeout_seconds(explicit: float | None = None) -> float:
    if explicit is not None and explicit > 0:
        return float(explicit)
    return float(_to_int_env(_TIMEOUT_SECONDS_ENV, DEFAULT_TIMEOUT_SECONDS))
