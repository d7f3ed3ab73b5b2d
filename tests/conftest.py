"""
Shared fixtures for cryptol client tests.
"""

import io
import json
from urllib import error

import pytest


SHA384_DIGEST = (
    "5d13bb39a64c4ee16e0e8d2e1c13ec4731ff1ac69652c072d0cdc355eb9e0ec4"
    "1b08aef3dd6fe0541e9fa9e3dcc80f7b"
)

MODULE_NOT_FOUND_MESSAGE = (
    "[error] Could not find module NoModule\n"
    "Searched paths:\n"
    "    //.cryptol\n"
    "    /usr/local/share/cryptol\n"
    "Set the CRYPTOLPATH environment variable to search more directories"
)


class FakeHTTPResponse:
    def __init__(self, payload):
        self._raw = json.dumps(payload).encode("utf-8")

    def read(self):
        return self._raw

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False


class FakeServer:
    """Scripted stand-in for ``urllib.request.urlopen``.

    Each queued reply is a JSON-RPC ``result`` dict, an ``("error", body)``
    tuple, or an exception instance to raise. Sent requests are decoded into
    ``self.requests``.
    """

    def __init__(self):
        self.replies = []
        self.requests = []
        self.headers = []
        self.timeouts = []

    def reply(self, result):
        self.replies.append(("result", result))
        return self

    def reply_error(self, body):
        self.replies.append(("error", body))
        return self

    def raise_(self, exc):
        self.replies.append(("raise", exc))
        return self

    def __call__(self, req, timeout=0):
        payload = json.loads(req.data.decode("utf-8"))
        self.requests.append(payload)
        self.headers.append(dict(req.header_items()))
        self.timeouts.append(timeout)
        if not self.replies:
            raise AssertionError(f"Unexpected request: {payload}")
        kind, value = self.replies.pop(0)
        if kind == "raise":
            raise value
        if kind == "error":
            return FakeHTTPResponse({"jsonrpc": "2.0", "id": payload["id"], "error": value})
        return FakeHTTPResponse({"jsonrpc": "2.0", "id": payload["id"], "result": value})

    @property
    def methods(self):
        return [r["method"] for r in self.requests]

    @property
    def last_params(self):
        return self.requests[-1]["params"]


@pytest.fixture
def fake_server(monkeypatch):
    server = FakeServer()
    monkeypatch.setattr("urllib.request.urlopen", server)
    return server


@pytest.fixture
def envelope():
    """Build an envelope dict the way cryptol-remote-api returns it."""
    def _make(state, answer=None, stdout="", stderr=""):
        return {
            "answer": [] if answer is None else answer,
            "state": state,
            "stderr": stderr,
            "stdout": stdout,
        }
    return _make


@pytest.fixture
def sha384_digest():
    return SHA384_DIGEST


@pytest.fixture
def sha384_answer():
    return {
        "type": {
            "forall": [],
            "propositions": [],
            "type": {"type": "bitvector", "width": {"type": "number", "value": 384}},
        },
        "type string": "[384]",
        "value": {
            "data": SHA384_DIGEST,
            "encoding": "hex",
            "expression": "bits",
            "width": 384,
        },
    }


@pytest.fixture
def module_not_found_error():
    return {
        "code": 20500,
        "data": {
            "data": {
                "path": ["client", "//.cryptol", "/usr/local/share/cryptol"],
                "source": "NoModule",
                "warnings": [],
            },
            "stderr": "",
            "stdout": "",
        },
        "message": MODULE_NOT_FOUND_MESSAGE,
    }


@pytest.fixture
def connected(fake_server, envelope):
    """A session connected to the fake server with token ``t0``."""
    from cryptol_client import connect

    fake_server.reply(envelope("t0"))
    return connect("http://cryptol.local:8080/")


@pytest.fixture
def http_error():
    """Build an ``HTTPError`` carrying ``body``."""
    def _make(code, body=b""):
        return error.HTTPError(
            url="http://cryptol.local:8080/",
            code=code,
            msg="error",
            hdrs=None,
            fp=io.BytesIO(body),
        )
    return _make
