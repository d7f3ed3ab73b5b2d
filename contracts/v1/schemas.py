"""Pydantic contracts for the v1 cryptol-remote-api wire format."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _StrictModel(BaseModel):
    """Base model that rejects unknown fields."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class _ReplyModel(BaseModel):
    """Base model for server replies; the server may add fields over time."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class LoadModuleParams(_StrictModel):
    state: str | None = None
    module_name: str = Field(alias="module name", min_length=1)


class CallParams(_StrictModel):
    state: str | None = None
    function: str = Field(min_length=1)
    arguments: list[Any] = Field(default_factory=list)


class Envelope(_ReplyModel):
    """Uniform reply wrapper shared by every RPC.

    Example::

        {"answer": [], "state": "a4909ccf-...", "stderr": "", "stdout": ""}
    """

    answer: Any = None
    state: str = Field(min_length=1)
    stdout: str = ""
    stderr: str = ""

    @field_validator("stdout", "stderr", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class Answer(_ReplyModel):
    type: Any = None
    type_string: str = Field(alias="type string")
    value: Any = None


class ErrorDetail(_ReplyModel):
    path: list[str] = Field(default_factory=list)
    source: str | None = None
    warnings: list[Any] = Field(default_factory=list)


class ErrorData(_ReplyModel):
    stderr: str = ""
    stdout: str = ""
    data: ErrorDetail | None = None

    @field_validator("stdout", "stderr", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class ErrorPayload(_ReplyModel):
    """JSON-RPC error body returned by cryptol-remote-api.

    Example::

        {"code": 20500,
         "data": {"data": {"path": ["client", "//.cryptol", "/usr/local/share/cryptol"],
                           "source": "Floataboat", "warnings": []},
                  "stderr": "", "stdout": ""},
         "message": "[error] Could not find module NoModule\\nSearched paths: ..."}
    """

    code: int
    message: str = ""
    data: ErrorData | None = None

    @property
    def search_paths(self) -> list[str]:
        if self.data is None or self.data.data is None:
            return []
        return list(self.data.data.path)

    @property
    def source(self) -> str | None:
        if self.data is None or self.data.data is None:
            return None
        return self.data.data.source
