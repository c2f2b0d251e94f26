from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Config models map YAML sections to typed structures.


class AdapterDecl(BaseModel):
    # Adapter declaration: registry kind plus free-form settings passed to the factory.
    model_config = ConfigDict(extra="forbid")
    kind: str
    settings: dict[str, Any] = Field(default_factory=dict)

    def as_registry_entry(self) -> dict[str, object]:
        return {"kind": self.kind, "settings": dict(self.settings)}


class PipelineConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    strategy: Literal["pump", "readline"] = "pump"
    delimiter: str = "\n"

    @field_validator("delimiter")
    @classmethod
    def _single_byte(cls, value: str) -> str:
        if len(value) != 1 or not value.isascii():
            raise ValueError("pipeline.delimiter must be exactly one ASCII character")
        return value

    @property
    def delimiter_bytes(self) -> bytes:
        return self.delimiter.encode("ascii")


class LogSinkConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["stderr", "stdout", "jsonl"] = "stderr"
    path: str | None = None

    @model_validator(mode="after")
    def _require_path(self) -> LogSinkConfig:
        # For jsonl kind, a path is required to avoid silent defaults.
        if self.kind == "jsonl" and not self.path:
            raise ValueError("logging.sink.path is required when kind is 'jsonl'")
        return self


class LoggingConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["debug", "info", "warning", "error"] = "info"
    sink: LogSinkConfig = Field(default_factory=LogSinkConfig)


class AppConfig(BaseModel):
    # Root config; version 1 is the only supported layout.
    model_config = ConfigDict(extra="forbid")
    version: Literal[1] = 1
    source: AdapterDecl = Field(default_factory=lambda: AdapterDecl(kind="stdin"))
    sink: AdapterDecl = Field(default_factory=lambda: AdapterDecl(kind="stdout"))
    pipeline: PipelineConfig = Field(default_factory=PipelineConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @model_validator(mode="after")
    def _readline_needs_newline(self) -> AppConfig:
        # readline() only splits on LF.
        if self.pipeline.strategy == "readline" and self.pipeline.delimiter != "\n":
            raise ValueError("pipeline.strategy 'readline' supports only the newline delimiter")
        return self
