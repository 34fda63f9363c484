from __future__ import annotations

import re
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Config models map the YAML/flag surface to typed structures.

LogLevel = Literal["debug", "info", "warning", "error", "fatal"]


class FiltersConfig(BaseModel):
    # Name filters are regular expressions; they are compiled once here to fail fast.
    model_config = ConfigDict(extra="forbid")
    feature: str | None = None
    assess: str | None = None

    @field_validator("feature", "assess")
    @classmethod
    def _check_regex(cls, value: str | None) -> str | None:
        if value is None:
            return None
        try:
            re.compile(value)
        except re.error as exc:
            raise ValueError(f"invalid regular expression {value!r}: {exc}") from exc
        return value


class LoggingConfig(BaseModel):
    # Log sink selection for orchestration diagnostics.
    model_config = ConfigDict(extra="forbid")
    sink: Literal["stderr", "jsonl"] = "stderr"
    level: LogLevel = "info"
    path: str | None = None

    @model_validator(mode="after")
    def _require_path_for_jsonl(self) -> LoggingConfig:
        if self.sink == "jsonl" and not self.path:
            raise ValueError("logging.path is required when logging.sink is 'jsonl'")
        return self


class EnvConfigModel(BaseModel):
    # Root document of an environment config file.
    model_config = ConfigDict(extra="forbid")
    version: int = 1
    filters: FiltersConfig = Field(default_factory=FiltersConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    settings: dict[str, Any] = Field(default_factory=dict)

    @field_validator("version")
    @classmethod
    def _supported_version(cls, value: int) -> int:
        if value != 1:
            raise ValueError(f"unsupported config version: {value}")
        return value
