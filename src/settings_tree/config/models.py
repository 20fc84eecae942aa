from __future__ import annotations

from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

# Config models map the schema composition YAML to typed structures.


class OutputConfig(BaseModel):
    # Where and how the built snapshot document is written; no file_path means stdout.
    model_config = ConfigDict(extra="forbid")
    format: Literal["json", "yaml"] = "json"
    # Accept both "file" and "file_path" and normalize to file_path.
    file_path: str | None = Field(default=None, validation_alias=AliasChoices("file_path", "file"))


class LoggingConfig(BaseModel):
    # Lifecycle logging; a path selects the JSONL sink, otherwise stdout.
    model_config = ConfigDict(extra="forbid")
    enabled: bool = False
    path: str | None = None


class SchemaAppConfig(BaseModel):
    # Root config: the root tree, contributing modules and optional fallback table.
    model_config = ConfigDict(extra="forbid")
    root: str
    collection_id: str | None = None
    modules: list[str] = Field(default_factory=list)
    defaults: str | None = None
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("root")
    @classmethod
    def _root_not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("root must be a non-empty string")
        return value

    @field_validator("collection_id")
    @classmethod
    def _collection_id_not_empty(cls, value: str | None) -> str | None:
        if value is not None and not value:
            raise ValueError("collection_id must be a non-empty string when provided")
        return value
