# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Application configuration via environment variables and .env files."""

import codecs

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from cleansarif.core.constants import DEFAULT_SARIF_VERSION


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CLEANSARIF_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
    )

    # Logging
    log_level: str = "INFO"
    log_format: str = "text"  # "json" or "text"

    # Export
    default_sarif_version: str = DEFAULT_SARIF_VERSION
    json_indent: int = 2
    encoding: str = "utf-8"

    # In-place export backups
    make_backup: bool = True
    backup_suffix: str = ".backup"

    @field_validator("log_format", mode="before")
    @classmethod
    def _normalize_log_format(cls, v: object) -> str:
        if isinstance(v, str):
            return v.strip().lower()
        return "text"

    @field_validator("json_indent")
    @classmethod
    def _check_indent(cls, v: int) -> int:
        if v < 0:
            raise ValueError("json_indent must be >= 0")
        return v

    @field_validator("encoding")
    @classmethod
    def _check_encoding(cls, v: str) -> str:
        try:
            codecs.lookup(v)
        except LookupError as exc:
            raise ValueError(f"unknown encoding: {v}") from exc
        return v


def get_settings() -> Settings:
    return Settings()
