"""Converter settings, loaded with `pydantic-settings`.

Lowest to highest precedence: ``settings.toml`` and ``.env`` in the working
directory, ``PLAYLIST_REPORT_*`` environment variables, then keyword overrides
(the CLI passes its flags this way). ``settings.toml`` is flat; its keys are
the field names below.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic_settings.sources import PydanticBaseSettingsSource, TomlConfigSettingsSource

ENV_PREFIX = "PLAYLIST_REPORT_"

OUTPUT_SUFFIXES = {"xls": ".xls", "xlsx": ".xlsx"}

_FORBIDDEN_DELIMITERS = {"\r", "\n", '"'}


class Settings(BaseSettings):
    """Runtime settings for the converter."""

    model_config = SettingsConfigDict(extra="ignore", env_prefix=ENV_PREFIX, env_file=".env")

    delimiter: str = ";"
    input_encoding: str = "utf-8-sig"

    output_format: Literal["xls", "xlsx"] = "xls"
    sheet_name: str = Field(default="Sheet1", min_length=1, max_length=31)
    font_size: int = Field(default=10, ge=1, le=409)

    log_format: Literal["text", "ndjson"] = "text"
    log_level: int = logging.INFO

    # Batch discovery filter; empty means every file.
    supported_file_extensions: tuple[str, ...] = (".csv", ".txt")

    @field_validator("delimiter")
    @classmethod
    def _single_safe_character(cls, value: str) -> str:
        if len(value) != 1:
            raise ValueError("delimiter must be exactly one character")
        if value in _FORBIDDEN_DELIMITERS:
            raise ValueError(f"delimiter {value!r} is not allowed")
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _level_from_name(cls, value: Any) -> Any:
        if isinstance(value, str):
            text = value.strip()
            if text.isdigit():
                return int(text)
            level = logging.getLevelNamesMapping().get(text.upper())
            if level is None:
                raise ValueError(f"unknown log level {value!r}")
            return level
        return value

    @field_validator("supported_file_extensions", mode="before")
    @classmethod
    def _dotted_lowercase(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.split(",")
        if isinstance(value, (list, tuple)):
            cleaned = (str(ext).strip().lstrip("*").lstrip(".").lower() for ext in value)
            return tuple(f".{ext}" for ext in cleaned if ext)
        return value

    @property
    def output_suffix(self) -> str:
        return OUTPUT_SUFFIXES[self.output_format]

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        toml_file = getattr(init_settings, "init_kwargs", {}).get("_report_toml_file")
        toml_settings = TomlConfigSettingsSource(settings_cls, toml_file=toml_file or Path.cwd() / "settings.toml")
        return (init_settings, env_settings, dotenv_settings, toml_settings, file_secret_settings)

    @classmethod
    def load(cls, *, cwd: Path | None = None, **overrides: Any) -> "Settings":
        """Read ``settings.toml`` and ``.env`` from ``cwd`` (default: the working directory)."""

        root = (cwd or Path.cwd()).expanduser().resolve()
        return cls(_report_toml_file=root / "settings.toml", _env_file=root / ".env", **overrides)


__all__ = ["ENV_PREFIX", "OUTPUT_SUFFIXES", "Settings"]
