"""
config/settings.py — Configuration contract for checkmate reports and scripts.

Uses pydantic-settings to load, validate, and type-check the environment
variables that control how check results are reported.

Two usage modes:
  Scripts:
      cfg = load_settings()              # reads from .env + os.environ
      cfg = load_settings("env/ci.env")  # override env file path

  Tests (isolated — no env file, no os.environ bleed):
      cfg = Settings(CHECK_COLUMN_WIDTH=60, CHECK_OUTPUT="stderr")
"""
from __future__ import annotations

import os
import re
import sys
from typing import Literal, TextIO

from pydantic import field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)


class Settings(BaseSettings):
    # Settings() reads purely from kwargs. load_settings() is the explicit
    # entry point that reads the env file and os.environ.
    model_config = SettingsConfigDict(
        env_file=None,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings,)

    # -------------------------------------------------------------------------
    # Report layout
    # -------------------------------------------------------------------------
    CHECK_COLUMN_WIDTH: int = 50
    CHECK_OUTPUT: Literal["stdout", "stderr"] = "stdout"

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------
    CHECK_LOG_RESULTS: bool = False
    CHECK_LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"

    @property
    def output_stream(self) -> TextIO:
        """Stream the text report is written to."""
        return sys.stderr if self.CHECK_OUTPUT == "stderr" else sys.stdout

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------

    @field_validator("CHECK_OUTPUT", mode="before")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        """Strip trailing whitespace that GNU make leaves after include .env."""
        return v.strip()

    @field_validator("CHECK_LOG_LEVEL", mode="before")
    @classmethod
    def normalise_level(cls, v: str) -> str:
        return v.strip().upper()

    @field_validator("CHECK_COLUMN_WIDTH")
    @classmethod
    def positive_width(cls, v: int) -> int:
        if v < 1:
            raise ValueError("CHECK_COLUMN_WIDTH must be >= 1")
        return v


def load_settings(env_file: str = ".env") -> Settings:
    """Load and validate settings from an env file + os.environ.

    os.environ takes precedence over env file values. Only known Settings
    fields are passed through; everything else in the environment is ignored.

    Raises:
        ValidationError: if a value is invalid (e.g. CHECK_OUTPUT=file).
    """
    file_vals: dict[str, str] = {}
    try:
        with open(env_file, encoding="utf-8") as fh:
            for line in fh:
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                k, _, v = line.partition("=")
                k = k.strip()
                # Strip inline comments: "stderr   # stdout | stderr" → "stderr"
                v = re.sub(r"\s+#.*$", "", v.strip())
                if k:
                    file_vals[k] = v
    except FileNotFoundError:
        pass
    merged = {**file_vals, **os.environ}  # os.environ wins
    known = {k: v for k, v in merged.items() if k in Settings.model_fields}
    return Settings(**known)
