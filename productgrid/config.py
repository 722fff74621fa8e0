"""
Settings - Environment-driven configuration.

    PRODUCTGRID_WIN_COUNT      run length needed to win (3-6, default 3)
    PRODUCTGRID_SEARCH_DEPTH   minimax ply depth (1-8, default 4)
    PRODUCTGRID_WEIGHTS        path to the value network JSON (optional)
    PRODUCTGRID_MAX_STEPS      arena move ceiling per game (default 100)
    PRODUCTGRID_LOG_LEVEL      logging level name (default WARNING)

Command-line flags override these.
"""

from __future__ import annotations
from pathlib import Path
from typing import Mapping, Optional
import logging
import os

from pydantic import BaseModel, Field, field_validator

ENV_PREFIX = "PRODUCTGRID_"

_ENV_FIELDS = {
    "WIN_COUNT": "win_target",
    "SEARCH_DEPTH": "search_depth",
    "WEIGHTS": "weights_path",
    "MAX_STEPS": "max_steps",
    "LOG_LEVEL": "log_level",
}


class Settings(BaseModel):
    """Validated runtime settings."""
    model_config = {"frozen": True}

    win_target: int = Field(3, ge=3, le=6)
    search_depth: int = Field(4, ge=1, le=8)
    weights_path: Optional[Path] = None
    max_steps: int = Field(100, ge=1)
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @field_validator("weights_path", mode="before")
    @classmethod
    def blank_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from PRODUCTGRID_* variables; unset ones keep defaults."""
        environ = os.environ if environ is None else environ
        values = {
            field: environ[ENV_PREFIX + suffix]
            for suffix, field in _ENV_FIELDS.items()
            if ENV_PREFIX + suffix in environ
        }
        return cls.model_validate(values)

    def with_overrides(self, **overrides) -> Settings:
        """Copy with every non-None override applied and re-validated."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if not changes:
            return self
        return type(self).model_validate({**self.model_dump(), **changes})
