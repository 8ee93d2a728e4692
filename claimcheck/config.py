"""Configuration utilities for the claim qualification service.

This module loads application configuration with the following rules:
- Primary source: `claimcheck_config.json` at the project root.
- Overrides: environment variables, then optional text files under `config/`.
- Validation: Pydantic models enforce required fields and value constraints.
"""

from __future__ import annotations

import json
import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator


CONFIG_DIR = Path("config")
ROOT_CONFIG = Path("claimcheck_config.json")
logger = logging.getLogger(__name__)

_TRUE_TOKENS = {"1", "true", "yes", "on"}


def _read_config_file(rel_path: str) -> Optional[str]:
    path = CONFIG_DIR / rel_path
    try:
        if path.exists():
            return path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Failed to read override %s: %s", path, e)
        return None
    return None


def _env(key: str, default: Optional[str] = None) -> Optional[str]:
    return os.environ.get(key, default)


class QualificationConfig(BaseModel):
    accident_window_days: int = Field(default=365, gt=0)
    treatment_window_days: int = Field(default=60, gt=0)


class SubmissionConfig(BaseModel):
    test_mode: bool = Field(default=False)


class DatabaseConfig(BaseModel):
    dsn: str

    @field_validator("dsn")
    @classmethod
    def dsn_must_be_non_empty(cls, v: str) -> str:
        if not isinstance(v, str) or not v.strip():
            raise ValueError("database.dsn must be a non-empty string")
        return v


class AppConfig(BaseModel):
    qualification: QualificationConfig = Field(default_factory=QualificationConfig)
    submission: SubmissionConfig = Field(default_factory=SubmissionConfig)
    database: DatabaseConfig


def _read_json_file(path: Path) -> dict:
    try:
        if path.exists():
            return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.error("Failed to read JSON config %s: %s", path, e)
    return {}


def _as_int(text: Optional[str], name: str) -> int:
    try:
        return int(str(text).strip())
    except (TypeError, ValueError):
        logger.error("Invalid integer for %s: %r", name, text)
        raise


def load_config() -> AppConfig:
    """Load configuration with validation.

    Precedence (highest first):
    1) Environment variables
    2) Text files in `config/` (optional)
    3) claimcheck_config.json at project root (primary base)
    4) Safe defaults for development
    """

    base = _read_json_file(ROOT_CONFIG)

    def _base(path: str, default: Optional[str] = None) -> Optional[str]:
        cur: object = base
        for key in path.split("."):
            if not isinstance(cur, dict) or key not in cur:
                return default
            cur = cur[key]
        return str(cur) if cur is not None else default

    dsn = (
        _env("DATABASE_URL")
        or _read_config_file("database.url")
        or _base("database.dsn")
        or "sqlite+pysqlite:///:memory:"
    )

    accident_days_text = (
        _env("CLAIMCHECK_ACCIDENT_WINDOW_DAYS")
        or _read_config_file("qualification.accident_window_days")
        or _base("qualification.accident_window_days", "365")
    )
    treatment_days_text = (
        _env("CLAIMCHECK_TREATMENT_WINDOW_DAYS")
        or _read_config_file("qualification.treatment_window_days")
        or _base("qualification.treatment_window_days", "60")
    )
    test_mode_text = (
        _env("CLAIMCHECK_TEST_MODE")
        or _read_config_file("submission.test_mode")
        or _base("submission.test_mode", "false")
    )

    try:
        cfg = AppConfig(
            qualification=QualificationConfig(
                accident_window_days=_as_int(accident_days_text, "accident_window_days"),
                treatment_window_days=_as_int(treatment_days_text, "treatment_window_days"),
            ),
            submission=SubmissionConfig(
                test_mode=str(test_mode_text).strip().lower() in _TRUE_TOKENS,
            ),
            database=DatabaseConfig(dsn=dsn),
        )
        return cfg
    except PydanticValidationError as e:
        logger.error("Invalid application configuration: %s", e)
        raise


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Process-wide configuration, loaded on first use."""
    return load_config()


__all__ = [
    "AppConfig",
    "QualificationConfig",
    "SubmissionConfig",
    "DatabaseConfig",
    "load_config",
    "get_config",
]
