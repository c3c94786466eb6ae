from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

ENV_FILE = Path(".env")

ADDRESSING_STYLES: tuple[str, ...] = ("auto", "path", "virtual")


def _load_env_file() -> None:
    if not ENV_FILE.exists():
        return
    for raw_line in ENV_FILE.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key and key not in os.environ:
            os.environ[key] = value


def _as_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.lower() in {"1", "true", "t", "yes", "y", "on"}


@dataclass
class Settings:
    S3_REGION: str = "us-west-1"
    S3_ENDPOINT_URL: str | None = None
    S3_ACCESS_KEY_ID: str | None = None
    S3_SECRET_ACCESS_KEY: str | None = None
    S3_USE_SSL: bool = True
    S3_ADDRESSING_STYLE: str = "auto"
    S3_VERIFY_MAX_ATTEMPTS: int = 5
    S3_VERIFY_DELAY_SECONDS: float = 0.0
    LOG_LEVEL: str = "WARNING"
    LOG_JSON: bool = False

    def __post_init__(self) -> None:
        if not self.S3_REGION:
            raise ValueError("S3_REGION must not be empty.")
        style = (self.S3_ADDRESSING_STYLE or "auto").strip().lower()
        if style not in ADDRESSING_STYLES:
            raise ValueError(
                f"S3_ADDRESSING_STYLE must be one of {', '.join(ADDRESSING_STYLES)}."
            )
        self.S3_ADDRESSING_STYLE = style
        if self.S3_VERIFY_MAX_ATTEMPTS < 1:
            raise ValueError("S3_VERIFY_MAX_ATTEMPTS must be at least 1.")
        if self.S3_VERIFY_DELAY_SECONDS < 0:
            raise ValueError("S3_VERIFY_DELAY_SECONDS must not be negative.")
        level = self.LOG_LEVEL.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"LOG_LEVEL {self.LOG_LEVEL!r} is not a logging level.")
        self.LOG_LEVEL = level

    @classmethod
    def from_environment(cls) -> "Settings":
        _load_env_file()
        return cls(
            S3_REGION=os.environ.get("S3_REGION", cls.S3_REGION),
            S3_ENDPOINT_URL=os.environ.get("S3_ENDPOINT_URL") or None,
            S3_ACCESS_KEY_ID=os.environ.get("S3_ACCESS_KEY_ID") or None,
            S3_SECRET_ACCESS_KEY=os.environ.get("S3_SECRET_ACCESS_KEY") or None,
            S3_USE_SSL=_as_bool(os.environ.get("S3_USE_SSL"), cls.S3_USE_SSL),
            S3_ADDRESSING_STYLE=os.environ.get(
                "S3_ADDRESSING_STYLE", cls.S3_ADDRESSING_STYLE
            ),
            S3_VERIFY_MAX_ATTEMPTS=int(
                os.environ.get("S3_VERIFY_MAX_ATTEMPTS", cls.S3_VERIFY_MAX_ATTEMPTS)
            ),
            S3_VERIFY_DELAY_SECONDS=float(
                os.environ.get("S3_VERIFY_DELAY_SECONDS", cls.S3_VERIFY_DELAY_SECONDS)
            ),
            LOG_LEVEL=os.environ.get("LOG_LEVEL", cls.LOG_LEVEL),
            LOG_JSON=_as_bool(os.environ.get("LOG_JSON"), cls.LOG_JSON),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_environment()
