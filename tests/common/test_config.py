from __future__ import annotations

import pytest

from s3actions.common import config
from s3actions.common.config import Settings, get_settings

ENV_KEYS = (
    "S3_REGION",
    "S3_ENDPOINT_URL",
    "S3_ACCESS_KEY_ID",
    "S3_SECRET_ACCESS_KEY",
    "S3_USE_SSL",
    "S3_ADDRESSING_STYLE",
    "S3_VERIFY_MAX_ATTEMPTS",
    "S3_VERIFY_DELAY_SECONDS",
    "LOG_LEVEL",
    "LOG_JSON",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for key in ENV_KEYS:
        # setenv first so teardown also removes values loaded from .env files
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    monkeypatch.setattr(config, "ENV_FILE", tmp_path / ".env")


def test_defaults():
    settings = Settings.from_environment()

    assert settings.S3_REGION == "us-west-1"
    assert settings.S3_ENDPOINT_URL is None
    assert settings.S3_USE_SSL is True
    assert settings.S3_ADDRESSING_STYLE == "auto"
    assert settings.S3_VERIFY_MAX_ATTEMPTS == 5
    assert settings.S3_VERIFY_DELAY_SECONDS == 0.0
    assert settings.LOG_LEVEL == "WARNING"
    assert settings.LOG_JSON is False


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("S3_REGION", "eu-west-2")
    monkeypatch.setenv("S3_ENDPOINT_URL", "http://localhost:9000")
    monkeypatch.setenv("S3_USE_SSL", "no")
    monkeypatch.setenv("S3_ADDRESSING_STYLE", "Path")
    monkeypatch.setenv("S3_VERIFY_MAX_ATTEMPTS", "2")
    monkeypatch.setenv("S3_VERIFY_DELAY_SECONDS", "0.25")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("LOG_JSON", "true")

    settings = Settings.from_environment()

    assert settings.S3_REGION == "eu-west-2"
    assert settings.S3_ENDPOINT_URL == "http://localhost:9000"
    assert settings.S3_USE_SSL is False
    assert settings.S3_ADDRESSING_STYLE == "path"
    assert settings.S3_VERIFY_MAX_ATTEMPTS == 2
    assert settings.S3_VERIFY_DELAY_SECONDS == 0.25
    assert settings.LOG_LEVEL == "DEBUG"
    assert settings.LOG_JSON is True


def test_env_file_does_not_override_environment(monkeypatch, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# local overrides\nS3_REGION='ca-central-1'\nS3_VERIFY_MAX_ATTEMPTS=7\n",
        encoding="utf-8",
    )
    monkeypatch.setattr(config, "ENV_FILE", env_file)
    monkeypatch.setenv("S3_VERIFY_MAX_ATTEMPTS", "3")

    settings = Settings.from_environment()

    assert settings.S3_REGION == "ca-central-1"
    assert settings.S3_VERIFY_MAX_ATTEMPTS == 3


@pytest.mark.parametrize(
    "kwargs",
    [
        {"S3_REGION": ""},
        {"S3_ADDRESSING_STYLE": "sideways"},
        {"S3_VERIFY_MAX_ATTEMPTS": 0},
        {"S3_VERIFY_DELAY_SECONDS": -1.0},
        {"LOG_LEVEL": "LOUD"},
    ],
)
def test_rejects_invalid_values(kwargs):
    with pytest.raises(ValueError):
        Settings(**kwargs)


def test_get_settings_is_cached(monkeypatch):
    monkeypatch.setenv("S3_REGION", "sa-east-1")

    first = get_settings()
    monkeypatch.setenv("S3_REGION", "us-east-2")

    assert get_settings() is first
    get_settings.cache_clear()  # type: ignore[attr-defined]
    assert get_settings().S3_REGION == "us-east-2"
