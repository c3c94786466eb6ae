from __future__ import annotations

from unittest.mock import patch

import pytest

from s3actions import api
from s3actions.common.config import Settings, get_settings
from s3actions.infra.storage.s3_client import S3ObjectStore
from tests.infra.mock_s3 import MockS3Client


@pytest.fixture(autouse=True)
def reset_shared_state():
    get_settings.cache_clear()  # type: ignore[attr-defined]
    api.reset_store()
    yield
    api.reset_store()
    get_settings.cache_clear()  # type: ignore[attr-defined]


@pytest.fixture
def settings() -> Settings:
    return Settings(S3_REGION="us-east-1", S3_ENDPOINT_URL="http://localhost:9000")


@pytest.fixture
def memory_s3():
    """Patch S3ObjectStore to talk to an in-memory S3 client."""
    fake = MockS3Client()
    with patch.object(S3ObjectStore, "_build_client", return_value=fake):
        yield fake


@pytest.fixture
def memory_store(memory_s3, settings) -> S3ObjectStore:
    return S3ObjectStore(settings=settings)
