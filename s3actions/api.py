"""Module-level object store functions.

These functions share one process-wide ``S3ObjectStore``. ``set_region``
replaces that store wholesale and is not synchronized with calls in flight:
do not change the region while other threads are using these functions.
Code that needs several regions at once should create its own
``S3ObjectStore`` instances instead.

Nothing here touches logging configuration. Applications that want the
package's own console output call ``configure_logging()`` once at startup.
"""

from __future__ import annotations

from typing import Any

from s3actions.common.config import Settings, get_settings
from s3actions.common.logging import setup_logging
from s3actions.infra.storage.client import ObjectOutcome, ObjectStore, PutReceipt
from s3actions.infra.storage.s3_client import S3ObjectStore
from s3actions.infra.storage.serialization import deserialize, serialize

_store: ObjectStore | None = None


def configure_logging(settings: Settings | None = None) -> None:
    """Install the ``s3actions`` console handler using LOG_LEVEL and LOG_JSON.

    This replaces existing logging handlers, so call it at application
    startup rather than from library code.
    """
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL, json_format=settings.LOG_JSON)


def get_store() -> ObjectStore:
    """Return the shared store, creating it from settings on first use."""
    global _store
    if _store is None:
        _store = S3ObjectStore(settings=get_settings())
    return _store


def set_region(region: str) -> ObjectStore:
    """Replace the shared store with one bound to ``region``."""
    global _store
    if not region:
        raise ValueError("region must not be empty")
    _store = S3ObjectStore(settings=get_settings(), region=region)
    return _store


def reset_store() -> None:
    """Drop the shared store so the next call rebuilds it from settings."""
    global _store
    _store = None


def put_text(bucket: str, key: str, text: str, verify: bool = False) -> PutReceipt:
    return get_store().put_text(bucket, key, text, verify)


def put_object(bucket: str, key: str, value: Any, verify: bool = False) -> PutReceipt:
    return get_store().put_object(bucket, key, value, verify)


def list_objects(bucket: str, prefix: str | None = None) -> list[str]:
    return get_store().list_objects(bucket, prefix)


def get_response(bucket: str, key: str) -> ObjectOutcome:
    return get_store().get_response(bucket, key)


def get_text(bucket: str, key: str) -> Any:
    return get_store().get_text(bucket, key)


def get_object(bucket: str, key: str) -> Any:
    return get_store().get_object(bucket, key)


def delete(bucket: str, key: str) -> None:
    get_store().delete(bucket, key)


__all__ = [
    "configure_logging",
    "delete",
    "deserialize",
    "get_object",
    "get_response",
    "get_store",
    "get_text",
    "list_objects",
    "put_object",
    "put_text",
    "reset_store",
    "serialize",
    "set_region",
]
