"""Convenience layer over S3 for text and JSON objects."""

from .api import (
    configure_logging,
    delete,
    get_object,
    get_response,
    get_store,
    get_text,
    list_objects,
    put_object,
    put_text,
    reset_store,
    set_region,
)
from .infra.storage import (
    DeleteFailed,
    DeserializationFailed,
    GetFailed,
    ListFailed,
    ObjectOutcome,
    ObjectStore,
    PutFailed,
    PutReceipt,
    S3ObjectStore,
    SerializationFailed,
    StorageError,
    deserialize,
    resolve_response,
    serialize,
)

__all__ = [
    "DeleteFailed",
    "DeserializationFailed",
    "GetFailed",
    "ListFailed",
    "ObjectOutcome",
    "ObjectStore",
    "PutFailed",
    "PutReceipt",
    "S3ObjectStore",
    "SerializationFailed",
    "StorageError",
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
    "resolve_response",
    "serialize",
    "set_region",
]
