"""Object storage layer.

This module exposes the S3-backed object store, its protocol and result
types, and the storage error taxonomy.
"""

from .client import ObjectOutcome, ObjectStore, PutReceipt
from .errors import (
    DeleteFailed,
    DeserializationFailed,
    GetFailed,
    ListFailed,
    PutFailed,
    SerializationFailed,
    StorageError,
)
from .resolver import read_body, resolve_response
from .s3_client import S3ObjectStore
from .serialization import deserialize, serialize

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
    "deserialize",
    "read_body",
    "resolve_response",
    "serialize",
]
