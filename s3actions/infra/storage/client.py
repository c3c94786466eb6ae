"""Object store protocol and data types.

This module defines the interface shared by object store implementations:
single-object put/get/list/delete, plus JSON-typed variants.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Protocol, runtime_checkable

SUCCESS_STATUS = 200


def is_success_range(status_code: int | None) -> bool:
    """Return True for any 2xx status code."""
    return status_code is not None and 200 <= status_code < 300


@dataclass(frozen=True, slots=True)
class ObjectOutcome:
    """Status code and optional body stream returned by a get request."""

    status_code: int | None
    body: Any = None
    content_type: str | None = None
    content_length: int | None = None
    etag: str | None = None
    raw: Mapping[str, Any] = field(default_factory=dict, repr=False)


@dataclass(frozen=True, slots=True)
class PutReceipt:
    """Result of a put.

    ``verified`` is None when no verification was requested; otherwise it
    tells whether a confirmatory read succeeded within ``attempts`` reads.
    """

    bucket: str
    key: str
    status_code: int
    etag: str | None = None
    verified: bool | None = None
    attempts: int = 0


@runtime_checkable
class ObjectStore(Protocol):
    """Protocol defining single-object storage operations.

    All failures are reported as ``StorageError`` subclasses.
    """

    def put_text(
        self, bucket: str, key: str, text: str, verify: bool = False
    ) -> PutReceipt:
        """Store ``text`` at bucket/key.

        Args:
            bucket: Target bucket name.
            key: Object key in the bucket.
            text: Content to store.
            verify: Poll with reads until the object is visible.

        Raises:
            PutFailed: If the write fails.
        """
        ...

    def put_object(
        self, bucket: str, key: str, value: Any, verify: bool = False
    ) -> PutReceipt:
        """Store ``value`` as JSON at bucket/key.

        Raises:
            PutFailed: If serialization or the write fails.
        """
        ...

    def list_objects(self, bucket: str, prefix: str | None = None) -> list[str]:
        """Return all keys in ``bucket``.

        Raises:
            ListFailed: If the listing fails.
        """
        ...

    def get_response(self, bucket: str, key: str) -> ObjectOutcome:
        """Return the raw outcome of reading bucket/key.

        Raises:
            GetFailed: If the read fails.
        """
        ...

    def get_text(self, bucket: str, key: str) -> Any:
        """Return the object's content as text, or decoded JSON.

        Raises:
            GetFailed: If the read fails.
        """
        ...

    def get_object(self, bucket: str, key: str) -> Any:
        """Return the object's content decoded from JSON.

        Raises:
            GetFailed: If the read fails.
            DeserializationFailed: If the content is not JSON.
        """
        ...

    def delete(self, bucket: str, key: str) -> None:
        """Delete bucket/key.

        Raises:
            DeleteFailed: If the delete fails.
        """
        ...
