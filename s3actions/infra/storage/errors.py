"""Storage error taxonomy.

Every public storage operation reports failure through exactly one of the
subclasses below, never through a raw SDK exception.
"""

from __future__ import annotations


class StorageError(RuntimeError):
    """Raised when object storage operations fail."""

    default_message = "Storage operation failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class PutFailed(StorageError):
    """Raised when an object could not be written."""

    default_message = "Failed to save"


class GetFailed(StorageError):
    """Raised when an object could not be retrieved."""

    default_message = "Failed to receive"


class DeleteFailed(StorageError):
    """Raised when an object could not be deleted."""

    default_message = "Failed to delete"


class ListFailed(StorageError):
    """Raised when the keys of a bucket could not be listed."""

    default_message = "Failed to list"


class SerializationFailed(StorageError):
    """Raised when a value cannot be encoded as JSON."""

    default_message = "Failed to serialize"


class DeserializationFailed(StorageError):
    """Raised when text cannot be decoded as JSON."""

    default_message = "Failed to deserialize"
