"""JSON serialization helpers for stored payloads."""

from __future__ import annotations

import json
import logging
from typing import Any

from s3actions.infra.storage.errors import DeserializationFailed, SerializationFailed

logger = logging.getLogger(__name__)

_TEXT_TYPES = (str, bytes, bytearray)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def loads_strict(text: str | bytes | bytearray) -> Any:
    """``json.loads`` that rejects ``NaN``, ``Infinity`` and ``-Infinity``."""
    return json.loads(text, parse_constant=_reject_constant)


def serialize(value: Any) -> str:
    """Encode ``value`` as compact JSON text.

    Raises:
        SerializationFailed: If the value has an unsupported type, contains
            a circular reference, or holds a non-finite float.
    """
    try:
        return json.dumps(
            value, ensure_ascii=False, separators=(",", ":"), allow_nan=False
        )
    except (TypeError, ValueError) as exc:
        raise SerializationFailed(f"Failed to serialize: {exc}") from exc


def deserialize(text: Any) -> Any:
    """Decode JSON text into a Python value.

    Values that are already decoded (anything other than ``str``/``bytes``)
    are returned unchanged. That includes ``None``, the decoded form of JSON
    ``null``.

    Raises:
        DeserializationFailed: If the text is not JSON.
    """
    if not isinstance(text, _TEXT_TYPES):
        return text
    try:
        return loads_strict(text)
    except ValueError as exc:
        logger.error(
            "deserialize_failed text=%r error=%s",
            text,
            exc,
            extra={"extra": {"event": "deserialize_failed"}},
        )
        raise DeserializationFailed(f"Failed to deserialize: {exc}") from exc
