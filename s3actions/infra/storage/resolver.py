"""Turn get responses into text or decoded JSON."""

from __future__ import annotations

from typing import Any

from s3actions.infra.storage.client import ObjectOutcome
from s3actions.infra.storage.serialization import loads_strict


def _to_bytes(chunk: Any) -> bytes:
    if isinstance(chunk, str):
        return chunk.encode("utf-8")
    return bytes(chunk)


def read_body(body: Any) -> str:
    """Drain ``body`` completely and decode it as UTF-8.

    Accepts a botocore ``StreamingBody``, any file-like object with ``read``,
    raw ``bytes``/``str``, or an iterable of chunks. The stream is closed
    afterwards when it supports ``close``.
    """
    if isinstance(body, (bytes, bytearray, str)):
        return _to_bytes(body).decode("utf-8")

    try:
        if hasattr(body, "iter_chunks"):
            chunks = [_to_bytes(chunk) for chunk in body.iter_chunks()]
        elif hasattr(body, "read"):
            chunks = [_to_bytes(body.read())]
        else:
            chunks = [_to_bytes(chunk) for chunk in body]
    finally:
        close = getattr(body, "close", None)
        if callable(close):
            close()
    return b"".join(chunks).decode("utf-8")


def resolve_response(outcome: ObjectOutcome | None) -> Any:
    """Resolve a get outcome to its content.

    Returns None when there is no body or the body is empty, the decoded
    value when the body is JSON, and the raw text otherwise. Errors raised
    while draining the body propagate unchanged.
    """
    if outcome is None or outcome.body is None:
        return None

    text = read_body(outcome.body)
    if not text:
        return None
    try:
        return loads_strict(text)
    except ValueError:
        return text
