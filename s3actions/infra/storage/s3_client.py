"""S3 object store implementation.

This module provides the single-object put/get/list/delete layer on top of
boto3. It checks status codes, wraps SDK exceptions into the storage error
taxonomy, and can confirm that a write is visible before returning.

Dependencies:
    - boto3
    - botocore
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from dataclasses import replace
from typing import Any, Iterator, Mapping

import boto3
from botocore.config import Config

from s3actions.common.config import Settings, get_settings
from s3actions.infra.observability.metrics import LATENCY, OPERATIONS
from s3actions.infra.storage.client import (
    SUCCESS_STATUS,
    ObjectOutcome,
    PutReceipt,
    is_success_range,
)
from s3actions.infra.storage.errors import (
    DeleteFailed,
    DeserializationFailed,
    GetFailed,
    ListFailed,
    PutFailed,
    SerializationFailed,
    StorageError,
)
from s3actions.infra.storage.resolver import read_body, resolve_response
from s3actions.infra.storage.serialization import deserialize, serialize

logger = logging.getLogger(__name__)

TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"
JSON_CONTENT_TYPE = "application/json"


def _status_code(response: Mapping[str, Any] | None) -> int | None:
    metadata = (response or {}).get("ResponseMetadata") or {}
    status = metadata.get("HTTPStatusCode")
    return int(status) if status is not None else None


def _context(event: str, bucket: str, key: str | None = None, **fields: Any) -> dict:
    payload: dict[str, Any] = {"event": event, "bucket": bucket}
    if key is not None:
        payload["key"] = key
    payload.update(fields)
    return {"extra": payload}


def _close_body(body: Any) -> None:
    close = getattr(body, "close", None)
    if callable(close):
        close()


@contextmanager
def _observe(operation: str) -> Iterator[None]:
    start = time.perf_counter()
    outcome = "failure"
    try:
        yield
        outcome = "success"
    finally:
        LATENCY.labels(operation=operation).observe(time.perf_counter() - start)
        OPERATIONS.labels(operation=operation, outcome=outcome).inc()


class S3ObjectStore:
    """Object store backed by AWS S3 or an S3-compatible service.

    Each instance owns one boto3 client, fixed to the region it was created
    with. Use a new instance to talk to a different region.
    """

    def __init__(
        self, *, settings: Settings | None = None, region: str | None = None
    ) -> None:
        """Initialize the store.

        Args:
            settings: Connection and verification settings. Defaults to the
                settings loaded from the environment.
            region: Overrides ``settings.S3_REGION`` when given.
        """
        settings = settings or get_settings()
        if region:
            settings = replace(settings, S3_REGION=region)
        self._settings = settings
        self._client = self._build_client(settings)

    @property
    def region(self) -> str:
        return self._settings.S3_REGION

    @property
    def settings(self) -> Settings:
        return self._settings

    @staticmethod
    def _build_client(settings: Settings) -> Any:
        """Create a boto3 S3 client from settings."""
        config = Config(s3={"addressing_style": settings.S3_ADDRESSING_STYLE})
        return boto3.client(
            "s3",
            endpoint_url=settings.S3_ENDPOINT_URL,
            region_name=settings.S3_REGION,
            aws_access_key_id=settings.S3_ACCESS_KEY_ID,
            aws_secret_access_key=settings.S3_SECRET_ACCESS_KEY,
            use_ssl=bool(settings.S3_USE_SSL),
            config=config,
        )

    def put_text(
        self,
        bucket: str,
        key: str,
        text: str,
        verify: bool = False,
        *,
        content_type: str = TEXT_CONTENT_TYPE,
    ) -> PutReceipt:
        """Store text at bucket/key.

        When ``verify`` is set, the object is read back until a read succeeds
        or the configured attempts run out. Running out is not an error; it is
        reported as ``verified=False`` on the receipt.

        Raises:
            PutFailed: If the SDK call raises or the status is not 200.
        """
        with _observe("put"):
            logger.info(
                "s3_put bucket=%s key=%s",
                bucket,
                key,
                extra=_context("s3_put", bucket, key),
            )
            try:
                response = self._client.put_object(
                    Bucket=bucket,
                    Key=key,
                    Body=text.encode("utf-8"),
                    ContentType=content_type,
                )
            except Exception as exc:
                logger.error(
                    "s3_put_failed bucket=%s key=%s error=%s",
                    bucket,
                    key,
                    exc,
                    exc_info=True,
                    extra=_context("s3_put_failed", bucket, key),
                )
                raise PutFailed(f"put_text failed on exception: {exc}") from exc

            status_code = _status_code(response)
            logger.info(
                "s3_put_status bucket=%s key=%s status=%s",
                bucket,
                key,
                status_code,
                extra=_context("s3_put_status", bucket, key, status=status_code),
            )
            if status_code != SUCCESS_STATUS:
                logger.error(
                    "s3_put_failed bucket=%s key=%s status=%s",
                    bucket,
                    key,
                    status_code,
                    extra=_context("s3_put_failed", bucket, key, status=status_code),
                )
                raise PutFailed(f"put_text failed with status_code={status_code}")

        verified: bool | None = None
        attempts = 0
        if verify:
            verified, attempts = self._verify_visible(bucket, key)

        return PutReceipt(
            bucket=bucket,
            key=key,
            status_code=status_code,
            etag=response.get("ETag"),
            verified=verified,
            attempts=attempts,
        )

    def put_object(
        self, bucket: str, key: str, value: Any, verify: bool = False
    ) -> PutReceipt:
        """Store ``value`` as JSON at bucket/key.

        Raises:
            PutFailed: If the value cannot be serialized or the write fails.
        """
        try:
            text = serialize(value)
        except SerializationFailed as exc:
            logger.error(
                "s3_put_object_failed bucket=%s key=%s error=%s",
                bucket,
                key,
                exc,
                extra=_context("s3_put_object_failed", bucket, key),
            )
            raise PutFailed(f"put_object failed on exception: {exc}") from exc
        return self.put_text(
            bucket, key, text, verify, content_type=JSON_CONTENT_TYPE
        )

    def _verify_visible(self, bucket: str, key: str) -> tuple[bool, int]:
        """Read bucket/key until a read returns 200 or attempts run out.

        Returns:
            Tuple of (confirmed, number of reads issued).
        """
        max_attempts = self._settings.S3_VERIFY_MAX_ATTEMPTS
        delay = self._settings.S3_VERIFY_DELAY_SECONDS
        attempts = 0
        while attempts < max_attempts:
            attempts += 1
            try:
                # misses are expected while the write propagates
                outcome = self._get_response(
                    bucket, key, failure_level=logging.DEBUG
                )
            except StorageError:
                confirmed = False
            else:
                _close_body(outcome.body)
                confirmed = outcome.status_code == SUCCESS_STATUS
            if confirmed:
                logger.info(
                    "s3_put_verified bucket=%s key=%s attempts=%s",
                    bucket,
                    key,
                    attempts,
                    extra=_context("s3_put_verified", bucket, key, attempts=attempts),
                )
                return True, attempts
            if delay and attempts < max_attempts:
                time.sleep(delay)

        logger.warning(
            "s3_put_unverified bucket=%s key=%s attempts=%s",
            bucket,
            key,
            attempts,
            extra=_context("s3_put_unverified", bucket, key, attempts=attempts),
        )
        return False, attempts

    def list_objects(self, bucket: str, prefix: str | None = None) -> list[str]:
        """Return every key in ``bucket``, following continuation tokens.

        Raises:
            ListFailed: If any page request raises or its status is not 200.
        """
        with _observe("list"):
            logger.info(
                "s3_list bucket=%s prefix=%s",
                bucket,
                prefix,
                extra=_context("s3_list", bucket, prefix=prefix),
            )
            params: dict[str, Any] = {"Bucket": bucket}
            if prefix:
                params["Prefix"] = prefix

            keys: list[str] = []
            while True:
                try:
                    response = self._client.list_objects_v2(**params)
                except Exception as exc:
                    logger.error(
                        "s3_list_failed bucket=%s error=%s",
                        bucket,
                        exc,
                        exc_info=True,
                        extra=_context("s3_list_failed", bucket),
                    )
                    raise ListFailed(
                        f"list_objects failed on exception: {exc}"
                    ) from exc

                status_code = _status_code(response)
                logger.info(
                    "s3_list_status bucket=%s status=%s",
                    bucket,
                    status_code,
                    extra=_context("s3_list_status", bucket, status=status_code),
                )
                if status_code != SUCCESS_STATUS:
                    raise ListFailed(
                        f"list_objects failed with status_code={status_code}"
                    )

                for item in response.get("Contents") or []:
                    keys.append(str(item.get("Key") or ""))

                token = response.get("NextContinuationToken")
                if not response.get("IsTruncated") or not token:
                    return keys
                params["ContinuationToken"] = token

    def get_response(self, bucket: str, key: str) -> ObjectOutcome:
        """Return the raw outcome of a get, with the body left unread.

        Raises:
            GetFailed: If the SDK call raises.
        """
        return self._get_response(bucket, key, failure_level=logging.ERROR)

    def _get_response(
        self, bucket: str, key: str, *, failure_level: int
    ) -> ObjectOutcome:
        with _observe("get"):
            logger.info(
                "s3_get bucket=%s key=%s",
                bucket,
                key,
                extra=_context("s3_get", bucket, key),
            )
            try:
                response = self._client.get_object(Bucket=bucket, Key=key)
            except Exception as exc:
                logger.log(
                    failure_level,
                    "s3_get_failed bucket=%s key=%s error=%s",
                    bucket,
                    key,
                    exc,
                    extra=_context("s3_get_failed", bucket, key),
                )
                raise GetFailed(f"get_response failed on exception: {exc}") from exc

            status_code = _status_code(response)
            logger.info(
                "s3_get_status bucket=%s key=%s status=%s",
                bucket,
                key,
                status_code,
                extra=_context("s3_get_status", bucket, key, status=status_code),
            )
            length = response.get("ContentLength")
            return ObjectOutcome(
                status_code=status_code,
                body=response.get("Body"),
                content_type=response.get("ContentType"),
                content_length=int(length) if length is not None else None,
                etag=response.get("ETag"),
                raw=response,
            )

    def get_text(self, bucket: str, key: str) -> Any:
        """Return the content at bucket/key.

        The result is the decoded value when the body holds JSON, the raw
        text otherwise, and None for an empty body.

        Raises:
            GetFailed: If the read fails or the body cannot be drained.
        """
        outcome = self.get_response(bucket, key)
        try:
            return resolve_response(outcome)
        except Exception as exc:
            raise GetFailed(f"get_text failed reading body: {exc}") from exc

    def get_object(self, bucket: str, key: str) -> Any:
        """Return the JSON content at bucket/key decoded into Python values.

        Raises:
            GetFailed: If the read fails or the body cannot be drained.
            DeserializationFailed: If the object is empty or not JSON.
        """
        outcome = self.get_response(bucket, key)
        if outcome.body is None:
            raise DeserializationFailed("get_object failed: object has no body")
        try:
            text = read_body(outcome.body)
        except Exception as exc:
            raise GetFailed(f"get_object failed reading body: {exc}") from exc
        if not text:
            raise DeserializationFailed("get_object failed: object is empty")
        return deserialize(text)

    def delete(self, bucket: str, key: str) -> None:
        """Delete bucket/key.

        Raises:
            DeleteFailed: If the SDK call raises or the status is not 2xx.
        """
        with _observe("delete"):
            logger.info(
                "s3_delete bucket=%s key=%s",
                bucket,
                key,
                extra=_context("s3_delete", bucket, key),
            )
            try:
                response = self._client.delete_object(Bucket=bucket, Key=key)
            except Exception as exc:
                logger.error(
                    "s3_delete_failed bucket=%s key=%s error=%s",
                    bucket,
                    key,
                    exc,
                    exc_info=True,
                    extra=_context("s3_delete_failed", bucket, key),
                )
                raise DeleteFailed(f"delete failed on exception: {exc}") from exc

            status_code = _status_code(response)
            logger.info(
                "s3_delete_status bucket=%s key=%s status=%s",
                bucket,
                key,
                status_code,
                extra=_context("s3_delete_status", bucket, key, status=status_code),
            )
            if not is_success_range(status_code):
                raise DeleteFailed(f"delete failed with status_code={status_code}")
