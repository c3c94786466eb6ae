from unittest.mock import patch

import pytest
from prometheus_client import REGISTRY

from s3actions.infra.storage.errors import DeleteFailed


def _count(operation: str, outcome: str) -> float:
    value = REGISTRY.get_sample_value(
        "object_store_operations_total",
        {"operation": operation, "outcome": outcome},
    )
    return value or 0.0


def _latency_count(operation: str) -> float:
    value = REGISTRY.get_sample_value(
        "object_store_operation_duration_seconds_count",
        {"operation": operation},
    )
    return value or 0.0


def test_successful_operations_are_counted(memory_store):
    puts = _count("put", "success")
    gets = _count("get", "success")
    lists = _count("list", "success")
    put_latency = _latency_count("put")

    memory_store.put_text("bucket", "k", "v")
    memory_store.get_text("bucket", "k")
    memory_store.list_objects("bucket")

    assert _count("put", "success") == puts + 1
    assert _count("get", "success") == gets + 1
    assert _count("list", "success") == lists + 1
    assert _latency_count("put") == put_latency + 1


def test_failed_operations_are_counted(memory_s3, memory_store):
    failures = _count("delete", "failure")
    memory_s3.delete_object = lambda **_: {"ResponseMetadata": {"HTTPStatusCode": 500}}

    with pytest.raises(DeleteFailed):
        memory_store.delete("bucket", "k")

    assert _count("delete", "failure") == failures + 1


def test_verify_reads_are_counted_as_gets(memory_s3, memory_store):
    memory_s3.read_lag = 1
    failures = _count("get", "failure")
    successes = _count("get", "success")

    memory_store.put_text("bucket", "k", "v", verify=True)

    assert _count("get", "failure") == failures + 1
    assert _count("get", "success") == successes + 1


def test_put_latency_excludes_verify_reads(memory_store):
    put_latency = _latency_count("put")
    seen: list[float] = []
    verify = memory_store._verify_visible

    def record_then_verify(bucket, key):
        seen.append(_latency_count("put"))
        return verify(bucket, key)

    with patch.object(memory_store, "_verify_visible", side_effect=record_then_verify):
        memory_store.put_text("bucket", "k", "v", verify=True)

    # the put was already observed when verification started
    assert seen == [put_latency + 1]
    assert _latency_count("put") == put_latency + 1
