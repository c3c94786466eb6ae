from prometheus_client import Counter, Histogram

# Low-cardinality labels only: operation name and outcome, never bucket or key
OPERATIONS = Counter(
    "object_store_operations_total",
    "Total object store operations",
    ["operation", "outcome"],
)

LATENCY = Histogram(
    "object_store_operation_duration_seconds",
    "Object store operation latency in seconds",
    ["operation"],
)
