from __future__ import annotations

from contextlib import contextmanager

from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest

registry = CollectorRegistry(auto_describe=True)

PROVIDER_CALL_DURATION = Histogram(
    "storyboard_ai_provider_call_duration_seconds",
    "Latency for upstream generation calls per provider and operation.",
    ["provider", "operation"],
    registry=registry,
)

PROVIDER_CALLS_TOTAL = Counter(
    "storyboard_ai_provider_calls_total",
    "Total upstream generation calls partitioned by provider, operation and status.",
    ["provider", "operation", "status"],
    registry=registry,
)

JSON_EXTRACTION_FAILURES = Counter(
    "storyboard_ai_json_extraction_failures_total",
    "Number of times extracting JSON from model output failed, labeled by pipeline stage.",
    ["stage"],
    registry=registry,
)

RESULT_CONFIDENCE = Histogram(
    "storyboard_ai_result_confidence",
    "Confidence attached to generation results.",
    ["operation"],
    buckets=(0.5, 0.6, 0.7, 0.75, 0.8, 0.85, 0.9, 0.95, 0.98, 1.0),
    registry=registry,
)


@contextmanager
def track_provider_call(provider: str, operation: str):
    timer = PROVIDER_CALL_DURATION.labels(provider=provider, operation=operation).time()
    timer.__enter__()
    try:
        yield
        PROVIDER_CALLS_TOTAL.labels(provider=provider, operation=operation, status="success").inc()
    except Exception:
        PROVIDER_CALLS_TOTAL.labels(provider=provider, operation=operation, status="error").inc()
        raise
    finally:
        timer.__exit__(None, None, None)


def increment_json_extraction_failure(stage: str) -> None:
    JSON_EXTRACTION_FAILURES.labels(stage=stage).inc()


def observe_confidence(operation: str, confidence: float) -> None:
    RESULT_CONFIDENCE.labels(operation=operation).observe(confidence)


def get_metrics_payload() -> bytes:
    return generate_latest(registry)
