"""
Prometheus metrics collection for influencer-insights

This module provides metrics instrumentation for monitoring
import throughput, batch outcomes and data quality.
"""
import os

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

# Global registry for metrics
REGISTRY = CollectorRegistry()


# =======================
# IMPORT METRICS
# =======================

# Rows by outcome
rows_processed_total = Counter(
    name="import_rows_processed_total",
    documentation="Total number of CSV rows handled by the import pipeline",
    labelnames=["status"],  # status: imported, skipped, error
    registry=REGISTRY,
)

# Flushes by outcome
batches_flushed_total = Counter(
    name="import_batches_flushed_total",
    documentation="Total number of batch flushes",
    labelnames=["status"],  # status: success, failure
    registry=REGISTRY,
)

batch_size_records = Histogram(
    name="import_batch_size_records",
    documentation="Number of records in each flushed batch",
    buckets=[1, 10, 50, 100, 250, 500, 1000, 5000],
    registry=REGISTRY,
)

flush_duration_seconds = Histogram(
    name="import_flush_duration_seconds",
    documentation="Time spent resolving duplicates and committing one batch",
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 5.0, 10.0],
    registry=REGISTRY,
)

import_duration_seconds = Histogram(
    name="import_duration_seconds",
    documentation="Wall time of a complete import run",
    buckets=[0.1, 0.5, 1.0, 5.0, 10.0, 30.0, 60.0, 300.0],
    registry=REGISTRY,
)

# =======================
# DATA QUALITY METRICS
# =======================

row_validation_failures_total = Counter(
    name="import_row_validation_failures_total",
    documentation="Total number of rows rejected by validation",
    labelnames=["rule_type", "field_name"],
    registry=REGISTRY,
)


# =======================
# HELPER FUNCTIONS
# =======================

def generate_metrics() -> bytes:
    """
    Generate Prometheus metrics in text format

    Returns:
        Metrics in Prometheus text format
    """
    return generate_latest(REGISTRY)


def get_content_type() -> str:
    return CONTENT_TYPE_LATEST


def start_metrics_server(port: int | None = None) -> None:
    """
    Start HTTP server for Prometheus metrics

    Args:
        port: Port to listen on (defaults to env var METRICS_PORT or 8000)
    """
    # Imported lazily so importing this module never binds a port
    from prometheus_client import start_http_server

    metrics_port = port or int(os.getenv("METRICS_PORT", "8000"))
    start_http_server(metrics_port, registry=REGISTRY)


def increment_counter(counter: Counter, value: float = 1.0, **labels) -> None:
    """
    Increment a counter metric

    Args:
        counter: Prometheus Counter metric
        value: Amount to increment (default: 1.0)
        **labels: Label values for the metric
    """
    if value <= 0:
        return
    if labels:
        counter.labels(**labels).inc(value)
    else:
        counter.inc(value)


def observe_histogram(histogram: Histogram, value: float, **labels) -> None:
    """
    Observe a value in a histogram metric

    Args:
        histogram: Prometheus Histogram metric
        value: Value to observe
        **labels: Label values for the metric
    """
    if labels:
        histogram.labels(**labels).observe(value)
    else:
        histogram.observe(value)


# =======================
# PIPELINE HELPERS
# =======================

def record_flush(record_count: int, imported: int, skipped: int, success: bool, duration_seconds: float) -> None:
    """
    Record the outcome of one batch flush.

    Args:
        record_count: Records in the batch
        imported: Records attempted as new inserts
        skipped: Records resolved as duplicates
        success: Whether the flush completed
        duration_seconds: Time taken by resolve + commit
    """
    increment_counter(batches_flushed_total, 1, status="success" if success else "failure")
    observe_histogram(batch_size_records, record_count)
    observe_histogram(flush_duration_seconds, duration_seconds)

    if success:
        increment_counter(rows_processed_total, imported, status="imported")
        increment_counter(rows_processed_total, skipped, status="skipped")
    else:
        increment_counter(rows_processed_total, record_count, status="error")


def record_validation_failure(rule_type: str, field_name: str) -> None:
    """
    Record a row rejected by validation.

    Args:
        rule_type: Type of validation rule that failed
        field_name: Name of field that failed validation
    """
    increment_counter(rows_processed_total, 1, status="error")
    increment_counter(row_validation_failures_total, 1, rule_type=rule_type, field_name=field_name)
