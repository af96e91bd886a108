"""
Prometheus metrics for the product cleaning pipeline

Counts what each cleaning pass did to a batch (defaults, imputations,
parse errors, validation violations) and how runs ended.
"""
import os
from typing import Optional

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)

# Private registry so importing the package never touches the global one
REGISTRY = CollectorRegistry()


# =======================
# PIPELINE METRICS
# =======================

records_cleaned_total = Counter(
    name="cleaning_records_total",
    documentation="Total number of records passed through the cleaning pipeline",
    registry=REGISTRY,
)

runs_total = Counter(
    name="cleaning_runs_total",
    documentation="Cleaning runs by outcome",
    labelnames=["status"],  # status: accepted, rejected, failed
    registry=REGISTRY,
)

run_duration_seconds = Histogram(
    name="cleaning_run_duration_seconds",
    documentation="Time spent cleaning and validating one batch",
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 5.0, 10.0, 30.0, 60.0],
    registry=REGISTRY,
)

batch_size = Histogram(
    name="cleaning_batch_size",
    documentation="Number of records per cleaning run",
    buckets=[1, 10, 100, 1000, 10000, 100000, 1000000],
    registry=REGISTRY,
)

# =======================
# DATA QUALITY METRICS
# =======================

defaults_applied_total = Counter(
    name="cleaning_defaults_applied_total",
    documentation="Field values resolved through a declared default rule",
    labelnames=["field_name"],
    registry=REGISTRY,
)

values_imputed_total = Counter(
    name="cleaning_values_imputed_total",
    documentation="Missing numeric values filled with the batch median",
    labelnames=["field_name"],
    registry=REGISTRY,
)

parse_errors_total = Counter(
    name="cleaning_parse_errors_total",
    documentation="Present values whose numeric magnitude could not be parsed",
    labelnames=["field_name"],
    registry=REGISTRY,
)

validation_violations_total = Counter(
    name="cleaning_validation_violations_total",
    documentation="Records violating an output check",
    labelnames=["check"],
    registry=REGISTRY,
)

batch_median = Gauge(
    name="cleaning_batch_median",
    documentation="Median used for imputation in the most recent run",
    labelnames=["field_name"],
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
    """Content type for the Prometheus text format"""
    return CONTENT_TYPE_LATEST


def start_metrics_server(port: Optional[int] = None) -> None:
    """
    Start HTTP server for Prometheus metrics

    Args:
        port: Port to listen on (defaults to env var METRICS_PORT or 8000)
    """
    # Imported here so that importing this module never binds a port
    from prometheus_client import start_http_server

    metrics_port = port or int(os.getenv("METRICS_PORT", "8000"))
    start_http_server(metrics_port, registry=REGISTRY)


def increment_counter(counter: Counter, value: float = 1.0, **labels) -> None:
    """
    Increment a counter metric, with labels when given

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


# =======================
# CLEANING-SPECIFIC HELPERS
# =======================

def record_cleaning_run(report, duration_seconds: float) -> None:
    """
    Record the metrics of one finished cleaning run.

    Args:
        report: ValidationReport produced by the run
        duration_seconds: Wall time of the run
    """
    increment_counter(records_cleaned_total, report.total_records)
    batch_size.observe(report.total_records)
    run_duration_seconds.observe(duration_seconds)

    for field_name, count in report.defaults_applied.items():
        increment_counter(defaults_applied_total, count, field_name=field_name)

    for field_name, count in report.values_imputed.items():
        increment_counter(values_imputed_total, count, field_name=field_name)

    for issue in report.issues:
        increment_counter(parse_errors_total, 1, field_name=issue.field_name)

    for check, count in report.checks.items():
        increment_counter(validation_violations_total, count, check=check)

    if report.statistics is not None:
        for field_name, median in report.statistics.medians.items():
            if median is not None:
                batch_median.labels(field_name=field_name).set(float(median))

    increment_counter(runs_total, 1, status="accepted" if report.passed else "rejected")


def record_failed_run(duration_seconds: float) -> None:
    """Record a run that terminated without producing a batch."""
    run_duration_seconds.observe(duration_seconds)
    increment_counter(runs_total, 1, status="failed")
