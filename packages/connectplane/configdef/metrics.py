"""Prometheus metrics for configuration validation."""

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import TYPE_CHECKING

from prometheus_client import Counter, Histogram

from connectplane.config import settings
from connectplane.metrics.prometheus import registry

if TYPE_CHECKING:
    from collections.abc import Generator

CONFIG_VALIDATIONS_TOTAL = Counter(
    "connectplane_config_validations_total",
    "Total configuration validation passes",
    ["outcome"],  # outcome: valid, invalid
    registry=registry,
)

CONFIG_VALIDATION_ERROR_KEYS = Histogram(
    "connectplane_config_validation_error_keys",
    "Number of keys with at least one error per validation pass",
    buckets=[0, 1, 2, 5, 10, 25, 50],
    registry=registry,
)

CONFIG_VALIDATION_DURATION = Histogram(
    "connectplane_config_validation_duration_seconds",
    "Validation pass duration in seconds",
    buckets=[0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5],
    registry=registry,
)

VALIDATION_HOOK_FAULTS_TOTAL = Counter(
    "connectplane_validation_hook_faults_total",
    "Plugin validation callbacks that raised or returned malformed errors",
    ["plugin"],
    registry=registry,
)


def record_validation(error_count: int, duration: float) -> None:
    """Record the outcome of one validation pass.

    Args:
        error_count: Number of keys with errors in the final report
        duration: Time taken for the pass in seconds
    """
    if not settings.METRICS_ENABLED:
        return
    CONFIG_VALIDATIONS_TOTAL.labels(outcome="invalid" if error_count else "valid").inc()
    CONFIG_VALIDATION_ERROR_KEYS.observe(error_count)
    CONFIG_VALIDATION_DURATION.observe(duration)


def record_hook_fault(plugin: str) -> None:
    if not settings.METRICS_ENABLED:
        return
    VALIDATION_HOOK_FAULTS_TOTAL.labels(plugin=plugin).inc()


@contextmanager
def timed_operation() -> Generator[dict[str, float], None, None]:
    """Context manager for timing operations.

    Yields a dict that will contain 'duration' after the context exits.
    """
    timing: dict[str, float] = {}
    start = time.perf_counter()
    try:
        yield timing
    finally:
        timing["duration"] = time.perf_counter() - start
