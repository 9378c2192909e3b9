"""Prometheus metrics for plugin operations.

This module provides observability into catalog loading, identifier
resolution and isolated plugin faults.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from prometheus_client import Counter, Gauge

from connectplane.config import settings
from connectplane.metrics.prometheus import registry

if TYPE_CHECKING:
    from collections.abc import Mapping

# Catalog Metrics
PLUGIN_REGISTRATIONS_TOTAL = Counter(
    "connectplane_plugin_registrations_total",
    "Total plugin registration attempts",
    ["status"],  # status: registered, skipped, failed
    registry=registry,
)

PLUGINS_LOADED_GAUGE = Gauge(
    "connectplane_plugins_loaded",
    "Number of plugins in the active catalog by connector type",
    ["connector_type"],
    registry=registry,
)

# Resolution Metrics
PLUGIN_RESOLUTIONS_TOTAL = Counter(
    "connectplane_plugin_resolutions_total",
    "Total identifier resolutions",
    ["result"],  # result: resolved, not_found, ambiguous
    registry=registry,
)

# Fault Metrics
PLUGIN_FAULTS_TOTAL = Counter(
    "connectplane_plugin_faults_total",
    "Plugin code that raised during an engine operation",
    ["plugin", "operation"],  # operation: version, config
    registry=registry,
)


def record_registration(status: str) -> None:
    """Record a registration attempt.

    Args:
        status: Outcome (registered, skipped, failed)
    """
    if not settings.METRICS_ENABLED:
        return
    PLUGIN_REGISTRATIONS_TOTAL.labels(status=status).inc()


def record_resolution(result: str) -> None:
    if not settings.METRICS_ENABLED:
        return
    PLUGIN_RESOLUTIONS_TOTAL.labels(result=result).inc()


def record_plugin_fault(plugin: str, operation: str) -> None:
    """Record a plugin fault that was isolated by the engine.

    Args:
        plugin: Canonical plugin name
        operation: Engine operation that called into the plugin
    """
    if not settings.METRICS_ENABLED:
        return
    PLUGIN_FAULTS_TOTAL.labels(plugin=plugin, operation=operation).inc()


def update_catalog_gauges(loaded_by_type: Mapping[str, int]) -> None:
    """Set the loaded-plugin gauges from a fresh catalog snapshot."""
    if not settings.METRICS_ENABLED:
        return
    for connector_type, count in loaded_by_type.items():
        PLUGINS_LOADED_GAUGE.labels(connector_type=connector_type).set(count)
