"""
Prometheus registry for connectplane metrics.
All engine metrics register here instead of the process-global default registry
so embedding applications decide whether and how to expose them.
"""

import logging

from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram, generate_latest

logger = logging.getLogger(__name__)

# Re-export prometheus_client types for convenience
__all__ = [
    "Counter",
    "Gauge",
    "Histogram",
    "registry",
    "render_latest",
]

registry = CollectorRegistry()


def render_latest() -> bytes:
    """Render all connectplane metrics in the Prometheus text exposition format."""
    return generate_latest(registry)
