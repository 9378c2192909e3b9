"""Prometheus metrics support."""

from .prometheus import registry

__all__ = ["registry"]
