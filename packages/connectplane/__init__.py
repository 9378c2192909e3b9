"""Connector plugin resolution and configuration validation engine.

Subpackages:

- configdef: configuration key definitions, parsing, schema merge and the
  validation engine that produces per-key reports
- plugins: the plugin catalog, identifier resolution, listing metadata and
  registration loading
- services: the facade consumed by transport layers (REST, CLI)
"""
