"""Audit logging for plugin catalog operations.

Audit entries are regular log records under the ``PLUGIN_AUDIT`` prefix with
structured ``extra`` fields so log pipelines can filter them. Detail values
whose key looks like a credential are dropped before logging, since
configuration maps routinely carry passwords and tokens.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

logger = logging.getLogger(__name__)

# Patterns that indicate sensitive configuration keys
SENSITIVE_KEY_PATTERNS = frozenset(
    {
        "PASSWORD",
        "SECRET",
        "TOKEN",
        "CREDENTIAL",
        "API_KEY",
        "APIKEY",
        "PRIVATE",
    }
)


def is_sensitive_key(key: str) -> bool:
    """Return True if ``key`` looks like it names a secret."""
    normalized = key.upper().replace(".", "_").replace("-", "_")
    return any(pattern in normalized for pattern in SENSITIVE_KEY_PATTERNS)


def sanitize_details(details: dict[str, Any] | None) -> dict[str, Any] | None:
    """Drop sensitive keys from ``details``, recursing into nested dicts."""
    if not details:
        return details

    sanitized: dict[str, Any] = {}
    for key, value in details.items():
        if is_sensitive_key(key):
            continue
        if isinstance(value, dict):
            sanitized[key] = sanitize_details(value)
        else:
            sanitized[key] = value
    return sanitized


def audit_log(
    plugin_id: str,
    action: str,
    details: dict[str, Any] | None = None,
    *,
    level: int = logging.INFO,
) -> None:
    """Log a plugin action for auditing.

    Args:
        plugin_id: Canonical plugin name, or "catalog" for catalog-wide events
        action: Action being audited (e.g., "plugin.registered")
        details: Optional dictionary of additional context
        level: Logging level (default: INFO)

    Example:
        >>> audit_log("acme.FileSinkConnector", "plugin.registered", {"aliases": ["FileSink"]})
        # Logs: PLUGIN_AUDIT: acme.FileSinkConnector - plugin.registered
    """
    extra = {
        "plugin_id": plugin_id,
        "audit_action": action,
        "audit_timestamp": datetime.now(UTC).isoformat(),
        "audit_details": sanitize_details(details),
    }
    logger.log(level, "PLUGIN_AUDIT: %s - %s", plugin_id, action, extra=extra)
