"""Lightweight listing metadata for loaded plugins."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from packaging.version import InvalidVersion, Version

from .base import ConnectorType
from .metrics import record_plugin_fault

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .catalog import PluginCatalog, PluginRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PluginListingEntry:
    """What a plugin listing shows for one plugin."""

    class_name: str
    type: ConnectorType
    version: str

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable representation."""
        return {"class": self.class_name, "type": self.type.value, "version": self.version}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PluginListingEntry:
        return cls(class_name=data["class"], type=ConnectorType(data["type"]), version=data["version"])


def _listing_entry(record: PluginRecord) -> PluginListingEntry | None:
    try:
        version = record.version()
    except Exception as exc:
        logger.warning("Omitting plugin '%s' from listing, version lookup failed: %s", record.canonical_name, exc)
        record_plugin_fault(record.canonical_name, "version")
        return None
    return PluginListingEntry(class_name=record.canonical_name, type=record.connector_type, version=str(version))


def list_plugins(catalog: PluginCatalog) -> frozenset[PluginListingEntry]:
    """Return one listing entry per listed plugin in ``catalog``.

    Abstract classes and plugins the catalog marks unlisted are skipped. A
    plugin whose version lookup raises is omitted without affecting the others.
    """
    entries = set()
    for record in catalog.records():
        if not catalog.is_listed(record):
            continue
        entry = _listing_entry(record)
        if entry is not None:
            entries.add(entry)
    return frozenset(entries)


def _version_sort_key(version: str) -> tuple[int, Any]:
    try:
        return (0, Version(version))
    except InvalidVersion:
        return (1, version)


def sorted_entries(entries: Iterable[PluginListingEntry]) -> list[PluginListingEntry]:
    """Order entries by class name, then version.

    PEP 440 versions compare numerically; other version strings sort after
    them, lexically.
    """
    return sorted(entries, key=lambda entry: (entry.class_name, _version_sort_key(entry.version)))
