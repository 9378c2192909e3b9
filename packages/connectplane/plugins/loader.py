"""Catalog construction from explicit registrations.

Plugins are never discovered by scanning. A catalog is built either from a
static list of classes (``build_catalog``) or from a YAML registration
manifest (``load_manifest``):

    plugins:
      - class: acme.connectors.file.FileStreamSinkConnector
        aliases: [FileSink]
      - class: acme.connectors.testing.MockSourceConnector
        listed: false
    unlisted:
      - acme.connectors.testing.VerifiableSinkConnector

Registrations that fail (unimportable class, not a Connector, duplicate
canonical name) are logged and skipped; the rest of the catalog still loads.
"""

from __future__ import annotations

import importlib
import logging
from dataclasses import dataclass, field
from pathlib import Path
from threading import Lock
from typing import TYPE_CHECKING, Any

import yaml  # type: ignore[import-untyped]

from connectplane.config import settings

from .catalog import PluginCatalog, canonical_name_of, catalog_holder, record_from_class
from .exceptions import PluginError, PluginRegistrationError
from .metrics import record_registration
from .security import audit_log

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .base import Connector
    from .catalog import CatalogHolder, PluginRecord

logger = logging.getLogger(__name__)

_LOAD_LOCK = Lock()


@dataclass(frozen=True)
class Registration:
    """One entry of a registration manifest."""

    class_path: str
    aliases: tuple[str, ...] = ()
    listed: bool = True

    @classmethod
    def from_dict(cls, data: dict[str, Any] | str) -> Registration:
        """Create a registration from a manifest entry (dict or bare class path)."""
        if isinstance(data, str):
            return cls(class_path=data)
        return cls(
            class_path=data["class"],
            aliases=tuple(data.get("aliases") or ()),
            listed=bool(data.get("listed", True)),
        )


@dataclass(frozen=True)
class RegistrationManifest:
    registrations: tuple[Registration, ...] = ()
    unlisted: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RegistrationManifest:
        return cls(
            registrations=tuple(Registration.from_dict(entry) for entry in data.get("plugins") or ()),
            unlisted=frozenset(data.get("unlisted") or ()),
        )


def import_class(class_path: str) -> type:
    """Import ``package.module.ClassName`` (or ``package.module:ClassName``).

    Raises:
        PluginRegistrationError: If the module or attribute cannot be imported.
    """
    if ":" in class_path:
        module_name, _, attr_path = class_path.partition(":")
    else:
        module_name, _, attr_path = class_path.rpartition(".")
    if not module_name or not attr_path:
        raise PluginRegistrationError(
            f"Invalid plugin class path '{class_path}'",
            plugin_id=class_path,
            error_code="PLUGIN_CLASS_PATH_INVALID",
        )

    try:
        obj: Any = importlib.import_module(module_name)
        for part in attr_path.split("."):
            obj = getattr(obj, part)
    except (ImportError, AttributeError) as exc:
        raise PluginRegistrationError(
            f"Failed to import plugin class '{class_path}': {exc}",
            plugin_id=class_path,
            error_code="PLUGIN_IMPORT_FAILED",
        ) from exc

    if not isinstance(obj, type):
        raise PluginRegistrationError(
            f"'{class_path}' does not name a class",
            plugin_id=class_path,
            error_code="PLUGIN_NOT_A_CLASS",
        )
    return obj


def _register(
    records: dict[str, PluginRecord],
    plugin_class: type[Connector],
    aliases: Iterable[str],
) -> PluginRecord | None:
    try:
        record = record_from_class(plugin_class, aliases)
    except PluginRegistrationError as exc:
        logger.warning("Skipping plugin registration: %s", exc)
        record_registration("failed")
        return None

    existing = records.get(record.canonical_name)
    if existing is not None:
        if existing.plugin_class is plugin_class:
            record_registration("skipped")
            return existing
        logger.warning("Skipping plugin '%s': canonical name already registered", record.canonical_name)
        record_registration("failed")
        return None

    records[record.canonical_name] = record
    record_registration("registered")
    audit_log(
        record.canonical_name,
        "plugin.registered",
        {"aliases": sorted(record.identity.aliases), "type": record.connector_type.value},
        level=logging.DEBUG,
    )
    return record


def build_catalog(
    plugin_classes: Iterable[type[Connector]],
    *,
    unlisted: Iterable[str | type] = (),
    aliases: dict[str, Iterable[str]] | None = None,
) -> PluginCatalog:
    """Build a catalog from a static list of plugin classes.

    Args:
        plugin_classes: Connector subclasses, registered in order
        unlisted: Classes (or canonical names) loaded but hidden from listings
        aliases: Extra aliases keyed by canonical name

    Canonical names from ``PLUGIN_LISTING_EXCLUDES`` are always unlisted.
    """
    aliases = aliases or {}
    records: dict[str, PluginRecord] = {}
    for plugin_class in plugin_classes:
        name = canonical_name_of(plugin_class) if isinstance(plugin_class, type) else repr(plugin_class)
        _register(records, plugin_class, aliases.get(name, ()))

    hidden = {item if isinstance(item, str) else canonical_name_of(item) for item in unlisted}
    hidden.update(settings.PLUGIN_LISTING_EXCLUDES)
    return PluginCatalog(records.values(), unlisted=hidden)


def catalog_from_manifest(manifest: RegistrationManifest) -> PluginCatalog:
    """Import every registration of ``manifest`` and build a catalog."""
    records: dict[str, PluginRecord] = {}
    hidden = set(manifest.unlisted)
    hidden.update(settings.PLUGIN_LISTING_EXCLUDES)

    for registration in manifest.registrations:
        try:
            plugin_class = import_class(registration.class_path)
        except PluginRegistrationError as exc:
            logger.warning("Skipping plugin registration: %s", exc)
            record_registration("failed")
            continue
        record = _register(records, plugin_class, registration.aliases)
        if record is not None and not registration.listed:
            hidden.add(record.canonical_name)

    return PluginCatalog(records.values(), unlisted=hidden)


def read_manifest(path: Path | str) -> RegistrationManifest:
    """Read and parse a YAML registration manifest.

    Raises:
        PluginError: If the file cannot be read or is not a mapping.
    """
    manifest_path = Path(path)
    try:
        data = yaml.safe_load(manifest_path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise PluginError(
            f"Failed to read plugin manifest {manifest_path}: {exc}",
            error_code="PLUGIN_MANIFEST_UNREADABLE",
        ) from exc
    if not isinstance(data, dict):
        raise PluginError(
            f"Plugin manifest {manifest_path} must contain a mapping",
            error_code="PLUGIN_MANIFEST_INVALID",
        )
    return RegistrationManifest.from_dict(data)


def load_manifest(path: Path | str) -> PluginCatalog:
    """Build a catalog from the YAML manifest at ``path``."""
    manifest = read_manifest(path)
    catalog = catalog_from_manifest(manifest)
    logger.info("Loaded %d of %d registered plugins from %s", len(catalog), len(manifest.registrations), path)
    return catalog


def reload_catalog(
    path: Path | str | None = None,
    holder: CatalogHolder | None = None,
) -> PluginCatalog:
    """Load the manifest and atomically activate the resulting catalog.

    Falls back to ``PLUGIN_MANIFEST_PATH`` when ``path`` is omitted.

    Raises:
        PluginError: If no manifest path is configured or it cannot be read.
    """
    manifest_path = path if path is not None else settings.PLUGIN_MANIFEST_PATH
    if manifest_path is None:
        raise PluginError("No plugin manifest configured", error_code="PLUGIN_MANIFEST_MISSING")

    target = holder if holder is not None else catalog_holder
    with _LOAD_LOCK:
        catalog = load_manifest(manifest_path)
        target.swap(catalog)
    return catalog
