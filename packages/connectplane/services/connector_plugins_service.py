"""Service layer for connector plugin validation and listing.

This is the boundary transport layers talk to. It takes one catalog snapshot
per call and never touches the network or disk.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from connectplane.configdef.base_schema import CONNECTOR_CLASS_CONFIG, connector_config_schema
from connectplane.configdef.engine import validate
from connectplane.configdef.merge import merge
from connectplane.configdef.schema import EMPTY_SCHEMA, ConfigSchema
from connectplane.plugins.catalog import catalog_holder
from connectplane.plugins.exceptions import PluginFaultError
from connectplane.plugins.listing import list_plugins, sorted_entries
from connectplane.plugins.metrics import record_plugin_fault
from connectplane.plugins.resolver import Resolved, resolve, resolve_or_raise

if TYPE_CHECKING:
    from collections.abc import Mapping

    from connectplane.configdef.report import ValidationReport
    from connectplane.plugins.catalog import CatalogHolder, PluginCatalog, PluginRecord
    from connectplane.plugins.listing import PluginListingEntry

logger = logging.getLogger(__name__)


class ConnectorPluginsService:
    """Resolve identifiers, validate connector configs and list plugins."""

    def __init__(self, holder: CatalogHolder | None = None, base_schema: ConfigSchema | None = None) -> None:
        self._holder = holder if holder is not None else catalog_holder
        self._base_schema = base_schema if base_schema is not None else connector_config_schema()

    def _plugin_schema(self, record: PluginRecord) -> ConfigSchema:
        try:
            schema = record.config_schema()
        except Exception as exc:
            record_plugin_fault(record.canonical_name, "config")
            raise PluginFaultError(
                f"Failed to obtain configuration schema of connector {record.canonical_name}: {exc}",
                plugin_id=record.canonical_name,
                operation="config",
            ) from exc
        if schema is None:
            return EMPTY_SCHEMA
        if not isinstance(schema, ConfigSchema):
            record_plugin_fault(record.canonical_name, "config")
            raise PluginFaultError(
                f"Connector {record.canonical_name} returned {type(schema).__name__} instead of a ConfigSchema",
                plugin_id=record.canonical_name,
                operation="config",
            )
        return schema

    def _connector_class_mismatch(
        self,
        catalog: PluginCatalog,
        record: PluginRecord,
        raw: Mapping[str, str],
    ) -> dict[str, list[str]]:
        included = raw.get(CONNECTOR_CLASS_CONFIG)
        if not included:
            return {}
        included_result = resolve(catalog, included.strip())
        if isinstance(included_result, Resolved) and included_result.record.canonical_name == record.canonical_name:
            return {}
        return {
            CONNECTOR_CLASS_CONFIG: [
                f"Included connector type {included} does not match request type {record.canonical_name}"
            ]
        }

    def validate_configs(self, identifier: str, raw: Mapping[str, str]) -> ValidationReport:
        """Validate ``raw`` for the plugin selected by ``identifier``.

        Raises:
            PluginNotFoundError: If the identifier matches no plugin.
            PluginAmbiguousError: If the identifier matches several plugins.
            PluginFaultError: If the plugin's schema cannot be obtained.
        """
        catalog = self._holder.snapshot()
        record = resolve_or_raise(catalog, identifier)
        merged = merge(self._base_schema, self._plugin_schema(record))

        report = validate(
            record.canonical_name,
            merged,
            raw,
            record.semantic_validator,
            extra_errors=self._connector_class_mismatch(catalog, record, raw),
        )
        logger.info(
            "Validated configuration for connector '%s' (requested as '%s'): %d keys with errors",
            record.canonical_name,
            identifier,
            report.error_count,
        )
        return report

    def list_connector_plugins(self) -> list[PluginListingEntry]:
        """List the plugins of the active catalog, ordered by class name and version."""
        entries = sorted_entries(list_plugins(self._holder.snapshot()))
        logger.debug("Listing %d connector plugins", len(entries))
        return entries
