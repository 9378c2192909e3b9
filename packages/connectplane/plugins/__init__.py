"""Connector plugin catalog exports."""

from .base import Connector, ConnectorType, SinkConnector, SourceConnector
from .catalog import (
    CatalogHolder,
    PluginCatalog,
    PluginIdentity,
    PluginRecord,
    catalog_holder,
    record_from_class,
)
from .exceptions import (
    PluginAmbiguousError,
    PluginDuplicateError,
    PluginError,
    PluginFaultError,
    PluginNotFoundError,
    PluginRegistrationError,
    PluginResolutionError,
)
from .listing import PluginListingEntry, list_plugins, sorted_entries
from .loader import build_catalog, load_manifest, reload_catalog
from .resolver import Ambiguous, NotFound, Resolution, Resolved, resolve, resolve_or_raise

__all__ = [
    "Connector",
    "ConnectorType",
    "SinkConnector",
    "SourceConnector",
    "CatalogHolder",
    "PluginCatalog",
    "PluginIdentity",
    "PluginRecord",
    "catalog_holder",
    "record_from_class",
    # Errors
    "PluginAmbiguousError",
    "PluginDuplicateError",
    "PluginError",
    "PluginFaultError",
    "PluginNotFoundError",
    "PluginRegistrationError",
    "PluginResolutionError",
    # Listing
    "PluginListingEntry",
    "list_plugins",
    "sorted_entries",
    # Loading
    "build_catalog",
    "load_manifest",
    "reload_catalog",
    # Resolution
    "Ambiguous",
    "NotFound",
    "Resolution",
    "Resolved",
    "resolve",
    "resolve_or_raise",
]
