"""Immutable catalog of loaded connector plugins."""

from __future__ import annotations

import inspect
import logging
from collections import Counter
from dataclasses import dataclass, field
from threading import Lock
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from .base import Connector, ConnectorType
from .exceptions import PluginDuplicateError, PluginRegistrationError
from .metrics import update_catalog_gauges
from .security import audit_log

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping

    from connectplane.configdef.engine import SemanticValidator
    from connectplane.configdef.schema import ConfigSchema

logger = logging.getLogger(__name__)

CONNECTOR_SUFFIX = "Connector"


def canonical_name_of(plugin_class: type) -> str:
    """Return the fully-qualified name used as a plugin's canonical identity."""
    return f"{plugin_class.__module__}.{plugin_class.__qualname__}"


def pruned_name(simple_name: str) -> str | None:
    """Return the simple name without a trailing ``Connector``, if it has one."""
    if simple_name.endswith(CONNECTOR_SUFFIX) and len(simple_name) > len(CONNECTOR_SUFFIX):
        return simple_name[: -len(CONNECTOR_SUFFIX)]
    return None


@dataclass(frozen=True)
class PluginIdentity:
    """Names under which a loaded plugin can be selected.

    The canonical name is unique within a catalog. The simple name and
    aliases are conveniences for operators and may collide across plugins.
    """

    canonical_name: str
    simple_name: str
    aliases: frozenset[str] = field(default_factory=frozenset)

    def short_names(self) -> frozenset[str]:
        """Simple name and aliases together."""
        return self.aliases | {self.simple_name}


@dataclass(frozen=True)
class PluginRecord:
    """A loaded plugin as seen by the resolution and validation engine.

    Accessors are plain callables so catalogs can be built from plugin
    classes (see ``record_from_class``) or assembled directly in tests.
    """

    identity: PluginIdentity
    connector_type: ConnectorType
    version: Callable[[], str] = field(compare=False)
    config_schema: Callable[[], ConfigSchema] = field(compare=False)
    semantic_validator: SemanticValidator | None = field(default=None, compare=False)
    plugin_class: type | None = None
    concrete: bool = True

    @property
    def canonical_name(self) -> str:
        return self.identity.canonical_name


def _instance_method(plugin_class: type[Connector], method: str) -> Callable[..., Any]:
    def call(*args: Any) -> Any:
        return getattr(plugin_class(), method)(*args)

    call.__qualname__ = f"{plugin_class.__qualname__}.{method}"
    return call


def record_from_class(plugin_class: type[Connector], aliases: Iterable[str] = ()) -> PluginRecord:
    """Build a record for a ``Connector`` subclass.

    Aliases are the class' ``ALIASES``, the pruned simple name (``FileSink``
    for ``FileSinkConnector``) and any ``aliases`` passed in.

    Raises:
        PluginRegistrationError: If ``plugin_class`` is not a Connector subclass.
    """
    if not (inspect.isclass(plugin_class) and issubclass(plugin_class, Connector)):
        raise PluginRegistrationError(
            f"{plugin_class!r} is not a subclass of Connector",
            plugin_id=getattr(plugin_class, "__qualname__", repr(plugin_class)),
            error_code="PLUGIN_NOT_A_CONNECTOR",
        )

    simple_name = plugin_class.__name__
    all_aliases = set(plugin_class.ALIASES) | set(aliases)
    pruned = pruned_name(simple_name)
    if pruned:
        all_aliases.add(pruned)
    all_aliases.discard(simple_name)

    overrides_validate = plugin_class.validate is not Connector.validate
    return PluginRecord(
        identity=PluginIdentity(
            canonical_name=canonical_name_of(plugin_class),
            simple_name=simple_name,
            aliases=frozenset(all_aliases),
        ),
        connector_type=plugin_class.connector_type(),
        version=_instance_method(plugin_class, "version"),
        config_schema=_instance_method(plugin_class, "config"),
        semantic_validator=_instance_method(plugin_class, "validate") if overrides_validate else None,
        plugin_class=plugin_class,
        concrete=not inspect.isabstract(plugin_class),
    )


class PluginCatalog:
    """Read-only snapshot of loaded plugins.

    A catalog never changes after construction. Reloading means building a new
    catalog and swapping it into a ``CatalogHolder``, so readers holding the
    previous snapshot keep a consistent view.
    """

    def __init__(self, records: Iterable[PluginRecord] = (), unlisted: Iterable[str] = ()) -> None:
        by_canonical: dict[str, PluginRecord] = {}
        by_short_name: dict[str, list[PluginRecord]] = {}

        for record in records:
            name = record.canonical_name
            existing = by_canonical.get(name)
            if existing is not None:
                if existing.plugin_class is not None and existing.plugin_class is record.plugin_class:
                    logger.debug("Plugin '%s' listed twice, skipping duplicate", name)
                    continue
                raise PluginDuplicateError(
                    f"Plugin conflict: '{name}' is already registered",
                    plugin_id=name,
                    details={"existing_aliases": sorted(existing.identity.aliases)},
                )
            by_canonical[name] = record
            for short_name in sorted(record.identity.short_names()):
                by_short_name.setdefault(short_name, []).append(record)

        self._by_canonical = MappingProxyType(by_canonical)
        self._by_short_name = MappingProxyType({key: tuple(value) for key, value in by_short_name.items()})
        self.unlisted = frozenset(unlisted)

    def __len__(self) -> int:
        return len(self._by_canonical)

    def __contains__(self, canonical_name: object) -> bool:
        return canonical_name in self._by_canonical

    def __repr__(self) -> str:
        return f"PluginCatalog({len(self)} plugins)"

    def get(self, canonical_name: str) -> PluginRecord | None:
        """Get a plugin by canonical name."""
        return self._by_canonical.get(canonical_name)

    def by_short_name(self, name: str) -> tuple[PluginRecord, ...]:
        """All plugins whose simple name or an alias equals ``name``."""
        return self._by_short_name.get(name, ())

    def records(self) -> tuple[PluginRecord, ...]:
        """All records in registration order."""
        return tuple(self._by_canonical.values())

    def is_listed(self, record: PluginRecord) -> bool:
        """Return True if the plugin should appear in listings."""
        return record.concrete and record.canonical_name not in self.unlisted

    def count_by_type(self) -> Mapping[str, int]:
        counts = Counter(record.connector_type.value for record in self._by_canonical.values())
        return {connector_type.value: counts.get(connector_type.value, 0) for connector_type in ConnectorType}


class CatalogHolder:
    """Holds the active catalog and swaps it atomically on reload."""

    def __init__(self, catalog: PluginCatalog | None = None) -> None:
        self._catalog = catalog if catalog is not None else PluginCatalog()
        self._generation = 0
        self._lock = Lock()

    @property
    def generation(self) -> int:
        """Number of swaps performed so far."""
        return self._generation

    def snapshot(self) -> PluginCatalog:
        """Return the active catalog. Callers keep it for the whole request."""
        return self._catalog

    def swap(self, catalog: PluginCatalog) -> PluginCatalog:
        """Install ``catalog`` as the active snapshot and return the previous one."""
        with self._lock:
            previous = self._catalog
            self._catalog = catalog
            self._generation += 1
            generation = self._generation

        update_catalog_gauges(catalog.count_by_type())
        audit_log(
            "catalog",
            "plugin.catalog.swapped",
            {"generation": generation, "plugins": len(catalog), "previous_plugins": len(previous)},
        )
        logger.info("Activated plugin catalog generation %d with %d plugins", generation, len(catalog))
        return previous


catalog_holder = CatalogHolder()
