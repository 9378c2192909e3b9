"""Resolution of user-supplied connector identifiers.

An identifier may be a canonical (fully-qualified) class name, a simple class
name, or a registered alias. Matching is exact and case-sensitive.

Resolution returns a result value instead of raising, so callers decide how
to surface each outcome:

    result = resolve(catalog, "FileSink")
    if isinstance(result, Resolved):
        record = result.record
    elif isinstance(result, Ambiguous):
        ...
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .exceptions import PluginAmbiguousError, PluginNotFoundError
from .metrics import record_resolution

if TYPE_CHECKING:
    from .catalog import PluginCatalog, PluginIdentity, PluginRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resolved:
    record: PluginRecord

    @property
    def identity(self) -> PluginIdentity:
        return self.record.identity


@dataclass(frozen=True)
class NotFound:
    identifier: str


@dataclass(frozen=True)
class Ambiguous:
    identifier: str
    candidates: tuple[str, ...]


Resolution = Resolved | NotFound | Ambiguous


def resolve(catalog: PluginCatalog, identifier: str) -> Resolution:
    """Resolve ``identifier`` against ``catalog``.

    A canonical-name match always wins, even when other plugins use the same
    string as a simple name or alias. Otherwise the identifier must match the
    simple name or an alias of exactly one plugin.
    """
    record = catalog.get(identifier)
    if record is not None:
        logger.debug("Resolved '%s' by canonical name", identifier)
        record_resolution("resolved")
        return Resolved(record)

    matches = catalog.by_short_name(identifier)
    if not matches:
        logger.debug("No plugin matches '%s'", identifier)
        record_resolution("not_found")
        return NotFound(identifier)

    if len(matches) > 1:
        candidates = tuple(sorted(match.canonical_name for match in matches))
        logger.debug("Identifier '%s' is ambiguous: %s", identifier, ", ".join(candidates))
        record_resolution("ambiguous")
        return Ambiguous(identifier, candidates)

    logger.debug("Resolved '%s' to '%s' by short name", identifier, matches[0].canonical_name)
    record_resolution("resolved")
    return Resolved(matches[0])


def resolve_or_raise(catalog: PluginCatalog, identifier: str) -> PluginRecord:
    """Resolve ``identifier`` and return the record.

    Raises:
        PluginNotFoundError: If nothing matches.
        PluginAmbiguousError: If several plugins share the short name.
    """
    result = resolve(catalog, identifier)
    if isinstance(result, Resolved):
        return result.record
    if isinstance(result, Ambiguous):
        raise PluginAmbiguousError(result.identifier, list(result.candidates))
    raise PluginNotFoundError(result.identifier)
