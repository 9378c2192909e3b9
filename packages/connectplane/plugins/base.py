"""Base classes for connector plugins."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from collections.abc import Mapping

    from connectplane.configdef.schema import ConfigSchema


class ConnectorType(str, Enum):
    """Role a connector plays in a data pipeline."""

    SOURCE = "source"
    SINK = "sink"
    UNKNOWN = "unknown"


class Connector(ABC):
    """Universal base for all connector plugins.

    Subclasses declare their configuration schema via ``config()`` and may
    override ``validate()`` to add checks the schema cannot express, such as
    mutually exclusive keys. Plugins are instantiated without arguments to
    read their version and schema, so constructors must stay cheap.

    ``ALIASES`` lists extra operator-friendly identifiers under which the
    plugin can be selected.
    """

    ALIASES: ClassVar[tuple[str, ...]] = ()

    @abstractmethod
    def version(self) -> str:
        """Return the version of this connector implementation."""

    @abstractmethod
    def config(self) -> ConfigSchema:
        """Return the configuration schema declared by this connector."""

    def validate(self, raw: Mapping[str, str]) -> Mapping[str, list[str]]:  # noqa: ARG002
        """Return plugin-specific errors keyed by configuration name.

        The default implementation accepts every configuration. Keys that are
        not part of ``config()`` may be reported too.
        """
        return {}

    @classmethod
    def connector_type(cls) -> ConnectorType:
        """Return the role derived from the capability base class."""
        if issubclass(cls, SourceConnector):
            return ConnectorType.SOURCE
        if issubclass(cls, SinkConnector):
            return ConnectorType.SINK
        return ConnectorType.UNKNOWN


class SourceConnector(Connector, ABC):
    """Base class for connectors that import data into the platform."""


class SinkConnector(Connector, ABC):
    """Base class for connectors that export data out of the platform."""
