"""Service layer consumed by transport adapters."""

from .connector_plugins_service import ConnectorPluginsService

__all__ = ["ConnectorPluginsService"]
