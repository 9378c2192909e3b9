"""Shared test configuration and fixtures."""

import os

# Set test environment BEFORE any connectplane imports
os.environ.setdefault("LOG_LEVEL", "DEBUG")
os.environ.pop("PLUGIN_LISTING_EXCLUDES", None)
os.environ.pop("PLUGIN_MANIFEST_PATH", None)

import pytest  # noqa: E402

from connectplane.config import settings  # noqa: E402
from connectplane.plugins.catalog import CatalogHolder  # noqa: E402
from connectplane.plugins.loader import build_catalog  # noqa: E402
from connectplane.services.connector_plugins_service import ConnectorPluginsService  # noqa: E402
from tests.fixtures.connectors import ALL_CONNECTORS, MockSourceConnector  # noqa: E402


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    """Keep per-test settings changes from leaking into other tests."""
    monkeypatch.setattr(settings, "PLUGIN_LISTING_EXCLUDES", [])
    monkeypatch.setattr(settings, "PLUGIN_MANIFEST_PATH", None)
    monkeypatch.setattr(settings, "METRICS_ENABLED", True)


@pytest.fixture
def catalog():
    """Catalog with every fixture connector; the mock connector is unlisted."""
    return build_catalog(ALL_CONNECTORS, unlisted=[MockSourceConnector])


@pytest.fixture
def holder(catalog):
    return CatalogHolder(catalog)


@pytest.fixture
def service(holder):
    """Service bound to the fixture catalog instead of the process-wide one."""
    return ConnectorPluginsService(holder)
