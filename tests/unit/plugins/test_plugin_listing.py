"""Unit tests for plugin listing metadata."""

from __future__ import annotations

import logging

from connectplane.plugins.base import ConnectorType
from connectplane.plugins.listing import PluginListingEntry, list_plugins, sorted_entries
from connectplane.plugins.loader import build_catalog
from tests.fixtures.connectors import (
    AbstractBaseSink,
    BrokenVersionConnector,
    DemoWidgetConnector,
    MockSourceConnector,
    SampleSinkConnector,
    SampleSourceConnector,
    canonical,
)


def _entry(plugin_class: type, connector_type: ConnectorType, version: str) -> PluginListingEntry:
    return PluginListingEntry(class_name=canonical(plugin_class), type=connector_type, version=version)


class TestListPlugins:
    """Tests for list_plugins."""

    def test_types_and_versions(self):
        catalog = build_catalog([SampleSinkConnector, SampleSourceConnector, DemoWidgetConnector])

        assert list_plugins(catalog) == frozenset(
            {
                _entry(SampleSinkConnector, ConnectorType.SINK, "some great version"),
                _entry(SampleSourceConnector, ConnectorType.SOURCE, "an entirely different version"),
                _entry(DemoWidgetConnector, ConnectorType.UNKNOWN, "1.0"),
            }
        )

    def test_unlisted_and_abstract_excluded(self, catalog):
        names = {entry.class_name for entry in list_plugins(catalog)}

        assert canonical(MockSourceConnector) not in names
        assert canonical(AbstractBaseSink) not in names
        assert canonical(SampleSinkConnector) in names

    def test_version_fault_omits_only_that_plugin(self, caplog):
        catalog = build_catalog([BrokenVersionConnector, SampleSinkConnector])

        with caplog.at_level(logging.WARNING, logger="connectplane.plugins.listing"):
            entries = list_plugins(catalog)

        assert {entry.class_name for entry in entries} == {canonical(SampleSinkConnector)}
        assert "version lookup failed: version file missing" in caplog.text

    def test_settings_excludes(self, monkeypatch):
        from connectplane.config import settings

        monkeypatch.setattr(settings, "PLUGIN_LISTING_EXCLUDES", [canonical(SampleSinkConnector)])
        catalog = build_catalog([SampleSinkConnector, SampleSourceConnector])

        assert {entry.type for entry in list_plugins(catalog)} == {ConnectorType.SOURCE}

    def test_empty_catalog(self):
        assert list_plugins(build_catalog([])) == frozenset()


class TestListingEntry:
    def test_to_dict(self):
        entry = _entry(SampleSinkConnector, ConnectorType.SINK, "some great version")
        assert entry.to_dict() == {
            "class": canonical(SampleSinkConnector),
            "type": "sink",
            "version": "some great version",
        }

    def test_from_dict(self):
        entry = PluginListingEntry.from_dict({"class": "acme.X", "type": "source", "version": "1.0"})
        assert entry == PluginListingEntry("acme.X", ConnectorType.SOURCE, "1.0")


class TestSortedEntries:
    def test_orders_by_class_then_version(self):
        entries = [
            PluginListingEntry("b.Connector", ConnectorType.SINK, "1.0"),
            PluginListingEntry("a.Connector", ConnectorType.SOURCE, "10.0"),
            PluginListingEntry("a.Connector", ConnectorType.SOURCE, "9.1"),
        ]
        ordered = sorted_entries(entries)
        assert [(entry.class_name, entry.version) for entry in ordered] == [
            ("a.Connector", "9.1"),
            ("a.Connector", "10.0"),
            ("b.Connector", "1.0"),
        ]

    def test_non_pep440_versions_sort_last(self):
        entries = [
            PluginListingEntry("a.Connector", ConnectorType.SINK, "some great version"),
            PluginListingEntry("a.Connector", ConnectorType.SINK, "2.0"),
        ]
        assert [entry.version for entry in sorted_entries(entries)] == ["2.0", "some great version"]
