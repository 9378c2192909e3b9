"""Unit tests for settings, audit logging and metrics helpers."""

from __future__ import annotations

import logging

from connectplane.config import EngineConfig
from connectplane.configdef.metrics import CONFIG_VALIDATIONS_TOTAL, record_validation, timed_operation
from connectplane.metrics.prometheus import registry, render_latest
from connectplane.plugins.metrics import PLUGIN_RESOLUTIONS_TOTAL, record_resolution
from connectplane.plugins.security import audit_log, is_sensitive_key, sanitize_details


class TestEngineConfig:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        config = EngineConfig(_env_file=None)

        assert config.LOG_LEVEL == "INFO"
        assert config.PLUGIN_LISTING_EXCLUDES == []
        assert config.PLUGIN_MANIFEST_PATH is None
        assert config.METRICS_ENABLED is True

    def test_environment_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("LOG_LEVEL", "warning")
        monkeypatch.setenv("PLUGIN_LISTING_EXCLUDES", '["acme.MockSourceConnector"]')
        monkeypatch.setenv("PLUGIN_MANIFEST_PATH", str(tmp_path / "plugins.yaml"))
        monkeypatch.setenv("METRICS_ENABLED", "false")
        config = EngineConfig(_env_file=None)

        assert config.LOG_LEVEL == "WARNING"
        assert config.PLUGIN_LISTING_EXCLUDES == ["acme.MockSourceConnector"]
        assert config.PLUGIN_MANIFEST_PATH == tmp_path / "plugins.yaml"
        assert config.METRICS_ENABLED is False

    def test_unknown_variables_are_ignored(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "production")
        config = EngineConfig(_env_file=None)

        assert set(config.model_dump()) == {
            "LOG_LEVEL",
            "PLUGIN_LISTING_EXCLUDES",
            "PLUGIN_MANIFEST_PATH",
            "METRICS_ENABLED",
        }


class TestAuditLog:
    def test_sensitive_keys(self):
        assert is_sensitive_key("db.password")
        assert is_sensitive_key("api-key")
        assert not is_sensitive_key("tasks.max")

    def test_sanitize_nested(self):
        details = {"name": "x", "auth": {"token": "t", "user": "u"}, "secret.value": "s"}
        assert sanitize_details(details) == {"name": "x", "auth": {"user": "u"}}

    def test_audit_record(self, caplog):
        with caplog.at_level(logging.INFO, logger="connectplane.plugins.security"):
            audit_log("acme.FileSinkConnector", "plugin.registered", {"password": "p", "type": "sink"})

        record = caplog.records[-1]
        assert record.getMessage() == "PLUGIN_AUDIT: acme.FileSinkConnector - plugin.registered"
        assert record.audit_details == {"type": "sink"}
        assert record.plugin_id == "acme.FileSinkConnector"


class TestMetrics:
    def test_validation_counter(self):
        before = CONFIG_VALIDATIONS_TOTAL.labels(outcome="invalid")._value.get()
        record_validation(2, 0.001)
        assert CONFIG_VALIDATIONS_TOTAL.labels(outcome="invalid")._value.get() == before + 1

    def test_disabled_metrics_are_not_recorded(self, monkeypatch):
        from connectplane.config import settings

        monkeypatch.setattr(settings, "METRICS_ENABLED", False)
        before = PLUGIN_RESOLUTIONS_TOTAL.labels(result="not_found")._value.get()
        record_resolution("not_found")
        assert PLUGIN_RESOLUTIONS_TOTAL.labels(result="not_found")._value.get() == before

    def test_render_latest(self):
        record_resolution("resolved")
        assert b"connectplane_plugin_resolutions_total" in render_latest()
        assert registry.get_sample_value("connectplane_plugin_resolutions_total", {"result": "resolved"}) >= 1

    def test_timed_operation(self):
        with timed_operation() as timing:
            pass
        assert timing["duration"] >= 0
