"""Connector plugins used across the unit tests."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from connectplane.configdef import ConfigSchema, ConfigType, EMPTY_SCHEMA, Importance, Width
from connectplane.plugins import Connector, SinkConnector, SourceConnector

TEST_STRING_CONFIG = "test.string.config"
TEST_INT_CONFIG = "test.int.config"
TEST_STRING_CONFIG_DEFAULT = "test.string.config.default"
TEST_LIST_CONFIG = "test.list.config"
GROUP = "Test"


class IntegerRecommender:
    def valid_values(self, name: str, parsed: Mapping[str, Any]) -> list[Any]:
        return [1, 2, 3]

    def visible(self, name: str, parsed: Mapping[str, Any]) -> bool:
        return True


class ListRecommender:
    def valid_values(self, name: str, parsed: Mapping[str, Any]) -> list[Any]:
        return ["a", "b", "c"]

    def visible(self, name: str, parsed: Mapping[str, Any]) -> bool:
        return True


class DependentRecommender:
    """Offers values for a key based on an earlier key, hidden until it is set."""

    def __init__(self, depends_on: str) -> None:
        self.depends_on = depends_on
        self.seen: list[dict[str, Any]] = []

    def valid_values(self, name: str, parsed: Mapping[str, Any]) -> list[Any]:
        self.seen.append(dict(parsed))
        mode = parsed.get(self.depends_on)
        if mode == "fast":
            return ["lz4", "snappy"]
        if mode == "small":
            return ["gzip", "zstd"]
        return []

    def visible(self, name: str, parsed: Mapping[str, Any]) -> bool:
        return parsed.get(self.depends_on) is not None


class ExplodingRecommender:
    def valid_values(self, name: str, parsed: Mapping[str, Any]) -> list[Any]:
        raise RuntimeError("recommender backend unavailable")

    def visible(self, name: str, parsed: Mapping[str, Any]) -> bool:
        return True


WIDGET_CONFIG_DEF = (
    ConfigSchema()
    .define(
        TEST_STRING_CONFIG,
        ConfigType.STRING,
        importance=Importance.HIGH,
        documentation="Test configuration for string type.",
    )
    .define(
        TEST_INT_CONFIG,
        ConfigType.INT,
        importance=Importance.MEDIUM,
        documentation="Test configuration for integer type.",
        group=GROUP,
        order_in_group=1,
        width=Width.MEDIUM,
        display_name=TEST_INT_CONFIG,
        recommender=IntegerRecommender(),
    )
    .define(
        TEST_STRING_CONFIG_DEFAULT,
        ConfigType.STRING,
        default="",
        importance=Importance.LOW,
        documentation="Test configuration with default value.",
    )
    .define(
        TEST_LIST_CONFIG,
        ConfigType.LIST,
        importance=Importance.HIGH,
        documentation="Test configuration for list type.",
        group=GROUP,
        order_in_group=2,
        width=Width.LONG,
        display_name=TEST_LIST_CONFIG,
        recommender=ListRecommender(),
    )
)


class DemoWidgetConnector(Connector):
    """Implements neither role; selectable by its simple name or as ``DemoWidget``."""

    def version(self) -> str:
        return "1.0"

    def config(self) -> ConfigSchema:
        return WIDGET_CONFIG_DEF


class SampleSinkConnector(SinkConnector):
    VERSION = "some great version"

    def version(self) -> str:
        return self.VERSION

    def config(self) -> ConfigSchema:
        return EMPTY_SCHEMA


class SampleSourceConnector(SourceConnector):
    VERSION = "an entirely different version"

    def version(self) -> str:
        return self.VERSION

    def config(self) -> ConfigSchema:
        return EMPTY_SCHEMA


class MockSourceConnector(SourceConnector):
    """Bundled test implementation that must never show up in listings."""

    def version(self) -> str:
        return "0.0.1"

    def config(self) -> ConfigSchema:
        return EMPTY_SCHEMA


class BrokenVersionConnector(SinkConnector):
    def version(self) -> str:
        raise RuntimeError("version file missing")

    def config(self) -> ConfigSchema:
        return EMPTY_SCHEMA


class BrokenSchemaConnector(SinkConnector):
    def version(self) -> str:
        return "2.0.0"

    def config(self) -> ConfigSchema:
        raise RuntimeError("schema generation failed")


class ExclusiveKeysConnector(SourceConnector):
    """Declares two keys that must not be set together."""

    ALIASES = ("exclusive",)

    SCHEMA = (
        ConfigSchema()
        .define("file", ConfigType.STRING, default=None, documentation="Single input file.")
        .define("directory", ConfigType.STRING, default=None, documentation="Input directory.")
    )

    def version(self) -> str:
        return "3.1.0"

    def config(self) -> ConfigSchema:
        return self.SCHEMA

    def validate(self, raw: Mapping[str, str]) -> Mapping[str, list[str]]:
        errors: dict[str, list[str]] = {}
        if raw.get("file") and raw.get("directory"):
            errors["file"] = ["Only one of file or directory may be set"]
            errors["directory"] = ["Only one of file or directory may be set"]
        if "legacy.path" in raw:
            errors["legacy.path"] = ["legacy.path is no longer supported, use directory"]
        return errors


class RaisingValidateConnector(SinkConnector):
    def version(self) -> str:
        return "1.0.0"

    def config(self) -> ConfigSchema:
        return EMPTY_SCHEMA

    def validate(self, raw: Mapping[str, str]) -> Mapping[str, list[str]]:
        raise RuntimeError("validator crashed")


class AbstractBaseSink(SinkConnector):
    """Intermediate base class left abstract on purpose."""

    def version(self) -> str:
        return "1.0.0"


class alpha:  # noqa: N801
    class DuplicateConnector(SourceConnector):
        def version(self) -> str:
            return "1.0.0"

        def config(self) -> ConfigSchema:
            return EMPTY_SCHEMA


class beta:  # noqa: N801
    class DuplicateConnector(SinkConnector):
        def version(self) -> str:
            return "2.0.0"

        def config(self) -> ConfigSchema:
            return EMPTY_SCHEMA


ALL_CONNECTORS = [
    DemoWidgetConnector,
    SampleSinkConnector,
    SampleSourceConnector,
    MockSourceConnector,
    ExclusiveKeysConnector,
    RaisingValidateConnector,
    AbstractBaseSink,
    alpha.DuplicateConnector,
    beta.DuplicateConnector,
]


def canonical(plugin_class: type) -> str:
    return f"{plugin_class.__module__}.{plugin_class.__qualname__}"
