"""Unit tests for ConfigSchema and schema merging."""

from __future__ import annotations

import pytest

from connectplane.configdef.exceptions import ConfigError
from connectplane.configdef.merge import MergedSchema, merge
from connectplane.configdef.schema import EMPTY_SCHEMA, ConfigSchema
from connectplane.configdef.types import NO_DEFAULT, ConfigKeyDefinition, ConfigType, Importance
from connectplane.configdef.validators import Range


def _keys(schema) -> list[str]:
    return list(schema)


class TestConfigSchema:
    """Tests for schema declaration."""

    def test_define_returns_new_schema(self):
        """Test define leaves the schema it is called on untouched."""
        base = ConfigSchema().define("a", ConfigType.STRING)
        extended = base.define("b", ConfigType.INT, default=1)

        assert _keys(base) == ["a"]
        assert _keys(extended) == ["a", "b"]

    def test_declaration_order_is_preserved(self):
        schema = (
            ConfigSchema()
            .define("zeta", ConfigType.STRING)
            .define("alpha", ConfigType.STRING)
            .define("mid", ConfigType.STRING)
        )
        assert _keys(schema) == ["zeta", "alpha", "mid"]

    def test_duplicate_key_rejected(self):
        schema = ConfigSchema().define("a", ConfigType.STRING)
        with pytest.raises(ValueError, match="defined twice"):
            schema.define("a", ConfigType.INT)

    def test_required_without_default(self):
        definition = ConfigSchema().define("a", ConfigType.STRING)["a"]
        assert definition.required is True
        assert definition.default is NO_DEFAULT

    def test_null_default_is_optional(self):
        definition = ConfigSchema().define("a", ConfigType.CLASS, default=None)["a"]
        assert definition.required is False
        assert definition.default is None

    def test_default_is_coerced(self):
        schema = (
            ConfigSchema()
            .define("count", ConfigType.INT, default="5")
            .define("topics", ConfigType.LIST, default="x,y")
        )
        assert schema["count"].default == 5
        assert schema["topics"].default == ["x", "y"]

    def test_invalid_default_rejected(self):
        with pytest.raises(ValueError, match="Invalid default for configuration count"):
            ConfigSchema().define("count", ConfigType.INT, default="many")

    def test_default_checked_by_validator(self):
        with pytest.raises(ConfigError, match="Value must be at least 1"):
            ConfigSchema().define("count", ConfigType.INT, default=0, validator=Range.at_least(1))

    def test_order_ignored_without_group(self):
        definition = ConfigSchema().define("a", ConfigType.STRING, order_in_group=4)["a"]
        assert definition.order_in_group == -1

    def test_display_name_defaults_to_name(self):
        definition = ConfigSchema().define("a.b", ConfigType.STRING)["a.b"]
        assert definition.display_name == "a.b"

    def test_groups_in_declaration_order(self):
        schema = (
            ConfigSchema()
            .define("a", ConfigType.STRING, group="Second")
            .define("b", ConfigType.STRING)
            .define("c", ConfigType.STRING, group="First")
            .define("d", ConfigType.STRING, group="Second")
        )
        assert schema.groups() == ["Second", "First"]

    def test_schema_is_read_only(self):
        schema = ConfigSchema().define("a", ConfigType.STRING)
        with pytest.raises(TypeError):
            schema["b"] = schema["a"]  # type: ignore[index]

    def test_with_definition(self):
        definition = ConfigKeyDefinition(name="x", type=ConfigType.BOOLEAN, default=False)
        assert EMPTY_SCHEMA.with_definition(definition)["x"] is definition
        assert len(EMPTY_SCHEMA) == 0


class TestMerge:
    """Tests for merging base and plugin schemas."""

    @pytest.fixture
    def base(self):
        return (
            ConfigSchema()
            .define("name", ConfigType.STRING, importance=Importance.HIGH)
            .define("tasks.max", ConfigType.INT, default=1)
            .define("transforms", ConfigType.LIST, default="")
        )

    def test_union_of_disjoint_schemas(self, base):
        specific = ConfigSchema().define("file", ConfigType.STRING).define("topic", ConfigType.STRING)
        merged = merge(base, specific)

        assert isinstance(merged, MergedSchema)
        assert _keys(merged) == ["name", "tasks.max", "transforms", "file", "topic"]
        assert merged.overridden == frozenset()

    def test_plugin_definition_wins(self, base):
        specific = ConfigSchema().define("tasks.max", ConfigType.INT, default=4, documentation="Plugin limit.")
        merged = merge(base, specific)

        assert merged["tasks.max"].default == 4
        assert merged["tasks.max"].documentation == "Plugin limit."
        assert merged.overridden == frozenset({"tasks.max"})

    def test_overridden_key_keeps_base_position(self, base):
        specific = ConfigSchema().define("extra", ConfigType.STRING).define("name", ConfigType.STRING)
        merged = merge(base, specific)

        assert _keys(merged) == ["name", "tasks.max", "transforms", "extra"]
        assert len(merged) == len(set(merged))

    def test_merge_with_empty_plugin_schema(self, base):
        merged = merge(base, EMPTY_SCHEMA)
        assert _keys(merged) == _keys(base)

    def test_merge_does_not_modify_inputs(self, base):
        specific = ConfigSchema().define("name", ConfigType.STRING, default="x")
        merge(base, specific)

        assert base["name"].required is True
        assert _keys(specific) == ["name"]
