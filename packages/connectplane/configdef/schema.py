"""Declared configuration schemas."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from .exceptions import ConfigError
from .parsing import parse_value
from .types import NO_DEFAULT, ConfigKeyDefinition, ConfigType, Importance, Width

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .types import Recommender, Validator


class ConfigSchema(Mapping[str, ConfigKeyDefinition]):
    """Ordered, immutable mapping of key name to definition.

    Declaration order is preserved and is the order keys appear in validation
    reports. Schemas are built with ``define`` chains, each call returning a
    new schema, so a published schema can be shared freely between threads:

        SCHEMA = (
            ConfigSchema()
            .define("topic", ConfigType.STRING, importance=Importance.HIGH, documentation="Target topic.")
            .define("batch.size", ConfigType.INT, default=100, documentation="Records per batch.")
        )
    """

    __slots__ = ("_keys",)

    def __init__(self, definitions: Iterable[ConfigKeyDefinition] = ()) -> None:
        keys: dict[str, ConfigKeyDefinition] = {}
        for definition in definitions:
            if definition.name in keys:
                raise ValueError(f"Configuration {definition.name} is defined twice.")
            keys[definition.name] = definition
        self._keys = MappingProxyType(keys)

    def __getitem__(self, name: str) -> ConfigKeyDefinition:
        return self._keys[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    def __repr__(self) -> str:
        return f"ConfigSchema({list(self._keys)!r})"

    def define(
        self,
        name: str,
        config_type: ConfigType,
        *,
        default: Any = NO_DEFAULT,
        importance: Importance = Importance.MEDIUM,
        documentation: str = "",
        group: str | None = None,
        order_in_group: int = -1,
        width: Width = Width.NONE,
        display_name: str = "",
        dependents: Iterable[str] = (),
        recommender: Recommender | None = None,
        validator: Validator | None = None,
    ) -> ConfigSchema:
        """Return a new schema with ``name`` appended.

        The default is coerced to ``config_type`` up front so that an invalid
        default surfaces when the schema is declared, not during validation.

        Raises:
            ValueError: If the key already exists or the default is invalid.
        """
        if default is not NO_DEFAULT:
            try:
                default = parse_value(name, default, config_type)
            except ConfigError as exc:
                raise ValueError(f"Invalid default for configuration {name}: {exc}") from exc
            if validator is not None and default is not None:
                validator(name, default)

        definition = ConfigKeyDefinition(
            name=name,
            type=config_type,
            documentation=documentation,
            default=default,
            importance=importance,
            group=group,
            order_in_group=order_in_group if group else -1,
            width=width,
            display_name=display_name,
            dependents=tuple(dependents),
            recommender=recommender,
            validator=validator,
        )
        return ConfigSchema([*self._keys.values(), definition])

    def with_definition(self, definition: ConfigKeyDefinition) -> ConfigSchema:
        """Return a new schema with an already-built definition appended."""
        return ConfigSchema([*self._keys.values(), definition])

    def groups(self) -> list[str]:
        """Distinct non-empty group names in declaration order."""
        seen: dict[str, None] = {}
        for definition in self._keys.values():
            if definition.group:
                seen.setdefault(definition.group, None)
        return list(seen)


EMPTY_SCHEMA = ConfigSchema()
