"""Validation report structures.

Reports are plain frozen dataclasses with ``to_dict`` serializers producing the
documented wire shape:

    {"name": ..., "error_count": ..., "groups": [...],
     "configs": [{"definition": {...} | None, "value": {...}}, ...]}
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .parsing import render_value

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .types import ConfigKeyDefinition


def definition_to_dict(definition: ConfigKeyDefinition) -> dict[str, Any]:
    """Serialize a key definition for reports."""
    default_value = None if definition.required else render_value(definition.default, definition.type)
    return {
        "name": definition.name,
        "type": definition.type.value,
        "required": definition.required,
        "default_value": default_value,
        "importance": definition.importance.value,
        "documentation": definition.documentation,
        "group": definition.group,
        "order": definition.order_in_group,
        "width": definition.width.value,
        "display_name": definition.display_name,
        "dependents": list(definition.dependents),
    }


@dataclass(frozen=True)
class ConfigValueReport:
    """Outcome of validating one key."""

    name: str
    value: str | None = None
    recommended_values: tuple[str, ...] = ()
    errors: tuple[str, ...] = ()
    visible: bool = True

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def with_errors(self, messages: Iterable[str]) -> ConfigValueReport:
        return ConfigValueReport(
            name=self.name,
            value=self.value,
            recommended_values=self.recommended_values,
            errors=(*self.errors, *messages),
            visible=self.visible,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "value": self.value,
            "recommended_values": list(self.recommended_values),
            "errors": list(self.errors),
            "visible": self.visible,
        }


@dataclass(frozen=True)
class ConfigInfo:
    """A key definition paired with its validation outcome.

    ``definition`` is None for keys reported only by a plugin's own
    validation hook.
    """

    definition: ConfigKeyDefinition | None
    value: ConfigValueReport

    @property
    def name(self) -> str:
        return self.value.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "definition": definition_to_dict(self.definition) if self.definition is not None else None,
            "value": self.value.to_dict(),
        }


@dataclass(frozen=True)
class ValidationReport:
    """Full validation result for one connector configuration."""

    name: str
    error_count: int
    groups: tuple[str, ...] = ()
    configs: tuple[ConfigInfo, ...] = field(default_factory=tuple)

    @property
    def is_valid(self) -> bool:
        return self.error_count == 0

    def get(self, key: str) -> ConfigInfo | None:
        """Return the entry for ``key`` or None."""
        for info in self.configs:
            if info.name == key:
                return info
        return None

    def errors_by_key(self) -> dict[str, list[str]]:
        """Map of key to error messages for keys that have errors."""
        return {info.name: list(info.value.errors) for info in self.configs if info.value.errors}

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "error_count": self.error_count,
            "groups": list(self.groups),
            "configs": [info.to_dict() for info in self.configs],
        }


def build_report(name: str, configs: Iterable[ConfigInfo]) -> ValidationReport:
    """Assemble a report, deriving the error count and group list.

    The error count is the number of keys with at least one message; groups
    are the distinct non-empty group names in first-seen order over ``configs``.
    """
    ordered = tuple(configs)
    error_count = sum(1 for info in ordered if info.value.errors)
    groups: dict[str, None] = {}
    for info in ordered:
        if info.definition is not None and info.definition.group:
            groups.setdefault(info.definition.group, None)
    return ValidationReport(name=name, error_count=error_count, groups=tuple(groups), configs=ordered)
