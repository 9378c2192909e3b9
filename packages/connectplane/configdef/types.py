"""Configuration key definition types."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Final, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping


class ConfigType(str, Enum):
    """Closed set of value types a configuration key can declare."""

    BOOLEAN = "BOOLEAN"
    STRING = "STRING"
    INT = "INT"
    LONG = "LONG"
    DOUBLE = "DOUBLE"
    LIST = "LIST"
    CLASS = "CLASS"
    PASSWORD = "PASSWORD"


class Importance(str, Enum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class Width(str, Enum):
    """Display width hint for UIs rendering the key."""

    NONE = "NONE"
    SHORT = "SHORT"
    MEDIUM = "MEDIUM"
    LONG = "LONG"


class _NoDefault:
    """Marker for keys that must be supplied by the caller."""

    def __repr__(self) -> str:
        return "NO_DEFAULT"


NO_DEFAULT: Final = _NoDefault()


@runtime_checkable
class Recommender(Protocol):
    """Computes dynamic valid values and visibility for a key.

    Both methods receive the key name and the values parsed so far during the
    current validation pass (typed values, not raw strings).
    """

    def valid_values(self, name: str, parsed: Mapping[str, Any]) -> list[Any]: ...

    def visible(self, name: str, parsed: Mapping[str, Any]) -> bool: ...


class Validator(Protocol):
    """Checks a parsed value, raising ConfigError when it is not acceptable."""

    def __call__(self, name: str, value: Any) -> None: ...


@dataclass(frozen=True)
class ConfigKeyDefinition:
    """Declaration of a single configuration key.

    ``default`` holds the already-coerced default value, or ``NO_DEFAULT``
    when the caller must provide one. ``order_in_group`` is -1 for keys that
    are not part of a group.
    """

    name: str
    type: ConfigType
    documentation: str = ""
    default: Any = NO_DEFAULT
    importance: Importance = Importance.MEDIUM
    group: str | None = None
    order_in_group: int = -1
    width: Width = Width.NONE
    display_name: str = ""
    dependents: tuple[str, ...] = field(default_factory=tuple)
    recommender: Recommender | None = field(default=None, compare=False)
    validator: Validator | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not self.display_name:
            object.__setattr__(self, "display_name", self.name)

    @property
    def required(self) -> bool:
        return self.default is NO_DEFAULT
