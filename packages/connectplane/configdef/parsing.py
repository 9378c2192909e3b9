"""Type coercion and canonical string rendering for configuration values.

Raw values arrive as strings from callers, while defaults and recommender
output are usually already typed. ``parse_value`` accepts both and returns the
typed value; ``render_value`` turns a typed value back into the canonical
string form used in validation reports.
"""

from __future__ import annotations

import math
import re
from typing import Any

from pydantic import SecretStr

from .exceptions import ConfigError
from .types import ConfigType

INT_MIN = -(2**31)
INT_MAX = 2**31 - 1
LONG_MIN = -(2**63)
LONG_MAX = 2**63 - 1

HIDDEN_VALUE = "[hidden]"

_CLASS_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(?:\.[A-Za-z_][A-Za-z0-9_]*)*$")
_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_DOUBLE_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

_INTEGER_BOUNDS = {
    ConfigType.INT: (INT_MIN, INT_MAX),
    ConfigType.LONG: (LONG_MIN, LONG_MAX),
}


def _type_label(value: Any) -> str:
    return type(value).__name__


def _parse_integer(name: str, value: Any, config_type: ConfigType) -> int:
    low, high = _INTEGER_BOUNDS[config_type]
    reason = f"Not a number of type {config_type.value}"
    if isinstance(value, bool):
        raise ConfigError.invalid_value(name, value, reason)
    if isinstance(value, int):
        parsed = value
    elif isinstance(value, str):
        trimmed = value.strip()
        if not _INTEGER_RE.fullmatch(trimmed):
            raise ConfigError.invalid_value(name, value, reason)
        parsed = int(trimmed)
    else:
        raise ConfigError.invalid_value(
            name, value, f"Expected value to be a {config_type.value.lower()}, but it was a {_type_label(value)}"
        )
    if not low <= parsed <= high:
        raise ConfigError.invalid_value(name, value, reason)
    return parsed


def _parse_double(name: str, value: Any) -> float:
    if isinstance(value, bool):
        raise ConfigError.invalid_value(name, value, "Not a number of type DOUBLE")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        trimmed = value.strip()
        if not _DOUBLE_RE.fullmatch(trimmed):
            raise ConfigError.invalid_value(name, value, "Not a number of type DOUBLE")
        parsed = float(trimmed)
        # overflowing exponents such as 1e999
        if math.isinf(parsed):
            raise ConfigError.invalid_value(name, value, "Not a number of type DOUBLE")
        return parsed
    raise ConfigError.invalid_value(
        name, value, f"Expected value to be a double, but it was a {_type_label(value)}"
    )


def _parse_boolean(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
    raise ConfigError.invalid_value(name, value, "Expected value to be either true or false")


def _parse_list(name: str, value: Any) -> list[Any]:
    if isinstance(value, (list, tuple)):
        return list(value)
    if isinstance(value, str):
        trimmed = value.strip()
        if not trimmed:
            return []
        return [item.strip() for item in trimmed.split(",")]
    raise ConfigError.invalid_value(
        name, value, f"Expected a comma separated list, but it was a {_type_label(value)}"
    )


def _parse_class(name: str, value: Any) -> type | str:
    if isinstance(value, type):
        return value
    if isinstance(value, str):
        trimmed = value.strip()
        if _CLASS_NAME_RE.fullmatch(trimmed):
            return trimmed
        raise ConfigError.invalid_value(name, value, "Expected a fully-qualified class name")
    raise ConfigError.invalid_value(
        name, value, f"Expected a class, but it was a {_type_label(value)}"
    )


def parse_value(name: str, value: Any, config_type: ConfigType) -> Any:
    """Coerce ``value`` to ``config_type``.

    ``None`` passes through unchanged (an explicit null default).

    Raises:
        ConfigError: If the value cannot be represented as ``config_type``.
    """
    if value is None:
        return None

    if config_type is ConfigType.BOOLEAN:
        return _parse_boolean(name, value)
    if config_type is ConfigType.PASSWORD:
        if isinstance(value, SecretStr):
            return value
        if isinstance(value, str):
            return SecretStr(value)
        raise ConfigError.invalid_value(
            name, HIDDEN_VALUE, f"Expected value to be a string, but it was a {_type_label(value)}"
        )
    if config_type is ConfigType.STRING:
        if isinstance(value, str):
            return value.strip()
        raise ConfigError.invalid_value(
            name, value, f"Expected value to be a string, but it was a {_type_label(value)}"
        )
    if config_type in _INTEGER_BOUNDS:
        return _parse_integer(name, value, config_type)
    if config_type is ConfigType.DOUBLE:
        return _parse_double(name, value)
    if config_type is ConfigType.LIST:
        return _parse_list(name, value)
    if config_type is ConfigType.CLASS:
        return _parse_class(name, value)

    raise ConfigError(f"Unknown type {config_type} for configuration {name}", name=name, value=value)


def render_element(value: Any) -> str:
    """Render a single scalar the way reports show it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, type):
        return f"{value.__module__}.{value.__qualname__}"
    if isinstance(value, SecretStr):
        return HIDDEN_VALUE
    return str(value)


def render_value(value: Any, config_type: ConfigType) -> str | None:
    """Render a parsed value to its canonical string form, or None for null."""
    if value is None:
        return None
    if config_type is ConfigType.PASSWORD:
        return HIDDEN_VALUE
    if config_type is ConfigType.LIST:
        return ",".join(render_element(item) for item in value)
    return render_element(value)


def comparable(value: Any) -> str:
    """Return the string used to compare a value against recommended values."""
    if isinstance(value, SecretStr):
        return value.get_secret_value()
    return render_element(value)
