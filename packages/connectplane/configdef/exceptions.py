"""Configuration value errors."""

from __future__ import annotations

from typing import Any


class ConfigError(ValueError):
    """Raised when a single configuration value cannot be accepted.

    Parsers, validators and recommenders raise this for one key. The
    validation engine catches it and records the message on that key's
    report entry; it never escapes a validation pass.
    """

    def __init__(self, message: str, *, name: str | None = None, value: Any = None) -> None:
        super().__init__(message)
        self.name = name
        self.value = value

    @classmethod
    def invalid_value(cls, name: str, value: Any, reason: str | None = None) -> ConfigError:
        message = f"Invalid value {value} for configuration {name}"
        if reason:
            message = f"{message}: {reason}"
        return cls(message, name=name, value=value)


def missing_required_message(name: str) -> str:
    return f'Missing required configuration "{name}" which has no default value.'
