"""Reusable per-key validators.

A validator is any callable ``(name, value) -> None`` that raises
``ConfigError`` for unacceptable values. Validators only see non-null parsed
values.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .exceptions import ConfigError


@dataclass(frozen=True)
class Range:
    """Numeric bounds check; either bound may be open."""

    min: float | None = None
    max: float | None = None

    @classmethod
    def at_least(cls, minimum: float) -> Range:
        return cls(min=minimum)

    @classmethod
    def between(cls, minimum: float, maximum: float) -> Range:
        return cls(min=minimum, max=maximum)

    def __call__(self, name: str, value: Any) -> None:
        if self.min is not None and value < self.min:
            raise ConfigError.invalid_value(name, value, f"Value must be at least {self.min}")
        if self.max is not None and value > self.max:
            raise ConfigError.invalid_value(name, value, f"Value must be no more than {self.max}")

    def __str__(self) -> str:
        if self.max is None:
            return f"[{self.min},...]"
        if self.min is None:
            return f"[...,{self.max}]"
        return f"[{self.min},...,{self.max}]"


@dataclass(frozen=True)
class ValidString:
    """Restricts a string key to a fixed set of values."""

    valid: tuple[str, ...]

    @classmethod
    def in_(cls, *values: str) -> ValidString:
        return cls(valid=tuple(values))

    def __call__(self, name: str, value: Any) -> None:
        if value not in self.valid:
            raise ConfigError.invalid_value(name, value, f"String must be one of: {', '.join(self.valid)}")

    def __str__(self) -> str:
        return f"[{', '.join(self.valid)}]"


class NonEmptyString:
    """Rejects empty strings and strings containing ISO control characters."""

    def __call__(self, name: str, value: Any) -> None:
        if value == "":
            raise ConfigError.invalid_value(name, value, "String must be non-empty")
        if any(ord(ch) < 0x20 or 0x7F <= ord(ch) <= 0x9F for ch in str(value)):
            raise ConfigError.invalid_value(name, value, "String must not contain control characters")

    def __str__(self) -> str:
        return "non-empty string without ISO control characters"
