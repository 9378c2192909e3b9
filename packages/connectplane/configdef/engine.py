"""Validation engine for connector configurations.

Validation runs in two phases. The schema phase walks the merged schema and
performs type coercion, required-value checks, per-key validators and
recommender checks. The semantic phase hands the raw map to the plugin's own
validation hook, whose messages are merged into the schema-phase results.

The engine collects every problem it finds. A failure on one key never stops
the remaining keys from being validated, and per-key problems are reported as
data instead of being raised.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from types import MappingProxyType
from typing import Any

from .base_schema import CONNECTOR_CLASS_CONFIG
from .exceptions import ConfigError, missing_required_message
from .metrics import record_hook_fault, record_validation, timed_operation
from .parsing import comparable, parse_value, render_element, render_value
from .report import ConfigInfo, ConfigValueReport, ValidationReport, build_report
from .types import ConfigKeyDefinition, ConfigType

logger = logging.getLogger(__name__)

SemanticValidator = Callable[[Mapping[str, str]], Mapping[str, Iterable[str]]]
"""Plugin validation hook: raw config in, key -> error messages out."""

DEFAULT_HOOK_FAULT_KEY = CONNECTOR_CLASS_CONFIG


def _is_recommended(value: Any, config_type: ConfigType, valid: list[Any]) -> bool:
    allowed = {comparable(item) for item in valid}

    def _member(item: Any) -> bool:
        return item in valid or comparable(item) in allowed

    if config_type is ConfigType.LIST:
        return all(_member(item) for item in value)
    return _member(value)


def _validate_key(
    plugin_name: str,
    definition: ConfigKeyDefinition,
    raw: Mapping[str, str],
    parsed: dict[str, Any],
) -> ConfigValueReport:
    name = definition.name
    errors: list[str] = []
    value: Any = None

    raw_value = raw.get(name)
    if raw_value is not None:
        try:
            value = parse_value(name, raw_value, definition.type)
        except ConfigError as exc:
            errors.append(str(exc))
        else:
            parsed[name] = value
    elif definition.required:
        errors.append(missing_required_message(name))
    else:
        value = definition.default
        parsed[name] = value

    if value is not None and definition.validator is not None:
        try:
            definition.validator(name, value)
        except ConfigError as exc:
            errors.append(str(exc))
        except Exception as exc:
            logger.warning("Validator for configuration '%s' of plugin '%s' failed: %s", name, plugin_name, exc)
            record_hook_fault(plugin_name)
            errors.append(f"Failed to validate configuration {name}: {exc}")

    recommended: tuple[str, ...] = ()
    visible = True
    if definition.recommender is not None:
        view = MappingProxyType(parsed)
        try:
            valid = list(definition.recommender.valid_values(name, view))
            visible = bool(definition.recommender.visible(name, view))
        except ConfigError as exc:
            errors.append(str(exc))
        except Exception as exc:
            logger.warning("Recommender for configuration '%s' of plugin '%s' failed: %s", name, plugin_name, exc)
            record_hook_fault(plugin_name)
            errors.append(f"Failed to compute recommended values for configuration {name}: {exc}")
        else:
            recommended = tuple(render_element(item) for item in valid)
            if value is not None and valid and not _is_recommended(value, definition.type, valid):
                errors.append(
                    str(
                        ConfigError.invalid_value(
                            name,
                            render_value(value, definition.type),
                            f"Value must be one of: {', '.join(recommended)}",
                        )
                    )
                )

    return ConfigValueReport(
        name=name,
        value=render_value(value, definition.type),
        recommended_values=recommended,
        errors=tuple(errors),
        visible=visible,
    )


def _normalize_messages(returned: Any) -> list[tuple[str, list[str]]]:
    """Turn a hook's return value into ``(key, messages)`` pairs.

    Raises:
        TypeError: If the value is not a mapping of key to message(s).
    """
    if returned is None:
        return []
    if not isinstance(returned, Mapping):
        raise TypeError(f"expected a mapping of configuration errors, got {type(returned).__name__}")

    results: list[tuple[str, list[str]]] = []
    for key, messages in returned.items():
        if isinstance(messages, str):
            messages = [messages]
        elif messages is None:
            raise TypeError(f"messages for configuration {key} must be a string or a list of strings, got None")
        results.append((str(key), [str(message) for message in messages]))
    return results


def _run_hook(
    plugin_name: str,
    hook: SemanticValidator,
    raw: Mapping[str, str],
    fault_key: str,
) -> list[tuple[str, list[str]]]:
    try:
        return _normalize_messages(hook(MappingProxyType(dict(raw))))
    except Exception as exc:
        logger.warning("Validation hook of plugin '%s' failed: %s", plugin_name, exc)
        record_hook_fault(plugin_name)
        return [(fault_key, [f"Connector configuration validation failed: {exc}"])]


def _add_messages(
    entries: dict[str, ConfigInfo],
    raw: Mapping[str, str],
    key: str,
    messages: list[str],
) -> None:
    existing = entries.get(key)
    if existing is None:
        entries[key] = ConfigInfo(None, ConfigValueReport(name=key, value=raw.get(key), errors=tuple(messages)))
    elif messages:
        entries[key] = ConfigInfo(existing.definition, existing.value.with_errors(messages))


def validate(
    plugin_name: str,
    merged: Mapping[str, ConfigKeyDefinition],
    raw: Mapping[str, str],
    hook: SemanticValidator | None = None,
    *,
    hook_fault_key: str = DEFAULT_HOOK_FAULT_KEY,
    extra_errors: Mapping[str, Iterable[str]] | None = None,
) -> ValidationReport:
    """Validate ``raw`` against ``merged`` and build the report.

    Args:
        plugin_name: Canonical name of the resolved plugin, used as report name
        merged: Merged schema; iteration order is report order
        raw: Caller-supplied string values; unknown keys are allowed
        hook: Optional plugin-specific semantic validator
        hook_fault_key: Key that receives the error when the hook raises or
            returns something other than a mapping of key to messages
        extra_errors: Caller-computed messages merged in before the hook's,
            whatever the hook does

    Returns:
        The complete validation report. Never raises for bad input values.
    """
    with timed_operation() as timing:
        parsed: dict[str, Any] = {}
        entries: dict[str, ConfigInfo] = {}

        for name, definition in merged.items():
            entries[name] = ConfigInfo(definition, _validate_key(plugin_name, definition, raw, parsed))

        for key, messages in (extra_errors or {}).items():
            _add_messages(entries, raw, key, list(messages))

        if hook is not None:
            for key, messages in _run_hook(plugin_name, hook, raw, hook_fault_key):
                _add_messages(entries, raw, key, messages)

        report = build_report(plugin_name, entries.values())

    record_validation(report.error_count, timing["duration"])
    logger.debug(
        "Validated %d keys for '%s': %d with errors",
        len(report.configs),
        plugin_name,
        report.error_count,
    )
    return report
