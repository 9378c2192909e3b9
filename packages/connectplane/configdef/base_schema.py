"""Framework-level connector configuration keys.

Every connector inherits these keys regardless of the plugin it selects.
"""

from __future__ import annotations

from .schema import ConfigSchema
from .types import ConfigType, Importance, Width
from .validators import NonEmptyString, Range, ValidString

COMMON_GROUP = "Common"
TRANSFORMS_GROUP = "Transforms"

NAME_CONFIG = "name"
CONNECTOR_CLASS_CONFIG = "connector.class"
TASKS_MAX_CONFIG = "tasks.max"
KEY_CONVERTER_CLASS_CONFIG = "key.converter"
VALUE_CONVERTER_CLASS_CONFIG = "value.converter"
HEADER_CONVERTER_CLASS_CONFIG = "header.converter"
CONFIG_RELOAD_ACTION_CONFIG = "config.action.reload"
TRANSFORMS_CONFIG = "transforms"

CONFIG_RELOAD_ACTION_NONE = "none"
CONFIG_RELOAD_ACTION_RESTART = "restart"

TASKS_MAX_DEFAULT = 1

_CONNECTOR_CONFIG_SCHEMA = (
    ConfigSchema()
    .define(
        NAME_CONFIG,
        ConfigType.STRING,
        importance=Importance.HIGH,
        documentation="Globally unique name to use for this connector.",
        group=COMMON_GROUP,
        order_in_group=1,
        width=Width.MEDIUM,
        display_name="Connector name",
        validator=NonEmptyString(),
    )
    .define(
        CONNECTOR_CLASS_CONFIG,
        ConfigType.STRING,
        importance=Importance.HIGH,
        documentation=(
            "Name or alias of the class for this connector. Must be a subclass of "
            "connectplane.plugins.base.Connector. If the connector is "
            "acme.connectors.FileStreamSinkConnector, you can either specify this full name, "
            "or use 'FileStreamSink' or 'FileStreamSinkConnector' to make the configuration a bit shorter."
        ),
        group=COMMON_GROUP,
        order_in_group=2,
        width=Width.LONG,
        display_name="Connector class",
    )
    .define(
        TASKS_MAX_CONFIG,
        ConfigType.INT,
        default=TASKS_MAX_DEFAULT,
        importance=Importance.HIGH,
        documentation="Maximum number of tasks to use for this connector.",
        group=COMMON_GROUP,
        order_in_group=3,
        width=Width.SHORT,
        display_name="Tasks max",
        validator=Range.at_least(1),
    )
    .define(
        KEY_CONVERTER_CLASS_CONFIG,
        ConfigType.CLASS,
        default=None,
        importance=Importance.LOW,
        documentation=(
            "Converter class used to convert between the framework's record format and the "
            "serialized form of record keys. Overrides the worker-level setting."
        ),
        group=COMMON_GROUP,
        order_in_group=4,
        width=Width.SHORT,
        display_name="Key converter class",
    )
    .define(
        VALUE_CONVERTER_CLASS_CONFIG,
        ConfigType.CLASS,
        default=None,
        importance=Importance.LOW,
        documentation=(
            "Converter class used to convert between the framework's record format and the "
            "serialized form of record values. Overrides the worker-level setting."
        ),
        group=COMMON_GROUP,
        order_in_group=5,
        width=Width.SHORT,
        display_name="Value converter class",
    )
    .define(
        HEADER_CONVERTER_CLASS_CONFIG,
        ConfigType.CLASS,
        default=None,
        importance=Importance.LOW,
        documentation="Header converter class used for record headers. Overrides the worker-level setting.",
        group=COMMON_GROUP,
        order_in_group=6,
        width=Width.SHORT,
        display_name="Header converter class",
    )
    .define(
        CONFIG_RELOAD_ACTION_CONFIG,
        ConfigType.STRING,
        default=CONFIG_RELOAD_ACTION_RESTART,
        importance=Importance.LOW,
        documentation=(
            "The action to take when externally provided configuration values change: "
            "'none' keeps the connector running, 'restart' restarts it with the new values."
        ),
        group=COMMON_GROUP,
        order_in_group=7,
        width=Width.MEDIUM,
        display_name="Reload action",
        validator=ValidString.in_(CONFIG_RELOAD_ACTION_NONE, CONFIG_RELOAD_ACTION_RESTART),
    )
    .define(
        TRANSFORMS_CONFIG,
        ConfigType.LIST,
        default="",
        importance=Importance.LOW,
        documentation="Aliases for the transformations to be applied to records.",
        group=TRANSFORMS_GROUP,
        order_in_group=1,
        width=Width.LONG,
        display_name="Transforms",
    )
)


def connector_config_schema() -> ConfigSchema:
    """Return the base schema shared by all connectors."""
    return _CONNECTOR_CONFIG_SCHEMA
