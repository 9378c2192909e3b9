"""Configuration definitions, schema merging and validation."""

from .base_schema import CONNECTOR_CLASS_CONFIG, NAME_CONFIG, connector_config_schema
from .engine import SemanticValidator, validate
from .exceptions import ConfigError
from .merge import MergedSchema, merge
from .parsing import HIDDEN_VALUE, parse_value, render_value
from .report import ConfigInfo, ConfigValueReport, ValidationReport, build_report
from .schema import EMPTY_SCHEMA, ConfigSchema
from .types import NO_DEFAULT, ConfigKeyDefinition, ConfigType, Importance, Recommender, Width
from .validators import NonEmptyString, Range, ValidString

__all__ = [
    "CONNECTOR_CLASS_CONFIG",
    "NAME_CONFIG",
    "connector_config_schema",
    "SemanticValidator",
    "validate",
    "ConfigError",
    "MergedSchema",
    "merge",
    "HIDDEN_VALUE",
    "parse_value",
    "render_value",
    "ConfigInfo",
    "ConfigValueReport",
    "ValidationReport",
    "build_report",
    "EMPTY_SCHEMA",
    "ConfigSchema",
    "NO_DEFAULT",
    "ConfigKeyDefinition",
    "ConfigType",
    "Importance",
    "Recommender",
    "Width",
    "NonEmptyString",
    "Range",
    "ValidString",
]
