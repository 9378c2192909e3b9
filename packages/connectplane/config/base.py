# connectplane/config/base.py

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineConfig(BaseSettings):
    """
    Settings for the plugin resolution and validation engine.
    Values are read from the environment or a local .env file.
    """

    # Logging Configuration
    LOG_LEVEL: str = "INFO"

    # Plugin Catalog Configuration
    # Canonical class names that are loaded but never shown in plugin listings
    PLUGIN_LISTING_EXCLUDES: list[str] = []
    PLUGIN_MANIFEST_PATH: Path | None = None

    # Observability
    METRICS_ENABLED: bool = True

    # Pydantic model config
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @field_validator("LOG_LEVEL")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        return value.upper()
