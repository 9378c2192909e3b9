# connectplane/config/__init__.py
"""
Configuration module for engine settings.
Instantiates a default settings object shared by the library and the CLI.
"""

from .base import EngineConfig

settings = EngineConfig()

__all__ = ["EngineConfig", "settings"]
