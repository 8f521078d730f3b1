"""Configuration for wakasource."""

from .settings import ConfigError, InvalidConfiguration, Settings

__all__ = ["ConfigError", "InvalidConfiguration", "Settings"]
