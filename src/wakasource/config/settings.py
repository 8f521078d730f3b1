"""Configuration loading.

Loads configuration from a .env file and the environment and provides typed
access to settings. Missing or invalid values fail before any network call.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import pytz

from ..adapters.wakatime.client import DEFAULT_BASE_URL
from ..core.errors import ConfigError, InvalidConfiguration
from ..rollups.durations import check_locale
from ..rollups.time_windows import DEFAULT_TIMESPAN, parse_timespan

__all__ = [
    "ConfigError",
    "InvalidConfiguration",
    "Settings",
    "generate_example_env",
    "load_env_file",
]

_LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Settings:
    """Settings for one source run.

    Attributes
    ----------
    api_key : str
        WakaTime secret API key (required)
    base_url : str
        API base URL
    timespan : str
        Relative window, e.g. "7day" or "30day"
    timezone : str
        Timezone used to truncate the window to calendar days
    timeout : float
        HTTP timeout in seconds
    locale : str
        Locale for humanized durations
    log_level : str
        Logging level
    log_dir : Path | None
        Directory for JSONL logs (console only when unset)
    """

    api_key: str
    base_url: str = DEFAULT_BASE_URL
    timespan: str = DEFAULT_TIMESPAN
    timezone: str = "UTC"
    timeout: float = 30.0
    locale: str = "en"
    log_level: str = "INFO"
    log_dir: Path | None = None

    def __post_init__(self):
        """Validate settings after initialization."""
        if self.log_dir and isinstance(self.log_dir, str):
            self.log_dir = Path(self.log_dir)

        if not self.api_key or not self.api_key.strip():
            raise InvalidConfiguration(
                "WAKATIME_API_KEY is required. "
                "Get it from https://wakatime.com/settings/account and set it in .env"
            )

        if not self.base_url:
            raise InvalidConfiguration("WAKATIME_BASE_URL must not be empty")

        # Fails early on an unparseable timespan
        parse_timespan(self.timespan)

        try:
            pytz.timezone(self.timezone)
        except pytz.UnknownTimeZoneError as exc:
            raise InvalidConfiguration(f"Invalid timezone: {self.timezone}") from exc

        if self.timeout <= 0:
            raise InvalidConfiguration(f"WAKATIME_TIMEOUT must be positive, got {self.timeout}")

        check_locale(self.locale)

        self.log_level = self.log_level.upper()
        if self.log_level not in _LOG_LEVELS:
            raise InvalidConfiguration(f"Invalid log level: {self.log_level}")

    @classmethod
    def from_env(cls, env_file: Path | str | None = None, **overrides) -> Settings:
        """Load settings from environment.

        Loads from .env file if present, then reads os.environ. Keyword
        overrides that are not None win over both.

        Parameters
        ----------
        env_file
            Path to .env file (default: .env in current directory)
        **overrides
            Field values that take precedence (e.g. from CLI options)

        Returns
        -------
        Settings
            Loaded settings

        Raises
        ------
        InvalidConfiguration
            If required settings are missing or invalid
        """
        if env_file is None:
            env_file = Path(".env")

        if isinstance(env_file, str):
            env_file = Path(env_file)

        if env_file.exists():
            load_env_file(env_file)

        try:
            values = {
                "api_key": os.environ.get("WAKATIME_API_KEY", ""),
                "base_url": os.environ.get("WAKATIME_BASE_URL", DEFAULT_BASE_URL),
                "timespan": os.environ.get("WAKATIME_TIMESPAN", DEFAULT_TIMESPAN),
                "timezone": os.environ.get("WAKATIME_TIMEZONE", "UTC"),
                "timeout": float(os.environ.get("WAKATIME_TIMEOUT", "30.0")),
                "locale": os.environ.get("WAKATIME_LOCALE", "en"),
                "log_level": os.environ.get("WAKASOURCE_LOG_LEVEL", "INFO"),
                "log_dir": Path(os.environ["WAKASOURCE_LOG_DIR"]) if os.environ.get("WAKASOURCE_LOG_DIR") else None,
            }
        except ValueError as exc:
            raise InvalidConfiguration(f"Invalid configuration: {exc}") from exc

        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)


def load_env_file(env_file: Path) -> None:
    """Load environment variables from .env file.

    Variables already set in the environment are not overwritten.

    Parameters
    ----------
    env_file
        Path to .env file
    """
    with open(env_file, encoding="utf-8") as f:
        for line in f:
            line = line.strip()

            # Skip comments and empty lines
            if not line or line.startswith("#"):
                continue

            if "=" in line:
                key, value = line.split("=", 1)
                key = key.strip()
                value = value.strip()

                # Remove quotes
                if (value.startswith('"') and value.endswith('"')) or (value.startswith("'") and value.endswith("'")):
                    value = value[1:-1]

                os.environ.setdefault(key, value)


def generate_example_env(output_path: Path | None = None) -> str:
    """Generate example .env file with all settings."""
    example = """# wakasource configuration
# Copy this to .env and adjust values

# WakaTime secret API key (required)
# https://wakatime.com/settings/account
WAKATIME_API_KEY=

# API base URL (optional)
WAKATIME_BASE_URL=https://wakatime.com/api/v1

# Relative window to fetch (optional, default: 7day)
# Examples: 7day, 30day, 2 weeks
WAKATIME_TIMESPAN=7day

# Timezone for day truncation (optional, default: UTC)
WAKATIME_TIMEZONE=UTC

# HTTP timeout in seconds (optional, default: 30)
WAKATIME_TIMEOUT=30.0

# Locale for humanized durations (optional, default: en)
WAKATIME_LOCALE=en

# Log level (optional, default: INFO)
WAKASOURCE_LOG_LEVEL=INFO

# Directory for JSONL logs (optional, console only if not set)
# WAKASOURCE_LOG_DIR=logs
"""

    if output_path:
        output_path.write_text(example, encoding="utf-8")

    return example
