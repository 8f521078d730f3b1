"""Tests for configuration loading."""

import os
from pathlib import Path

import pytest

from wakasource.config.settings import ConfigError, InvalidConfiguration, Settings, generate_example_env, load_env_file


@pytest.fixture(autouse=True)
def clean_env(tmp_path, monkeypatch):
    """Isolate each test from the caller's environment and working directory."""
    original_env = os.environ.copy()

    for var in list(os.environ):
        if var.startswith(("WAKATIME_", "WAKASOURCE_")):
            del os.environ[var]

    monkeypatch.chdir(tmp_path)

    yield

    # load_env_file writes os.environ directly
    os.environ.clear()
    os.environ.update(original_env)


def test_settings_defaults():
    settings = Settings(api_key="waka_123")

    assert settings.base_url == "https://wakatime.com/api/v1"
    assert settings.timespan == "7day"
    assert settings.timezone == "UTC"
    assert settings.timeout == 30.0
    assert settings.locale == "en"
    assert settings.log_level == "INFO"
    assert settings.log_dir is None


def test_settings_with_string_log_dir():
    settings = Settings(api_key="waka_123", log_dir="logs")

    assert settings.log_dir == Path("logs")


@pytest.mark.parametrize("api_key", ["", "   "])
def test_missing_api_key(api_key):
    with pytest.raises(InvalidConfiguration, match="WAKATIME_API_KEY"):
        Settings(api_key=api_key)


@pytest.mark.parametrize(
    "overrides",
    [
        {"timespan": "banana"},
        {"timezone": "Mars/Olympus"},
        {"timeout": 0},
        {"log_level": "LOUD"},
        {"base_url": ""},
        {"locale": "klingon"},
    ],
)
def test_invalid_values(overrides):
    with pytest.raises(InvalidConfiguration):
        Settings(api_key="waka_123", **overrides)


def test_log_level_is_uppercased():
    assert Settings(api_key="waka_123", log_level="debug").log_level == "DEBUG"


def test_invalid_configuration_is_config_error():
    with pytest.raises(ConfigError):
        Settings(api_key="")


def test_from_env(monkeypatch):
    monkeypatch.setenv("WAKATIME_API_KEY", "waka_env")
    monkeypatch.setenv("WAKATIME_TIMESPAN", "30day")
    monkeypatch.setenv("WAKATIME_TIMEZONE", "Europe/Berlin")
    monkeypatch.setenv("WAKATIME_TIMEOUT", "12.5")
    monkeypatch.setenv("WAKASOURCE_LOG_DIR", "logs")

    settings = Settings.from_env()

    assert settings.api_key == "waka_env"
    assert settings.timespan == "30day"
    assert settings.timezone == "Europe/Berlin"
    assert settings.timeout == 12.5
    assert settings.log_dir == Path("logs")


def test_from_env_missing_key():
    with pytest.raises(InvalidConfiguration):
        Settings.from_env()


def test_from_env_bad_timeout(monkeypatch):
    monkeypatch.setenv("WAKATIME_API_KEY", "waka_env")
    monkeypatch.setenv("WAKATIME_TIMEOUT", "soon")

    with pytest.raises(InvalidConfiguration):
        Settings.from_env()


def test_from_env_unknown_locale(monkeypatch):
    monkeypatch.setenv("WAKATIME_API_KEY", "waka_env")
    monkeypatch.setenv("WAKATIME_LOCALE", "klingon")

    with pytest.raises(InvalidConfiguration, match="Invalid locale"):
        Settings.from_env()


def test_overrides_win(monkeypatch):
    monkeypatch.setenv("WAKATIME_API_KEY", "waka_env")
    monkeypatch.setenv("WAKATIME_TIMESPAN", "30day")

    settings = Settings.from_env(api_key="waka_cli", timespan=None, locale="de")

    assert settings.api_key == "waka_cli"
    assert settings.timespan == "30day"
    assert settings.locale == "de"


def test_from_env_reads_default_env_file(tmp_path):
    (tmp_path / ".env").write_text("WAKATIME_API_KEY=waka_file\nWAKATIME_TIMESPAN=14day\n", encoding="utf-8")

    settings = Settings.from_env()

    assert settings.api_key == "waka_file"
    assert settings.timespan == "14day"


def test_load_env_file(tmp_path):
    env_file = tmp_path / "custom.env"
    env_file.write_text(
        """
# Comment
WAKATIME_API_KEY="waka_quoted"
WAKATIME_TIMEZONE='America/New_York'

WAKATIME_LOCALE = fr
NOT_AN_ASSIGNMENT
""",
        encoding="utf-8",
    )

    load_env_file(env_file)

    assert os.environ["WAKATIME_API_KEY"] == "waka_quoted"
    assert os.environ["WAKATIME_TIMEZONE"] == "America/New_York"
    assert os.environ["WAKATIME_LOCALE"] == "fr"


def test_env_file_does_not_override_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("WAKATIME_API_KEY", "waka_env")
    env_file = tmp_path / "custom.env"
    env_file.write_text("WAKATIME_API_KEY=waka_file\n", encoding="utf-8")

    settings = Settings.from_env(env_file)

    assert settings.api_key == "waka_env"


def test_generate_example_env(tmp_path):
    output = tmp_path / ".env.example"

    content = generate_example_env(output)

    assert "WAKATIME_API_KEY=" in content
    assert "WAKATIME_TIMESPAN=7day" in content
    assert output.read_text(encoding="utf-8") == content
