"""Tests for environment driven configuration."""

import pytest
from pydantic import ValidationError

from settingstore.core.settings import AppSettings


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "SETTING_WITH_CACHE",
        "SETTING_AUTOLOAD",
        "SQLALCHEMY_DATABASE_URI",
        "SQLITE_DB_PATH",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    settings = AppSettings(_env_file=None)

    assert settings.with_cache is True
    assert settings.autoload is True
    assert settings.log_level == "INFO"
    assert settings.sqlalchemy_database_uri.startswith("sqlite:///")
    assert settings.sqlalchemy_database_uri.endswith("instance/settings.db")


def test_flags_read_from_environment(clean_env):
    clean_env.setenv("SETTING_WITH_CACHE", "off")
    clean_env.setenv("SETTING_AUTOLOAD", "Yes")

    settings = AppSettings(_env_file=None)

    assert settings.with_cache is False
    assert settings.autoload is True
    assert settings.as_flask_config()["SETTING_CONFIG"] == {
        "WITH_CACHE": False,
        "AUTOLOAD": True,
    }


def test_database_uri_override(clean_env):
    clean_env.setenv("SQLALCHEMY_DATABASE_URI", "postgresql://db/settings")

    settings = AppSettings(_env_file=None)

    assert settings.as_flask_config()["SQLALCHEMY_DATABASE_URI"] == (
        "postgresql://db/settings"
    )


def test_invalid_log_level(clean_env):
    clean_env.setenv("LOG_LEVEL", "chatty")

    with pytest.raises(ValidationError):
        AppSettings(_env_file=None)


def test_log_level_is_normalised(clean_env):
    clean_env.setenv("LOG_LEVEL", "debug")

    assert AppSettings(_env_file=None).log_level == "DEBUG"
