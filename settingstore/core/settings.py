"""Application settings powered by Pydantic."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Project root directory (one level up from settingstore/)
BASE_DIR = Path(__file__).resolve().parent.parent.parent

LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def _cast_flag(value: object) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


class AppSettings(BaseSettings):
    """Top-level application settings object."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_env: str = Field(default="development", alias="APP_ENV")
    secret_key: str = Field(
        default="dev-secret-key-change-in-production", alias="SECRET_KEY"
    )

    sqlalchemy_database_uri_override: Optional[str] = Field(
        default=None, alias="SQLALCHEMY_DATABASE_URI"
    )
    sqlite_db_path: str = Field(default="instance/settings.db", alias="SQLITE_DB_PATH")
    sqlalchemy_echo: bool = Field(default=False, alias="SQLALCHEMY_ECHO")

    # Setting service behaviour
    with_cache: bool = Field(default=True, alias="SETTING_WITH_CACHE")
    autoload: bool = Field(default=True, alias="SETTING_AUTOLOAD")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @field_validator("sqlalchemy_echo", "with_cache", "autoload", mode="before")
    @classmethod
    def cast_flags(cls, value: object) -> bool:
        return _cast_flag(value)

    @field_validator("log_level", mode="before")
    @classmethod
    def normalise_log_level(cls, value: object) -> str:
        level = str(value or "INFO").strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(
                f"LOG_LEVEL must be one of {', '.join(sorted(LOG_LEVELS))}"
            )
        return level

    @property
    def sqlalchemy_database_uri(self) -> str:
        """Construct SQLAlchemy database URI based on configuration."""
        if self.sqlalchemy_database_uri_override:
            return self.sqlalchemy_database_uri_override

        sqlite_path = Path(self.sqlite_db_path)
        if not sqlite_path.is_absolute():
            sqlite_path = (BASE_DIR / sqlite_path).resolve()
        return f"sqlite:///{sqlite_path.as_posix()}"

    @property
    def setting_config(self) -> dict[str, object]:
        """Get setting service configuration."""
        return {
            "WITH_CACHE": self.with_cache,
            "AUTOLOAD": self.autoload,
        }

    def as_flask_config(self) -> dict[str, object]:
        """Render settings as a mapping compatible with Flask.config."""
        return {
            "SECRET_KEY": self.secret_key,
            "SQLALCHEMY_DATABASE_URI": self.sqlalchemy_database_uri,
            "SQLALCHEMY_TRACK_MODIFICATIONS": False,
            "SQLALCHEMY_ECHO": self.sqlalchemy_echo,
            "SETTING_CONFIG": self.setting_config,
            "LOG_LEVEL": self.log_level,
        }
