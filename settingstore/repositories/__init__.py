"""Repositories package - data access layer."""

from __future__ import annotations

from settingstore.repositories.base_repository import BaseRepository
from settingstore.repositories.setting_repository import (
    SettingRepository,
    SettingStore,
    SettingValidationError,
)

__all__ = [
    "BaseRepository",
    "SettingRepository",
    "SettingStore",
    "SettingValidationError",
]
