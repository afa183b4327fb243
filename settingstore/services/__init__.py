"""Business logic services layer."""

from __future__ import annotations

from .setting_service import SettingService

__all__ = [
    "SettingService",
]
