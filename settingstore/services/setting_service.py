"""Setting service - business logic for grouped configuration values."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from flask_sqlalchemy import SQLAlchemy

from settingstore.builder import SettingBuilder
from settingstore.cache import SettingCache
from settingstore.models import DEFAULT_GROUP, DEFAULT_SORT_ORDER, Setting
from settingstore.repositories import (
    SettingRepository,
    SettingStore,
    SettingValidationError,
)

logger = logging.getLogger(__name__)


class SettingService:
    """Service combining the setting store with an in-memory cache.

    The store is the source of truth. With ``with_cache`` enabled every lookup
    goes through the cache first and store hits are written back to it. With
    only ``autoload`` enabled the cache holds just the autoloaded settings,
    which ``all()`` merges with the rest of the store.
    """

    def __init__(
        self,
        db: SQLAlchemy,
        repository: Optional[SettingStore] = None,
        cache: Optional[SettingCache] = None,
        with_cache: bool = True,
        autoload: bool = True,
    ) -> None:
        """Initialize setting service.

        Args:
            db: SQLAlchemy database instance
            repository: Store implementation, defaults to a SettingRepository
            cache: Cache instance, defaults to an empty SettingCache
            with_cache: Read through the cache and fill it on store hits
            autoload: Load autoload settings into the cache right away
        """
        self.db = db
        self.setting_repo = repository or SettingRepository(db)
        self._cache = cache if cache is not None else SettingCache()
        self.with_cache = with_cache
        self.with_autoload = autoload
        self.last_errors: Dict[str, List[str]] = {}

        if self.with_autoload:
            self.autoload()

    @property
    def cache(self) -> SettingCache:
        return self._cache

    @cache.setter
    def cache(self, cache: SettingCache) -> None:
        self._cache = cache

    def all(self) -> Dict[str, Dict[str, Any]]:
        """Get every setting value grouped by group then name.

        Returns:
            Dictionary mapping group to a name -> value dictionary
        """
        if self.with_cache:
            cached_ids = [entry.id for entry in self._cache]
            entries = self.setting_repo.find_excluding_ids(cached_ids)
            entries = entries + self._cache.all()
        elif self.with_autoload:
            entries = self.setting_repo.find_by_autoload(False)
            entries = entries + self._cache.all()
        else:
            entries = self.setting_repo.find_all()

        values: Dict[str, Dict[str, Any]] = {}
        for entry in entries:
            values.setdefault(entry.group, {})[entry.name] = entry.value
        return values

    def add(
        self,
        name: str,
        value: Any,
        group: str = DEFAULT_GROUP,
        default_value: Any = "",
        definition: Any = None,
        sort_order: int = DEFAULT_SORT_ORDER,
        autoload: bool = False,
    ) -> bool:
        """Register a setting.

        Args:
            name: Setting name, unique within the group
            value: Current value
            group: Group the setting belongs to
            default_value: Baseline value
            definition: Opaque type/rendering descriptor
            sort_order: Ordering hint for presentation
            autoload: Cache the setting when a service starts

        Returns:
            True on success, False when the store rejected it (see last_errors)
        """
        self.last_errors = {}
        entry = (
            SettingBuilder()
            .set_name(name)
            .set_group(group)
            .set_value(value)
            .set_default_value(default_value)
            .set_definition(definition)
            .set_sort_order(sort_order)
            .set_autoload(autoload)
            .build_new()
        )
        if not self._save(entry):
            return False

        logger.info(f"Added setting {group}/{name}")
        return True

    def get(
        self, name: str, group: str = DEFAULT_GROUP, default_value: Any = None
    ) -> Any:
        """Get a setting value, or ``default_value`` when it does not exist."""
        entry = self.get_entry(name, group)
        if entry is None:
            return default_value
        return entry.value

    def has(self, name: str, group: str = DEFAULT_GROUP) -> bool:
        """Check if a setting exists."""
        return self.get_entry(name, group) is not None

    def set(self, name: str, value: Any, group: str = DEFAULT_GROUP) -> bool:
        """Change a setting value, registering the setting if it is missing.

        A new setting uses ``value`` as its default value too.

        Returns:
            True on success, False when the store rejected it (see last_errors)
        """
        self.last_errors = {}
        entry = self.get_entry(name, group)
        if entry is None:
            return self.add(name, value, group, value)

        entry.value = value
        if not self._save(entry):
            return False

        logger.info(f"Updated setting {group}/{name}")
        return True

    def rename(
        self,
        name: str,
        group: str,
        new_name: str,
        new_group: Optional[str] = None,
    ) -> bool:
        """Rename a setting, optionally moving it to another group.

        Returns:
            False if the setting does not exist or the new key is rejected
        """
        self.last_errors = {}
        entry = self.get_entry(name, group)
        if entry is None:
            return False

        entry.name = new_name
        if new_group is not None:
            entry.group = new_group
        if not self._save(entry):
            return False

        logger.info(f"Renamed setting {group}/{name} to {entry.group}/{entry.name}")
        return True

    def reset(
        self,
        name: str,
        group: str,
        default_value: Any,
        definition: Any = None,
        sort_order: Optional[int] = None,
        autoload: Optional[bool] = None,
    ) -> bool:
        """Replace the baseline fields of a setting, keeping its value.

        Arguments left as None keep their stored value.

        Returns:
            False if the setting does not exist or the store rejected it
        """
        self.last_errors = {}
        entry = self.get_entry(name, group)
        if entry is None:
            return False

        builder = SettingBuilder().set_default_value(default_value)
        if definition is not None:
            builder.set_definition(definition)
        if sort_order is not None:
            builder.set_sort_order(sort_order)
        if autoload is not None:
            builder.set_autoload(autoload)
        builder.apply_to(entry)
        if not self._save(entry):
            return False

        logger.info(f"Reset setting {group}/{name}")
        return True

    def remove(self, name: str, group: str = DEFAULT_GROUP) -> bool:
        """Delete a setting.

        Returns:
            False if the setting does not exist

        Raises:
            SQLAlchemyError: If the store fails to delete it
        """
        self.last_errors = {}
        entry = self.get_entry(name, group)
        if entry is None:
            return False

        # Evict while the entry is still attached to the session
        self._cache.remove(name, group)
        self.setting_repo.delete(entry)

        logger.info(f"Removed setting {group}/{name}")
        return True

    def autoload(self) -> None:
        """Load every autoload setting into the cache."""
        entries = self.setting_repo.find_by_autoload(True)
        for entry in entries:
            self._cache.set(entry)
        logger.debug(f"Autoloaded {len(entries)} settings")

    def get_entry(self, name: str, group: str = DEFAULT_GROUP) -> Optional[Setting]:
        """Find a setting, consulting the cache first when it is enabled.

        Args:
            name: Setting name
            group: Setting group

        Returns:
            Setting instance or None
        """
        if self.with_cache and self._cache.has(name, group):
            return self._cache.get(name, group)

        entry = self.setting_repo.find_one(name, group)
        if entry is None:
            return None
        if self.with_cache:
            self._cache.set(entry)
            logger.debug(f"Cached setting {group}/{name} from store")
        return entry

    def _save(self, entry: Setting) -> bool:
        try:
            self.setting_repo.save(entry)
        except SettingValidationError as e:
            self.last_errors = e.errors
            return False

        self._sync_cache(entry)
        return True

    def _sync_cache(self, entry: Setting) -> None:
        # Keep cached copies in step with the store after a write
        if self.with_cache:
            self._cache.set(entry)
        elif self.with_autoload:
            if entry.autoload:
                self._cache.set(entry)
            else:
                self._cache.discard(entry)
