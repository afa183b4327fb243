"""Setting repository - persistent store for setting entries."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Protocol

from flask_sqlalchemy import SQLAlchemy
from pydantic import ValidationError
from sqlalchemy import inspect
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from settingstore.models import DEFAULT_GROUP, Setting
from settingstore.repositories.base_repository import BaseRepository
from settingstore.schemas import SettingRecord, errors_by_field

logger = logging.getLogger(__name__)


class SettingValidationError(Exception):
    """Raised when the store rejects a setting."""

    def __init__(self, errors: Dict[str, List[str]]):
        super().__init__("Setting validation failed")
        self.errors = errors


class SettingStore(Protocol):
    """Persistence operations the setting service relies on."""

    def find_all(self) -> List[Setting]: ...

    def find_by_autoload(self, autoload: bool) -> List[Setting]: ...

    def find_excluding_ids(self, ids: Iterable[int]) -> List[Setting]: ...

    def find_one(self, name: str, group: str = DEFAULT_GROUP) -> Optional[Setting]: ...

    def save(self, entry: Setting) -> Setting: ...

    def delete(self, entry: Setting) -> None: ...


class SettingRepository(BaseRepository[Setting]):
    """Repository for Setting entity operations."""

    def __init__(self, db: SQLAlchemy) -> None:
        """Initialize setting repository.

        Args:
            db: SQLAlchemy database instance
        """
        super().__init__(db, Setting)

    def _ordered(self):
        return self.query().order_by(Setting.group, Setting.sort_order, Setting.name)

    def find_all(self) -> List[Setting]:
        """Get every stored setting, ordered by group and sort order."""
        return self._ordered().all()

    def find_by_autoload(self, autoload: bool) -> List[Setting]:
        """Get settings whose autoload flag matches.

        Args:
            autoload: Flag value to match

        Returns:
            List of settings
        """
        return self._ordered().filter_by(autoload=autoload).all()

    def find_excluding_ids(self, ids: Iterable[int]) -> List[Setting]:
        """Get settings whose id is not in ``ids``.

        Args:
            ids: Primary keys to leave out (typically the ones already cached)

        Returns:
            List of settings
        """
        excluded = [id for id in ids if id is not None]
        if not excluded:
            return self.find_all()
        return self._ordered().filter(~Setting.id.in_(excluded)).all()

    def find_one(self, name: str, group: str = DEFAULT_GROUP) -> Optional[Setting]:
        """Get a setting by its name and group.

        Args:
            name: Setting name
            group: Setting group

        Returns:
            Setting instance or None
        """
        return self.get_one_by_filter(name=name, group=group)

    def validate(self, entry: Setting) -> Dict[str, List[str]]:
        """Check a setting against the record schema and the (name, group) key.

        Args:
            entry: Setting to check

        Returns:
            Mapping of field name to error messages, empty when valid
        """
        with self.db.session.no_autoflush:
            data = {
                "name": entry.name,
                "group": entry.group,
                "value": entry.value,
                "default_value": entry.default_value,
                "definition": entry.definition,
            }
            # Unset flags fall back to the column defaults at insert time
            if entry.sort_order is not None:
                data["sort_order"] = entry.sort_order
            if entry.autoload is not None:
                data["autoload"] = entry.autoload

            try:
                SettingRecord.model_validate(data)
            except ValidationError as exc:
                return errors_by_field(exc)

            if self.key_taken(entry.name, entry.group, exclude_id=entry.id):
                message = (
                    f"Setting '{entry.name}' already exists"
                    f" in group '{entry.group}'"
                )
                return {"name": [message]}
            return {}

    def key_taken(
        self, name: str, group: str, exclude_id: Optional[int] = None
    ) -> bool:
        """Check if another setting already uses the (name, group) key."""
        with self.db.session.no_autoflush:
            query = self.query().filter_by(name=name, group=group)
            if exclude_id is not None:
                query = query.filter(Setting.id != exclude_id)
            return query.first() is not None

    def save(self, entry: Setting) -> Setting:
        """Insert or update a setting.

        Args:
            entry: New or already persisted setting

        Returns:
            The saved setting

        Raises:
            SettingValidationError: If the setting is invalid or its key is taken
            SQLAlchemyError: If the database fails for any other reason
        """
        # Pending changes must not reach the database before they are checked
        with self.db.session.no_autoflush:
            try:
                errors = self.validate(entry)
            except IntegrityError as exc:
                self.rollback()
                logger.warning(f"Integrity error checking setting: {exc.orig}")
                raise SettingValidationError(
                    {"name": ["Setting name and group must be unique"]}
                ) from exc
            if errors:
                logger.warning(
                    f"Rejected setting {entry.group}/{entry.name}: {errors}"
                )
                self._discard_changes(entry)
                raise SettingValidationError(errors)

        self.add(entry)
        try:
            self.commit()
        except IntegrityError as exc:
            self.rollback()
            logger.warning(f"Integrity error saving setting: {exc.orig}")
            raise SettingValidationError(
                {"name": ["Setting name and group must be unique"]}
            ) from exc
        except SQLAlchemyError as exc:
            self.rollback()
            logger.error(f"Failed to save setting: {exc}")
            raise
        return entry

    def delete(self, entry: Setting) -> None:
        """Delete a setting.

        Args:
            entry: Persisted setting

        Raises:
            SQLAlchemyError: If the database rejects the delete
        """
        self.remove(entry)
        try:
            self.commit()
        except SQLAlchemyError as exc:
            self.rollback()
            logger.error(f"Failed to delete setting: {exc}")
            raise

    def _discard_changes(self, entry: Setting) -> None:
        # Persisted rows reload their stored state on next access
        state = inspect(entry)
        if state.persistent:
            self.db.session.expire(entry)
