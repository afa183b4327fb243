"""Base repository with common persistence operations."""

from __future__ import annotations

from typing import Any, Generic, Optional, Type, TypeVar

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy.orm import Query

ModelType = TypeVar("ModelType")


class BaseRepository(Generic[ModelType]):
    """Generic repository providing common database operations."""

    def __init__(self, db: SQLAlchemy, model: Type[ModelType]) -> None:
        """Initialize repository with database session and model class.

        Args:
            db: SQLAlchemy database instance
            model: SQLAlchemy model class
        """
        self.db = db
        self.model = model

    def get_one_by_filter(self, **filters: Any) -> Optional[ModelType]:
        """Retrieve single record matching filter criteria.

        Args:
            **filters: Field-value pairs to filter by

        Returns:
            Model instance or None if not found
        """
        return self.query().filter_by(**filters).first()

    def add(self, instance: ModelType) -> ModelType:
        """Stage a record for insert (no-op for instances already in the session)."""
        self.db.session.add(instance)
        return instance

    def remove(self, instance: ModelType) -> None:
        """Stage a record for deletion."""
        self.db.session.delete(instance)

    def commit(self) -> None:
        """Commit the current transaction."""
        self.db.session.commit()

    def rollback(self) -> None:
        """Rollback the current transaction."""
        self.db.session.rollback()

    def query(self) -> Query:
        """Get a query object for advanced queries.

        Returns:
            SQLAlchemy Query object
        """
        return self.db.session.query(self.model)
