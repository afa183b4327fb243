"""Database models for the setting store."""

from datetime import datetime
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

DEFAULT_GROUP = ""
DEFAULT_SORT_ORDER = 50


class Setting(db.Model):
    """Setting model - one named, grouped configuration value."""

    __tablename__ = "settings"
    __table_args__ = (
        db.UniqueConstraint("name", "group", name="uq_settings_name_group"),
    )

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False, index=True)
    group = db.Column(
        db.String(64), default=DEFAULT_GROUP, nullable=False, index=True
    )  # "" is the ungrouped namespace
    value = db.Column(db.JSON, nullable=True)
    default_value = db.Column(db.JSON, nullable=True)
    definition = db.Column(db.JSON, nullable=True)  # Opaque to the store and cache
    sort_order = db.Column(db.Integer, default=DEFAULT_SORT_ORDER, nullable=False)
    autoload = db.Column(db.Boolean, default=False, nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(
        db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    def to_dict(self):
        """Convert model to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "group": self.group,
            "value": self.value,
            "default_value": self.default_value,
            "definition": self.definition,
            "sort_order": self.sort_order,
            "autoload": self.autoload,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self) -> str:
        return f"<Setting {self.group}/{self.name}>"
