"""
Pytest configuration and fixtures for the setting store.

This file provides:
- A Flask application bound to an in-memory SQLite database
- A factory for setting services with different cache modes
- A helper to seed rows straight into the store
"""

import pytest

from settingstore.builder import SettingBuilder
from settingstore.main import create_app
from settingstore.models import db
from settingstore.repositories import SettingRepository
from settingstore.services import SettingService


@pytest.fixture(scope="function")
def app():
    """Provide an application with a fresh, empty settings table."""
    app = create_app(
        {
            "TESTING": True,
            "SQLALCHEMY_DATABASE_URI": "sqlite://",
            "SETTING_CONFIG": {"WITH_CACHE": True, "AUTOLOAD": True},
        }
    )
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope="function")
def client(app):
    """Provide a Flask test client."""
    return app.test_client()


@pytest.fixture(scope="function")
def repository(app):
    """Provide a setting repository on the test database."""
    return SettingRepository(db)


@pytest.fixture(scope="function")
def make_service(app):
    """Provide a factory building setting services."""

    def _make(**kwargs):
        return SettingService(db, **kwargs)

    return _make


@pytest.fixture(scope="function")
def seed(repository):
    """Insert settings directly through the repository."""

    def _seed(name, value, group="", autoload=False, sort_order=50):
        entry = (
            SettingBuilder()
            .set_name(name)
            .set_group(group)
            .set_value(value)
            .set_default_value(value)
            .set_sort_order(sort_order)
            .set_autoload(autoload)
            .build_new()
        )
        return repository.save(entry)

    return _seed
