"""Flask application factory."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Mapping, Optional

from dotenv import load_dotenv
from flask import Flask
from flask_cors import CORS

from settingstore.core import get_settings
from settingstore.models import db

# Load environment variables from .env file
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(env_path)


def _ensure_instance_path(app: Flask) -> None:
    try:
        os.makedirs(app.instance_path, exist_ok=True)
    except OSError:
        pass


def create_app(config_overrides: Optional[Mapping[str, Any]] = None) -> Flask:
    """Create and configure Flask application.

    Args:
        config_overrides: Values applied on top of the environment settings
    """
    app = Flask(__name__, instance_relative_config=True)

    settings = get_settings()
    app.config.update(settings.as_flask_config())
    app.config["APP_SETTINGS"] = settings
    if config_overrides:
        app.config.update(config_overrides)

    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    # Ensure instance folder exists
    _ensure_instance_path(app)

    # Initialize extensions
    db.init_app(app)
    CORS(app)

    # Register blueprints
    from settingstore.api import api_bp

    app.register_blueprint(api_bp)

    # Database initialization command
    @app.cli.command("init-db")
    def init_db():
        """Create the settings table."""
        with app.app_context():
            db.create_all()
            print("✓ Database initialized successfully")

    # Error handlers
    @app.errorhandler(404)
    def not_found(e):
        """Handle 404 errors."""
        return {"error": "Resource not found"}, 404

    @app.errorhandler(500)
    def server_error(e):
        """Handle 500 errors."""
        return {"error": "Internal server error"}, 500

    return app


# Create app instance
app = create_app()
