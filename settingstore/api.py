"""API Blueprint - RESTful endpoints over the setting service.

Every request builds its own SettingService, so the cache lives exactly as long
as the request's database session.
"""

from datetime import datetime

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from settingstore.models import DEFAULT_GROUP, db
from settingstore.schemas import (
    SettingCreate,
    SettingRename,
    SettingReset,
    SettingUpdate,
)
from settingstore.services import SettingService

api_bp = Blueprint("api", __name__, url_prefix="/api")


# ============================================================================
# Helper Functions
# ============================================================================


def get_setting_service() -> SettingService:
    """Build a setting service configured from the application config."""
    config = current_app.config.get("SETTING_CONFIG", {})
    return SettingService(
        db,
        with_cache=bool(config.get("WITH_CACHE", True)),
        autoload=bool(config.get("AUTOLOAD", True)),
    )


def get_group() -> str:
    return request.args.get("group", DEFAULT_GROUP)


def get_payload() -> dict:
    payload = request.get_json(silent=True)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValueError("Request body must be a JSON object")
    return payload


def rejected(service: SettingService):
    return jsonify({"error": "Validation failed", "details": service.last_errors}), 400


def not_found(name: str, group: str):
    return jsonify({"error": f"Setting '{name}' not found in group '{group}'"}), 404


def invalid(exc: ValidationError):
    details = exc.errors(include_context=False)
    return jsonify({"error": "Validation failed", "details": details}), 400


# ============================================================================
# Health Endpoint
# ============================================================================


@api_bp.route("/health", methods=["GET"])
def health_check():
    """Health check endpoint."""
    return jsonify({"status": "healthy", "timestamp": datetime.utcnow().isoformat()})


# ============================================================================
# Setting Endpoints
# ============================================================================


@api_bp.route("/settings", methods=["GET"])
def list_settings():
    """Get every setting value grouped by group."""
    try:
        return jsonify({"settings": get_setting_service().all()}), 200
    except Exception as e:
        db.session.rollback()
        return jsonify({"error": str(e)}), 500


@api_bp.route("/settings/<name>", methods=["GET"])
def get_setting(name: str):
    """Get a single setting with its metadata.

    Args:
        name: Setting name, the group comes from the ``group`` query argument
    """
    group = get_group()
    try:
        entry = get_setting_service().get_entry(name, group)
        if entry is None:
            return not_found(name, group)
        return jsonify(entry.to_dict()), 200
    except Exception as e:
        db.session.rollback()
        return jsonify({"error": str(e)}), 500


@api_bp.route("/settings", methods=["POST"])
def create_setting():
    """Register a new setting."""
    try:
        data = SettingCreate(**get_payload())
        service = get_setting_service()

        if not service.add(
            data.name,
            data.value,
            group=data.group,
            default_value=data.default_value,
            definition=data.definition,
            sort_order=data.sort_order,
            autoload=data.autoload,
        ):
            return rejected(service)

        entry = service.get_entry(data.name, data.group)
        return (
            jsonify(
                {
                    "message": "Setting created successfully",
                    "setting": entry.to_dict() if entry else None,
                }
            ),
            201,
        )

    except ValidationError as e:
        return invalid(e)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        db.session.rollback()
        return jsonify({"error": str(e)}), 500


@api_bp.route("/settings/<name>", methods=["PUT"])
def update_setting(name: str):
    """Change a setting value, creating the setting when it is missing."""
    try:
        data = SettingUpdate(**get_payload())
        service = get_setting_service()

        if not service.set(name, data.value, data.group):
            return rejected(service)

        return (
            jsonify(
                {
                    "message": "Setting saved successfully",
                    "name": name,
                    "group": data.group,
                    "value": service.get(name, data.group),
                }
            ),
            200,
        )

    except ValidationError as e:
        return invalid(e)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        db.session.rollback()
        return jsonify({"error": str(e)}), 500


@api_bp.route("/settings/<name>/rename", methods=["POST"])
def rename_setting(name: str):
    """Move a setting to a new name and optionally a new group."""
    try:
        data = SettingRename(**get_payload())
        service = get_setting_service()

        if not service.has(name, data.group):
            return not_found(name, data.group)
        if not service.rename(name, data.group, data.new_name, data.new_group):
            return rejected(service)

        new_group = data.group if data.new_group is None else data.new_group
        return (
            jsonify(
                {
                    "message": "Setting renamed successfully",
                    "name": data.new_name,
                    "group": new_group,
                }
            ),
            200,
        )

    except ValidationError as e:
        return invalid(e)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        db.session.rollback()
        return jsonify({"error": str(e)}), 500


@api_bp.route("/settings/<name>/reset", methods=["POST"])
def reset_setting(name: str):
    """Replace the baseline fields of a setting."""
    try:
        data = SettingReset(**get_payload())
        service = get_setting_service()

        if not service.has(name, data.group):
            return not_found(name, data.group)
        if not service.reset(
            name,
            data.group,
            data.default_value,
            definition=data.definition,
            sort_order=data.sort_order,
            autoload=data.autoload,
        ):
            return rejected(service)

        entry = service.get_entry(name, data.group)
        return (
            jsonify(
                {
                    "message": "Setting reset successfully",
                    "setting": entry.to_dict() if entry else None,
                }
            ),
            200,
        )

    except ValidationError as e:
        return invalid(e)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        db.session.rollback()
        return jsonify({"error": str(e)}), 500


@api_bp.route("/settings/<name>", methods=["DELETE"])
def delete_setting(name: str):
    """Delete a setting."""
    group = get_group()
    try:
        if not get_setting_service().remove(name, group):
            return not_found(name, group)
        return jsonify({"message": "Setting deleted successfully"}), 200
    except Exception as e:
        db.session.rollback()
        return jsonify({"error": str(e)}), 500
