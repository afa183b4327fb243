"""Builder for setting entries."""

from __future__ import annotations

from typing import Any, Dict

from settingstore.models import DEFAULT_GROUP, DEFAULT_SORT_ORDER, Setting

FIELD_DEFAULTS: Dict[str, Any] = {
    "group": DEFAULT_GROUP,
    "default_value": "",
    "definition": None,
    "sort_order": DEFAULT_SORT_ORDER,
    "autoload": False,
}


class SettingBuilder:
    """Collect setting fields and turn them into a new or updated entry.

    Example:
        entry = (
            SettingBuilder()
            .set_name("site_title")
            .set_group("general")
            .set_value("Acme")
            .build_new()
        )
    """

    def __init__(self) -> None:
        self._fields: Dict[str, Any] = {}

    def set_name(self, name: str) -> "SettingBuilder":
        self._fields["name"] = name
        return self

    def set_group(self, group: str) -> "SettingBuilder":
        self._fields["group"] = group
        return self

    def set_value(self, value: Any) -> "SettingBuilder":
        self._fields["value"] = value
        return self

    def set_default_value(self, default_value: Any) -> "SettingBuilder":
        self._fields["default_value"] = default_value
        return self

    def set_definition(self, definition: Any) -> "SettingBuilder":
        self._fields["definition"] = definition
        return self

    def set_sort_order(self, sort_order: int) -> "SettingBuilder":
        self._fields["sort_order"] = sort_order
        return self

    def set_autoload(self, autoload: bool) -> "SettingBuilder":
        self._fields["autoload"] = autoload
        return self

    def build_new(self) -> Setting:
        """Create an unsaved setting, filling fields never set with defaults.

        A field explicitly set to None keeps None.
        """
        data = dict(FIELD_DEFAULTS)
        data.update(self._fields)
        return Setting(**data)

    def apply_to(self, entry: Setting) -> Setting:
        """Copy the fields set on this builder onto an existing setting.

        Fields never set keep their current value.
        """
        for field, value in self._fields.items():
            setattr(entry, field, value)
        return entry
