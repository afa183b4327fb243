"""Tests for the setting builder."""

from settingstore.builder import SettingBuilder
from settingstore.models import Setting


def test_build_new_applies_defaults():
    entry = SettingBuilder().set_name("title").build_new()

    assert isinstance(entry, Setting)
    assert entry.id is None
    assert entry.name == "title"
    assert entry.group == ""
    assert entry.value is None
    assert entry.default_value == ""
    assert entry.definition is None
    assert entry.sort_order == 50
    assert entry.autoload is False


def test_build_new_uses_set_fields():
    entry = (
        SettingBuilder()
        .set_name("title")
        .set_group("site")
        .set_value("Acme")
        .set_default_value("Untitled")
        .set_definition({"type": "text"})
        .set_sort_order(1)
        .set_autoload(True)
        .build_new()
    )

    assert entry.group == "site"
    assert entry.value == "Acme"
    assert entry.default_value == "Untitled"
    assert entry.definition == {"type": "text"}
    assert entry.sort_order == 1
    assert entry.autoload is True


def test_build_new_keeps_explicit_none():
    entry = (
        SettingBuilder()
        .set_name("n")
        .set_value(None)
        .set_default_value(None)
        .build_new()
    )

    assert entry.value is None
    assert entry.default_value is None
    assert entry.sort_order == 50


def test_apply_to_only_touches_set_fields():
    entry = Setting(
        name="title",
        group="site",
        value="Acme",
        default_value="old",
        definition={"type": "text"},
        sort_order=3,
        autoload=True,
    )

    result = (
        SettingBuilder()
        .set_default_value("new")
        .set_sort_order(9)
        .apply_to(entry)
    )

    assert result is entry
    assert entry.name == "title"
    assert entry.group == "site"
    assert entry.value == "Acme"
    assert entry.default_value == "new"
    assert entry.definition == {"type": "text"}
    assert entry.sort_order == 9
    assert entry.autoload is True


def test_apply_to_writes_explicit_none():
    entry = Setting(name="title", value="Acme", definition={"type": "text"})

    SettingBuilder().set_definition(None).apply_to(entry)

    assert entry.definition is None
    assert entry.value == "Acme"
