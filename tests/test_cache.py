"""Tests for the in-memory setting cache."""

from settingstore.cache import SettingCache
from settingstore.models import Setting


def make_entry(id, name, group="", value="v"):
    return Setting(id=id, name=name, group=group, value=value)


def test_set_get_has():
    cache = SettingCache()
    entry = make_entry(1, "a", "g")

    cache.set(entry)

    assert cache.has("a", "g")
    assert cache.get("a", "g") is entry
    assert not cache.has("a")
    assert cache.get("missing", "g") is None


def test_set_replaces_entry_with_same_key():
    cache = SettingCache()
    cache.set(make_entry(1, "a", "g", "old"))
    cache.set(make_entry(1, "a", "g", "new"))

    assert len(cache) == 1
    assert cache.get("a", "g").value == "new"


def test_set_rekeys_entry_that_changed_name():
    cache = SettingCache()
    entry = make_entry(1, "a", "g")
    cache.set(entry)

    entry.name = "b"
    entry.group = "h"
    cache.set(entry)

    assert not cache.has("a", "g")
    assert cache.get("b", "h") is entry
    assert len(cache) == 1


def test_set_drops_id_of_replaced_entry():
    cache = SettingCache()
    cache.set(make_entry(1, "a", "g"))
    cache.set(make_entry(2, "a", "g"))
    cache.set(make_entry(1, "z", "g"))

    assert cache.has("a", "g")
    assert cache.get("a", "g").id == 2
    assert cache.has("z", "g")


def test_remove():
    cache = SettingCache()
    cache.set(make_entry(1, "a", "g"))

    assert cache.remove("a", "g") is True
    assert cache.remove("a", "g") is False
    assert len(cache) == 0


def test_remove_forgets_id_of_evicted_entry():
    cache = SettingCache()
    cache.set(make_entry(1, "a", "g"))
    cache.remove("a", "g")

    cache.set(make_entry(1, "z", "g"))
    cache.set(make_entry(2, "a", "g"))
    cache.discard(make_entry(1, "z", "g"))

    assert not cache.has("z", "g")
    assert cache.has("a", "g")
    assert len(cache) == 1


def test_discard_follows_id_index():
    cache = SettingCache()
    entry = make_entry(1, "a", "g")
    cache.set(entry)

    entry.name = "renamed"
    cache.discard(entry)

    assert not cache.has("a", "g")
    assert len(cache) == 0


def test_iteration_is_restartable_and_tolerates_mutation():
    cache = SettingCache()
    cache.set(make_entry(1, "a"))
    cache.set(make_entry(2, "b"))

    assert sorted(entry.name for entry in cache) == ["a", "b"]
    assert sorted(entry.name for entry in cache) == ["a", "b"]

    for entry in cache:
        cache.remove(entry.name, entry.group)
    assert len(cache) == 0


def test_all_contains_and_clear():
    cache = SettingCache()
    cache.set(make_entry(1, "a", "g"))
    cache.set(make_entry(2, "b", "g"))

    assert {entry.id for entry in cache.all()} == {1, 2}
    assert ("a", "g") in cache
    assert ("a", "") not in cache

    cache.clear()
    assert cache.all() == []
