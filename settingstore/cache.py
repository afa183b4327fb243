"""In-memory cache of settings keyed by (name, group)."""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Tuple

from settingstore.models import DEFAULT_GROUP, Setting

CacheKey = Tuple[str, str]


class SettingCache:
    """Lookup table for loaded settings.

    Entries are indexed by their (name, group) key and by id, so a setting that
    was renamed replaces its old key instead of being cached twice.

    Not synchronised: an instance belongs to one service and one request.
    """

    def __init__(self) -> None:
        self._entries: Dict[CacheKey, Setting] = {}
        self._keys_by_id: Dict[int, CacheKey] = {}

    def has(self, name: str, group: str = DEFAULT_GROUP) -> bool:
        return (name, group) in self._entries

    def get(self, name: str, group: str = DEFAULT_GROUP) -> Optional[Setting]:
        return self._entries.get((name, group))

    def set(self, entry: Setting) -> None:
        """Insert or replace a setting."""
        key: CacheKey = (entry.name, entry.group)
        if entry.id is not None:
            previous = self._keys_by_id.get(entry.id)
            if previous is not None and previous != key:
                self._entries.pop(previous, None)
            self._keys_by_id[entry.id] = key

        replaced = self._entries.get(key)
        if replaced is not None and replaced.id is not None and replaced.id != entry.id:
            self._keys_by_id.pop(replaced.id, None)
        self._entries[key] = entry

    def remove(self, name: str, group: str = DEFAULT_GROUP) -> bool:
        """Evict a key. Returns False when it was not cached."""
        key: CacheKey = (name, group)
        entry = self._entries.pop(key, None)
        if entry is None:
            return False
        if entry.id is not None and self._keys_by_id.get(entry.id) == key:
            del self._keys_by_id[entry.id]
        return True

    def discard(self, entry: Setting) -> None:
        """Evict a setting wherever it is cached, following its id."""
        key = self._keys_by_id.get(entry.id) if entry.id is not None else None
        self.remove(*(key or (entry.name, entry.group)))

    def clear(self) -> None:
        self._entries.clear()
        self._keys_by_id.clear()

    def all(self) -> List[Setting]:
        return list(self._entries.values())

    def __iter__(self) -> Iterator[Setting]:
        # Snapshot, so callers may mutate the cache while iterating
        return iter(self.all())

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries
