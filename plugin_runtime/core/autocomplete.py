from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Sequence

from .registry import AutocompleteSet, Registry


@dataclass
class _Cursor:
    search: Optional[str] = None
    last_index: int = -1
    last_result: Optional[str] = None


def _next_match(items: Sequence[str], prefix: str, after: int) -> int:
    n = len(items)
    for step in range(1, n + 1):
        i = (after + step) % n
        if items[i].startswith(prefix):
            return i
    return -1


class AutocompleteBinder:
    """Rotating prefix completion over the candidate sets held by the registry.

    Each key keeps a cursor. Calling ``complete`` again with the same prefix
    moves to the next match in registration order and wraps around; any
    other prefix starts over. ``complete_line`` also keeps rotating when the
    line still holds the candidate it just inserted.
    """

    def __init__(self, registry: Registry):
        self.registry = registry
        self._cursors: Dict[str, _Cursor] = {}

    def register(self, key: str, items: Iterable[str], plugin: str = "") -> AutocompleteSet:
        entry = self.registry.register_autocomplete(key, items, plugin)
        self._cursors.pop(key, None)
        return entry

    def complete(self, key: str, prefix: str) -> Optional[str]:
        entry = self.registry.autocomplete(key)
        if entry is None or not entry.items:
            return None
        cursor = self._cursors.setdefault(key, _Cursor())
        if cursor.search != prefix:
            cursor.search = prefix
            cursor.last_index = -1
            cursor.last_result = None
        idx = _next_match(entry.items, cursor.search, cursor.last_index)
        if idx < 0:
            return None
        cursor.last_index = idx
        cursor.last_result = entry.items[idx]
        return cursor.last_result

    def complete_line(self, line: str) -> Optional[str]:
        # longest key wins when keys share a prefix ("/plugin" vs "/plugin set")
        for key in sorted(self.registry.autocomplete_keys(), key=len, reverse=True):
            head = f"{key} "
            if line.startswith(head):
                rest = line[len(head):]
                cursor = self._cursors.get(key)
                if cursor is not None and cursor.last_result is not None and rest == cursor.last_result:
                    rest = cursor.search
                found = self.complete(key, rest)
                if found is not None:
                    return head + found
        return None

    def reset(self, key: Optional[str] = None) -> None:
        if key is None:
            self._cursors.clear()
        else:
            self._cursors.pop(key, None)

    def forget(self, key: str) -> None:
        self.registry.remove_autocomplete(key)
        self._cursors.pop(key, None)
