"""In-process entry store.

Keeps entries in a dict keyed by path. Useful for tests and for callers
that do not need persistence. Satisfies the ``EntryStore`` protocol.
"""

from __future__ import annotations

from stayfs.models import Entry


class MemoryEntryStore:
    """Dict-backed entry store with the same ordering as the SQLite store."""

    def __init__(self) -> None:
        self._entries: dict[str, Entry] = {}
        self.opened = False

    async def open(self) -> None:
        self.opened = True

    async def close(self) -> None:
        self.opened = False

    async def put(self, entry: Entry) -> None:
        self._entries[entry.path] = entry.model_copy()

    async def get(self, path: str) -> Entry | None:
        entry = self._entries.get(path)
        return entry.model_copy() if entry is not None else None

    async def delete(self, path: str) -> None:
        self._entries.pop(path, None)

    async def scan_by_index(self, parent_dir: str) -> list[Entry]:
        return [
            self._entries[path].model_copy()
            for path in sorted(self._entries)
            if self._entries[path].parent_dir == parent_dir
        ]

    async def scan_all(self) -> list[Entry]:
        return [self._entries[path].model_copy() for path in sorted(self._entries)]

    async def clear(self) -> None:
        self._entries.clear()
