"""Hierarchical filesystem over a flat entry store.

``StayFS`` maps a directory tree onto an ``EntryStore``: every entry is one
record keyed by its canonical path, and directory listings scan the
secondary index on the parent directory. Deleting a directory marker does
not touch its children.

Composite operations (copy, move, rename, append, line helpers) run their
steps strictly in sequence. Each step commits on its own, so a failure
partway leaves whatever the finished steps wrote. A move whose delete step
fails raises ``PartialCompletionError``; nothing is rolled back.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path

from stayfs.config import StayConfig
from stayfs.errors import NotFoundError, PartialCompletionError, StayError, StoreFaultError
from stayfs.models import Entry, EntryStat
from stayfs.paths import ROOT, as_directory, as_file, normalize_path
from stayfs.protocols import EntryStore

logger = logging.getLogger(__name__)

LINE_SEPARATOR = "\n"


@contextmanager
def _store_fault(operation: str, *paths: str) -> Iterator[None]:
    """Wrap store exceptions in ``StoreFaultError``; pass ``StayError`` through."""
    try:
        yield
    except StayError:
        raise
    except Exception as e:
        raise StoreFaultError(operation, paths, e) from e


class StayFS:
    """Filesystem operations over an ``EntryStore``.

    The store is opened lazily on first use. Concurrent first callers all
    wait on the same open; later calls reuse the open store.

    Follows Separate Use from Creation: the constructor takes a ready store.
    Use ``create()``, ``create_default()`` or ``create_in_memory()`` for
    production instantiation.
    """

    def __init__(self, store: EntryStore) -> None:
        """Initialize the filesystem.

        Args:
            store: Entry store backing this filesystem (required).
        """
        self.store = store
        self._opened = False
        self._init_lock = asyncio.Lock()

    @classmethod
    def create(cls, db_path: Path | str) -> StayFS:
        """Create a filesystem backed by the SQLite database at ``db_path``."""
        from stayfs.store import SQLiteEntryStore

        return cls(SQLiteEntryStore(StayConfig(db_path=Path(db_path))))

    @classmethod
    def create_default(cls) -> StayFS:
        """Create a filesystem using ``StayConfig.from_env()``.

        Returns:
            StayFS on ``$STAYFS_DB_PATH`` or ``~/.stayfs/stayfs.db``.
        """
        from stayfs.store import SQLiteEntryStore

        return cls(SQLiteEntryStore(StayConfig.from_env()))

    @classmethod
    def create_in_memory(cls) -> StayFS:
        """Create a filesystem that keeps entries in process memory."""
        from stayfs.memory import MemoryEntryStore

        return cls(MemoryEntryStore())

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def _ensure_open(self, operation: str = "open", *paths: str) -> None:
        """Open the store once; a failed open is retried by the next caller.

        Open faults are tagged with the calling operation and its paths.
        """
        if self._opened:
            return
        async with self._init_lock:
            if self._opened:
                return
            with _store_fault(operation, *paths):
                await self.store.open()
            self._opened = True

    async def init(self) -> None:
        """Open the store eagerly instead of on first use."""
        await self._ensure_open()

    open = init

    async def close(self) -> None:
        """Close the store. The next operation reopens it."""
        async with self._init_lock:
            if not self._opened:
                return
            with _store_fault("close"):
                await self.store.close()
            self._opened = False

    # ------------------------------------------------------------------
    # Primitive steps
    # ------------------------------------------------------------------

    async def _get(self, path: str, operation: str) -> Entry | None:
        await self._ensure_open(operation, path)
        with _store_fault(operation, path):
            return await self.store.get(path)

    async def _read(self, path: str, operation: str) -> str:
        path = normalize_path(path)
        entry = await self._get(path, operation)
        if entry is None:
            raise NotFoundError(path, operation)
        return entry.content

    async def _write(self, path: str, content: str, operation: str) -> None:
        path = as_file(path)
        previous = await self._get(path, operation)
        entry = Entry.for_file(
            path, content, created_at=previous.created_at if previous else None
        )
        with _store_fault(operation, path):
            await self.store.put(entry)
        logger.debug("Saved: %s", path)

    async def _remove(self, path: str, operation: str) -> None:
        path = normalize_path(path)
        await self._ensure_open(operation, path)
        with _store_fault(operation, path):
            await self.store.delete(path)
        logger.debug("Deleted: %s", path)

    async def _stat(self, path: str, operation: str) -> EntryStat:
        path = normalize_path(path)
        entry = await self._get(path, operation)
        if entry is None:
            raise NotFoundError(path, operation)
        return entry.to_stat()

    async def _list_all(self, operation: str) -> list[EntryStat]:
        await self._ensure_open(operation)
        with _store_fault(operation):
            entries = await self.store.scan_all()
        return [entry.to_stat() for entry in entries]

    async def _move(self, source: str, destination: str, operation: str) -> None:
        source = normalize_path(source)
        destination = as_file(destination)
        content = await self._read(source, operation)
        if source == destination:
            return
        await self._write(destination, content, operation)
        try:
            await self._remove(source, operation)
        except StayError as e:
            logger.warning(
                "%s left %s in place after copying it to %s", operation, source, destination
            )
            raise PartialCompletionError(source, destination, operation) from e

    # ------------------------------------------------------------------
    # Entry operations
    # ------------------------------------------------------------------

    async def write(self, path: str, content: str) -> None:
        """Write a file, replacing any record at the same path.

        ``created_at`` is carried over from the replaced record.

        Args:
            path: Target path; normalized before use. A trailing separator
                is dropped, so a file never replaces a directory marker.
            content: Text payload, empty allowed.

        Raises:
            StoreFaultError: If the store fails.
        """
        await self._write(path, content, "write")

    async def read(self, path: str) -> str:
        """Read a file's content.

        Args:
            path: Path to read.

        Returns:
            Stored content.

        Raises:
            NotFoundError: If nothing is stored at ``path``.
            StoreFaultError: If the store fails.
        """
        return await self._read(path, "read")

    async def remove(self, path: str) -> None:
        """Delete the record at exactly ``path``.

        Missing records are not an error, and children of a directory
        marker are left untouched.

        Raises:
            StoreFaultError: If the store fails.
        """
        await self._remove(path, "remove")

    async def mkdir(self, path: str) -> None:
        """Create a directory marker; the path gains a trailing separator.

        Raises:
            StoreFaultError: If the store fails.
        """
        path = as_directory(path)
        previous = await self._get(path, "mkdir")
        entry = Entry.for_directory(path, created_at=previous.created_at if previous else None)
        with _store_fault("mkdir", path):
            await self.store.put(entry)
        logger.debug("Created directory: %s", path)

    async def exists(self, path: str) -> bool:
        """Check whether a record exists at ``path``.

        Never raises: any store failure reads as False.
        """
        try:
            return await self._get(normalize_path(path), "exists") is not None
        except Exception as e:
            logger.debug("exists(%s) treated as False: %s", path, e)
            return False

    async def stat(self, path: str) -> EntryStat:
        """Get metadata for the entry at ``path``.

        Raises:
            NotFoundError: If nothing is stored at ``path``.
            StoreFaultError: If the store fails.
        """
        return await self._stat(path, "stat")

    async def list_directory(self, dir_path: str = ROOT) -> list[EntryStat]:
        """List entries directly inside a directory.

        Args:
            dir_path: Directory to list; a trailing separator is added.

        Returns:
            Metadata of entries whose parent directory is exactly
            ``dir_path``, ordered by path. Deeper descendants are excluded.

        Raises:
            StoreFaultError: If the store fails.
        """
        dir_path = as_directory(dir_path)
        await self._ensure_open("list_directory", dir_path)
        with _store_fault("list_directory", dir_path):
            entries = await self.store.scan_by_index(dir_path)
        return [entry.to_stat() for entry in entries]

    async def list_all(self) -> list[EntryStat]:
        """List metadata for every stored entry, ordered by path."""
        return await self._list_all("list_all")

    async def clear(self) -> None:
        """Delete every entry. Irreversible."""
        await self._ensure_open("clear")
        with _store_fault("clear"):
            await self.store.clear()
        logger.debug("Cleared all files")

    # ------------------------------------------------------------------
    # Composite operations
    # ------------------------------------------------------------------

    async def copy(self, source: str, destination: str) -> None:
        """Copy a file's content to another path.

        Raises:
            NotFoundError: If ``source`` does not exist; ``destination`` is
                left untouched.
            StoreFaultError: If the store fails.
        """
        content = await self._read(source, "copy")
        await self._write(destination, content, "copy")
        logger.debug("Copied: %s -> %s", source, destination)

    async def move(self, source: str, destination: str) -> None:
        """Copy ``source`` to ``destination`` then delete ``source``.

        Raises:
            NotFoundError: If ``source`` does not exist; nothing changes.
            StoreFaultError: If the copy fails; ``source`` is intact.
            PartialCompletionError: If the copy succeeded but deleting
                ``source`` failed; both paths now hold the content.
        """
        await self._move(source, destination, "move")
        logger.debug("Moved: %s -> %s", source, destination)

    async def rename(self, old_path: str, new_path: str) -> None:
        """Rename a file. Same steps and failure modes as ``move``."""
        await self._move(old_path, new_path, "rename")
        logger.debug("Renamed: %s -> %s", old_path, new_path)

    async def append(self, path: str, content: str) -> None:
        """Append text to a file, creating it if missing.

        This is a read followed by a write with no lock in between; two
        concurrent appends to one path can lose an update.

        Raises:
            StoreFaultError: If the store fails.
        """
        existing = ""
        if await self.exists(path):
            existing = await self._read(path, "append")
        await self._write(path, existing + content, "append")
        logger.debug("Appended to: %s", normalize_path(path))

    async def read_lines(self, path: str) -> list[str]:
        """Read a file split on newlines."""
        content = await self._read(path, "read_lines")
        return content.split(LINE_SEPARATOR)

    async def write_lines(self, path: str, lines: str | Sequence[str]) -> None:
        """Write lines joined with newlines.

        Args:
            path: Target path.
            lines: A sequence of lines, or a string written verbatim.
        """
        content = lines if isinstance(lines, str) else LINE_SEPARATOR.join(lines)
        await self._write(path, content, "write_lines")

    async def file_size(self, path: str) -> int:
        """Return the stored size of the entry at ``path``.

        Raises:
            NotFoundError: If nothing is stored at ``path``.
        """
        return (await self._stat(path, "file_size")).size

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def search(self, query: str) -> list[EntryStat]:
        """Find entries whose name or path contains ``query``.

        Matching is case-insensitive substring matching over a full scan;
        results keep scan order.
        """
        needle = query.lower()
        return [
            stat
            for stat in await self._list_all("search")
            if needle in stat.name.lower() or needle in stat.path.lower()
        ]

    # Short aliases
    save = write
    load = read
    delete = remove
    list = list_directory
