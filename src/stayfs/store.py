"""SQLite entry store.

One table keyed by path with a non-unique index on the parent directory.
Satisfies the ``EntryStore`` protocol structurally.
"""

from __future__ import annotations

import logging
from typing import Any

import aiosqlite

from stayfs.config import StayConfig
from stayfs.models import Entry

logger = logging.getLogger(__name__)

_COLUMNS = ("path", "name", "parent_dir", "content", "size", "kind", "created_at", "updated_at")


class SQLiteEntryStore:
    """``aiosqlite``-backed entry store.

    Every mutating call commits before returning, so each call is one
    transaction and nothing spans calls.
    """

    def __init__(self, config: StayConfig | None = None) -> None:
        """Initialize the store.

        Args:
            config: Store settings. Defaults to ``StayConfig()``.

        Note:
            The connection is opened by ``open()``, not here.
        """
        self.config = config or StayConfig()
        self.table = self.config.table_name
        self._conn: aiosqlite.Connection | None = None

    @property
    def is_open(self) -> bool:
        """True once ``open()`` has succeeded and until ``close()``."""
        return self._conn is not None

    async def open(self) -> None:
        """Connect and create the table and index if they do not exist."""
        if self._conn is not None:
            return

        if not self.config.in_memory:
            self.config.db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = await aiosqlite.connect(str(self.config.db_path))
        try:
            conn.row_factory = aiosqlite.Row
            await conn.execute(f"PRAGMA busy_timeout={self.config.busy_timeout_ms}")
            if not self.config.in_memory:
                async with conn.execute("PRAGMA journal_mode=WAL") as cursor:
                    row = await cursor.fetchone()
                if row is None or str(row[0]).lower() != "wal":
                    logger.warning("WAL mode not active, got: %s", row[0] if row else None)
            await conn.execute(
                f"CREATE TABLE IF NOT EXISTS {self.table} ("
                "path TEXT PRIMARY KEY, "
                "name TEXT NOT NULL, "
                "parent_dir TEXT NOT NULL, "
                "content TEXT NOT NULL DEFAULT '', "
                "size INTEGER NOT NULL DEFAULT 0, "
                "kind TEXT NOT NULL DEFAULT 'file', "
                "created_at TEXT NOT NULL, "
                "updated_at TEXT NOT NULL)"
            )
            await conn.execute(
                f"CREATE INDEX IF NOT EXISTS {self.table}_parent_dir "
                f"ON {self.table} (parent_dir)"
            )
            await conn.commit()
        except BaseException:
            await conn.close()
            raise

        self._conn = conn
        logger.debug("Opened entry store at %s", self.config.db_path)

    async def close(self) -> None:
        """Close the connection. Safe to call multiple times."""
        if self._conn is not None:
            await self._conn.close()
            self._conn = None

    def _require_conn(self) -> aiosqlite.Connection:
        if self._conn is None:
            raise RuntimeError("SQLiteEntryStore is not open")
        return self._conn

    @staticmethod
    def _to_row(entry: Entry) -> tuple[Any, ...]:
        return (
            entry.path,
            entry.name,
            entry.parent_dir,
            entry.content,
            entry.size,
            entry.kind.value,
            entry.created_at.isoformat(),
            entry.updated_at.isoformat(),
        )

    @staticmethod
    def _from_row(row: aiosqlite.Row) -> Entry:
        return Entry.model_validate({key: row[key] for key in _COLUMNS})

    async def put(self, entry: Entry) -> None:
        """Insert or replace the record at ``entry.path``."""
        conn = self._require_conn()
        placeholders = ", ".join("?" for _ in _COLUMNS)
        await conn.execute(
            f"INSERT OR REPLACE INTO {self.table} ({', '.join(_COLUMNS)}) "
            f"VALUES ({placeholders})",
            self._to_row(entry),
        )
        await conn.commit()

    async def get(self, path: str) -> Entry | None:
        """Look up a record by exact path."""
        conn = self._require_conn()
        async with conn.execute(
            f"SELECT * FROM {self.table} WHERE path = ?", (path,)
        ) as cursor:
            row = await cursor.fetchone()
        return self._from_row(row) if row is not None else None

    async def delete(self, path: str) -> None:
        """Delete the record at ``path`` if present."""
        conn = self._require_conn()
        await conn.execute(f"DELETE FROM {self.table} WHERE path = ?", (path,))
        await conn.commit()

    async def scan_by_index(self, parent_dir: str) -> list[Entry]:
        """Return records directly under ``parent_dir``, ordered by path."""
        conn = self._require_conn()
        async with conn.execute(
            f"SELECT * FROM {self.table} WHERE parent_dir = ? ORDER BY path",
            (parent_dir,),
        ) as cursor:
            rows = await cursor.fetchall()
        return [self._from_row(row) for row in rows]

    async def scan_all(self) -> list[Entry]:
        """Return all records ordered by path."""
        conn = self._require_conn()
        async with conn.execute(f"SELECT * FROM {self.table} ORDER BY path") as cursor:
            rows = await cursor.fetchall()
        return [self._from_row(row) for row in rows]

    async def clear(self) -> None:
        """Delete every record."""
        conn = self._require_conn()
        await conn.execute(f"DELETE FROM {self.table}")
        await conn.commit()
