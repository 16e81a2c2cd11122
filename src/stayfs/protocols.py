"""Protocol definitions for the store adapter.

The filesystem layer talks to storage only through ``EntryStore``, a flat
asynchronous key-value table keyed by canonical path with one non-unique
secondary index over the parent directory. Any object that satisfies the
protocol structurally can back a ``StayFS``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from stayfs.models import Entry


@runtime_checkable
class EntryStore(Protocol):
    """Protocol for the flat entry store.

    Each call is its own unit of atomicity; there are no transactions that
    span calls. Implementations raise whatever their backend raises and
    leave wrapping to the caller.
    """

    async def open(self) -> None:
        """Open the store, creating the table and index on first use.

        Must be safe to call more than once.
        """
        ...

    async def close(self) -> None:
        """Release the underlying connection, if any."""
        ...

    async def put(self, entry: Entry) -> None:
        """Insert or replace the record at ``entry.path``.

        Args:
            entry: Record to store.
        """
        ...

    async def get(self, path: str) -> Entry | None:
        """Look up a record by exact path.

        Args:
            path: Canonical path.

        Returns:
            The stored entry, or None if absent.
        """
        ...

    async def delete(self, path: str) -> None:
        """Delete the record at ``path``; a missing record is not an error.

        Args:
            path: Canonical path.
        """
        ...

    async def scan_by_index(self, parent_dir: str) -> list[Entry]:
        """Return every record whose parent directory equals ``parent_dir``.

        Args:
            parent_dir: Canonical directory path with trailing separator.

        Returns:
            Matching entries ordered by path.
        """
        ...

    async def scan_all(self) -> list[Entry]:
        """Return every record ordered by path."""
        ...

    async def clear(self) -> None:
        """Delete every record."""
        ...
