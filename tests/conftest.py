"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterator
from pathlib import Path

import pytest
import pytest_asyncio

from stayfs import context
from stayfs.config import StayConfig
from stayfs.filesystem import StayFS
from stayfs.memory import MemoryEntryStore
from stayfs.store import SQLiteEntryStore


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Database file inside a temporary directory."""
    return tmp_path / ".stayfs" / "stayfs.db"


@pytest.fixture
def memory_store() -> MemoryEntryStore:
    """Fresh in-process store."""
    return MemoryEntryStore()


@pytest.fixture
def memory_fs(memory_store: MemoryEntryStore) -> StayFS:
    """Filesystem over the in-process store.

    Tests may swap store methods for AsyncMocks to inject faults.
    """
    return StayFS(memory_store)


@pytest_asyncio.fixture
async def sqlite_store(db_path: Path) -> AsyncIterator[SQLiteEntryStore]:
    """Open SQLite store, closed after the test."""
    store = SQLiteEntryStore(StayConfig(db_path=db_path))
    await store.open()
    yield store
    await store.close()


# ============================================================================
# Backend-parametrized Fixtures
# ============================================================================


@pytest_asyncio.fixture(params=["memory", "sqlite"])
async def fs(request: pytest.FixtureRequest, db_path: Path) -> AsyncIterator[StayFS]:
    """Filesystem over each store backend."""
    if request.param == "memory":
        filesystem = StayFS.create_in_memory()
    else:
        filesystem = StayFS.create(db_path)
    yield filesystem
    await filesystem.close()


@pytest_asyncio.fixture(params=["memory", "sqlite"])
async def store(
    request: pytest.FixtureRequest, db_path: Path
) -> AsyncIterator[MemoryEntryStore | SQLiteEntryStore]:
    """Each store backend, opened."""
    backend: MemoryEntryStore | SQLiteEntryStore
    if request.param == "memory":
        backend = MemoryEntryStore()
    else:
        backend = SQLiteEntryStore(StayConfig(db_path=db_path))
    await backend.open()
    yield backend
    await backend.close()


# ============================================================================
# Shared Instance Fixtures
# ============================================================================


@pytest.fixture
def reset_shared_filesystem() -> Iterator[None]:
    """Clear the process-wide filesystem before and after a test."""
    context.set_filesystem(None)
    yield
    context.set_filesystem(None)
