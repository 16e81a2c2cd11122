"""Configuration for the entry store."""

from __future__ import annotations

import os
import re
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

# Default data location
DATA_DIR = Path.home() / ".stayfs"

# Environment variable overriding the database location
DB_PATH_ENV = "STAYFS_DB_PATH"

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class StayConfig(BaseModel):
    """Settings for the SQLite-backed store.

    Attributes:
        db_path: Database file. ``:memory:`` keeps everything in process.
        table_name: Table holding the entries.
        busy_timeout_ms: How long SQLite waits on a locked database.
    """

    db_path: Path = Field(default_factory=lambda: DATA_DIR / "stayfs.db")
    table_name: str = "files"
    busy_timeout_ms: int = Field(default=5000, ge=0)

    @field_validator("table_name")
    @classmethod
    def check_table_name(cls, value: str) -> str:
        if not _IDENTIFIER.match(value):
            raise ValueError(f"Invalid table name: {value!r}")
        return value

    @property
    def in_memory(self) -> bool:
        """True when the database lives only in process memory."""
        return str(self.db_path) == ":memory:"

    @classmethod
    def from_env(cls) -> StayConfig:
        """Build a config, honouring ``STAYFS_DB_PATH`` when set.

        Returns:
            StayConfig with the environment override applied.
        """
        db_path = os.environ.get(DB_PATH_ENV)
        if db_path:
            return cls(db_path=Path(db_path).expanduser())
        return cls()
