"""Stored entry models."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from stayfs.paths import as_directory, as_file, base_name, normalize_path, parent_dir

__all__ = ["Entry", "EntryKind", "EntryStat"]


class EntryKind(str, Enum):
    """Kind of stored entry."""

    FILE = "file"
    DIRECTORY = "directory"


def _now() -> datetime:
    return datetime.now(timezone.utc)


class EntryStat(BaseModel):
    """Metadata for an entry, without its content."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    path: str
    size: int = 0
    kind: EntryKind = Field(default=EntryKind.FILE, alias="type")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    @property
    def is_dir(self) -> bool:
        """True for directory markers."""
        return self.kind is EntryKind.DIRECTORY


class Entry(EntryStat):
    """A stored record: one per canonical path.

    ``name``, ``parent_dir`` and ``size`` are derived from ``path`` and
    ``content``; build entries through ``for_file`` or ``for_directory``.
    """

    parent_dir: str = Field(alias="parentDir")
    content: str = ""

    @model_validator(mode="after")
    def check_derived_fields(self) -> Entry:
        """Validate that derived fields agree with the path."""
        if self.path != normalize_path(self.path):
            raise ValueError(f"path is not canonical: {self.path!r}")
        if self.parent_dir != parent_dir(self.path):
            raise ValueError(
                f"parent_dir {self.parent_dir!r} does not match path {self.path!r}"
            )
        return self

    @classmethod
    def for_file(
        cls, path: str, content: str, created_at: datetime | None = None
    ) -> Entry:
        """Build a file entry.

        Args:
            path: Target path, normalized here; a trailing separator is dropped.
            content: Text payload.
            created_at: Creation time of the record being replaced, if any.

        Returns:
            Entry stamped with the current time as ``updated_at``.
        """
        path = as_file(path)
        now = _now()
        return cls(
            path=path,
            name=base_name(path),
            parent_dir=parent_dir(path),
            content=content,
            size=len(content),
            kind=EntryKind.FILE,
            created_at=created_at or now,
            updated_at=now,
        )

    @classmethod
    def for_directory(cls, path: str, created_at: datetime | None = None) -> Entry:
        """Build a directory marker entry; the path gains a trailing separator."""
        path = as_directory(path)
        now = _now()
        return cls(
            path=path,
            name=base_name(path),
            parent_dir=parent_dir(path),
            content="",
            size=0,
            kind=EntryKind.DIRECTORY,
            created_at=created_at or now,
            updated_at=now,
        )

    def to_stat(self) -> EntryStat:
        """Drop content and parent directory, keeping the metadata."""
        return EntryStat(
            name=self.name,
            path=self.path,
            size=self.size,
            kind=self.kind,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
