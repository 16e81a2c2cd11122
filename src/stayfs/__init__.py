"""Hierarchical virtual filesystem over a flat asynchronous key-value store."""

__version__ = "0.1.0"

from stayfs.context import get_filesystem, set_filesystem
from stayfs.errors import NotFoundError, PartialCompletionError, StayError, StoreFaultError
from stayfs.filesystem import StayFS
from stayfs.models import Entry, EntryKind, EntryStat
from stayfs.protocols import EntryStore

__all__ = [
    "__version__",
    "Entry",
    "EntryKind",
    "EntryStat",
    "EntryStore",
    "NotFoundError",
    "PartialCompletionError",
    "StayError",
    "StayFS",
    "StoreFaultError",
    "get_filesystem",
    "set_filesystem",
]
