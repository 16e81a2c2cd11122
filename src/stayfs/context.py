"""Process-wide filesystem instance.

Most callers want one shared filesystem for the whole process. The first
``get_filesystem()`` call builds it from ``StayConfig.from_env()``; the
store itself opens lazily on first use and stays open for the life of the
process.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from stayfs.filesystem import StayFS

_shared: StayFS | None = None


def get_filesystem() -> StayFS:
    """Return the shared filesystem, creating it on first call.

    Returns:
        The process-wide StayFS.
    """
    global _shared
    if _shared is None:
        from stayfs.filesystem import StayFS

        _shared = StayFS.create_default()
    return _shared


def set_filesystem(fs: StayFS | None) -> None:
    """Replace the shared filesystem.

    Args:
        fs: Filesystem to share, or None to rebuild on the next
            ``get_filesystem()`` call.
    """
    global _shared
    _shared = fs
