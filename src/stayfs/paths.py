"""Path helpers for the flat entry store.

Paths are plain strings, never filesystem paths. Normalization is purely
syntactic: a leading separator is ensured and runs of separators collapse
to one. ``.`` and ``..`` segments are kept as-is.
"""

from __future__ import annotations

import re

__all__ = [
    "ROOT",
    "ROOT_NAME",
    "SEPARATOR",
    "as_directory",
    "as_file",
    "base_name",
    "dirname",
    "is_directory_path",
    "normalize_path",
    "parent_dir",
]

SEPARATOR = "/"
ROOT = SEPARATOR

# Name recorded for the root directory entry
ROOT_NAME = "root"

_SEPARATOR_RUN = re.compile(r"/+")


def normalize_path(path: str) -> str:
    """Return the canonical form of a path.

    Args:
        path: Any path string, relative or absolute.

    Returns:
        The path with a single leading separator and no repeated separators.
    """
    if not path.startswith(SEPARATOR):
        path = SEPARATOR + path
    return _SEPARATOR_RUN.sub(SEPARATOR, path)


def dirname(path: str) -> str:
    """Return everything before the last separator, or the root."""
    collapsed = _SEPARATOR_RUN.sub(SEPARATOR, path)
    return collapsed[: collapsed.rfind(SEPARATOR)] or ROOT


def parent_dir(path: str) -> str:
    """Return the canonical directory that contains ``path``.

    The result always ends with a separator. A trailing separator on
    ``path`` itself is ignored, so a directory is listed under its parent
    rather than under itself. The root is its own parent.

    Args:
        path: Any path string.

    Returns:
        Containing directory, e.g. ``/a/`` for both ``/a/b.txt`` and ``/a/b/``.
    """
    path = normalize_path(path)
    if path != ROOT and path.endswith(SEPARATOR):
        path = path[:-1]
    parent = dirname(path)
    return parent if parent.endswith(SEPARATOR) else parent + SEPARATOR


def base_name(path: str) -> str:
    """Return the last non-empty segment, or ``"root"`` for the root."""
    segments = [s for s in normalize_path(path).split(SEPARATOR) if s]
    return segments[-1] if segments else ROOT_NAME


def is_directory_path(path: str) -> bool:
    """Check whether a path denotes a directory (trailing separator)."""
    return normalize_path(path).endswith(SEPARATOR)


def as_directory(path: str) -> str:
    """Normalize a path and force a trailing separator."""
    path = normalize_path(path)
    return path if path.endswith(SEPARATOR) else path + SEPARATOR


def as_file(path: str) -> str:
    """Normalize a path and drop a trailing separator; the root stays ``/``."""
    path = normalize_path(path)
    return path.rstrip(SEPARATOR) or ROOT
