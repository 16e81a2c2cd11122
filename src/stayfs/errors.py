"""Error types raised by the filesystem operations."""

from __future__ import annotations

__all__ = [
    "NotFoundError",
    "PartialCompletionError",
    "StayError",
    "StoreFaultError",
]


class StayError(Exception):
    """Base error for filesystem operations.

    Attributes:
        operation: Name of the operation that failed (e.g. ``read``, ``move``).
        paths: Path(s) the operation was acting on.
    """

    def __init__(self, message: str, operation: str, paths: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.operation = operation
        self.paths = paths


class NotFoundError(StayError):
    """No entry is stored at the requested path."""

    def __init__(self, path: str, operation: str = "read") -> None:
        super().__init__(f"Failed to {operation} {path}: not found", operation, (path,))
        self.path = path


class StoreFaultError(StayError):
    """The underlying store failed while serving an operation."""

    def __init__(
        self,
        operation: str,
        paths: tuple[str, ...] = (),
        cause: BaseException | None = None,
    ) -> None:
        target = " -> ".join(paths) if paths else "store"
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Failed to {operation} {target}{detail}", operation, paths)
        self.cause = cause


class PartialCompletionError(StayError):
    """A move copied its source but could not delete it.

    Both ``source`` and ``destination`` hold the content afterwards.
    """

    def __init__(self, source: str, destination: str, operation: str = "move") -> None:
        super().__init__(
            f"Failed to {operation} {source} -> {destination}: "
            f"copied to {destination} but {source} was not removed",
            operation,
            (source, destination),
        )
        self.source = source
        self.destination = destination
