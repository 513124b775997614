"""Exception hierarchy for handlefs file and directory handles."""

from __future__ import annotations


class HandleFSError(Exception):
    """Base exception for all handlefs errors."""


class InvalidArgumentError(HandleFSError, ValueError):
    """Raised on malformed or disallowed input, before any I/O."""


class InvalidPathError(InvalidArgumentError):
    """Raised when a path cannot back the requested handle type."""


class PathNotFoundError(HandleFSError):
    """Raised when a file or directory path does not exist."""


class PathExistsError(HandleFSError):
    """Raised when creating a file whose path is already taken."""


class StorageError(HandleFSError):
    """Raised on any other disk I/O failure.

    The originating ``OSError`` is chained as ``__cause__`` and also kept on
    ``cause`` for callers that log it.
    """

    def __init__(self, message: str, cause: OSError | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class ConsistencyError(HandleFSError):
    """Raised when a handle's invariants were broken after construction."""
