"""Path coercion, timestamp conversion, open-option filtering, OS-error translation."""

from __future__ import annotations

import os
from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path
from typing import Any
from urllib.parse import urlsplit
from urllib.request import url2pathname

from .exceptions import (
    HandleFSError,
    InvalidArgumentError,
    InvalidPathError,
    PathExistsError,
    PathNotFoundError,
    StorageError,
)
from .types import OpenOption

# Options a File writer never forwards: the file already exists.
IGNORED_WRITER_OPTIONS = frozenset({OpenOption.CREATE, OpenOption.CREATE_NEW})

# Used when the caller leaves the writer options empty.
DEFAULT_WRITER_OPTIONS = frozenset({OpenOption.TRUNCATE_EXISTING})

ZERO_ELEMENT_MESSAGE = "Zero element paths are not allowed: the path must have a file name."


# =============================================================================
# Path Coercion
# =============================================================================


def coerce_path(value: Any, what: str = "path") -> Path:
    """Turn a ``str`` or ``os.PathLike`` into a ``Path``.

    Raises InvalidPathError for ``None`` and for anything ``os.fspath``
    cannot convert.
    """
    if value is None:
        raise InvalidPathError(f"{what} must not be None")
    if isinstance(value, Path):
        return value
    try:
        raw = os.fspath(value)
    except TypeError:
        raise InvalidPathError(
            f"{what} must be a str or os.PathLike, got {type(value).__name__}"
        ) from None
    return Path(os.fsdecode(raw))


def path_from_uri(uri: str) -> Path:
    """Convert a ``file:`` URI to a local ``Path``.

    Examples:
        path_from_uri("file:///tmp/a.txt") -> Path("/tmp/a.txt")
        path_from_uri("file://localhost/tmp/a%20b") -> Path("/tmp/a b")
    """
    if uri is None:
        raise InvalidPathError("uri must not be None")
    if not isinstance(uri, str):
        raise InvalidPathError(f"uri must be a str, got {type(uri).__name__}")

    parts = urlsplit(uri)
    if parts.scheme.lower() != "file":
        raise InvalidPathError(f"URI scheme is not 'file': {uri}")
    if parts.netloc not in ("", "localhost"):
        raise InvalidPathError(f"URI has a non-local authority component: {uri}")
    if parts.query or parts.fragment:
        raise InvalidPathError(f"URI has a query or fragment component: {uri}")
    if not parts.path:
        raise InvalidPathError(f"URI path component is empty: {uri}")

    return Path(url2pathname(parts.path))


def path_from_segments(first: str, more: Iterable[str]) -> Path:
    """Join string segments into a ``Path``, rejecting non-strings."""
    segments = [first, *more]
    for segment in segments:
        if segment is None:
            raise InvalidPathError("path segments must not be None")
        if not isinstance(segment, str):
            raise InvalidPathError(
                f"path segments must be str, got {type(segment).__name__}"
            )
    return Path(*segments)


def is_zero_element(path: Path) -> bool:
    """True when *path* has no final component (``/``, ``.``, empty)."""
    return path.name == ""


# =============================================================================
# Timestamps
# =============================================================================


def instant_from_file_time(seconds: float | None) -> datetime | None:
    """Convert a platform file time to an aware UTC datetime.

    ``None`` (unavailable), the epoch sentinel and times datetime cannot
    represent all map to ``None``.
    """
    if seconds is None or seconds == 0:
        return None
    try:
        return datetime.fromtimestamp(seconds, tz=UTC)
    except (ValueError, OverflowError, OSError):
        # Outside the range datetime can represent.
        return None


def creation_time(st: os.stat_result) -> float | None:
    """Return the creation time from *st*, or ``None`` if the platform has none.

    ``st_ctime`` is the creation time only on Windows; elsewhere it is the
    inode change time and is not used.
    """
    birthtime = getattr(st, "st_birthtime", None)
    if birthtime is not None:
        return birthtime
    if os.name == "nt":
        return st.st_ctime
    return None


# =============================================================================
# Open Options
# =============================================================================


def split_writer_options(
    options: Iterable[OpenOption],
) -> tuple[frozenset[OpenOption], frozenset[OpenOption]]:
    """Return ``(forwarded, ignored)`` for a writer's options.

    ``ignored`` is the intersection with IGNORED_WRITER_OPTIONS; ``forwarded``
    is the set difference, so running the result through again changes nothing.
    """
    try:
        requested = frozenset(OpenOption(option) for option in options)
    except ValueError as e:
        raise InvalidArgumentError(str(e)) from None
    return requested - IGNORED_WRITER_OPTIONS, requested & IGNORED_WRITER_OPTIONS


def writer_flags(options: frozenset[OpenOption]) -> int:
    """Map writer options to ``os.open`` flags. ``O_WRONLY`` is always set."""
    if OpenOption.READ in options:
        raise InvalidArgumentError("READ is not a valid option for a writer")
    if OpenOption.APPEND in options and OpenOption.TRUNCATE_EXISTING in options:
        raise InvalidArgumentError("APPEND and TRUNCATE_EXISTING cannot be combined")

    if not options:
        options = DEFAULT_WRITER_OPTIONS

    flags = os.O_WRONLY | getattr(os, "O_BINARY", 0)
    if OpenOption.APPEND in options:
        flags |= os.O_APPEND
    if OpenOption.TRUNCATE_EXISTING in options:
        flags |= os.O_TRUNC
    if OpenOption.SYNC in options:
        flags |= getattr(os, "O_SYNC", 0)
    if OpenOption.DSYNC in options:
        flags |= getattr(os, "O_DSYNC", getattr(os, "O_SYNC", 0))
    return flags


# =============================================================================
# Error Translation
# =============================================================================


def translate_os_error(error: OSError, path: Path | str) -> HandleFSError:
    """Map an ``OSError`` onto the handlefs error taxonomy.

    Callers raise the result ``from error`` so the cause stays attached.
    """
    if isinstance(error, FileNotFoundError):
        return PathNotFoundError(f"Path does not exist: {path}")
    if isinstance(error, FileExistsError):
        return PathExistsError(f"Path already exists: {path}")
    reason = error.strerror or str(error)
    return StorageError(f"I/O error on {path}: {reason}", cause=error)
