"""File and FileBuilder: handles to paths validated as existing non-directories.

A ``File`` is only obtained through ``FileBuilder``: at return time the path
existed, was not a directory and had a file name. Every operation except
``name`` and ``path`` re-checks existence first and raises
PathNotFoundError if the path has gone away since.
"""

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path
from typing import TYPE_CHECKING, final

from .exceptions import (
    ConsistencyError,
    InvalidArgumentError,
    InvalidPathError,
    PathNotFoundError,
    StorageError,
)
from .hashing import DEFAULT_CHUNK_SIZE, hash_stream, hmac_stream
from .metadata import FileMetadata
from .types import Intent, OpenOption
from .utils import (
    ZERO_ELEMENT_MESSAGE,
    coerce_path,
    is_zero_element,
    path_from_segments,
    path_from_uri,
    split_writer_options,
    translate_os_error,
    writer_flags,
)

if TYPE_CHECKING:
    from typing import BinaryIO

    from .types import Digest, Hmac

logger = logging.getLogger(__name__)

# Permission bits for newly created files, before the umask is applied.
DEFAULT_CREATE_MODE = 0o666


def _exists(path: Path) -> bool:
    try:
        return path.exists()
    except OSError as e:
        raise translate_os_error(e, path) from e


def _create_file(path: Path, mode: int) -> None:
    """Create an empty regular file, failing if anything is already there."""
    flags = os.O_WRONLY | os.O_CREAT | os.O_EXCL | getattr(os, "O_BINARY", 0)
    try:
        fd = os.open(path, flags, mode)
    except FileNotFoundError as e:
        raise StorageError(
            f"Cannot create {path}: parent directory does not exist", cause=e
        ) from e
    except OSError as e:
        raise translate_os_error(e, path) from e
    os.close(fd)


def _check_and_build(path: Path) -> File:
    if not _exists(path):
        raise PathNotFoundError(f"Path does not exist: {path}")
    if path.is_dir():
        raise InvalidPathError(
            f"A File cannot be a directory, use Directory instead: {path}"
        )
    return File(path)


# =============================================================================
# File
# =============================================================================


@final
class File:
    """An existing non-directory file.

    Holds nothing but its path; no attributes are cached. Instances come
    from ``FileBuilder``.
    """

    __slots__ = ("_path",)

    def __init__(self, path: Path) -> None:
        self._path = path

    def _require_exists(self) -> None:
        if not _exists(self._path):
            raise PathNotFoundError(f"File does not exist anymore: {self._path}")

    # -------------------------------------------------------------------------
    # Identity
    # -------------------------------------------------------------------------

    @property
    def path(self) -> Path:
        return self._path

    @property
    def name(self) -> str:
        """Final path component, e.g. ``file.txt`` for ``home/Downloads/file.txt``."""
        name = self._path.name
        if not name:
            raise ConsistencyError(f"File path has no file name: {self._path}")
        return name

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, File):
            return NotImplemented
        return self._path == other._path

    def __hash__(self) -> int:
        return hash((File, self._path))

    def __repr__(self) -> str:
        return f"File({str(self._path)!r})"

    # -------------------------------------------------------------------------
    # Streams
    # -------------------------------------------------------------------------

    def writer(self, *options: OpenOption) -> BinaryIO:
        """Open a binary writer on this file.

        ``CREATE`` and ``CREATE_NEW`` are dropped (with a debug record each)
        since the file already exists. With no options left, the file is
        truncated. The caller owns and closes the returned stream.
        """
        self._require_exists()
        forwarded, ignored = split_writer_options(options)
        for option in sorted(ignored, key=lambda o: o.value):
            logger.debug(
                "Ignoring %s open option for %s: a File always already exists",
                option.name,
                self._path,
            )
        flags = writer_flags(forwarded)
        try:
            fd = os.open(self._path, flags)
        except OSError as e:
            raise translate_os_error(e, self._path) from e
        try:
            return os.fdopen(fd, "ab" if OpenOption.APPEND in forwarded else "wb")
        except BaseException:
            os.close(fd)
            raise

    def reader(self) -> BinaryIO:
        """Open a binary reader on this file. The caller closes it."""
        self._require_exists()
        try:
            return self._path.open("rb")
        except OSError as e:
            raise translate_os_error(e, self._path) from e

    # -------------------------------------------------------------------------
    # Attributes
    # -------------------------------------------------------------------------

    def size(self) -> int:
        """Size in bytes of a regular file, ``-1`` for any other kind of entry."""
        self._require_exists()
        try:
            if not self._path.is_file():
                return -1
            return self._path.stat().st_size
        except OSError as e:
            raise translate_os_error(e, self._path) from e

    def metadata(self) -> FileMetadata:
        """Read attributes without following symlinks."""
        self._require_exists()
        try:
            st = self._path.lstat()
            target = self._path.readlink() if stat.S_ISLNK(st.st_mode) else None
        except OSError as e:
            raise translate_os_error(e, self._path) from e
        return FileMetadata.from_stat(self._path, st, symlink_target=target)

    # -------------------------------------------------------------------------
    # Hashing
    # -------------------------------------------------------------------------

    def hash(self, digest: Digest | str, *, chunk_size: int = DEFAULT_CHUNK_SIZE) -> bytes:
        """Digest of the whole file content."""
        with self.reader() as reader:
            try:
                return hash_stream(reader, digest, chunk_size)
            except OSError as e:
                raise translate_os_error(e, self._path) from e

    def hmac(
        self,
        algorithm: Hmac | str,
        key: bytes,
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> bytes:
        """MAC of the whole file content under *key*."""
        with self.reader() as reader:
            try:
                return hmac_stream(reader, algorithm, key, chunk_size)
            except OSError as e:
                raise translate_os_error(e, self._path) from e

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def atomic_move(self, destination: str | os.PathLike[str]) -> None:
        """Rename this file to *destination*, replacing whatever is there.

        Uses ``os.replace``: atomic on POSIX when both paths share a
        filesystem. A cross-device move raises StorageError. The handle keeps
        its old path, so later operations on it raise PathNotFoundError.
        """
        target = coerce_path(destination, "destination")
        self._require_exists()
        try:
            os.replace(self._path, target)
        except OSError as e:
            raise translate_os_error(e, self._path) from e

    def delete(self) -> None:
        self._require_exists()
        try:
            self._path.unlink()
        except OSError as e:
            raise translate_os_error(e, self._path) from e


# =============================================================================
# FileBuilder
# =============================================================================


@final
class FileBuilder:
    """Carries a path and turns it into a ``File`` for a given ``Intent``.

    Use one of the ``of*`` classmethods, then ``open()``, ``create()`` or
    ``create_if_absent()``.
    """

    __slots__ = ("_path",)

    def __init__(self, path: Path) -> None:
        if path is None:
            raise InvalidPathError("path must not be None")
        if not isinstance(path, Path):
            raise InvalidPathError(
                f"FileBuilder takes a pathlib.Path, got {type(path).__name__}; "
                "use FileBuilder.of() or build_file() for other values"
            )
        self._path = path

    @classmethod
    def of_path(cls, path: Path) -> FileBuilder:
        if path is None:
            raise InvalidPathError("path must not be None")
        if not isinstance(path, Path):
            raise InvalidPathError(
                f"of_path() takes a pathlib.Path, got {type(path).__name__}; "
                "use of() for strings"
            )
        return cls(path)

    @classmethod
    def of_file(cls, file: os.PathLike[str]) -> FileBuilder:
        """Builder for any ``os.PathLike`` value (``os.DirEntry``, third-party paths)."""
        if file is None:
            raise InvalidPathError("file must not be None")
        return cls(coerce_path(file, "file"))

    @classmethod
    def of_uri(cls, uri: str) -> FileBuilder:
        """Builder for a ``file:`` URI."""
        return cls(path_from_uri(uri))

    @classmethod
    def of(cls, first: str, *more: str) -> FileBuilder:
        """Builder for a path string, or segments joined into one."""
        return cls(path_from_segments(first, more))

    @property
    def path(self) -> Path:
        return self._path

    def __repr__(self) -> str:
        return f"FileBuilder({str(self._path)!r})"

    def build(self, intent: Intent, *, mode: int = DEFAULT_CREATE_MODE) -> File:
        """Run *intent* against the path and return the validated ``File``.

        Raises:
            InvalidPathError: the path has no file name, or is a directory.
            PathNotFoundError: the path does not exist (after any creation).
            PathExistsError: ``CREATE`` and the path is already taken.
            StorageError: creation failed for another reason, including a
                missing parent directory.
        """
        try:
            intent = Intent(intent)
        except ValueError:
            raise InvalidArgumentError(f"Unknown intent: {intent!r}") from None

        path = self._path
        if is_zero_element(path):
            raise InvalidPathError(ZERO_ELEMENT_MESSAGE)

        if intent is Intent.CREATE or (
            intent is Intent.CREATE_IF_ABSENT and not _exists(path)
        ):
            _create_file(path, mode)
        return _check_and_build(path)

    def open(self) -> File:
        """Open an existing file."""
        return self.build(Intent.OPEN)

    def create(self, *, mode: int = DEFAULT_CREATE_MODE) -> File:
        """Create a new empty file. Raises PathExistsError if the path is taken."""
        return self.build(Intent.CREATE, mode=mode)

    def create_if_absent(self, *, mode: int = DEFAULT_CREATE_MODE) -> File:
        """Open the file, creating it first if it does not exist."""
        return self.build(Intent.CREATE_IF_ABSENT, mode=mode)


def build_file(source: str | os.PathLike[str], *more: str) -> FileBuilder:
    """Pick the ``FileBuilder`` entry point matching *source*'s type.

    Examples:
        build_file("logs", "app.log") -> FileBuilder.of("logs", "app.log")
        build_file(Path("a.txt")) -> FileBuilder.of_path(Path("a.txt"))
        build_file(entry) -> FileBuilder.of_file(entry)
    """
    if source is None:
        raise InvalidPathError("source must not be None")
    if isinstance(source, str):
        return FileBuilder.of(source, *more)
    if more:
        raise InvalidPathError("Extra path segments require a str first segment")
    if isinstance(source, Path):
        return FileBuilder.of_path(source)
    return FileBuilder.of_file(source)
