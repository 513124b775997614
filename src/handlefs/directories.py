"""Directory: a path that is a directory whenever it exists."""

from __future__ import annotations

from typing import TYPE_CHECKING, final

from .exceptions import InvalidPathError
from .utils import coerce_path, translate_os_error

if TYPE_CHECKING:
    import os
    from pathlib import Path


@final
class Directory:
    """Type-level marker for directory paths.

    The constructor rejects a path that exists and is not a directory. A
    path that does not exist yet is accepted, so the guarantee is "a
    directory if it exists", not "an existing directory".
    """

    __slots__ = ("_path",)

    def __init__(self, path: str | os.PathLike[str]) -> None:
        resolved = coerce_path(path)
        try:
            exists = resolved.exists()
            is_dir = resolved.is_dir()
        except OSError as e:
            raise translate_os_error(e, resolved) from e
        if exists and not is_dir:
            raise InvalidPathError(f"A Directory must be a directory: {resolved}")
        self._path = resolved

    @property
    def path(self) -> Path:
        return self._path

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Directory):
            return NotImplemented
        return self._path == other._path

    def __hash__(self) -> int:
        return hash((Directory, self._path))

    def __repr__(self) -> str:
        return f"Directory({str(self._path)!r})"
