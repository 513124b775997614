"""FileMetadata: immutable snapshot of an entry's kind, timestamps and link target."""

from __future__ import annotations

import stat
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .utils import creation_time, instant_from_file_time

if TYPE_CHECKING:
    import os
    from datetime import datetime
    from pathlib import Path

    from .files import File


@dataclass(frozen=True, slots=True)
class FileMetadata:
    """Attributes read from one ``lstat`` call.

    Attributes:
        path: The inspected entry. Symlinks are not followed.
        is_regular_file: True for a regular file (never for a symlink).
        symlink_target: Raw link target, present iff *path* is a symlink.
        created_at: Creation time, ``None`` where the platform has none.
        last_modified_at: Last content modification time.
        last_accessed_at: Last access time.
    """

    path: Path
    is_regular_file: bool
    symlink_target: Path | None = None
    created_at: datetime | None = None
    last_modified_at: datetime | None = None
    last_accessed_at: datetime | None = None

    @classmethod
    def from_stat(
        cls,
        path: Path,
        st: os.stat_result,
        symlink_target: Path | None = None,
    ) -> FileMetadata:
        """Build a record from an ``lstat`` result."""
        return cls(
            path=path,
            is_regular_file=stat.S_ISREG(st.st_mode),
            symlink_target=symlink_target,
            created_at=instant_from_file_time(creation_time(st)),
            last_modified_at=instant_from_file_time(st.st_mtime),
            last_accessed_at=instant_from_file_time(st.st_atime),
        )

    @property
    def is_symbolic_link(self) -> bool:
        return self.symlink_target is not None

    def get_symlink_target(self) -> File | None:
        """Open the link target as a ``File``, or return ``None`` for non-links.

        A relative target is resolved against the link's parent directory.
        Raises PathNotFoundError if the target no longer exists.
        """
        from .files import FileBuilder

        if self.symlink_target is None:
            return None
        target = self.symlink_target
        if not target.is_absolute():
            target = self.path.parent / target
        return FileBuilder.of_path(target).open()
