"""handlefs: validated File and Directory handles over the local filesystem.

A ``File`` is known to exist and not be a directory when it is handed out;
each operation re-checks before touching the disk.
"""

__version__ = "0.1.0"

from handlefs.directories import Directory
from handlefs.exceptions import (
    ConsistencyError,
    HandleFSError,
    InvalidArgumentError,
    InvalidPathError,
    PathExistsError,
    PathNotFoundError,
    StorageError,
)
from handlefs.files import File, FileBuilder, build_file
from handlefs.metadata import FileMetadata
from handlefs.types import Digest, Hmac, Intent, OpenOption

__all__ = [
    "ConsistencyError",
    "Digest",
    "Directory",
    "File",
    "FileBuilder",
    "FileMetadata",
    "HandleFSError",
    "Hmac",
    "Intent",
    "InvalidArgumentError",
    "InvalidPathError",
    "OpenOption",
    "PathExistsError",
    "PathNotFoundError",
    "StorageError",
    "__version__",
    "build_file",
]
