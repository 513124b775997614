"""Contract tests for the handlefs public surface and error taxonomy."""

from __future__ import annotations

import re
from pathlib import Path

import pytest

import handlefs
from handlefs import (
    ConsistencyError,
    HandleFSError,
    InvalidArgumentError,
    InvalidPathError,
    PathExistsError,
    PathNotFoundError,
    StorageError,
)


class TestExports:
    def test_all_names_resolve(self):
        for name in handlefs.__all__:
            assert hasattr(handlefs, name), name

    def test_version_matches_pyproject(self):
        pyproject = Path(__file__).resolve().parent.parent / "pyproject.toml"
        if not pyproject.exists():
            pytest.skip("pyproject.toml not available")
        match = re.search(r'^version\s*=\s*"([^"]+)"', pyproject.read_text(), re.MULTILINE)
        assert match is not None
        assert match.group(1) == handlefs.__version__


class TestErrorTaxonomy:
    @pytest.mark.parametrize(
        "error",
        [
            InvalidArgumentError,
            InvalidPathError,
            PathNotFoundError,
            PathExistsError,
            StorageError,
            ConsistencyError,
        ],
    )
    def test_common_base(self, error):
        assert issubclass(error, HandleFSError)

    def test_argument_errors_are_value_errors(self):
        assert issubclass(InvalidArgumentError, ValueError)
        assert issubclass(InvalidPathError, InvalidArgumentError)

    @pytest.mark.parametrize(
        "error", [PathNotFoundError, PathExistsError, StorageError, ConsistencyError]
    )
    def test_failure_kinds_are_distinct(self, error):
        others = {PathNotFoundError, PathExistsError, StorageError, ConsistencyError} - {error}
        assert not any(issubclass(error, other) for other in others)
        assert not issubclass(error, ValueError)
        assert not issubclass(error, OSError)

    def test_storage_error_without_cause(self):
        assert StorageError("x").cause is None
