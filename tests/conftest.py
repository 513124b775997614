"""Shared fixtures for handlefs tests."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

from handlefs import File, FileBuilder

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def hello_path(tmp_path: Path) -> Path:
    """A regular file containing ``b"hello"``."""
    path = tmp_path / "f"
    path.write_bytes(b"hello")
    return path


@pytest.fixture
def hello_file(hello_path: Path) -> File:
    """An opened handle on ``hello_path``."""
    return FileBuilder.of_path(hello_path).open()


@pytest.fixture
def make_symlink():
    """Create a symlink, skipping the test where the platform refuses."""

    def _make(link: Path, target: Path | str) -> Path:
        try:
            os.symlink(target, link)
        except (OSError, NotImplementedError) as e:
            pytest.skip(f"symlinks not supported: {e}")
        return link

    return _make
