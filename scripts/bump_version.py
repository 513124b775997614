"""Bump the project version in pyproject.toml and src/handlefs/__init__.py.

Each file is rewritten through a sibling temp file that is atomically moved
over the original, so an interrupted run never leaves half a file behind.

Usage:
    uv run python scripts/bump_version.py --patch   # 0.1.0 → 0.1.1
    uv run python scripts/bump_version.py --minor   # 0.1.1 → 0.2.0
    uv run python scripts/bump_version.py --major   # 0.2.0 → 1.0.0
"""

from __future__ import annotations

import argparse
import re
import sys
from pathlib import Path

from handlefs import File, FileBuilder, OpenOption

ROOT = Path(__file__).resolve().parent.parent
PYPROJECT = ROOT / "pyproject.toml"
INIT_PY = ROOT / "src" / "handlefs" / "__init__.py"

VERSION_RE = re.compile(r'^(version\s*=\s*")(\d+\.\d+\.\d+)(")', re.MULTILINE)
INIT_VERSION_RE = re.compile(r'^(__version__\s*=\s*")(\d+\.\d+\.\d+)(")', re.MULTILINE)


def read_text(file: File) -> str:
    with file.reader() as reader:
        return reader.read().decode("utf-8")


def replace_text(file: File, text: str) -> None:
    staged = FileBuilder.of_path(file.path.with_name(file.name + ".bump")).create_if_absent()
    with staged.writer(OpenOption.TRUNCATE_EXISTING) as writer:
        writer.write(text.encode("utf-8"))
    staged.atomic_move(file.path)


def read_version(text: str) -> tuple[int, int, int]:
    match = VERSION_RE.search(text)
    if not match:
        print("error: could not find version in pyproject.toml", file=sys.stderr)
        sys.exit(1)
    major, minor, patch = match.group(2).split(".")
    return int(major), int(minor), int(patch)


def bump(major: int, minor: int, patch: int, part: str) -> tuple[int, int, int]:
    if part == "major":
        return major + 1, 0, 0
    if part == "minor":
        return major, minor + 1, 0
    return major, minor, patch + 1


def main() -> None:
    parser = argparse.ArgumentParser(description="Bump project version")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--major", action="store_const", const="major", dest="part")
    group.add_argument("--minor", action="store_const", const="minor", dest="part")
    group.add_argument("--patch", action="store_const", const="patch", dest="part")
    args = parser.parse_args()

    pyproject = FileBuilder.of_path(PYPROJECT).open()
    text = read_text(pyproject)
    old = read_version(text)
    new_str = ".".join(str(n) for n in bump(*old, args.part))
    old_str = ".".join(str(n) for n in old)

    replace_text(pyproject, VERSION_RE.sub(rf"\g<1>{new_str}\3", text))

    init_py = FileBuilder.of_path(INIT_PY).open()
    init_text = read_text(init_py)
    if INIT_VERSION_RE.search(init_text):
        replace_text(init_py, INIT_VERSION_RE.sub(rf"\g<1>{new_str}\3", init_text))
    else:
        print("warning: __version__ not found in __init__.py, skipping", file=sys.stderr)

    print(f"{old_str} → {new_str}")


if __name__ == "__main__":
    main()
