"""Small filesystem helpers."""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from .errors import FileIOError


@contextmanager
def scoped_current_dir(cwd: str | os.PathLike) -> Iterator[Path]:
    """Change the working directory for the duration of the block."""
    previous = Path.cwd()
    os.chdir(cwd)
    try:
        yield Path(cwd)
    finally:
        os.chdir(previous)


def create_if_not_exist(path: str | os.PathLike) -> None:
    """Create a single directory unless something already exists there."""
    path = Path(path)
    if path.exists():
        return
    path.mkdir()


def write(file: str | os.PathLike, content: str) -> None:
    """Write text to a file, replacing its contents."""
    try:
        handle = open(file, "w", encoding="utf-8", newline="")
    except OSError as exc:
        raise FileIOError(f"cannot open file {file} to write") from exc
    try:
        with handle:
            handle.write(content)
    except OSError as exc:
        raise FileIOError(f"write file {file} failed") from exc


def touch(file: str | os.PathLike) -> None:
    """Create an empty file, or update the modification time of an existing one."""
    path = Path(path_str := os.fspath(file))
    if not path.exists():
        open(path_str, "w").close()
        return
    os.utime(path)


def read_as_string(file: str | os.PathLike) -> str:
    """Return the whole text of a file."""
    try:
        with open(file, encoding="utf-8", newline="") as handle:
            return handle.read()
    except OSError as exc:
        raise FileIOError(f"read file {file} failed") from exc