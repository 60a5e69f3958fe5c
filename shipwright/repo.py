"""Project layout constants and source file discovery."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path

from .cmd import check_output
from .errors import Error
from .strings import split

REPO_CONFIG_FILE = "shipwright.toml"
INCLUDE_PATH = "include"
SRC_PATH = "src"
BIN_PATH = "bin"
LIB_PATH = "lib"
TESTS_PATH = "tests"
BENCHES_PATH = "benches"
EXAMPLES_PATH = "examples"

INNER_TEST_SUFFIX = "_test.cpp"

# Build directory: per-profile cmake dirs, "deps" for non-conan packages,
# "packages" for generated package cmake configs.
BUILD_PATH = "build"
BUILD_PACKAGES_PATH = "packages"
BUILD_DEPS_PATH = "deps"

REPO_HEAD = "HEAD"

_SOURCE_EXTENSIONS = (".cpp", ".h")


@dataclass
class ListOptions:
    """Which changes list_changed_files reports."""

    cached_only: bool = True
    commit: str = REPO_HEAD


def _get_workspace_root(root: Path) -> Path | None:
    current = root
    while True:
        manifest = current / REPO_CONFIG_FILE
        if manifest.exists():
            try:
                with open(manifest, "rb") as handle:
                    value = tomllib.load(handle)
            except tomllib.TOMLDecodeError as exc:
                raise Error(f"invalid manifest format at {manifest}: {exc}") from exc
            if "workspace" in value:
                return current
        parent = current.parent
        if parent == current:
            return None
        current = parent


def get_package_root() -> Path:
    """Return the nearest directory, from the working directory up, holding a manifest."""
    current = Path.cwd()
    while True:
        if (current / REPO_CONFIG_FILE).exists():
            return current
        parent = current.parent
        if parent == current:
            break
        current = parent
    raise Error("not a shipwright repository")


def get_project_root() -> Path:
    """Return the enclosing workspace root, or the package root when there is none."""
    package_root = get_package_root()
    workspace_root = _get_workspace_root(package_root)
    return workspace_root if workspace_root is not None else package_root


def list_sources(source_dir: str | os.PathLike) -> set[Path]:
    """Return every .cpp file below a directory, recursively."""
    source_dir = Path(source_dir)
    if not source_dir.exists():
        return set()
    return {path for path in source_dir.rglob("*") if path.suffix == ".cpp"}


def list_project_sources(subdir: str) -> set[Path]:
    """Return every .cpp file below a subdirectory of the project root."""
    return list_sources(get_project_root() / subdir)


def list_cpp_files(directory: str | os.PathLike) -> set[Path]:
    """Return the .cpp files directly inside a directory."""
    directory = Path(directory)
    if not directory.exists():
        return set()
    return {path for path in directory.iterdir() if path.suffix == ".cpp"}


def list_all_files() -> set[Path]:
    """Return every .cpp and .h file in the project's source directories."""
    root = get_project_root()
    files: set[Path] = set()
    for subdir in (INCLUDE_PATH, SRC_PATH, LIB_PATH, TESTS_PATH, BENCHES_PATH, EXAMPLES_PATH):
        directory = root / subdir
        if not directory.exists():
            continue
        files.update(path for path in directory.rglob("*") if path.suffix in _SOURCE_EXTENSIONS)
    return files


def list_changed_files(options: ListOptions | None = None) -> set[Path]:
    """Return source files changed against a commit, or all of them outside git."""
    options = options or ListOptions()
    root = get_project_root()
    if not (root / ".git").exists():
        return list_all_files()

    cached = "--cached" if options.cached_only else ""
    out = check_output(f"git diff {options.commit} --name-only {cached}")

    paths = (Path(f"{root}/{line}") for line in split(out, "\n") if line)
    return {path for path in paths if path.suffix in _SOURCE_EXTENSIONS and path.exists()}