"""The layouts of every package in a project."""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

from .errors import Error
from .layout import Layout
from .manifest import Manifest

_DEFAULT_KEY = Path()


class Workspace:
    """Layouts of all packages, keyed by their path relative to the project root.

    A single-package project is treated as a workspace whose one package
    lives at the empty path.
    """

    def __init__(self, project_root: str | os.PathLike, manifest: Manifest) -> None:
        self._root = Path(project_root)
        self._packages: dict[Path, Layout] = {}

        package = manifest.get_if_package()
        if package is not None:
            self._packages[_DEFAULT_KEY] = Layout(self._root, package.name)
            return

        for path, package_manifest in manifest.list_packages().items():
            self._packages[Path(path)] = Layout(self._root / path, package_manifest.name)

        self._check_duplicate_binaries()

    def _check_duplicate_binaries(self) -> None:
        owners: dict[str, str] = {}
        for layout in self.layouts():
            for target in layout.binaries():
                owner = owners.setdefault(target.name, layout.package)
                if owner != layout.package:
                    raise Error(
                        f"duplicate binary {target.name} from package {owner} and {layout.package}"
                    )

    def __iter__(self) -> Iterator[tuple[Path, Layout]]:
        return iter(sorted(self._packages.items()))

    def __len__(self) -> int:
        return len(self._packages)

    def get_default(self) -> Layout | None:
        """The layout of a single-package project, else None."""
        return self._packages.get(_DEFAULT_KEY)

    def as_package(self) -> Layout:
        """The layout of a single-package project; KeyError for a workspace."""
        return self._packages[_DEFAULT_KEY]

    def list_files(self) -> set[Path]:
        """Every source file of every package."""
        files: set[Path] = set()
        for layout in self._packages.values():
            files |= layout.all_files()
        return files

    def layouts(self) -> list[Layout]:
        """All layouts, in path order."""
        return [layout for _, layout in self]

    def layout(self, package: str) -> Layout | None:
        """The layout of the named package, if any."""
        return next((layout for layout in self.layouts() if layout.package == package), None)


def enforce_default_package(workspace: Workspace) -> Layout:
    """Return the single package's layout, raising Error for a multi-package workspace."""
    layout = workspace.get_default()
    if layout is None:
        raise Error("workspace is not supported for this command")
    return layout