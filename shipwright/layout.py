"""Discovery of the build targets of a package from its directory layout."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from .errors import LayoutError
from .repo import (
    BENCHES_PATH,
    BIN_PATH,
    EXAMPLES_PATH,
    INCLUDE_PATH,
    LIB_PATH,
    SRC_PATH,
    TESTS_PATH,
    list_cpp_files,
    list_sources,
)

_CPP_EXTENSION = ".cpp"
_TEST_SUFFIX = "_test"


@dataclass
class Target:
    """A named build target with its include directories and sources."""

    name: str
    includes: set[Path] = field(default_factory=set)
    sources: set[Path] = field(default_factory=set)


def _flattened_name(path: Path, base: Path, strip: int) -> str:
    # a/b/c.cpp => a_b_c
    rel = path.relative_to(base).as_posix()
    return rel.replace("/", "_")[: len(rel) - strip]


class Layout:
    """The binaries, examples, benches, tests and library found under a package root."""

    def __init__(self, root: str | os.PathLike, name: str) -> None:
        self._root = Path(root)
        self._name = name
        self._sources: set[Path] = set()
        self._lib: Target | None = None
        self._binaries: dict[str, Target] = {}
        self._examples: dict[str, Target] = {}
        self._benches: dict[str, Target] = {}
        self._tests: dict[str, Target] = {}

        self._scan_binaries()
        self._scan_examples()
        self._scan_benches()
        self._scan_tests()
        self._scan_lib()

    @property
    def package(self) -> str:
        """Name of the package the layout belongs to."""
        return self._name

    @property
    def root(self) -> Path:
        """Root directory of the package."""
        return self._root

    def _scan_binaries(self) -> None:
        bin_dir = self._root / SRC_PATH / BIN_PATH
        for path in list_cpp_files(bin_dir):
            self._sources.add(path)
            name = path.stem
            if name in self._binaries:
                raise LayoutError(f"binary {name} already exists")
            self._binaries[name] = Target(name=name, sources={path})

        bin_files = {path for path in list_sources(self._root / SRC_PATH) if not path.is_relative_to(bin_dir)}
        if bin_files:
            if self._name in self._binaries:
                raise LayoutError(f"binary {self._name} already exists")
            self._binaries[self._name] = Target(
                name=self._name,
                includes={self._root / SRC_PATH},
                sources=bin_files,
            )
            self._sources.update(bin_files)

    def _scan_single_files(self, subdir: str, targets: dict[str, Target]) -> None:
        for path in list_cpp_files(self._root / subdir):
            self._sources.add(path)
            targets.setdefault(path.stem, Target(name=path.stem, sources={path}))

    def _scan_examples(self) -> None:
        self._scan_single_files(EXAMPLES_PATH, self._examples)

    def _scan_benches(self) -> None:
        self._scan_single_files(BENCHES_PATH, self._benches)

    def _scan_tests(self) -> None:
        tests_dir = self._root / TESTS_PATH
        for path in list_sources(tests_dir):
            self._sources.add(path)
            name = _flattened_name(path, tests_dir, len(_CPP_EXTENSION))
            self._tests.setdefault(name, Target(name=name, sources={path}))

    def _scan_lib(self) -> None:
        lib_dir = self._root / LIB_PATH
        lib_sources: set[Path] = set()
        lib_test_sources: set[Path] = set()
        for path in list_sources(lib_dir):
            self._sources.add(path)
            if path.stem.endswith(_TEST_SUFFIX):
                lib_test_sources.add(path)
            else:
                lib_sources.add(path)

        for path in sorted(lib_test_sources):
            # a/b/c_test.cpp => a_b_c
            name = _flattened_name(path, lib_dir, len(_CPP_EXTENSION) + len(_TEST_SUFFIX))
            if name in self._tests:
                raise LayoutError(f"test {name} already exist")
            self._tests[name] = Target(name=name, sources={path})

        include_dir = self._root / INCLUDE_PATH
        if not lib_sources and not include_dir.exists():
            return
        self._lib = Target(name=self._name, includes={include_dir}, sources=lib_sources)

    def all_files(self) -> set[Path]:
        """Every source file that belongs to some target."""
        return set(self._sources)

    def lib(self) -> Target | None:
        """The package's library target, if it has one."""
        return self._lib

    def binary(self, name: str) -> Target | None:
        return self._binaries.get(name)

    def example(self, name: str) -> Target | None:
        return self._examples.get(name)

    def bench(self, name: str) -> Target | None:
        return self._benches.get(name)

    def test(self, name: str) -> Target | None:
        return self._tests.get(name)

    @staticmethod
    def _ordered(targets: dict[str, Target]) -> list[Target]:
        return [targets[name] for name in sorted(targets)]

    def binaries(self) -> list[Target]:
        """Binary targets in name order."""
        return self._ordered(self._binaries)

    def examples(self) -> list[Target]:
        """Example targets in name order."""
        return self._ordered(self._examples)

    def benches(self) -> list[Target]:
        """Bench targets in name order."""
        return self._ordered(self._benches)

    def tests(self) -> list[Target]:
        """Test targets in name order."""
        return self._ordered(self._tests)