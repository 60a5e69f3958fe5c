"""Declared and resolved package dependencies."""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .errors import Error
from .log import enforce
from .strings import split, split_whitespace

_FIELDS_IN_COMPONENT_LINE = 5
_FIELDS_IN_TARGET_LINE = 3


@dataclass
class ConanDep:
    """A dependency fetched from the conan registry."""

    version: str
    options: dict[str, str] = field(default_factory=dict)


@dataclass
class GitDep:
    """A dependency cloned from a git repository at a fixed commit."""

    git: str
    commit: str


DependencyDesc = ConanDep | GitDep


@dataclass
class DeclaredDependency:
    """A dependency as written in a manifest."""

    package: str
    desc: DependencyDesc
    components: list[str] = field(default_factory=list)

    def is_conan(self) -> bool:
        return isinstance(self.desc, ConanDep)

    def is_git(self) -> bool:
        return isinstance(self.desc, GitDep)


@dataclass
class Dependency:
    """A dependency resolved to its cmake package and target."""

    package: str
    cmake_package: str
    cmake_target: str
    components: list[str] = field(default_factory=list)


class ResolvedDependencies:
    """Resolved dependencies keyed by package name, iterated in name order."""

    def __init__(self, deps: Iterable[Dependency] = ()) -> None:
        self._deps: dict[str, Dependency] = {}
        for dep in deps:
            self.insert(dep)

    def __len__(self) -> int:
        return len(self._deps)

    def __iter__(self) -> Iterator[Dependency]:
        return (self._deps[name] for name in sorted(self._deps))

    def __contains__(self, package: object) -> bool:
        return package in self._deps

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ResolvedDependencies):
            return NotImplemented
        return self._deps == other._deps

    def __repr__(self) -> str:
        return f"ResolvedDependencies({list(self)!r})"

    def insert(self, dep: Dependency) -> bool:
        """Add a dependency unless its package is already present; tell whether it was added."""
        if dep.package in self._deps:
            return False
        self._deps[dep.package] = dep
        return True

    def get_or_die(self, package: str) -> Dependency:
        """Return the dependency of a package that must be present."""
        dep = self._deps.get(package)
        enforce(dep is not None, f"unexpected package {package}")
        return dep

    def to_dict(self) -> dict[str, dict[str, Any]]:
        """Serialise to a plain mapping suitable for TOML."""
        return {
            dep.package: {
                "package": dep.package,
                "cmake_package": dep.cmake_package,
                "cmake_target": dep.cmake_target,
                "components": list(dep.components),
            }
            for dep in self
        }

    @classmethod
    def from_dict(cls, data: dict[str, dict[str, Any]]) -> ResolvedDependencies:
        """Rebuild from the mapping produced by to_dict."""
        result = cls()
        for key, value in data.items():
            result._deps[key] = Dependency(
                package=value["package"],
                cmake_package=value["cmake_package"],
                cmake_target=value["cmake_target"],
                components=list(value.get("components", [])),
            )
        return result


def _retrieve_package_name(target: str) -> str:
    pos = target.find("_LIBRARIES")
    if pos < 0:
        raise Error(f"cmake target file bad target {target}")
    return target[:pos]


def parse_conan_cmake_target_file(cmake_package: str, target_file: str | os.PathLike) -> Dependency:
    """Extract package, target and components from a generated conan target file."""
    try:
        with open(target_file, encoding="utf-8") as handle:
            text = handle.read()
    except OSError:
        raise Error(f"cmake target file {target_file} not found") from None

    lines = iter(line.removesuffix("\n") for line in text.splitlines(keepends=True))
    package = ""
    cmake_target = ""
    components: list[str] = []

    for line in lines:
        if "AGGREGATED GLOBAL TARGET WITH THE COMPONENTS" in line:
            for inner in lines:
                line = inner.strip()
                fields = split_whitespace(line)
                # set_property(TARGET boost::boost APPEND PROPERTY INTERFACE_LINK_LIBRARIES Boost::headers)
                if len(fields) < _FIELDS_IN_COMPONENT_LINE:
                    break
                components.append(fields[-1][:-1])

        if "FindXXX" in line:
            line = next(lines, "")
            if not line.startswith("set"):
                raise Error(f"cmake target file bad target line: {line}")
            # set(boost_LIBRARIES_DEBUG boost::boost)
            fields = split(line, "() ")
            if len(fields) < _FIELDS_IN_TARGET_LINE:
                raise Error(f"cmake target file bad target line: {line}")
            package = _retrieve_package_name(fields[1])
            cmake_target = fields[2]

    if not package:
        raise Error(f"parse cmake target file {target_file} failed")

    return Dependency(
        package=package,
        cmake_package=cmake_package,
        cmake_target=cmake_target,
        components=components,
    )


def collect_conan_deps(conan_dep_dir: str | os.PathLike, profile: str) -> ResolvedDependencies:
    """Collect the dependencies described by the conan target files of a profile."""
    deps = ResolvedDependencies()
    suffix = f"-Target-{str(profile).lower()}.cmake"

    for entry in Path(conan_dep_dir).iterdir():
        filename = entry.name
        if not filename.endswith(suffix):
            continue
        cmake_package = filename[: len(filename) - len(suffix)]
        try:
            deps.insert(parse_conan_cmake_target_file(cmake_package, entry))
        except Exception as exc:
            raise Error(f"invalid cmake target file {filename}: {exc}") from exc

    return deps