"""Resolution of git dependencies into the build's deps directory."""

from __future__ import annotations

import os
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from .dependency import DeclaredDependency, Dependency, GitDep, ResolvedDependencies
from .errors import Error
from .fsutil import create_if_not_exist, touch
from .log import status
from .manifest import Manifest, PackageManifest
from .repo import INCLUDE_PATH, LIB_PATH, REPO_CONFIG_FILE, SRC_PATH

# fetcher(package, deps_dir, git_url, commit)
GitFetcher = Callable[[str, Path, str, str], None]


@dataclass
class ResolveResult:
    """Outcome of resolving a package's dependencies."""

    conan_dependencies: list[DeclaredDependency] = field(default_factory=list)
    conan_dev_dependencies: list[DeclaredDependency] = field(default_factory=list)
    resolved_dependencies: ResolvedDependencies = field(default_factory=ResolvedDependencies)
    dependencies: list[DeclaredDependency] = field(default_factory=list)
    dev_dependencies: list[DeclaredDependency] = field(default_factory=list)


def _verify_git_dependency(package: str, dep_dir: Path) -> None:
    if (dep_dir / REPO_CONFIG_FILE).exists():
        return
    if not (dep_dir / INCLUDE_PATH).exists():
        raise Error(f"git dependency {package} has no include/")
    if (dep_dir / LIB_PATH).exists() or (dep_dir / SRC_PATH).exists():
        raise Error(f"git dependency {package} has {LIB_PATH}/ or {SRC_PATH}/ for header only lib")


class Resolver:
    """Fetches git dependencies, transitively, and collects conan ones."""

    def __init__(
        self,
        deps_dir: str | os.PathLike,
        deps: list[DeclaredDependency],
        dev_deps: list[DeclaredDependency],
        fetcher: GitFetcher | None,
    ) -> None:
        self._deps_dir = Path(deps_dir)
        self._fetcher = fetcher
        self._result = ResolveResult()
        self._unresolved: deque[DeclaredDependency] = deque()
        self._seen: set[str] = set()

        for dep in deps:
            if not dep.is_conan():
                self._unresolved.append(dep)
                continue
            self._seen.add(dep.package)
            self._result.conan_dependencies.append(dep)

        for dep in dev_deps:
            if not dep.is_conan():
                self._unresolved.append(dep)
                continue
            self._result.conan_dev_dependencies.append(dep)

        if self._unresolved:
            create_if_not_exist(self._deps_dir)

    @classmethod
    def from_manifest(
        cls,
        deps_dir: str | os.PathLike,
        manifest: Manifest | PackageManifest,
        fetcher: GitFetcher | None,
    ) -> Resolver:
        """Build a resolver for the dependencies of a manifest."""
        return cls(deps_dir, manifest.dependencies, manifest.dev_dependencies, fetcher)

    def resolve(self) -> ResolveResult:
        """Resolve everything; dependencies come out with dependees after their dependencies."""
        while self._unresolved:
            dep = self._unresolved.popleft()
            if dep.package in self._seen:
                status("resolve", "package {} already seen, skip", dep.package)
                continue
            self._seen.add(dep.package)
            self._resolve_git(dep)

        result = self._result
        result.dependencies.extend(result.conan_dependencies)
        result.dependencies.reverse()
        result.dev_dependencies.extend(result.conan_dev_dependencies)
        return result

    def _resolve_git(self, dep: DeclaredDependency) -> None:
        desc = dep.desc
        assert isinstance(desc, GitDep)
        package_dir = self._deps_dir / dep.package
        footprint = package_dir / f"shipwright.{desc.commit}"
        if not footprint.exists() and self._fetcher is not None:
            status("resolve", "fetch {} from {}::{}", dep.package, desc.git, desc.commit)
            self._fetcher(dep.package, self._deps_dir, desc.git, desc.commit)
            _verify_git_dependency(dep.package, package_dir)

        self._resolve_package(dep.package, package_dir)

        self._result.dependencies.append(dep)
        self._result.resolved_dependencies.insert(
            Dependency(
                package=dep.package,
                cmake_package=dep.package,
                cmake_target=f"shipwright::{dep.package}",
            )
        )

        if package_dir.exists():
            touch(footprint)

    def _resolve_package(self, package: str, package_dir: Path) -> None:
        manifest_path = package_dir / REPO_CONFIG_FILE
        if not manifest_path.exists():
            status("resolve", "header only lib {} found", package)
            return

        status("resolve", "shipwright lib {} found", package)
        manifest = Manifest(manifest_path)
        if manifest.is_workspace():
            raise Error(f"package {package} is a workspace")

        for sub_dep in manifest.dependencies:
            if sub_dep.package in self._seen:
                status("resolve", "package {} already seen, skip", sub_dep.package)
                continue
            if sub_dep.is_conan():
                self._seen.add(sub_dep.package)
                self._result.conan_dependencies.append(sub_dep)
                continue
            self._unresolved.append(sub_dep)