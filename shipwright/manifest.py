"""Reading and creating package and workspace manifests."""

from __future__ import annotations

import os
import tomllib
from enum import IntEnum
from pathlib import Path
from typing import Any

from .cfg import parse_cfg
from .dependency import ConanDep, DeclaredDependency, GitDep
from .depmerge import merge_to
from .errors import Error
from .fsutil import write
from .profile import ConditionConfig, Profile, ProfileConfig, ProfileOptions
from .repo import REPO_CONFIG_FILE


class CxxStd(IntEnum):
    CXX11 = 11
    CXX14 = 14
    CXX17 = 17
    CXX20 = 20
    CXX23 = 23


def to_cxx_std(value: int) -> CxxStd | None:
    """Return the standard matching a number such as 17, or None."""
    for std in CxxStd:
        if value == std.value:
            return std
    return None


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        with open(path, "rb") as handle:
            return tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise Error(f"invalid manifest format at {path}: {exc}") from exc


def _as_table(value: Any, what: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise Error(f"invalid manifest: {what} should be a table")
    return value


def _require(table: Any, key: str) -> Any:
    if not isinstance(table, dict) or key not in table:
        raise Error(f"manifest key {key} is required")
    return table[key]


def _require_string(table: Any, key: str) -> str:
    value = _require(table, key)
    if not isinstance(value, str):
        raise Error(f"invalid manifest: {key} should be a string")
    return value


def _get_bool(table: dict[str, Any], key: str) -> bool | None:
    if key not in table:
        return None
    content = table[key]
    if not isinstance(content, bool):
        raise Error(f"invalid manifest: {key} should be a bool")
    return content


def _get_list(table: dict[str, Any], key: str) -> list[str]:
    if key not in table:
        return []
    content = table[key]
    if not isinstance(content, list):
        raise Error(f"invalid manifest: {key} should be an array")
    if not all(isinstance(item, str) for item in content):
        raise Error(f"invalid manifest: {key} should be an array of strings")
    return list(content)


def _get_table(table: dict[str, Any], key: str) -> dict[str, Any]:
    if key not in table:
        return {}
    content = table[key]
    if not isinstance(content, dict):
        raise Error(f"invalid manifest: {key} should be a table")
    return content


def _get_cxx_std(package: dict[str, Any]) -> CxxStd:
    value = package.get("std", 17)
    if isinstance(value, bool) or not isinstance(value, int):
        value = 17
    std = to_cxx_std(value)
    if std is None:
        raise Error(f"manifest invalid std {value}")
    return std


def _get_option_value(value: Any) -> str:
    if isinstance(value, bool):
        return "True" if value else "False"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return f'"{value}"'
    raise Error("dependency options' value can only be bool/int/string")


def _parse_git_dep(config: dict[str, Any]) -> GitDep:
    git = config["git"]
    commit = config.get("commit", "")
    if not isinstance(git, str) or not git:
        raise Error(f"invalid git url {git}")
    if not isinstance(commit, str) or not commit:
        raise Error(f"empty commit for git dependency {git}")
    return GitDep(git=git, commit=commit)


def _parse_dependencies(manifest: dict[str, Any], key: str) -> list[DeclaredDependency]:
    deps = manifest.get(key)
    if not isinstance(deps, dict):
        return []

    declared: list[DeclaredDependency] = []
    for name, config in deps.items():
        if isinstance(config, str):
            declared.append(DeclaredDependency(package=name, desc=ConanDep(version=config)))
        elif isinstance(config, dict):
            if "git" in config:
                declared.append(DeclaredDependency(package=name, desc=_parse_git_dep(config)))
                continue
            version = _require_string(config, "version")
            options = config.get("options")
            if not isinstance(options, dict):
                options = {}
            components = config.get("components", [])
            if not isinstance(components, list) or not all(isinstance(c, str) for c in components):
                components = []
            desc = ConanDep(
                version=version,
                options={opt: _get_option_value(val) for opt, val in options.items()},
            )
            declared.append(DeclaredDependency(package=name, desc=desc, components=list(components)))
        else:
            raise Error(f"invalid dependency {name} in manifest")
    return declared


def _check_dependency_dups(deps: list[DeclaredDependency], dev_deps: list[DeclaredDependency]) -> None:
    seen: set[str] = set()
    for dep in (*deps, *dev_deps):
        if dep.package in seen:
            raise Error(f"package {dep.package} already declared")
        seen.add(dep.package)


def _parse_profile_options(table: dict[str, Any], key: str) -> ProfileConfig:
    profile = _as_table(table.get(key), key)
    config = ProfileConfig(
        cxxflags=_get_list(profile, "cxxflags"),
        linkflags=_get_list(profile, "linkflags"),
        definitions=_get_list(profile, "definitions"),
        ubsan=_get_bool(profile, "ubsan"),
        tsan=_get_bool(profile, "tsan"),
        asan=_get_bool(profile, "asan"),
        leak=_get_bool(profile, "leak"),
    )
    if config.tsan:
        if config.asan:
            raise Error("tsan cannot be used with asan")
        if config.leak:
            raise Error("tsan cannot be used with leak")
    return config


class PackageManifest:
    """The parsed manifest of a single package."""

    def __init__(self, value: dict[str, Any]) -> None:
        package = _require(value, "package")
        self.name: str = _require_string(package, "name")
        self.version: str = _require_string(package, "version")
        self.cxx_std: CxxStd = _get_cxx_std(package)

        self.dependencies = _parse_dependencies(value, "dependencies")
        self.dev_dependencies = _parse_dependencies(value, "dev-dependencies")
        _check_dependency_dups(self.dependencies, self.dev_dependencies)

        self.default_profile = ProfileOptions(config=_parse_profile_options(value, "profile"))
        profile = _as_table(value.get("profile"), "profile")
        self._debug = ProfileOptions(config=_parse_profile_options(profile, "debug"))
        self._release = ProfileOptions(config=_parse_profile_options(profile, "release"))

        for condition_text, config in _get_table(value, "target").items():
            config = _as_table(config, condition_text)
            if "profile" not in config:
                continue
            condition = parse_cfg(condition_text)
            self.default_profile.conditional_configs.append(
                ConditionConfig(condition=condition, config=_parse_profile_options(config, "profile"))
            )
            target_profile = _get_table(config, "profile")
            if "debug" in target_profile:
                self._debug.conditional_configs.append(
                    ConditionConfig(condition=condition, config=_parse_profile_options(target_profile, "debug"))
                )
            if "release" in target_profile:
                self._release.conditional_configs.append(
                    ConditionConfig(condition=condition, config=_parse_profile_options(target_profile, "release"))
                )

    def profile(self, prof: Profile) -> ProfileOptions:
        """Return the options of the Debug or Release profile."""
        match prof:
            case Profile.DEBUG:
                return self._debug
            case Profile.RELEASE:
                return self._release
        raise ValueError(f"unknown profile {prof}")


class Manifest:
    """A manifest file: either a single package or a workspace of packages."""

    def __init__(self, file: str | os.PathLike) -> None:
        file = Path(file)
        if not file.exists():
            raise Error("manifest file not exist")

        self._package: PackageManifest | None = None
        self._packages: dict[Path, PackageManifest] | None = None
        self.dependencies: list[DeclaredDependency] = []
        self.dev_dependencies: list[DeclaredDependency] = []

        value = _load_toml(file)
        if "workspace" not in value:
            self._package = PackageManifest(value)
            self.dependencies = list(self._package.dependencies)
            self.dev_dependencies = list(self._package.dev_dependencies)
            return

        self._packages = {}
        workspace = _as_table(value["workspace"], "workspace")
        if "members" not in workspace:
            return

        names: set[str] = set()
        for member in _get_list(workspace, "members"):
            path = Path(member)
            member_manifest = file.parent / path / REPO_CONFIG_FILE
            if not member_manifest.exists():
                raise Error(f"invalid workspace member {member}")

            package = self._packages.setdefault(path, PackageManifest(_load_toml(member_manifest)))
            if package.name in names:
                raise Error(f"conflict package name: {package.name}")
            names.add(package.name)

            merge_to(package.dependencies, self.dependencies)
            merge_to(package.dev_dependencies, self.dev_dependencies)

    def is_workspace(self) -> bool:
        """Tell whether the manifest declares a workspace."""
        return self._package is None

    def get_if_package(self) -> PackageManifest | None:
        """Return the package of a single-package manifest, else None."""
        return self._package

    def get_by_path(self, path: str | os.PathLike) -> PackageManifest | None:
        """Return the workspace member at a relative path, if any."""
        if self._packages is None:
            return None
        return self._packages.get(Path(path))

    def get(self, package: str) -> PackageManifest | None:
        """Return the package with the given name, if any."""
        if self._packages is not None:
            return next((p for p in self._packages.values() if p.name == package), None)
        if self._package is not None and self._package.name == package:
            return self._package
        return None

    def list_packages(self) -> dict[Path, PackageManifest]:
        """Return the workspace members keyed by relative path, in path order."""
        if self._packages is None:
            raise Error("manifest is not a workspace")
        return dict(sorted(self._packages.items()))


_CLANG_FORMAT = """---
Language: Cpp
BasedOnStyle: WebKit
ColumnLimit: 120
"""

_CLANG_TIDY = """---
HeaderFilterRegex: ^(include|src|tests|benches)
Checks: -*,boost-*,bugprone-*,-bugprone-narrowing-conversions,-bugprone-easily-swappable-parameters,\
clang-analyzer-*,concurrency-*,cppcoreguidelines-*,misc-*,modernize-*,-modernize-pass-by-value,\
-modernize-use-trailing-return-type,-modernize-use-nodiscard,performance-*,portability-*,readability-*,\
-readability-make-member-function-const,-readability-redundant-access-specifiers,\
-readability-convert-member-functions-to-static,-readability-magic-numbers,-readability-named-parameter
WarningsAsErrors: '*'
InheritParentConfig: false
"""

_GITIGNORE = """# ignore build and clangd .cache
.cache
.build
build
"""


def generate_manifest(name: str, std: CxxStd | int, directory: str | os.PathLike) -> None:
    """Create a new manifest plus tool configs in a directory."""
    directory = Path(directory)
    if not directory.exists():
        directory.mkdir()

    manifest = directory / REPO_CONFIG_FILE
    if manifest.exists():
        raise Error("manifest already exist")

    content = (
        "[package]\n"
        f'name = "{name}"\n'
        'version = "0.1.0"\n'
        f"std = {int(std)}\n"
        "\n[dependencies]\n"
    )
    try:
        with open(manifest, "w", encoding="utf-8", newline="") as handle:
            handle.write(content)
    except OSError as exc:
        raise Error(f"write file {manifest} failed: {exc}") from exc

    write(directory / ".clang-format", _CLANG_FORMAT)
    write(directory / ".clang-tidy", _CLANG_TIDY)
    write(directory / ".gitignore", _GITIGNORE)