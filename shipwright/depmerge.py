"""Merging dependency lists of several packages."""

from __future__ import annotations

from .dependency import ConanDep, DeclaredDependency, GitDep
from .errors import Error


def is_compatible(d1: DeclaredDependency, d2: DeclaredDependency) -> bool:
    """Tell whether two declarations of a package can share one build."""
    match d1.desc, d2.desc:
        case ConanDep() as a, ConanDep() as b:
            return a.version == b.version and dict(a.options) == dict(b.options)
        case GitDep() as a, GitDep() as b:
            return a.git == b.git and a.commit == b.commit
    return False


def merge_to(new_deps: list[DeclaredDependency], full_deps: list[DeclaredDependency]) -> None:
    """Append to full_deps the packages of new_deps it does not yet hold.

    A package already present must be declared compatibly, else Error is raised.
    """
    additions: list[DeclaredDependency] = []
    for dep in new_deps:
        existing = next((d for d in full_deps if d.package == dep.package), None)
        if existing is not None:
            if not is_compatible(existing, dep):
                raise Error(f"package {dep.package} have incompatible version or options")
            continue
        additions.append(dep)
    full_deps.extend(additions)