"""Fetching git dependencies."""

from __future__ import annotations

import os
import shlex
import shutil
from pathlib import Path

from .cmd import run_cmd
from .errors import Error


def git_clone(package: str, deps_dir: str | os.PathLike, git: str, commit: str) -> None:
    """Clone a repository into deps_dir/package and reset it to the given commit."""
    package_dir = Path(deps_dir) / package
    shutil.rmtree(package_dir, ignore_errors=True)

    target = shlex.quote(str(package_dir))
    if run_cmd(f"git clone {git} {target}") != 0:
        raise Error(f"install {package} from {git} failed")

    if run_cmd(f"git -C {target} reset --hard {commit}") != 0:
        raise Error(f"commit {commit} not found for {package}")