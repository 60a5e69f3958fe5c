"""Running external commands through the shell."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from collections.abc import Callable
from dataclasses import dataclass

from .errors import CmdNotFound, RunCmdFailed
from .log import should_log_info

_LOGGER = logging.getLogger("shipwright")


def has_cmd(cmd: str) -> bool:
    """Tell whether a command can be found on the PATH."""
    return shutil.which(cmd) is not None


def require_cmd(cmd: str) -> None:
    """Raise CmdNotFound unless the command is on the PATH."""
    if not has_cmd(cmd):
        raise CmdNotFound(cmd)


def _child_env() -> dict[str, str]:
    # A CMAKE_GENERATOR inherited from the caller would override ours.
    return {key: value for key, value in os.environ.items() if key != "CMAKE_GENERATOR"}


def run_cmd(cmd: str) -> int:
    """Run a shell command and return its exit status.

    Output goes straight to the console when informational logging is on;
    otherwise it is routed through the logger and thus suppressed.
    """
    env = _child_env()
    if should_log_info():
        return subprocess.run(cmd, shell=True, env=env, check=False).returncode

    with subprocess.Popen(
        cmd,
        shell=True,
        env=env,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        text=True,
    ) as proc:
        assert proc.stdout is not None
        for line in proc.stdout:
            _LOGGER.info(line.rstrip("\n"))
    return proc.returncode


def check_output(cmd: str) -> str:
    """Run a shell command and return its standard output; raise on failure."""
    result = subprocess.run(cmd, shell=True, stdout=subprocess.PIPE, text=True, check=False)
    if result.returncode != 0:
        raise RunCmdFailed(result.returncode, cmd)
    return result.stdout


@dataclass
class CmdRunner:
    """Runs commands, optionally through a hook that replaces the shell."""

    hook: Callable[[str], int] | None = None

    def run(self, cmd: str) -> int:
        """Run the command with the hook if one is set, else through the shell."""
        if self.hook is not None:
            return self.hook(cmd)
        return run_cmd(cmd)