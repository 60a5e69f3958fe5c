"""Exception hierarchy shared by the whole package."""

from __future__ import annotations


class Error(Exception):
    """Base class of every error the package reports."""


class CmdNotFound(Error):
    """An external command needed by an operation is not on the PATH."""

    def __init__(self, cmd: str) -> None:
        super().__init__(f"command {cmd} not found")
        self.cmd = cmd


class InvalidCmdOption(Error):
    """A command-line option carries an unusable value."""

    def __init__(self, option: str, msg: str) -> None:
        super().__init__(msg)
        self.option = option


class RunCmdFailed(Error):
    """An external command exited with a non-zero status."""

    def __init__(self, status: int, cmd: str) -> None:
        super().__init__("run cmd failed")
        self.status = status
        self.cmd = cmd


class FileIOError(Error):
    """Reading or writing a file failed."""


class LayoutError(Error):
    """The project directory layout is inconsistent."""