"""Detection of the host C++ compiler."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from enum import StrEnum

from .cmd import check_output, has_cmd
from .errors import Error

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class CompilerId(StrEnum):
    UNKNOWN = "unknown"
    GCC = "gcc"
    CLANG = "clang"
    APPLE_CLANG = "apple-clang"
    MSVC = "msvc"


def detect_compiler_command() -> str:
    """Return the compiler command: $CXX, else g++, else clang++."""
    env = os.environ.get("CXX")
    if env is not None:
        return env
    if has_cmd("g++"):
        return "g++"
    if has_cmd("clang++"):
        return "clang++"
    raise Error("unable to detect compiler")


def get_compiler_id(output: str) -> CompilerId:
    """Identify the compiler from the first line of its --version output."""
    if "Apple" in output:
        return CompilerId.APPLE_CLANG
    if "clang" in output:
        return CompilerId.CLANG
    if "g++" in output:
        return CompilerId.GCC
    return CompilerId.UNKNOWN


def get_compiler_version(cxx: str) -> int:
    """Return the major version reported by `<cxx> -dumpversion`."""
    out = check_output(f"{cxx} -dumpversion")
    match = _LEADING_INT.match(out)
    version = int(match.group(1)) if match else 0
    if version == 0:
        raise Error(f"detect compiler version failed from {out}")
    return version


def get_libcxx(compiler_id: CompilerId) -> str:
    """Return the standard library flavour used with the compiler."""
    match compiler_id:
        case CompilerId.APPLE_CLANG | CompilerId.CLANG:
            return "libc++"
        case CompilerId.GCC:
            return "libstdc++11"
    return ""


@dataclass(frozen=True)
class CompilerInfo:
    """Command, identity, major version and libc++ flavour of a compiler."""

    command: str
    id: CompilerId
    version: int
    libcxx: str

    @classmethod
    def detect(cls) -> CompilerInfo:
        """Probe the host for its compiler."""
        command = detect_compiler_command()
        version = get_compiler_version(command)
        out = check_output(f"{command} --version | head -n1")
        compiler_id = get_compiler_id(out)
        return cls(command=command, id=compiler_id, version=version, libcxx=get_libcxx(compiler_id))