"""Starter sources for new packages."""

from __future__ import annotations

import os
from pathlib import Path

from .fsutil import create_if_not_exist, write
from .repo import INCLUDE_PATH, LIB_PATH, SRC_PATH

_LIB_SOURCE = "int add(int x, int y) { return x + y; }\n"

_BIN_SOURCE = """#include <iostream>

int main()
{
    std::cout << "Hello shipwright\\n";
}
"""


def generate_lib_template(directory: str | os.PathLike) -> None:
    """Create include/ and lib/ with a small library source."""
    directory = Path(directory)
    lib = directory / LIB_PATH
    create_if_not_exist(directory / INCLUDE_PATH)
    create_if_not_exist(lib)
    write(lib / "lib.cpp", _LIB_SOURCE)


def generate_bin_template(directory: str | os.PathLike) -> None:
    """Create src/ with a hello-world main program."""
    src = Path(directory) / SRC_PATH
    create_if_not_exist(src)
    write(src / "main.cpp", _BIN_SOURCE)