import pytest

from shipwright.compiler import (
    CompilerId,
    CompilerInfo,
    detect_compiler_command,
    get_compiler_id,
    get_compiler_version,
    get_libcxx,
)
from shipwright.errors import Error


def test_compiler_id_names():
    assert str(get_compiler_id("Apple clang version 14.0.0")) == "apple-clang"
    assert str(get_compiler_id("g++ (GCC) 12.2.0")) == "gcc"


@pytest.mark.parametrize(
    "output, expected",
    [
        ("Apple clang version 14.0.0", CompilerId.APPLE_CLANG),
        ("clang version 15.0.0", CompilerId.CLANG),
        ("g++ (GCC) 12.2.0", CompilerId.GCC),
        ("something else", CompilerId.UNKNOWN),
    ],
)
def test_get_compiler_id(output, expected):
    assert get_compiler_id(output) is expected


def test_get_libcxx():
    assert get_libcxx(CompilerId.CLANG) == "libc++"
    assert get_libcxx(CompilerId.APPLE_CLANG) == "libc++"
    assert get_libcxx(CompilerId.GCC) == "libstdc++11"
    assert get_libcxx(CompilerId.MSVC) == ""
    assert get_libcxx(CompilerId.UNKNOWN) == ""


def test_detect_uses_cxx_env(monkeypatch):
    monkeypatch.setenv("CXX", "my-cxx")
    assert detect_compiler_command() == "my-cxx"


def test_detect_without_compiler_fails(monkeypatch, tmp_path):
    monkeypatch.delenv("CXX", raising=False)
    monkeypatch.setenv("PATH", str(tmp_path))
    with pytest.raises(Error, match="unable to detect compiler"):
        detect_compiler_command()


def test_get_compiler_version_reads_leading_number():
    assert get_compiler_version("echo 12.2.0") == 12


def test_get_compiler_version_rejects_garbage():
    with pytest.raises(Error, match="detect compiler version failed"):
        get_compiler_version("echo abc")


def test_compiler_info_detect(monkeypatch):
    monkeypatch.setenv("CXX", "echo 13.1")
    info = CompilerInfo.detect()
    assert info.command == "echo 13.1"
    assert info.version == 13
    assert info.id is CompilerId.UNKNOWN
    assert info.libcxx == ""