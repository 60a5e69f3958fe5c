import pytest

from shipwright.errors import (
    CmdNotFound,
    Error,
    FileIOError,
    InvalidCmdOption,
    LayoutError,
    RunCmdFailed,
)


def test_cmd_not_found_message_and_command():
    err = CmdNotFound("clang-tidy")
    assert str(err) == "command clang-tidy not found"
    assert err.cmd == "clang-tidy"


def test_run_cmd_failed_keeps_status_and_command():
    err = RunCmdFailed(2, "make all")
    assert str(err) == "run cmd failed"
    assert err.status == 2
    assert err.cmd == "make all"


def test_invalid_cmd_option_uses_message():
    err = InvalidCmdOption("--std", "bad std")
    assert str(err) == "bad std"
    assert err.option == "--std"


@pytest.mark.parametrize(
    "factory, args, message",
    [
        (CmdNotFound, ("x",), "command x not found"),
        (RunCmdFailed, (1, "x"), "run cmd failed"),
        (InvalidCmdOption, ("o", "m"), "m"),
        (FileIOError, ("f",), "f"),
        (LayoutError, ("l",), "l"),
    ],
)
def test_all_errors_are_caught_as_error(factory, args, message):
    created = factory(*args)
    with pytest.raises(Error) as info:
        raise created
    assert info.value is created
    assert str(info.value) == message
    assert info.value.args[0] == message