import sys

import pytest

from shipwright import log
from shipwright.cmd import CmdRunner, check_output, has_cmd, require_cmd, run_cmd
from shipwright.errors import CmdNotFound, RunCmdFailed


@pytest.fixture(autouse=True)
def _reset_level():
    log.set_level("info")
    yield
    log.set_level("info")


def test_has_cmd_finds_interpreter():
    assert has_cmd(sys.executable) is True


def test_has_cmd_missing():
    assert has_cmd("no-such-command-shipwright-xyz") is False


def test_require_cmd_raises_for_missing():
    with pytest.raises(CmdNotFound) as info:
        require_cmd("no-such-command-shipwright-xyz")
    assert info.value.cmd == "no-such-command-shipwright-xyz"


def test_run_cmd_returns_exit_status():
    assert run_cmd("exit 3") == 3


def test_run_cmd_quiet_swallows_output(capsys):
    log.set_level("warn")
    assert run_cmd("echo hidden-output; exit 2") == 2
    assert "hidden-output" not in capsys.readouterr().out


def test_run_cmd_unsets_cmake_generator(monkeypatch):
    monkeypatch.setenv("CMAKE_GENERATOR", "Ninja")
    assert run_cmd('test -z "$CMAKE_GENERATOR"') == 0


def test_check_output_keeps_environment(monkeypatch):
    monkeypatch.setenv("CMAKE_GENERATOR", "Ninja")
    assert check_output('printf %s "$CMAKE_GENERATOR"') == "Ninja"


def test_check_output_returns_stdout():
    assert check_output("echo hello") == "hello\n"


def test_check_output_failure_raises():
    with pytest.raises(RunCmdFailed) as info:
        check_output("exit 4")
    assert info.value.status == 4
    assert info.value.cmd == "exit 4"


def test_cmd_runner_uses_hook():
    seen = []

    def hook(cmd):
        seen.append(cmd)
        return 9

    assert CmdRunner(hook).run("cmake --build .") == 9
    assert seen == ["cmake --build ."]


def test_cmd_runner_without_hook_runs_shell():
    assert CmdRunner().run("exit 5") == 5