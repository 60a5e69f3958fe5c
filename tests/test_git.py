import subprocess
from unittest.mock import patch

import pytest

from shipwright import log
from shipwright.errors import Error
from shipwright.git import git_clone


@pytest.fixture(autouse=True)
def _reset_level():
    log.set_level("info")
    yield
    log.set_level("info")


def _done(code):
    return subprocess.CompletedProcess(args="", returncode=code)


def test_clone_failure_removes_old_dir_and_raises(tmp_path):
    log.set_level("warn")
    deps = tmp_path / "deps"
    old = deps / "pkg"
    old.mkdir(parents=True)
    (old / "stale.txt").write_text("old")
    with pytest.raises(Error, match="install pkg from"):
        git_clone("pkg", deps, str(tmp_path / "missing-repo"), "abc123")
    assert not old.exists()


def test_clone_then_reset_commands(tmp_path):
    with patch("subprocess.run", return_value=_done(0)) as run:
        git_clone("pkg", tmp_path, "https://example.com/repo.git", "abc123")
    commands = [call.args[0] for call in run.call_args_list]
    assert len(commands) == 2
    assert commands[0].startswith("git clone https://example.com/repo.git ")
    assert str(tmp_path / "pkg") in commands[0]
    assert commands[1].endswith("reset --hard abc123")


def test_reset_failure_reports_commit(tmp_path):
    with patch("subprocess.run", side_effect=[_done(0), _done(1)]):
        with pytest.raises(Error, match="commit abc123 not found for pkg"):
            git_clone("pkg", tmp_path, "https://example.com/repo.git", "abc123")