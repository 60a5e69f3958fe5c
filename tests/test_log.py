import pytest

from shipwright import log


@pytest.fixture(autouse=True)
def _reset_level():
    log.set_level("info")
    yield
    log.set_level("info")


def test_status_line_is_right_aligned(capsys):
    log.status("resolve", "fetch {} from {}", "fmt", "origin")
    out = capsys.readouterr().out
    line = out.rstrip("\n")
    assert line.endswith("resolve fetch fmt from origin")
    assert len(line) == 15 + 1 + len("fetch fmt from origin")
    assert line.startswith(" ")


def test_debug_hidden_by_default(capsys):
    log.debug("hidden {}", 1)
    assert capsys.readouterr().out == ""


def test_debug_shown_after_set_level(capsys):
    log.set_level("debug")
    log.debug("visible {}", 7)
    out = capsys.readouterr().out
    assert "debug visible 7" in out


def test_warn_level_hides_status(capsys):
    log.set_level("warn")
    log.status("build", "quiet")
    log.warn("careful")
    out = capsys.readouterr().out
    assert "quiet" not in out
    assert "warn careful" in out


def test_error_always_shown_at_warn(capsys):
    log.set_level("warn")
    log.error("{} required", "git")
    assert "error git required" in capsys.readouterr().out


def test_should_log_info_follows_level():
    assert log.should_log_info() is True
    log.set_level("warn")
    assert log.should_log_info() is False


def test_unknown_level_rejected():
    with pytest.raises(ValueError):
        log.set_level("chatty")


def test_enforce_failure_reports_and_raises(capsys):
    with pytest.raises(AssertionError, match="unexpected: broken"):
        log.enforce(False, "broken")
    assert "unexpected: broken" in capsys.readouterr().err