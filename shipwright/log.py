"""Console logging with right-aligned, coloured event tags."""

from __future__ import annotations

import logging
import sys

_LOGGER = logging.getLogger("shipwright")

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

_GRAY = "90"
_GREEN = "32"
_YELLOW = "33"
_RED = "31"


class _StdoutHandler(logging.Handler):
    """Write plain messages to whatever sys.stdout currently is."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            sys.stdout.write(self.format(record) + "\n")
            sys.stdout.flush()
        except Exception:  # noqa: BLE001 - logging must never raise
            self.handleError(record)


if not _LOGGER.handlers:
    _LOGGER.addHandler(_StdoutHandler())
_LOGGER.setLevel(logging.INFO)
_LOGGER.propagate = False


def set_level(level: str | int) -> None:
    """Set the minimum level: a name such as 'debug' or 'warn', or a logging level."""
    if isinstance(level, str):
        try:
            level = _LEVELS[level.lower()]
        except KeyError:
            raise ValueError(f"unknown log level {level}") from None
    _LOGGER.setLevel(level)


def should_log_info() -> bool:
    """Tell whether informational messages are shown."""
    return _LOGGER.isEnabledFor(logging.INFO)


def _tag(event: str, color: str) -> str:
    padded = f"{event:>15}"
    isatty = getattr(sys.stdout, "isatty", None)
    if isatty is not None and isatty():
        return f"\033[1;{color}m{padded}\033[0m"
    return padded


def _emit(level: int, event: str, color: str, message: str, args: tuple) -> None:
    if not _LOGGER.isEnabledFor(level):
        return
    text = message.format(*args) if args else message
    _LOGGER.log(level, "%s %s", _tag(event, color), text)


def debug(message: str, *args: object) -> None:
    """Log a debug message."""
    _emit(logging.DEBUG, "debug", _GRAY, message, args)


def status(event: str, message: str, *args: object) -> None:
    """Log a progress message under the given event tag."""
    _emit(logging.INFO, event, _GREEN, message, args)


def warn(message: str, *args: object) -> None:
    """Log a warning."""
    _emit(logging.WARNING, "warn", _YELLOW, message, args)


def error(message: str, *args: object) -> None:
    """Log an error."""
    _emit(logging.ERROR, "error", _RED, message, args)


def enforce(expr: object, message: str) -> None:
    """Abort with an AssertionError when an internal invariant does not hold."""
    if not expr:
        print(f"unexpected: {message}", file=sys.stderr)
        raise AssertionError(f"unexpected: {message}")