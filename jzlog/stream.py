"""Builds one log message from pieces and logs it when closed."""

from __future__ import annotations

from typing import Any, Protocol

from jzlog.library import _caller_location

__all__ = [
    "MAX_CONTENT_LEN",
    "DEBUG",
    "INFO",
    "WARN",
    "ERROR",
    "FATAL",
    "LogStream",
    "log_stream",
    "debug",
    "info",
    "warn",
    "error",
    "fatal",
]

MAX_CONTENT_LEN = 4096

DEBUG = 1
INFO = 2
WARN = 3
ERROR = 4
FATAL = 5


class _Logger(Protocol):
    def log(self, level: int, message: str) -> None: ...


class LogStream:
    """Accumulates a message of at most ``MAX_CONTENT_LEN`` characters.

    Values are added with :meth:`write` or ``<<``; the message is logged
    once, on :meth:`close` or when a ``with`` block ends.  With no library
    nothing is collected or logged.
    """

    def __init__(self, library: _Logger | None, level: int) -> None:
        self.library = library
        self.level = level
        self._message = ""
        self._closed = False

    @property
    def message(self) -> str:
        return self._message

    def _append_text(self, text: str | None) -> None:
        if self.library is None:
            return
        if text:
            room = MAX_CONTENT_LEN - len(self._message)
            self._message += text[:max(room, 0)]
        else:
            self._message += "null"

    def _append_number(self, text: str) -> None:
        if self.library is None or len(self._message) > MAX_CONTENT_LEN - len(text):
            return
        self._message += text

    def write(self, value: Any) -> LogStream:
        """Append ``value``; text is cut to fit, numbers that do not fit are dropped."""
        if value is None or isinstance(value, str):
            self._append_text(value)
        elif isinstance(value, bool):
            self._append_text("true" if value else "false")
        elif isinstance(value, int):
            self._append_number(str(value))
        elif isinstance(value, float):
            self._append_number(f"{value:g}")
        else:
            raise TypeError(f"cannot log a value of type {type(value).__name__}")
        return self

    __lshift__ = write

    def close(self) -> None:
        """Log the collected message; later calls do nothing."""
        if self._closed:
            return
        self._closed = True
        if self.library is not None:
            self.library.log(self.level, self._message)

    def __enter__(self) -> LogStream:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def log_stream(library: _Logger | None, level: int) -> LogStream:
    """A stream prefixed with the calling file and function."""
    file_path, function, _ = _caller_location()
    return LogStream(library, level) << " [" << file_path << ":" << function << "] "


def debug(library: _Logger | None) -> LogStream:
    return log_stream(library, DEBUG)


def info(library: _Logger | None) -> LogStream:
    return log_stream(library, INFO)


def warn(library: _Logger | None) -> LogStream:
    return log_stream(library, WARN)


def error(library: _Logger | None) -> LogStream:
    return log_stream(library, ERROR)


def fatal(library: _Logger | None) -> LogStream:
    return log_stream(library, FATAL)