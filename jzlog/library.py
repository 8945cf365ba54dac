"""Named loggers writing to size-limited files and to the console."""

from __future__ import annotations

import itertools
import os
import sys
import threading
from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum
from typing import IO, Protocol

from jzlog.severity import Severity, from_jz_level

__all__ = [
    "LogError",
    "FileMode",
    "OutputTarget",
    "LogSink",
    "LogLibrary",
    "LogManager",
    "create_log",
    "get_log",
    "cleanup_log",
]

DEFAULT_NAME = "MyLog"
DEFAULT_DIR = "./"
MAX_DIR_LENGTH = 256
MIN_FILE_SIZE = 1
MAX_FILE_SIZE = 1000
DEFAULT_FILE_SIZE = 10
_MEGABYTE = 1024 * 1024

_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))


class LogError(ValueError):
    """Raised when a logger is misconfigured or asked to do something invalid."""


class FileMode(IntEnum):
    """What happens when a log file reaches its size limit."""

    REWIND = 0
    CREATE = 1


class OutputTarget(IntEnum):
    """Where a severity threshold applies."""

    CONSOLE = 0
    FILE = 1


class LogSink(Protocol):
    """Receives every message logged through a manager's loggers."""

    def send(self, severity: Severity, file_path: str, message: str) -> None: ...


@dataclass(frozen=True)
class _Settings:
    directory: str
    create_new: bool
    max_bytes: int
    file_threshold: int
    console_threshold: int


def _caller_location() -> tuple[str, str, int]:
    """File, function and line of the nearest caller outside this package."""
    frame = sys._getframe(1)
    while frame is not None:
        path = os.path.dirname(os.path.abspath(frame.f_code.co_filename))
        if path != _PACKAGE_DIR:
            return frame.f_code.co_filename, frame.f_code.co_name, frame.f_lineno
        frame = frame.f_back
    return "", "", 0


class LogLibrary:
    """One named logger with its own directory, file policy and thresholds."""

    def __init__(self, name: str | None = None, manager: LogManager | None = None) -> None:
        self.name = name or DEFAULT_NAME
        self._manager = manager
        self._lock = threading.Lock()
        self._log_dir = DEFAULT_DIR
        self._create_new = False
        self._max_size = DEFAULT_FILE_SIZE
        self._file_level = int(Severity.DEBUG)
        self._console_level = int(Severity.DEBUG)
        self._settings: _Settings | None = None
        self._file: IO[bytes] | None = None
        self._file_path: str | None = None

    @property
    def log_dir(self) -> str:
        return self._log_dir

    @property
    def file_path(self) -> str | None:
        """Path of the file currently written to, if one is open."""
        return self._file_path

    def set_log_dir(self, log_dir: str | os.PathLike[str] | None) -> None:
        """Direct file output to ``log_dir`` from the next message on."""
        if log_dir is None:
            raise LogError("log directory must not be None")
        path = os.fspath(log_dir)
        if len(path.encode("utf-8")) > MAX_DIR_LENGTH:
            raise LogError(f"log directory longer than {MAX_DIR_LENGTH} bytes")
        with self._lock:
            self._log_dir = path
            self._invalidate()

    def set_log_property(self, file_mode: FileMode | int, file_size: int) -> None:
        """Set the file policy and the size limit in megabytes (1 to 1000)."""
        if not MIN_FILE_SIZE <= file_size <= MAX_FILE_SIZE:
            raise LogError(
                f"file size must be between {MIN_FILE_SIZE} and {MAX_FILE_SIZE} MB"
            )
        with self._lock:
            self._create_new = file_mode != FileMode.REWIND
            self._max_size = file_size

    def set_log_level(self, target: OutputTarget | int, level: int) -> None:
        """Set the lowest 1-based level written to the console or to the file."""
        with self._lock:
            if target == OutputTarget.CONSOLE:
                self._console_level = level - 1
            else:
                self._file_level = level - 1
            self._invalidate()

    def log(self, level: int, message: str) -> None:
        """Log ``message`` at the 1-based ``level`` (1 = debug … 5 = fatal)."""
        with self._lock:
            if self._settings is None:
                if not self._log_dir:
                    raise LogError("log directory is not set")
                self._settings = _Settings(
                    directory=self._log_dir,
                    create_new=self._create_new,
                    max_bytes=self._max_size * _MEGABYTE,
                    file_threshold=self._file_level,
                    console_threshold=self._console_level,
                )
            settings = self._settings

        try:
            severity = from_jz_level(level)
        except ValueError as exc:
            raise LogError(str(exc)) from None

        text = message or ""
        file_path, _, line_no = _caller_location()
        now = datetime.now()
        line = (
            f"{severity.letter}{now:%Y%m%d %H:%M:%S}.{now.microsecond:06d} "
            f"{threading.get_ident()} {os.path.basename(file_path)}:{line_no}] {text}\n"
        )

        if severity >= settings.file_threshold:
            with self._lock:
                self._write_file(settings, line.encode("utf-8"))
        if severity >= settings.console_threshold:
            sys.stderr.write(line)
            sys.stderr.flush()
        if self._manager is not None:
            self._manager._dispatch(severity, file_path, text)

    def _invalidate(self) -> None:
        self._settings = None
        self._close_file()

    def _close_file(self) -> None:
        if self._file is not None:
            self._file.close()
        self._file = None
        self._file_path = None

    def _close(self) -> None:
        with self._lock:
            self._invalidate()

    def _open(self, settings: _Settings) -> None:
        self._close_file()
        if not settings.create_new:
            path = os.path.join(settings.directory, f"{self.name}.log")
            self._file = open(path, "ab")
            self._file_path = path
            return
        stamp = datetime.now().strftime("%Y%m%d-%H%M%S")
        base = os.path.join(settings.directory, f"{self.name}.{stamp}.{os.getpid()}")
        for counter in itertools.count():
            path = f"{base}.log" if counter == 0 else f"{base}.{counter}.log"
            try:
                self._file = open(path, "xb")
            except FileExistsError:
                continue
            self._file_path = path
            return

    def _write_file(self, settings: _Settings, data: bytes) -> None:
        if self._file is None:
            self._open(settings)
        else:
            size = self._file.tell()
            if size > 0 and size + len(data) > settings.max_bytes:
                if settings.create_new:
                    self._open(settings)
                else:
                    self._file.seek(0)
                    self._file.truncate()
        assert self._file is not None
        self._file.write(data)
        self._file.flush()


class LogManager:
    """Registry of named loggers and of the sinks that see their messages."""

    def __init__(self) -> None:
        self._logs: dict[str, LogLibrary] = {}
        self._sinks: list[LogSink] = []
        self._lock = threading.RLock()

    def add_log(self, name: str | None) -> LogLibrary:
        """Create and register a logger; raises :class:`LogError` if the name is taken."""
        key = name or ""
        with self._lock:
            if key in self._logs:
                raise LogError(f"log {key!r} already exists")
            library = LogLibrary(key, self)
            self._logs[key] = library
            return library

    def get_log(self, name: str | None) -> LogLibrary | None:
        """The logger registered under ``name``, or None."""
        with self._lock:
            return self._logs.get(name or "")

    def remove_log(self, library: LogLibrary) -> None:
        """Unregister ``library`` and close its file."""
        with self._lock:
            for key, registered in self._logs.items():
                if registered is library:
                    del self._logs[key]
                    library._close()
                    break

    def add_sink(self, sink: LogSink) -> None:
        with self._lock:
            self._sinks.append(sink)

    def remove_sink(self, sink: LogSink) -> None:
        with self._lock:
            if sink in self._sinks:
                self._sinks.remove(sink)

    def _dispatch(self, severity: Severity, file_path: str, message: str) -> None:
        with self._lock:
            sinks = list(self._sinks)
        for sink in sinks:
            sink.send(severity, file_path, message)


_default_manager = LogManager()


def create_log(name: str | None) -> LogLibrary:
    """Create a logger in the default manager; raises :class:`LogError` if it exists."""
    return _default_manager.add_log(name)


def get_log(name: str | None) -> LogLibrary | None:
    """Look up a logger in the default manager."""
    return _default_manager.get_log(name)


def cleanup_log(library: LogLibrary) -> None:
    """Remove a logger from the default manager."""
    _default_manager.remove_log(library)