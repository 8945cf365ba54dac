"""Intercept messages logged through a manager, for use in tests."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Callable

from jzlog.library import LogManager, _default_manager
from jzlog.severity import Severity

__all__ = ["CapturedMessage", "ScopedLogCapture"]


@dataclass(frozen=True)
class CapturedMessage:
    """Severity, source file and text of one intercepted message."""

    severity: Severity
    file_path: str
    message: str


class ScopedLogCapture:
    """Records every message logged through ``manager`` while it is open.

    Interception starts on construction and ends on :meth:`close` or at the
    end of a ``with`` block.  ``handler``, if given, is called with each
    message after it is recorded and may itself log.
    """

    def __init__(
        self,
        manager: LogManager | None = None,
        handler: Callable[[CapturedMessage], object] | None = None,
    ) -> None:
        self._manager = manager if manager is not None else _default_manager
        self._handler = handler
        self._lock = threading.Lock()
        self._messages: list[CapturedMessage] = []
        self._open = True
        self._manager.add_sink(self)

    @property
    def messages(self) -> list[CapturedMessage]:
        """A copy of the messages recorded so far, in order."""
        with self._lock:
            return list(self._messages)

    def send(self, severity: Severity, file_path: str, message: str) -> None:
        """Record one message and pass it to the handler."""
        captured = CapturedMessage(Severity(severity), file_path, message)
        with self._lock:
            self._messages.append(captured)
        if self._handler is not None:
            self._handler(captured)

    def close(self) -> None:
        """Stop intercepting messages."""
        if self._open:
            self._open = False
            self._manager.remove_sink(self)

    def __enter__(self) -> ScopedLogCapture:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()