"""Log severities and their mapping from the library's 1-based levels."""

from __future__ import annotations

from enum import IntEnum

__all__ = ["Severity", "NUM_SEVERITIES", "from_jz_level"]


class Severity(IntEnum):
    """Severity of a log message, lowest first."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3
    FATAL = 4

    @property
    def letter(self) -> str:
        """The single letter that opens a log line of this severity."""
        return self.name[0]


NUM_SEVERITIES = len(Severity)


def from_jz_level(level: int) -> Severity:
    """Map a 1-based library level (1 = debug … 5 = fatal) to a :class:`Severity`."""
    try:
        return Severity(level - 1)
    except (ValueError, TypeError):
        raise ValueError(f"unknown log level {level!r}") from None