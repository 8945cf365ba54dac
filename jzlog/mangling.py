"""Cursor and output state shared by the symbol demangler's parsing rules."""

from __future__ import annotations

import re
import string
from dataclasses import dataclass
from typing import NamedTuple

_IDENTIFIER_START = frozenset(string.ascii_letters + "_")
_CLONE_SUFFIX = re.compile(r"(?:\.[A-Za-z]+\.[0-9]+)*")
_ANONYMOUS_PREFIX = "_GLOBAL__N_"


class _Snapshot(NamedTuple):
    pos: int
    output: str
    prev_name: str
    nest_level: int
    append: bool
    overflowed: bool


@dataclass
class ParseState:
    """Position in a mangled name plus the demangled text built so far.

    ``out_size`` bounds the output the way a fixed buffer with a trailing
    terminator would: at most ``out_size - 1`` characters are kept, and any
    attempt to write more marks the state as ``overflowed``.  ``None`` means
    the output is unbounded.
    """

    mangled: str
    out_size: int | None = None
    pos: int = 0
    output: str = ""
    prev_name: str = ""
    nest_level: int = -1
    append: bool = True
    overflowed: bool = False

    def snapshot(self) -> _Snapshot:
        """Capture everything a failed parse must be able to roll back."""
        return _Snapshot(
            self.pos,
            self.output,
            self.prev_name,
            self.nest_level,
            self.append,
            self.overflowed,
        )

    def restore(self, snapshot: _Snapshot) -> None:
        """Return to a state previously captured by :meth:`snapshot`."""
        (
            self.pos,
            self.output,
            self.prev_name,
            self.nest_level,
            self.append,
            self.overflowed,
        ) = snapshot

    def peek(self, offset: int = 0) -> str:
        """Character ``offset`` places past the cursor, or ``""`` past the end."""
        index = self.pos + offset
        if 0 <= index < len(self.mangled):
            return self.mangled[index]
        return ""

    def remaining(self) -> str:
        """The unparsed rest of the mangled name."""
        return self.mangled[self.pos:]

    def consume_char(self, ch: str) -> bool:
        """Advance past ``ch`` if it is the next character."""
        if ch and self.peek() == ch:
            self.pos += 1
            return True
        return False

    def consume_two(self, token: str) -> bool:
        """Advance past the two-character ``token`` if it comes next."""
        if len(token) == 2 and self.mangled.startswith(token, self.pos):
            self.pos += 2
            return True
        return False

    def consume_class(self, chars: str) -> bool:
        """Advance past the next character if it is one of ``chars``."""
        current = self.peek()
        if current and current in chars:
            self.pos += 1
            return True
        return False

    def append_text(self, text: str) -> None:
        """Write ``text`` to the output, flagging overflow when it does not fit."""
        if not text:
            return
        if self.out_size is None:
            self.output += text
            return
        room = max(self.out_size - 1 - len(self.output), 0)
        if len(text) > room:
            self.output += text[:room]
            self.overflowed = True
        else:
            self.output += text

    def maybe_append(self, text: str) -> bool:
        """Append ``text`` when appending is enabled; always returns True.

        A space is inserted to avoid ``<<`` runs, and identifiers are
        remembered so constructor and destructor names can repeat them.
        """
        if self.append and text:
            if text[0] == "<" and self.output.endswith("<"):
                self.append_text(" ")
            if text[0] in _IDENTIFIER_START:
                self.prev_name = text
            self.append_text(text)
        return True

    def result(self) -> str:
        """The demangled text produced so far."""
        return self.output


def is_function_clone_suffix(text: str) -> bool:
    """True if ``text`` is a run of ``.<letters>.<digits>`` clone markers."""
    return _CLONE_SUFFIX.fullmatch(text) is not None


def is_anonymous_namespace(text: str, length: int) -> bool:
    """True if an identifier of ``length`` at ``text`` names an anonymous namespace."""
    return length > len(_ANONYMOUS_PREFIX) and text.startswith(_ANONYMOUS_PREFIX)