"""Demangler for Itanium C++ ABI symbol names.

The output is deliberately simplified: parameter types and template
arguments are skipped, so ``_Z1fIiEvi`` becomes ``f<>()``.  Class,
function, constructor, destructor and operator names are kept.
"""

from __future__ import annotations

import argparse
import string
import sys
from typing import Callable, Sequence, Union

from jzlog.mangling import ParseState, is_anonymous_namespace, is_function_clone_suffix

__all__ = ["DemangleError", "demangle", "demangle_or_original", "main"]

_DEFAULT_OUT_SIZE = 4096

_LOWER = frozenset(string.ascii_lowercase)
_ALPHA = frozenset(string.ascii_letters)
_DIGITS = frozenset(string.digits)
_SEQ_ID_CHARS = frozenset(string.digits + string.ascii_uppercase)
_FLOAT_CHARS = frozenset(string.digits + "abcdef")

_OPERATORS = {
    "nw": "new", "na": "new[]", "dl": "delete", "da": "delete[]",
    "ps": "+", "ng": "-", "ad": "&", "de": "*", "co": "~",
    "pl": "+", "mi": "-", "ml": "*", "dv": "/", "rm": "%",
    "an": "&", "or": "|", "eo": "^", "aS": "=",
    "pL": "+=", "mI": "-=", "mL": "*=", "dV": "/=", "rM": "%=",
    "aN": "&=", "oR": "|=", "eO": "^=",
    "ls": "<<", "rs": ">>", "lS": "<<=", "rS": ">>=",
    "eq": "==", "ne": "!=", "lt": "<", "gt": ">", "le": "<=", "ge": ">=",
    "nt": "!", "aa": "&&", "oo": "||", "pp": "++", "mm": "--",
    "cm": ",", "pm": "->*", "pt": "->", "cl": "()", "ix": "[]",
    "qu": "?", "st": "sizeof", "sz": "sizeof",
}

_BUILTIN_TYPES = {
    "v": "void", "w": "wchar_t", "b": "bool", "c": "char",
    "a": "signed char", "h": "unsigned char", "s": "short",
    "t": "unsigned short", "i": "int", "j": "unsigned int",
    "l": "long", "m": "unsigned long", "x": "long long",
    "y": "unsigned long long", "n": "__int128", "o": "unsigned __int128",
    "f": "float", "d": "double", "e": "long double", "g": "__float128",
    "z": "ellipsis",
}

# Keyed by the character that follows the leading "S".
_STD_SUBSTITUTIONS = {
    "t": "",
    "a": "allocator",
    "b": "basic_string",
    "s": "string",
    "i": "istream",
    "o": "ostream",
    "d": "iostream",
}

# A grammar step: a literal token of one or two characters, or a rule.
_Part = Union[str, Callable[[], object]]


class DemangleError(ValueError):
    """Raised when a symbol cannot be demangled or the result does not fit."""

    def __init__(self, mangled: str) -> None:
        super().__init__(f"cannot demangle {mangled!r}")
        self.mangled = mangled


class _Parser:
    """Recursive-descent parser over a :class:`ParseState`.

    Every rule returns True on success; on failure it leaves the state as
    it found it (apart from the few places where the grammar itself does not).
    """

    def __init__(self, state: ParseState) -> None:
        self.s = state

    # -- combinators -----------------------------------------------------

    def _match(self, parts: Sequence[_Part]) -> bool:
        """Match every part in turn, stopping at the first that fails."""
        s = self.s
        for part in parts:
            if isinstance(part, str):
                ok = s.consume_char(part) if len(part) == 1 else s.consume_two(part)
            else:
                ok = part()
            if not ok:
                return False
        return True

    def _first(self, *alternatives: Sequence[_Part]) -> bool:
        """Try each alternative from the same state; keep the first that matches."""
        s = self.s
        copy = s.snapshot()
        for parts in alternatives:
            if self._match(parts):
                return True
            s.restore(copy)
        return False

    def _one_or_more(self, rule: Callable[[], bool]) -> bool:
        if not rule():
            return False
        while rule():
            pass
        return True

    def _zero_or_more(self, rule: Callable[[], bool]) -> bool:
        while rule():
            pass
        return True

    def _cls(self, chars: str) -> Callable[[], bool]:
        return lambda: self.s.consume_class(chars)

    def _opt(self, rule: Callable[[], object]) -> Callable[[], bool]:
        return lambda: bool(rule()) or True

    def _append(self, text: str) -> Callable[[], bool]:
        return lambda: self.s.maybe_append(text)

    def _has_number(self) -> bool:
        return self.number() is not None

    # -- state helpers ---------------------------------------------------

    def _enter_nested(self) -> bool:
        self.s.nest_level = 0
        return True

    def _leave_nested(self, previous: int) -> bool:
        self.s.nest_level = previous
        return True

    def _disable_append(self) -> bool:
        self.s.append = False
        return True

    def _restore_append(self, previous: bool) -> bool:
        self.s.append = previous
        return True

    def _maybe_increase_nest_level(self) -> None:
        if self.s.nest_level > -1:
            self.s.nest_level += 1

    def _maybe_append_separator(self) -> None:
        if self.s.nest_level >= 1:
            self.s.maybe_append("::")

    def _maybe_cancel_last_separator(self) -> None:
        s = self.s
        if s.nest_level >= 1 and s.append and len(s.output) >= 2:
            s.output = s.output[:-2]

    def _append_prev_name(self, destructor: bool) -> bool:
        s = self.s
        prev_name = s.prev_name
        if destructor:
            s.maybe_append("~")
        s.maybe_append(prev_name)
        return True

    def _std_abbreviation(self) -> bool:
        s = self.s
        real_name = _STD_SUBSTITUTIONS.get(s.peek())
        if real_name is None:
            return False
        s.maybe_append("std")
        if real_name:
            s.maybe_append("::")
            s.maybe_append(real_name)
        s.pos += 1
        return True

    # -- grammar ---------------------------------------------------------

    def top_level(self) -> bool:
        s = self.s
        if not self.mangled_name():
            return False
        rest = s.remaining()
        if not rest or is_function_clone_suffix(rest):
            return True
        if rest.startswith("@"):
            s.maybe_append(rest)
            return True
        return False

    def mangled_name(self) -> bool:
        return self._match(("_Z", self.encoding))

    def encoding(self) -> bool:
        return self._first(
            (self.name, self.bare_function_type),
            (self.name,),
            (self.special_name,),
        )

    def name(self) -> bool:
        return self._first(
            (self.nested_name,),
            (self.local_name,),
            (self.unscoped_template_name, self.template_args),
            (self.unscoped_name,),
        )

    def unscoped_name(self) -> bool:
        return self._first(
            (self.unqualified_name,),
            ("St", self._append("std::"), self.unqualified_name),
        )

    def unscoped_template_name(self) -> bool:
        return self.unscoped_name() or self.substitution()

    def nested_name(self) -> bool:
        previous = self.s.nest_level
        return self._first(
            (
                "N",
                self._enter_nested,
                self._opt(self.cv_qualifiers),
                self.prefix,
                lambda: self._leave_nested(previous),
                "E",
            )
        )

    def prefix(self) -> bool:
        has_something = False
        while True:
            self._maybe_append_separator()
            if self.template_param() or self.substitution() or self.unscoped_name():
                has_something = True
                self._maybe_increase_nest_level()
                continue
            self._maybe_cancel_last_separator()
            if has_something and self.template_args():
                return self.prefix()
            break
        return True

    def unqualified_name(self) -> bool:
        return (
            self.operator_name()
            or self.ctor_dtor_name()
            or (self.source_name() and (self.abi_tags() or True))
            or (self.local_source_name() and (self.abi_tags() or True))
        )

    def source_name(self) -> bool:
        s = self.s
        copy = s.snapshot()
        length = self.number()
        if length is not None and self.identifier(length):
            return True
        s.restore(copy)
        return False

    def local_source_name(self) -> bool:
        return self._first(("L", self.source_name, self._opt(self.discriminator)))

    def number(self) -> int | None:
        s = self.s
        sign = -1 if s.consume_char("n") else 1
        start = s.pos
        while s.peek() and s.peek() in _DIGITS:
            s.pos += 1
        if s.pos == start:
            return None
        return sign * int(s.mangled[start:s.pos])

    def _run_of(self, chars: frozenset[str]) -> bool:
        s = self.s
        start = s.pos
        while s.peek() and s.peek() in chars:
            s.pos += 1
        return s.pos != start

    def float_number(self) -> bool:
        return self._run_of(_FLOAT_CHARS)

    def seq_id(self) -> bool:
        return self._run_of(_SEQ_ID_CHARS)

    def identifier(self, length: int) -> bool:
        s = self.s
        if length < 0 or len(s.remaining()) < length:
            return False
        if is_anonymous_namespace(s.remaining(), length):
            s.maybe_append("(anonymous namespace)")
        else:
            s.maybe_append(s.mangled[s.pos:s.pos + length])
        s.pos += length
        return True

    def abi_tags(self) -> bool:
        previous = self.s.append
        return self._first(
            (
                self._disable_append,
                lambda: self._one_or_more(self.abi_tag),
                lambda: self._restore_append(previous),
            )
        )

    def abi_tag(self) -> bool:
        return self._match(("B", self.source_name))

    def operator_name(self) -> bool:
        s = self.s
        if len(s.remaining()) < 2:
            return False
        previous = s.nest_level
        if self._first(
            (
                "cv",
                self._append("operator "),
                self._enter_nested,
                self.type,
                lambda: self._leave_nested(previous),
            ),
            ("v", self._cls(string.digits), self.source_name),
        ):
            return True

        first, second = s.peek(0), s.peek(1)
        if not (first in _LOWER and second in _ALPHA):
            return False
        real_name = _OPERATORS.get(first + second)
        if real_name is None:
            return False
        s.maybe_append("operator")
        if real_name[0] in _LOWER:
            s.maybe_append(" ")
        s.maybe_append(real_name)
        s.pos += 2
        return True

    def special_name(self) -> bool:
        previous = self.s.append
        return self._first(
            ("T", self._cls("VTIS"), self.type),
            ("Tc", self.call_offset, self.call_offset, self.encoding),
            ("GV", self.name),
            ("T", self.call_offset, self.encoding),
            (
                "TC",
                self.type,
                self._has_number,
                "_",
                self._disable_append,
                self.type,
                lambda: self._restore_append(previous),
            ),
            ("T", self._cls("FJ"), self.type),
            ("GR", self.name),
            ("GA", self.encoding),
            ("T", self._cls("hv"), self.call_offset, self.encoding),
        )

    def call_offset(self) -> bool:
        return self._first(
            ("h", self.nv_offset, "_"),
            ("v", self.v_offset, "_"),
        )

    def nv_offset(self) -> bool:
        return self._has_number()

    def v_offset(self) -> bool:
        return self._first((self._has_number, "_", self._has_number))

    def ctor_dtor_name(self) -> bool:
        return self._first(
            ("C", self._cls("123"), lambda: self._append_prev_name(False)),
            ("D", self._cls("012"), lambda: self._append_prev_name(True)),
        )

    def type(self) -> bool:
        return self._first(
            (self.cv_qualifiers, self.type),
            (self._cls("OPRCG"), self.type),
            ("Dp", self.type),
            ("D", self._cls("tT"), self.expression, "E"),
            ("U", self.source_name, self.type),
            (self.builtin_type,),
            (self.function_type,),
            (self.class_enum_type,),
            (self.array_type,),
            (self.pointer_to_member_type,),
            (self.substitution,),
            (self.template_template_param, self.template_args),
            (self.template_param,),
        )

    def cv_qualifiers(self) -> bool:
        s = self.s
        found = [s.consume_char("r"), s.consume_char("V"), s.consume_char("K")]
        return any(found)

    def builtin_type(self) -> bool:
        s = self.s
        real_name = _BUILTIN_TYPES.get(s.peek())
        if real_name is not None:
            s.maybe_append(real_name)
            s.pos += 1
            return True
        return self._first(("u", self.source_name))

    def function_type(self) -> bool:
        return self._first(
            (
                "F",
                self._opt(lambda: self.s.consume_char("Y")),
                self.bare_function_type,
                "E",
            )
        )

    def bare_function_type(self) -> bool:
        previous = self.s.append
        return self._first(
            (
                self._disable_append,
                lambda: self._one_or_more(self.type),
                lambda: self._restore_append(previous),
                self._append("()"),
            )
        )

    def class_enum_type(self) -> bool:
        return self.name()

    def array_type(self) -> bool:
        return self._first(
            ("A", self._has_number, "_", self.type),
            ("A", self._opt(self.expression), "_", self.type),
        )

    def pointer_to_member_type(self) -> bool:
        return self._first(("M", self.type, self.type))

    def template_param(self) -> bool:
        # Template substitutions are not expanded; "?" stands in for them.
        return self._first(
            ("T_", self._append("?")),
            ("T", self._has_number, "_", self._append("?")),
        )

    def template_template_param(self) -> bool:
        return self.template_param() or self.substitution()

    def template_args(self) -> bool:
        previous = self.s.append
        return self._first(
            (
                self._disable_append,
                "I",
                lambda: self._one_or_more(self.template_arg),
                "E",
                lambda: self._restore_append(previous),
                self._append("<>"),
            )
        )

    def template_arg(self) -> bool:
        return self._first(
            (self._cls("IJ"), lambda: self._zero_or_more(self.template_arg), "E"),
            (self.type,),
            (self.expr_primary,),
            ("X", self.expression, "E"),
        )

    def expression(self) -> bool:
        op, expr = self.operator_name, self.expression
        return self._first(
            (self.template_param,),
            (self.expr_primary,),
            (op, expr, expr, expr),
            (op, expr, expr),
            (op, expr),
            ("st", self.type),
            ("sr", self.type, self.unqualified_name, self.template_args),
            ("sr", self.type, self.unqualified_name),
        )

    def expr_primary(self) -> bool:
        return self._first(
            ("L", self.type, self._has_number, "E"),
            ("L", self.type, self.float_number, "E"),
            ("L", self.mangled_name, "E"),
            ("LZ", self.encoding, "E"),
        )

    def local_name(self) -> bool:
        return self._first(
            (
                "Z",
                self.encoding,
                "E",
                self._append("::"),
                self.name,
                self._opt(self.discriminator),
            ),
            ("Z", self.encoding, "Es", self._opt(self.discriminator)),
        )

    def discriminator(self) -> bool:
        return self._first(("_", self._has_number))

    def substitution(self) -> bool:
        # Numbered substitutions are not expanded; "?" stands in for them.
        return self._first(
            ("S_", self._append("?")),
            ("S", self.seq_id, "_", self._append("?")),
            ("S", self._std_abbreviation),
        )


def demangle(mangled: str, out_size: int | None = None) -> str:
    """Demangle ``mangled`` into a simplified readable name.

    ``out_size`` limits the result as a buffer of that many bytes with a
    terminator would (at most ``out_size - 1`` characters); ``None`` means
    no limit.  Raises :class:`DemangleError` when the name is not a valid
    mangled symbol or the result does not fit.
    """
    state = ParseState(mangled, out_size)
    if _Parser(state).top_level() and not state.overflowed:
        return state.result()
    raise DemangleError(mangled)


def demangle_or_original(mangled: str) -> str:
    """Demangle ``mangled``, returning it unchanged if that is not possible."""
    try:
        return demangle(mangled, _DEFAULT_OUT_SIZE)
    except DemangleError:
        return mangled


def main(argv: Sequence[str] | None = None) -> int:
    """Demangle the symbols given, or each line of standard input if none are."""
    parser = argparse.ArgumentParser(
        prog="jzlog-demangle",
        description="Demangle Itanium C++ ABI symbol names.",
    )
    parser.add_argument("symbols", nargs="*", help="mangled names to demangle")
    args = parser.parse_args(argv)

    symbols = args.symbols or (line.rstrip("\n") for line in sys.stdin)
    for symbol in symbols:
        print(demangle_or_original(symbol))
    return 0