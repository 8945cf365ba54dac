"""Flag defaults read from environment variables."""

from __future__ import annotations

import os
import re

__all__ = ["env_to_bool", "env_to_int", "env_to_string"]

# Leading part of a string as a base-10 integer parse reads it.
_LEADING_INT = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)")
_TRUE_STARTS = "tTyY1"


def env_to_string(name: str, default: str) -> str:
    """The value of ``name`` in the environment, or ``default`` if it is unset."""
    value = os.environ.get(name)
    return default if value is None else value


def env_to_bool(name: str, default: bool) -> bool:
    """Read ``name`` as a boolean, or ``default`` if it is unset.

    A value is true when it starts with one of ``t``, ``T``, ``y``, ``Y``
    or ``1``, or when it is empty.
    """
    value = os.environ.get(name)
    if value is None:
        return default
    return not value or value[0] in _TRUE_STARTS


def env_to_int(name: str, default: int) -> int:
    """Read ``name`` as a decimal integer, or ``default`` if it is unset.

    Leading whitespace and a sign are accepted and anything after the
    digits is ignored; a value with no leading digits reads as 0.
    """
    value = os.environ.get(name)
    if value is None:
        return default
    match = _LEADING_INT.match(value)
    return int(match.group(1)) if match else 0