"""Capture the calling thread's stack as a list of frames."""

from __future__ import annotations

import sys
from traceback import FrameSummary

__all__ = ["STACK_LENGTH", "get_stack_trace"]

STACK_LENGTH = 64


def get_stack_trace(max_depth: int, skip_count: int = 0) -> list[FrameSummary]:
    """Up to ``max_depth`` frames, innermost first, below the caller's ``skip_count``.

    The frame of this function itself is never included, and at most
    ``STACK_LENGTH`` frames are examined in all.
    """
    frames: list[FrameSummary] = []
    frame = sys._getframe(0)
    while frame is not None and len(frames) < STACK_LENGTH:
        code = frame.f_code
        frames.append(
            FrameSummary(code.co_filename, frame.f_lineno, code.co_name, line=None)
        )
        frame = frame.f_back

    start = max(skip_count + 1, 0)
    count = min(max(len(frames) - start, 0), max(max_depth, 0))
    return frames[start:start + count]