"""
Call-site resolution.

`here(skip)` reports a single stack frame, counted from whoever called `here`.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from types import FrameType

UNKNOWN = "unknown"

# 0: _frame_at, 1: here, 2: caller of here
_INTERNAL_SKIP = 2


@dataclass(frozen=True)
class Frame:
    """A single resolved point in the call stack."""

    file: str  # full path
    short_file: str  # base file name
    line: int
    func: str  # module + qualified name
    short_func: str  # function name only

    def format(self) -> str:
        return f"{self.file}:{self.line} {self.short_file}"

    def format_short(self) -> str:
        return f"{self.short_file}:{self.line} {self.short_func}"


UNKNOWN_FRAME = Frame(file=UNKNOWN, short_file=UNKNOWN, line=-1, func=UNKNOWN, short_func=UNKNOWN)


def _frame_at(depth: int) -> FrameType | None:
    try:
        return sys._getframe(depth)
    except ValueError:
        return None


def here(skip: int = 0) -> Frame:
    """Return the frame `skip` levels above the caller of `here`.

    skip=0 means the immediate caller. When the stack is shallower than
    requested, UNKNOWN_FRAME is returned instead of raising.
    """
    if skip < 0:
        raise ValueError(f"skip must be non-negative, got {skip}")

    frame = _frame_at(_INTERNAL_SKIP + skip)
    if frame is None:
        return UNKNOWN_FRAME

    code = frame.f_code
    module = frame.f_globals.get("__name__", "")
    qualname = getattr(code, "co_qualname", code.co_name)
    func = f"{module}.{qualname}" if module else qualname

    return Frame(
        file=code.co_filename,
        short_file=os.path.basename(code.co_filename),
        line=frame.f_lineno,
        func=func,
        short_func=short_func_name(func),
    )


def short_func_name(full: str) -> str:
    """'pkg.sub.Func' -> 'Func'."""
    if not full:
        return UNKNOWN
    i = full.rfind(".")
    if i >= 0 and i + 1 < len(full):
        return full[i + 1 :]
    return full
