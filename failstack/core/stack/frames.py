# failstack/core/stack/frames.py
"""
Frame decoding

Turns a raw stack into StackFrame records and renders frames in the exact
text format of traceback.format_stack().
"""

from __future__ import annotations

import linecache
import logging
import traceback
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Sequence, Tuple

from .capture import RawStack

logger = logging.getLogger(__name__)

UNKNOWN_FILE = "<unknown>"
UNKNOWN_NAME = "???"

# Line the runtime prints ahead of a native stack dump
STACK_HEADER = "Traceback (most recent call last):"


@dataclass(frozen=True)
class StackFrame:
    """
    One decoded call site.

    name is the qualified name inside its module (Class.method,
    outer.<locals>.inner); code_name is the bare code-object name the
    runtime prints in tracebacks.
    """
    file: str
    line_number: Optional[int]
    package: str
    name: str
    offset: int = -1
    code_name: str = ""

    @property
    def func(self) -> str:
        """Fully qualified symbol in module:qualname form"""
        if not self.package:
            return self.name
        return f"{self.package}:{self.name}"

    def source_line(self) -> Optional[str]:
        """Stripped source line for this frame, None if unavailable"""
        if not self.line_number or self.file == UNKNOWN_FILE:
            return None
        line = linecache.getline(self.file, self.line_number)
        return line.strip() or None

    def to_summary(self) -> traceback.FrameSummary:
        return traceback.FrameSummary(
            self.file,
            self.line_number,
            self.code_name or self.name,
            lookup_line=False,
        )

    def __str__(self) -> str:
        return format_frames((self,))


def placeholder_frame(offset: int = -1) -> StackFrame:
    """Best-effort frame for a token that cannot be resolved"""
    return StackFrame(
        file=UNKNOWN_FILE,
        line_number=0,
        package="",
        name=UNKNOWN_NAME,
        offset=offset,
        code_name=UNKNOWN_NAME,
    )


def decode(raw: Iterable[Any]) -> Tuple[StackFrame, ...]:
    """
    Decode a raw stack into frames, innermost first.

    Never raises: tokens that cannot be resolved become placeholder frames.
    """
    return tuple(_decode_token(token) for token in raw)


def _decode_token(token: Any) -> StackFrame:
    try:
        code = token.code
        code_name = code.co_name
        return StackFrame(
            file=code.co_filename,
            line_number=token.lineno,
            package=token.module or "",
            name=getattr(code, "co_qualname", None) or code_name,
            offset=token.offset,
            code_name=code_name,
        )
    except Exception as e:
        logger.debug(f"Unresolvable stack token {token!r}: {e}")
        offset = getattr(token, "offset", -1)
        return placeholder_frame(offset if isinstance(offset, int) else -1)


def format_frames(frames: Sequence[StackFrame]) -> str:
    """
    Render innermost-first frames as traceback.format_stack() would
    (outermost first, repeated lines collapsed).
    """
    ordered = list(reversed(frames))
    for filename in {frame.file for frame in ordered}:
        linecache.checkcache(filename)
    summary = traceback.StackSummary.from_list([frame.to_summary() for frame in ordered])
    return "".join(summary.format())


class CapturedStack:
    """
    A raw stack plus its lazily decoded frames.

    Shared between a wrapped error and its prefixed copies. The frames cache
    goes from unset to computed once; concurrent first readers may decode
    twice, and both publish equal tuples.
    """

    __slots__ = ("raw", "_frames")

    def __init__(self, raw: RawStack, frames: Optional[Tuple[StackFrame, ...]] = None):
        self.raw = raw
        self._frames = frames

    def frames(self) -> Tuple[StackFrame, ...]:
        frames = self._frames
        if frames is None:
            frames = decode(self.raw)
            self._frames = frames
        return frames

    def text(self) -> str:
        return format_frames(self.frames())
