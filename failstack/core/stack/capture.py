# failstack/core/stack/capture.py
"""
Stack capture

Records the raw call stack of the calling thread as a tuple of RawFrame
tokens. A RawFrame keeps the code object (the symbol-table entry) and the
position inside it, but never the frame itself, so locals are not kept alive.
"""

from __future__ import annotations

import linecache
import logging
import sys
from types import CodeType
from typing import NamedTuple, Optional, Tuple

from failstack.config.loader import get_config

logger = logging.getLogger(__name__)


class RawFrame(NamedTuple):
    """One captured call site, innermost first in a raw stack"""
    code: CodeType
    lineno: Optional[int]
    offset: int  # last instruction offset (f_lasti)
    module: str


RawStack = Tuple[RawFrame, ...]


def capture(skip: int = 0) -> RawStack:
    """
    Capture the current call stack.

    Args:
        skip: Number of callers to elide above the function calling capture().
              capture(0) starts at the caller, capture(1) at the caller's caller.

    Returns:
        Tuple of RawFrame, innermost first, at most max_depth long.
        Empty if capture is disabled or skip is deeper than the stack.
    """
    config = get_config()
    if not config.capture_enabled:
        return ()

    try:
        frame = sys._getframe(max(skip, 0) + 1)
    except ValueError:
        return ()

    frames = []
    try:
        while frame is not None:
            if len(frames) >= config.max_depth:
                logger.debug(f"Stack truncated at {config.max_depth} frames")
                break
            code = frame.f_code
            f_globals = frame.f_globals
            # Same priming traceback.extract_stack() does for loader-backed modules
            linecache.lazycache(code.co_filename, f_globals)
            frames.append(RawFrame(
                code=code,
                lineno=frame.f_lineno,
                offset=frame.f_lasti,
                module=f_globals.get("__name__") or "",
            ))
            frame = frame.f_back
    finally:
        del frame

    return tuple(frames)
