"""
Stack capture and frame decoding.

No side effects on import.
"""

from .capture import RawFrame, RawStack, capture
from .frames import (
    StackFrame,
    CapturedStack,
    STACK_HEADER,
    decode,
    format_frames,
    placeholder_frame,
)

__all__ = [
    "RawFrame",
    "RawStack",
    "capture",
    "StackFrame",
    "CapturedStack",
    "STACK_HEADER",
    "decode",
    "format_frames",
    "placeholder_frame",
]
