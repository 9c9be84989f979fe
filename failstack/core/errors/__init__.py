# failstack/core/errors/__init__.py
"""
Wrapped error values for FailStack.

This package defines the components responsible for:
- Wrapping any failure value with the stack where it was first seen
- Matching and extracting values along a wrap chain
- Recovering wrapped errors from printed tracebacks

No side effects on import.
"""

from .exceptions import TracebackParseError, UncaughtException
from .wrapped import (
    WrappedError,
    new,
    errorf,
    wrap,
    wrap_prefix,
    qualified_type_name,
    NIL_TEXT,
    GENERIC_TYPE_NAME,
)
from .chain import ErrorSlot, unwrap, iter_chain, matches, extract, find
from .parse import parse_traceback

__all__ = [
    "TracebackParseError",
    "UncaughtException",
    "WrappedError",
    "new",
    "errorf",
    "wrap",
    "wrap_prefix",
    "qualified_type_name",
    "NIL_TEXT",
    "GENERIC_TYPE_NAME",
    "ErrorSlot",
    "unwrap",
    "iter_chain",
    "matches",
    "extract",
    "find",
    "parse_traceback",
]
