# failstack/__init__.py
"""
FailStack - Call stacks for any failure value

Wrap an exception, a message or any other value with the stack where it was
first seen, read that stack back as traceback text or as frames, and test
wrapped errors against sentinels.

Basic usage:

    >>> import failstack
    >>> err = failstack.new("disk full")
    >>> print(err.error_stack())
    >>> for frame in err.stack_frames():
    ...     print(frame.file, frame.line_number, frame.package, frame.name)

Wrapping without recapturing:

    >>> try:
    ...     read_chunk()
    ... except EOFError as e:
    ...     raise failstack.wrap_prefix(e, "reading header")

Matching a sentinel through wrappers:

    >>> NOT_FOUND = LookupError("not found")
    >>> failstack.matches(failstack.wrap(NOT_FOUND), NOT_FOUND)
    True

Extracting a typed value:

    >>> slot = failstack.ErrorSlot(OSError)
    >>> if failstack.extract(err, slot):
    ...     print(slot.value.errno)
"""

__version__ = "0.1.0"

from .core.errors import (
    WrappedError,
    new,
    errorf,
    wrap,
    wrap_prefix,
    ErrorSlot,
    unwrap,
    iter_chain,
    matches,
    extract,
    find,
    parse_traceback,
    UncaughtException,
    TracebackParseError,
)
from .core.stack import StackFrame, RawFrame, capture, decode, format_frames
from .config import StackConfig, load_config, get_config, set_config, configure

__all__ = [
    # Version
    "__version__",

    # Constructors
    "WrappedError",
    "new",
    "errorf",
    "wrap",
    "wrap_prefix",

    # Chain
    "ErrorSlot",
    "unwrap",
    "iter_chain",
    "matches",
    "extract",
    "find",

    # Parsing
    "parse_traceback",
    "UncaughtException",
    "TracebackParseError",

    # Stack
    "StackFrame",
    "RawFrame",
    "capture",
    "decode",
    "format_frames",

    # Config
    "StackConfig",
    "load_config",
    "get_config",
    "set_config",
    "configure",
]
