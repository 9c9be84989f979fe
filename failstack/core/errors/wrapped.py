# failstack/core/errors/wrapped.py
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Tuple

from failstack.core.stack import (
    CapturedStack,
    RawStack,
    StackFrame,
    STACK_HEADER,
    capture,
)
from .exceptions import UncaughtException


NIL_TEXT = "<nil>"
# Reported type for plain messages (and None), which carry no type of their own
GENERIC_TYPE_NAME = "Exception"


def _safe_str(x: Any) -> str:
    if x is None:
        return NIL_TEXT
    try:
        return str(x)
    except Exception:
        return f"<unprintable {type(x).__name__} object>"


def qualified_type_name(value: Any) -> str:
    """
    Type name of a wrapped value, spelled the way tracebacks print it:
    module-qualified unless the type is a builtin or lives in __main__.
    """
    if value is None or isinstance(value, str):
        return GENERIC_TYPE_NAME
    if isinstance(value, UncaughtException):
        return value.type_name
    cls = type(value)
    name = cls.__qualname__
    module = cls.__module__
    if module not in ("builtins", "__main__"):
        name = f"{module}.{name}"
    return name


@dataclass(eq=False)
class WrappedError(Exception):
    """
    An error value with the call stack captured where it was first wrapped.

    Equality is identity. The captured stack is shared with every copy made
    by wrap_prefix(), so the raw stack and decoded frames are computed once.
    """
    err: Any
    prefix: str = ""
    captured: CapturedStack = field(default_factory=lambda: CapturedStack(()), repr=False)

    def __post_init__(self) -> None:
        super().__init__(self.message)
        if isinstance(self.err, BaseException):
            self.__cause__ = self.err

    def __str__(self) -> str:
        return self.message

    @property
    def message(self) -> str:
        text = _safe_str(self.err)
        if self.prefix:
            return f"{self.prefix}: {text}"
        return text

    def stack(self) -> bytes:
        """Captured stack in traceback.format_stack() text format"""
        return self.captured.text().encode("utf-8", errors="backslashreplace")

    def error_stack(self) -> str:
        """Type name, message and formatted stack, as printed for a crash"""
        return f"{self.type_name()}: {self.message}\n\n{STACK_HEADER}\n{self.captured.text()}"

    def callers(self) -> RawStack:
        return self.captured.raw

    def stack_frames(self) -> Tuple[StackFrame, ...]:
        return self.captured.frames()

    def type_name(self) -> str:
        return qualified_type_name(self.err)

    def unwrap(self) -> Any:
        return self.err

    def __reduce__(self):
        # Code objects don't pickle; ship the decoded frames instead
        return (_rebuild, (self.err, self.prefix, self.captured.frames()))


def _rebuild(err: Any, prefix: str, frames: Tuple[StackFrame, ...]) -> WrappedError:
    return WrappedError(err=err, prefix=prefix, captured=CapturedStack((), frames))


# -------- constructors --------

def new(value: Any) -> WrappedError:
    """
    Wrap value with the stack of the caller.

    value may be a message string, any exception or object, or None.
    An existing WrappedError is wrapped again with a fresh stack.
    """
    return WrappedError(err=value, captured=CapturedStack(capture(1)))


def errorf(msg: str, *args: Any) -> WrappedError:
    """
    Format a message printf-style and wrap it with the stack of the caller.

    Substitution only happens when args are given, so a lone "%" is kept.
    """
    return WrappedError(err=_format_message(msg, args), captured=CapturedStack(capture(1)))


def wrap(value: Any, skip: int = 0) -> WrappedError:
    """
    Wrap value unless it is already wrapped.

    Args:
        value: Message, exception, object or None
        skip: Callers to elide above the caller of wrap()

    Returns:
        value itself if it is a WrappedError (no recapture),
        otherwise a new WrappedError.
    """
    if isinstance(value, WrappedError):
        return value
    return WrappedError(err=value, captured=CapturedStack(capture(1 + skip)))


def wrap_prefix(value: Any, prefix: str, skip: int = 0) -> WrappedError:
    """
    Wrap value and prepend prefix to its message.

    An already wrapped value keeps its underlying value and stack; an existing
    prefix is kept after the new one ("new: old: message").
    """
    err = wrap(value, 1 + skip)
    if err.prefix:
        prefix = f"{prefix}: {err.prefix}"
    return WrappedError(err=err.err, prefix=prefix, captured=err.captured)


def _format_message(msg: str, args: Tuple[Any, ...]) -> str:
    if not args:
        return msg
    # Same convention as logging.LogRecord.getMessage()
    if len(args) == 1 and isinstance(args[0], Mapping) and args[0]:
        args = args[0]
    try:
        return msg % args
    except (TypeError, ValueError, KeyError):
        return f"{msg} {args!r}"
