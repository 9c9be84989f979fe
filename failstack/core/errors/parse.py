# failstack/core/errors/parse.py
"""
Traceback text parser

Recovers a WrappedError from a traceback printed by the interpreter, for
example one copied out of a log file, or from WrappedError.error_stack()
output. Only the last traceback block is used when exceptions were chained.
"""

from __future__ import annotations

import inspect
import logging
import re
import sys
from typing import Dict, List

from failstack.core.stack import CapturedStack, StackFrame, STACK_HEADER
from .exceptions import TracebackParseError, UncaughtException
from .wrapped import GENERIC_TYPE_NAME, WrappedError

logger = logging.getLogger(__name__)

_FILE_LINE = re.compile(r'^  File "(?P<file>.*)", line (?P<line>\d+)(?:, in (?P<name>.+))?$')


def parse_traceback(text: str) -> WrappedError:
    """
    Parse printed traceback text.

    Returns:
        WrappedError whose underlying value is an UncaughtException carrying
        the printed type name and message. Its frames come from the text;
        it has no raw stack.

    Raises:
        TracebackParseError: No traceback header, or a header without frames
    """
    lines = text.splitlines()

    start = None
    for index, line in enumerate(lines):
        if line.rstrip() == STACK_HEADER:
            start = index
    if start is None:
        raise TracebackParseError("no traceback header found")

    modules = _modules_by_file()
    frames: List[StackFrame] = []
    index = start + 1
    while index < len(lines) and lines[index].startswith(" "):
        match = _FILE_LINE.match(lines[index])
        if match:
            file = match.group("file")
            name = match.group("name") or "<module>"
            frames.append(StackFrame(
                file=file,
                line_number=int(match.group("line")),
                package=modules.get(file) or inspect.getmodulename(file) or "",
                name=name,
                code_name=name,
            ))
        index += 1

    if not frames:
        raise TracebackParseError("traceback has no frames")

    # error_stack() output puts the exception line ahead of the header
    exception_lines = lines[index:] if any(line.strip() for line in lines[index:]) else lines[:start]
    type_name, message = _parse_exception_line(exception_lines)
    logger.debug(f"Parsed traceback of {type_name} with {len(frames)} frames")

    frames.reverse()
    return WrappedError(
        err=UncaughtException(type_name, message),
        captured=CapturedStack((), tuple(frames)),
    )


def _parse_exception_line(lines: List[str]) -> tuple[str, str]:
    remainder = "\n".join(lines).strip()
    if not remainder:
        return GENERIC_TYPE_NAME, ""
    first, _, rest = remainder.partition("\n")
    type_name, sep, message = first.partition(": ")
    if not sep:
        type_name, message = first.rstrip(":"), ""
    if rest:
        message = f"{message}\n{rest}" if message else rest
    return type_name, message


def _modules_by_file() -> Dict[str, str]:
    result = {}
    for name, module in list(sys.modules.items()):
        path = getattr(module, "__file__", None)
        if isinstance(path, str):
            result.setdefault(path, name)
    return result
