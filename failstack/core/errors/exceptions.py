# failstack/core/errors/exceptions.py
from __future__ import annotations


class TracebackParseError(ValueError):
    """Raised when text does not contain a parseable Python traceback"""


class UncaughtException(Exception):
    """
    Underlying value of an error recovered from printed traceback text.

    The original exception object is gone; only its printed type name and
    message survive.
    """

    def __init__(self, type_name: str, message: str = "") -> None:
        super().__init__(message)
        self.type_name = type_name
        self.message = message

    def __str__(self) -> str:
        return self.message
