# failstack/core/errors/chain.py
"""
Wrap chain traversal

A chain runs from an error through its "unwraps to" links:
- WrappedError -> its underlying value
- any object with an unwrap() method -> unwrap()
- an exception raised "from" another -> its __cause__

Walks are iterative and stop on a revisited node, so a cyclic __cause__
chain on a foreign exception terminates.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Generic, Iterator, Optional, Type, TypeVar

from .wrapped import WrappedError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class ErrorSlot(Generic[T]):
    """Receives the first chain node of the requested type (see extract())"""
    kind: Type[T]
    value: Optional[T] = None


def unwrap(node: Any) -> Any:
    """Next link in the chain, None at the end"""
    if isinstance(node, WrappedError):
        return node.err
    method = getattr(node, "unwrap", None)
    if callable(method):
        try:
            return method()
        except Exception as e:
            logger.debug(f"unwrap() of {type(node).__name__} failed, ending chain: {e}")
            return None
    if isinstance(node, BaseException):
        return node.__cause__
    return None


def iter_chain(err: Any) -> Iterator[Any]:
    """Yield err and every node it unwraps to, outermost first"""
    seen = set()
    node = err
    while node is not None and id(node) not in seen:
        seen.add(id(node))
        yield node
        node = unwrap(node)


def _innermost_wrapper(target: Any) -> Optional[WrappedError]:
    wrapper = None
    while isinstance(target, WrappedError):
        wrapper = target
        target = target.err
    return wrapper


def _same(node: Any, target: Any) -> bool:
    if node is target:
        return True
    if type(node) is not type(target):
        return False
    try:
        return bool(node == target)
    except Exception:
        return False


def matches(err: Any, target: Any) -> bool:
    """
    Report whether err is, or wraps, target.

    Wrapped targets are compared by the value they wrap, so a sentinel wrapped
    on both sides still matches. Exceptions compare by identity unless their
    type defines its own equality; a different exception with the same text
    never matches.

    A plain message (or None) has no identity of its own, so a wrapped message
    only matches its own wrapper and the wrap_prefix() copies sharing its
    captured stack. Two errors built from the same text never match, and a
    bare string target matches nothing.
    """
    if err is None:
        return False
    wrapper = _innermost_wrapper(target)
    sentinel = wrapper.err if wrapper is not None else target

    if sentinel is None or isinstance(sentinel, str):
        # a bare message is text, not a failure value
        if wrapper is None:
            return False
        for node in iter_chain(err):
            if node is target:
                return True
            if isinstance(node, WrappedError) and node.captured is wrapper.captured:
                return True
        return False

    for node in iter_chain(err):
        if node is target or _same(node, sentinel):
            return True
    return False


def _is_type_spec(kind: Any) -> bool:
    if isinstance(kind, type):
        return True
    return isinstance(kind, tuple) and all(_is_type_spec(k) for k in kind)


def extract(err: Any, slot: ErrorSlot[T]) -> bool:
    """
    Store the first chain node that is an instance of slot.kind in slot.value.

    Returns:
        True if a node was stored, False if the chain has no such node
        or slot.kind is not a type (or tuple of types).
    """
    if not _is_type_spec(slot.kind):
        logger.debug(f"extract() given non-type kind {slot.kind!r}")
        return False
    for node in iter_chain(err):
        if isinstance(node, slot.kind):
            slot.value = node
            return True
    return False


def find(err: Any, kind: Type[T]) -> Optional[T]:
    """First chain node that is an instance of kind, or None"""
    slot = ErrorSlot(kind)
    if extract(err, slot):
        return slot.value
    return None
