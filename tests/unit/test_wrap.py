# tests/unit/test_wrap.py
from __future__ import annotations

import pickle
import threading
import traceback

import pytest

from failstack import WrappedError, errorf, matches, new, wrap, wrap_prefix
from failstack.core.stack import STACK_HEADER


class HalfError(Exception):
    pass


class Unprintable:
    def __str__(self) -> str:
        raise RuntimeError("no text")


def _a():
    return _b(5)


def _b(i):
    return _c()


def _c():
    # both captured on one line so the innermost entries agree too
    err, native = new("hi"), traceback.format_stack()
    return err, native


def _a_skip():
    return _b_skip()


def _b_skip():
    return _c_skip()


def _c_skip():
    return wrap("hi", 2)


def test_new_message():
    assert new("foo").message == "foo"
    assert str(new("foo")) == "foo"
    assert new(ValueError("foo")).message == "foo"
    assert new(None).message == "<nil>"


def test_new_unprintable_value():
    assert new(Unprintable()).message == "<unprintable Unprintable object>"


def test_new_stack_starts_at_caller():
    err = new("foo")

    frame = err.stack_frames()[0]
    assert frame.name == "test_new_stack_starts_at_caller"
    assert frame.package == __name__
    assert frame.file == __file__


def test_stack_text_matches_format_stack():
    err, native = _a()

    ours = [str(frame) for frame in reversed(err.stack_frames())]
    assert len(ours) >= 4
    assert native[-len(ours):] == ours
    assert err.stack() == "".join(ours).encode("utf-8")

    names = [frame.name for frame in err.stack_frames()[:4]]
    assert names == ["_c", "_b", "_a", "test_stack_text_matches_format_stack"]


def test_skip_works():
    err = _a_skip()

    frames = err.stack_frames()
    assert frames[0].name == "_a_skip"
    assert frames[1].name == "test_skip_works"


def test_error_stack_format():
    err = new("foo")

    expected = err.type_name() + ": " + err.message + "\n\n" + STACK_HEADER + "\n" + err.stack().decode()
    assert err.error_stack() == expected
    assert err.error_stack().startswith("Exception: foo\n\nTraceback (most recent call last):\n")


def test_type_name():
    assert new("foo").type_name() == "Exception"
    assert new(None).type_name() == "Exception"
    assert new(ValueError("foo")).type_name() == "ValueError"
    assert new(HalfError("foo")).type_name() == f"{__name__}.HalfError"


def test_wrap():
    e = (lambda: wrap("hi", 1))()
    assert e.message == "hi"
    assert e.stack_frames()[0].name == "test_wrap"

    assert wrap(ValueError("yo")).message == "yo"
    assert wrap(e) is e
    assert wrap(e, 3) is e
    assert wrap(None).message == "<nil>"


def test_wrap_does_not_recapture():
    e = new("hi")
    raw = e.callers()

    assert wrap(e).callers() is raw


def test_wrap_prefix():
    e = (lambda: wrap_prefix("hi", "prefix", 1))()
    assert e.message == "prefix: hi"
    assert e.stack_frames()[0].name == "test_wrap_prefix"

    assert wrap_prefix(ValueError("yo"), "prefix").message == "prefix: yo"
    assert wrap_prefix(None, "prefix").message == "prefix: <nil>"


def test_wrap_prefix_existing_error():
    original = (lambda: wrap_prefix("hi", "prefix", 1))()
    prefixed = wrap_prefix(original, "prefix")

    assert prefixed is not original
    assert prefixed.err is original.err
    assert prefixed.callers() is original.callers()
    assert prefixed.stack_frames() is original.stack_frames()
    assert prefixed.message == "prefix: prefix: hi"
    assert prefixed.unwrap() == "hi"
    assert matches(prefixed, original)
    assert matches(original, prefixed)


def test_wrap_prefix_accumulates():
    e = ValueError("boom")
    once = wrap_prefix(e, "ctx")
    twice = wrap_prefix(once, "ctx")

    assert once.message == "ctx: boom"
    assert twice.message == "ctx: ctx: boom"
    assert twice.err is e


def test_errorf():
    err = errorf("can only halve even numbers, got %d", 3)

    assert err.message == "can only halve even numbers, got 3"
    assert err.type_name() == "Exception"
    assert err.stack_frames()[0].name == "test_errorf"


def test_errorf_formatting_rules():
    assert errorf("100%").message == "100%"
    assert errorf("%(n)s items", {"n": 2}).message == "2 items"
    assert errorf("%d", "x").message == "%d ('x',)"


def test_raise_keeps_cause():
    original = ValueError("boom")

    with pytest.raises(WrappedError) as exc_info:
        raise wrap(original)

    assert exc_info.value.__cause__ is original
    assert str(exc_info.value) == "boom"


def test_equality_is_identity():
    assert new("same") != new("same")


def test_concurrent_first_reads_agree():
    err = new("race")
    barrier = threading.Barrier(8)
    results = []

    def read():
        barrier.wait()
        results.append(err.stack_frames())

    threads = [threading.Thread(target=read) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(results) == 8
    assert all(r == results[0] for r in results)
    assert err.stack_frames() == results[0]


def test_pickle_keeps_message_and_frames():
    err = new(ValueError("bad"))

    restored = pickle.loads(pickle.dumps(err))

    assert isinstance(restored, WrappedError)
    assert restored.message == err.message
    assert restored.type_name() == "ValueError"
    assert restored.stack_frames() == err.stack_frames()
    assert restored.stack() == err.stack()
    assert restored.callers() == ()
    assert isinstance(restored.__cause__, ValueError)


def test_pickle_prefixed_message():
    err = wrap_prefix("disk full", "saving")

    restored = pickle.loads(pickle.dumps(err))

    assert restored.message == "saving: disk full"
    assert restored.prefix == "saving"
    assert restored.error_stack() == err.error_stack()
