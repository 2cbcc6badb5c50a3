import time
import threading

import pytest

from dockctl.docker.errors import Cancelled
from dockctl.utils.execution import ExecutionContext


def test_background_is_live():
    ctx = ExecutionContext.background()
    assert ctx.err() is None
    assert not ctx.done()
    assert ctx.remaining() is None
    ctx.check()


def test_cancel():
    ctx = ExecutionContext.background()
    ctx.cancel()
    assert ctx.err() == "context canceled"
    with pytest.raises(Cancelled):
        ctx.check()


def test_child_shares_parent_cancellation():
    parent = ExecutionContext.background()
    child = parent.with_timeout(60)
    parent.cancel()
    assert child.done()


def test_child_deadline_never_extends_parent():
    parent = ExecutionContext.background().with_timeout(1)
    child = parent.with_timeout(3600)
    assert child.deadline == parent.deadline


def test_deadline_expires():
    ctx = ExecutionContext.background().with_timeout(0.01)
    time.sleep(0.02)
    assert ctx.err() == "context deadline exceeded"
    assert ctx.remaining() == 0.0


def test_sleep_wakes_on_cancel():
    ctx = ExecutionContext.background()
    threading.Timer(0.05, ctx.cancel).start()

    start = time.monotonic()
    with pytest.raises(Cancelled, match="context canceled"):
        ctx.sleep(5)
    assert time.monotonic() - start < 1.0


def test_sleep_stops_at_deadline():
    ctx = ExecutionContext.background().with_timeout(0.05)

    start = time.monotonic()
    with pytest.raises(Cancelled, match="deadline exceeded"):
        ctx.sleep(5)
    assert time.monotonic() - start < 1.0


def test_sleep_returns_when_live():
    ExecutionContext.background().sleep(0)
