import pytest

from grid_navigator.scheduler import ManualScheduler, TkScheduler


def test_fires_in_time_then_schedule_order():
    sched = ManualScheduler()
    fired = []
    sched.call_later(10, lambda: fired.append("b"))
    sched.call_later(0, lambda: fired.append("a"))
    sched.call_later(10, lambda: fired.append("c"))
    sched.call_later(25, lambda: fired.append("d"))

    assert sched.advance(9) == 1
    assert fired == ["a"]
    assert sched.advance(1) == 2
    assert fired == ["a", "b", "c"]
    assert sched.now == 10
    assert sched.run_until_idle() == 1
    assert fired == ["a", "b", "c", "d"]
    assert sched.now == 25
    assert sched.pending == 0


def test_cancelled_callbacks_never_fire():
    sched = ManualScheduler()
    fired = []
    h = sched.call_later(5, lambda: fired.append(1))
    sched.call_later(6, lambda: fired.append(2))
    sched.cancel(h)
    sched.cancel(h)
    sched.cancel(12345)
    sched.run_until_idle()
    assert fired == [2]


def test_callbacks_can_schedule_more():
    sched = ManualScheduler()
    fired = []

    def first():
        fired.append(sched.now)
        sched.call_later(3, lambda: fired.append(sched.now))

    sched.call_later(2, first)
    sched.advance(10)
    assert fired == [2, 5]


def test_negative_delay_rejected():
    with pytest.raises(ValueError):
        ManualScheduler().call_later(-1, lambda: None)


class FakeWidget:
    def __init__(self):
        self.calls = []

    def after(self, ms, callback):
        self.calls.append(("after", ms))
        return f"after#{len(self.calls)}"

    def after_cancel(self, handle):
        if handle == "gone":
            raise ValueError(handle)
        self.calls.append(("cancel", handle))


def test_tk_scheduler_delegates_to_after():
    widget = FakeWidget()
    sched = TkScheduler(widget)
    handle = sched.call_later(40, lambda: None)
    sched.cancel(handle)
    sched.cancel("gone")
    assert widget.calls == [("after", 40), ("cancel", "after#1")]
