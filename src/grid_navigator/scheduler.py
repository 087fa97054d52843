"""Single-threaded callback schedulers for the animator.

All waiting is expressed as callbacks on one event queue; nothing blocks.
`TkScheduler` rides on the Tk mainloop, `ManualScheduler` keeps a virtual
clock that is advanced explicitly (headless playback and tests).
"""
import heapq
import itertools
from typing import Any, Callable, Dict, List, Protocol, Tuple

Callback = Callable[[], None]


class Scheduler(Protocol):
    def call_later(self, delay: int, callback: Callback) -> Any:
        ...

    def cancel(self, handle: Any) -> None:
        ...


class ManualScheduler:
    """Virtual-time scheduler.

    Callbacks fire in (due time, scheduling order). A callback may schedule
    further callbacks; those fire in the same run if they fall due.
    """

    def __init__(self) -> None:
        self.now = 0
        self._heap: List[Tuple[int, int]] = []
        self._callbacks: Dict[int, Callback] = {}
        self._seq = itertools.count()

    def call_later(self, delay: int, callback: Callback) -> int:
        if delay < 0:
            raise ValueError("delay must be non-negative")
        handle = next(self._seq)
        self._callbacks[handle] = callback
        heapq.heappush(self._heap, (self.now + delay, handle))
        return handle

    def cancel(self, handle: int) -> None:
        # unknown or already fired handles are ignored
        self._callbacks.pop(handle, None)

    @property
    def pending(self) -> int:
        return len(self._callbacks)

    def next_due(self):
        self._drop_cancelled()
        return self._heap[0][0] if self._heap else None

    def _drop_cancelled(self) -> None:
        while self._heap and self._heap[0][1] not in self._callbacks:
            heapq.heappop(self._heap)

    def advance(self, ms: int) -> int:
        """Move the clock forward by `ms`, firing everything that falls due.

        Returns the number of callbacks fired.
        """
        target = self.now + ms
        fired = 0
        while True:
            self._drop_cancelled()
            if not self._heap or self._heap[0][0] > target:
                break
            due, handle = heapq.heappop(self._heap)
            callback = self._callbacks.pop(handle)
            self.now = due
            callback()
            fired += 1
        self.now = target
        return fired

    def run_until_idle(self, limit: int = 1_000_000) -> int:
        """Fire callbacks until none are pending; returns the count fired."""
        fired = 0
        while fired < limit:
            due = self.next_due()
            if due is None:
                return fired
            fired += self.advance(due - self.now)
        raise RuntimeError(f"Scheduler still busy after {limit} callbacks")


class TkScheduler:
    """Schedules callbacks with a Tk widget's after()/after_cancel()."""

    def __init__(self, widget) -> None:
        self.widget = widget

    def call_later(self, delay: int, callback: Callback) -> str:
        return self.widget.after(delay, callback)

    def cancel(self, handle: str) -> None:
        try:
            self.widget.after_cancel(handle)
        except ValueError:
            pass
