import logging
from enum import Enum
from typing import Any, Callable, List, NamedTuple, Optional

import numpy as np

from .maze import CellType, Grid
from .scheduler import Scheduler
from .solver import SolveResult

logger = logging.getLogger(__name__)


class AnimationState(Enum):
    IDLE = "idle"
    VISITED_PLAYBACK = "visited"
    PATH_PLAYBACK = "path"
    FINALIZING = "finalizing"


class AnimationSummary(NamedTuple):
    algorithm: str
    path_length: Optional[int]
    visited_count: int


_PROTECTED = (int(CellType.START), int(CellType.END))
_ADVANCED = (int(CellType.PATH), int(CellType.PATH_HEAD))


def total_duration(result: SolveResult, delay: int) -> int:
    """Time (from start) at which the finalize step fires."""
    n_visited = len(result.visited_order)
    if result.path:
        last_step = n_visited * delay + (len(result.path) - 1) * delay
    else:
        last_step = max(n_visited - 1, 0) * delay
    return last_step + 2 * delay


class Animator:
    """Replays a SolveResult as timed cell-state transitions.

    Idle -> VisitedPlayback -> PathPlayback -> Finalizing -> Idle.

    Every step is scheduled up front on a single-threaded scheduler and
    carries the epoch it was scheduled under; a step whose epoch is stale
    does nothing. Each step derives a new grid snapshot from the previous one
    and hands it to `on_update`.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        on_update: Callable[[Grid], None],
        on_complete: Optional[Callable[[AnimationSummary], None]] = None,
    ) -> None:
        self.scheduler = scheduler
        self.on_update = on_update
        self.on_complete = on_complete
        self._epoch = 0
        self._handles: List[Any] = []
        self._state = AnimationState.IDLE
        self._grid: Optional[Grid] = None
        self._summary: Optional[AnimationSummary] = None

    @property
    def state(self) -> AnimationState:
        return self._state

    @property
    def is_animating(self) -> bool:
        return self._state is not AnimationState.IDLE

    @property
    def epoch(self) -> int:
        return self._epoch

    @property
    def grid(self) -> Optional[Grid]:
        return self._grid

    def start(self, result: SolveResult, delay: int, grid: Grid) -> bool:
        """Schedule the playback of `result` over a working copy of `grid`.

        Returns False (and does nothing) if an animation is already running.
        """
        if self.is_animating:
            logger.debug("Animation already running; start ignored")
            return False
        if delay < 0:
            raise ValueError("delay must be non-negative")

        self._invalidate()
        epoch = self._epoch
        self._grid = grid.copy()
        self._summary = AnimationSummary(result.algorithm, result.path_length, result.visited_count)
        self._state = AnimationState.VISITED_PLAYBACK

        visited = result.visited_order
        path = result.path or []
        schedule = self.scheduler.call_later

        last_visited = len(visited) - 1
        for i, pos in enumerate(visited):
            self._handles.append(
                schedule(i * delay, lambda p=pos, last=(i == last_visited): self._visited_step(epoch, p, last))
            )

        if path:
            rows = np.array([p.row for p in path], dtype=np.intp)
            cols = np.array([p.col for p in path], dtype=np.intp)
            # path indices whose cells may change (start/end never do)
            movable = np.flatnonzero(~np.isin(self._grid.types[rows, cols], _PROTECTED))
            offset = len(visited) * delay
            for i in range(len(path)):
                self._handles.append(
                    schedule(offset + i * delay, lambda i=i: self._path_step(epoch, rows, cols, movable, i))
                )

        self._handles.append(schedule(total_duration(result, delay), lambda: self._finalize(epoch)))
        logger.debug(
            "Scheduled %s animation: %d visited, %d path steps, delay=%d (epoch %d)",
            result.algorithm or "?", len(visited), len(path), delay, epoch,
        )
        return True

    def cancel_all(self) -> None:
        """Discard every pending step. Safe to call at any time."""
        if self.is_animating:
            logger.debug("Animation cancelled (epoch %d)", self._epoch)
        self._invalidate()
        self._state = AnimationState.IDLE

    def _invalidate(self) -> None:
        self._epoch += 1
        handles, self._handles = self._handles, []
        for handle in handles:
            self.scheduler.cancel(handle)

    def _swap(self, snapshot: Grid) -> None:
        self._grid = snapshot
        self.on_update(snapshot)

    def _visited_step(self, epoch: int, pos, last: bool) -> None:
        if epoch != self._epoch:
            return
        snapshot = self._grid.copy()
        t = int(snapshot.types[pos.row, pos.col])
        if t not in _PROTECTED and t not in _ADVANCED:
            snapshot.types[pos.row, pos.col] = int(CellType.VISITED)
        if last:
            if self._summary.path_length:
                self._state = AnimationState.PATH_PLAYBACK
            else:
                self._state = AnimationState.FINALIZING
        self._swap(snapshot)

    def _path_step(self, epoch: int, rows: np.ndarray, cols: np.ndarray, movable: np.ndarray, i: int) -> None:
        if epoch != self._epoch:
            return
        self._state = AnimationState.PATH_PLAYBACK
        snapshot = self._grid.copy()
        trail = movable[movable < i]
        snapshot.types[rows[trail], cols[trail]] = int(CellType.PATH)
        if i in movable:
            snapshot.types[rows[i], cols[i]] = int(CellType.PATH_HEAD)
        if i == len(rows) - 1:
            self._state = AnimationState.FINALIZING
        self._swap(snapshot)

    def _finalize(self, epoch: int) -> None:
        if epoch != self._epoch:
            return
        snapshot = self._grid.copy()
        snapshot.types[snapshot.types == int(CellType.PATH_HEAD)] = int(CellType.PATH)
        self._handles = []
        self._state = AnimationState.IDLE
        summary = self._summary
        self._swap(snapshot)
        logger.debug("Animation finished: %s", summary)
        if self.on_complete is not None:
            self.on_complete(summary)
