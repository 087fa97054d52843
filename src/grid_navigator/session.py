import logging
from typing import Callable, Optional

from . import config
from .animator import AnimationState, AnimationSummary, Animator
from .maze import Grid, generate
from .scheduler import Scheduler
from .solver import solve

logger = logging.getLogger(__name__)


class MazeSession:
    """Controller state behind the visualizer: current maze, options, status.

    Every action that changes the grid (solve, regenerate, resize, clear)
    is ignored while an animation is running and returns False.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        rows: int = config.DEFAULT_SIZE,
        cols: int = config.DEFAULT_SIZE,
        algorithm: str = config.DEFAULT_ALGORITHM,
        speed: str = config.DEFAULT_SPEED,
        on_change: Optional[Callable[["MazeSession"], None]] = None,
        seed: Optional[int] = None,
    ) -> None:
        self.rows = config.clamp_size(rows)
        self.cols = config.clamp_size(cols)
        self._check_algorithm(algorithm)
        config.base_delay(speed)
        self.algorithm = algorithm
        self.speed = speed
        self.on_change = on_change
        self.seed = seed
        self.animator = Animator(scheduler, self._on_frame, self._on_complete)

        self.grid: Grid = generate(self.rows, self.cols, seed=seed)
        self.status = "Maze ready"
        self.path_length: Optional[int] = None
        self.visited_count: Optional[int] = None

    @property
    def is_animating(self) -> bool:
        return self.animator.is_animating

    @staticmethod
    def _check_algorithm(algorithm: str) -> None:
        if algorithm not in config.ALGORITHMS:
            raise ValueError(f"Unknown algorithm {algorithm!r}; expected one of {config.ALGORITHMS}")

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change(self)

    def _reset_stats(self) -> None:
        self.path_length = None
        self.visited_count = None

    def _next_seed(self) -> Optional[int]:
        # keep seeded sessions reproducible but give each maze a fresh layout
        if self.seed is None:
            return None
        self.seed += 1
        return self.seed

    # --- options -----------------------------------------------------
    def set_algorithm(self, algorithm: str) -> bool:
        if self.is_animating:
            return False
        self._check_algorithm(algorithm)
        self.algorithm = algorithm
        self._notify()
        return True

    def set_speed(self, speed: str) -> bool:
        if self.is_animating:
            return False
        config.base_delay(speed)
        self.speed = speed
        self._notify()
        return True

    # --- grid actions ------------------------------------------------
    def regenerate(self) -> bool:
        if self.is_animating:
            return False
        self.animator.cancel_all()
        self.grid = generate(self.rows, self.cols, seed=self._next_seed())
        self.status = "New maze generated"
        self._reset_stats()
        logger.info("New %dx%d maze generated", self.rows, self.cols)
        self._notify()
        return True

    def resize(self, rows: int, cols: int) -> bool:
        if self.is_animating:
            return False
        self.animator.cancel_all()
        self.rows, self.cols = config.clamp_size(rows), config.clamp_size(cols)
        self.grid = generate(self.rows, self.cols, seed=self._next_seed())
        self.status = "Maze size changed"
        self._reset_stats()
        logger.info("Maze resized to %dx%d", self.rows, self.cols)
        self._notify()
        return True

    def clear_path(self) -> bool:
        if self.is_animating:
            return False
        self.animator.cancel_all()
        self.grid = self.grid.cleared()
        self.status = "Cleared path"
        self._reset_stats()
        self._notify()
        return True

    def solve(self) -> bool:
        """Search the current maze and start the playback animation."""
        if self.is_animating:
            return False
        self.animator.cancel_all()
        self.grid = self.grid.cleared()
        self._reset_stats()
        self.status = "Solving maze..."

        result = solve(self.grid.copy(), self.algorithm)
        self.visited_count = result.visited_count

        if not result.found:
            self.status = "No path found"
            logger.info("%s found no path (%d cells visited)", self.algorithm.upper(), result.visited_count)
            self._notify()
            return True

        self.path_length = result.path_length
        self.animator.start(result, config.base_delay(self.speed), self.grid)
        self._notify()
        return True

    def shutdown(self) -> None:
        self.animator.cancel_all()

    # --- animator callbacks -------------------------------------------
    def _on_frame(self, grid: Grid) -> None:
        self.grid = grid
        if self.animator.state is AnimationState.PATH_PLAYBACK and self.status == "Solving maze...":
            self.status = "Drawing shortest path..."
        self._notify()

    def _on_complete(self, summary: AnimationSummary) -> None:
        self.status = f"Solved using {summary.algorithm.upper()}"
        logger.info(
            "Solved using %s: path=%s visited=%d",
            summary.algorithm.upper(), summary.path_length, summary.visited_count,
        )
        self._notify()
