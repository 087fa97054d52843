import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from .maze import CellType, Grid, Position

logger = logging.getLogger(__name__)

# Neighbour enumeration order: up, down, left, right. Fixes tie-breaking.
NEIGHBOR_DELTAS: Tuple[Tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


class MissingEndpointError(ValueError):
    """The grid has no start cell or no end cell, so no search can run."""


@dataclass
class SolveResult:
    """Outcome of a search.

    `path` runs start -> end and is None when the end is unreachable; that is
    a normal result, not an error. `visited_order` lists cells in the order
    the search finalized them, up to and including the end cell.
    """

    path: Optional[List[Position]]
    visited_order: List[Position] = field(default_factory=list)
    algorithm: str = ""

    @property
    def found(self) -> bool:
        return self.path is not None

    @property
    def path_length(self) -> Optional[int]:
        return None if self.path is None else len(self.path)

    @property
    def visited_count(self) -> int:
        return len(self.visited_order)


def neighbors(grid: Grid, pos: Position) -> List[Position]:
    """In-bounds, non-wall neighbours of `pos` in fixed order."""
    res: List[Position] = []
    types = grid.types
    n_rows, n_cols = types.shape
    for dr, dc in NEIGHBOR_DELTAS:
        nr, nc = pos.row + dr, pos.col + dc
        if 0 <= nr < n_rows and 0 <= nc < n_cols and types[nr, nc] != CellType.WALL:
            res.append(Position(nr, nc))
    return res


def find_endpoints(grid: Grid) -> Tuple[Position, Position]:
    starts = grid.positions_of(CellType.START)
    ends = grid.positions_of(CellType.END)
    if not starts or not ends:
        raise MissingEndpointError("Maze must contain start and end")
    if len(starts) > 1 or len(ends) > 1:
        logger.debug("Grid has %d start and %d end cells; using the last of each", len(starts), len(ends))
    return starts[-1], ends[-1]


def _reconstruct(parent: Dict[Position, Optional[Position]], end: Position) -> Optional[List[Position]]:
    if end not in parent:
        return None
    path: List[Position] = []
    cur: Optional[Position] = end
    while cur is not None:
        path.append(cur)
        cur = parent[cur]
    path.reverse()
    return path


def bfs(grid: Grid) -> SolveResult:
    """Breadth-first search from start to end; the path found is a shortest one."""
    start, end = find_endpoints(grid)
    seen = {start}
    parent: Dict[Position, Optional[Position]] = {start: None}
    queue = deque([start])
    visited_order: List[Position] = []

    while queue:
        cur = queue.popleft()
        visited_order.append(cur)
        if cur == end:
            break
        for n in neighbors(grid, cur):
            if n in seen:
                continue
            seen.add(n)
            parent[n] = cur
            queue.append(n)

    result = SolveResult(_reconstruct(parent, end), visited_order, "bfs")
    logger.debug("bfs: visited=%d path=%s", result.visited_count, result.path_length)
    return result


def dfs(grid: Grid) -> SolveResult:
    """Depth-first search with an explicit stack.

    Cells are marked visited when popped. A cell's parent is the first cell
    that discovered it, even if a later push is the one that gets popped.
    """
    start, end = find_endpoints(grid)
    seen = set()
    parent: Dict[Position, Optional[Position]] = {start: None}
    stack = [start]
    visited_order: List[Position] = []

    while stack:
        cur = stack.pop()
        if cur in seen:
            continue
        seen.add(cur)
        visited_order.append(cur)
        if cur == end:
            break
        # reversed so the LIFO pops come out in forward neighbour order
        for n in reversed(neighbors(grid, cur)):
            if n in seen:
                continue
            if n not in parent:
                parent[n] = cur
            stack.append(n)

    result = SolveResult(_reconstruct(parent, end), visited_order, "dfs")
    logger.debug("dfs: visited=%d path=%s", result.visited_count, result.path_length)
    return result


SOLVERS: Dict[str, Callable[[Grid], SolveResult]] = {"bfs": bfs, "dfs": dfs}


def solve(grid: Grid, algorithm: str = "bfs") -> SolveResult:
    try:
        solver = SOLVERS[algorithm]
    except KeyError:
        raise ValueError(f"Unknown algorithm {algorithm!r}; expected one of {sorted(SOLVERS)}") from None
    return solver(grid)
