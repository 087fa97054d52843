import logging
import random
from enum import Enum, IntEnum
from typing import Iterator, List, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from .config import clamp_size

logger = logging.getLogger(__name__)


class CellType(IntEnum):
    """Cell states, stored as int8 codes in the grid array."""

    WALL = 0
    PASSAGE = 1
    START = 2
    END = 3
    VISITED = 4
    PATH = 5
    PATH_HEAD = 6

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    CellType.WALL: "wall",
    CellType.PASSAGE: "passage",
    CellType.START: "start",
    CellType.END: "end",
    CellType.VISITED: "visited",
    CellType.PATH: "path",
    CellType.PATH_HEAD: "pathHead",
}

# search marks left behind by a solve/animation
SEARCH_MARKS = (CellType.VISITED, CellType.PATH, CellType.PATH_HEAD)

# ASCII form used by Grid.from_strings / Grid.to_strings
CHAR_TO_TYPE = {
    "#": CellType.WALL,
    ".": CellType.PASSAGE,
    "S": CellType.START,
    "E": CellType.END,
    "v": CellType.VISITED,
    "*": CellType.PATH,
    "@": CellType.PATH_HEAD,
}
TYPE_TO_CHAR = {t: ch for ch, t in CHAR_TO_TYPE.items()}


class Position(NamedTuple):
    row: int
    col: int

    @property
    def key(self) -> str:
        return f"{self.row}-{self.col}"


class Cell(NamedTuple):
    row: int
    col: int
    type: CellType


class Direction(Enum):
    """Logical directions between rooms, valued by their (row, col) vector."""

    N = (-1, 0)
    E = (0, 1)
    S = (1, 0)
    W = (0, -1)

    @property
    def drow(self) -> int:
        return self.value[0]

    @property
    def dcol(self) -> int:
        return self.value[1]


class Grid:
    """A rectangular wall grid of cell types.

    Rooms of the logical maze sit at odd (row, col) coordinates; the cells
    between them are walls or opened passages. The backing store is a 2-D
    int8 numpy array of CellType codes.
    """

    def __init__(self, types: np.ndarray) -> None:
        if types.ndim != 2 or types.shape[0] == 0 or types.shape[1] == 0:
            raise ValueError(f"Grid needs a non-empty 2-D array, got shape {types.shape}")
        self.types: np.ndarray = types.astype(np.int8, copy=False)

    @classmethod
    def filled(cls, n_rows: int, n_cols: int, cell_type: CellType = CellType.WALL) -> "Grid":
        return cls(np.full((n_rows, n_cols), int(cell_type), dtype=np.int8))

    @classmethod
    def from_strings(cls, lines: Sequence[str]) -> "Grid":
        """Build a grid from ASCII rows ('#' wall, '.' passage, 'S' start, 'E' end...)."""
        widths = {len(line) for line in lines}
        if len(widths) != 1:
            raise ValueError("All rows must have the same length")
        try:
            codes = [[int(CHAR_TO_TYPE[ch]) for ch in line] for line in lines]
        except KeyError as e:
            raise ValueError(f"Unknown cell character {e.args[0]!r}") from None
        return cls(np.array(codes, dtype=np.int8))

    def to_strings(self) -> List[str]:
        return ["".join(TYPE_TO_CHAR[CellType(v)] for v in row) for row in self.types]

    @property
    def shape(self) -> Tuple[int, int]:
        return self.types.shape

    @property
    def n_rows(self) -> int:
        return self.types.shape[0]

    @property
    def n_cols(self) -> int:
        return self.types.shape[1]

    def in_bounds(self, pos: Tuple[int, int]) -> bool:
        r, c = pos
        return 0 <= r < self.n_rows and 0 <= c < self.n_cols

    def type_at(self, pos: Tuple[int, int]) -> CellType:
        r, c = pos
        return CellType(int(self.types[r, c]))

    def set_type(self, pos: Tuple[int, int], cell_type: CellType) -> None:
        r, c = pos
        self.types[r, c] = int(cell_type)

    def cell(self, pos: Tuple[int, int]) -> Cell:
        r, c = pos
        return Cell(r, c, self.type_at(pos))

    def rows(self) -> List[List[Cell]]:
        return [
            [Cell(r, c, CellType(int(v))) for c, v in enumerate(row)]
            for r, row in enumerate(self.types)
        ]

    def positions_of(self, cell_type: CellType) -> List[Position]:
        rs, cs = np.nonzero(self.types == int(cell_type))
        return [Position(int(r), int(c)) for r, c in zip(rs, cs)]

    def count(self, cell_type: CellType) -> int:
        return int(np.count_nonzero(self.types == int(cell_type)))

    def copy(self) -> "Grid":
        return Grid(self.types.copy())

    def cleared(self) -> "Grid":
        """Copy with visited/path/pathHead marks reset to passage."""
        out = self.copy()
        out.types[np.isin(out.types, [int(t) for t in SEARCH_MARKS])] = int(CellType.PASSAGE)
        return out

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self.types, other.types))

    def __repr__(self) -> str:
        return f"Grid({self.n_rows}x{self.n_cols})"


def logical_size(grid: Grid) -> Tuple[int, int]:
    """Number of rooms (rows, cols) encoded by a wall grid."""
    return (grid.n_rows - 1) // 2, (grid.n_cols - 1) // 2


def generate(rows: int, cols: int, seed: Optional[int] = None, rng=None) -> Grid:
    """Generate a perfect maze with a randomized depth-first backtracker.

    `rows` and `cols` count logical rooms and are clamped to [5, 50]. The
    result is a (2*rows+1) x (2*cols+1) grid with the entrance at (1, 0) and
    the exit on the right edge of the bottom-right room.

    `rng` only needs a `shuffle(list)` method; it defaults to
    `random.Random(seed)`.
    """
    R, C = clamp_size(rows), clamp_size(cols)
    if (R, C) != (rows, cols):
        logger.debug("Clamped maze size %sx%s to %dx%d", rows, cols, R, C)
    if rng is None:
        rng = random.Random(seed)

    grid = Grid.filled(2 * R + 1, 2 * C + 1, CellType.WALL)
    visited = np.zeros((R, C), dtype=bool)

    def enter(mr: int, mc: int) -> List:
        visited[mr, mc] = True
        grid.set_type((2 * mr + 1, 2 * mc + 1), CellType.PASSAGE)
        dirs = list(Direction)
        rng.shuffle(dirs)
        return [mr, mc, dirs, 0]

    # each frame: [room row, room col, shuffled directions, next direction index]
    stack: List[List] = [enter(0, 0)]
    while stack:
        frame = stack[-1]
        mr, mc, dirs, i = frame
        if i == len(dirs):
            stack.pop()
            continue
        frame[3] = i + 1
        d = dirs[i]
        nmr, nmc = mr + d.drow, mc + d.dcol
        if not (0 <= nmr < R and 0 <= nmc < C) or visited[nmr, nmc]:
            continue
        grid.set_type((2 * mr + 1 + d.drow, 2 * mc + 1 + d.dcol), CellType.PASSAGE)
        stack.append(enter(nmr, nmc))

    # entrance & exit
    grid.set_type((1, 0), CellType.START)
    grid.set_type((2 * R - 1, 2 * C), CellType.END)
    logger.debug("Generated %dx%d maze (%dx%d grid)", R, C, grid.n_rows, grid.n_cols)
    return grid


def room_graph_edges(grid: Grid) -> List[Tuple[Tuple[int, int], Tuple[int, int]]]:
    """Pairs of logical rooms joined by an opened wall cell."""
    R, C = logical_size(grid)
    edges = []
    for mr in range(R):
        for mc in range(C):
            r, c = 2 * mr + 1, 2 * mc + 1
            if mc + 1 < C and grid.type_at((r, c + 1)) != CellType.WALL:
                edges.append(((mr, mc), (mr, mc + 1)))
            if mr + 1 < R and grid.type_at((r + 1, c)) != CellType.WALL:
                edges.append(((mr, mc), (mr + 1, mc)))
    return edges


def iter_rooms(grid: Grid) -> Iterator[Position]:
    R, C = logical_size(grid)
    for mr in range(R):
        for mc in range(C):
            yield Position(2 * mr + 1, 2 * mc + 1)
