from collections import deque

import numpy as np
import pytest

from grid_navigator.maze import (
    CellType,
    Direction,
    Grid,
    Position,
    generate,
    iter_rooms,
    logical_size,
    room_graph_edges,
)
from grid_navigator.solver import bfs


class FixedOrder:
    """Stand-in rng whose shuffle always yields E, S, W, N."""

    ORDER = [Direction.E, Direction.S, Direction.W, Direction.N]

    def shuffle(self, seq):
        seq.sort(key=self.ORDER.index)


def _connected_rooms(grid):
    R, C = logical_size(grid)
    adj = {(r, c): [] for r in range(R) for c in range(C)}
    for a, b in room_graph_edges(grid):
        adj[a].append(b)
        adj[b].append(a)
    seen = {(0, 0)}
    q = deque([(0, 0)])
    while q:
        cur = q.popleft()
        for n in adj[cur]:
            if n not in seen:
                seen.add(n)
                q.append(n)
    return len(seen)


@pytest.mark.parametrize("rows,cols,seed", [(5, 5, 0), (7, 12, 1), (25, 25, 2), (50, 50, 3), (50, 5, 4)])
def test_generated_maze_is_spanning_tree(rows, cols, seed):
    grid = generate(rows, cols, seed=seed)
    assert grid.shape == (2 * rows + 1, 2 * cols + 1)
    # a tree over rows*cols rooms has exactly rows*cols - 1 edges and is connected
    assert len(room_graph_edges(grid)) == rows * cols - 1
    assert _connected_rooms(grid) == rows * cols


def test_exactly_one_start_and_end():
    for seed in range(10):
        grid = generate(8, 6, seed=seed)
        assert grid.count(CellType.START) == 1
        assert grid.count(CellType.END) == 1
        assert grid.type_at((1, 0)) == CellType.START
        assert grid.type_at((grid.n_rows - 2, grid.n_cols - 1)) == CellType.END
        assert bfs(grid).found


def test_pillars_are_walls_and_rooms_are_open():
    grid = generate(10, 9, seed=11)
    assert np.all(grid.types[::2, ::2] == CellType.WALL)
    for pos in iter_rooms(grid):
        assert grid.type_at(pos) != CellType.WALL


def test_dimensions_are_clamped():
    grid = generate(1, 100, seed=0)
    assert grid.shape == (11, 101)
    grid = generate(-3, 0, seed=0)
    assert grid.shape == (11, 11)


def test_seed_is_reproducible():
    assert generate(12, 12, seed=42) == generate(12, 12, seed=42)


def test_fixed_direction_order_golden_maze():
    grid = generate(5, 5, rng=FixedOrder())
    edges = set(room_graph_edges(grid))

    assert len(edges) == 24
    # serpentine: along the top row, down the right column, then back and forth
    assert ((0, 3), (0, 4)) in edges
    assert ((0, 4), (1, 4)) in edges
    assert ((3, 4), (4, 4)) in edges
    assert ((3, 0), (4, 0)) in edges
    assert ((1, 3), (1, 4)) not in edges
    assert ((0, 0), (1, 0)) not in edges

    result = bfs(grid)
    assert result.path_length == 19
    assert result.path[0] == Position(1, 0)
    assert result.path[-1] == Position(9, 10)
    expected = [Position(1, c) for c in range(10)] + [Position(r, 9) for r in range(2, 10)] + [Position(9, 10)]
    assert result.path == expected


def test_cleared_resets_search_marks_only():
    grid = Grid.from_strings([
        "#####",
        "Sv*@E",
        "#####",
    ])
    cleared = grid.cleared()
    assert cleared.to_strings() == ["#####", "S...E", "#####"]
    # original untouched
    assert grid.type_at((1, 3)) == CellType.PATH_HEAD


def test_rows_exposes_cells():
    grid = Grid.from_strings(["#S#", "#.E"])
    rows = grid.rows()
    assert len(rows) == 2 and all(len(r) == 3 for r in rows)
    assert rows[0][1].type == CellType.START
    assert rows[1][2] == (1, 2, CellType.END)
    assert Position(1, 2).key == "1-2"
    assert CellType.PATH_HEAD.label == "pathHead"


def test_from_strings_rejects_ragged_rows():
    with pytest.raises(ValueError):
        Grid.from_strings(["###", "##"])
    with pytest.raises(ValueError):
        Grid.from_strings(["#x#"])
