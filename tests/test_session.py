import pytest

from grid_navigator.maze import CellType, Grid
from grid_navigator.scheduler import ManualScheduler
from grid_navigator.session import MazeSession
from grid_navigator.solver import bfs, dfs


@pytest.fixture
def sched():
    return ManualScheduler()


@pytest.fixture
def statuses():
    return []


@pytest.fixture
def session(sched, statuses):
    return MazeSession(sched, rows=6, cols=6, seed=3, on_change=lambda s: statuses.append(s.status))


def test_initial_state(session):
    assert session.status == "Maze ready"
    assert session.grid.shape == (13, 13)
    assert session.path_length is None
    assert session.visited_count is None
    assert not session.is_animating


def test_solve_animates_to_completion(sched, session, statuses):
    expected = bfs(session.grid)
    assert session.solve()
    assert session.is_animating
    assert session.visited_count == expected.visited_count
    assert session.path_length == expected.path_length

    sched.run_until_idle()
    assert not session.is_animating
    assert session.status == "Solved using BFS"
    assert "Drawing shortest path..." in statuses
    assert statuses.index("Solving maze...") < statuses.index("Drawing shortest path...")
    assert session.grid.count(CellType.PATH) == expected.path_length - 2
    assert session.grid.count(CellType.PATH_HEAD) == 0


def test_grid_actions_are_ignored_while_animating(sched, session):
    session.solve()
    grid_before = session.grid
    assert session.solve() is False
    assert session.regenerate() is False
    assert session.clear_path() is False
    assert session.resize(10, 10) is False
    assert session.set_speed("slow") is False
    assert session.set_algorithm("dfs") is False
    assert session.rows == 6 and session.speed == "fast" and session.algorithm == "bfs"
    assert session.grid.shape == grid_before.shape
    sched.run_until_idle()
    assert session.regenerate()


def test_resolve_starts_from_clean_grid(sched, session):
    session.solve()
    sched.run_until_idle()
    session.set_algorithm("dfs")
    expected = dfs(session.grid.cleared())
    session.solve()
    sched.run_until_idle()
    assert session.status == "Solved using DFS"
    assert session.grid.count(CellType.PATH) == expected.path_length - 2


def test_clear_path(sched, session):
    session.solve()
    sched.run_until_idle()
    assert session.clear_path()
    for t in (CellType.VISITED, CellType.PATH, CellType.PATH_HEAD):
        assert session.grid.count(t) == 0
    assert session.status == "Cleared path"
    assert session.path_length is None


def test_resize_clamps(session):
    assert session.resize(100, 2)
    assert (session.rows, session.cols) == (50, 5)
    assert session.grid.shape == (101, 11)
    assert session.status == "Maze size changed"


def test_regenerate_gives_new_maze(session):
    old = session.grid
    assert session.regenerate()
    assert session.status == "New maze generated"
    assert session.grid.count(CellType.START) == 1
    assert session.grid != old


def test_no_path_found(sched, session):
    session.grid = Grid.from_strings(["#######", "S..#..E", "#######"])
    assert session.solve()
    assert not session.is_animating
    assert session.status == "No path found"
    assert session.visited_count == 3
    assert session.path_length is None
    assert sched.pending == 0


def test_shutdown_cancels_animation(sched, session, statuses):
    session.solve()
    sched.advance(10)
    session.shutdown()
    seen = len(statuses)
    sched.run_until_idle()
    assert not session.is_animating
    assert len(statuses) == seen


def test_invalid_options_rejected(sched, session):
    with pytest.raises(ValueError):
        session.set_algorithm("astar")
    with pytest.raises(ValueError):
        session.set_speed("warp")
    with pytest.raises(ValueError):
        MazeSession(sched, speed="warp")
