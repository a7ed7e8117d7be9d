import pytest

from grid import (
    CellState,
    Grid,
    InvalidConfigurationError,
    NoPathError,
    OutOfBoundsError,
    UnknownAlgorithmError,
)
from algorithms import Algorithm, GridSearch, SearchStatus, VisitEvent, search


OPTIMAL = [Algorithm.BFS, Algorithm.DIJKSTRA, Algorithm.ASTAR]


def assert_valid_path(grid, path, start, goal):
    assert path[0] == start
    assert path[-1] == goal
    for a, b in zip(path, path[1:]):
        assert a.is_adjacent(b)
    for pos in path:
        assert grid.classify(pos) is not CellState.BARRIER


def run(grid, algorithm):
    s = search(grid, grid.start, grid.goal, algorithm)
    events = s.run_to_completion()
    return s, events


# ---------------------------------------------------------------------------
# Optimality
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("start, goal", [
    ((0, 0), (4, 4)),
    ((4, 0), (0, 4)),
    ((2, 2), (0, 0)),
    ((0, 3), (4, 1)),
])
def test_optimal_algorithms_agree_on_open_grid(open_grid, start, goal):
    g = open_grid(start=start, goal=goal)
    expected = abs(start[0] - goal[0]) + abs(start[1] - goal[1]) + 1
    for algo in OPTIMAL:
        s, _ = run(g, algo)
        assert s.found
        assert len(s.path()) == expected, algo


def test_bfs_five_by_five_scenario(open_grid):
    g = open_grid()
    s, _ = run(g, Algorithm.BFS)
    path = s.path()
    assert len(path) == 9
    assert_valid_path(g, path, (0, 0), (4, 4))


def test_optimal_algorithms_agree_in_maze(maze):
    for algo in OPTIMAL:
        s, _ = run(maze, algo)
        assert len(s.path()) == 10, algo


@pytest.mark.parametrize("algo", list(Algorithm))
def test_every_algorithm_finds_a_valid_path_in_maze(maze, algo):
    s, _ = run(maze, algo)
    assert s.status is SearchStatus.FOUND
    path = s.path()
    assert_valid_path(maze, path, maze.start, maze.goal)
    assert len(path) >= 10


# ---------------------------------------------------------------------------
# Visit events
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("algo", list(Algorithm))
def test_visit_events_are_unique(maze, algo):
    _, events = run(maze, algo)
    positions = [e.position for e in events]
    assert len(positions) == len(set(positions))
    assert [e.step_number for e in events] == list(range(len(events)))


@pytest.mark.parametrize("algo", list(Algorithm))
def test_goal_is_never_a_visit_event(maze, algo):
    _, events = run(maze, algo)
    assert all(e.position != maze.goal for e in events)
    assert events[0].position == maze.start
    assert events[0].cost == 0


@pytest.mark.parametrize("algo", list(Algorithm))
def test_start_equals_goal(algo):
    g = Grid(3, 3)
    g.set_cell((1, 1), CellState.START)
    s = GridSearch(g, (1, 1), (1, 1), algo)
    events = s.run_to_completion()
    assert events == []
    assert s.found
    assert s.path() == [(1, 1)]


@pytest.mark.parametrize("algo", list(Algorithm))
def test_enclosed_start_is_not_found(algo):
    g = Grid.from_strings([
        ".#...",
        "#S#..",
        ".#..G",
    ])
    s, events = run(g, algo)
    assert s.status is SearchStatus.NOT_FOUND
    assert [e.position for e in events] == [(1, 1)]
    with pytest.raises(NoPathError):
        s.path()


def test_bfs_trace_on_open_grid(open_grid):
    g = open_grid(3, 3, (0, 0), (2, 2))
    s, events = run(g, Algorithm.BFS)
    assert [e.position for e in events] == [
        (0, 0), (0, 1), (1, 0), (0, 2), (1, 1), (2, 0), (1, 2), (2, 1),
    ]
    assert s.path() == [(0, 0), (0, 1), (0, 2), (1, 2), (2, 2)]


def test_dfs_trace_on_open_grid(open_grid):
    g = open_grid(3, 3, (0, 0), (2, 2))
    s, events = run(g, Algorithm.DFS)
    assert [e.position for e in events] == [(0, 0), (1, 0), (2, 0), (2, 1)]
    assert s.path() == [(0, 0), (1, 0), (2, 0), (2, 1), (2, 2)]


def test_greedy_breaks_ties_by_insertion_order(open_grid):
    g = open_grid(3, 3, (0, 0), (2, 2))
    _, events = run(g, Algorithm.GREEDY)
    assert [e.position for e in events] == [(0, 0), (0, 1), (0, 2), (1, 2)]


def test_costs_are_hop_counts(open_grid):
    g = open_grid()
    _, events = run(g, Algorithm.DIJKSTRA)
    for e in events:
        assert e.cost == e.position.row + e.position.col
    assert all(isinstance(e, VisitEvent) for e in events)


# ---------------------------------------------------------------------------
# Laziness / restart
# ---------------------------------------------------------------------------
def test_search_is_lazy_and_not_restartable(open_grid):
    g = open_grid()
    s = search(g, g.start, g.goal, Algorithm.ASTAR)
    assert s.status is SearchStatus.PENDING
    first = next(s)
    assert first.position == (0, 0)
    assert s.status is SearchStatus.RUNNING
    rest = list(s)
    assert s.finished
    assert list(s) == []
    assert len(rest) >= 7


def test_path_before_finish_is_an_error(open_grid):
    g = open_grid()
    s = search(g, g.start, g.goal, Algorithm.BFS)
    with pytest.raises(RuntimeError):
        s.path()


def test_repeated_searches_are_identical(maze):
    for algo in Algorithm:
        _, a = run(maze, algo)
        _, b = run(maze, algo)
        assert a == b


def test_search_does_not_paint_the_grid(maze):
    before = maze.to_strings()
    run(maze, Algorithm.BFS)
    assert maze.to_strings() == before


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------
def test_missing_endpoints(open_grid):
    g = open_grid()
    with pytest.raises(InvalidConfigurationError):
        search(g, None, (4, 4), Algorithm.BFS)
    with pytest.raises(InvalidConfigurationError):
        search(g, (0, 0), None, Algorithm.BFS)


def test_endpoint_out_of_bounds(open_grid):
    g = open_grid()
    with pytest.raises(OutOfBoundsError):
        search(g, (0, 0), (5, 5), Algorithm.BFS)


def test_endpoint_on_barrier(open_grid):
    g = open_grid()
    g.set_cell((2, 2), CellState.BARRIER)
    with pytest.raises(InvalidConfigurationError):
        search(g, (0, 0), (2, 2), Algorithm.BFS)


@pytest.mark.parametrize("bad", ["bogus", 7, None, ""])
def test_unknown_algorithm(open_grid, bad):
    g = open_grid()
    with pytest.raises(UnknownAlgorithmError):
        search(g, g.start, g.goal, bad)


def test_algorithm_keys_accepted(open_grid):
    g = open_grid()
    s = search(g, g.start, g.goal, "AStar")
    assert s.algorithm is Algorithm.ASTAR
