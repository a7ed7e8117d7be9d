import time

import pytest

from grid import CellState, InvalidConfigurationError, UnknownAlgorithmError
from algorithms import Algorithm, PathStep, SearchStatus, VisitEvent
from engine import (
    RunMetrics,
    Recorder,
    SPEED_PRESETS,
    SearchRun,
    Stepper,
    StepperState,
    compare,
    compare_all,
    start_run,
)


# ---------------------------------------------------------------------------
# SearchRun
# ---------------------------------------------------------------------------
def test_run_streams_visits_then_path(maze):
    run = SearchRun(maze, Algorithm.BFS)
    frames = run.run_to_completion()
    kinds = [f.kind for f in frames]
    first_path = kinds.index("path")
    assert all(k == "visit" for k in kinds[:first_path])
    assert all(k == "path" for k in kinds[first_path:])
    assert len(run.path) == 10
    assert frames[-1].is_last
    assert run.finished and not run.active
    assert run.frames_streamed == len(frames)


def test_run_paints_as_it_is_pulled(open_grid):
    g = open_grid()
    run = SearchRun(g, Algorithm.BFS)
    next(run)                       # the start itself, never painted
    assert g.count(CellState.VISITED) == 0
    second = next(run)
    assert g.classify(second.position) is CellState.VISITED
    assert g.count(CellState.VISITED) == 1


def test_start_run_clears_previous_marks(maze):
    g = maze
    SearchRun(g, Algorithm.BFS).run_to_completion()
    assert g.count(CellState.VISITED) > 0
    assert g.count(CellState.PATH) == 8
    start_run(g, Algorithm.BFS)
    assert g.count(CellState.VISITED) == 0
    assert g.count(CellState.PATH) == 0
    assert g.classify((0, 0)) is CellState.START


def test_run_requires_endpoints():
    from grid import Grid
    with pytest.raises(InvalidConfigurationError):
        SearchRun(Grid(3, 3), Algorithm.BFS)


def test_summary(open_grid):
    run = SearchRun(open_grid(), "astar")
    run.run_to_completion()
    s = run.summary()
    assert s["algorithm"] == "astar"
    assert s["status"] == SearchStatus.FOUND.value
    assert s["path_length"] == 9
    assert s["finished"] and not s["cancelled"]


# ---------------------------------------------------------------------------
# Stepper
# ---------------------------------------------------------------------------
def test_stepper_lifecycle(open_grid):
    seen = []
    st = Stepper(on_frame=seen.append)
    assert st.state is StepperState.IDLE
    assert st.next_step() is False

    run = SearchRun(open_grid(3, 3, (0, 0), (2, 2)), Algorithm.BFS)
    st.start(run.frames())
    assert st.state is StepperState.PAUSED
    assert run.frames_streamed == 0

    assert st.next_step()
    assert isinstance(st.current_frame, VisitEvent)
    assert st.frames_shown == 1

    pulled = st.jump_to_end()
    assert pulled == 8 + 5 - 1
    assert st.is_finished
    assert st.visits_shown == 8
    assert st.path_shown == 5
    assert isinstance(st.current_frame, PathStep)
    assert len(seen) == 13
    assert st.next_step() is False


def test_stepper_play_pause_and_tick(open_grid):
    st = Stepper(speed="slow")
    st.play()
    assert st.state is StepperState.IDLE

    st.start(SearchRun(open_grid(), Algorithm.ASTAR).frames())
    st.play()
    assert st.is_playing
    assert st.tick(now=time.monotonic() + 10)
    assert st.frames_shown == 1
    st.pause()
    assert st.tick(now=time.monotonic() + 20) is False
    st.toggle_play()
    assert st.is_playing
    st.toggle_play()
    assert st.state is StepperState.PAUSED


def test_stepper_tick_waits_for_interval(open_grid):
    st = Stepper(speed="slow")
    st.start(SearchRun(open_grid(), Algorithm.BFS).frames())
    st.play()
    assert st.tick(now=st._last_tick + SPEED_PRESETS["slow"] / 2) is False
    assert st.tick(now=st._last_tick + SPEED_PRESETS["slow"] * 2)


def test_stepper_speed():
    st = Stepper()
    assert st.speed == SPEED_PRESETS["medium"]
    st.set_speed("turbo")
    assert st.speed == SPEED_PRESETS["turbo"]
    st.set_speed("warp")
    assert st.speed == SPEED_PRESETS["medium"]
    st.set_speed_value(0.0)
    assert st.speed == 0.005


def test_stepper_reset(open_grid):
    st = Stepper()
    st.start(SearchRun(open_grid(), Algorithm.BFS).frames())
    st.next_step()
    st.reset()
    assert st.state is StepperState.IDLE
    assert st.current_frame is None
    assert st.frames_shown == 0


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
def test_recorder_metrics(maze):
    before = maze.to_strings()
    rec = Recorder()
    m = rec.record(maze, "dijkstra")
    assert maze.to_strings() == before
    assert m.algo_key == "dijkstra"
    assert m.path_found
    assert m.path_length == 10
    assert m.path_cost == 9
    assert m.nodes_visited == len(rec.events)
    assert m.total_frames == m.nodes_visited + 10
    assert m.optimal
    assert m.start == (0, 0)
    assert m.goal == (2, 5)


def test_recorder_no_path():
    from grid import Grid
    g = Grid.from_strings(["S#.", "##.", "..G"])
    m = Recorder().record(g, Algorithm.BFS)
    assert not m.path_found
    assert m.path_length == 0
    assert m.path_cost == 0
    assert m.nodes_visited == 1


def test_recorder_rejects_unknown_algorithm(maze):
    with pytest.raises(UnknownAlgorithmError):
        Recorder().record(maze, "bellman_ford")


def _recorder_with(metrics):
    rec = Recorder()
    rec.metrics = metrics
    return rec


def test_compare_picks_winners():
    a = RunMetrics(algo_label="A", nodes_visited=5, path_cost=4, path_found=True)
    b = RunMetrics(algo_label="B", nodes_visited=3, path_cost=6, path_found=True)
    result = compare(_recorder_with(a), _recorder_with(b))
    assert result.winner_nodes == "B"
    assert result.winner_path == "A"


def test_compare_tie_and_not_found():
    a = RunMetrics(algo_label="A", nodes_visited=4, path_cost=0, path_found=False)
    b = RunMetrics(algo_label="B", nodes_visited=4, path_cost=7, path_found=True)
    result = compare(_recorder_with(a), _recorder_with(b))
    assert result.winner_nodes == "tie"
    assert result.winner_path == "B"


def test_compare_all_in_button_order(maze):
    results = compare_all(maze)
    assert [m.algo_key for m in results] == ["astar", "dijkstra", "bfs", "dfs", "greedy"]
    optimal = {m.algo_key: m.path_cost for m in results if m.optimal}
    assert set(optimal.values()) == {9}
    assert all(m.path_cost >= 9 for m in results)
