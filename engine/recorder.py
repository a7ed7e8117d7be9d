"""
recorder.py — Run Recorder & Analytics
========================================
Runs a search off-screen to completion and computes the numbers the
analytics panel and the comparison table show.

Usage:
    rec = Recorder()
    metrics = rec.record(grid, Algorithm.ASTAR)   # grid is only read

Comparison:
    compare(left, right)     → ComparisonResult for two recorders
    compare_all(grid)        → RunMetrics for every algorithm, button order

Recording never paints the grid, so it can run while a live run is
mid-animation on the same grid.  It does read barriers, start and goal.
"""

import time
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple, Union

from grid import Grid, Position
from algorithms import (
    Algorithm,
    AlgoInfo,
    GridSearch,
    VisitEvent,
    get_algorithm,
    list_algorithms,
)


# ---------------------------------------------------------------------------
# Metrics dataclass — what the Analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:       str   = ""
    algo_label:     str   = ""
    start:          Optional[Tuple[int, int]] = None
    goal:           Optional[Tuple[int, int]] = None
    nodes_visited:  int   = 0
    path_length:    int   = 0          # positions on the path, start and goal included
    path_cost:      int   = 0          # edges on the path
    total_frames:   int   = 0          # visit events + path steps
    wall_time_ms:   float = 0.0
    path_found:     bool  = False
    optimal:        bool  = False      # algorithm guarantees a shortest path


# ---------------------------------------------------------------------------
# ComparisonResult — side-by-side analytics
# ---------------------------------------------------------------------------
@dataclass
class ComparisonResult:
    left:  RunMetrics = field(default_factory=RunMetrics)
    right: RunMetrics = field(default_factory=RunMetrics)
    # derived
    winner_nodes: str = ""   # which algorithm expanded fewer cells
    winner_path:  str = ""   # which algorithm found the shorter path


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        events  : Every VisitEvent of the recorded run.
        path    : Path positions, start → goal (empty if not found).
        metrics : RunMetrics, available after record().
    """

    def __init__(self):
        self.events:  List[VisitEvent]     = []
        self.path:    List[Position]       = []
        self.metrics: Optional[RunMetrics] = None
        self.search:  Optional[GridSearch] = None

        self._algo_info: Optional[AlgoInfo] = None

    def record(
        self,
        grid: Grid,
        algorithm: Union[Algorithm, str],
        start: Optional[Tuple[int, int]] = None,
        goal: Optional[Tuple[int, int]] = None,
    ) -> RunMetrics:
        """
        Search from start to goal (defaulting to the grid's own) and
        compute metrics.

        Raises:
            InvalidConfigurationError / OutOfBoundsError / UnknownAlgorithmError
            exactly as search() does.
        """
        self._algo_info = get_algorithm(algorithm)
        start = grid.start if start is None else start
        goal  = grid.goal if goal is None else goal

        t0 = time.monotonic()
        self.search = GridSearch(grid, start, goal, self._algo_info.algorithm)
        self.events = self.search.run_to_completion()
        self.path   = self.search.path() if self.search.found else []
        wall_ms = (time.monotonic() - t0) * 1000

        self.metrics = self._compute_metrics(wall_ms)
        return self.metrics

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, wall_ms: float) -> RunMetrics:
        info = self._algo_info
        search = self.search
        return RunMetrics(
            algo_key=info.key,
            algo_label=info.label,
            start=tuple(search.start),
            goal=tuple(search.goal),
            nodes_visited=len(self.events),
            path_length=len(self.path),
            path_cost=max(len(self.path) - 1, 0),
            total_frames=len(self.events) + len(self.path),
            wall_time_ms=round(wall_ms, 2),
            path_found=search.found,
            optimal=info.optimal,
        )


# ---------------------------------------------------------------------------
# Comparison helpers
# ---------------------------------------------------------------------------
def compare(left: Recorder, right: Recorder) -> ComparisonResult:
    """Given two completed Recorders, produce a ComparisonResult."""
    l = left.metrics or RunMetrics()
    r = right.metrics or RunMetrics()

    def winner(l_val, r_val, l_key, r_key):
        if l_val == r_val:
            return "tie"
        return l_key if l_val < r_val else r_key

    # a run that found nothing cannot win on path length
    l_cost = l.path_cost if l.path_found else float("inf")
    r_cost = r.path_cost if r.path_found else float("inf")

    return ComparisonResult(
        left=l,
        right=r,
        winner_nodes=winner(l.nodes_visited, r.nodes_visited, l.algo_label, r.algo_label),
        winner_path=winner(l_cost, r_cost, l.algo_label, r.algo_label),
    )


def compare_all(
    grid: Grid,
    algorithms: Optional[Iterable[Union[Algorithm, str]]] = None,
) -> List[RunMetrics]:
    """Record every algorithm (or the given ones) on the same grid."""
    if algorithms is None:
        algorithms = [info.algorithm for info in list_algorithms()]
    results = []
    for algo in algorithms:
        rec = Recorder()
        results.append(rec.record(grid, algo))
    return results
