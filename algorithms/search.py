"""
search.py — Generalised Grid Search
====================================
One search loop serves all five algorithms.  Only two things vary:

    selection rule   – which frontier discipline pops the next position
                       (stack, queue, or min-heap keyed by cost / cost+h / h)
    relaxation rule  – whether a neighbour is (re)queued
                         Dijkstra, A*       : when the new cost is lower
                         BFS, DFS, Greedy   : only the first time it is seen

The search is a lazy iterator of VisitEvents so the shell can draw one
frame per expansion.  It is not restartable: iterate a fresh GridSearch
to run again.  Once exhausted, `status`, `parent` and `cost` hold the
outcome and the path can be rebuilt with reconstruct().

    run = search(grid, grid.start, grid.goal, Algorithm.ASTAR)
    for event in run:
        draw(event.position)
    if run.found:
        path = run.path()
"""

import logging
from enum import Enum
from typing import Dict, Iterator, List, Optional, Set, Tuple, Union

from grid import (
    Grid,
    Position,
    InvalidConfigurationError,
    OutOfBoundsError,
    UnknownAlgorithmError,
)
from algorithms.frontier import PriorityFrontier, QueueFrontier, StackFrontier
from algorithms.reconstruct import reconstruct
from algorithms.registry import Algorithm, parse_algorithm
from algorithms.step import VisitEvent

logger = logging.getLogger(__name__)


class SearchStatus(Enum):
    PENDING   = "pending"     # constructed, nothing pulled yet
    RUNNING   = "running"
    FOUND     = "found"
    NOT_FOUND = "not_found"


# algorithms whose relaxation compares costs instead of "seen before?"
COST_AWARE = frozenset({Algorithm.DIJKSTRA, Algorithm.ASTAR})

# every position can be popped a bounded number of times
BUDGET_FACTOR = 4


def manhattan(a: Tuple[int, int], b: Tuple[int, int]) -> int:
    """|Δrow| + |Δcol| — admissible and consistent on a 4-connected unit grid."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


class GridSearch:
    """
    Attributes:
        grid          : The grid being searched (read only).
        start, goal   : Endpoints.
        algorithm     : The Algorithm driving the frontier.
        parent        : {pos: pos it was reached from}
        cost          : {pos: best-known cost from start}  (absent = ∞)
        visited       : Positions in expansion order.
        status        : SearchStatus.
        step_budget   : Max frontier pops before giving up.
    """

    def __init__(
        self,
        grid: Grid,
        start: Optional[Tuple[int, int]],
        goal: Optional[Tuple[int, int]],
        algorithm: Union[Algorithm, str],
    ):
        self.algorithm: Algorithm = parse_algorithm(algorithm)

        if start is None or goal is None:
            raise InvalidConfigurationError("Start and goal must both be set before searching")
        start, goal = Position(*start), Position(*goal)
        for label, pos in (("start", start), ("goal", goal)):
            if not grid.in_bounds(pos):
                raise OutOfBoundsError(f"{label} {pos} is outside the {grid.rows}x{grid.cols} grid")
            if grid.is_barrier(pos):
                raise InvalidConfigurationError(f"{label} {pos} is a barrier")

        self.grid = grid
        self.start: Position = start
        self.goal: Position = goal
        self.parent: Dict[Position, Position] = {}
        self.cost: Dict[Position, int] = {start: 0}
        self.visited: List[Position] = []
        self.status: SearchStatus = SearchStatus.PENDING
        self.step_budget: int = grid.size * BUDGET_FACTOR

        self._queued: Set[Position] = set()
        self._events: Iterator[VisitEvent] = self._run()

    # ------------------------------------------------------------------
    # Iterator protocol
    # ------------------------------------------------------------------
    def __iter__(self) -> Iterator[VisitEvent]:
        return self

    def __next__(self) -> VisitEvent:
        return next(self._events)

    def run_to_completion(self) -> List[VisitEvent]:
        """Drain every remaining event."""
        return list(self)

    @property
    def finished(self) -> bool:
        return self.status in (SearchStatus.FOUND, SearchStatus.NOT_FOUND)

    @property
    def found(self) -> bool:
        return self.status is SearchStatus.FOUND

    def path(self) -> List[Position]:
        """Positions from start to goal.  Raises NoPathError unless FOUND."""
        if not self.finished:
            raise RuntimeError("Search has not finished yet.")
        return [step.position for step in reconstruct(self.parent, self.start, self.goal, self.grid.size)]

    # ------------------------------------------------------------------
    # Per-algorithm rules
    # ------------------------------------------------------------------
    def heuristic(self, pos: Position) -> int:
        return manhattan(pos, self.goal)

    def _make_frontier(self):
        """Selection rule."""
        alg = self.algorithm
        if alg is Algorithm.DFS:
            return StackFrontier()
        if alg is Algorithm.BFS:
            return QueueFrontier()
        if alg is Algorithm.DIJKSTRA:
            return PriorityFrontier(lambda p: self.cost[p])
        if alg is Algorithm.ASTAR:
            return PriorityFrontier(lambda p: self.cost[p] + self.heuristic(p))
        if alg is Algorithm.GREEDY:
            return PriorityFrontier(self.heuristic)
        raise UnknownAlgorithmError(f"Unknown algorithm: {alg!r}")

    def _accepts(self, nbr: Position, new_cost: int) -> bool:
        """Relaxation rule."""
        if self.algorithm in COST_AWARE:
            # h(nbr) is fixed, so comparing g is the same as comparing g + h
            return new_cost < self.cost.get(nbr, float("inf"))
        return nbr not in self._queued

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------
    def _run(self) -> Iterator[VisitEvent]:
        self.status = SearchStatus.RUNNING
        logger.debug("%s search %s → %s on %r", self.algorithm.value, self.start, self.goal, self.grid)

        frontier = self._make_frontier()
        frontier.push(self.start)
        self._queued.add(self.start)
        closed: Set[Position] = set()
        pops = 0

        while len(frontier):
            if pops >= self.step_budget:
                logger.warning(
                    "%s search hit its step budget (%d) without reaching %s",
                    self.algorithm.value, self.step_budget, self.goal,
                )
                break
            current = frontier.pop()
            pops += 1

            if current == self.goal:
                self.status = SearchStatus.FOUND
                logger.debug(
                    "%s reached %s after %d expansions, cost %d",
                    self.algorithm.value, self.goal, len(self.visited), self.cost[current],
                )
                return

            closed.add(current)
            self.visited.append(current)

            for nbr in self.grid.neighbours(current):
                if nbr in closed:
                    continue
                new_cost = self.cost[current] + 1
                if self._accepts(nbr, new_cost):
                    self.parent[nbr] = current
                    self.cost[nbr] = new_cost
                    self._queued.add(nbr)
                    frontier.push(nbr)

            yield VisitEvent(
                step_number=len(self.visited) - 1,
                position=current,
                cost=self.cost[current],
                frontier_size=len(frontier),
            )

        self.status = SearchStatus.NOT_FOUND
        logger.debug("%s exhausted its frontier; %s not reachable", self.algorithm.value, self.goal)


def search(
    grid: Grid,
    start: Optional[Tuple[int, int]],
    goal: Optional[Tuple[int, int]],
    algorithm: Union[Algorithm, str],
) -> GridSearch:
    """Validate the configuration and return a fresh, unstarted GridSearch."""
    return GridSearch(grid, start, goal, algorithm)
