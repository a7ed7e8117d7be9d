"""
run.py — Run Driver
====================
Glue between one GridSearch and the live grid the shell is drawing.

A SearchRun streams frames in two phases:

    1. every VisitEvent of the search  →  cell painted VISITED
    2. on success, every PathStep      →  cell painted PATH

START and GOAL keep their classification throughout.  When the search
ends NOT_FOUND, reconstruction is never attempted.  Pulling is up to
the caller; nothing here sleeps or schedules.
"""

import logging
from typing import Iterator, List, Union

from grid import CellState, Grid, Position
from algorithms import Algorithm, Frame, GridSearch, SearchStatus, reconstruct

logger = logging.getLogger(__name__)


class SearchRun:
    """
    Attributes:
        grid      : The live grid; cells are painted as frames are pulled.
        search    : The underlying GridSearch.
        path      : Path positions streamed so far.
        cancelled : Set by cancel(); no further frames after that.
        finished  : True once both phases have been fully streamed.
    """

    def __init__(self, grid: Grid, algorithm: Union[Algorithm, str]):
        self.grid = grid
        self.search = GridSearch(grid, grid.start, grid.goal, algorithm)
        self.path: List[Position] = []
        self.cancelled: bool = False
        self.finished: bool = False
        self.frames_streamed: int = 0
        self._frames: Iterator[Frame] = self._stream()

    # ------------------------------------------------------------------
    # Iterator protocol
    # ------------------------------------------------------------------
    def __iter__(self) -> Iterator[Frame]:
        return self

    def __next__(self) -> Frame:
        frame = next(self._frames)
        self.frames_streamed += 1
        return frame

    def frames(self) -> Iterator[Frame]:
        return self

    def run_to_completion(self) -> List[Frame]:
        return list(self)

    # ------------------------------------------------------------------
    # Control
    # ------------------------------------------------------------------
    def cancel(self) -> None:
        """Stop streaming.  The grid is left exactly as the last frame drew it."""
        if self.cancelled or self.finished:
            return
        self.cancelled = True
        self._frames.close()
        logger.debug("%s run cancelled after %d frames", self.algorithm.value, self.frames_streamed)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def algorithm(self) -> Algorithm:
        return self.search.algorithm

    @property
    def status(self) -> SearchStatus:
        return self.search.status

    @property
    def found(self) -> bool:
        return self.search.found

    @property
    def active(self) -> bool:
        return not (self.finished or self.cancelled)

    @property
    def visited_count(self) -> int:
        return len(self.search.visited)

    def summary(self) -> dict:
        return {
            "algorithm":     self.algorithm.value,
            "status":        self.status.value,
            "finished":      self.finished,
            "cancelled":     self.cancelled,
            "visited_count": self.visited_count,
            "path_length":   len(self.path),
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _stream(self) -> Iterator[Frame]:
        start, goal = self.search.start, self.search.goal

        for event in self.search:
            if event.position != start:
                self.grid.set_cell(event.position, CellState.VISITED)
            yield event

        if self.search.status is SearchStatus.FOUND:
            for step in reconstruct(self.search.parent, start, goal, self.grid.size):
                self.path.append(step.position)
                if step.position != start and step.position != goal:
                    self.grid.set_cell(step.position, CellState.PATH)
                yield step

        self.finished = True
        logger.info(
            "%s finished: %s, %d visited, path of %d",
            self.algorithm.value, self.status.value, self.visited_count, len(self.path),
        )


def start_run(grid: Grid, algorithm: Union[Algorithm, str]) -> SearchRun:
    """Clear old VISITED / PATH marks and return a fresh, unstarted run."""
    grid.clear_search_marks()
    return SearchRun(grid, algorithm)
