"""
interaction.py — Interaction State Machine
===========================================
Decides which user actions are legal right now and applies them to the
grid.  The shell forwards raw input here and never edits the grid
itself.

State machine:
    AWAITING_START     →  paint(pos)             →  AWAITING_GOAL
    AWAITING_GOAL      →  paint(pos != start)    →  PAINTING_BARRIERS
    AWAITING_GOAL      →  paint(start)           →  AWAITING_GOAL  (rejected)
    PAINTING_BARRIERS  →  paint(pos)             →  PAINTING_BARRIERS  (toggle wall)
    PAINTING_BARRIERS  →  confirm()              →  CONFIRMED
    CONFIRMED          →  run()                  →  CONFIRMED  (repeatable)
    any                →  reset()                →  AWAITING_START

Paints that the current mode does not allow are rejected by returning
False; they never raise and never touch the grid.  Only run() talks to
the search engine.

Thread safety:
  Not thread-safe.  The shell drives one machine from one thread and
  pulls run frames between its own redraws.
"""

import logging
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Tuple, Union

from grid import (
    CellState,
    Grid,
    Position,
    InvalidConfigurationError,
    NotConfirmedError,
    OutOfBoundsError,
    RunInProgressError,
)
from algorithms import Algorithm, parse_algorithm
from engine.run import SearchRun, start_run

logger = logging.getLogger(__name__)


class InteractionMode(Enum):
    AWAITING_START    = "awaiting_start"
    AWAITING_GOAL     = "awaiting_goal"
    PAINTING_BARRIERS = "painting_barriers"
    CONFIRMED         = "confirmed"


# what the shell should tell the user in each mode
MODE_HINTS: Dict[InteractionMode, str] = {
    InteractionMode.AWAITING_START:    "Click a cell to place the start.",
    InteractionMode.AWAITING_GOAL:     "Click another cell to place the goal.",
    InteractionMode.PAINTING_BARRIERS: "Paint barriers, then confirm.",
    InteractionMode.CONFIRMED:         "Pick an algorithm and run it.",
}


class InteractionMachine:
    """
    Attributes:
        grid        : The grid this machine owns.
        mode        : Current InteractionMode.
        algorithm   : Algorithm used by the next run().
        current_run : The most recent SearchRun (active or not), or None.
    """

    def __init__(
        self,
        rows: int = 20,
        cols: int = 20,
        algorithm: Union[Algorithm, str] = Algorithm.ASTAR,
    ):
        self.grid: Grid = Grid(rows, cols)
        self.mode: InteractionMode = InteractionMode.AWAITING_START
        self.algorithm: Algorithm = parse_algorithm(algorithm)
        self.current_run: Optional[SearchRun] = None

    # ------------------------------------------------------------------
    # Painting
    # ------------------------------------------------------------------
    def paint(self, pos: Tuple[int, int]) -> bool:
        """
        Apply one click at `pos` according to the current mode.

        Returns:
            True if the grid changed state, False if the paint was rejected.

        Raises:
            OutOfBoundsError: pos is outside the grid (in every mode).
        """
        pos = self._checked(pos)
        mode = self.mode

        if mode is InteractionMode.AWAITING_START:
            if pos == self.grid.start:
                return False
            self.grid.set_cell(pos, CellState.START)
            self._enter(InteractionMode.AWAITING_GOAL)
            return True

        if mode is InteractionMode.AWAITING_GOAL:
            if pos == self.grid.start:
                logger.debug("Goal rejected: %s is the start", pos)
                return False
            self.grid.set_cell(pos, CellState.GOAL)
            self._enter(InteractionMode.PAINTING_BARRIERS)
            return True

        if mode is InteractionMode.PAINTING_BARRIERS:
            if pos == self.grid.start or pos == self.grid.goal:
                return False
            was_barrier = self.grid.is_barrier(pos)
            self.grid.set_cell(pos, CellState.EMPTY if was_barrier else CellState.BARRIER)
            return True

        logger.debug("Paint at %s ignored: configuration is confirmed", pos)
        return False

    def paint_stroke(self, positions: Iterable[Tuple[int, int]]) -> int:
        """
        Apply a mouse-drag stroke.

        While painting barriers, the first cell of the stroke is toggled and
        every later cell is set to that same state, so dragging across a
        mix of walls and floor either draws or erases, never flickers.  In
        the start / goal modes only the first cell of a stroke counts.

        Returns:
            Number of cells that changed.
        """
        positions = [self._checked(p) for p in positions]
        if not positions:
            return 0

        if self.mode is not InteractionMode.PAINTING_BARRIERS:
            return int(self.paint(positions[0]))

        changed = 0
        target: Optional[CellState] = None
        for pos in positions:
            if pos == self.grid.start or pos == self.grid.goal:
                continue
            if target is None:
                self.paint(pos)
                target = self.grid.classify(pos)
                changed += 1
            elif self.grid.classify(pos) is not target:
                self.grid.set_cell(pos, target)
                changed += 1
        return changed

    # ------------------------------------------------------------------
    # Confirm / algorithm selection
    # ------------------------------------------------------------------
    def confirm(self) -> None:
        """
        Freeze the configuration.

        Raises:
            InvalidConfigurationError: start or goal has not been placed.
        """
        if self.mode is InteractionMode.CONFIRMED:
            return
        if self.mode is not InteractionMode.PAINTING_BARRIERS:
            raise InvalidConfigurationError("Place a start and a goal before confirming")
        self._enter(InteractionMode.CONFIRMED)

    def select_algorithm(self, algorithm: Union[Algorithm, str]) -> Algorithm:
        """Raises UnknownAlgorithmError for anything outside the five."""
        self.algorithm = parse_algorithm(algorithm)
        logger.debug("Algorithm selected: %s", self.algorithm.value)
        return self.algorithm

    # ------------------------------------------------------------------
    # Run / reset
    # ------------------------------------------------------------------
    def run(self, algorithm: Union[Algorithm, str, None] = None) -> SearchRun:
        """
        Start a search on the frozen grid.  Old VISITED / PATH marks are
        wiped first, so runs can be repeated with different algorithms.

        Raises:
            NotConfirmedError: confirm() has not been called.
            RunInProgressError: the previous run still has frames to stream.
            UnknownAlgorithmError: `algorithm` is not one of the five.
        """
        if self.mode is not InteractionMode.CONFIRMED:
            raise NotConfirmedError("Confirm the grid before running a search")
        if self.current_run is not None and self.current_run.active:
            raise RunInProgressError(
                f"{self.current_run.algorithm.value} run is still streaming; finish it or reset"
            )
        if algorithm is not None:
            self.select_algorithm(algorithm)

        self.current_run = start_run(self.grid, self.algorithm)
        logger.info("Run started: %s from %s to %s", self.algorithm.value, self.grid.start, self.grid.goal)
        return self.current_run

    def reset(self) -> None:
        """Back to AWAITING_START from anywhere.  Cancels any active run."""
        if self.current_run is not None:
            self.current_run.cancel()
        self.current_run = None
        self.grid.reset_all()
        self._enter(InteractionMode.AWAITING_START)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def start(self) -> Optional[Position]:
        return self.grid.start

    @property
    def goal(self) -> Optional[Position]:
        return self.grid.goal

    @property
    def can_confirm(self) -> bool:
        return self.mode is InteractionMode.PAINTING_BARRIERS

    @property
    def hint(self) -> str:
        return MODE_HINTS[self.mode]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mode":      self.mode.value,
            "hint":      self.hint,
            "algorithm": self.algorithm.value,
            "grid":      self.grid.to_dict(),
            "run":       self.current_run.summary() if self.current_run else None,
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _checked(self, pos: Tuple[int, int]) -> Position:
        pos = Position(*pos)
        if not self.grid.in_bounds(pos):
            raise OutOfBoundsError(
                f"Position {pos} is outside the {self.grid.rows}x{self.grid.cols} grid"
            )
        return pos

    def _enter(self, mode: InteractionMode) -> None:
        if mode is not self.mode:
            logger.debug("Mode %s → %s", self.mode.value, mode.value)
        self.mode = mode
