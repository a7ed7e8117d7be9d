"""
grid.py — Grid Container
=========================
Single source of truth for the painted board.  The interaction state
machine edits it, the search engine reads it, the renderer draws it.

Responsibilities:
  1. Cell classification                  (set_cell / classify)
  2. Start / goal bookkeeping             (at most one of each)
  3. Adjacency queries                    (neighbours, in_bounds)
  4. Reset helpers                        (wipe everything, or only search marks)
  5. Snapshots for the shell              (snapshot / to_dict / to_strings)

Design decisions:
  - Cells live in a list of lists indexed [row][col]; the size is fixed
    for the lifetime of the object.
  - A position holds at most one of START / GOAL / BARRIER.  Assigning
    one clears whatever incompatible classification was there, so the
    `start` and `goal` attributes can never point at a wall.
  - The grid knows nothing about search bookkeeping (costs, parents);
    VISITED and PATH are plain classifications painted by the run driver.
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple

from grid.cell import CellState, Position
from grid.errors import OutOfBoundsError


class Grid:
    """
    Attributes:
        rows, cols : Fixed dimensions.
        start      : Position of the START cell, or None.
        goal       : Position of the GOAL cell, or None.
        _cells     : [[CellState, …], …]  indexed [row][col]
    """

    def __init__(self, rows: int = 20, cols: int = 20):
        if rows <= 0 or cols <= 0:
            raise ValueError(f"Grid needs positive dimensions, got {rows}x{cols}")
        self.rows: int = rows
        self.cols: int = cols
        self.start: Optional[Position] = None
        self.goal:  Optional[Position] = None
        self._cells: List[List[CellState]] = [
            [CellState.EMPTY] * cols for _ in range(rows)
        ]

    # ==================================================================
    # CLASSIFICATION
    # ==================================================================
    def in_bounds(self, pos: Tuple[int, int]) -> bool:
        row, col = pos
        return 0 <= row < self.rows and 0 <= col < self.cols

    def classify(self, pos: Tuple[int, int]) -> CellState:
        pos = self._checked(pos)
        return self._cells[pos.row][pos.col]

    def set_cell(self, pos: Tuple[int, int], state: CellState) -> None:
        """
        Classify one cell, keeping the start/goal/barrier exclusivity.

        Raises:
            OutOfBoundsError: pos lies outside the grid.
        """
        pos = self._checked(pos)

        # the position loses whatever marker it used to carry
        if pos == self.start and state is not CellState.START:
            self.start = None
        if pos == self.goal and state is not CellState.GOAL:
            self.goal = None

        # only one START / GOAL: moving it blanks the old cell
        if state is CellState.START:
            if self.start is not None and self.start != pos:
                self._cells[self.start.row][self.start.col] = CellState.EMPTY
            self.start = pos
        elif state is CellState.GOAL:
            if self.goal is not None and self.goal != pos:
                self._cells[self.goal.row][self.goal.col] = CellState.EMPTY
            self.goal = pos

        self._cells[pos.row][pos.col] = state

    def is_barrier(self, pos: Tuple[int, int]) -> bool:
        return self.classify(pos) is CellState.BARRIER

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    def neighbours(self, pos: Tuple[int, int]) -> List[Position]:
        """In-bounds, non-barrier orthogonal neighbours in right/down/left/up order."""
        pos = Position(*pos)
        return [
            nbr for nbr in pos.neighbours()
            if self.in_bounds(nbr) and self._cells[nbr.row][nbr.col] is not CellState.BARRIER
        ]

    @property
    def size(self) -> int:
        return self.rows * self.cols

    # ==================================================================
    # RESET
    # ==================================================================
    def reset_all(self) -> None:
        """Every cell EMPTY, start and goal cleared."""
        for row in self._cells:
            row[:] = [CellState.EMPTY] * self.cols
        self.start = None
        self.goal = None

    def clear_search_marks(self) -> None:
        """Softer reset: VISITED / PATH back to EMPTY, configuration kept."""
        for row in self._cells:
            for c, state in enumerate(row):
                if state is CellState.VISITED or state is CellState.PATH:
                    row[c] = CellState.EMPTY
        if self.start is not None:
            self._cells[self.start.row][self.start.col] = CellState.START
        if self.goal is not None:
            self._cells[self.goal.row][self.goal.col] = CellState.GOAL

    # ==================================================================
    # SNAPSHOTS
    # ==================================================================
    def snapshot(self) -> Tuple[Tuple[CellState, ...], ...]:
        """Read-only copy of every classification, for a full-frame redraw."""
        return tuple(tuple(row) for row in self._cells)

    def count(self, state: CellState) -> int:
        return sum(row.count(state) for row in self._cells)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rows":  self.rows,
            "cols":  self.cols,
            "start": list(self.start) if self.start else None,
            "goal":  list(self.goal) if self.goal else None,
            "cells": [[state.value for state in row] for row in self._cells],
        }

    def to_strings(self) -> List[str]:
        return ["".join(state.symbol for state in row) for row in self._cells]

    @classmethod
    def from_strings(cls, lines: Sequence[str]) -> "Grid":
        """
        Build a grid from an ASCII layout, one string per row.

            S..#
            .#..
            ...G

        `S` start, `G` goal, `#` barrier, `.` empty, `v` visited, `*` path.
        Rows must all have the same width.
        """
        lines = [line.strip() for line in lines if line.strip()]
        if not lines:
            raise ValueError("Empty grid layout")
        width = len(lines[0])
        if any(len(line) != width for line in lines):
            raise ValueError("Grid layout rows differ in width")

        g = cls(rows=len(lines), cols=width)
        for r, line in enumerate(lines):
            for c, ch in enumerate(line):
                state = CellState.from_symbol(ch)
                if state is not CellState.EMPTY:
                    g.set_cell((r, c), state)
        return g

    # ==================================================================
    # INTERNAL
    # ==================================================================
    def _checked(self, pos: Tuple[int, int]) -> Position:
        pos = Position(*pos)
        if not self.in_bounds(pos):
            raise OutOfBoundsError(
                f"Position {pos} is outside the {self.rows}x{self.cols} grid"
            )
        return pos

    def __repr__(self) -> str:
        return f"Grid({self.rows}x{self.cols}, start={self.start}, goal={self.goal})"
