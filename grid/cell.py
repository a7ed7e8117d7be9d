from enum import Enum
from typing import List, NamedTuple, Tuple


# ---------------------------------------------------------------------------
# Cell State Enum — maps 1-to-1 with the visual encoding palette
# ---------------------------------------------------------------------------
class CellState(Enum):
    EMPTY    = "empty"      # default white
    START    = "start"      # green, where the search begins
    GOAL     = "goal"       # red, where the search wants to end
    BARRIER  = "barrier"    # black, user-painted wall
    VISITED  = "visited"    # yellow, expanded by the running search
    PATH     = "path"       # blue, on the reconstructed path

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]

    @classmethod
    def from_symbol(cls, ch: str) -> "CellState":
        try:
            return _FROM_SYMBOL[ch]
        except KeyError:
            raise ValueError(f"Unknown cell symbol: {ch!r}") from None


# ASCII layout used by Grid.from_strings / Grid.to_strings
_SYMBOLS = {
    CellState.EMPTY:   ".",
    CellState.START:   "S",
    CellState.GOAL:    "G",
    CellState.BARRIER: "#",
    CellState.VISITED: "v",
    CellState.PATH:    "*",
}
_FROM_SYMBOL = {sym: state for state, sym in _SYMBOLS.items()}


# fixed expansion order: right, down, left, up
DIRECTIONS: Tuple[Tuple[int, int], ...] = ((0, 1), (1, 0), (0, -1), (-1, 0))


# ---------------------------------------------------------------------------
# Position
# ---------------------------------------------------------------------------
class Position(NamedTuple):
    """
    A (row, col) pair.  Hashable, ordered, unpacks like a tuple.

    Only the four axis-aligned neighbours count as adjacent.
    """

    row: int
    col: int

    def neighbours(self) -> List["Position"]:
        """All four orthogonal neighbours, unbounded, in right/down/left/up order."""
        return [Position(self.row + dr, self.col + dc) for dr, dc in DIRECTIONS]

    def manhattan(self, other: "Position") -> int:
        return abs(self.row - other[0]) + abs(self.col - other[1])

    def is_adjacent(self, other: "Position") -> bool:
        return self.manhattan(other) == 1

    def __repr__(self) -> str:
        return f"({self.row},{self.col})"
