import pytest

from grid import Grid, CellState
from engine import InteractionMachine


# shortest route S → G is 9 edges (10 cells), along the bottom row
MAZE = [
    "S.#...",
    ".##.#.",
    "....#G",
    ".#....",
]


@pytest.fixture
def maze():
    return Grid.from_strings(MAZE)


@pytest.fixture
def open_grid():
    """Factory: barrier-free grid with start and goal placed."""
    def make(rows=5, cols=5, start=(0, 0), goal=(4, 4)):
        g = Grid(rows, cols)
        g.set_cell(start, CellState.START)
        if goal != start:
            g.set_cell(goal, CellState.GOAL)
        return g
    return make


@pytest.fixture
def confirmed_machine():
    """5x5 machine with start (0,0), goal (4,4), confirmed."""
    m = InteractionMachine(rows=5, cols=5)
    m.paint((0, 0))
    m.paint((4, 4))
    m.confirm()
    return m

