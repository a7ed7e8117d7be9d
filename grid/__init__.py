"""
grid/
-----
Core data layer.  Public API:

    from grid import Grid, Position, CellState
    from grid import GridSearchError, OutOfBoundsError, …
"""

from grid.cell   import Position, CellState
from grid.grid   import Grid
from grid.errors import (
    GridSearchError,
    OutOfBoundsError,
    InvalidConfigurationError,
    UnknownAlgorithmError,
    NotConfirmedError,
    NoPathError,
    RunInProgressError,
)

__all__ = [
    "Position",  "CellState",
    "Grid",
    "GridSearchError",
    "OutOfBoundsError",
    "InvalidConfigurationError",
    "UnknownAlgorithmError",
    "NotConfirmedError",
    "NoPathError",
    "RunInProgressError",
]
