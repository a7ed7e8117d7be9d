"""
errors.py — Failure Kinds
==========================
Every recoverable failure the core can report to the shell.

All of them derive from GridSearchError, so a shell can catch one type
and read `kind` to decide what to show.  None of them is fatal: the
grid and the interaction state are left untouched when one is raised.
"""


class GridSearchError(Exception):
    """Base class.  `kind` is a stable identifier for the shell."""

    kind: str = "error"


class OutOfBoundsError(GridSearchError, IndexError):
    kind = "out_of_bounds"


class InvalidConfigurationError(GridSearchError, ValueError):
    """Start or goal missing (or unusable) when a search is requested."""

    kind = "invalid_configuration"


class UnknownAlgorithmError(GridSearchError, ValueError):
    kind = "unknown_algorithm"


class NotConfirmedError(GridSearchError):
    """run() was called before the grid configuration was confirmed."""

    kind = "not_confirmed"


class NoPathError(GridSearchError):
    """Goal unreachable, or the parent map does not lead back to start."""

    kind = "no_path"


class RunInProgressError(GridSearchError):
    """A new run was requested while the previous one is still streaming."""

    kind = "run_in_progress"
