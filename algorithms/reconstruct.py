"""
reconstruct.py — Path Reconstruction
=====================================
Walks the parent map backwards from goal to start and hands the path
out one PathStep at a time, start first, so the shell can animate it.

The walk is validated up front: a missing goal entry or a chain that
never reaches start raises NoPathError at call time, before any step
is produced.
"""

from typing import Dict, Iterator, List, Optional, Tuple

from grid import NoPathError, Position
from algorithms.step import PathStep


def reconstruct(
    parent: Dict[Position, Position],
    start: Tuple[int, int],
    goal: Tuple[int, int],
    max_steps: Optional[int] = None,
) -> Iterator[PathStep]:
    """
    Args:
        parent    : {pos: predecessor} from a finished search.
        start     : Where the walk must end up.
        goal      : Where the walk begins.
        max_steps : Walk length guard; defaults to len(parent) + 1, the
                    longest chain a well-formed map can hold.

    Returns:
        A lazy, single-use iterator of PathSteps from start to goal inclusive.

    Raises:
        NoPathError: goal has no entry, or the chain loops / exceeds max_steps.
    """
    start, goal = Position(*start), Position(*goal)
    if max_steps is None:
        max_steps = len(parent) + 1

    walk: List[Position] = [goal]
    cur = goal
    while cur != start:
        if cur not in parent:
            if cur == goal:
                raise NoPathError(f"Goal {goal} was never reached")
            raise NoPathError(f"Parent chain from {goal} breaks at {cur}")
        if len(walk) > max_steps:
            raise NoPathError(f"Parent chain from {goal} exceeds {max_steps} steps")
        cur = Position(*parent[cur])
        walk.append(cur)

    walk.reverse()
    return _emit(walk)


def _emit(path: List[Position]) -> Iterator[PathStep]:
    last = len(path) - 1
    for i, pos in enumerate(path):
        yield PathStep(index=i, position=pos, is_last=(i == last))
