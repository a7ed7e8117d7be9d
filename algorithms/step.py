"""
step.py — Animation Frames
===========================
The search engine and the path reconstructor are both lazy sequences.
Each item they produce is one frame the shell can draw before pulling
the next:

    • VisitEvent – one position finalised (expanded) by the search
    • PathStep   – one position on the reconstructed path, start → goal

Design decisions:
  - Frames are frozen dataclasses.  They are SNAPSHOTS; the engine is
    the only writer and the stepper / renderer are pure readers.
  - They carry positions only, never references into the grid, so a
    buffered frame stays valid after the grid is reset.
"""

from dataclasses import dataclass
from typing import Any, Dict, Union

from grid import Position


@dataclass(frozen=True)
class VisitEvent:
    """
    Attributes:
        step_number   : 0-based index of this event in the run.
        position      : The position that was just expanded.
        cost          : Best-known cost from start when it was expanded.
        frontier_size : Live frontier entries left after the expansion.
    """

    step_number:   int
    position:      Position
    cost:          int
    frontier_size: int = 0

    kind = "visit"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind":          self.kind,
            "step_number":   self.step_number,
            "position":      list(self.position),
            "cost":          self.cost,
            "frontier_size": self.frontier_size,
        }


@dataclass(frozen=True)
class PathStep:
    """
    Attributes:
        index    : 0-based index along the path (0 is start).
        position : The position on the path.
        is_last  : True for the goal.
    """

    index:    int
    position: Position
    is_last:  bool = False

    kind = "path"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind":     self.kind,
            "index":    self.index,
            "position": list(self.position),
            "is_last":  self.is_last,
        }


Frame = Union[VisitEvent, PathStep]
