"""
algorithms/ — Search Engine
============================
    from algorithms import Algorithm, search, reconstruct

Algorithm is the closed set of five strategies; REGISTRY carries the
metadata card for each.  search() returns a lazy GridSearch of
VisitEvents, reconstruct() turns its parent map into PathSteps.
"""

from algorithms.registry import (
    Algorithm,
    AlgoInfo,
    REGISTRY,
    get_algorithm,
    list_algorithms,
    parse_algorithm,
)
from algorithms.step        import VisitEvent, PathStep, Frame
from algorithms.frontier    import StackFrontier, QueueFrontier, PriorityFrontier
from algorithms.search      import GridSearch, SearchStatus, search, manhattan
from algorithms.reconstruct import reconstruct

__all__ = [
    "Algorithm",
    "AlgoInfo",
    "REGISTRY",
    "get_algorithm",
    "list_algorithms",
    "parse_algorithm",
    "VisitEvent",
    "PathStep",
    "Frame",
    "StackFrontier",
    "QueueFrontier",
    "PriorityFrontier",
    "GridSearch",
    "SearchStatus",
    "search",
    "manhattan",
    "reconstruct",
]
