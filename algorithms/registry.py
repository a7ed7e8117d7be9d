"""
registry.py — Algorithm Registry
=================================
Single source of truth for every algorithm the visualizer knows about.

    from algorithms import Algorithm, REGISTRY, get_algorithm

`Algorithm` is a closed enum; the engine switches on its members to
pick a selection rule and a relaxation rule.  REGISTRY maps each member
to an AlgoInfo card the UI and recorder use for labels and pseudocode.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Union

from grid import UnknownAlgorithmError


class Algorithm(Enum):
    BFS      = "bfs"
    DFS      = "dfs"
    DIJKSTRA = "dijkstra"
    ASTAR    = "astar"
    GREEDY   = "greedy"


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    algorithm:        Algorithm
    label:            str                     # human label, e.g. "Breadth-First Search"
    short_label:      str                     # button text, e.g. "BFS"
    pseudocode:       List[str]
    tags:             List[str] = field(default_factory=list)
    optimal:          bool      = False       # guarantees a shortest path?
    has_heuristic:    bool      = False       # A* / Greedy
    complexity_time:  str       = ""
    description:      str       = ""

    @property
    def key(self) -> str:
        return self.algorithm.value


# ---------------------------------------------------------------------------
# Pseudocode — one shared skeleton, the two varying lines spelled out
# ---------------------------------------------------------------------------
def _skeleton(select: str, relax: List[str]) -> List[str]:
    return [
        "cost[start] ← 0;  frontier ← [start]",
        "while frontier is not empty:",
        f"    node ← {select}",
        "    if node == goal: return reconstruct(parent)",
        "    mark node visited",
        "    for nbr in orthogonal(node) if not barrier:",
        "        new_cost ← cost[node] + 1",
        *relax,
        "return NOT FOUND",
    ]


_RELAX_IF_NEW = [
    "        if nbr never queued:",
    "            parent[nbr] ← node;  cost[nbr] ← new_cost",
    "            frontier.push(nbr)",
]

_RELAX_IF_BETTER = [
    "        if new_cost < cost[nbr]:",
    "            parent[nbr] ← node;  cost[nbr] ← new_cost",
    "            frontier.push_or_decrease(nbr)",
]


# ---------------------------------------------------------------------------
# THE REGISTRY  (insertion order = button order)
# ---------------------------------------------------------------------------
REGISTRY: Dict[Algorithm, AlgoInfo] = {

    Algorithm.ASTAR: AlgoInfo(
        algorithm=Algorithm.ASTAR, label="A* Search", short_label="A*",
        pseudocode=_skeleton("frontier.pop_min(cost + h)", _RELAX_IF_BETTER),
        tags=["shortest-path", "heuristic"], optimal=True, has_heuristic=True,
        complexity_time="O(V log V)",
        description="Dijkstra + Manhattan guidance. Optimal because h never overestimates.",
    ),

    Algorithm.DIJKSTRA: AlgoInfo(
        algorithm=Algorithm.DIJKSTRA, label="Dijkstra's Algorithm", short_label="Dijkstra",
        pseudocode=_skeleton("frontier.pop_min(cost)", _RELAX_IF_BETTER),
        tags=["shortest-path"], optimal=True,
        complexity_time="O(V log V)",
        description="Expands the cheapest node first. Spreads evenly in every direction.",
    ),

    Algorithm.BFS: AlgoInfo(
        algorithm=Algorithm.BFS, label="Breadth-First Search", short_label="BFS",
        pseudocode=_skeleton("frontier.pop_oldest()", _RELAX_IF_NEW),
        tags=["shortest-path", "traversal"], optimal=True,
        complexity_time="O(V)",
        description="Explores layer by layer. Shortest path on a unit-cost grid.",
    ),

    Algorithm.DFS: AlgoInfo(
        algorithm=Algorithm.DFS, label="Depth-First Search", short_label="DFS",
        pseudocode=_skeleton("frontier.pop_newest()", _RELAX_IF_NEW),
        tags=["traversal"],
        complexity_time="O(V)",
        description="Dives deep before backtracking. Does NOT guarantee a shortest path.",
    ),

    Algorithm.GREEDY: AlgoInfo(
        algorithm=Algorithm.GREEDY, label="Greedy Best-First", short_label="Greedy",
        pseudocode=_skeleton("frontier.pop_min(h)", _RELAX_IF_NEW),
        tags=["heuristic", "suboptimal"], has_heuristic=True,
        complexity_time="O(V log V)",
        description="Chases the goal by heuristic alone. Fast, but NOT optimal.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def parse_algorithm(value: Union[Algorithm, str]) -> Algorithm:
    """
    Accept an Algorithm or its registry key ("astar", "bfs", …).

    Raises:
        UnknownAlgorithmError: anything outside the five members.
    """
    if isinstance(value, Algorithm):
        return value
    if isinstance(value, str):
        try:
            return Algorithm(value.strip().lower())
        except ValueError:
            pass
    available = ", ".join(a.value for a in Algorithm)
    raise UnknownAlgorithmError(f"Unknown algorithm: {value!r}. Available: {available}")


def get_algorithm(value: Union[Algorithm, str]) -> AlgoInfo:
    """Return the AlgoInfo card for an Algorithm or key."""
    return REGISTRY[parse_algorithm(value)]


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in button order."""
    return list(REGISTRY.values())
