"""A* search over generated practice graphs."""

from __future__ import annotations

import heapq
import logging
import math
from typing import Dict, List, Optional, Sequence, Tuple

from .logging_utils import apply_debug_logging
from .model import Graph, NodeName, NodeState, SearchState

logger = logging.getLogger(__name__)


def _require_node(graph: Graph, name: NodeName, role: str) -> None:
    if name not in graph.nodes:
        raise KeyError(f"{role} node '{name}' is not part of the graph")


def solve(
    graph: Graph,
    *,
    start: Optional[NodeName] = None,
    goal: Optional[NodeName] = None,
) -> SearchState:
    """Run A* from ``start`` to ``goal`` and return the per-node search state.

    The open list is re-sorted by ``f`` before every expansion with a stable
    sort, so among equal ``f`` values the node that sits earlier in the list
    is expanded first. Closed nodes are never reopened. When the open list
    runs dry before the goal is closed, the goal stays unvisited with
    ``g = inf``; this is a normal outcome rather than an error.
    """

    start = graph.start if start is None else start
    goal = graph.goal if goal is None else goal
    _require_node(graph, start, "start")
    _require_node(graph, goal, "goal")

    nodes: Dict[NodeName, NodeState] = {name: NodeState() for name in graph.nodes}
    nodes[start].g = 0
    nodes[start].f = graph.nodes[start].h
    state = SearchState(nodes=nodes, start=start, goal=goal)

    open_list: List[NodeName] = [start]
    closed: set[NodeName] = set()

    while open_list:
        open_list.sort(key=lambda name: nodes[name].f)
        current = open_list.pop(0)
        nodes[current].visited = True
        closed.add(current)
        state.order.append(current)

        if current == goal:
            break

        for neighbor, weight in graph.neighbors(current):
            if neighbor in closed:
                continue
            tentative = nodes[current].g + weight
            if tentative < nodes[neighbor].g:
                entry = nodes[neighbor]
                entry.parent = current
                entry.g = tentative
                entry.f = tentative + graph.nodes[neighbor].h
                if neighbor not in open_list:
                    open_list.append(neighbor)

    if state.goal_reached:
        logger.info("A* reached %s from %s with cost %s after %d expansion(s)", goal, start, nodes[goal].g, len(state.order))
    else:
        logger.info("A* exhausted the open list after %d expansion(s); %s unreachable from %s", len(state.order), goal, start)
    return state


def reconstruct_path(state: SearchState, goal: Optional[NodeName] = None) -> Optional[List[NodeName]]:
    """Follow parent links from ``goal`` back to the start."""

    if goal is None or goal == state.goal:
        return state.path()
    target = state.nodes.get(goal)
    if target is None or math.isinf(target.g):
        return None
    path: List[NodeName] = [goal]
    current = target.parent
    while current is not None:
        path.append(current)
        if len(path) > len(state.nodes):
            raise RuntimeError("cycle detected in parent chain")
        current = state.nodes[current].parent
    path.reverse()
    return path


def path_cost(graph: Graph, path: Sequence[NodeName]) -> int:
    """Sum of edge weights along ``path``; raises ``KeyError`` on a missing edge."""

    total = 0
    for a, b in zip(path, path[1:]):
        weights = [weight for other, weight in graph.neighbors(a) if other == b]
        if not weights:
            raise KeyError(f"no edge between '{a}' and '{b}'")
        total += min(weights)
    return total


def goal_distances(graph: Graph, goal: Optional[NodeName] = None) -> Dict[NodeName, float]:
    """Uniform-cost distances from every node to ``goal``; unreachable nodes get ``inf``.

    The graph's own heuristic is ignored so the result is exact even when
    ``h`` is inconsistent.
    """

    goal = graph.goal if goal is None else goal
    _require_node(graph, goal, "goal")
    distances: Dict[NodeName, float] = {name: math.inf for name in graph.nodes}
    distances[goal] = 0
    frontier: List[Tuple[float, NodeName]] = [(0, goal)]
    while frontier:
        dist, current = heapq.heappop(frontier)
        if dist > distances[current]:
            continue
        for neighbor, weight in graph.neighbors(current):
            candidate = dist + weight
            if candidate < distances[neighbor]:
                distances[neighbor] = candidate
                heapq.heappush(frontier, (candidate, neighbor))
    return distances


def check_admissible(graph: Graph) -> List[NodeName]:
    """Return the nodes whose heuristic overestimates the true cost to the goal."""

    distances = goal_distances(graph)
    offenders: List[NodeName] = []
    for name, node in graph.nodes.items():
        if node.h > distances[name]:
            offenders.append(name)
    if offenders:
        logger.warning("Heuristic overestimates remaining cost for %s", ", ".join(offenders))
    return offenders


__all__ = ["solve", "reconstruct_path", "path_cost", "goal_distances", "check_admissible"]


apply_debug_logging(globals(), logger=logger)
