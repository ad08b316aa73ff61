from __future__ import annotations

import math
import numbers
from typing import Any, Dict, List, Mapping

from .model import Edge, EdgeKey, Graph, MalformedGraphInput, Node, default_color
from .solver import check_admissible


def _finite_number(value: object, where: str) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise MalformedGraphInput(f"{where} must be a number, got {value!r}")
    try:
        number = float(value)
    except (OverflowError, ValueError) as exc:
        raise MalformedGraphInput(f"{where} is out of range: {exc}") from exc
    if not math.isfinite(number):
        raise MalformedGraphInput(f"{where} must be finite, got {value!r}")
    return number


def _whole_number(value: object, where: str) -> int:
    number = _finite_number(value, where)
    if not number.is_integer():
        raise MalformedGraphInput(f"{where} must be an integer, got {value!r}")
    return int(number)


def _parse_nodes(raw: object, start: str, goal: str) -> Dict[str, Node]:
    if not isinstance(raw, Mapping) or not raw:
        raise MalformedGraphInput("graph needs a non-empty 'nodes' mapping")
    nodes: Dict[str, Node] = {}
    for label, spec in raw.items():
        if not isinstance(label, str) or not label.strip():
            raise MalformedGraphInput(f"node label must be a non-empty string, got {label!r}")
        if not isinstance(spec, Mapping):
            raise MalformedGraphInput(f"node '{label}' must be an object with x, y and h")
        for key in ("x", "y", "h"):
            if key not in spec:
                raise MalformedGraphInput(f"node '{label}' is missing '{key}'")
        h = _whole_number(spec["h"], f"node '{label}' h")
        if h < 0:
            raise MalformedGraphInput(f"node '{label}' h must be non-negative, got {h}")
        nodes[label] = Node(
            name=label,
            x=_finite_number(spec["x"], f"node '{label}' x"),
            y=_finite_number(spec["y"], f"node '{label}' y"),
            h=h,
            color=default_color(label, start, goal),
        )
    for required, role in ((start, "start"), (goal, "goal")):
        if required not in nodes:
            raise MalformedGraphInput(f"graph is missing the {role} node '{required}'")
    return nodes


def _parse_edges(raw: object, nodes: Mapping[str, Node]) -> List[Edge]:
    if not isinstance(raw, list):
        raise MalformedGraphInput("graph needs an 'edges' list")
    edges: List[Edge] = []
    seen: set[EdgeKey] = set()
    for idx, spec in enumerate(raw):
        if not isinstance(spec, Mapping):
            raise MalformedGraphInput(f"edge #{idx} must be an object with from, to and weight")
        for key in ("from", "to", "weight"):
            if key not in spec:
                raise MalformedGraphInput(f"edge #{idx} is missing '{key}'")
        source, target = spec["from"], spec["to"]
        for endpoint in (source, target):
            if not isinstance(endpoint, str) or endpoint not in nodes:
                raise MalformedGraphInput(f"edge #{idx} references unknown node {endpoint!r}")
        if source == target:
            raise MalformedGraphInput(f"edge #{idx} is a self-loop on '{source}'")
        weight = _whole_number(spec["weight"], f"edge #{idx} weight")
        if weight < 1:
            raise MalformedGraphInput(f"edge #{idx} weight must be a positive integer, got {weight}")
        edge = Edge(source, target, weight)
        if edge.key in seen:
            raise MalformedGraphInput(f"edge #{idx} duplicates {edge.key[0]}-{edge.key[1]}")
        seen.add(edge.key)
        edges.append(edge)
    return edges


def validate_graph(
    payload: object,
    *,
    start: str = "S",
    goal: str = "Z",
    require_connected: bool = True,
    require_admissible: bool = False,
) -> Graph:
    """Turn a JSON-shaped ``payload`` into a :class:`Graph` or raise ``MalformedGraphInput``."""

    if not isinstance(payload, Mapping):
        raise MalformedGraphInput(f"graph payload must be an object, got {type(payload).__name__}")
    nodes = _parse_nodes(payload.get("nodes"), start, goal)
    edges = _parse_edges(payload.get("edges"), nodes)
    graph = Graph(nodes=nodes, edges=edges, start=start, goal=goal)

    if require_connected:
        unreachable = sorted(set(nodes) - graph.reachable_from(start))
        if unreachable:
            raise MalformedGraphInput(f"graph is not connected. Unreachable nodes: {', '.join(unreachable)}")
    if require_admissible:
        offenders = check_admissible(graph)
        if offenders:
            raise MalformedGraphInput(f"heuristic is not admissible for: {', '.join(offenders)}")
    return graph


def graph_to_payload(graph: Graph) -> Dict[str, Any]:
    """Serialize ``graph`` into the JSON shape accepted by :func:`validate_graph`."""

    return {
        "nodes": {
            name: {"x": node.x, "y": node.y, "h": node.h, "color": node.color}
            for name, node in graph.nodes.items()
        },
        "edges": [
            {"from": edge.source, "to": edge.target, "weight": edge.weight}
            for edge in graph.edges
        ],
    }


__all__ = ["validate_graph", "graph_to_payload"]
