"""Core data structures shared by the generator, solver and validators."""

from __future__ import annotations

import math
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Set, Tuple, Union

NodeName = str
EdgeKey = Tuple[NodeName, NodeName]

START_COLOR = "#dbeafe"
GOAL_COLOR = "#dcfce7"
NODE_COLOR = "#f3f4f6"


class GenerationInvariantViolation(RuntimeError):
    """Raised when the generator's bookkeeping breaks an internal invariant."""


class MalformedGraphInput(ValueError):
    """Raised when an externally supplied graph fails validation."""


class Difficulty(str, Enum):
    EASY = "easy"
    HARD = "hard"

    @classmethod
    def parse(cls, value: Union["Difficulty", str]) -> "Difficulty":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        choices = ", ".join(item.value for item in cls)
        raise ValueError(f"unknown difficulty {value!r} (expected one of: {choices})")


def edge_key(a: NodeName, b: NodeName) -> EdgeKey:
    return (a, b) if a <= b else (b, a)


def default_color(name: NodeName, start: NodeName, goal: NodeName) -> str:
    if name == start:
        return START_COLOR
    if name == goal:
        return GOAL_COLOR
    return NODE_COLOR


@dataclass(frozen=True)
class Node:
    """Graph vertex placed on the canvas plane."""

    name: NodeName
    x: float
    y: float
    h: int = 0
    color: str = NODE_COLOR

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class Edge:
    """Undirected weighted connection stored with a ``from``/``to`` tag."""

    source: NodeName
    target: NodeName
    weight: int

    @property
    def key(self) -> EdgeKey:
        return edge_key(self.source, self.target)

    def touches(self, name: NodeName) -> bool:
        return self.source == name or self.target == name

    def other(self, name: NodeName) -> NodeName:
        if name == self.source:
            return self.target
        if name == self.target:
            return self.source
        raise KeyError(f"node '{name}' is not an endpoint of {self.source}-{self.target}")


@dataclass
class Graph:
    """Node mapping plus an ordered edge list with designated start and goal."""

    nodes: Dict[NodeName, Node] = field(default_factory=dict)
    edges: List[Edge] = field(default_factory=list)
    start: NodeName = "S"
    goal: NodeName = "Z"

    def __len__(self) -> int:
        return len(self.nodes)

    def node(self, name: NodeName) -> Node:
        try:
            return self.nodes[name]
        except KeyError as exc:
            raise KeyError(f"Unknown node '{name}' in graph") from exc

    def edge_keys(self) -> Set[EdgeKey]:
        return {edge.key for edge in self.edges}

    def has_edge(self, a: NodeName, b: NodeName) -> bool:
        key = edge_key(a, b)
        return any(edge.key == key for edge in self.edges)

    def degree(self, name: NodeName) -> int:
        return sum(1 for edge in self.edges if edge.touches(name))

    def neighbors(self, name: NodeName) -> Iterator[Tuple[NodeName, int]]:
        """Yield ``(neighbor, weight)`` pairs, outgoing tags first then incoming."""

        for edge in self.edges:
            if edge.source == name:
                yield edge.target, edge.weight
        for edge in self.edges:
            if edge.target == name:
                yield edge.source, edge.weight

    def reachable_from(self, name: Optional[NodeName] = None) -> Set[NodeName]:
        origin = self.start if name is None else name
        if origin not in self.nodes:
            return set()
        reachable = {origin}
        queue = deque([origin])
        while queue:
            current = queue.popleft()
            for other, _ in self.neighbors(current):
                if other not in reachable:
                    reachable.add(other)
                    queue.append(other)
        return reachable

    def is_connected(self) -> bool:
        return len(self.reachable_from(self.start)) == len(self.nodes)


@dataclass
class NodeState:
    g: float = math.inf
    f: float = math.inf
    parent: Optional[NodeName] = None
    visited: bool = False


@dataclass
class SearchState:
    """Per-node A* bookkeeping produced by a single solver run."""

    nodes: Dict[NodeName, NodeState]
    start: NodeName
    goal: NodeName
    order: List[NodeName] = field(default_factory=list)

    def __getitem__(self, name: NodeName) -> NodeState:
        return self.nodes[name]

    def __contains__(self, name: object) -> bool:
        return name in self.nodes

    def __iter__(self) -> Iterator[NodeName]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    @property
    def goal_reached(self) -> bool:
        goal_state = self.nodes.get(self.goal)
        return bool(goal_state and goal_state.visited)

    @property
    def cost(self) -> float:
        goal_state = self.nodes.get(self.goal)
        return goal_state.g if goal_state is not None else math.inf

    def path(self) -> Optional[List[NodeName]]:
        """Return the start-to-goal path, or ``None`` when the goal was never closed."""

        if not self.goal_reached:
            return None
        path: List[NodeName] = []
        current: Optional[NodeName] = self.goal
        while current is not None:
            path.append(current)
            if current == self.start:
                break
            if len(path) > len(self.nodes):
                raise RuntimeError("cycle detected in parent chain")
            current = self.nodes[current].parent
        path.reverse()
        return path


__all__ = [
    "NodeName",
    "EdgeKey",
    "START_COLOR",
    "GOAL_COLOR",
    "NODE_COLOR",
    "GenerationInvariantViolation",
    "MalformedGraphInput",
    "Difficulty",
    "edge_key",
    "default_color",
    "Node",
    "Edge",
    "Graph",
    "NodeState",
    "SearchState",
]
