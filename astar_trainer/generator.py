"""Procedural generator for A* practice graphs.

The generator works in four passes over a fixed-size canvas:

1. place the start and goal at opposite ends, then the remaining nodes by
   bounded rejection sampling so that nodes keep a minimum clearance;
2. assign each node the admissible heuristic ``floor(distance_to_goal / scale)``;
3. connect every non-goal node to a few of its nearest neighbours, rejecting
   duplicates and edges that pass too close to an unrelated node;
4. guarantee the start has an edge and repair connectivity by joining the
   closest reachable/unreachable pair until every node is reachable.

All randomness comes from the ``numpy.random.Generator`` handed in, so a
fixed seed reproduces the same graph.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple, Union

import numpy as np

from .config import GeneratorConfig, get_generator_config
from .geometry import heuristic_units, point_distance, segment_distance, weight_units
from .logging_utils import apply_debug_logging
from .model import (
    Difficulty,
    Edge,
    EdgeKey,
    GenerationInvariantViolation,
    Graph,
    Node,
    NodeName,
    default_color,
    edge_key,
)

logger = logging.getLogger(__name__)

Position = Tuple[float, float]
RandomSource = Union[np.random.Generator, int, None]


def _coerce_rng(rng: RandomSource) -> np.random.Generator:
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


def _sample_position(rng: np.random.Generator, config: GeneratorConfig) -> Position:
    x = config.margin_x + float(rng.random()) * (config.width - 2.0 * config.margin_x)
    y = config.margin_y + float(rng.random()) * (config.height - 2.0 * config.margin_y)
    return (x, y)


def _place_nodes(
    labels: Tuple[NodeName, ...],
    rng: np.random.Generator,
    config: GeneratorConfig,
) -> Dict[NodeName, Position]:
    mid_y = config.height / 2.0
    positions: Dict[NodeName, Position] = {
        config.start_label: (config.endpoint_inset, mid_y),
        config.goal_label: (config.width - config.endpoint_inset, mid_y),
    }

    attempts = 0
    for label in labels:
        candidate: Optional[Position] = None
        placed = False
        while attempts < config.max_placement_attempts:
            attempts += 1
            candidate = _sample_position(rng, config)
            if all(point_distance(candidate, other) >= config.node_clearance for other in positions.values()):
                placed = True
                break
        if not placed:
            if candidate is None:
                candidate = _sample_position(rng, config)
            logger.warning(
                "Placement budget of %d attempts exhausted; accepting node %s at (%.1f, %.1f) without clearance",
                config.max_placement_attempts,
                label,
                candidate[0],
                candidate[1],
            )
        positions[label] = candidate

    logger.debug("Placed %d nodes using %d rejection attempts", len(positions), attempts)
    return positions


def _build_nodes(positions: Dict[NodeName, Position], config: GeneratorConfig) -> Dict[NodeName, Node]:
    goal = positions[config.goal_label]
    nodes: Dict[NodeName, Node] = {}
    for name, (x, y) in positions.items():
        nodes[name] = Node(
            name=name,
            x=x,
            y=y,
            h=heuristic_units(point_distance((x, y), goal), config.scale),
            color=default_color(name, config.start_label, config.goal_label),
        )
    return nodes


def _blocked_by_node(nodes: Dict[NodeName, Node], u: NodeName, v: NodeName, clearance: float) -> bool:
    for name, node in nodes.items():
        if name == u or name == v:
            continue
        if segment_distance(node, nodes[u], nodes[v]) < clearance:
            return True
    return False


def _synthesize_edges(
    graph: Graph,
    order: List[NodeName],
    difficulty: Difficulty,
    rng: np.random.Generator,
    config: GeneratorConfig,
) -> None:
    profile = config.profile(difficulty)
    nodes = graph.nodes
    seen: set[EdgeKey] = set()

    for u in order:
        if u == graph.goal:
            continue
        candidates = sorted(
            (v for v in order if v != u),
            key=lambda v: point_distance(nodes[u], nodes[v]),
        )
        connections = int(rng.integers(profile.min_connections, profile.max_connections + 1))
        connections += profile.extra_connections

        for v in candidates[: connections + profile.candidate_slack]:
            if graph.degree(u) >= connections:
                break
            key = edge_key(u, v)
            if key in seen:
                continue
            if _blocked_by_node(nodes, u, v, config.edge_clearance):
                logger.debug("Rejected edge %s-%s: passes within clearance of another node", u, v)
                continue
            increment = int(rng.integers(0, config.max_weight_increment + 1))
            weight = max(1, weight_units(point_distance(nodes[u], nodes[v]), config.scale) + increment)
            graph.edges.append(Edge(u, v, weight))
            seen.add(key)


def _ensure_start_edge(graph: Graph, config: GeneratorConfig) -> None:
    if graph.degree(graph.start) > 0:
        return
    start = graph.nodes[graph.start]
    nearest = min(
        (name for name in graph.nodes if name != graph.start),
        key=lambda name: point_distance(start, graph.nodes[name]),
    )
    weight = max(1, weight_units(point_distance(start, graph.nodes[nearest]), config.scale))
    graph.edges.append(Edge(graph.start, nearest, weight))
    logger.info("Start node had no edges; connected %s-%s (weight=%d)", graph.start, nearest, weight)


def _repair_connectivity(
    graph: Graph,
    order: List[NodeName],
    rng: np.random.Generator,
    config: GeneratorConfig,
) -> int:
    added = 0
    for _ in range(len(graph.nodes)):
        reachable = graph.reachable_from(graph.start)
        if len(reachable) == len(graph.nodes):
            return added
        unreachable = [name for name in order if name not in reachable]

        best: Optional[Tuple[NodeName, NodeName]] = None
        best_distance = float("inf")
        for u in order:
            if u not in reachable:
                continue
            for v in unreachable:
                distance = point_distance(graph.nodes[u], graph.nodes[v])
                if distance < best_distance:
                    best_distance = distance
                    best = (u, v)

        if best is None:
            raise GenerationInvariantViolation(
                f"no connecting pair found while {len(unreachable)} node(s) remain unreachable"
            )
        u, v = best
        increment = int(rng.integers(0, config.max_repair_increment + 1))
        weight = max(1, weight_units(best_distance, config.scale) + increment)
        graph.edges.append(Edge(u, v, weight))
        added += 1
        logger.debug("Repair edge %s-%s (weight=%d) joins %s to the start component", u, v, weight, v)

    if not graph.is_connected():
        raise GenerationInvariantViolation(
            f"graph still disconnected after {added} repair edge(s)"
        )
    return added


def generate(
    difficulty: Union[Difficulty, str] = Difficulty.EASY,
    rng: RandomSource = None,
    *,
    config: Optional[GeneratorConfig] = None,
) -> Graph:
    """Generate a connected practice graph for ``difficulty``.

    ``rng`` may be a ``numpy.random.Generator``, an integer seed or ``None``
    for fresh OS entropy. ``config`` defaults to the process-wide generator
    configuration.
    """

    tier = Difficulty.parse(difficulty)
    cfg = config if config is not None else get_generator_config()
    generator = _coerce_rng(rng)
    profile = cfg.profile(tier)
    if profile.node_count < 2:
        raise ValueError(f"difficulty '{tier.value}' needs at least 2 nodes, got {profile.node_count}")

    labels = cfg.intermediate_labels(profile.node_count - 2)
    positions = _place_nodes(labels, generator, cfg)
    graph = Graph(
        nodes=_build_nodes(positions, cfg),
        edges=[],
        start=cfg.start_label,
        goal=cfg.goal_label,
    )

    order = sorted(graph.nodes, key=lambda name: (graph.nodes[name].x, name))
    _synthesize_edges(graph, order, tier, generator, cfg)
    synthesized = len(graph.edges)
    _ensure_start_edge(graph, cfg)
    repaired = _repair_connectivity(graph, order, generator, cfg)

    logger.info(
        "Generated %s graph: %d nodes, %d edges (%d synthesized, %d repair)",
        tier.value,
        len(graph.nodes),
        len(graph.edges),
        synthesized,
        repaired,
    )
    return graph


__all__ = ["RandomSource", "generate"]


apply_debug_logging(globals(), logger=logger)
