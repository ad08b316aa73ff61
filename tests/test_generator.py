import logging
import math
from collections import Counter
from dataclasses import replace

import numpy as np
import pytest

from astar_trainer.config import DifficultyProfile, GeneratorConfig, get_generator_config, set_generator_config
from astar_trainer.generator import _ensure_start_edge, _repair_connectivity, generate
from astar_trainer.geometry import point_distance
from astar_trainer.model import Difficulty, Edge, GenerationInvariantViolation, Graph, Node
from astar_trainer.solver import check_admissible, solve

SEEDS = range(20)


@pytest.mark.parametrize('difficulty, expected_nodes', [('easy', 6), ('hard', 9)])
@pytest.mark.parametrize('seed', SEEDS)
def test_generated_graph_invariants(difficulty, expected_nodes, seed):
    graph = generate(difficulty, np.random.default_rng(seed))

    assert len(graph.nodes) == expected_nodes
    assert graph.start == 'S' and graph.goal == 'Z'
    assert 'S' in graph.nodes and 'Z' in graph.nodes
    assert graph.reachable_from('S') == set(graph.nodes)
    assert all(node.h >= 0 for node in graph.nodes.values())
    assert all(edge.weight >= 1 for edge in graph.edges)
    assert all(edge.source in graph.nodes and edge.target in graph.nodes for edge in graph.edges)
    assert all(edge.source != edge.target for edge in graph.edges)

    keys = Counter(edge.key for edge in graph.edges)
    assert max(keys.values()) == 1


@pytest.mark.parametrize('difficulty', list(Difficulty))
@pytest.mark.parametrize('seed', SEEDS)
def test_generated_heuristic_is_admissible(difficulty, seed):
    graph = generate(difficulty, seed)

    for name, node in graph.nodes.items():
        cost = solve(graph, start=name).cost
        assert node.h <= cost, f"h({name})={node.h} exceeds true cost {cost}"
    assert check_admissible(graph) == []


@pytest.mark.parametrize('seed', SEEDS)
def test_generated_heuristic_matches_scaled_goal_distance(seed):
    graph = generate('hard', seed)
    goal = graph.nodes['Z']
    for node in graph.nodes.values():
        assert node.h == math.floor(point_distance(node, goal) / 40.0)


def test_endpoints_sit_at_opposite_ends():
    graph = generate('easy', 7)
    assert graph.nodes['S'].position == (100.0, 250.0)
    assert graph.nodes['Z'].position == (700.0, 250.0)
    assert graph.nodes['Z'].h == 0
    assert graph.nodes['S'].h == 15


def test_intermediate_nodes_respect_margins_and_clearance(caplog):
    with caplog.at_level(logging.WARNING, logger='astar_trainer.generator'):
        graph = generate('easy', 11)

    for name, node in graph.nodes.items():
        if name in ('S', 'Z'):
            continue
        assert 150.0 <= node.x < 650.0
        assert 80.0 <= node.y < 420.0

    if 'Placement budget' not in caplog.text:
        names = list(graph.nodes)
        for i, a in enumerate(names):
            for b in names[i + 1:]:
                assert point_distance(graph.nodes[a], graph.nodes[b]) >= 110.0


def test_same_seed_reproduces_graph():
    first = generate('hard', np.random.default_rng(42))
    second = generate('hard', np.random.default_rng(42))
    assert first == second


def test_different_seeds_differ():
    assert generate('hard', 1) != generate('hard', 2)


def test_unknown_difficulty_is_rejected():
    with pytest.raises(ValueError):
        generate('impossible', 0)


@pytest.mark.parametrize('attempts', [0, 1, 50])
def test_generator_terminates_when_placement_budget_is_exhausted(attempts, caplog):
    config = GeneratorConfig(
        width=300.0,
        height=200.0,
        endpoint_inset=100.0,
        margin_x=100.0,
        margin_y=80.0,
        max_placement_attempts=attempts,
    )

    with caplog.at_level(logging.WARNING, logger='astar_trainer.generator'):
        graph = generate('hard', 3, config=config)

    assert len(graph.nodes) == 9
    assert graph.is_connected()
    assert 'Placement budget' in caplog.text


def test_profile_schedule_controls_node_count():
    config = GeneratorConfig()
    config.profiles[Difficulty.EASY] = DifficultyProfile(node_count=4)
    graph = generate('easy', 5, config=config)
    assert sorted(graph.nodes) == ['A', 'B', 'S', 'Z']


def test_too_many_nodes_for_labels_is_rejected():
    config = GeneratorConfig()
    config.profiles[Difficulty.HARD] = DifficultyProfile(node_count=20)
    with pytest.raises(ValueError) as exc:
        generate('hard', 0, config=config)
    assert 'labels available' in str(exc.value)


def test_process_wide_config_is_copied():
    original = get_generator_config()
    try:
        config = get_generator_config()
        config.profiles[Difficulty.EASY] = DifficultyProfile(node_count=3)
        assert len(generate('easy', 0).nodes) == 6

        set_generator_config(config)
        config.profiles[Difficulty.EASY] = DifficultyProfile(node_count=5)
        assert len(generate('easy', 0).nodes) == 3
    finally:
        set_generator_config(original)


def _line_graph(edges=None) -> Graph:
    positions = {'S': (0.0, 0.0), 'A': (100.0, 0.0), 'Z': (300.0, 0.0), 'B': (400.0, 0.0)}
    nodes = {name: Node(name, x, y) for name, (x, y) in positions.items()}
    return Graph(nodes=nodes, edges=list(edges or []))


def test_start_edge_goes_to_nearest_node():
    graph = _line_graph([Edge('Z', 'B', 3)])
    _ensure_start_edge(graph, GeneratorConfig())
    assert graph.edges[-1] == Edge('S', 'A', 3)


def test_start_edge_untouched_when_start_connected():
    graph = _line_graph([Edge('S', 'B', 9)])
    _ensure_start_edge(graph, GeneratorConfig())
    assert graph.edges == [Edge('S', 'B', 9)]


def test_repair_joins_closest_pairs_until_connected():
    graph = _line_graph()
    config = replace(GeneratorConfig(), max_repair_increment=0)
    order = ['S', 'A', 'Z', 'B']

    added = _repair_connectivity(graph, order, np.random.default_rng(0), config)

    assert added == 3
    assert graph.edges == [Edge('S', 'A', 3), Edge('A', 'Z', 5), Edge('Z', 'B', 3)]
    assert graph.is_connected()


def test_repair_raises_when_no_pair_can_be_found():
    graph = _line_graph()
    graph.start = 'missing'
    with pytest.raises(GenerationInvariantViolation):
        _repair_connectivity(graph, ['S', 'A', 'Z', 'B'], np.random.default_rng(0), GeneratorConfig())
