from .model import (
    Difficulty,
    Edge,
    GenerationInvariantViolation,
    Graph,
    MalformedGraphInput,
    Node,
    NodeState,
    SearchState,
)
from .config import DifficultyProfile, GeneratorConfig, get_generator_config, set_generator_config
from .geometry import heuristic_units, point_distance, segment_distance, weight_units
from .generator import generate
from .solver import check_admissible, goal_distances, path_cost, reconstruct_path, solve
from .validate import graph_to_payload, validate_graph
from .reference import get_llm_prompt
from .remote import RemoteGraphProvider, RemoteProviderError, obtain_graph
from .printer import format_graph, format_path, format_search_table

__all__ = [
    'Difficulty',
    'Edge',
    'GenerationInvariantViolation',
    'Graph',
    'MalformedGraphInput',
    'Node',
    'NodeState',
    'SearchState',
    'DifficultyProfile',
    'GeneratorConfig',
    'get_generator_config',
    'set_generator_config',
    'heuristic_units',
    'point_distance',
    'segment_distance',
    'weight_units',
    'generate',
    'check_admissible',
    'goal_distances',
    'path_cost',
    'reconstruct_path',
    'solve',
    'graph_to_payload',
    'validate_graph',
    'get_llm_prompt',
    'RemoteGraphProvider',
    'RemoteProviderError',
    'obtain_graph',
    'format_graph',
    'format_path',
    'format_search_table',
]
