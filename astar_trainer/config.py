"""Configuration helpers for the graph generator."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Dict, Tuple

from .model import Difficulty

DEFAULT_LABELS: Tuple[str, ...] = ("S", "A", "B", "C", "D", "E", "F", "G", "H", "I", "Z")


@dataclass(frozen=True)
class DifficultyProfile:
    """Node count and edge density for one difficulty tier."""

    node_count: int
    min_connections: int = 1
    max_connections: int = 2
    extra_connections: int = 0
    candidate_slack: int = 2


def _default_profiles() -> Dict[Difficulty, DifficultyProfile]:
    return {
        Difficulty.EASY: DifficultyProfile(node_count=6),
        Difficulty.HARD: DifficultyProfile(node_count=9, extra_connections=1),
    }


@dataclass
class GeneratorConfig:
    """Canvas geometry, clearances and scaling used by :func:`generate`."""

    width: float = 800.0
    height: float = 500.0
    endpoint_inset: float = 100.0
    margin_x: float = 150.0
    margin_y: float = 80.0
    node_clearance: float = 110.0
    edge_clearance: float = 45.0
    max_placement_attempts: int = 2000
    scale: float = 40.0
    max_weight_increment: int = 2
    max_repair_increment: int = 1
    start_label: str = "S"
    goal_label: str = "Z"
    labels: Tuple[str, ...] = DEFAULT_LABELS
    profiles: Dict[Difficulty, DifficultyProfile] = field(default_factory=_default_profiles)

    def profile(self, difficulty: Difficulty) -> DifficultyProfile:
        try:
            return self.profiles[difficulty]
        except KeyError as exc:
            raise ValueError(f"no generator profile for difficulty '{difficulty.value}'") from exc

    def intermediate_labels(self, count: int) -> Tuple[str, ...]:
        pool = [label for label in self.labels if label not in (self.start_label, self.goal_label)]
        if count > len(pool):
            raise ValueError(f"requested {count} intermediate nodes but only {len(pool)} labels available")
        return tuple(pool[:count])


_GENERATOR_CONFIG = GeneratorConfig()


def get_generator_config() -> GeneratorConfig:
    return copy.deepcopy(_GENERATOR_CONFIG)


def set_generator_config(config: GeneratorConfig) -> None:
    global _GENERATOR_CONFIG
    _GENERATOR_CONFIG = copy.deepcopy(config)


__all__ = [
    "DEFAULT_LABELS",
    "DifficultyProfile",
    "GeneratorConfig",
    "get_generator_config",
    "set_generator_config",
]
