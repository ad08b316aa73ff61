"""Prompt text used when asking a language model for a practice graph."""

from textwrap import dedent
from typing import Union

from .model import Difficulty

GRAPH_SCHEMA = dedent(
"""
{
  "nodes": { "Label": { "x": int (50-750), "y": int (50-450), "h": int (heuristic to Goal) } },
  "edges": [ { "from": "Label", "to": "Label", "weight": int } ]
}
"""
).strip()

_PROMPT_CORE = dedent(
"""
Generate a JSON object for a graph problem to practice the A* algorithm.
Difficulty: {difficulty}.
The output must be strictly JSON with this structure:
{schema}
Required nodes: "S" (Start, x~100, y~250) and "Z" (Goal, x~700, y~250).
Ensure "h" is admissible (h <= real cost).
Ensure every edge weight is a positive integer.
Ensure a path exists from "S" to every node.
Do not include markdown code blocks.
"""
).strip()


def get_llm_prompt(difficulty: Union[Difficulty, str] = Difficulty.EASY) -> str:
    """Return the graph request prompt for ``difficulty``."""
    tier = Difficulty.parse(difficulty)
    return _PROMPT_CORE.replace("{difficulty}", tier.value).replace("{schema}", GRAPH_SCHEMA)


__all__ = ["GRAPH_SCHEMA", "get_llm_prompt"]
