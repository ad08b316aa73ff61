"""Remote graph source backed by an OpenAI-compatible chat completions API.

The remote provider is an alternate producer of the same :class:`Graph`
shape the local generator returns. Its output is never trusted: replies go
through :func:`validate_graph`, and :func:`obtain_graph` falls back to the
local generator on timeouts, transport errors or malformed payloads.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
import re
from typing import Any, Optional, Tuple, Union

import openai
from openai import AsyncOpenAI

from .config import GeneratorConfig
from .generator import RandomSource, generate
from .model import Difficulty, Graph, MalformedGraphInput
from .reference import get_llm_prompt
from .validate import validate_graph

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"
DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_TIMEOUT_SECONDS = 30.0
_MIN_KEY_LENGTH = 6

_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)


class RemoteProviderError(RuntimeError):
    """Raised when the remote provider cannot produce a parseable reply."""


def strip_code_fences(text: str) -> str:
    return _FENCE_RE.sub("", text).strip()


class RemoteGraphProvider:
    """Fetch practice graphs from a language model."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        client: Optional[Any] = None,
    ) -> None:
        self.model = model
        self.base_url = base_url
        self.timeout = timeout
        if client is None:
            client = AsyncOpenAI(api_key=api_key, base_url=base_url, timeout=timeout)
        self._client = client

    @classmethod
    def from_env(cls, *, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> Optional["RemoteGraphProvider"]:
        """Build a provider from environment variables, or ``None`` without a usable key."""

        api_key = os.getenv("ASTAR_TRAINER_API_KEY") or os.getenv("GEMINI_API_KEY")
        if not api_key or len(api_key) < _MIN_KEY_LENGTH:
            logger.info("No remote API key configured; remote graph provider disabled")
            return None
        return cls(
            api_key,
            model=os.getenv("ASTAR_TRAINER_MODEL", DEFAULT_MODEL),
            base_url=os.getenv("ASTAR_TRAINER_BASE_URL", DEFAULT_BASE_URL),
            timeout=timeout,
        )

    async def _complete(self, prompt: str) -> str:
        try:
            response = await self._client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
            )
        except openai.OpenAIError as exc:
            raise RemoteProviderError(f"remote request failed: {exc}") from exc
        if not response.choices:
            raise RemoteProviderError("remote reply contained no choices")
        content = response.choices[0].message.content
        if not content:
            raise RemoteProviderError("remote reply was empty")
        if not isinstance(content, str):
            raise RemoteProviderError(f"remote reply content must be text, got {type(content).__name__}")
        return content

    async def fetch(self, difficulty: Union[Difficulty, str] = Difficulty.EASY) -> Graph:
        tier = Difficulty.parse(difficulty)
        logger.info("Requesting %s graph from %s (model=%s)", tier.value, self.base_url, self.model)
        text = await self._complete(get_llm_prompt(tier))
        try:
            payload = json.loads(strip_code_fences(text))
        except ValueError as exc:
            raise RemoteProviderError(f"remote reply is not valid JSON: {exc}") from exc
        graph = validate_graph(payload)
        logger.info("Remote graph accepted: %d nodes, %d edges", len(graph.nodes), len(graph.edges))
        return graph


async def obtain_graph(
    difficulty: Union[Difficulty, str] = Difficulty.EASY,
    *,
    provider: Optional[RemoteGraphProvider] = None,
    rng: RandomSource = None,
    config: Optional[GeneratorConfig] = None,
    timeout: Optional[float] = None,
) -> Tuple[Graph, str]:
    """Return ``(graph, source)`` where ``source`` is ``"remote"`` or ``"local"``."""

    tier = Difficulty.parse(difficulty)
    if provider is not None:
        limit = provider.timeout if timeout is None else timeout
        try:
            graph = await asyncio.wait_for(provider.fetch(tier), timeout=limit)
        except asyncio.TimeoutError:
            logger.warning("Remote graph provider timed out after %.1fs; using local generator", limit)
        except (RemoteProviderError, MalformedGraphInput) as exc:
            logger.warning("Remote graph rejected (%s); using local generator", exc)
        else:
            return graph, "remote"
    return generate(tier, rng, config=config), "local"


__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_MODEL",
    "DEFAULT_TIMEOUT_SECONDS",
    "RemoteProviderError",
    "RemoteGraphProvider",
    "obtain_graph",
    "strip_code_fences",
]
