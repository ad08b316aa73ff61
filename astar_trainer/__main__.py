import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from astar_trainer import (
    Difficulty,
    RemoteGraphProvider,
    format_graph,
    format_path,
    format_search_table,
    graph_to_payload,
    obtain_graph,
    solve,
)
from astar_trainer.remote import DEFAULT_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Generate and solve A* practice graphs")
    parser.add_argument(
        "--difficulty",
        choices=[item.value for item in Difficulty],
        default=Difficulty.EASY.value,
        help="Graph difficulty tier (default: easy)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for the local generator (default: fresh entropy)",
    )
    parser.add_argument(
        "--remote",
        action="store_true",
        help="Ask the remote language model for a graph first, falling back to the local generator",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT_SECONDS,
        help=f"Remote request timeout in seconds (default: {DEFAULT_TIMEOUT_SECONDS:g})",
    )
    parser.add_argument(
        "--json",
        dest="json_path",
        help="Write the graph as JSON to the given path",
    )
    parser.add_argument(
        "--no-solve",
        action="store_true",
        help="Only print the blank worksheet, not the A* answer",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    provider = RemoteGraphProvider.from_env(timeout=args.timeout) if args.remote else None
    if args.remote and provider is None:
        logger.warning("--remote requested but no API key is configured; using local generator")

    graph, source = asyncio.run(
        obtain_graph(args.difficulty, provider=provider, rng=args.seed, timeout=args.timeout)
    )
    logger.info("Using %s graph with %d nodes", source, len(graph.nodes))

    print(f"Graph ({source}, {args.difficulty}):")
    print(format_graph(graph))
    print("Worksheet:")
    print(format_search_table(graph))

    if not args.no_solve:
        state = solve(graph)
        print("Answer:")
        print(format_search_table(graph, state))
        print(f"Path: {format_path(state)}")

    if args.json_path:
        output_path = Path(args.json_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        logger.info("Writing graph JSON to %s", output_path)
        output_path.write_text(json.dumps(graph_to_payload(graph), indent=2), encoding="utf-8")
        print(f"Graph JSON written to {output_path}")


if __name__ == "__main__":
    main(sys.argv[1:])
