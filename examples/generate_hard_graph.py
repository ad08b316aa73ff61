"""Example pipeline: generate a seeded hard graph and print the worksheet and answer."""

import numpy as np

from astar_trainer import format_graph, format_path, format_search_table, generate, solve


def main() -> None:
    graph = generate("hard", np.random.default_rng(2024))
    print(format_graph(graph))
    print(format_search_table(graph))

    state = solve(graph)
    print(format_search_table(graph, state))
    print("Path:", format_path(state))
    print("Expansion order:", " ".join(state.order))


if __name__ == "__main__":
    main()
