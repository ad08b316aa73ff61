"""Example pipeline: validate a hand-written graph and solve it with A*."""

from astar_trainer import format_path, format_search_table, solve, validate_graph

GRAPH = {
    "nodes": {
        "S": {"x": 100, "y": 250, "h": 5},
        "A": {"x": 300, "y": 150, "h": 3},
        "Z": {"x": 700, "y": 250, "h": 0},
    },
    "edges": [
        {"from": "S", "to": "A", "weight": 2},
        {"from": "A", "to": "Z", "weight": 3},
        {"from": "S", "to": "Z", "weight": 10},
    ],
}


def main() -> None:
    graph = validate_graph(GRAPH, require_admissible=True)
    state = solve(graph)
    print(format_search_table(graph, state))
    print("Path:", format_path(state))


if __name__ == "__main__":
    main()
