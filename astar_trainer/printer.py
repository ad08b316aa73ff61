import math
from typing import List, Optional, Sequence

from .model import Graph, NodeName, SearchState

INFINITY = "∞"
TABLE_HEADERS = ("Node", "g", "h", "f", "Previous", "Visited")


def _number_str(value: float) -> str:
    if math.isinf(value):
        return INFINITY
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def table_order(graph: Graph) -> List[NodeName]:
    """Start first, goal last, everything else alphabetical."""

    def rank(name: NodeName):
        if name == graph.start:
            return (0, name)
        if name == graph.goal:
            return (2, name)
        return (1, name)

    return sorted(graph.nodes, key=rank)


def _row_label(graph: Graph, name: NodeName) -> str:
    if name == graph.start:
        return f"{name} (Start)"
    if name == graph.goal:
        return f"{name} (Goal)"
    return name


def table_rows(graph: Graph, state: Optional[SearchState] = None) -> List[Sequence[str]]:
    rows: List[Sequence[str]] = []
    for name in table_order(graph):
        h = graph.nodes[name].h
        if state is not None and name in state:
            entry = state[name]
            g = _number_str(entry.g)
            f = _number_str(entry.f)
            previous = entry.parent or "-"
            visited = "Yes" if entry.visited else "No"
        elif name == graph.start:
            g, f, previous, visited = "0", str(h), "-", "No"
        else:
            g, f, previous, visited = INFINITY, INFINITY, "", "No"
        rows.append((_row_label(graph, name), g, str(h), f, previous, visited))
    return rows


def format_search_table(graph: Graph, state: Optional[SearchState] = None) -> str:
    """Render the g/h/f worksheet; without ``state`` the initial blank view is shown."""

    rows = [TABLE_HEADERS] + table_rows(graph, state)
    widths = [max(len(row[col]) for row in rows) for col in range(len(TABLE_HEADERS))]
    lines = []
    for idx, row in enumerate(rows):
        lines.append("  ".join(cell.ljust(width) for cell, width in zip(row, widths)).rstrip())
        if idx == 0:
            lines.append("  ".join("-" * width for width in widths))
    return "\n".join(lines) + "\n"


def format_graph(graph: Graph) -> str:
    lines = ["Nodes:"]
    for name in table_order(graph):
        node = graph.nodes[name]
        lines.append(f"  {name} ({node.x:.1f}, {node.y:.1f}) h={node.h}")
    lines.append("Edges:")
    for edge in graph.edges:
        lines.append(f"  {edge.source}-{edge.target} w={edge.weight}")
    return "\n".join(lines) + "\n"


def format_path(state: SearchState) -> str:
    path = state.path()
    if path is None:
        return "no path found"
    return f"{' -> '.join(path)} (cost {_number_str(state.cost)})"
