from astar_trainer.model import Edge, Graph, Node
from astar_trainer.printer import format_graph, format_path, format_search_table, table_order, table_rows
from astar_trainer.solver import solve


def _example_graph() -> Graph:
    nodes = {
        'Z': Node('Z', 700.0, 250.0, h=0),
        'A': Node('A', 300.0, 150.0, h=3),
        'S': Node('S', 100.0, 250.0, h=5),
    }
    edges = [Edge('S', 'A', 2), Edge('A', 'Z', 3), Edge('S', 'Z', 10)]
    return Graph(nodes=nodes, edges=edges)


def test_table_order_puts_start_first_and_goal_last():
    graph = _example_graph()
    graph.nodes['C'] = Node('C', 0.0, 0.0, h=1)
    graph.nodes['B'] = Node('B', 0.0, 0.0, h=1)
    assert table_order(graph) == ['S', 'A', 'B', 'C', 'Z']


def test_initial_rows_show_blank_worksheet():
    rows = table_rows(_example_graph())
    assert rows == [
        ('S (Start)', '0', '5', '5', '-', 'No'),
        ('A', '∞', '3', '∞', '', 'No'),
        ('Z (Goal)', '∞', '0', '∞', '', 'No'),
    ]


def test_solved_rows_show_search_state():
    graph = _example_graph()
    rows = table_rows(graph, solve(graph))
    assert rows == [
        ('S (Start)', '0', '5', '5', '-', 'Yes'),
        ('A', '2', '3', '5', 'S', 'Yes'),
        ('Z (Goal)', '5', '0', '5', 'A', 'Yes'),
    ]


def test_format_search_table_has_header_and_rule():
    text = format_search_table(_example_graph())
    lines = text.splitlines()
    assert lines[0].split() == ['Node', 'g', 'h', 'f', 'Previous', 'Visited']
    assert set(lines[1].replace(' ', '')) == {'-'}
    assert lines[2].startswith('S (Start)')
    assert len(lines) == 5


def test_format_graph_lists_nodes_and_edges():
    text = format_graph(_example_graph())
    assert '  S (100.0, 250.0) h=5' in text
    assert '  S-A w=2' in text
    assert '  S-Z w=10' in text


def test_format_path():
    graph = _example_graph()
    assert format_path(solve(graph)) == 'S -> A -> Z (cost 5)'

    graph.edges = [Edge('S', 'A', 2)]
    assert format_path(solve(graph)) == 'no path found'
