import pytest

from graph import DuplicateNode, Edge, Graph, NodeNotFound


def test_nodes_get_dense_indices_in_insertion_order():
    g = Graph()
    assert g.add_node("A") == 0
    assert g.add_node("B") == 1
    assert g.add_node("10") == 2

    assert g.nodes == ["A", "B", "10"]
    assert len(g) == 3
    assert g.resolve_index("10") == 2
    assert g.name_of(1) == "B"
    assert g.neighbors(0) == ()


def test_resolve_unknown_name_returns_none():
    g = Graph(["A"])
    assert g.resolve_index("Z") is None
    assert "Z" not in g
    assert "A" in g


def test_edges_are_undirected_and_keep_insertion_order():
    g = Graph(["A", "B", "C"])
    g.add_edge("A", "C", 10)
    g.add_edge("A", "B", 6)

    assert g.neighbors(0) == ((2, 10), (1, 6))
    assert g.neighbors(1) == ((0, 6),)
    assert g.neighbors(2) == ((0, 10),)
    assert g.edge_count == 2
    assert list(g.edges()) == [Edge("A", "C", 10), Edge("A", "B", 6)]


@pytest.mark.parametrize("origin, target", [("A", "X"), ("X", "A"), ("X", "Y")])
def test_add_edge_with_unknown_router_changes_nothing(origin, target):
    g = Graph(["A", "B"], [("A", "B", 3)])

    with pytest.raises(NodeNotFound) as excinfo:
        g.add_edge(origin, target, 5)

    assert excinfo.value.name == "X"
    assert g.neighbors(0) == ((1, 3),)
    assert g.neighbors(1) == ((0, 3),)
    assert g.edge_count == 1


def test_node_not_found_is_a_lookup_error():
    with pytest.raises(LookupError):
        Graph(["A"]).add_edge("A", "B", 1)


def test_duplicate_router_is_rejected():
    g = Graph(["A", "B"])

    with pytest.raises(DuplicateNode):
        g.add_node("A")

    assert g.nodes == ["A", "B"]
    assert g.resolve_index("A") == 0


def test_path_cost(triangle):
    assert triangle.path_cost(["A", "B", "C"]) == 3
    assert triangle.path_cost(["C", "A"]) == 4
    assert triangle.path_cost(["A"]) == 0
    assert triangle.path_cost([]) == 0


def test_path_cost_uses_cheapest_parallel_link():
    g = Graph(["A", "B"], [("A", "B", 9), ("A", "B", 2)])
    assert g.path_cost(["A", "B"]) == 2


def test_path_cost_rejects_missing_link():
    g = Graph(["A", "B", "C"], [("A", "B", 1)])
    with pytest.raises(ValueError):
        g.path_cost(["A", "C"])
    with pytest.raises(ValueError):
        g.path_cost(["A", "Q"])


@pytest.mark.parametrize("weight", [1.5, "6", None, True])
def test_add_edge_rejects_non_integer_latency(weight):
    g = Graph(["A", "B"])

    with pytest.raises(TypeError):
        g.add_edge("A", "B", weight)

    assert g.neighbors(0) == ()
    assert g.edge_count == 0


def test_neighbors_cannot_mutate_the_store():
    g = Graph(["A", "B", "C"], [("A", "B", 1)])

    links = g.neighbors(0)
    with pytest.raises(AttributeError):
        links.append((2, 0))

    assert g.neighbors(0) == ((1, 1),)
    assert g.neighbors(2) == ()
