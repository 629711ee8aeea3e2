import networkx as nx
import pytest

from citygraph.errors import (
    CityGraphError,
    DuplicateEdgeError,
    InvalidWeightError,
    SelfLoopError,
)
from citygraph.graph import CityGraph, Edge, GraphView


def test_add_edge_is_symmetric():
    g = CityGraph()
    g.add_edge("A", "B", 7)

    assert g.neighbors("A") == [Edge("A", "B", 7)]
    assert g.neighbors("B") == [Edge("B", "A", 7)]
    assert g.weight("A", "B") == 7
    assert g.weight("B", "A") == 7
    assert g.edge_count() == 1
    assert len(g) == 2


def test_add_edge_creates_nodes_lazily():
    g = CityGraph()
    assert "A" not in g
    assert len(g) == 0

    g.add_edge("A", "B", 1)
    assert "A" in g and "B" in g


def test_neighbors_keep_insertion_order():
    g = CityGraph()
    g.add_edge("Hub", "C", 3)
    g.add_edge("A", "Hub", 1)
    g.add_edge("Hub", "B", 2)

    assert [e.target for e in g.neighbors("Hub")] == ["C", "A", "B"]
    assert [e.weight for e in g.neighbors("Hub")] == [3, 1, 2]
    assert all(e.source == "Hub" for e in g.neighbors("Hub"))


def test_node_names_keep_insertion_order():
    g = CityGraph()
    g.add_edge("B", "C", 1)
    g.add_edge("A", "B", 1)
    g.add_edge("D", "C", 1)

    assert g.node_names() == ["B", "C", "A", "D"]
    assert list(g) == ["B", "C", "A", "D"]


def test_node_names_are_case_sensitive():
    g = CityGraph()
    g.add_edge("paris", "Paris", 1)

    assert g.node_names() == ["paris", "Paris"]


@pytest.mark.parametrize("first,second", [(("A", "B"), ("A", "B")), (("A", "B"), ("B", "A"))])
def test_duplicate_edge_rejected_in_either_order(first, second):
    g = CityGraph()
    g.add_edge(first[0], first[1], 5)

    with pytest.raises(DuplicateEdgeError) as exc_info:
        g.add_edge(second[0], second[1], 9)

    err = exc_info.value
    assert (err.node_a, err.node_b) == second
    assert str(err) == f"Edge already exists: {second[0]} - {second[1]}"
    # Graph unchanged
    assert g.weight("A", "B") == 5
    assert g.edge_count() == 1
    assert len(g.neighbors("A")) == 1
    assert len(g.neighbors("B")) == 1


def test_duplicate_edge_error_is_value_error():
    g = CityGraph()
    g.add_edge("A", "B", 1)
    with pytest.raises(ValueError):
        g.add_edge("B", "A", 1)
    with pytest.raises(CityGraphError):
        g.add_edge("A", "B", 1)


def test_self_loop_rejected():
    g = CityGraph()
    with pytest.raises(SelfLoopError) as exc_info:
        g.add_edge("A", "A", 3)
    assert exc_info.value.node == "A"
    assert "A" not in g
    assert g.edge_count() == 0


@pytest.mark.parametrize("weight", [-1, 2.5, "5", None, True])
def test_invalid_weight_rejected(weight):
    g = CityGraph()
    with pytest.raises(InvalidWeightError) as exc_info:
        g.add_edge("A", "B", weight)
    assert exc_info.value.weight is weight
    assert len(g) == 0


def test_zero_weight_allowed():
    g = CityGraph()
    g.add_edge("A", "B", 0)
    assert g.weight("A", "B") == 0


def test_neighbors_of_unknown_node_is_empty():
    g = CityGraph()
    g.add_edge("A", "B", 1)
    assert g.neighbors("Nowhere") == []


def test_has_edge_and_weight_for_missing_pairs():
    g = CityGraph()
    g.add_edge("A", "B", 1)
    g.add_edge("B", "C", 1)

    assert g.has_edge("C", "B")
    assert not g.has_edge("A", "C")
    assert not g.has_edge("A", "Nowhere")
    assert g.weight("A", "C") is None


def test_edges_listed_once_in_insertion_order():
    g = CityGraph()
    g.add_edge("B", "C", 2)
    g.add_edge("A", "B", 1)

    assert g.edges() == [Edge("B", "C", 2), Edge("A", "B", 1)]


def test_view_is_read_only_and_reflects_base():
    g = CityGraph()
    g.add_edge("A", "B", 4)
    view = g.view()

    assert isinstance(view, GraphView)
    assert not hasattr(view, "add_edge")
    assert view.neighbors("A") == [Edge("A", "B", 4)]

    g.add_edge("B", "C", 1)
    assert view.node_names() == ["A", "B", "C"]
    assert "C" in view
    assert len(view) == 3


def test_to_networkx_is_independent_copy():
    g = CityGraph()
    g.add_edge("A", "B", 4)
    g.add_edge("B", "C", 6)

    nxg = g.to_networkx()
    assert isinstance(nxg, nx.Graph)
    assert nxg["A"]["B"]["weight"] == 4
    assert nx.dijkstra_path_length(nxg, "A", "C") == 10

    nxg.add_edge("A", "C", weight=1)
    assert not g.has_edge("A", "C")


def test_repr():
    g = CityGraph()
    g.add_edge("A", "B", 1)
    assert repr(g) == "CityGraph(nodes=2, edges=1)"
