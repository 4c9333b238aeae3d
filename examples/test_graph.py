#!/usr/bin/env python3
"""Test the CurveGraph container."""

import numpy as np
import pytest
from curvenet.graph import CurveGraph


def make_chain():
    graph = CurveGraph()
    vids = [graph.append_vertex((float(i), 0.0)) for i in range(4)]
    eids = [graph.append_edge(a, b) for a, b in zip(vids[:-1], vids[1:])]
    return graph, vids, eids


def test_append_and_lookup():
    graph, vids, eids = make_chain()

    assert graph.vertex_count == 4
    assert graph.edge_count == 3
    assert vids == [0, 1, 2, 3]
    assert eids == [0, 1, 2]
    assert graph.get_edge_v(eids[1]) == (1, 2)
    assert graph.find_edge(2, 1) == eids[1]
    assert graph.find_edge(0, 3) is None
    assert np.allclose(graph.get_vertex(2), [2.0, 0.0])


def test_valence_queries():
    graph, vids, _ = make_chain()

    assert [graph.valence(v) for v in vids] == [1, 2, 2, 1]
    assert graph.is_boundary_vertex(vids[0])
    assert not graph.is_boundary_vertex(vids[1])
    assert not graph.is_junction_vertex(vids[1])

    extra = graph.append_vertex((1.0, 1.0))
    graph.append_edge(vids[1], extra)
    assert graph.is_junction_vertex(vids[1])
    assert sorted(graph.vtx_vertices(vids[1])) == [0, 2, extra]


def test_incident_edges_in_insertion_order():
    graph = CurveGraph()
    center = graph.append_vertex((0.0, 0.0))
    others = [graph.append_vertex((1.0, float(i))) for i in range(3)]
    eids = [graph.append_edge(center, o) for o in others]

    assert graph.vtx_edges(center) == eids
    assert list(graph.vtx_edges_itr(center)) == eids


def test_remove_edge_invalidates_id():
    graph, vids, eids = make_chain()

    assert graph.remove_edge(eids[1], remove_isolated=False)
    assert graph.get_edge_v(eids[1]) is None
    assert not graph.is_edge(eids[1])
    assert not graph.remove_edge(eids[1])
    assert graph.vertex_count == 4

    # New ids are never recycled
    new_eid = graph.append_edge(vids[1], vids[2])
    assert new_eid == 3


def test_remove_edge_drops_isolated_vertices():
    graph, vids, eids = make_chain()

    graph.remove_edge(eids[0], remove_isolated=True)
    assert not graph.is_vertex(vids[0])
    assert graph.is_vertex(vids[1])
    assert graph.vertex_count == 3


def test_rejects_self_loops_and_duplicates():
    graph, vids, _ = make_chain()

    with pytest.raises(ValueError):
        graph.append_edge(vids[0], vids[0])
    with pytest.raises(ValueError):
        graph.append_edge(vids[1], vids[0])
    with pytest.raises(ValueError):
        graph.append_edge(vids[0], 99)


def test_none_is_never_valid():
    graph, _, _ = make_chain()

    assert not graph.is_vertex(None)
    assert not graph.is_edge(None)
    assert graph.get_edge_v(None) is None


def test_set_vertex():
    graph, vids, _ = make_chain()

    graph.set_vertex(vids[2], np.array([2.0, 5.0]))
    assert np.allclose(graph.get_vertex(vids[2]), [2.0, 5.0])
    with pytest.raises(KeyError):
        graph.set_vertex(42, (0.0, 0.0))


def test_copy_is_independent():
    graph, vids, eids = make_chain()
    other = graph.copy()

    other.remove_edge(eids[0])
    other.append_vertex((9.0, 9.0))

    assert graph.edge_count == 3
    assert graph.vertex_count == 4
    assert other.edge_count == 2


def test_to_networkx_attributes():
    graph, vids, eids = make_chain()
    G = graph.to_networkx()

    assert G.number_of_nodes() == 4
    assert G.nodes[vids[3]]['xy'] == (3.0, 0.0)
    assert G.edges[vids[0], vids[1]]['eid'] == eids[0]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
