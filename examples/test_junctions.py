#!/usr/bin/env python3
"""Test junction resolution."""

import networkx as nx
import numpy as np
import pytest
from curvenet.builders import graph_from_networkx
from curvenet.extract import extract_curves
from curvenet.graph import CurveGraph
from curvenet.junctions import angle_between_deg, best_aligned_pair, disconnect_junctions


PLUS_POINTS = [(0, 0), (0, 1), (1, 0), (0, -1), (-1, 0)]  # C, N, E, S, W


def make_graph(points, edges):
    graph = CurveGraph()
    for xy in points:
        graph.append_vertex(xy)
    for a, b in edges:
        graph.append_edge(a, b)
    return graph


def plus_graph(edge_order=(1, 2, 3, 4)):
    return make_graph(PLUS_POINTS, [(0, k) for k in edge_order])


def neighbor_of(graph, vid):
    nbrs = graph.vtx_vertices(vid)
    assert len(nbrs) == 1
    return nbrs[0]


def test_angle_between():
    assert angle_between_deg(np.array([1.0, 0.0]), np.array([-1.0, 0.0])) == pytest.approx(180.0)
    assert angle_between_deg(np.array([1.0, 0.0]), np.array([0.0, 1.0])) == pytest.approx(90.0)
    assert angle_between_deg(np.array([0.0, 1.0]), np.array([0.0, 1.0])) == pytest.approx(0.0)


def test_plus_resolution():
    graph = plus_graph()
    count = disconnect_junctions(graph)

    assert count == 1
    assert graph.vertex_count == 7
    assert graph.edge_count == 4
    assert graph.valence(0) == 2

    # Opposite arms tie at 180 degrees; the lowest-id pair (N, S) wins
    assert graph.find_edge(0, 1) is not None
    assert graph.find_edge(0, 3) is not None
    assert graph.find_edge(0, 2) is None
    assert graph.find_edge(0, 4) is None

    stub_e = neighbor_of(graph, 2)
    stub_w = neighbor_of(graph, 4)
    assert np.allclose(graph.get_vertex(stub_e), [0.01, 0.0])
    assert np.allclose(graph.get_vertex(stub_w), [-0.01, 0.0])
    assert graph.valence(stub_e) == 1
    assert graph.valence(stub_w) == 1


def test_plus_resolution_is_deterministic():
    first = plus_graph()
    second = plus_graph(edge_order=(4, 3, 2, 1))
    disconnect_junctions(first)
    disconnect_junctions(second)

    for graph in (first, second):
        assert sorted(graph.vtx_vertices(0)) == [1, 3]
        assert np.allclose(graph.get_vertex(neighbor_of(graph, 2)), [0.01, 0.0])


def test_plus_curves_after_resolution():
    graph = plus_graph()
    disconnect_junctions(graph)
    curves = extract_curves(graph)

    assert len(curves.loops) == 0
    assert len(curves.paths) == 3
    assert curves.paths[0].vertices == [1, 0, 3]


def test_t_junction_keeps_straight_pair():
    # left, right, up around the centre
    graph = make_graph([(0, 0), (-1, 0), (1, 0), (0, 1)], [(0, 1), (0, 2), (0, 3)])

    assert best_aligned_pair(graph, 0) == (1, 2)
    disconnect_junctions(graph)

    assert sorted(graph.vtx_vertices(0)) == [1, 2]
    assert np.allclose(graph.get_vertex(neighbor_of(graph, 3)), [0.0, 0.01])


def test_stub_fraction():
    graph = make_graph([(0, 0), (-2, 0), (2, 0), (0, 2)], [(0, 1), (0, 2), (0, 3)])
    disconnect_junctions(graph, stub_fraction=0.5)

    assert np.allclose(graph.get_vertex(neighbor_of(graph, 3)), [0.0, 1.0])

    with pytest.raises(ValueError):
        disconnect_junctions(plus_graph(), stub_fraction=1.5)


def test_remove_isolated_drops_leaf_arms():
    graph = plus_graph()
    disconnect_junctions(graph, remove_isolated=True)

    assert graph.vertex_count == 3
    assert graph.edge_count == 2
    assert not graph.is_vertex(2)
    assert not graph.is_vertex(4)


def test_grid_has_no_junctions_after_resolution():
    G = nx.grid_2d_graph(4, 4)
    for node in G.nodes():
        G.nodes[node]['xy'] = node
    graph = graph_from_networkx(G)
    junctions_before = sum(1 for v in graph.vertex_indices() if graph.is_junction_vertex(v))

    count = disconnect_junctions(graph)

    assert count == junctions_before
    assert all(graph.valence(v) <= 2 for v in graph.vertex_indices())
    curves = extract_curves(graph)
    assert curves.edge_count == graph.edge_count


def test_no_junctions_is_noop():
    graph = make_graph([(0, 0), (1, 0), (0, 1)], [(0, 1), (1, 2), (2, 0)])
    assert disconnect_junctions(graph) == 0
    assert graph.edge_indices() == [0, 1, 2]


def test_coincident_directions_have_no_best_pair():
    graph = make_graph([(0, 0), (1, 0), (2, 0), (3, 0)], [(0, 1), (0, 2), (0, 3)])
    assert best_aligned_pair(graph, 0) is None


def test_coincident_directions_reroute_every_edge():
    graph = make_graph([(0, 0), (1, 0), (2, 0), (3, 0)], [(0, 1), (0, 2), (0, 3)])
    count = disconnect_junctions(graph)

    assert count == 1
    assert graph.is_vertex(0)
    assert graph.valence(0) == 0
    assert graph.vertex_count == 7
    assert graph.edge_count == 3
    for k in (1, 2, 3):
        pk = np.array([float(k), 0.0])
        stub = neighbor_of(graph, k)
        assert np.allclose(graph.get_vertex(stub), pk + 0.99 * (np.zeros(2) - pk))
        assert graph.valence(stub) == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
