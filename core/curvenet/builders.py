"""Build CurveGraph instances from networkx graphs and line geometry."""

from typing import Any, Dict, Iterable, List, Sequence, Tuple, Union
from shapely.geometry import LineString
from scipy.spatial import cKDTree
import networkx as nx
import numpy as np
import logging

from .graph import CurveGraph

logger = logging.getLogger(__name__)


def graph_from_networkx(G: nx.Graph, pos_attr: str = 'xy') -> CurveGraph:
    """
    Convert a networkx graph with positioned nodes into a CurveGraph.

    Args:
        G: Undirected graph whose nodes carry an (x, y) position
        pos_attr: Node attribute holding the position

    Returns:
        CurveGraph with one vertex per node and one edge per edge. Node
        labels are not kept; vertices are created in G's node order.
    """
    graph = CurveGraph()
    node_to_vid: Dict[Any, int] = {}
    for node, data in G.nodes(data=True):
        if pos_attr not in data:
            raise ValueError(f"Node {node!r} has no '{pos_attr}' attribute")
        node_to_vid[node] = graph.append_vertex(data[pos_attr])

    skipped = 0
    for u, v in G.edges():
        if u == v:
            skipped += 1
            continue
        graph.append_edge(node_to_vid[u], node_to_vid[v])

    if skipped:
        logger.warning(f"graph_from_networkx: skipped {skipped} self-loop edges")
    logger.debug("graph_from_networkx: %d vertices, %d edges",
                 graph.vertex_count, graph.edge_count)
    return graph


def _cluster_points(points: np.ndarray, snap_tolerance: float) -> Tuple[np.ndarray, np.ndarray]:
    """
    Group points closer than snap_tolerance.

    Returns (labels, centroids) where labels[i] is the cluster of points[i].
    Clusters are numbered in order of their first point.
    """
    tree = cKDTree(points)
    pairs = tree.query_pairs(r=snap_tolerance)

    link_graph = nx.Graph()
    link_graph.add_nodes_from(range(len(points)))
    link_graph.add_edges_from(pairs)

    components = sorted((sorted(c) for c in nx.connected_components(link_graph)),
                        key=lambda c: c[0])
    labels = np.empty(len(points), dtype=int)
    centroids = np.empty((len(components), 2), dtype=float)
    for cluster_id, members in enumerate(components):
        labels[members] = cluster_id
        centroids[cluster_id] = points[members].mean(axis=0)
    return labels, centroids


def graph_from_lines(
    lines: Iterable[Union[LineString, Sequence[Tuple[float, float]]]],
    snap_tolerance: float = 0.0
) -> CurveGraph:
    """
    Build a CurveGraph from polylines.

    Coordinates within snap_tolerance of each other become one vertex placed
    at their centroid. With the default tolerance only identical coordinates
    are merged. Segments that collapse to a single vertex and segments that
    duplicate an existing edge are skipped.

    Args:
        lines: Shapely LineStrings or sequences of (x, y) coordinates
        snap_tolerance: Merge distance in world units

    Returns:
        CurveGraph with every line segment as an edge
    """
    if snap_tolerance < 0:
        raise ValueError(f"snap_tolerance must be >= 0, got {snap_tolerance}")

    polylines: List[np.ndarray] = []
    for line in lines:
        coords = line.coords if isinstance(line, LineString) else line
        arr = np.asarray([(float(c[0]), float(c[1])) for c in coords], dtype=float)
        if len(arr) < 2:
            logger.warning("graph_from_lines: skipping polyline with %d coordinates", len(arr))
            continue
        polylines.append(arr)

    graph = CurveGraph()
    if not polylines:
        return graph

    points = np.vstack(polylines)
    labels, centroids = _cluster_points(points, snap_tolerance)
    vids = [graph.append_vertex(c) for c in centroids]

    collapsed = 0
    duplicates = 0
    offset = 0
    for arr in polylines:
        line_labels = labels[offset:offset + len(arr)]
        offset += len(arr)
        for a, b in zip(line_labels[:-1], line_labels[1:]):
            va, vb = vids[a], vids[b]
            if va == vb:
                collapsed += 1
                continue
            if graph.find_edge(va, vb) is not None:
                duplicates += 1
                continue
            graph.append_edge(va, vb)

    if collapsed:
        logger.warning(f"graph_from_lines: skipped {collapsed} zero-length segments")
    if duplicates:
        logger.debug(f"graph_from_lines: skipped {duplicates} duplicate segments")
    logger.info("graph_from_lines: built graph with %d vertices and %d edges from %d polylines",
                graph.vertex_count, graph.edge_count, len(polylines))
    return graph
