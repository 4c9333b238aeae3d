"""Remove junction vertices by keeping the straightest pair of edges."""

from typing import List, Optional, Tuple
import itertools
import logging
import numpy as np

from .graph import CurveGraph

logger = logging.getLogger(__name__)


def _normalized(vec: np.ndarray) -> np.ndarray:
    length = np.linalg.norm(vec)
    if length < np.finfo(float).eps:
        return np.zeros(2)
    return vec / length


def angle_between_deg(a: np.ndarray, b: np.ndarray) -> float:
    """Unsigned angle between unit vectors a and b, in degrees."""
    dot = float(np.clip(np.dot(a, b), -1.0, 1.0))
    return float(np.degrees(np.arccos(dot)))


def best_aligned_pair(graph: CurveGraph, vid: int) -> Optional[Tuple[int, int]]:
    """
    Pair of neighbors of vid whose edges form the widest angle at vid.

    Neighbors are compared in ascending id order and only a strictly larger
    angle replaces the current best, so ties go to the lowest-id pair.
    Returns None if no pair has a positive angle.
    """
    v = graph.get_vertex(vid)
    nbr_verts = sorted(graph.vtx_vertices(vid))
    directions = [_normalized(graph.get_vertex(n) - v) for n in nbr_verts]

    best_aligned = None
    max_angle = 0.0
    for i, j in itertools.combinations(range(len(nbr_verts)), 2):
        angle = abs(angle_between_deg(directions[i], directions[j]))
        if angle > max_angle:
            max_angle = angle
            best_aligned = (nbr_verts[i], nbr_verts[j])
    return best_aligned


def disconnect_junctions(
    graph: CurveGraph,
    stub_fraction: float = 0.99,
    remove_isolated: bool = False
) -> int:
    """
    Reduce every junction vertex (valence >= 3) of graph to valence 2.

    At each junction the best-aligned pair of edges stays connected. Every
    other edge is removed, and its far vertex gets a new dangling edge to a
    stub vertex placed stub_fraction of the way toward the junction. Edge ids
    are not preserved for the edges that were rerouted.

    Args:
        graph: Graph to modify in place
        stub_fraction: Position of stub vertices between the far neighbor (0)
                       and the junction (1)
        remove_isolated: Drop vertices left without edges when an edge is
                         removed. A dropped leaf neighbor gets no stub.

    Returns:
        Number of junctions processed
    """
    if not 0.0 <= stub_fraction <= 1.0:
        raise ValueError(f"stub_fraction must be in [0, 1], got {stub_fraction}")

    junctions: List[int] = [vid for vid in graph.vertex_indices()
                            if graph.is_junction_vertex(vid)]
    logger.debug(f"disconnect_junctions: found {len(junctions)} junctions")

    for vid in junctions:
        v = graph.get_vertex(vid)
        nbr_verts = sorted(graph.vtx_vertices(vid))
        best_aligned = best_aligned_pair(graph, vid)
        keep = best_aligned if best_aligned is not None else ()

        rerouted = 0
        for k in nbr_verts:
            if k in keep:
                continue
            eid = graph.find_edge(vid, k)
            graph.remove_edge(eid, remove_isolated=remove_isolated)
            if graph.is_vertex(k):
                pk = graph.get_vertex(k)
                newpos = pk + stub_fraction * (v - pk)
                newv = graph.append_vertex(newpos)
                graph.append_edge(k, newv)
            rerouted += 1

        logger.debug("disconnect_junctions: vertex %d kept %s, rerouted %d edges",
                     vid, best_aligned, rerouted)

    logger.info(f"disconnect_junctions: processed {len(junctions)} junctions")
    return len(junctions)
