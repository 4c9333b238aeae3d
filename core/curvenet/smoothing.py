"""Uniform Laplacian smoothing of curve graph vertices."""

from typing import Dict, Tuple
import logging
import numpy as np

from .graph import CurveGraph

logger = logging.getLogger(__name__)


def vertex_laplacian(graph: CurveGraph, vid: int) -> Tuple[np.ndarray, bool]:
    """
    Uniform Laplacian offset of a valence-2 vertex.

    Returns (mean of the two neighbor positions minus the position of vid,
    True). For any other valence returns (zero vector, False).
    """
    nbrs = graph.vtx_vertices(vid)
    if len(nbrs) != 2:
        return np.zeros(2), False
    centroid = (graph.get_vertex(nbrs[0]) + graph.get_vertex(nbrs[1])) / 2.0
    return centroid - graph.get_vertex(vid), True


def smooth_vertices(graph: CurveGraph, alpha: float = 0.5, iterations: int = 1) -> int:
    """
    Move each valence-2 vertex by alpha times its Laplacian offset.

    Offsets for one iteration are all computed before any vertex moves.
    Boundary and junction vertices are left where they are.

    Args:
        graph: Graph to modify in place
        alpha: Step size, 0 leaves the graph unchanged and 1 moves vertices
               onto their neighbor midpoint
        iterations: Number of smoothing passes

    Returns:
        Total number of vertex moves applied
    """
    if iterations < 0:
        raise ValueError(f"iterations must be >= 0, got {iterations}")

    moved = 0
    for _ in range(iterations):
        offsets: Dict[int, np.ndarray] = {}
        for vid in graph.vertex_indices():
            offset, is_valid = vertex_laplacian(graph, vid)
            if is_valid:
                offsets[vid] = offset
        for vid, offset in offsets.items():
            graph.set_vertex(vid, graph.get_vertex(vid) + alpha * offset)
        moved += len(offsets)

    logger.debug("smooth_vertices: %d moves over %d iterations (alpha=%.3f)",
                 moved, iterations, alpha)
    return moved
