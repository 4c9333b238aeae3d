"""Decompose a curve graph into open paths and closed loops."""

from typing import Callable, Optional, Set
import logging

from .graph import CurveGraph
from .curves import Curves, Loop, Path
from .valence import classify_vertices
from .walk import next_edge_and_vertex

logger = logging.getLogger(__name__)


class CurveInvariantError(RuntimeError):
    """The graph changed or was misclassified while curves were being extracted."""


def walk_path(
    graph: CurveGraph,
    start_vid: int,
    start_eid: int,
    used: Set[int],
    should_stop: Callable[[Optional[int], int], bool]
) -> Path:
    """
    Walk from start_vid along start_eid through valence-2 vertices.

    Every traversed edge is added to used. The walk ends after the first
    vertex for which should_stop(next_eid, vid) is true.
    """
    path = Path()
    path.append_vertex(start_vid, graph.get_vertex(start_vid))
    eid, vid = start_eid, start_vid
    while True:
        used.add(eid)
        path.edges.append(eid)
        eid, vid = next_edge_and_vertex(eid, vid, graph)
        path.append_vertex(vid, graph.get_vertex(vid))
        if should_stop(eid, vid):
            break
    return path


def extract_curves(graph: CurveGraph) -> Curves:
    """
    Split every edge of graph into maximal paths and closed loops.

    Paths are walked first from boundary vertices (valence 1), then from each
    unused edge of every junction vertex (valence >= 3). Whatever is left can
    only be cycles through valence-2 vertices, which become loops.

    Args:
        graph: Graph to decompose. It is not modified.

    Returns:
        Curves with each graph edge in exactly one loop or path

    Raises:
        CurveInvariantError: if a leftover cycle runs into a vertex that is not
            valence 2
    """
    curves = Curves()
    used: Set[int] = set()

    roles = classify_vertices(graph)
    boundaries = roles.boundary
    junctions = roles.junction

    # Paths starting at boundary vertices
    for start_vid in sorted(boundaries):
        start_eid = graph.vtx_edges(start_vid)[0]
        if start_eid in used:
            continue  # walked from the other end already
        path = walk_path(
            graph, start_vid, start_eid, used,
            lambda eid, vid: roles.is_terminal(vid)
        )
        curves.paths.append(path)

    # Paths leaving junction vertices
    for start_vid in sorted(junctions):
        for outgoing_eid in graph.vtx_edges(start_vid):
            if outgoing_eid in used:
                continue
            path = walk_path(
                graph, start_vid, outgoing_eid, used,
                lambda eid, vid: eid is None or vid in junctions
            )
            curves.paths.append(path)

    # Everything left is a closed loop of valence-2 vertices
    for start_eid in graph.edge_indices():
        if start_eid in used:
            continue
        eid = start_eid
        vid = graph.get_edge_v(eid)[0]

        loop = Loop()
        loop.append_vertex(vid, graph.get_vertex(vid))
        while True:
            used.add(eid)
            loop.edges.append(eid)
            eid, vid = next_edge_and_vertex(eid, vid, graph)
            if eid is None or vid in junctions:
                logger.error("extract_curves: loop walk from edge %d reached vertex %s "
                             "which is not valence 2", start_eid, vid)
                raise CurveInvariantError(
                    f"Loop starting at edge {start_eid} reached non-regular vertex {vid}"
                )
            loop.append_vertex(vid, graph.get_vertex(vid))
            if eid in used:
                break
        loop.remove_last_vertex()
        curves.loops.append(loop)

    logger.info(f"extract_curves: extracted {len(curves.paths)} paths and "
                f"{len(curves.loops)} loops from {graph.edge_count} edges")
    return curves
