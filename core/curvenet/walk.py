"""Single-step traversal along valence-2 vertices."""

from typing import Optional, Tuple

from .graph import CurveGraph


def next_edge_and_vertex(
    eid: int,
    prev_vid: int,
    graph: CurveGraph
) -> Tuple[Optional[int], Optional[int]]:
    """
    Step across edge eid, leaving prev_vid behind.

    Returns (next_eid, next_vid) where next_vid is the far endpoint of eid and
    next_eid is the other edge incident to it. If next_vid is not valence 2
    the walk has to stop there and next_eid is None. If eid is not a valid
    edge, both are None.
    """
    ev = graph.get_edge_v(eid)
    if ev is None:
        return None, None
    next_vid = ev[1] if ev[0] == prev_vid else ev[0]

    if graph.valence(next_vid) != 2:
        return None, next_vid

    for next_eid in graph.vtx_edges_itr(next_vid):
        if next_eid != eid:
            return next_eid, next_vid
    return None, None
