"""Pydantic models for serialised curve networks."""

from pydantic import BaseModel
from typing import Dict, List, Literal

from .curves import Curves


class CurveRecord(BaseModel):
    """One extracted loop or path."""
    id: str
    kind: Literal["loop", "path"]
    coordinates: List[List[float]]  # [[x, y], ...], loops not closed
    vertex_ids: List[int]
    length: float
    closed: bool


class CurveNetwork(BaseModel):
    """All curves extracted from one graph."""
    loops: List[CurveRecord]
    paths: List[CurveRecord]
    junctions_resolved: int = 0
    stats: Dict[str, float] = {}


def curves_to_network(curves: Curves, junctions_resolved: int = 0) -> CurveNetwork:
    """Convert extraction output into a CurveNetwork model."""
    loops = [
        CurveRecord(
            id=f"L{i}",
            kind="loop",
            coordinates=[[x, y] for x, y in loop.points],
            vertex_ids=list(loop.vertices),
            length=loop.length,
            closed=True
        )
        for i, loop in enumerate(curves.loops, 1)
    ]
    paths = [
        CurveRecord(
            id=f"P{i}",
            kind="path",
            coordinates=[[x, y] for x, y in path.points],
            vertex_ids=list(path.vertices),
            length=path.length,
            closed=path.is_closed
        )
        for i, path in enumerate(curves.paths, 1)
    ]
    stats = {
        'loop_count': float(len(loops)),
        'path_count': float(len(paths)),
        'edge_count': float(curves.edge_count),
        'total_length': float(sum(r.length for r in loops) + sum(r.length for r in paths)),
    }
    return CurveNetwork(loops=loops, paths=paths,
                        junctions_resolved=junctions_resolved, stats=stats)
