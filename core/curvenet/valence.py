"""Classify graph vertices by valence."""

from typing import Set
from dataclasses import dataclass, field
import logging

from .graph import CurveGraph

logger = logging.getLogger(__name__)


@dataclass
class VertexRoles:
    """Vertex ids grouped by role. Regular (valence 2) vertices are implied."""
    boundary: Set[int] = field(default_factory=set)  # valence == 1
    junction: Set[int] = field(default_factory=set)  # valence >= 3
    isolated: Set[int] = field(default_factory=set)  # valence == 0

    def is_terminal(self, vid: int) -> bool:
        """True if a walk must stop at vid."""
        return vid in self.boundary or vid in self.junction


def classify_vertices(graph: CurveGraph) -> VertexRoles:
    """
    Find boundary and junction vertices of graph.

    The result is a snapshot of the current adjacency; it goes stale as soon
    as the graph is mutated.
    """
    roles = VertexRoles()
    for vid in graph.vertex_indices():
        valence = graph.valence(vid)
        if valence == 1:
            roles.boundary.add(vid)
        elif valence > 2:
            roles.junction.add(vid)
        elif valence == 0:
            roles.isolated.add(vid)

    logger.debug("classify_vertices: %d boundary, %d junction, %d isolated",
                 len(roles.boundary), len(roles.junction), len(roles.isolated))
    return roles
