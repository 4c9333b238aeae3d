"""Planar curve graph container backed by networkx."""

from typing import Dict, Iterator, List, Optional, Sequence, Tuple
import networkx as nx
import numpy as np
import logging

logger = logging.getLogger(__name__)


class CurveGraph:
    """
    Undirected planar graph with integer vertex and edge ids.

    Vertices carry a 2D position in the node attribute 'xy'. Edges carry their
    integer id in the edge attribute 'eid'. Ids are allocated monotonically and
    never reused, so an id removed from the graph stays invalid. ``None`` is
    the "no id" value returned by lookups that find nothing.
    """

    def __init__(self):
        self._g = nx.Graph()
        self._edges: Dict[int, Tuple[int, int]] = {}
        self._next_vid = 0
        self._next_eid = 0

    def __repr__(self) -> str:
        return f"CurveGraph(vertices={self.vertex_count}, edges={self.edge_count})"

    @property
    def vertex_count(self) -> int:
        return self._g.number_of_nodes()

    @property
    def edge_count(self) -> int:
        return len(self._edges)

    def vertex_indices(self) -> List[int]:
        """All valid vertex ids in insertion order."""
        return list(self._g.nodes())

    def edge_indices(self) -> List[int]:
        """All valid edge ids in insertion order."""
        return list(self._edges.keys())

    def is_vertex(self, vid: Optional[int]) -> bool:
        return vid is not None and vid in self._g

    def is_edge(self, eid: Optional[int]) -> bool:
        return eid is not None and eid in self._edges

    def get_vertex(self, vid: int) -> np.ndarray:
        """Position of vertex vid as a float array of shape (2,)."""
        return np.array(self._g.nodes[vid]['xy'], dtype=float)

    def set_vertex(self, vid: int, xy: Sequence[float]) -> None:
        if vid not in self._g:
            raise KeyError(f"Vertex {vid} does not exist")
        self._g.nodes[vid]['xy'] = (float(xy[0]), float(xy[1]))

    def append_vertex(self, xy: Sequence[float]) -> int:
        """Add a vertex at position xy and return its new id."""
        vid = self._next_vid
        self._next_vid += 1
        self._g.add_node(vid, xy=(float(xy[0]), float(xy[1])))
        return vid

    def append_edge(self, a: int, b: int) -> int:
        """Connect vertices a and b and return the new edge id."""
        if a == b:
            raise ValueError(f"Self-loop at vertex {a} is not supported")
        if a not in self._g or b not in self._g:
            raise ValueError(f"Cannot connect missing vertices {a}, {b}")
        if self._g.has_edge(a, b):
            raise ValueError(f"Edge between {a} and {b} already exists")
        eid = self._next_eid
        self._next_eid += 1
        self._g.add_edge(a, b, eid=eid)
        self._edges[eid] = (a, b)
        return eid

    def get_edge_v(self, eid: Optional[int]) -> Optional[Tuple[int, int]]:
        """Endpoint pair of edge eid, or None if the edge is not valid."""
        if eid is None:
            return None
        return self._edges.get(eid)

    def find_edge(self, a: int, b: int) -> Optional[int]:
        """Id of the edge joining a and b, or None."""
        data = self._g.get_edge_data(a, b)
        if data is None:
            return None
        return data['eid']

    def remove_edge(self, eid: int, remove_isolated: bool = True) -> bool:
        """
        Remove edge eid.

        Args:
            eid: Edge id
            remove_isolated: Also remove endpoints left without any edge

        Returns:
            True if the edge existed and was removed
        """
        ev = self._edges.pop(eid, None)
        if ev is None:
            return False
        a, b = ev
        self._g.remove_edge(a, b)
        if remove_isolated:
            for vid in (a, b):
                if self._g.degree(vid) == 0:
                    self._g.remove_node(vid)
                    logger.debug(f"remove_edge: dropped isolated vertex {vid}")
        return True

    def vtx_edges(self, vid: int) -> List[int]:
        """Ids of edges incident to vid, in insertion order."""
        return [data['eid'] for _, data in self._g.adj[vid].items()]

    def vtx_edges_itr(self, vid: int) -> Iterator[int]:
        for _, data in self._g.adj[vid].items():
            yield data['eid']

    def vtx_vertices(self, vid: int) -> List[int]:
        """Ids of vertices adjacent to vid, in insertion order."""
        return list(self._g.neighbors(vid))

    def valence(self, vid: int) -> int:
        return self._g.degree(vid)

    def is_boundary_vertex(self, vid: int) -> bool:
        return self._g.degree(vid) == 1

    def is_junction_vertex(self, vid: int) -> bool:
        return self._g.degree(vid) > 2

    def copy(self) -> "CurveGraph":
        other = CurveGraph()
        other._g = self._g.copy()
        other._edges = dict(self._edges)
        other._next_vid = self._next_vid
        other._next_eid = self._next_eid
        return other

    def to_networkx(self) -> nx.Graph:
        """Copy of the backing graph with 'xy' node and 'eid' edge attributes."""
        return self._g.copy()
