"""Loop and path curve types produced by curve extraction."""

from typing import List, Tuple
from dataclasses import dataclass, field
from shapely.geometry import LineString, Polygon
import numpy as np


@dataclass
class Path:
    """Open curve. edges[i] joins vertices[i] and vertices[i + 1]."""
    points: List[Tuple[float, float]] = field(default_factory=list)
    vertices: List[int] = field(default_factory=list)
    edges: List[int] = field(default_factory=list)

    def append_vertex(self, vid: int, xy) -> None:
        self.vertices.append(vid)
        self.points.append((float(xy[0]), float(xy[1])))

    def __len__(self) -> int:
        return len(self.points)

    @property
    def is_closed(self) -> bool:
        """True when the path starts and ends on the same junction vertex."""
        return len(self.vertices) > 2 and self.vertices[0] == self.vertices[-1]

    @property
    def length(self) -> float:
        if len(self.points) < 2:
            return 0.0
        pts = np.asarray(self.points)
        return float(np.sum(np.linalg.norm(np.diff(pts, axis=0), axis=1)))

    def to_linestring(self) -> LineString:
        return LineString(self.points)


@dataclass
class Loop:
    """
    Closed curve. The closing point is not repeated: edges[i] joins
    vertices[i] and vertices[i + 1], and the last edge joins back to
    vertices[0].
    """
    points: List[Tuple[float, float]] = field(default_factory=list)
    vertices: List[int] = field(default_factory=list)
    edges: List[int] = field(default_factory=list)

    def append_vertex(self, vid: int, xy) -> None:
        self.vertices.append(vid)
        self.points.append((float(xy[0]), float(xy[1])))

    def remove_last_vertex(self) -> None:
        self.vertices.pop()
        self.points.pop()

    def __len__(self) -> int:
        return len(self.points)

    @property
    def length(self) -> float:
        """Perimeter including the closing segment."""
        if len(self.points) < 2:
            return 0.0
        pts = np.asarray(self.points)
        closed = np.vstack([pts, pts[:1]])
        return float(np.sum(np.linalg.norm(np.diff(closed, axis=0), axis=1)))

    @property
    def signed_area(self) -> float:
        """Shoelace area, positive for counter-clockwise loops."""
        if len(self.points) < 3:
            return 0.0
        pts = np.asarray(self.points)
        x, y = pts[:, 0], pts[:, 1]
        return 0.5 * float(np.dot(x, np.roll(y, -1)) - np.dot(np.roll(x, -1), y))

    def to_polygon(self) -> Polygon:
        return Polygon(self.points)


@dataclass
class Curves:
    """Result of decomposing a graph into curves."""
    loops: List[Loop] = field(default_factory=list)
    paths: List[Path] = field(default_factory=list)

    @property
    def edge_count(self) -> int:
        return sum(len(c.edges) for c in self.loops) + sum(len(c.edges) for c in self.paths)
