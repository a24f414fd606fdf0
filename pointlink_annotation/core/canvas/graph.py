"""
Annotation graph: user-placed points and the edges linking them.

Each new point is linked to its nearest already-existing point. Links are
never rewired afterwards, so the result is a forest of greedily grown
chains rather than a minimum spanning tree.
"""

import logging
from dataclasses import dataclass
from gettext import gettext as _
from typing import Dict, List, Optional, Tuple

import numpy as np

from ...utils.misc import incrf
from .utils import find_nearest_index

logger = logging.getLogger(__name__)

PointId = int


@dataclass(frozen=True)
class Point:
    """A point in image space. Identity is its id, not its coordinates."""

    id: PointId
    x: float
    y: float

    def to_dict(self):
        """Convert to dictionary."""
        return {"id": self.id, "x": self.x, "y": self.y}


@dataclass(frozen=True)
class Edge:
    """Undirected link, stored as (source, target) for determinism."""

    source: PointId
    target: PointId

    def __post_init__(self):
        if self.source == self.target:
            raise ValueError(_("Edge cannot link point {id} to itself").format(id=self.source))

    def touches(self, point_id: PointId) -> bool:
        return point_id in (self.source, self.target)

    def to_dict(self):
        """Convert to dictionary."""
        return {"source": self.source, "target": self.target}


class AnnotationGraph:
    """
    Ordered points plus the edges between them.

    Invariants:
    - point order is insertion order
    - every edge references two points currently in the graph
    - no edge links a point to itself
    """

    def __init__(self):
        self._points: List[Point] = []
        self._edges: List[Edge] = []
        self._ids = incrf()

    def __len__(self) -> int:
        return len(self._points)

    def __contains__(self, point_id: PointId) -> bool:
        return self.get(point_id) is not None

    def add_point(self, x: float, y: float) -> PointId:
        """
        Append a point and link it to its nearest predecessor.

        Args:
            x: X coordinate in image space
            y: Y coordinate in image space

        Returns:
            Id of the new point
        """
        # Candidates are taken before appending so the point never links to itself
        candidates = self.coordinates()
        point = Point(id=next(self._ids), x=float(x), y=float(y))
        self._points.append(point)

        nearest = find_nearest_index(candidates, point.x, point.y)
        if nearest is not None:
            closest = self._points[nearest]
            self._edges.append(Edge(source=closest.id, target=point.id))
            logger.debug("Linked point %d to nearest point %d", point.id, closest.id)
        else:
            logger.debug("Added first point %d", point.id)

        return point.id

    def delete_point(self, point_id: PointId) -> bool:
        """
        Remove a point and every edge touching it.

        The rest of the graph is not reconnected. Deleting an unknown id is
        a no-op.

        Returns:
            True if a point was removed
        """
        index = self.index_of(point_id)
        if index is None:
            logger.debug("Delete ignored, no point %s", point_id)
            return False

        del self._points[index]
        before = len(self._edges)
        self._edges = [e for e in self._edges if not e.touches(point_id)]
        logger.debug(
            "Deleted point %d and %d edge(s)", point_id, before - len(self._edges)
        )
        return True

    def delete_at(self, index: int) -> Optional[Point]:
        """
        Remove the point at a position in the point sequence.

        Out-of-range indices (negative ones included) are a no-op.

        Returns:
            The removed point, or None
        """
        point = self.point_at(index)
        if point is None:
            return None
        self.delete_point(point.id)
        return point

    def get(self, point_id: PointId) -> Optional[Point]:
        for point in self._points:
            if point.id == point_id:
                return point
        return None

    def point_at(self, index: int) -> Optional[Point]:
        if 0 <= index < len(self._points):
            return self._points[index]
        return None

    def index_of(self, point_id: PointId) -> Optional[int]:
        for i, point in enumerate(self._points):
            if point.id == point_id:
                return i
        return None

    def all_points(self) -> Tuple[Point, ...]:
        return tuple(self._points)

    def all_edges(self) -> Tuple[Edge, ...]:
        return tuple(self._edges)

    def incident_edges(self, point_id: PointId) -> List[Edge]:
        return [e for e in self._edges if e.touches(point_id)]

    def coordinates(self) -> np.ndarray:
        """Point coordinates as an (N, 2) array, in sequence order."""
        if not self._points:
            return np.empty((0, 2), dtype=np.float64)
        return np.array([(p.x, p.y) for p in self._points], dtype=np.float64)

    def edge_segments(self) -> List[Tuple[Point, Point]]:
        """Edges resolved to their endpoint points, in creation order."""
        by_id: Dict[PointId, Point] = {p.id: p for p in self._points}
        return [(by_id[e.source], by_id[e.target]) for e in self._edges]
