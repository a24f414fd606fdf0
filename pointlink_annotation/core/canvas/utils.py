"""
Pure utility functions for canvas logic.

These functions have no side effects and can be tested in isolation.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Optional

import numpy as np


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp value into [lower, upper]."""
    return max(lower, min(upper, value))


def find_nearest_index(coords: np.ndarray, x: float, y: float) -> Optional[int]:
    """
    Find the coordinate closest to (x, y).

    Args:
        coords: (N, 2) array of candidate coordinates
        x: X coordinate of the query
        y: Y coordinate of the query

    Returns:
        Index of the closest candidate, the first one on ties, or None if
        there are no candidates
    """
    coords = np.asarray(coords, dtype=np.float64).reshape(-1, 2)
    if len(coords) == 0:
        return None

    distances = np.hypot(coords[:, 0] - x, coords[:, 1] - y)
    # argmin returns the first occurrence of the minimum
    return int(np.argmin(distances))


def round_coordinate(value: float, decimals: int = 1) -> float:
    """
    Round a coordinate for display, exact halves away from zero.

    The float is converted to Decimal with its exact binary value, so
    1.25 becomes 1.3, while 1.005 (stored slightly below) becomes 1.0
    at two decimals.
    """
    quantum = Decimal(10) ** -decimals
    return float(Decimal(float(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def connected_components(graph) -> List[List[int]]:
    """
    Split the graph into connected components.

    Args:
        graph: AnnotationGraph

    Returns:
        Lists of point ids. Ids inside a component and the components
        themselves follow the point sequence order.
    """
    adjacency: Dict[int, List[int]] = {p.id: [] for p in graph.all_points()}
    for edge in graph.all_edges():
        adjacency[edge.source].append(edge.target)
        adjacency[edge.target].append(edge.source)

    order = {p.id: i for i, p in enumerate(graph.all_points())}
    seen = set()
    components = []
    for point in graph.all_points():
        if point.id in seen:
            continue
        stack = [point.id]
        seen.add(point.id)
        members = []
        while stack:
            current = stack.pop()
            members.append(current)
            for neighbor in adjacency[current]:
                if neighbor not in seen:
                    seen.add(neighbor)
                    stack.append(neighbor)
        components.append(sorted(members, key=order.__getitem__))
    return components


def compute_graph_statistics(graph) -> dict:
    """
    Compute statistics about the annotation graph.

    Args:
        graph: AnnotationGraph

    Returns:
        Dictionary with statistics
    """
    points = graph.all_points()
    if not points:
        return {
            "num_points": 0,
            "num_edges": 0,
            "num_components": 0,
            "num_isolated": 0,
            "total_length": 0.0,
        }

    segments = graph.edge_segments()
    if segments:
        starts = np.array([(a.x, a.y) for a, _ in segments])
        ends = np.array([(b.x, b.y) for _, b in segments])
        total_length = float(np.hypot(*(ends - starts).T).sum())
    else:
        total_length = 0.0

    components = connected_components(graph)
    return {
        "num_points": len(points),
        "num_edges": len(segments),
        "num_components": len(components),
        "num_isolated": sum(1 for c in components if len(c) == 1),
        "total_length": total_length,
    }
