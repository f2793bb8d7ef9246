"""
core/geometry.py

The bisector kernel. Pure functions, no state.

Every point is pulled toward the line of indifference
between its two partners: the perpendicular bisector.

Inspired by:
- Voronoi edges (the bisector is where two cells meet)
- Distance from a point to a line, vector formulation
"""

from __future__ import annotations
from typing import Optional
import numpy as np

# Below this length a direction is treated as undefined
EPSILON = 1e-12


def midpoint(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Arithmetic mean of two positions. Always on the bisector."""
    return (np.asarray(a, dtype=np.float64) + np.asarray(b, dtype=np.float64)) / 2.0


def perpendicular_direction(a: np.ndarray, b: np.ndarray) -> Optional[np.ndarray]:
    """
    Unit direction of the perpendicular bisector of segment a-b.

    The segment vector (b - a) rotated by 90 degrees:
    (-(b.y - a.y), b.x - a.x), then normalized.

    Returns None when a and b coincide; there is no bisector then.
    """
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    direction = np.array([-(b[1] - a[1]), b[0] - a[0]])
    return _normalize(direction)


def distance_to_line(
    point: np.ndarray,
    line_point: np.ndarray,
    line_direction_unit: np.ndarray
) -> float:
    """
    Distance from point to the infinite line through line_point.

    |(p - l) - ((p - l) . d) d|, with d a unit vector.
    The sign of d does not matter.
    """
    offset = np.asarray(point, dtype=np.float64) - np.asarray(line_point, dtype=np.float64)
    direction = np.asarray(line_direction_unit, dtype=np.float64)
    rejection = offset - np.dot(offset, direction) * direction
    return float(np.linalg.norm(rejection))


def choose_side_direction(
    point: np.ndarray,
    a: np.ndarray,
    b: np.ndarray
) -> Optional[np.ndarray]:
    """
    Which way is the bisector?

    Closer to a (ties included): unit vector from a toward b.
    Otherwise: unit vector from b toward a.

    Returns None when a and b coincide.
    """
    point = np.asarray(point, dtype=np.float64)
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)

    if np.linalg.norm(point - a) <= np.linalg.norm(point - b):
        return _normalize(b - a)
    return _normalize(a - b)


def heading(velocity: np.ndarray) -> Optional[float]:
    """Angle of a velocity in radians, None for the zero vector."""
    velocity = np.asarray(velocity, dtype=np.float64)
    if np.linalg.norm(velocity) < EPSILON:
        return None
    return float(np.arctan2(velocity[1], velocity[0]))


def _normalize(vector: np.ndarray) -> Optional[np.ndarray]:
    length = np.linalg.norm(vector)
    if length < EPSILON or not np.isfinite(length):
        return None
    return vector / length
