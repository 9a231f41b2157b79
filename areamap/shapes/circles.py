"""Circle geometry: both circle kinds store a center and a radius."""

import numpy as np

from areamap.shapes._types import BoxCoords, CircleCoords


def circle_box(c: CircleCoords) -> BoxCoords:
    return BoxCoords(c.x - c.r, c.y - c.r, 2 * c.r, 2 * c.r)


def circle_valid(c: CircleCoords) -> bool:
    return c.r > 0


def distances(c: CircleCoords, points) -> np.ndarray:
    """Distance from the center to every ``(x, y)`` row of *points*."""
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    return np.linalg.norm(pts - np.array([c.x, c.y], dtype=np.float64), axis=1)
