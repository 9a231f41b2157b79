"""
Box-family geometry: rectangles, squares, rhombi, ellipses, triangles and
hexagons, all stored as ``BoxCoords``.
"""

from typing import List

import numpy as np

from areamap.config import ELLIPSE_SEGMENTS, HALF_SQRT3
from areamap.shapes._types import BoxCoords, Kind, Point, Tilt, iround


# ---------------------------------------------------------------------------
# Vertex lists
# ---------------------------------------------------------------------------

def rectangle_vertices(c: BoxCoords) -> List[Point]:
    rx, by = c.x + c.width, c.y + c.height
    return [Point(c.x, c.y), Point(rx, c.y), Point(rx, by), Point(c.x, by)]


def rhombus_vertices(c: BoxCoords) -> List[Point]:
    cx, cy = c.x + iround(c.width / 2), c.y + iround(c.height / 2)
    rx, by = c.x + c.width, c.y + c.height
    return [Point(c.x, cy), Point(cx, c.y), Point(rx, cy), Point(cx, by)]


def isosceles_vertices(c: BoxCoords) -> List[Point]:
    """Base on the ``tilt`` side, apex centered on the opposite side."""
    lx, ty = c.x, c.y
    rx, by = c.x + c.width, c.y + c.height
    cx, cy = c.x + iround(c.width / 2), c.y + iround(c.height / 2)
    if c.tilt == Tilt.TOP:
        return [Point(lx, ty), Point(rx, ty), Point(cx, by)]
    if c.tilt == Tilt.LEFT:
        return [Point(lx, ty), Point(lx, by), Point(rx, cy)]
    if c.tilt == Tilt.RIGHT:
        return [Point(lx, cy), Point(rx, ty), Point(rx, by)]
    return [Point(lx, by), Point(rx, by), Point(cx, ty)]


def right_triangle_vertices(c: BoxCoords) -> List[Point]:
    """The middle vertex holds the right angle."""
    lx, ty = c.x, c.y
    rx, by = c.x + c.width, c.y + c.height
    if c.tilt == Tilt.TOP:
        return [Point(rx, ty), Point(lx, ty), Point(lx, by)]
    if c.tilt == Tilt.LEFT:
        return [Point(lx, ty), Point(lx, by), Point(rx, by)]
    if c.tilt == Tilt.RIGHT:
        return [Point(rx, by), Point(rx, ty), Point(lx, ty)]
    return [Point(lx, by), Point(rx, by), Point(rx, ty)]


def _hex_points(s, b, ls, lb):
    s1, s2 = s + iround(ls / 4), s + iround(3 * ls / 4)
    b1 = b + iround(lb / 2)
    return [(s1, b), (s2, b), (s + ls, b1), (s2, b + lb), (s1, b + lb), (s, b1)]


def hex_vertices(c: BoxCoords) -> List[Point]:
    """Six corners in a fixed cyclic order.

    A wide box (width > height) gives flat top and bottom edges; otherwise
    the hexagon stands on a vertex with flat left and right edges.
    """
    if c.width > c.height:
        return [Point(s, b) for s, b in _hex_points(c.x, c.y, c.width, c.height)]
    return [Point(b, s) for s, b in _hex_points(c.y, c.x, c.height, c.width)]


def ellipse_vertices(c: BoxCoords, segments: int = ELLIPSE_SEGMENTS) -> List[Point]:
    """Polygon approximation of the inscribed ellipse."""
    a, b = c.width / 2, c.height / 2
    t = np.linspace(0, 2 * np.pi, segments, endpoint=False)
    xs = np.rint(c.x + a + a * np.cos(t)).astype(int)
    ys = np.rint(c.y + b + b * np.sin(t)).astype(int)
    return [Point(int(x), int(y)) for x, y in zip(xs, ys)]


def box_vertices(kind: Kind, c: BoxCoords) -> List[Point]:
    if kind in (Kind.RECTANGLE, Kind.SQUARE):
        return rectangle_vertices(c)
    if kind == Kind.RHOMBUS:
        return rhombus_vertices(c)
    if kind == Kind.ELLIPSE:
        return ellipse_vertices(c)
    if kind in (Kind.TRIANGLE_ISC, Kind.TRIANGLE_EQL):
        return isosceles_vertices(c)
    if kind == Kind.TRIANGLE_RCT:
        return right_triangle_vertices(c)
    if kind in (Kind.HEX_RCT, Kind.HEX_DTR):
        return hex_vertices(c)
    raise ValueError(f"Not a box kind: {kind}")


# ---------------------------------------------------------------------------
# Validity
# ---------------------------------------------------------------------------

def equilateral_ok(c: BoxCoords) -> bool:
    """The side along the base is ``2/sqrt(3)`` times the height, within 1 px."""
    if c.tilt in (Tilt.LEFT, Tilt.RIGHT):
        dmax, dmin = c.width, c.height
    else:
        dmax, dmin = c.height, c.width
    return abs(iround(dmax - HALF_SQRT3 * dmin)) <= 1


def box_valid(kind: Kind, c: BoxCoords) -> bool:
    if c.width <= 0 or c.height <= 0:
        return False
    if kind == Kind.SQUARE:
        return c.width == c.height
    if kind == Kind.TRIANGLE_EQL:
        return equilateral_ok(c)
    return True
