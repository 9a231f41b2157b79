"""
Containment and intersection tests between a grid scope and a candidate tile.

Scopes are circles, hexagons or plain boxes.  Candidates are either circles,
tested analytically, or anything with a vertex list.  Hexagon edges are
walked in the fixed cyclic order produced by ``hex_vertices`` with a sign
per edge telling which side of the edge line is the interior.
"""

from typing import Sequence

import numpy as np

from areamap.shapes import (
    CIRCLE_KINDS, HEX_KINDS, BoxCoords, CircleCoords, Coords, Kind, Point,
    bounding_box, vertices,
)
from areamap.shapes.boxes import hex_vertices
from areamap.shapes.circles import distances

# Interior side of each hexagon edge, wide and tall orientations
WIDE_HEX_SIGNS = (1, 1, -1, -1, -1, 1)
TALL_HEX_SIGNS = (1, -1, -1, -1, 1, 1)


# ---------------------------------------------------------------------------
# Line primitives
# ---------------------------------------------------------------------------

def _line(p1: Point, p2: Point):
    """Slope and intercept of the non-vertical line through p1 and p2."""
    a = (p1.y - p2.y) / (p1.x - p2.x)
    b = (p2.y * p1.x - p1.y * p2.x) / (p1.x - p2.x)
    return a, b


def line_value(p1: Point, p2: Point, x, y) -> float:
    """Signed offset of (x, y) from the line through p1 and p2.

    Vertical lines compare x coordinates, other lines compare y against the
    line at the same x.
    """
    if p1.x == p2.x:
        return x - p1.x
    a, b = _line(p1, p2)
    return y - (a * x + b)


def circle_line_roots(p1: Point, p2: Point, cx, cy, r) -> int:
    """Number of intersections (0, 1 or 2) of a circle with an infinite line."""
    if p1.x == p2.x:
        delta = r * r - (p1.x - cx) ** 2
    else:
        a, b = _line(p1, p2)
        qa = 1 + a * a
        qb = 2 * (a * (b - cy) - cx)
        qc = (b - cy) ** 2 + cx * cx - r * r
        delta = qb * qb - 4 * qa * qc
    if delta > 0:
        return 2
    return 1 if delta == 0 else 0


def circle_crosses_segment(p1: Point, p2: Point, cx, cy, r) -> bool:
    """True when the circle boundary cuts the segment; tangency does not count."""
    dx, dy = p2.x - p1.x, p2.y - p1.y
    fx, fy = p1.x - cx, p1.y - cy
    qa = dx * dx + dy * dy
    if qa == 0:
        return False
    qb = 2 * (fx * dx + fy * dy)
    qc = fx * fx + fy * fy - r * r
    delta = qb * qb - 4 * qa * qc
    if delta <= 0:
        return False
    root = np.sqrt(delta)
    t = np.array([(-qb - root) / (2 * qa), (-qb + root) / (2 * qa)])
    return bool(np.any((t >= 0) & (t <= 1)))


def _orientation(p, q, r) -> float:
    return (q.x - p.x) * (r.y - p.y) - (q.y - p.y) * (r.x - p.x)


def segments_cross(a1: Point, a2: Point, b1: Point, b2: Point) -> bool:
    """Proper crossing of two segments; shared end points do not count."""
    o1, o2 = _orientation(a1, a2, b1), _orientation(a1, a2, b2)
    o3, o4 = _orientation(b1, b2, a1), _orientation(b1, b2, a2)
    return o1 * o2 < 0 and o3 * o4 < 0


def _edges(points: Sequence[Point]):
    return zip(points, list(points[1:]) + list(points[:1]))


def point_in_polygon(points: Sequence[Point], x, y) -> bool:
    """Even-odd ray cast, vectorized over the polygon edges."""
    pts = np.array([(p.x, p.y) for p in points], dtype=np.float64)
    nxt = np.roll(pts, -1, axis=0)
    straddle = (pts[:, 1] > y) != (nxt[:, 1] > y)
    with np.errstate(divide="ignore", invalid="ignore"):
        cross_x = pts[:, 0] + (y - pts[:, 1]) * (nxt[:, 0] - pts[:, 0]) / (nxt[:, 1] - pts[:, 1])
    return bool(np.count_nonzero(straddle & (x < cross_x)) % 2)


# ---------------------------------------------------------------------------
# Point tests against a scope
# ---------------------------------------------------------------------------

def point_in_circle(scope: CircleCoords, x, y, off=0) -> bool:
    """True when a disc of radius *off* centered at (x, y) lies in the scope."""
    return float(np.hypot(x - scope.x, y - scope.y)) + off <= scope.r


def point_in_hex(scope: BoxCoords, x, y, off=0) -> bool:
    """Point (off == 0) or disc (off > 0) inside a hexagonal scope.

    A disc is inside when its center is on the interior side of every edge
    and no edge line crosses it; touching an edge line is still inside.
    """
    signs = WIDE_HEX_SIGNS if scope.width > scope.height else TALL_HEX_SIGNS
    edges = list(_edges(hex_vertices(scope)))
    inside = all(line_value(p1, p2, x, y) * f >= 0 for (p1, p2), f in zip(edges, signs))
    if inside and off > 0:
        inside = all(circle_line_roots(p1, p2, x, y, off) < 2 for p1, p2 in edges)
    return inside


# ---------------------------------------------------------------------------
# Candidate tests
# ---------------------------------------------------------------------------

def _box_inside(scope: BoxCoords, box: BoxCoords) -> bool:
    return (scope.x <= box.x and scope.y <= box.y
            and box.x + box.width <= scope.x + scope.width
            and box.y + box.height <= scope.y + scope.height)


def _box_overlap(scope: BoxCoords, box: BoxCoords) -> bool:
    return (box.x < scope.x + scope.width and scope.x < box.x + box.width
            and box.y < scope.y + scope.height and scope.y < box.y + box.height)


def contained(scope_kind: Kind, scope: Coords, kind: Kind, coords: Coords) -> bool:
    """True when the candidate lies entirely inside the scope."""
    if scope_kind in CIRCLE_KINDS:
        if kind in CIRCLE_KINDS:
            return point_in_circle(scope, coords.x, coords.y, coords.r)
        pts = [(p.x, p.y) for p in vertices(kind, coords)]
        return bool(pts) and bool(np.all(distances(scope, pts) <= scope.r))
    if scope_kind in HEX_KINDS:
        if kind in CIRCLE_KINDS:
            return point_in_hex(scope, coords.x, coords.y, coords.r)
        pts = vertices(kind, coords)
        return bool(pts) and all(point_in_hex(scope, p.x, p.y) for p in pts)
    return _box_inside(bounding_box(scope_kind, scope), bounding_box(kind, coords))


def _circle_hits_polygon(circle: CircleCoords, points: Sequence[Point]) -> bool:
    """Disc and polygon share interior points; tangency does not count."""
    pts = [(p.x, p.y) for p in points]
    if np.any(distances(circle, pts) < circle.r):
        return True
    if point_in_polygon(points, circle.x, circle.y):
        return True
    return any(circle_crosses_segment(p1, p2, circle.x, circle.y, circle.r)
               for p1, p2 in _edges(points))


def _polygons_overlap(a: Sequence[Point], b: Sequence[Point]) -> bool:
    if any(point_in_polygon(a, p.x, p.y) for p in b):
        return True
    if any(point_in_polygon(b, p.x, p.y) for p in a):
        return True
    return any(segments_cross(a1, a2, b1, b2)
               for a1, a2 in _edges(a) for b1, b2 in _edges(b))


def intersects(scope_kind: Kind, scope: Coords, kind: Kind, coords: Coords) -> bool:
    """True when at least part of the candidate lies inside the scope."""
    if scope_kind in CIRCLE_KINDS:
        if kind in CIRCLE_KINDS:
            return float(np.hypot(coords.x - scope.x, coords.y - scope.y)) - coords.r < scope.r
        return _circle_hits_polygon(scope, vertices(kind, coords))
    if scope_kind in HEX_KINDS:
        hexagon = hex_vertices(scope)
        if kind in CIRCLE_KINDS:
            return point_in_hex(scope, coords.x, coords.y) or _circle_hits_polygon(coords, hexagon)
        pts = vertices(kind, coords)
        return any(point_in_hex(scope, p.x, p.y) for p in pts) or _polygons_overlap(hexagon, pts)
    return _box_overlap(bounding_box(scope_kind, scope), bounding_box(kind, coords))
