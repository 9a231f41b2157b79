"""
Shape model for areamap.

Each kind stores one of three coordinate records (``BoxCoords``,
``CircleCoords`` or a tuple of ``Point``).  The functions here dispatch on
the kind so that callers never branch on the record type themselves.

Usage::

    from areamap.shapes import Kind, BoxCoords, vertices, is_valid
    pts = vertices(Kind.RHOMBUS, BoxCoords(0, 0, 40, 20))
"""

import dataclasses
from typing import List

from areamap.shapes._types import (  # noqa: F401
    AreaProperties, Bounds, BoxCoords, CircleCoords, Coords, Kind, Point,
    PolygonCoords, Shape, Tilt, iround, new_id,
    BOX_KINDS, CIRCLE_KINDS, HEX_KINDS, TRIANGLE_KINDS,
)
from areamap.shapes.boxes import box_valid, box_vertices
from areamap.shapes.circles import circle_box, circle_valid
from areamap.shapes.polygons import polygon_box, polygon_valid, translate_points


def vertices(kind: Kind, coords: Coords) -> List[Point]:
    """Explicit corner list; empty for circles."""
    if kind in CIRCLE_KINDS:
        return []
    if kind == Kind.POLYGON:
        return list(coords)
    return box_vertices(kind, coords)


def bounding_box(kind: Kind, coords: Coords) -> BoxCoords:
    if kind in CIRCLE_KINDS:
        return circle_box(coords)
    if kind == Kind.POLYGON:
        return polygon_box(coords)
    return BoxCoords(coords.x, coords.y, coords.width, coords.height)


def center(kind: Kind, coords: Coords) -> Point:
    if kind in CIRCLE_KINDS:
        return Point(coords.x, coords.y)
    box = bounding_box(kind, coords)
    return Point(box.x + iround(box.width / 2), box.y + iround(box.height / 2))


def is_valid(kind: Kind, coords: Coords) -> bool:
    """Geometric validity; never raises for degenerate input."""
    if kind in CIRCLE_KINDS:
        return circle_valid(coords)
    if kind == Kind.POLYGON:
        return polygon_valid(coords)
    return box_valid(kind, coords)


def translate(kind: Kind, coords: Coords, dx: int, dy: int) -> Coords:
    if kind == Kind.POLYGON:
        return translate_points(coords, dx, dy)
    return dataclasses.replace(coords, x=coords.x + dx, y=coords.y + dy)


def equal_coords(kind: Kind, a: Coords, b: Coords) -> bool:
    """Coordinate equality; circles ignore everything but center and radius."""
    if kind in CIRCLE_KINDS:
        return (a.x, a.y, a.r) == (b.x, b.y, b.r)
    if kind == Kind.POLYGON:
        return tuple(a) == tuple(b)
    return a == b


def within(kind: Kind, coords: Coords, rect: BoxCoords) -> bool:
    """True when the shape's bounding box lies inside *rect*."""
    box = bounding_box(kind, coords)
    return (rect.x <= box.x and rect.y <= box.y
            and box.x + box.width <= rect.x + rect.width
            and box.y + box.height <= rect.y + rect.height)


def fits_canvas(kind: Kind, coords: Coords, width: int, height: int) -> bool:
    return within(kind, coords, BoxCoords(0, 0, width, height))


def move_limits(kind: Kind, coords: Coords, width: int, height: int) -> Bounds:
    """Translation range that keeps the shape on a *width* x *height* canvas."""
    box = bounding_box(kind, coords)
    return Bounds(
        -box.x,
        width - (box.x + box.width),
        -box.y,
        height - (box.y + box.height),
    )


def normalize_box(x1, y1, x2, y2) -> BoxCoords:
    """Box spanned by two opposite corners in any order."""
    return BoxCoords(min(x1, x2), min(y1, y2), abs(x2 - x1), abs(y2 - y1))
