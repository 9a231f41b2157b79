"""
Move, edit and rotate commits for single shapes and selections.

Each function returns candidate coordinates without touching the shape, or
``None`` when the change must be rejected.  Deltas are clamped into their
bounds before the candidate is computed, so a drag past the canvas edge
stops at the edge instead of failing.
"""

from enum import Enum
from typing import Iterable, Optional, Tuple

from areamap.config import MOVE_LIMIT
from areamap.handles import HandleId, handle_ops
from areamap.shapes import (
    CIRCLE_KINDS, HEX_KINDS, TRIANGLE_KINDS, Bounds, BoxCoords, Coords, Kind,
    Tilt, fits_canvas, iround, is_valid, move_limits, translate,
)


class Direction(str, Enum):
    CLOCKWISE = "clockwise"
    COUNTERCLOCKWISE = "counterclockwise"


CLOCKWISE_TILT = {
    Tilt.BOTTOM: Tilt.LEFT,
    Tilt.LEFT: Tilt.TOP,
    Tilt.TOP: Tilt.RIGHT,
    Tilt.RIGHT: Tilt.BOTTOM,
}
COUNTERCLOCKWISE_TILT = {v: k for k, v in CLOCKWISE_TILT.items()}


# ---------------------------------------------------------------------------
# Move
# ---------------------------------------------------------------------------

def move_bounds(kind: Kind, coords: Coords, width: int, height: int) -> Bounds:
    return move_limits(kind, coords, width, height)


def selection_bounds(items: Iterable[Tuple[Kind, Coords]], width: int, height: int) -> Bounds:
    """Intersection of the move bounds of every (kind, coords) pair."""
    bounds = Bounds(-MOVE_LIMIT, MOVE_LIMIT, -MOVE_LIMIT, MOVE_LIMIT)
    for kind, coords in items:
        bounds = bounds.intersect(move_bounds(kind, coords, width, height))
    return bounds


def move_coords(kind: Kind, coords: Coords, dx: int, dy: int) -> Coords:
    return translate(kind, coords, dx, dy)


# ---------------------------------------------------------------------------
# Edit
# ---------------------------------------------------------------------------

def edit_coords(kind: Kind, coords: Coords, handle: HandleId, dx: int, dy: int,
                width: int, height: int) -> Optional[Coords]:
    """Clamp, apply and validate one handle drag."""
    ops = handle_ops(kind, coords, handle)
    dx, dy = ops.bounds(coords, width, height).clamp(dx, dy)
    candidate = ops.apply(coords, dx, dy)
    if not is_valid(kind, candidate) or not fits_canvas(kind, candidate, width, height):
        return None
    return candidate


# ---------------------------------------------------------------------------
# Rotate
# ---------------------------------------------------------------------------

def rotate_coords(kind: Kind, coords: Coords, direction: Direction,
                  width: int, height: int) -> Optional[Coords]:
    """Quarter turn about the box center.

    Circles and squares are unchanged; polygons can not be rotated.
    Triangles and hexagons also cycle their tilt so that their handle set
    follows the new orientation.
    """
    if kind == Kind.POLYGON:
        return None
    if kind in CIRCLE_KINDS or kind == Kind.SQUARE:
        return coords
    w2, h2 = iround(coords.width / 2), iround(coords.height / 2)
    x, y = coords.x + w2 - h2, coords.y + h2 - w2
    tilt = coords.tilt
    if kind in TRIANGLE_KINDS or kind in HEX_KINDS:
        cycle = CLOCKWISE_TILT if Direction(direction) == Direction.CLOCKWISE else COUNTERCLOCKWISE_TILT
        tilt = cycle[tilt]
    rotated = BoxCoords(x, y, coords.height, coords.width, tilt)
    if x < 0 or y < 0 or x + rotated.width > width or y + rotated.height > height:
        return None
    return rotated
