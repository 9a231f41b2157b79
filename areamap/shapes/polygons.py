"""Free polygon geometry."""

from typing import Sequence

from areamap.config import CLOSE_GAP
from areamap.shapes._types import BoxCoords, Point


def polygon_box(points: Sequence[Point]) -> BoxCoords:
    xs = [p.x for p in points]
    ys = [p.y for p in points]
    return BoxCoords(min(xs), min(ys), max(xs) - min(xs), max(ys) - min(ys))


def polygon_valid(points: Sequence[Point]) -> bool:
    return len(points) >= 3


def closes(points: Sequence[Point], p: Point, gap: int = CLOSE_GAP) -> bool:
    """True when *p* lands within *gap* pixels of the first vertex."""
    if not points:
        return False
    first = points[0]
    return abs(first.x - p.x) <= gap and abs(first.y - p.y) <= gap


def translate_points(points: Sequence[Point], dx: int, dy: int):
    return tuple(Point(p.x + dx, p.y + dy) for p in points)
