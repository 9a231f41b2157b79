"""Shared dataclasses for the shapes package (avoids circular imports)."""

import math
import uuid
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Optional, Set, Tuple, Union


class Kind(str, Enum):
    RECTANGLE = "rectangle"
    SQUARE = "square"
    RHOMBUS = "rhombus"
    ELLIPSE = "ellipse"
    TRIANGLE_ISC = "triangleIsc"
    TRIANGLE_EQL = "triangleEql"
    TRIANGLE_RCT = "triangleRct"
    HEX_RCT = "hexRct"
    HEX_DTR = "hexDtr"
    CIRCLE_CTR = "circleCtr"
    CIRCLE_DTR = "circleDtr"
    POLYGON = "polygon"


class Tilt(IntEnum):
    """Side of the bounding box that holds a triangle base, in degrees."""
    BOTTOM = 0
    LEFT = 90
    TOP = 180
    RIGHT = 270


BOX_KINDS = frozenset({
    Kind.RECTANGLE, Kind.SQUARE, Kind.RHOMBUS, Kind.ELLIPSE,
    Kind.TRIANGLE_ISC, Kind.TRIANGLE_EQL, Kind.TRIANGLE_RCT,
    Kind.HEX_RCT, Kind.HEX_DTR,
})
CIRCLE_KINDS = frozenset({Kind.CIRCLE_CTR, Kind.CIRCLE_DTR})
TRIANGLE_KINDS = frozenset({Kind.TRIANGLE_ISC, Kind.TRIANGLE_EQL, Kind.TRIANGLE_RCT})
HEX_KINDS = frozenset({Kind.HEX_RCT, Kind.HEX_DTR})


def iround(value) -> int:
    """Round half away from zero, so that ``iround(-v) == -iround(v)``."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


@dataclass(frozen=True)
class Point:
    x: int
    y: int


@dataclass(frozen=True)
class BoxCoords:
    """Axis-aligned box; ``tilt`` only matters for triangles and hexes."""
    x: int
    y: int
    width: int
    height: int
    tilt: Tilt = Tilt.BOTTOM


@dataclass(frozen=True)
class CircleCoords:
    x: int        # center
    y: int
    r: int


PolygonCoords = Tuple[Point, ...]
Coords = Union[BoxCoords, CircleCoords, PolygonCoords]


@dataclass(frozen=True)
class Bounds:
    """Allowed delta range for a move or a handle drag."""
    dx_min: int
    dx_max: int
    dy_min: int
    dy_max: int

    def clamp(self, dx: int, dy: int) -> Tuple[int, int]:
        dx = max(self.dx_min, min(self.dx_max, dx))
        dy = max(self.dy_min, min(self.dy_max, dy))
        return dx, dy

    def intersect(self, other: "Bounds") -> "Bounds":
        return Bounds(
            max(self.dx_min, other.dx_min),
            min(self.dx_max, other.dx_max),
            max(self.dy_min, other.dy_min),
            min(self.dy_max, other.dy_max),
        )

    def contains(self, dx: int, dy: int) -> bool:
        return self.dx_min <= dx <= self.dx_max and self.dy_min <= dy <= self.dy_max


@dataclass(frozen=True)
class AreaProperties:
    """Text attributes copied to the exported ``<area>`` element."""
    href: str = ""
    alt: str = ""
    title: str = ""
    id: str = ""

    def numbered(self, index: int, token: str = "[#]") -> "AreaProperties":
        n = str(index)
        return AreaProperties(
            href=self.href.replace(token, n),
            alt=self.alt.replace(token, n),
            title=self.title.replace(token, n),
            id=self.id.replace(token, n),
        )


def new_id() -> str:
    return uuid.uuid4().hex


@dataclass(eq=False)
class Shape:
    """One area of the map.

    ``bonds`` holds the uids of the grids that repeat this shape; ``grid`` is
    set when the shape is itself a grid scope (an ``areamap.grid.Grid``).
    """
    kind: Kind
    coords: Coords
    properties: AreaProperties = field(default_factory=AreaProperties)
    uid: str = field(default_factory=new_id)
    bonds: Set[str] = field(default_factory=set)
    grid: Optional[object] = None

    @property
    def is_grid(self) -> bool:
        return self.grid is not None

    def has_bonds(self) -> bool:
        return bool(self.bonds)
