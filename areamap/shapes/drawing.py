"""
Drawing gestures: turn a press / drag / release sequence into coordinates.

Every drawer follows the same protocol::

    drawer = create_drawer(Kind.RECTANGLE, canvas_w, canvas_h)
    drawer.start(Point(10, 10))
    drawer.progress(Point(30, 25))      # candidate coords, nothing committed
    status = drawer.end(Point(40, 30))  # DrawStatus.DONE / CONTINUE / ERROR
    coords = drawer.coords

Only polygons answer CONTINUE; they close when a click lands within
``CLOSE_GAP`` pixels of their first vertex.
"""

import math
from dataclasses import replace
from enum import Enum

from areamap.config import HALF_SQRT3, SQRT3
from areamap.shapes._types import BoxCoords, CircleCoords, Kind, Point, Tilt, iround
from areamap.shapes.polygons import closes

TAN60 = math.tan(math.pi / 3)
TAN30 = math.tan(math.pi / 6)
SNAP_VERTICAL = math.tan(70 / 180 * math.pi)   # steeper than this snaps to vertical
SNAP_STEEP = TAN30 + (TAN60 - TAN30) / 2       # 60 degree diagonal above this
SNAP_SHALLOW = TAN30 / 2                       # 30 degree diagonal above this


class DrawStatus(str, Enum):
    DONE = "done"
    CONTINUE = "continue"
    ERROR = "error"


# ---------------------------------------------------------------------------
# Two-point box drawers
# ---------------------------------------------------------------------------

class BoxDrawer:
    """Rectangle, rhombus and ellipse: the drag spans the bounding box."""

    def __init__(self, kind: Kind, canvas_width: int, canvas_height: int, alt: bool = False):
        self.kind = kind
        self.canvas_width = canvas_width
        self.canvas_height = canvas_height
        self.alt = alt
        self.origin = Point(0, 0)
        self.coords = None

    def initial_tilt(self) -> Tilt:
        return Tilt.BOTTOM

    def start(self, point: Point):
        self.origin = point
        self.coords = BoxCoords(point.x, point.y, 0, 0, self.initial_tilt())
        return self.coords

    def progress(self, point: Point):
        self.coords = self.compute(point)
        return self.coords

    def end(self, point: Point) -> DrawStatus:
        self.coords = self.compute(point)
        if self.coords.width == 0 or self.coords.height == 0:
            return DrawStatus.ERROR
        return DrawStatus.DONE

    def compute(self, point: Point) -> BoxCoords:
        o = self.origin
        w, h = point.x - o.x, point.y - o.y
        return BoxCoords(
            point.x if w < 0 else o.x,
            point.y if h < 0 else o.y,
            abs(w),
            abs(h),
            self.coords.tilt,
        )


class SquareDrawer(BoxDrawer):
    """Keeps the shorter side, anchored at the press point."""

    def compute(self, point):
        c = super().compute(point)
        o = self.origin
        if c.width > c.height:
            c = replace(c, width=c.height)
            if point.x < o.x:
                c = replace(c, x=o.x - c.width)
        elif c.width < c.height:
            c = replace(c, height=c.width)
            if point.y < o.y:
                c = replace(c, y=o.y - c.height)
        return c


class IsoscelesDrawer(BoxDrawer):
    """The base lands on the side the drag started from.

    ``alt`` switches from the bottom/top family to the left/right family.
    """

    def initial_tilt(self):
        return Tilt.LEFT if self.alt else Tilt.BOTTOM

    def compute(self, point):
        c = super().compute(point)
        o = self.origin
        if c.tilt in (Tilt.TOP, Tilt.BOTTOM):
            tilt = Tilt.BOTTOM if point.y < o.y else Tilt.TOP
        else:
            tilt = Tilt.RIGHT if point.x < o.x else Tilt.LEFT
        return replace(c, tilt=tilt)


class EquilateralDrawer(IsoscelesDrawer):
    def compute(self, point):
        c = super().compute(point)
        o = self.origin
        r = HALF_SQRT3
        if c.tilt in (Tilt.LEFT, Tilt.RIGHT):
            delta = iround(c.width - r * c.height)
            if delta > 0:
                c = replace(c, width=iround(r * c.height))
                if point.x < o.x:
                    c = replace(c, x=o.x - c.width)
            elif delta < 0:
                c = replace(c, height=iround(c.width / r))
                if point.y < o.y:
                    c = replace(c, y=o.y - c.height)
        else:
            delta = iround(c.height - r * c.width)
            if delta > 0:
                c = replace(c, height=iround(r * c.width))
                if point.y < o.y:
                    c = replace(c, y=o.y - c.height)
            elif delta < 0:
                c = replace(c, width=iround(c.height / r))
                if point.x < o.x:
                    c = replace(c, x=o.x - c.width)
        return c


class RightTriangleDrawer(BoxDrawer):
    """The right angle sits in the corner the drag points away from."""

    def compute(self, point):
        c = super().compute(point)
        o = self.origin
        if point.x <= o.x and point.y <= o.y:
            tilt = Tilt.RIGHT
        elif point.x <= o.x:
            tilt = Tilt.BOTTOM
        elif point.y <= o.y:
            tilt = Tilt.TOP
        else:
            tilt = Tilt.LEFT
        return replace(c, tilt=tilt)


class HexDrawer(BoxDrawer):
    """Bounding-box hexagon with its sqrt(3)/2 aspect enforced."""

    def compute(self, point):
        c = super().compute(point)
        o = self.origin
        r = HALF_SQRT3
        w, h = c.width, c.height
        if w >= h:
            if w > h / r:
                w = iround(h / r)
            else:
                h = iround(w * r)
        else:
            if h > w / r:
                h = iround(w / r)
            else:
                w = iround(h * r)
        x, y = c.x, c.y
        if point.x < o.x:
            x += c.width - w
        if point.y < o.y:
            y += c.height - h
        return replace(c, x=x, y=y, width=w, height=h)


def _signed(value, positive):
    return value if positive else -value


def _orth_limit(ds, bs, bm):
    """Diameter along one axis, short enough for the hexagon to fit across it."""
    ls = min(abs(ds), 2 * bs / HALF_SQRT3, 2 * (bm - bs) / HALF_SQRT3)
    return _signed(int(ls), ds > 0)


def _tilt_norm(dx, dy, slope):
    dxx = min(abs(dx), iround(abs(dy) / slope))
    dyy = iround(dxx * slope)
    return _signed(dxx, dx > 0), _signed(dyy, dy > 0)


def _tilt_limit(ss, ds, db, sm):
    if ds >= 0:
        dbb = iround(min(abs(db), 4 * HALF_SQRT3 * ss, (sm - ss) / HALF_SQRT3))
    else:
        dbb = iround(min(abs(db), ss / HALF_SQRT3, (sm - ss) * 4 * HALF_SQRT3))
    dss = iround(dbb / SQRT3)
    return _signed(dss, ds > 0), _signed(dbb, db > 0)


def _orth_box(s, b, ds):
    ls = abs(ds)
    lb = ls * HALF_SQRT3
    return (s if ds > 0 else s + ds), b - iround(lb / 2), ls, iround(lb)


def _tilt_box(s, b, ds, db):
    lb = abs(db)
    ls = lb / HALF_SQRT3
    s0 = s - iround(ls / 4) if ds > 0 else s - iround(3 * ls / 4)
    return s0, (b if db > 0 else b + db), iround(ls), lb


class HexDiameterDrawer(BoxDrawer):
    """The drag is a hexagon diameter, snapped to one of its six directions.

    Vertical and horizontal drags join two opposite vertices; 30 and 60
    degree drags join opposite vertices of the rotated orientation.  The
    result is clamped so the hexagon stays on the canvas.
    """

    def _snap(self, point):
        xs, ys = self.origin.x, self.origin.y
        wmax, hmax = self.canvas_width, self.canvas_height
        dx, dy = point.x - xs, point.y - ys
        if dx == 0:
            return "vertical", 0, _orth_limit(dy, xs, wmax)
        tan = dy / dx
        if tan > SNAP_VERTICAL or tan <= -SNAP_VERTICAL:
            return "vertical", 0, _orth_limit(dy, xs, wmax)
        if tan > SNAP_STEEP or tan <= -SNAP_STEEP:
            dx, dy = _tilt_norm(dx, dy, TAN60)
            dx, dy = _tilt_limit(xs, dx, dy, wmax)
            return "steep", dx, dy
        if tan > SNAP_SHALLOW or tan <= -SNAP_SHALLOW:
            dx, dy = _tilt_norm(dx, dy, TAN30)
            dy, dx = _tilt_limit(ys, dy, dx, hmax)
            return "shallow", dx, dy
        return "horizontal", _orth_limit(dx, ys, hmax), 0

    def compute(self, point):
        xs, ys = self.origin.x, self.origin.y
        direction, dx, dy = self._snap(point)
        if direction == "vertical":
            y, x, h, w = _orth_box(ys, xs, dy)
        elif direction == "steep":
            x, y, w, h = _tilt_box(xs, ys, dx, dy)
        elif direction == "shallow":
            y, x, h, w = _tilt_box(ys, xs, dy, dx)
        else:
            x, y, w, h = _orth_box(xs, ys, dx)
        return BoxCoords(x, y, w, h, self.coords.tilt)


# ---------------------------------------------------------------------------
# Circles
# ---------------------------------------------------------------------------

class CircleDrawer(BoxDrawer):
    """Press on the center, release on the rim."""

    def start(self, point):
        self.origin = point
        self.coords = CircleCoords(point.x, point.y, 0)
        return self.coords

    def end(self, point):
        self.coords = self.compute(point)
        return DrawStatus.ERROR if self.coords.r == 0 else DrawStatus.DONE

    def compute(self, point):
        o = self.origin
        return CircleCoords(o.x, o.y, iround(math.hypot(point.x - o.x, point.y - o.y)))


class CircleDiameterDrawer(CircleDrawer):
    """Press and release on opposite ends of a diameter."""

    def compute(self, point):
        o = self.origin
        dx, dy = point.x - o.x, point.y - o.y
        return CircleCoords(o.x + iround(dx / 2), o.y + iround(dy / 2),
                            iround(math.hypot(dx, dy) / 2))


# ---------------------------------------------------------------------------
# Polygon
# ---------------------------------------------------------------------------

class PolygonDrawer(BoxDrawer):
    """Each release adds a vertex; releasing on the first vertex closes."""

    def start(self, point):
        self.origin = point
        self.coords = (point, point)
        return self.coords

    def compute(self, point):
        return self.coords[:-1] + (point,)

    def end(self, point):
        self.coords = self.compute(point)
        if closes(self.coords, point):
            self.coords = self.coords[:-1]
            return DrawStatus.DONE if len(self.coords) >= 3 else DrawStatus.ERROR
        self.coords = self.coords + (point,)
        return DrawStatus.CONTINUE


DRAWERS = {
    Kind.RECTANGLE: BoxDrawer,
    Kind.RHOMBUS: BoxDrawer,
    Kind.ELLIPSE: BoxDrawer,
    Kind.SQUARE: SquareDrawer,
    Kind.TRIANGLE_ISC: IsoscelesDrawer,
    Kind.TRIANGLE_EQL: EquilateralDrawer,
    Kind.TRIANGLE_RCT: RightTriangleDrawer,
    Kind.HEX_RCT: HexDrawer,
    Kind.HEX_DTR: HexDiameterDrawer,
    Kind.CIRCLE_CTR: CircleDrawer,
    Kind.CIRCLE_DTR: CircleDiameterDrawer,
    Kind.POLYGON: PolygonDrawer,
}


def create_drawer(kind: Kind, canvas_width: int, canvas_height: int, alt: bool = False):
    return DRAWERS[Kind(kind)](Kind(kind), canvas_width, canvas_height, alt)
