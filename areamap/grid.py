"""
Grid tiling engine: repeat a pattern shape across a scope shape.

The layout is phase-locked to the pattern: step sizes come from the
pattern footprint plus the kind-specific overlaps, and the first tile is the
pattern position shifted by a whole number of steps, so the pattern itself
is always one of the tiles when it lies inside the scope.

Pipeline::

    pattern_properties -> inner/outer grid properties -> rows of tiles
                       -> scope filtering -> reordering
"""

import functools
import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Optional, Tuple

from areamap.config import (
    DEFAULT_GRID_ALIGN, DEFAULT_GRID_ORDER, DEFAULT_GRID_SCOPE, DEFAULT_GRID_SPACE,
    INDEX_TOKEN, ORDER_TIE, PATTERN_KINDS, SCOPE_KINDS, SQRT3,
)
from areamap.predicates import contained, intersects
from areamap.shapes import (
    CIRCLE_KINDS, HEX_KINDS, BoxCoords, Coords, Kind, Shape, Tilt,
    bounding_box, equal_coords, iround, is_valid,
)


class Scope(str, Enum):
    INNER = "inner"      # tiles fully inside the scope
    OUTER = "outer"      # tiles touching the scope, trimmed to the canvas


class Align(str, Enum):
    STANDARD = "std"
    ALT_HORIZONTAL = "hAlt"
    ALT_VERTICAL = "vAlt"


class Order(str, Enum):
    """Reading order: primary direction first, then secondary."""
    TL = "TL"
    LT = "LT"
    LB = "LB"
    BL = "BL"
    BR = "BR"
    RB = "RB"
    RT = "RT"
    TR = "TR"


class GridConfigurationError(RuntimeError):
    """Pattern properties the tiling engine can not lay out."""


@dataclass
class GridParameters:
    scope: Scope = Scope(DEFAULT_GRID_SCOPE)
    align: Align = Align(DEFAULT_GRID_ALIGN)
    space: int = DEFAULT_GRID_SPACE
    order: Order = Order(DEFAULT_GRID_ORDER)

    def __post_init__(self):
        self.scope = Scope(self.scope)
        self.align = Align(self.align)
        self.order = Order(self.order)
        if self.space < 0:
            raise ValueError(f"Grid space must be >= 0, got {self.space}")


# ---------------------------------------------------------------------------
# Pattern properties
# ---------------------------------------------------------------------------

@dataclass
class PatternProperties:
    start_x: int
    start_y: int
    start_tilt: Tilt
    width: int                      # footprint of one tile
    height: int
    offset_x: int = 0               # footprint corner -> coordinate anchor
    offset_y: int = 0
    row_overlap: int = 0            # negative: tiles interlock along a row
    row_tilt: Optional[Tilt] = None # tilt of every other tile in a row
    switch_tilt_on_new_row: bool = False
    extra_tilts: Optional[Tuple[Tilt, Tilt]] = None
    column_overlap: int = 0         # negative: rows interlock
    column_offset: int = 0          # horizontal shift of odd rows

    def __post_init__(self):
        if self.row_tilt is None:
            self.row_tilt = self.start_tilt


def _flip(tilt: Tilt) -> Tilt:
    return {Tilt.TOP: Tilt.BOTTOM, Tilt.BOTTOM: Tilt.TOP,
            Tilt.LEFT: Tilt.RIGHT, Tilt.RIGHT: Tilt.LEFT}[tilt]


def pattern_properties(kind: Kind, c: Coords, align: Align) -> PatternProperties:
    """Footprint, overlaps and tilt alternation for one pattern kind."""
    if kind in CIRCLE_KINDS:
        pp = PatternProperties(c.x - c.r, c.y - c.r, Tilt.BOTTOM, 2 * c.r, 2 * c.r,
                               offset_x=c.r, offset_y=c.r)
        if align == Align.ALT_HORIZONTAL:
            pp.column_offset = c.r
            pp.column_overlap = -iround(c.r * (2 - SQRT3))
        elif align == Align.ALT_VERTICAL:
            pp.row_overlap = iround(2 * c.r * (SQRT3 - 1))
            pp.column_overlap = -c.r
            pp.column_offset = iround(c.r * SQRT3)
        return pp

    pp = PatternProperties(c.x, c.y, c.tilt, c.width, c.height)
    horizontal_base = c.tilt in (Tilt.TOP, Tilt.BOTTOM)

    if kind in HEX_KINDS:
        if c.width > c.height:
            pp.row_overlap = iround(c.width / 2)
            pp.column_offset = iround(3 * c.width / 4)
            pp.column_overlap = -iround(c.height / 2)
        else:
            pp.column_offset = iround(c.width / 2)
            pp.column_overlap = -iround(c.height / 4)
    elif kind in (Kind.TRIANGLE_ISC, Kind.TRIANGLE_EQL):
        pp.row_tilt = _flip(c.tilt)
        if horizontal_base:
            pp.row_overlap = -iround(c.width / 2)
            pp.column_offset = iround(c.width / 2) if align == Align.STANDARD else 0
        else:
            pp.column_offset = c.width
            pp.column_overlap = -iround(c.height / 2)
            if align != Align.STANDARD:
                pp.column_offset = 0
                pp.switch_tilt_on_new_row = True
    elif kind == Kind.TRIANGLE_RCT:
        pp.row_overlap = -c.width
        pp.row_tilt = _flip(c.tilt)
        if align != Align.STANDARD:
            if horizontal_base:
                pp.extra_tilts = (Tilt.LEFT, Tilt.RIGHT)
            else:
                pp.extra_tilts = (Tilt.TOP, Tilt.BOTTOM)
    elif kind == Kind.RHOMBUS:
        pp.column_offset = iround(c.width / 2)
        pp.column_overlap = -iround(c.height / 2)
    elif kind in (Kind.RECTANGLE, Kind.SQUARE):
        if align == Align.ALT_HORIZONTAL:
            pp.column_offset = iround(c.width / 2)
        elif align == Align.ALT_VERTICAL:
            pp.row_overlap = c.width
            pp.column_overlap = -iround(c.height / 2)
            pp.column_offset = c.width
    elif kind == Kind.ELLIPSE:
        if align == Align.ALT_HORIZONTAL:
            pp.column_offset = iround(c.width / 2)
            pp.column_overlap = -iround(c.height * (1 - SQRT3 / 2))
        elif align == Align.ALT_VERTICAL:
            pp.row_overlap = iround(c.width * (SQRT3 - 1))
            pp.column_overlap = -iround(c.height / 2)
            pp.column_offset = iround(c.width * SQRT3 / 2)
    return pp


# ---------------------------------------------------------------------------
# Grid properties
# ---------------------------------------------------------------------------

@dataclass
class GridProperties:
    xs: int            # first x of even rows
    xx: int            # first x of odd rows
    ys: int            # first row y
    nx: int            # tiles per even row
    nxx: int           # tiles per odd row
    ny: int            # rows
    spx: int           # column step
    spy: int           # row step
    srow: int          # index of the first even row (0 or 1)
    xrow: int          # index of the first odd row (0 or 1)
    ts1: Tilt
    ts2: Tilt
    tx1: Tilt
    tx2: Tilt
    spc: Optional[int] = None   # pair spacing, full-overlap layouts only


def _steps(pp: PatternProperties, space: int) -> Tuple[int, int]:
    interlocked = pp.row_overlap <= 0
    stepx = pp.width + pp.row_overlap + (space if interlocked else 2 * space)
    stepy = pp.height + pp.column_overlap + (space if interlocked else iround(space / 2))
    return stepx, stepy


def _column_extra(pp: PatternProperties, space: int) -> int:
    if pp.column_offset == 0:
        return 0
    if pp.row_overlap > 0 or pp.start_tilt != pp.row_tilt:
        return space
    return iround(space / 2)


def _row_tilts(index: int, pp: PatternProperties) -> Tuple[Tilt, Tilt]:
    if index % 2 == 0:
        return pp.start_tilt, pp.row_tilt
    return pp.row_tilt, pp.start_tilt


def inner_grid_properties(rect: BoxCoords, pp: PatternProperties, space: int,
                          max_width=None, max_height=None) -> GridProperties:
    """Layout for tiles that must stay inside *rect*."""
    stepx, stepy = _steps(pp, space)

    i = math.ceil((rect.x - pp.start_x) / stepx)
    xs = pp.start_x + i * stepx
    ts1, ts2 = _row_tilts(i, pp)
    xx = xs + pp.column_offset + _column_extra(pp, space)
    tx1, tx2 = ts1, ts2
    if xx - stepx >= rect.x:
        xx -= stepx
        tx1, tx2 = ts2, ts1

    j = math.ceil((rect.y - pp.start_y) / stepy)
    ys = pp.start_y + j * stepy
    if pp.switch_tilt_on_new_row:
        ts1 = ts2 = pp.start_tilt
        tx1 = tx2 = pp.row_tilt

    def count(g, dim, s, fdim, step):
        return math.floor((g + dim - (s + fdim)) / step + 1)

    return GridProperties(
        xs=xs, xx=xx, ys=ys,
        nx=count(rect.x, rect.width, xs, pp.width, stepx),
        nxx=count(rect.x, rect.width, xx, pp.width, stepx),
        ny=count(rect.y, rect.height, ys, pp.height, stepy),
        spx=stepx, spy=stepy, srow=j % 2, xrow=(j + 1) % 2,
        ts1=ts1, ts2=ts2, tx1=tx1, tx2=tx2,
    )


def _first_on_canvas(start: int, index: int, step: int) -> Tuple[int, int]:
    """Shift *start* forward by whole steps until it is not negative."""
    if start < 0:
        k = math.ceil(-start / step)
        start += k * step
        index += k
    return start, index


def outer_grid_properties(rect: BoxCoords, pp: PatternProperties, space: int,
                          max_width: int, max_height: int) -> GridProperties:
    """Layout for tiles touching *rect*, trimmed to the canvas."""
    stepx, stepy = _steps(pp, space)

    i = math.ceil((rect.x - (pp.start_x + pp.width)) / stepx)
    xs, i = _first_on_canvas(pp.start_x + i * stepx, i, stepx)
    ts1, ts2 = _row_tilts(i, pp)
    xx = xs + pp.column_offset + _column_extra(pp, space)
    tx1, tx2 = ts1, ts2
    extra = xx - stepx
    if extra > 0 and extra + pp.width >= rect.x:
        xx = extra
        tx1, tx2 = ts2, ts1

    j = math.ceil((rect.y - (pp.start_y + pp.height)) / stepy)
    ys, j = _first_on_canvas(pp.start_y + j * stepy, j, stepy)
    if pp.switch_tilt_on_new_row:
        ts1 = ts2 = pp.start_tilt
        tx1 = tx2 = pp.row_tilt

    def count(g, dim, s, step):
        return math.floor((g + dim - s) / step + 1)

    def trimmed(s, n, step, edge, fdim, limit):
        if s + (n - 1) * step >= edge:
            n -= 1
        return max(0, min(n, (limit - fdim - s) // step + 1))

    nx = count(rect.x, rect.width, xs, stepx)
    nxx = count(rect.x, rect.width, xx, stepx)
    ny = count(rect.y, rect.height, ys, stepy)
    return GridProperties(
        xs=xs, xx=xx, ys=ys,
        nx=trimmed(xs, nx, stepx, rect.x + rect.width, pp.width, max_width),
        nxx=trimmed(xx, nxx, stepx, rect.x + rect.width, pp.width, max_width),
        ny=trimmed(ys, ny, stepy, rect.y + rect.height, pp.height, max_height),
        spx=stepx, spy=stepy, srow=j % 2, xrow=(j + 1) % 2,
        ts1=ts1, ts2=ts2, tx1=tx1, tx2=tx2,
    )


def full_overlap_grid_properties(rect: BoxCoords, pp: PatternProperties, space: int,
                                 compute, max_width: int, max_height: int) -> GridProperties:
    """Layout for patterns that pair up to fill their footprint (right triangles).

    Two tiles share each footprint slot; each row alternates through two or
    four tilts.
    """
    if pp.column_overlap != 0:
        raise GridConfigurationError(
            f"column overlap {pp.column_overlap} is not supported for full-width overlap")
    paired = replace(pp, row_overlap=0, width=pp.width + space)
    gp = compute(rect, paired, space, max_width, max_height)
    if gp.nx != gp.nxx or gp.xs != gp.xx:
        raise GridConfigurationError(
            f"inconsistent full-width overlap: xs={gp.xs} xx={gp.xx} nx={gp.nx} nxx={gp.nxx}")
    gp.nx *= 2
    in_phase = pp.start_tilt == gp.ts1
    gp.ts1 = gp.tx1 = pp.start_tilt
    gp.ts2 = gp.tx2 = pp.row_tilt
    if pp.extra_tilts:
        if in_phase:
            gp.tx1, gp.tx2 = pp.extra_tilts
        else:
            gp.ts1, gp.ts2 = pp.extra_tilts
    gp.spc = space
    return gp


# ---------------------------------------------------------------------------
# Tile generation
# ---------------------------------------------------------------------------

def _place(kind: Kind, pattern: Coords, x: int, y: int, tilt: Tilt) -> Coords:
    if kind in CIRCLE_KINDS:
        return replace(pattern, x=x, y=y)
    return replace(pattern, x=x, y=y, tilt=tilt)


def _row(kind, pattern, y, start, n, step, offset, tilts):
    x = start + offset
    for i in range(n):
        yield _place(kind, pattern, x, y, tilts[i % 2])
        x += step


def _paired_row(kind, pattern, y, start, n, step, offset, spc, tilts):
    x = start + offset
    for i in range(n):
        yield _place(kind, pattern, x, y, tilts[i % 4])
        x += spc if i % 2 == 0 else step - spc


def layout(kind: Kind, pattern: Coords, scope_kind: Kind, scope: Coords,
           params: GridParameters, max_width: int, max_height: int) -> List[Coords]:
    """All tile coordinates of a grid, filtered and ordered."""
    rect = bounding_box(scope_kind, scope)
    if not is_valid(scope_kind, scope) or not is_valid(kind, pattern):
        return []
    pp = pattern_properties(kind, pattern, params.align)
    full_overlap = pp.row_overlap == -pp.width
    stepx, stepy = _steps(replace(pp, row_overlap=0) if full_overlap else pp, params.space)
    if stepx <= 0 or stepy <= 0:
        return []
    outer = params.scope == Scope.OUTER
    compute = outer_grid_properties if outer else inner_grid_properties

    tiles = []
    if not full_overlap:
        gp = compute(rect, pp, params.space, max_width, max_height)
        y = gp.ys + gp.srow * gp.spy + pp.offset_y
        for _ in range(gp.srow, gp.ny, 2):
            tiles.extend(_row(kind, pattern, y, gp.xs, gp.nx, gp.spx, pp.offset_x,
                              (gp.ts1, gp.ts2)))
            y += 2 * gp.spy
        y = gp.ys + gp.xrow * gp.spy + pp.offset_y
        for _ in range(gp.xrow, gp.ny, 2):
            tiles.extend(_row(kind, pattern, y, gp.xx, gp.nxx, gp.spx, pp.offset_x,
                              (gp.tx1, gp.tx2)))
            y += 2 * gp.spy
    else:
        gp = full_overlap_grid_properties(rect, pp, params.space, compute,
                                          max_width, max_height)
        y = gp.ys + gp.srow * gp.spy + pp.offset_y
        for _ in range(gp.srow, gp.ny, 2):
            tiles.extend(_paired_row(kind, pattern, y, gp.xs, gp.nx, gp.spx, pp.offset_x,
                                     gp.spc, (gp.ts1, gp.ts2, gp.tx1, gp.tx2)))
            y += 2 * gp.spy
        y = gp.ys + gp.xrow * gp.spy + pp.offset_y
        for _ in range(gp.xrow, gp.ny, 2):
            tiles.extend(_paired_row(kind, pattern, y, gp.xs, gp.nx, gp.spx, pp.offset_x,
                                     gp.spc, (gp.tx1, gp.tx2, gp.ts1, gp.ts2)))
            y += 2 * gp.spy

    if scope_kind in CIRCLE_KINDS or scope_kind in HEX_KINDS:
        keep = intersects if outer else contained
        tiles = [t for t in tiles if keep(scope_kind, scope, kind, t)]
    return reorder(tiles, params.order)


# primary axis, secondary axis, primary sign, secondary sign
_ORDERS = {
    Order.TL: ("y", "x", 1, 1),
    Order.LT: ("x", "y", 1, 1),
    Order.LB: ("x", "y", 1, -1),
    Order.BL: ("y", "x", -1, 1),
    Order.BR: ("y", "x", -1, -1),
    Order.RB: ("x", "y", -1, -1),
    Order.RT: ("x", "y", -1, 1),
    Order.TR: ("y", "x", 1, -1),
}


def reorder(tiles: List[Coords], order: Order) -> List[Coords]:
    """Stable sort by reading order; differences under ORDER_TIE px are ties."""
    primary, secondary, fm, fs = _ORDERS[Order(order)]

    def compare(a, b):
        d = (getattr(a, primary) - getattr(b, primary)) * fm
        if abs(d) < ORDER_TIE:
            d = (getattr(a, secondary) - getattr(b, secondary)) * fs
            if abs(d) < ORDER_TIE:
                d = 0
        return d

    return sorted(tiles, key=functools.cmp_to_key(compare))


# ---------------------------------------------------------------------------
# Grid
# ---------------------------------------------------------------------------

class Grid:
    """Tiling of ``pattern`` across ``scope``; owned by the scope shape.

    Every parameter setter recomputes the tiles; changing only the order
    re-sorts them.
    """

    def __init__(self, scope: Shape, pattern: Shape, params: GridParameters,
                 canvas_width: int, canvas_height: int):
        if scope.kind.value not in SCOPE_KINDS:
            raise ValueError(f"{scope.kind.value} can not bound a grid")
        if pattern.kind.value not in PATTERN_KINDS or pattern.is_grid:
            raise ValueError(f"{pattern.kind.value} can not be repeated by a grid")
        self.scope = scope
        self.pattern = pattern
        self.params = params
        self.canvas_width = canvas_width
        self.canvas_height = canvas_height
        self.tiles: List[Coords] = []
        self.recompute()

    def recompute(self) -> List[Coords]:
        self.tiles = layout(self.pattern.kind, self.pattern.coords,
                            self.scope.kind, self.scope.coords, self.params,
                            self.canvas_width, self.canvas_height)
        return self.tiles

    def set_scope(self, scope: Scope):
        self.params = replace(self.params, scope=Scope(scope))
        self.recompute()

    def set_align(self, align: Align):
        self.params = replace(self.params, align=Align(align))
        self.recompute()

    def set_space(self, space: int):
        self.params = replace(self.params, space=space)
        self.recompute()

    def set_order(self, order: Order):
        self.params = replace(self.params, order=Order(order))
        self.tiles = reorder(self.tiles, self.params.order)

    def tile_properties(self, index: int):
        """Scope properties with the placeholder replaced by *index* (1-based)."""
        return self.scope.properties.numbered(index, INDEX_TOKEN)

    def is_pattern_in_grid(self) -> bool:
        return any(equal_coords(self.pattern.kind, self.pattern.coords, t) for t in self.tiles)

    def freeze(self) -> List[Shape]:
        """Independent shapes for every tile except the one equal to the pattern.

        The pattern itself takes the numbered properties of its tile.
        """
        created = []
        for i, coords in enumerate(self.tiles, start=1):
            props = self.tile_properties(i)
            if equal_coords(self.pattern.kind, self.pattern.coords, coords):
                self.pattern.properties = props
            else:
                created.append(Shape(self.pattern.kind, coords, props))
        return created
