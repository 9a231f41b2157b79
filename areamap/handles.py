"""
Edit handles: for every kind, a table mapping handle ids to a
``HandleOps(position, bounds, apply)`` triple.

``bounds`` returns the delta range a handle may be dragged by without
leaving the canvas or inverting the shape; ``apply`` computes the candidate
coordinates for an (already clamped) delta and never mutates its input.

Composite kinds reuse the rectangle algebra and add adjust terms: the
isosceles triangle keeps its apex centered, the equilateral triangle and the
hexagons keep their sqrt(3) ratio, the right triangle keeps its hypotenuse
direction.
"""

from dataclasses import replace
from enum import Enum
from typing import Callable, Dict, List, NamedTuple, Union

from areamap.config import HALF_SQRT3, SQRT3
from areamap.shapes import (
    Bounds, Coords, Kind, Point, Tilt, iround, move_limits,
)

F = SQRT3
R = HALF_SQRT3


class Handle(str, Enum):
    # --- Rectangle sides and corners ---
    T = "t"
    B = "b"
    L = "l"
    R = "r"
    TL = "tl"
    TR = "tr"
    BL = "bl"
    BR = "br"
    # --- Triangle base corners (base side first) ---
    BBL = "bbl"
    BBR = "bbr"
    TTL = "ttl"
    TTR = "ttr"
    LTL = "ltl"
    LBL = "lbl"
    RTR = "rtr"
    RBR = "rbr"
    # --- Hexagon sides, wide (h) and tall (v) ---
    HL = "hl"
    HR = "hr"
    HT = "ht"
    HB = "hb"
    VL = "vl"
    VR = "vr"
    VT = "vt"
    VB = "vb"


HandleId = Union[Handle, int]     # polygons use the vertex index


class HandleOps(NamedTuple):
    position: Callable    # (coords) -> Point
    bounds: Callable      # (coords, canvas_w, canvas_h) -> Bounds
    apply: Callable       # (coords, dx, dy) -> coords


# ---------------------------------------------------------------------------
# Rectangle algebra
# ---------------------------------------------------------------------------

_X_SIDE = {
    Handle.L: "left", Handle.TL: "left", Handle.BL: "left",
    Handle.R: "right", Handle.TR: "right", Handle.BR: "right",
}
_Y_SIDE = {
    Handle.T: "top", Handle.TL: "top", Handle.TR: "top",
    Handle.B: "bottom", Handle.BL: "bottom", Handle.BR: "bottom",
}


def _x_limits(side, c, wmax):
    if side == "left":
        return -c.x, c.width
    if side == "right":
        return -c.width, wmax - (c.x + c.width)
    return 0, 0


def _y_limits(side, c, hmax):
    if side == "top":
        return -c.y, c.height
    if side == "bottom":
        return -c.height, hmax - (c.y + c.height)
    return 0, 0


def _edit_x(side, c, dx):
    if side == "left":
        return replace(c, x=c.x + dx, width=c.width - dx)
    if side == "right":
        return replace(c, width=c.width + dx)
    return c


def _edit_y(side, c, dy):
    if side == "top":
        return replace(c, y=c.y + dy, height=c.height - dy)
    if side == "bottom":
        return replace(c, height=c.height + dy)
    return c


def _rect_ops(handle: Handle) -> HandleOps:
    xs, ys = _X_SIDE.get(handle), _Y_SIDE.get(handle)

    def position(c):
        if xs == "left":
            x = c.x
        elif xs == "right":
            x = c.x + c.width
        else:
            x = iround(c.x + c.width / 2)
        if ys == "top":
            y = c.y
        elif ys == "bottom":
            y = c.y + c.height
        else:
            y = iround(c.y + c.height / 2)
        return Point(x, y)

    def bounds(c, wmax, hmax):
        return Bounds(*_x_limits(xs, c, wmax), *_y_limits(ys, c, hmax))

    def apply(c, dx, dy):
        return _edit_y(ys, _edit_x(xs, c, dx), dy)

    return HandleOps(position, bounds, apply)


RECT_OPS = {
    h: _rect_ops(h)
    for h in (Handle.T, Handle.B, Handle.L, Handle.R,
              Handle.TL, Handle.TR, Handle.BL, Handle.BR)
}

SIDE_OPS = {h: RECT_OPS[h] for h in (Handle.L, Handle.R, Handle.T, Handle.B)}


# ---------------------------------------------------------------------------
# Square: corners move along the diagonal by the dominant delta
# ---------------------------------------------------------------------------

def _square_tl(c, dx, dy):
    d = max(dx, dy)
    return RECT_OPS[Handle.TL].apply(c, d, d)


def _square_tr(c, dx, dy):
    d = max(-dx, dy)
    return RECT_OPS[Handle.TR].apply(c, -d, d)


def _square_bl(c, dx, dy):
    d = max(dx, -dy)
    return RECT_OPS[Handle.BL].apply(c, d, -d)


def _square_br(c, dx, dy):
    d = min(dx, dy)
    return RECT_OPS[Handle.BR].apply(c, d, d)


SQUARE_OPS = {
    h: RECT_OPS[h]._replace(apply=fn)
    for h, fn in ((Handle.TL, _square_tl), (Handle.TR, _square_tr),
                  (Handle.BL, _square_bl), (Handle.BR, _square_br))
}


# ---------------------------------------------------------------------------
# Isosceles triangle: base corners grow or shrink the base symmetrically
# ---------------------------------------------------------------------------

# base handle -> (rectangle corner, symmetric side)
_ISC_BASE = {
    Handle.BBL: (Handle.BL, "left"),
    Handle.BBR: (Handle.BR, "right"),
    Handle.TTL: (Handle.TL, "left"),
    Handle.TTR: (Handle.TR, "right"),
    Handle.LTL: (Handle.TL, "top"),
    Handle.LBL: (Handle.BL, "bottom"),
    Handle.RTR: (Handle.TR, "top"),
    Handle.RBR: (Handle.BR, "bottom"),
}


def _isc_ops(handle: Handle) -> HandleOps:
    corner, side = _ISC_BASE[handle]
    base = RECT_OPS[corner]

    def bounds(c, wmax, hmax):
        b = base.bounds(c, wmax, hmax)
        m = move_limits(Kind.TRIANGLE_ISC, c, wmax, hmax)
        if side == "left":
            return replace(b, dx_min=-min(-m.dx_min, m.dx_max), dx_max=iround(c.width / 2))
        if side == "right":
            return replace(b, dx_min=-iround(c.width / 2), dx_max=min(-m.dx_min, m.dx_max))
        if side == "top":
            return replace(b, dy_min=-min(-m.dy_min, m.dy_max), dy_max=iround(c.height / 2))
        return replace(b, dy_min=-iround(c.height / 2), dy_max=min(-m.dy_min, m.dy_max))

    def apply(c, dx, dy):
        c = base.apply(c, dx, dy)
        if side == "left":
            return replace(c, width=c.width - dx)
        if side == "right":
            return replace(c, x=c.x - dx, width=c.width + dx)
        if side == "top":
            return replace(c, height=c.height - dy)
        return replace(c, y=c.y - dy, height=c.height + dy)

    return HandleOps(base.position, bounds, apply)


ISC_OPS = dict(SIDE_OPS)
ISC_OPS.update({h: _isc_ops(h) for h in _ISC_BASE})


# ---------------------------------------------------------------------------
# Equilateral triangle: every handle scales the triangle
# ---------------------------------------------------------------------------

def _side_reach(msm, mso, mbm, mbx):
    return int(min(msm, 2 * mso, min(mbm, mbx) / R))


def _corner_reach(msm, mso, mbm, mbx, ls, lb):
    ms = min(msm, iround(mso / 2), iround(mbm / F), iround(mbx / F))
    return ms, iround(ms * F), iround(ls / 3), iround(lb / 2)


def _axes(c, swapped):
    """(position along s, position along b, length along s, length along b)."""
    if swapped:
        return c.y, c.x, c.height, c.width
    return c.x, c.y, c.width, c.height


def _from_axes(c, swapped, ps, pb, ls, lb):
    if swapped:
        return replace(c, x=pb, y=ps, width=lb, height=ls)
    return replace(c, x=ps, y=pb, width=ls, height=lb)


# apex handle -> (swapped axes, near side)
_EQL_APEX = {
    Handle.L: (False, True),
    Handle.R: (False, False),
    Handle.T: (True, True),
    Handle.B: (True, False),
}

# base handle -> (swapped axes, near side, flipped cross axis)
_EQL_BASE = {
    Handle.LTL: (False, True, False),
    Handle.LBL: (False, True, True),
    Handle.RTR: (False, False, False),
    Handle.RBR: (False, False, True),
    Handle.TTL: (True, True, False),
    Handle.TTR: (True, True, True),
    Handle.BBL: (True, False, False),
    Handle.BBR: (True, False, True),
}


def _limits(c, wmax, hmax, swapped):
    m = move_limits(Kind.RECTANGLE, c, wmax, hmax)
    if swapped:
        return m.dy_min, m.dy_max, m.dx_min, m.dx_max
    return m.dx_min, m.dx_max, m.dy_min, m.dy_max


def _eql_apex_ops(handle: Handle) -> HandleOps:
    swapped, near = _EQL_APEX[handle]

    def bounds(c, wmax, hmax):
        s_min, s_max, b_min, b_max = _limits(c, wmax, hmax, swapped)
        ls = c.height if swapped else c.width
        if near:
            lo, hi = -_side_reach(-s_min, s_max, -b_min, b_max), iround(ls * 2 / 3)
        else:
            lo, hi = -iround(ls * 2 / 3), _side_reach(s_max, -s_min, -b_min, b_max)
        return Bounds(0, 0, lo, hi) if swapped else Bounds(lo, hi, 0, 0)

    def apply(c, dx, dy):
        d = dy if swapped else dx
        if near:
            d = -d
        ps, pb, ls, lb = _axes(c, swapped)
        half, rise = iround(d / 2), iround(d * R)
        ps = ps - d if near else ps - half
        return _from_axes(c, swapped, ps, pb - rise, ls + d + half, lb + 2 * rise)

    return HandleOps(RECT_OPS[handle].position, bounds, apply)


def _eql_base_ops(handle: Handle) -> HandleOps:
    swapped, near, flip = _EQL_BASE[handle]

    def bounds(c, wmax, hmax):
        s_min, s_max, b_min, b_max = _limits(c, wmax, hmax, swapped)
        _, _, ls, lb = _axes(c, swapped)
        if near:
            mv, mo, mf, mof = _corner_reach(-s_min, s_max, -b_min, b_max, ls, lb)
            s_lo, s_hi = -mv, mf
        else:
            mv, mo, mf, mof = _corner_reach(s_max, -s_min, -b_min, b_max, ls, lb)
            s_lo, s_hi = -mf, mv
        b_lo, b_hi = (-mof, mo) if flip else (-mo, mof)
        if swapped:
            return Bounds(b_lo, b_hi, s_lo, s_hi)
        return Bounds(s_lo, s_hi, b_lo, b_hi)

    def apply(c, dx, dy):
        ds, db = (dy, dx) if swapped else (dx, dy)
        if near:
            ds = -ds
        if not flip:
            db = -db
        ps, pb, ls, lb = _axes(c, swapped)
        dps = min(ds, iround(db / F))
        dpb = iround(dps * F)
        ps = ps - dps if near else ps - 2 * dps
        return _from_axes(c, swapped, ps, pb - dpb, ls + 3 * dps, lb + 2 * dpb)

    corner = _ISC_BASE[handle][0]
    return HandleOps(RECT_OPS[corner].position, bounds, apply)


EQL_OPS = {h: _eql_apex_ops(h) for h in _EQL_APEX}
EQL_OPS.update({h: _eql_base_ops(h) for h in _EQL_BASE})


# ---------------------------------------------------------------------------
# Right triangle: the right-angle corner slides, the hypotenuse keeps its slope
# ---------------------------------------------------------------------------

def _similar_delta(w, h, dx, dy):
    r = w / h
    return iround(dy * r), iround(dx / r)


def _clip_to_hypotenuse(x1, y1, x2, y2, x3, y3, dx, dy, sgn):
    """Keep (x3 + dx, y3 + dy) on its side of the line through p1 and p2."""
    a = (y2 - y1) / (x2 - x1)
    b = (y1 * x2 - y2 * x1) / (x2 - x1)
    x, y = x3 + dx, y3 + dy
    if (y - (a * x + b)) * sgn < 0:
        bp = y + x / a
        x = a / (a * a + 1) * (bp - b)
        y = a * x + b
    return iround(x - x3), iround(y - y3)


def _rct_ttl(c, dx, dy):
    dx, dy = _clip_to_hypotenuse(c.x, c.y + c.height, c.x + c.width, c.y,
                                 c.x, c.y, dx, dy, -1)
    dw, dh = _similar_delta(c.width, c.height, dx, dy)
    return replace(c, x=c.x + dx, y=c.y + dy,
                   width=c.width - dw - dx, height=c.height - dh - dy)


def _rct_bbr(c, dx, dy):
    dx, dy = _clip_to_hypotenuse(c.x, c.y + c.height, c.x + c.width, c.y,
                                 c.x + c.width, c.y + c.height, dx, dy, 1)
    dw, dh = _similar_delta(c.width, c.height, dx, dy)
    return replace(c, x=c.x - dw, y=c.y - dh,
                   width=c.width + dw + dx, height=c.height + dh + dy)


def _rct_lbl(c, dx, dy):
    dx, dy = _clip_to_hypotenuse(c.x, c.y, c.x + c.width, c.y + c.height,
                                 c.x, c.y + c.height, dx, dy, 1)
    dw, dh = _similar_delta(c.width, c.height, dx, dy)
    return replace(c, x=c.x + dx, y=c.y + dh,
                   width=c.width - dx + dw, height=c.height - dh + dy)


def _rct_rtr(c, dx, dy):
    dx, dy = _clip_to_hypotenuse(c.x, c.y, c.x + c.width, c.y + c.height,
                                 c.x + c.width, c.y, dx, dy, -1)
    dw, dh = _similar_delta(c.width, c.height, dx, dy)
    return replace(c, x=c.x + dw, y=c.y + dy,
                   width=c.width + dx - dw, height=c.height + dh - dy)


def _rising_bounds(c, wmax, hmax, px, py):
    """Range along the top-left to bottom-right diagonal, clipped to the canvas."""
    a = c.height / c.width
    b = c.y - a * c.x
    my1 = max(b, 0)
    mx1 = (my1 - b) / a
    my2 = min(hmax, a * wmax + b)
    mx2 = (my2 - b) / a
    return Bounds(iround(mx1 - px), iround(mx2 - px), iround(my1 - py), iround(my2 - py))


def _falling_bounds(c, wmax, hmax, px, py):
    """Range along the bottom-left to top-right diagonal, clipped to the canvas."""
    a = -c.height / c.width
    b = c.y + c.height - a * c.x
    my1 = min(b, hmax)
    mx1 = (my1 - b) / a
    mx2 = min(-b / a, wmax)
    my2 = a * mx2 + b
    return Bounds(iround(mx1 - px), iround(mx2 - px), iround(my2 - py), iround(my1 - py))


RCT_OPS = {h: RECT_OPS[h] for h in (Handle.TL, Handle.TR, Handle.BL, Handle.BR)}
RCT_OPS.update({
    Handle.TTL: HandleOps(
        RECT_OPS[Handle.TL].position,
        lambda c, w, h: _falling_bounds(c, w, h, c.x, c.y),
        _rct_ttl),
    Handle.BBR: HandleOps(
        RECT_OPS[Handle.BR].position,
        lambda c, w, h: _falling_bounds(c, w, h, c.x + c.width, c.y + c.height),
        _rct_bbr),
    Handle.LBL: HandleOps(
        RECT_OPS[Handle.BL].position,
        lambda c, w, h: _rising_bounds(c, w, h, c.x, c.y + c.height),
        _rct_lbl),
    Handle.RTR: HandleOps(
        RECT_OPS[Handle.TR].position,
        lambda c, w, h: _rising_bounds(c, w, h, c.x + c.width, c.y),
        _rct_rtr),
})


# ---------------------------------------------------------------------------
# Circles
# ---------------------------------------------------------------------------

def _circle_limits(c, wmax, hmax):
    return move_limits(Kind.CIRCLE_CTR, c, wmax, hmax)


def _ctr_bounds(c, wmax, hmax):
    m = _circle_limits(c, wmax, hmax)
    return Bounds(-c.r, min(-m.dx_min, m.dx_max, -m.dy_min, m.dy_max), 0, 0)


CTR_OPS = {
    Handle.R: HandleOps(
        lambda c: Point(c.x + c.r, c.y),
        _ctr_bounds,
        lambda c, dx, dy: replace(c, r=c.r + dx)),
}


def _dtr_r_bounds(c, wmax, hmax):
    m = _circle_limits(c, wmax, hmax)
    return Bounds(-c.r, min(m.dx_max, -m.dy_min * 2, m.dy_max * 2), 0, 0)


def _dtr_l_bounds(c, wmax, hmax):
    m = _circle_limits(c, wmax, hmax)
    return Bounds(-min(-m.dx_min, -m.dy_min * 2, m.dy_max * 2), c.r, 0, 0)


def _dtr_t_bounds(c, wmax, hmax):
    m = _circle_limits(c, wmax, hmax)
    return Bounds(0, 0, -min(-m.dy_min, -m.dx_min * 2, m.dx_max * 2), c.r)


def _dtr_b_bounds(c, wmax, hmax):
    m = _circle_limits(c, wmax, hmax)
    return Bounds(0, 0, -c.r, min(m.dy_max, -m.dx_min * 2, m.dx_max * 2))


def _dtr_x(sign):
    def apply(c, dx, dy):
        half = iround(dx / 2)
        return replace(c, x=c.x + half, r=c.r + sign * half)
    return apply


def _dtr_y(sign):
    def apply(c, dx, dy):
        half = iround(dy / 2)
        return replace(c, y=c.y + half, r=c.r + sign * half)
    return apply


DTR_OPS = {
    Handle.R: HandleOps(CTR_OPS[Handle.R].position, _dtr_r_bounds, _dtr_x(1)),
    Handle.B: HandleOps(lambda c: Point(c.x, c.y + c.r), _dtr_b_bounds, _dtr_y(1)),
    Handle.L: HandleOps(lambda c: Point(c.x - c.r, c.y), _dtr_l_bounds, _dtr_x(-1)),
    Handle.T: HandleOps(lambda c: Point(c.x, c.y - c.r), _dtr_t_bounds, _dtr_y(-1)),
}


# ---------------------------------------------------------------------------
# Hexagons: a side handle grows one axis and the other follows the ratio
# ---------------------------------------------------------------------------

def _grow_side(d, p, o, lp, lo):
    return p, p - d, o - iround(d * R / 2), lp + d, lo + iround(d * R)


def _grow_base(d, p, o, lp, lo):
    return p, p - d, o - iround(d / F), lp + d, lo + iround(d / R)


# handle -> (grow function, swapped axes, near side, cross-axis factor)
_HEX = {
    Handle.HR: (_grow_side, False, False, 2 / R),
    Handle.HL: (_grow_side, False, True, 2 / R),
    Handle.HT: (_grow_base, True, True, F),
    Handle.HB: (_grow_base, True, False, F),
    Handle.VR: (_grow_base, False, False, F),
    Handle.VL: (_grow_base, False, True, F),
    Handle.VT: (_grow_side, True, True, 2 / R),
    Handle.VB: (_grow_side, True, False, 2 / R),
}

_HEX_POSITION = {
    Handle.HL: Handle.L, Handle.HR: Handle.R, Handle.HT: Handle.T, Handle.HB: Handle.B,
    Handle.VL: Handle.L, Handle.VR: Handle.R, Handle.VT: Handle.T, Handle.VB: Handle.B,
}


def _hex_ops(handle: Handle) -> HandleOps:
    grow, swapped, near, factor = _HEX[handle]

    def bounds(c, wmax, hmax):
        s_min, s_max, b_min, b_max = _limits(c, wmax, hmax, swapped)
        ls = c.height if swapped else c.width
        cross = min(iround(-b_min * factor), iround(b_max * factor))
        if near:
            lo, hi = -min(-s_min, cross), ls
        else:
            lo, hi = -ls, min(s_max, cross)
        return Bounds(0, 0, lo, hi) if swapped else Bounds(lo, hi, 0, 0)

    def apply(c, dx, dy):
        d = dy if swapped else dx
        if near:
            d = -d
        ps, pb, ls, lb = _axes(c, swapped)
        keep, moved, pb, ls, lb = grow(d, ps, pb, ls, lb)
        return _from_axes(c, swapped, moved if near else keep, pb, ls, lb)

    return HandleOps(RECT_OPS[_HEX_POSITION[handle]].position, bounds, apply)


HEX_OPS = {h: _hex_ops(h) for h in _HEX}


# ---------------------------------------------------------------------------
# Polygon vertices
# ---------------------------------------------------------------------------

def _vertex_ops(index: int) -> HandleOps:
    def position(points):
        return points[index]

    def bounds(points, wmax, hmax):
        p = points[index]
        return Bounds(-p.x, wmax - p.x, -p.y, hmax - p.y)

    def apply(points, dx, dy):
        p = points[index]
        moved = list(points)
        moved[index] = Point(p.x + dx, p.y + dy)
        return tuple(moved)

    return HandleOps(position, bounds, apply)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

HANDLE_TABLES: Dict[Kind, Dict[Handle, HandleOps]] = {
    Kind.RECTANGLE: RECT_OPS,
    Kind.SQUARE: SQUARE_OPS,
    Kind.RHOMBUS: SIDE_OPS,
    Kind.ELLIPSE: SIDE_OPS,
    Kind.TRIANGLE_ISC: ISC_OPS,
    Kind.TRIANGLE_EQL: EQL_OPS,
    Kind.TRIANGLE_RCT: RCT_OPS,
    Kind.HEX_RCT: HEX_OPS,
    Kind.HEX_DTR: HEX_OPS,
    Kind.CIRCLE_CTR: CTR_OPS,
    Kind.CIRCLE_DTR: DTR_OPS,
}

_TRIANGLE_HANDLES = {
    Tilt.BOTTOM: (Handle.T, Handle.BBL, Handle.BBR),
    Tilt.TOP: (Handle.B, Handle.TTL, Handle.TTR),
    Tilt.LEFT: (Handle.R, Handle.LTL, Handle.LBL),
    Tilt.RIGHT: (Handle.L, Handle.RTR, Handle.RBR),
}

_RIGHT_TRIANGLE_HANDLES = {
    Tilt.BOTTOM: (Handle.BL, Handle.BBR, Handle.TR),
    Tilt.TOP: (Handle.TR, Handle.TTL, Handle.BL),
    Tilt.LEFT: (Handle.TL, Handle.LBL, Handle.BR),
    Tilt.RIGHT: (Handle.BR, Handle.RTR, Handle.TL),
}


def active_handles(kind: Kind, coords: Coords) -> List[HandleId]:
    """Handles offered for the shape in its current orientation."""
    if kind == Kind.POLYGON:
        return list(range(len(coords)))
    if kind in (Kind.TRIANGLE_ISC, Kind.TRIANGLE_EQL):
        return list(_TRIANGLE_HANDLES[coords.tilt])
    if kind == Kind.TRIANGLE_RCT:
        return list(_RIGHT_TRIANGLE_HANDLES[coords.tilt])
    if kind in (Kind.HEX_RCT, Kind.HEX_DTR):
        if coords.width > coords.height:
            return [Handle.HL, Handle.HR, Handle.HT, Handle.HB]
        return [Handle.VL, Handle.VR, Handle.VT, Handle.VB]
    return list(HANDLE_TABLES[kind])


def handle_ops(kind: Kind, coords: Coords, handle: HandleId) -> HandleOps:
    if handle not in active_handles(kind, coords):
        raise ValueError(f"Handle {handle!r} is not active on {kind.value}")
    if kind == Kind.POLYGON:
        return _vertex_ops(handle)
    return HANDLE_TABLES[kind][Handle(handle)]


def handle_position(kind: Kind, coords: Coords, handle: HandleId) -> Point:
    return handle_ops(kind, coords, handle).position(coords)


def handle_bounds(kind: Kind, coords: Coords, handle: HandleId,
                  width: int, height: int) -> Bounds:
    return handle_ops(kind, coords, handle).bounds(coords, width, height)


def apply_handle(kind: Kind, coords: Coords, handle: HandleId, dx: int, dy: int) -> Coords:
    """Candidate coordinates for an unclamped drag; see ``transform.edit_coords``."""
    return handle_ops(kind, coords, handle).apply(coords, dx, dy)
