"""Tests for edit handles, moves and rotation."""

import pytest

from areamap.handles import (
    Handle, active_handles, apply_handle, handle_bounds, handle_position,
)
from areamap.shapes import Bounds, BoxCoords, CircleCoords, Kind, Point, Tilt, is_valid
from areamap.transform import (
    Direction, edit_coords, move_coords, rotate_coords, selection_bounds,
)

W = H = 100


def edit(kind, coords, handle, dx, dy):
    return edit_coords(kind, coords, handle, dx, dy, W, H)


class TestActiveHandles:
    def test_rectangle_has_eight(self):
        assert len(active_handles(Kind.RECTANGLE, BoxCoords(0, 0, 10, 10))) == 8

    def test_triangle_follows_tilt(self):
        c = BoxCoords(0, 0, 10, 10, Tilt.BOTTOM)
        assert active_handles(Kind.TRIANGLE_ISC, c) == [Handle.T, Handle.BBL, Handle.BBR]
        c = BoxCoords(0, 0, 10, 10, Tilt.LEFT)
        assert active_handles(Kind.TRIANGLE_EQL, c) == [Handle.R, Handle.LTL, Handle.LBL]

    def test_hex_orientation(self):
        assert Handle.HL in active_handles(Kind.HEX_RCT, BoxCoords(0, 0, 40, 30))
        assert Handle.VT in active_handles(Kind.HEX_DTR, BoxCoords(0, 0, 30, 40))

    def test_polygon_uses_indices(self):
        pts = (Point(0, 0), Point(5, 0), Point(0, 5))
        assert active_handles(Kind.POLYGON, pts) == [0, 1, 2]

    def test_inactive_handle_rejected(self):
        with pytest.raises(ValueError):
            apply_handle(Kind.RECTANGLE, BoxCoords(0, 0, 10, 10), Handle.HL, 1, 1)
        with pytest.raises(ValueError):
            handle_position(Kind.TRIANGLE_ISC, BoxCoords(0, 0, 10, 10), Handle.B)

    def test_positions(self):
        c = BoxCoords(10, 20, 30, 40)
        assert handle_position(Kind.RECTANGLE, c, Handle.TL) == Point(10, 20)
        assert handle_position(Kind.RECTANGLE, c, Handle.B) == Point(25, 60)
        assert handle_position(Kind.CIRCLE_DTR, CircleCoords(50, 50, 5), Handle.T) == Point(50, 45)


class TestRectangleEdit:
    @pytest.fixture
    def rect(self):
        return BoxCoords(10, 10, 20, 20)

    def test_corner(self, rect):
        assert edit(Kind.RECTANGLE, rect, Handle.BR, 5, 5) == BoxCoords(10, 10, 25, 25)

    def test_reversible(self, rect):
        moved = edit(Kind.RECTANGLE, rect, Handle.TL, -4, 3)
        assert edit(Kind.RECTANGLE, moved, Handle.TL, 4, -3) == rect

    def test_clamped_at_canvas(self, rect):
        assert edit(Kind.RECTANGLE, rect, Handle.L, -50, 0) == BoxCoords(0, 10, 30, 20)

    def test_collapse_rejected(self, rect):
        assert edit(Kind.RECTANGLE, rect, Handle.L, 30, 0) is None

    def test_bounds(self, rect):
        assert handle_bounds(Kind.RECTANGLE, rect, Handle.R, W, H) == Bounds(-20, 70, 0, 0)

    def test_square_uses_one_delta(self):
        sq = BoxCoords(10, 10, 20, 20)
        assert edit(Kind.SQUARE, sq, Handle.BR, 5, 3) == BoxCoords(10, 10, 23, 23)
        assert edit(Kind.SQUARE, edit(Kind.SQUARE, sq, Handle.TL, -4, -4),
                    Handle.TL, 4, 4) == sq


class TestTriangleEdit:
    def test_isosceles_keeps_apex_centered(self):
        c = BoxCoords(20, 20, 20, 20, Tilt.BOTTOM)
        moved = edit(Kind.TRIANGLE_ISC, c, Handle.BBL, -4, 0)
        assert moved == BoxCoords(16, 20, 28, 20, Tilt.BOTTOM)
        assert moved.x + moved.width // 2 == c.x + c.width // 2
        assert edit(Kind.TRIANGLE_ISC, moved, Handle.BBL, 4, 0) == c

    def test_equilateral_apex_scales(self):
        c = BoxCoords(20, 20, 20, 17, Tilt.BOTTOM)
        grown = edit(Kind.TRIANGLE_EQL, c, Handle.T, 0, -4)
        assert grown == BoxCoords(17, 16, 26, 23, Tilt.BOTTOM)
        assert is_valid(Kind.TRIANGLE_EQL, grown)
        assert edit(Kind.TRIANGLE_EQL, grown, Handle.T, 0, 4) == c

    def test_right_triangle_stays_valid(self):
        c = BoxCoords(20, 20, 20, 20, Tilt.BOTTOM)
        for handle in active_handles(Kind.TRIANGLE_RCT, c):
            moved = edit(Kind.TRIANGLE_RCT, c, handle, 3, 3)
            assert moved is None or is_valid(Kind.TRIANGLE_RCT, moved)


class TestCircleAndHexEdit:
    def test_center_circle_radius(self):
        c = CircleCoords(50, 50, 10)
        assert edit(Kind.CIRCLE_CTR, c, Handle.R, 5, 7) == CircleCoords(50, 50, 15)

    def test_center_circle_clamped(self):
        c = CircleCoords(50, 50, 10)
        assert edit(Kind.CIRCLE_CTR, c, Handle.R, 500, 0) == CircleCoords(50, 50, 50)

    def test_diameter_circle_moves_center(self):
        c = CircleCoords(50, 50, 10)
        grown = edit(Kind.CIRCLE_DTR, c, Handle.R, 4, 0)
        assert grown == CircleCoords(52, 50, 12)
        assert edit(Kind.CIRCLE_DTR, grown, Handle.R, -4, 0) == c

    def test_hex_side_keeps_ratio(self):
        c = BoxCoords(20, 20, 40, 30)
        grown = edit(Kind.HEX_RCT, c, Handle.HR, 8, 0)
        assert grown == BoxCoords(20, 17, 48, 37)
        assert edit(Kind.HEX_RCT, grown, Handle.HR, -8, 0) == c

    def test_polygon_vertex(self):
        pts = (Point(10, 10), Point(20, 10), Point(10, 20))
        moved = edit(Kind.POLYGON, pts, 1, 5, -3)
        assert moved == (Point(10, 10), Point(25, 7), Point(10, 20))
        assert edit(Kind.POLYGON, moved, 1, -5, 3) == pts


class TestMove:
    def test_pure_translation(self):
        c = BoxCoords(10, 10, 5, 5, Tilt.TOP)
        assert move_coords(Kind.TRIANGLE_ISC, c, 3, -2) == BoxCoords(13, 8, 5, 5, Tilt.TOP)

    def test_selection_bounds_intersect(self):
        items = [
            (Kind.RECTANGLE, BoxCoords(10, 10, 10, 10)),
            (Kind.RECTANGLE, BoxCoords(50, 60, 30, 30)),
        ]
        assert selection_bounds(items, W, H) == Bounds(-10, 20, -10, 10)


class TestRotate:
    def test_rectangle_round_trip(self):
        c = BoxCoords(10, 20, 40, 10)
        cw = rotate_coords(Kind.RECTANGLE, c, Direction.CLOCKWISE, W, H)
        assert cw == BoxCoords(25, 5, 10, 40)
        assert rotate_coords(Kind.RECTANGLE, cw, Direction.COUNTERCLOCKWISE, W, H) == c

    def test_triangle_tilt_cycles(self):
        c = BoxCoords(20, 20, 20, 10, Tilt.BOTTOM)
        assert rotate_coords(Kind.TRIANGLE_ISC, c, Direction.CLOCKWISE, W, H).tilt == Tilt.LEFT
        assert rotate_coords(Kind.TRIANGLE_ISC, c, "counterclockwise", W, H).tilt == Tilt.RIGHT

    def test_polygon_rejected(self):
        pts = (Point(0, 0), Point(5, 0), Point(0, 5))
        assert rotate_coords(Kind.POLYGON, pts, Direction.CLOCKWISE, W, H) is None

    def test_circle_unchanged(self):
        c = CircleCoords(10, 10, 5)
        assert rotate_coords(Kind.CIRCLE_CTR, c, Direction.CLOCKWISE, W, H) == c

    def test_off_canvas_rejected(self):
        c = BoxCoords(0, 0, 40, 10)
        assert rotate_coords(Kind.RECTANGLE, c, Direction.CLOCKWISE, W, H) is None
