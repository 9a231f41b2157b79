"""Tests for drawing gestures."""

import pytest

from areamap.shapes import BoxCoords, CircleCoords, Kind, Point, Tilt, is_valid
from areamap.shapes.drawing import DrawStatus, create_drawer


def draw(kind, start, end, alt=False, size=(200, 200)):
    drawer = create_drawer(kind, size[0], size[1], alt)
    drawer.start(Point(*start))
    drawer.progress(Point(*end))
    status = drawer.end(Point(*end))
    return status, drawer.coords


class TestBoxDrawing:
    def test_rectangle_normalised(self):
        status, c = draw(Kind.RECTANGLE, (10, 10), (4, 30))
        assert status == DrawStatus.DONE
        assert c == BoxCoords(4, 10, 6, 20)

    def test_empty_drag_is_error(self):
        status, _ = draw(Kind.RHOMBUS, (10, 10), (10, 30))
        assert status == DrawStatus.ERROR

    def test_square_keeps_short_side(self):
        _, c = draw(Kind.SQUARE, (10, 10), (30, 15))
        assert c == BoxCoords(10, 10, 5, 5)

    def test_square_anchored_at_press(self):
        _, c = draw(Kind.SQUARE, (10, 10), (2, 5))
        assert c == BoxCoords(5, 5, 5, 5)

    def test_progress_does_not_commit(self):
        drawer = create_drawer(Kind.RECTANGLE, 100, 100)
        drawer.start(Point(0, 0))
        candidate = drawer.progress(Point(20, 20))
        assert candidate == BoxCoords(0, 0, 20, 20)
        assert drawer.end(Point(0, 0)) == DrawStatus.ERROR


class TestTriangleDrawing:
    def test_isosceles_tilt_follows_drag(self):
        _, up = draw(Kind.TRIANGLE_ISC, (10, 10), (30, 0))
        assert up == BoxCoords(10, 0, 20, 10, Tilt.BOTTOM)
        _, down = draw(Kind.TRIANGLE_ISC, (10, 10), (30, 40))
        assert down.tilt == Tilt.TOP

    def test_isosceles_alt_family(self):
        _, c = draw(Kind.TRIANGLE_ISC, (10, 10), (0, 30), alt=True)
        assert c.tilt == Tilt.RIGHT
        _, c = draw(Kind.TRIANGLE_ISC, (10, 10), (30, 30), alt=True)
        assert c.tilt == Tilt.LEFT

    def test_equilateral_ratio_enforced(self):
        status, c = draw(Kind.TRIANGLE_EQL, (0, 0), (20, 40))
        assert status == DrawStatus.DONE
        assert c == BoxCoords(0, 0, 20, 17, Tilt.TOP)
        assert is_valid(Kind.TRIANGLE_EQL, c)

    @pytest.mark.parametrize("end,tilt", [
        ((0, 0), Tilt.RIGHT),
        ((0, 20), Tilt.BOTTOM),
        ((20, 0), Tilt.TOP),
        ((20, 20), Tilt.LEFT),
    ])
    def test_right_triangle_quadrant(self, end, tilt):
        _, c = draw(Kind.TRIANGLE_RCT, (10, 10), end)
        assert c.tilt == tilt
        assert (c.width, c.height) == (10, 10)


class TestHexDrawing:
    def test_hex_ratio(self):
        _, c = draw(Kind.HEX_RCT, (0, 0), (40, 40))
        assert c == BoxCoords(0, 0, 40, 35)

    def test_hex_ratio_reverse_drag(self):
        _, c = draw(Kind.HEX_RCT, (40, 40), (0, 0))
        assert (c.x, c.y, c.width, c.height) == (0, 5, 40, 35)

    def test_diameter_horizontal(self):
        status, c = draw(Kind.HEX_DTR, (50, 50), (90, 52))
        assert status == DrawStatus.DONE
        assert c == BoxCoords(50, 33, 40, 35)

    def test_diameter_vertical(self):
        _, c = draw(Kind.HEX_DTR, (50, 50), (50, 90))
        assert (c.x, c.y, c.width, c.height) == (33, 50, 35, 40)

    def test_diameter_stays_on_canvas(self):
        _, c = draw(Kind.HEX_DTR, (10, 100), (190, 100))
        assert c.y >= 0 and c.y + c.height <= 200
        assert c.x + c.width <= 200


class TestCircleDrawing:
    def test_center_radius(self):
        status, c = draw(Kind.CIRCLE_CTR, (50, 50), (53, 54))
        assert status == DrawStatus.DONE
        assert c == CircleCoords(50, 50, 5)

    def test_diameter(self):
        _, c = draw(Kind.CIRCLE_DTR, (0, 0), (10, 0))
        assert c == CircleCoords(5, 0, 5)

    def test_zero_radius_is_error(self):
        status, _ = draw(Kind.CIRCLE_CTR, (5, 5), (5, 5))
        assert status == DrawStatus.ERROR


class TestPolygonDrawing:
    @pytest.fixture
    def drawer(self):
        d = create_drawer(Kind.POLYGON, 100, 100)
        d.start(Point(0, 0))
        return d

    def test_clicks_continue(self, drawer):
        assert drawer.end(Point(10, 0)) == DrawStatus.CONTINUE
        assert drawer.end(Point(10, 10)) == DrawStatus.CONTINUE

    def test_close_near_first_vertex(self, drawer):
        drawer.end(Point(10, 0))
        drawer.end(Point(10, 10))
        assert drawer.end(Point(1, 1)) == DrawStatus.DONE
        assert drawer.coords == (Point(0, 0), Point(10, 0), Point(10, 10))

    def test_close_too_early(self, drawer):
        drawer.end(Point(10, 0))
        assert drawer.end(Point(2, 2)) == DrawStatus.ERROR

    def test_progress_moves_last_vertex(self, drawer):
        drawer.end(Point(10, 0))
        assert drawer.progress(Point(20, 20))[-1] == Point(20, 20)
