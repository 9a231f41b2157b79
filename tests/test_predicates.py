"""Tests for scope containment and intersection."""

import pytest

from areamap.predicates import (
    circle_crosses_segment, circle_line_roots, contained, intersects,
    point_in_circle, point_in_hex, point_in_polygon, segments_cross,
)
from areamap.shapes import BoxCoords, CircleCoords, Kind, Point


@pytest.fixture
def wide_hex():
    return BoxCoords(0, 0, 40, 30)


@pytest.fixture
def tall_hex():
    return BoxCoords(0, 0, 30, 40)


class TestLines:
    def test_tangent_vertical_line(self):
        assert circle_line_roots(Point(5, -10), Point(5, 10), 0, 0, 5) == 1
        assert circle_line_roots(Point(6, -10), Point(6, 10), 0, 0, 5) == 0
        assert circle_line_roots(Point(-10, 0), Point(10, 1), 0, 0, 5) == 2

    def test_circle_crosses_segment(self):
        assert circle_crosses_segment(Point(0, 0), Point(20, 0), 10, 0, 5)
        assert not circle_crosses_segment(Point(0, 0), Point(2, 0), 10, 0, 5)
        assert not circle_crosses_segment(Point(0, 5), Point(20, 5), 10, 0, 5)

    def test_segments_cross(self):
        assert segments_cross(Point(0, 0), Point(10, 10), Point(0, 10), Point(10, 0))
        assert not segments_cross(Point(0, 0), Point(10, 0), Point(0, 5), Point(10, 5))
        assert not segments_cross(Point(0, 0), Point(10, 0), Point(10, 0), Point(10, 10))

    def test_point_in_polygon(self):
        square = [Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)]
        assert point_in_polygon(square, 5, 5)
        assert not point_in_polygon(square, 15, 5)


class TestPointTests:
    def test_point_in_circle(self):
        scope = CircleCoords(0, 0, 10)
        assert point_in_circle(scope, 6, 8)
        assert not point_in_circle(scope, 6, 8, off=1)

    def test_wide_hex(self, wide_hex):
        assert point_in_hex(wide_hex, 20, 15)
        assert point_in_hex(wide_hex, 20, 0)
        assert not point_in_hex(wide_hex, 1, 1)

    def test_tall_hex(self, tall_hex):
        assert point_in_hex(tall_hex, 15, 20)
        assert not point_in_hex(tall_hex, 1, 1)

    def test_disc_in_hex(self, wide_hex):
        assert point_in_hex(wide_hex, 20, 15, off=10)
        assert not point_in_hex(wide_hex, 20, 15, off=16)


class TestContained:
    def test_circle_in_circle(self):
        scope = CircleCoords(50, 50, 20)
        assert contained(Kind.CIRCLE_CTR, scope, Kind.CIRCLE_DTR, CircleCoords(60, 50, 10))
        assert not contained(Kind.CIRCLE_CTR, scope, Kind.CIRCLE_DTR, CircleCoords(61, 50, 10))

    def test_rectangle_in_circle(self):
        scope = CircleCoords(50, 50, 20)
        assert contained(Kind.CIRCLE_CTR, scope, Kind.RECTANGLE, BoxCoords(40, 40, 20, 20))
        assert not contained(Kind.CIRCLE_CTR, scope, Kind.RECTANGLE, BoxCoords(35, 35, 30, 30))

    def test_rectangle_in_hex(self, wide_hex):
        assert contained(Kind.HEX_RCT, wide_hex, Kind.RECTANGLE, BoxCoords(15, 10, 10, 10))
        assert not contained(Kind.HEX_RCT, wide_hex, Kind.RECTANGLE, BoxCoords(0, 0, 10, 10))

    def test_box_scope(self):
        scope = BoxCoords(0, 0, 50, 50)
        assert contained(Kind.RECTANGLE, scope, Kind.CIRCLE_CTR, CircleCoords(25, 25, 25))
        assert not contained(Kind.SQUARE, scope, Kind.CIRCLE_CTR, CircleCoords(25, 25, 26))


class TestIntersects:
    def test_tangent_circles_do_not_intersect(self):
        scope = CircleCoords(0, 0, 10)
        assert not intersects(Kind.CIRCLE_CTR, scope, Kind.CIRCLE_CTR, CircleCoords(15, 0, 5))
        assert intersects(Kind.CIRCLE_CTR, scope, Kind.CIRCLE_CTR, CircleCoords(14, 0, 5))

    def test_polygon_straddling_circle(self):
        scope = CircleCoords(50, 50, 10)
        # corners outside, edge crosses the rim
        assert intersects(Kind.CIRCLE_CTR, scope, Kind.RECTANGLE, BoxCoords(55, 30, 30, 40))
        assert not intersects(Kind.CIRCLE_CTR, scope, Kind.RECTANGLE, BoxCoords(61, 30, 30, 40))

    def test_circle_scope_inside_polygon(self):
        scope = CircleCoords(50, 50, 5)
        assert intersects(Kind.CIRCLE_CTR, scope, Kind.RECTANGLE, BoxCoords(0, 0, 100, 100))

    def test_hex_scope(self, wide_hex):
        assert intersects(Kind.HEX_RCT, wide_hex, Kind.RECTANGLE, BoxCoords(35, 10, 20, 10))
        assert not intersects(Kind.HEX_RCT, wide_hex, Kind.RECTANGLE, BoxCoords(100, 100, 10, 10))
        assert intersects(Kind.HEX_DTR, wide_hex, Kind.CIRCLE_CTR, CircleCoords(45, 15, 6))
        assert not intersects(Kind.HEX_DTR, wide_hex, Kind.CIRCLE_CTR, CircleCoords(50, 15, 6))

    def test_box_scope_overlap(self):
        scope = BoxCoords(0, 0, 10, 10)
        assert intersects(Kind.RECTANGLE, scope, Kind.RECTANGLE, BoxCoords(9, 9, 5, 5))
        assert not intersects(Kind.RECTANGLE, scope, Kind.RECTANGLE, BoxCoords(10, 0, 5, 5))
