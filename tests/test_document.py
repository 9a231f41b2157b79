"""Tests for the image map document: commits, bonds, cascade and freeze."""

import pytest

from areamap.document import HandleDrag, ImageMap, Mover
from areamap.grid import GridParameters, Order
from areamap.handles import Handle
from areamap.shapes import (
    AreaProperties, BoxCoords, CircleCoords, Kind, Point, Shape, Tilt,
)
from areamap.shapes.drawing import DrawStatus
from areamap.transform import Direction


@pytest.fixture
def doc():
    return ImageMap(100, 100)


@pytest.fixture
def gridded(doc):
    pattern = doc.add(Shape(Kind.RECTANGLE, BoxCoords(0, 0, 10, 10)))
    grid_shape = doc.add_grid(pattern, Kind.RECTANGLE, BoxCoords(0, 0, 25, 25),
                              properties=AreaProperties(href="/t/[#]"))
    return doc, pattern, grid_shape


class TestAreaList:
    def test_invalid_canvas(self):
        with pytest.raises(ValueError):
            ImageMap(0, 10)

    def test_add_rejects_invalid(self, doc):
        with pytest.raises(ValueError):
            doc.add(Shape(Kind.SQUARE, BoxCoords(0, 0, 10, 11)))

    def test_get(self, doc):
        s = doc.add(Shape(Kind.CIRCLE_CTR, CircleCoords(10, 10, 5)))
        assert doc.get(s.uid) is s
        with pytest.raises(KeyError):
            doc.get("missing")

    def test_find_within(self, doc):
        a = doc.add(Shape(Kind.RECTANGLE, BoxCoords(5, 5, 10, 10)))
        doc.add(Shape(Kind.RECTANGLE, BoxCoords(50, 50, 10, 10)))
        assert doc.find_within(BoxCoords(0, 0, 20, 20)) == [a]


class TestDrawing:
    def test_draw_adds_area(self, doc):
        doc.start_draw(Kind.RECTANGLE, Point(10, 10))
        doc.progress_draw(Point(20, 20))
        status, shape = doc.end_draw(Point(30, 40), AreaProperties(href="/a"))
        assert status == DrawStatus.DONE
        assert shape.coords == BoxCoords(10, 10, 20, 30)
        assert doc.areas == [shape]

    def test_error_adds_nothing(self, doc):
        doc.start_draw(Kind.CIRCLE_DTR, Point(10, 10))
        status, shape = doc.end_draw(Point(10, 10))
        assert status == DrawStatus.ERROR and shape is None
        assert len(doc) == 0

    def test_polygon_continues(self, doc):
        doc.start_draw(Kind.POLYGON, Point(0, 0))
        assert doc.end_draw(Point(20, 0)) == (DrawStatus.CONTINUE, None)
        doc.end_draw(Point(20, 20))
        status, shape = doc.end_draw(Point(0, 1))
        assert status == DrawStatus.DONE
        assert len(shape.coords) == 3

    def test_cancel(self, doc):
        doc.start_draw(Kind.RECTANGLE, Point(10, 10))
        doc.cancel_draw()
        assert len(doc) == 0

    def test_no_drawing_in_progress(self, doc):
        with pytest.raises(ValueError):
            doc.progress_draw(Point(5, 5))
        doc.start_draw(Kind.RECTANGLE, Point(10, 10))
        doc.end_draw(Point(20, 20))
        with pytest.raises(ValueError):
            doc.end_draw(Point(30, 30))


class TestCommits:
    def test_move_clamped_selection(self, doc):
        a = doc.add(Shape(Kind.RECTANGLE, BoxCoords(10, 10, 10, 10)))
        b = doc.add(Shape(Kind.CIRCLE_CTR, CircleCoords(80, 80, 10)))
        assert doc.move_by([a, b], 50, -50)
        assert a.coords == BoxCoords(20, 0, 10, 10)
        assert b.coords == CircleCoords(90, 70, 10)

    def test_edit_commits_or_rejects(self, doc):
        s = doc.add(Shape(Kind.RECTANGLE, BoxCoords(10, 10, 20, 20)))
        assert doc.edit_handle(s, Handle.BR, 5, 5)
        assert s.coords == BoxCoords(10, 10, 25, 25)
        assert not doc.edit_handle(s, Handle.R, -40, 0)
        assert s.coords == BoxCoords(10, 10, 25, 25)

    def test_rotate(self, doc):
        s = doc.add(Shape(Kind.TRIANGLE_ISC, BoxCoords(20, 20, 20, 10, Tilt.BOTTOM)))
        assert doc.rotate(s, Direction.CLOCKWISE)
        assert s.coords == BoxCoords(25, 15, 10, 20, Tilt.LEFT)
        poly = doc.add(Shape(Kind.POLYGON, (Point(0, 0), Point(5, 0), Point(0, 5))))
        assert not doc.rotate(poly)

    def test_pattern_edit_recomputes_grid(self, gridded):
        doc, pattern, grid_shape = gridded
        assert len(grid_shape.grid.tiles) == 4
        doc.edit_handle(pattern, Handle.BR, -5, -5)
        assert len(grid_shape.grid.tiles) == 25

    def test_scope_move_recomputes_grid(self, gridded):
        doc, pattern, grid_shape = gridded
        doc.move_by([grid_shape], 5, 5)
        assert [(t.x, t.y) for t in grid_shape.grid.tiles] == [(10, 10), (20, 10), (10, 20), (20, 20)]


class TestGrids:
    def test_bond_recorded(self, gridded):
        doc, pattern, grid_shape = gridded
        assert pattern.bonds == {grid_shape.uid}
        assert doc.grids_of(pattern) == [grid_shape]

    def test_setters(self, gridded):
        doc, pattern, grid_shape = gridded
        doc.set_grid_space(grid_shape, 5)
        assert sorted({t.x for t in grid_shape.grid.tiles}) == [0, 15]
        doc.set_grid_space(grid_shape, 0)
        doc.set_grid_order(grid_shape, Order.BR)
        assert (grid_shape.grid.tiles[0].x, grid_shape.grid.tiles[0].y) == (10, 10)
        doc.set_grid_scope(grid_shape, "outer")
        assert len(grid_shape.grid.tiles) == 9
        with pytest.raises(ValueError):
            doc.set_grid_space(grid_shape, -1)
        with pytest.raises(ValueError):
            doc.set_grid_align(pattern, "hAlt")

    def test_grid_of_grid_rejected(self, gridded):
        doc, pattern, grid_shape = gridded
        with pytest.raises(ValueError):
            doc.add_grid(grid_shape, Kind.RECTANGLE, BoxCoords(0, 0, 90, 90))

    def test_add_grid_with_params(self, doc):
        pattern = doc.add(Shape(Kind.CIRCLE_CTR, CircleCoords(50, 50, 5)))
        grid_shape = doc.add_grid(pattern, Kind.CIRCLE_CTR, CircleCoords(50, 50, 20),
                                  GridParameters(scope="outer"))
        assert len(grid_shape.grid.tiles) == 21


class TestRemoval:
    def test_cascade_removes_grids(self, gridded):
        doc, pattern, grid_shape = gridded
        removed = doc.remove(pattern)
        assert removed == [grid_shape, pattern]
        assert len(doc) == 0

    def test_refused_without_cascade(self, gridded):
        doc, pattern, grid_shape = gridded
        with pytest.raises(ValueError):
            doc.remove(pattern, cascade=False)
        assert len(doc) == 2

    def test_removing_grid_drops_bond(self, gridded):
        doc, pattern, grid_shape = gridded
        doc.remove(grid_shape)
        assert not pattern.has_bonds()
        assert doc.areas == [pattern]


class TestFreeze:
    def test_freeze_replaces_grid(self, gridded):
        doc, pattern, grid_shape = gridded
        created = doc.freeze(grid_shape)
        assert len(created) == 3
        assert doc.areas == [pattern] + created
        assert not pattern.has_bonds()
        assert pattern.properties.href == "/t/1"
        assert [s.properties.href for s in created] == ["/t/2", "/t/3", "/t/4"]
        assert all(not s.is_grid for s in doc.areas)

    def test_freeze_plain_area_rejected(self, doc):
        s = doc.add(Shape(Kind.RECTANGLE, BoxCoords(0, 0, 10, 10)))
        with pytest.raises(ValueError):
            doc.freeze(s)


class TestGestures:
    def test_mover(self, doc):
        s = doc.add(Shape(Kind.RECTANGLE, BoxCoords(10, 10, 10, 10)))
        mover = Mover(doc, [s], Point(15, 15))
        assert mover.progress(Point(0, 15)) == {s.uid: BoxCoords(0, 10, 10, 10)}
        assert s.coords == BoxCoords(10, 10, 10, 10)
        assert mover.end(Point(20, 25))
        assert s.coords == BoxCoords(15, 20, 10, 10)

    def test_handle_drag(self, doc):
        s = doc.add(Shape(Kind.CIRCLE_CTR, CircleCoords(50, 50, 10)))
        drag = HandleDrag(doc, s, Handle.R, Point(60, 50))
        assert drag.progress(Point(65, 50)) == CircleCoords(50, 50, 15)
        assert s.coords.r == 10
        drag.cancel()
        assert s.coords.r == 10
