"""
The image map document: an ordered list of areas on a fixed-size canvas.

Areas are drawn in list order, so the last one is topmost.  Grids are areas
whose ``grid`` attribute repeats another area (the pattern); the pattern
records the uids of its grids in ``bonds``.  Every commit that changes a
pattern or a scope recomputes the grids involved.
"""

from typing import Dict, Iterable, List, Optional

from areamap.grid import Align, Grid, GridParameters, Order, Scope
from areamap.handles import HandleId
from areamap.shapes import (
    AreaProperties, BoxCoords, Coords, Kind, Point, Shape, is_valid, within,
)
from areamap.shapes.drawing import DrawStatus, create_drawer
from areamap.transform import (
    Direction, edit_coords, move_coords, rotate_coords, selection_bounds,
)


class ImageMap:
    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Invalid canvas size {width}x{height}")
        self.width = width
        self.height = height
        self.areas: List[Shape] = []
        self._drawer = None

    # ------------------------------------------------------------------
    # Area list
    # ------------------------------------------------------------------

    def __iter__(self):
        return iter(self.areas)

    def __len__(self):
        return len(self.areas)

    def get(self, uid: str) -> Shape:
        for shape in self.areas:
            if shape.uid == uid:
                return shape
        raise KeyError(uid)

    def add(self, shape: Shape) -> Shape:
        if not is_valid(shape.kind, shape.coords):
            raise ValueError(f"Invalid {shape.kind.value} coordinates: {shape.coords}")
        self.areas.append(shape)
        return shape

    def grids_of(self, pattern: Shape) -> List[Shape]:
        return [s for s in self.areas if s.uid in pattern.bonds]

    def remove(self, shape: Shape, cascade: bool = True) -> List[Shape]:
        """Remove *shape*; a bonded pattern takes its grids with it.

        Without *cascade* a bonded pattern is refused with ``ValueError``.
        Returns every removed area.
        """
        removed = []
        if shape.has_bonds():
            if not cascade:
                raise ValueError("Shape is the pattern of a grid; remove the grid first")
            for grid_shape in self.grids_of(shape):
                removed.extend(self.remove(grid_shape))
        if shape.is_grid:
            shape.grid.pattern.bonds.discard(shape.uid)
            shape.grid = None
        self.areas.remove(shape)
        removed.append(shape)
        return removed

    def find_within(self, rect: BoxCoords) -> List[Shape]:
        """Areas whose bounding box lies inside *rect* (rubber-band selection)."""
        return [s for s in self.areas if within(s.kind, s.coords, rect)]

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def start_draw(self, kind: Kind, point: Point, alt: bool = False) -> Coords:
        self._drawer = create_drawer(kind, self.width, self.height, alt)
        return self._drawer.start(point)

    def _active_drawer(self):
        if self._drawer is None:
            raise ValueError("no drawing in progress")
        return self._drawer

    def progress_draw(self, point: Point) -> Coords:
        return self._active_drawer().progress(point)

    def end_draw(self, point: Point, properties: Optional[AreaProperties] = None):
        """Finish one click; returns ``(status, shape or None)``."""
        drawer = self._active_drawer()
        status = drawer.end(point)
        if status == DrawStatus.CONTINUE:
            return status, None
        self._drawer = None
        if status == DrawStatus.ERROR or not is_valid(drawer.kind, drawer.coords):
            return DrawStatus.ERROR, None
        shape = self.add(Shape(drawer.kind, drawer.coords, properties or AreaProperties()))
        return status, shape

    def cancel_draw(self):
        self._drawer = None

    # ------------------------------------------------------------------
    # Commits
    # ------------------------------------------------------------------

    def _refresh(self, shapes: Iterable[Shape]):
        """Recompute every grid whose scope or pattern is in *shapes*."""
        seen = set()
        for shape in shapes:
            grids = self.grids_of(shape) + ([shape] if shape.is_grid else [])
            for grid_shape in grids:
                if grid_shape.uid not in seen:
                    seen.add(grid_shape.uid)
                    grid_shape.grid.recompute()

    def move_by(self, shapes: List[Shape], dx: int, dy: int) -> bool:
        """Translate a selection by one clamped delta."""
        if not shapes:
            return False
        bounds = selection_bounds(((s.kind, s.coords) for s in shapes), self.width, self.height)
        dx, dy = bounds.clamp(dx, dy)
        for shape in shapes:
            shape.coords = move_coords(shape.kind, shape.coords, dx, dy)
        self._refresh(shapes)
        return True

    def edit_handle(self, shape: Shape, handle: HandleId, dx: int, dy: int) -> bool:
        candidate = edit_coords(shape.kind, shape.coords, handle, dx, dy, self.width, self.height)
        if candidate is None:
            return False
        shape.coords = candidate
        self._refresh([shape])
        return True

    def rotate(self, shape: Shape, direction: Direction = Direction.CLOCKWISE) -> bool:
        candidate = rotate_coords(shape.kind, shape.coords, direction, self.width, self.height)
        if candidate is None:
            return False
        shape.coords = candidate
        self._refresh([shape])
        return True

    # ------------------------------------------------------------------
    # Grids
    # ------------------------------------------------------------------

    def add_grid(self, pattern: Shape, scope_kind: Kind, coords: Coords,
                 params: Optional[GridParameters] = None,
                 properties: Optional[AreaProperties] = None) -> Shape:
        """New grid area repeating *pattern* across a scope of *scope_kind*."""
        scope = Shape(Kind(scope_kind), coords, properties or AreaProperties())
        if not is_valid(scope.kind, coords):
            raise ValueError(f"Invalid {scope.kind.value} coordinates: {coords}")
        scope.grid = Grid(scope, pattern, params or GridParameters(),
                          self.width, self.height)
        pattern.bonds.add(scope.uid)
        self.areas.append(scope)
        return scope

    def _grid(self, grid_shape: Shape) -> Grid:
        if not grid_shape.is_grid:
            raise ValueError("Shape is not a grid")
        return grid_shape.grid

    def set_grid_scope(self, grid_shape: Shape, scope: Scope):
        self._grid(grid_shape).set_scope(scope)

    def set_grid_align(self, grid_shape: Shape, align: Align):
        self._grid(grid_shape).set_align(align)

    def set_grid_space(self, grid_shape: Shape, space: int):
        if space < 0:
            raise ValueError(f"Grid space must be >= 0, got {space}")
        self._grid(grid_shape).set_space(space)

    def set_grid_order(self, grid_shape: Shape, order: Order):
        self._grid(grid_shape).set_order(order)

    def freeze(self, grid_shape: Shape) -> List[Shape]:
        """Replace a grid by independent areas, one per tile.

        The new areas are inserted where the grid was; the grid and its bond
        are destroyed.
        """
        if not grid_shape.is_grid:
            raise ValueError("Only grids can be frozen")
        created = grid_shape.grid.freeze()
        index = self.areas.index(grid_shape)
        self.remove(grid_shape)
        self.areas[index:index] = created
        return created


class Mover:
    """Drag gesture for a selection: candidates on progress, commit on end."""

    def __init__(self, image_map: ImageMap, shapes: List[Shape], origin: Point):
        self.image_map = image_map
        self.shapes = list(shapes)
        self.origin = origin
        self.bounds = selection_bounds(((s.kind, s.coords) for s in self.shapes),
                                       image_map.width, image_map.height)

    def _delta(self, point: Point):
        return self.bounds.clamp(point.x - self.origin.x, point.y - self.origin.y)

    def progress(self, point: Point) -> Dict[str, Coords]:
        dx, dy = self._delta(point)
        return {s.uid: move_coords(s.kind, s.coords, dx, dy) for s in self.shapes}

    def end(self, point: Point) -> bool:
        dx, dy = self._delta(point)
        return self.image_map.move_by(self.shapes, dx, dy)

    def cancel(self):
        self.shapes = []


class HandleDrag:
    """Drag gesture for one handle of one shape."""

    def __init__(self, image_map: ImageMap, shape: Shape, handle: HandleId, origin: Point):
        self.image_map = image_map
        self.shape = shape
        self.handle = handle
        self.origin = origin

    def progress(self, point: Point) -> Optional[Coords]:
        """Candidate coordinates, or None when the drag would be rejected."""
        return edit_coords(self.shape.kind, self.shape.coords, self.handle,
                           point.x - self.origin.x, point.y - self.origin.y,
                           self.image_map.width, self.image_map.height)

    def end(self, point: Point) -> bool:
        return self.image_map.edit_handle(self.shape, self.handle,
                                          point.x - self.origin.x, point.y - self.origin.y)

    def cancel(self):
        self.shape = None
