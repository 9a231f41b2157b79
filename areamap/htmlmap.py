"""
HTML image map export and import.

Each area becomes one ``<area>`` element: boxes of kind rectangle or square
are written as ``rect``, circles as ``circle`` and everything else as a
``poly`` with its flat vertex list.  Areas are written topmost first, the
order in which a browser resolves overlapping areas.

Usage::

    html = to_html(image_map, "board")
    shapes = parse_areas(html)
"""

import html
import re
from typing import Dict, Iterator, List, Tuple

from areamap.document import ImageMap
from areamap.shapes import (
    CIRCLE_KINDS, AreaProperties, CircleCoords, Coords, Kind, Point, Shape,
    bounding_box, equal_coords, is_valid, normalize_box, vertices,
)

RECT = "rect"
CIRCLE = "circle"
POLY = "poly"

IMPORT_KINDS = {RECT: Kind.RECTANGLE, CIRCLE: Kind.CIRCLE_CTR, POLY: Kind.POLYGON}

_AREA_RE = re.compile(r"<area\b([^>]*)>", re.IGNORECASE)
_ATTR_RE = re.compile(r'([a-zA-Z_:][-a-zA-Z0-9_:.]*)\s*=\s*(?:"([^"]*)"|\'([^\']*)\')')


# ---------------------------------------------------------------------------
# Export
# ---------------------------------------------------------------------------

def area_shape(kind: Kind) -> str:
    if kind in (Kind.RECTANGLE, Kind.SQUARE):
        return RECT
    if kind in CIRCLE_KINDS:
        return CIRCLE
    return POLY


def area_coords(kind: Kind, coords: Coords) -> str:
    shape = area_shape(kind)
    if shape == RECT:
        box = bounding_box(kind, coords)
        values = [box.x, box.y, box.x + box.width, box.y + box.height]
    elif shape == CIRCLE:
        values = [coords.x, coords.y, coords.r]
    else:
        values = [v for p in vertices(kind, coords) for v in (p.x, p.y)]
    return ",".join(str(int(v)) for v in values)


def area_html(kind: Kind, coords: Coords, properties: AreaProperties) -> str:
    parts = [f'<area shape="{area_shape(kind)}" coords="{area_coords(kind, coords)}"']
    for name in ("href", "alt", "title", "id"):
        value = getattr(properties, name)
        if value:
            parts.append(f'{name}="{html.escape(value)}"')
    return " ".join(parts) + " />"


def _first_grids(image_map: ImageMap) -> Dict[str, str]:
    """Pattern uid -> uid of its first grid in drawing order."""
    first = {}
    for shape in image_map.areas:
        if shape.is_grid:
            first.setdefault(shape.grid.pattern.uid, shape.uid)
    return first


def _grid_areas(shape: Shape, first: bool) -> Iterator[Tuple[Kind, Coords, AreaProperties]]:
    grid = shape.grid
    pattern = grid.pattern
    for i, coords in enumerate(grid.tiles, start=1):
        if not first and equal_coords(pattern.kind, pattern.coords, coords):
            continue
        yield pattern.kind, coords, grid.tile_properties(i)


def iter_areas(image_map: ImageMap) -> Iterator[Tuple[Kind, Coords, AreaProperties]]:
    """Every exported (kind, coords, properties), topmost first.

    A pattern bonded to grids is only written through its grids.
    """
    first = _first_grids(image_map)
    for shape in reversed(image_map.areas):
        if shape.is_grid:
            yield from _grid_areas(shape, first[shape.grid.pattern.uid] == shape.uid)
        elif not shape.has_bonds():
            yield shape.kind, shape.coords, shape.properties


def areas_html(image_map: ImageMap, indent: str = "  ") -> List[str]:
    return [indent + area_html(k, c, p) for k, c, p in iter_areas(image_map)]


def to_html(image_map: ImageMap, name: str) -> str:
    lines = [f'<map name="{html.escape(name)}">']
    lines.extend(areas_html(image_map))
    lines.append("</map>")
    return "\n".join(lines) + "\n"


# ---------------------------------------------------------------------------
# Import
# ---------------------------------------------------------------------------

def _attributes(text: str) -> Dict[str, str]:
    attrs = {}
    for m in _ATTR_RE.finditer(text):
        value = m.group(2) if m.group(2) is not None else m.group(3)
        attrs[m.group(1).lower()] = html.unescape(value)
    return attrs


def _parse_coords(shape: str, text: str) -> Tuple[Kind, Coords]:
    try:
        values = [int(round(float(v))) for v in re.split(r"[\s,]+", text.strip()) if v]
    except ValueError:
        raise ValueError(f"Malformed coords {text!r}") from None
    if shape == RECT:
        if len(values) != 4:
            raise ValueError(f"rect needs 4 values, got {len(values)}")
        return Kind.RECTANGLE, normalize_box(*values)
    if shape == CIRCLE:
        if len(values) != 3:
            raise ValueError(f"circle needs 3 values, got {len(values)}")
        return Kind.CIRCLE_CTR, CircleCoords(*values)
    if len(values) % 2 or len(values) < 6:
        raise ValueError(f"poly needs at least 3 coordinate pairs, got {values}")
    return Kind.POLYGON, tuple(Point(x, y) for x, y in zip(values[::2], values[1::2]))


def parse_areas(text: str) -> List[Shape]:
    """Shapes for every ``<area>`` in *text*, in drawing order.

    ``default`` areas carry no geometry and are skipped.  Malformed
    coordinates raise ``ValueError``.
    """
    shapes = []
    for m in _AREA_RE.finditer(text):
        attrs = _attributes(m.group(1))
        shape = attrs.get("shape", RECT).lower()
        if shape == "rectangle":
            shape = RECT
        elif shape == "polygon":
            shape = POLY
        if shape not in IMPORT_KINDS:
            continue
        kind, coords = _parse_coords(shape, attrs.get("coords", ""))
        props = AreaProperties(
            href=attrs.get("href", ""),
            alt=attrs.get("alt", ""),
            title=attrs.get("title", ""),
            id=attrs.get("id", ""),
        )
        shapes.append(Shape(kind, coords, props))
    shapes.reverse()
    return shapes


def import_html(text: str, width: int, height: int) -> ImageMap:
    """New document holding the valid areas of *text*."""
    image_map = ImageMap(width, height)
    for shape in parse_areas(text):
        if is_valid(shape.kind, shape.coords):
            image_map.add(shape)
    return image_map
