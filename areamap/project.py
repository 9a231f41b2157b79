"""Project save / load: the document as JSON, grids bonded by list index."""

import json
import os
from typing import List, Optional, Tuple

from areamap.config import (
    DEFAULT_GRID_ALIGN, DEFAULT_GRID_ORDER, DEFAULT_GRID_SCOPE, DEFAULT_GRID_SPACE,
    PROJECT_VERSION,
)
from areamap.document import ImageMap
from areamap.grid import Grid, GridParameters
from areamap.shapes import (
    BOX_KINDS, CIRCLE_KINDS, AreaProperties, BoxCoords, CircleCoords, Kind,
    Point, Shape, Tilt, is_valid,
)


class ProjectFormatError(ValueError):
    """A project record that can not be turned back into an area."""


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

def shape_record(shape: Shape, index_of: dict) -> dict:
    """Plain-data form of one area; *index_of* maps uids to list positions."""
    c = shape.coords
    if shape.kind in CIRCLE_KINDS:
        coords = [c.x, c.y, c.r]
    elif shape.kind == Kind.POLYGON:
        coords = [[p.x, p.y] for p in c]
    else:
        coords = [c.x, c.y, c.width, c.height]
    record = {
        "type": shape.kind.value,
        "coords": coords,
        "properties": {
            "href": shape.properties.href,
            "alt": shape.properties.alt,
            "title": shape.properties.title,
            "id": shape.properties.id,
        },
    }
    if shape.kind in BOX_KINDS:
        record["tilt"] = int(c.tilt)
    if shape.is_grid:
        params = shape.grid.params
        record["grid"] = {
            "pattern": index_of[shape.grid.pattern.uid],
            "scope": params.scope.value,
            "align": params.align.value,
            "space": params.space,
            "order": params.order.value,
        }
    return record


def _coords(kind: Kind, record: dict):
    values = record.get("coords")
    if not isinstance(values, list):
        raise ProjectFormatError(f"missing coords for {kind.value}")
    try:
        if kind in CIRCLE_KINDS:
            x, y, r = (int(v) for v in values)
            return CircleCoords(x, y, r)
        if kind == Kind.POLYGON:
            return tuple(Point(int(x), int(y)) for x, y in values)
        x, y, w, h = (int(v) for v in values)
        return BoxCoords(x, y, w, h, Tilt(int(record.get("tilt", 0))))
    except (TypeError, ValueError) as e:
        raise ProjectFormatError(f"bad coords {values!r} for {kind.value}: {e}") from e


def shape_from_record(record: dict) -> Shape:
    """Area for one record, without its grid; raises ProjectFormatError."""
    if not isinstance(record, dict):
        raise ProjectFormatError(f"record is not an object: {record!r}")
    try:
        kind = Kind(record.get("type"))
    except ValueError:
        raise ProjectFormatError(f"unknown kind {record.get('type')!r}") from None
    coords = _coords(kind, record)
    if not is_valid(kind, coords):
        raise ProjectFormatError(f"invalid {kind.value} coordinates {coords}")
    props = record.get("properties") or {}
    properties = AreaProperties(**{
        k: str(props.get(k, "")) for k in ("href", "alt", "title", "id")
    })
    return Shape(kind, coords, properties)


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------

def save_project(image_map: ImageMap, path: str, image_path: Optional[str] = None):
    """Write *image_map* to *path* as JSON."""
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    index_of = {s.uid: i for i, s in enumerate(image_map.areas)}
    data = {
        "version": PROJECT_VERSION,
        "image": {
            "path": image_path,
            "width": image_map.width,
            "height": image_map.height,
        },
        "areas": [shape_record(s, index_of) for s in image_map.areas],
    }
    with open(path, "w") as f:
        json.dump(data, f, indent=2)


def _attach_grid(image_map: ImageMap, scope: Shape, settings: dict, shapes: list, records: list):
    if not isinstance(settings, dict):
        raise ProjectFormatError(f"grid settings are not an object: {settings!r}")
    index = settings.get("pattern")
    if not isinstance(index, int) or not 0 <= index < len(shapes):
        raise ProjectFormatError(f"bond index {index!r} out of range")
    pattern = shapes[index]
    if pattern is None or pattern is scope:
        raise ProjectFormatError(f"bond target {index} is missing")
    if "grid" in records[index]:
        raise ProjectFormatError(f"bond target {index} is itself a grid")
    try:
        params = GridParameters(
            scope=settings.get("scope", DEFAULT_GRID_SCOPE),
            align=settings.get("align", DEFAULT_GRID_ALIGN),
            space=int(settings.get("space", DEFAULT_GRID_SPACE)),
            order=settings.get("order", DEFAULT_GRID_ORDER),
        )
        scope.grid = Grid(scope, pattern, params, image_map.width, image_map.height)
    except (TypeError, ValueError) as e:
        raise ProjectFormatError(f"bad grid settings {settings!r}: {e}") from e
    pattern.bonds.add(scope.uid)


def load_project(path: str) -> Tuple[ImageMap, List[str]]:
    """Read a project file.

    Corrupted records are skipped; returns the document and one message per
    skipped record.
    """
    with open(path) as f:
        data = json.load(f)
    if not isinstance(data, dict) or "areas" not in data:
        raise ProjectFormatError(f"{path} is not an areamap project")
    version = data.get("version", PROJECT_VERSION)
    if not isinstance(version, int) or version > PROJECT_VERSION:
        raise ProjectFormatError(f"{path} has version {version}, newest known is {PROJECT_VERSION}")
    image = data.get("image") or {}
    image_map = ImageMap(int(image.get("width", 0)), int(image.get("height", 0)))

    errors = []
    records = data["areas"]
    shapes: List[Optional[Shape]] = []
    for i, record in enumerate(records):
        try:
            shapes.append(shape_from_record(record))
        except ProjectFormatError as e:
            errors.append(f"area {i}: {e}")
            shapes.append(None)

    # Patterns are always plain areas, so grids can be bonded in one pass
    for i, (record, shape) in enumerate(zip(records, shapes)):
        if shape is None or "grid" not in record:
            continue
        try:
            _attach_grid(image_map, shape, record["grid"], shapes, records)
        except ProjectFormatError as e:
            errors.append(f"area {i}: {e}")
            shapes[i] = None

    image_map.areas = [s for s in shapes if s is not None]
    return image_map, errors
