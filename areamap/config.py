"""
Global configuration: kind registry, geometric constants, preview presets.

Kinds are referred to by their serialized name everywhere outside
``areamap.shapes``; the registry below keeps the order in which drawing
tools are offered and which kinds can take part in a grid.
"""

import math
from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Kind registry
# ---------------------------------------------------------------------------

KINDS = [
    # --- Box family (x, y, width, height, tilt) ---
    "rectangle",     # 0  two-corner axis-aligned box
    "square",        # 1  box with equal sides
    "rhombus",       # 2  diamond inscribed in its box
    "ellipse",       # 3  ellipse inscribed in its box
    "triangleIsc",   # 4  isosceles triangle, base on the tilt side
    "triangleEql",   # 5  equilateral triangle, base on the tilt side
    "triangleRct",   # 6  right triangle, legs on two box sides
    "hexRct",        # 7  hexagon drawn from its bounding box
    "hexDtr",        # 8  hexagon drawn from a diameter
    # --- Circle family (x, y, r) ---
    "circleCtr",     # 9  center + radius point
    "circleDtr",     # 10 diameter end points
    # --- Free vertex list ---
    "polygon",       # 11 closed polyline
]

KIND_MAP = {name: i for i, name in enumerate(KINDS)}
NUM_KINDS = len(KINDS)

# Kinds whose geometry can bound a grid, by scope family
RECT_SCOPES = {"rectangle", "square"}
CIRCLE_SCOPES = {"circleCtr", "circleDtr"}
HEX_SCOPES = {"hexRct", "hexDtr"}
SCOPE_KINDS = RECT_SCOPES | CIRCLE_SCOPES | HEX_SCOPES

# Every kind except the free polygon can be repeated by a grid
PATTERN_KINDS = set(KINDS) - {"polygon"}

# ---------------------------------------------------------------------------
# Geometry constants
# ---------------------------------------------------------------------------

SQRT3 = math.sqrt(3)          # equilateral side/height factor
HALF_SQRT3 = SQRT3 / 2        # height of an equilateral triangle of side 1

CLOSE_GAP = 3                 # polygon closes when a click lands this close to vertex 0
ORDER_TIE = 2                 # grid reorder treats coordinates closer than this as equal
ELLIPSE_SEGMENTS = 32         # vertices used to approximate an ellipse outline
MOVE_LIMIT = 1000000          # initial bounds when intersecting a selection

INDEX_TOKEN = "[#]"           # replaced by the 1-based tile index

# ---------------------------------------------------------------------------
# Grid defaults
# ---------------------------------------------------------------------------

DEFAULT_GRID_SCOPE = "inner"
DEFAULT_GRID_ALIGN = "std"
DEFAULT_GRID_SPACE = 0
DEFAULT_GRID_ORDER = "TL"

# ---------------------------------------------------------------------------
# Preview presets
# ---------------------------------------------------------------------------

@dataclass
class PreviewStyle:
    name: str
    area_color: tuple       # BGR outline of plain areas
    grid_color: tuple       # BGR outline of grid scopes
    tile_color: tuple       # BGR outline of generated tiles
    handle_color: tuple     # BGR fill of edit handles
    thickness: int
    handle_size: int        # half side of a handle square, pixels


STYLE_DEFAULT = PreviewStyle(
    name="default",
    area_color=(0, 200, 255),
    grid_color=(255, 120, 0),
    tile_color=(0, 220, 0),
    handle_color=(0, 0, 255),
    thickness=1,
    handle_size=3,
)

STYLE_CONTRAST = PreviewStyle(
    name="contrast",
    area_color=(255, 255, 255),
    grid_color=(255, 255, 0),
    tile_color=(0, 255, 255),
    handle_color=(255, 0, 255),
    thickness=2,
    handle_size=4,
)

PREVIEW_STYLES = {"default": STYLE_DEFAULT, "contrast": STYLE_CONTRAST}

PROJECT_VERSION = 1
