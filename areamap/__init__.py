"""areamap - draw clickable areas over an image and export them as an HTML image map."""

from areamap.config import KINDS, KIND_MAP, NUM_KINDS, PREVIEW_STYLES
from areamap.document import HandleDrag, ImageMap, Mover
from areamap.grid import Align, GridParameters, Order, Scope
from areamap.shapes import AreaProperties, BoxCoords, CircleCoords, Kind, Point, Shape, Tilt
