"""
Preview rendering backed by OpenCV.

All drawing functions operate on BGR uint8 numpy images, the layout
``cv2.imread`` returns.  Outlines use anti-aliased lines (LINE_AA) so the
preview reads cleanly over photographs.
"""

import cv2
import numpy as np
from PIL import Image

from areamap.config import STYLE_DEFAULT, PreviewStyle
from areamap.document import ImageMap
from areamap.handles import active_handles, handle_position
from areamap.shapes import CIRCLE_KINDS, Kind, Shape, vertices


# ---------------------------------------------------------------------------
# Images
# ---------------------------------------------------------------------------

def load_image(image_path):
    """Read *image_path* as a BGR uint8 array."""
    img = cv2.imread(image_path, cv2.IMREAD_COLOR)
    if img is None:
        raise FileNotFoundError(f"Cannot read image: {image_path}")
    return img


def image_size(image_path):
    """(width, height) of an image file without decoding its pixels."""
    try:
        with Image.open(image_path) as im:
            return im.size
    except OSError as e:
        raise FileNotFoundError(f"Cannot read image: {image_path}") from e


def blank_canvas(width, height, value=255):
    return np.full((height, width, 3), value, dtype=np.uint8)


def save_preview(img, save_path):
    """Write a BGR preview to *save_path* (format from the extension)."""
    Image.fromarray(cv2.cvtColor(img, cv2.COLOR_BGR2RGB)).save(save_path)


# ---------------------------------------------------------------------------
# Core primitives
# ---------------------------------------------------------------------------

def rasterize_line(img, p1, p2, color=(0, 0, 0), thickness=1):
    """Draw an anti-aliased line segment."""
    cv2.line(
        img,
        (int(round(p1[0])), int(round(p1[1]))),
        (int(round(p2[0])), int(round(p2[1]))),
        color,
        thickness,
        lineType=cv2.LINE_AA,
    )
    return img


def rasterize_dashed_line(img, p1, p2, color=(0, 0, 0), thickness=1,
                          dash_len=6, gap_len=4):
    """Draw a dashed line segment."""
    p1 = np.array([float(p1[0]), float(p1[1])])
    p2 = np.array([float(p2[0]), float(p2[1])])
    d = p2 - p1
    length = np.linalg.norm(d)
    if length < 1:
        return img
    unit = d / length
    pos = 0.0
    drawing = True
    while pos < length:
        end_pos = min(pos + (dash_len if drawing else gap_len), length)
        if drawing:
            rasterize_line(img, p1 + unit * pos, p1 + unit * end_pos, color, thickness)
        pos = end_pos
        drawing = not drawing
    return img


def rasterize_circle(img, center, radius, color=(0, 0, 0), thickness=1):
    cv2.circle(
        img,
        (int(round(center[0])), int(round(center[1]))),
        int(max(round(radius), 1)),
        color,
        thickness,
        lineType=cv2.LINE_AA,
    )
    return img


def rasterize_polyline(img, points, color=(0, 0, 0), thickness=1, closed=True, dashed=False):
    """Draw connected segments through a list of (x, y) points."""
    draw = rasterize_dashed_line if dashed else rasterize_line
    n = len(points)
    segs = n if closed else n - 1
    for i in range(segs):
        draw(img, points[i], points[(i + 1) % n], color, thickness)
    return img


def rasterize_filled_rectangle(img, corner1, corner2, color=(0, 0, 0)):
    x1, y1 = int(round(corner1[0])), int(round(corner1[1]))
    x2, y2 = int(round(corner2[0])), int(round(corner2[1]))
    cv2.rectangle(img, (x1, y1), (x2, y2), color, -1)
    return img


# ---------------------------------------------------------------------------
# Areas
# ---------------------------------------------------------------------------

def rasterize_area(img, kind: Kind, coords, color, thickness=1, dashed=False):
    """Outline of one area in its exported geometry."""
    if kind in CIRCLE_KINDS:
        if dashed:
            n = max(16, int(coords.r))
            t = np.linspace(0, 2 * np.pi, n, endpoint=False)
            pts = np.stack([coords.x + coords.r * np.cos(t),
                            coords.y + coords.r * np.sin(t)], axis=1)
            return rasterize_polyline(img, pts, color, thickness, dashed=True)
        return rasterize_circle(img, (coords.x, coords.y), coords.r, color, thickness)
    pts = [(p.x, p.y) for p in vertices(kind, coords)]
    return rasterize_polyline(img, pts, color, thickness, dashed=dashed)


def rasterize_handles(img, shape: Shape, color, size=3):
    for handle in active_handles(shape.kind, shape.coords):
        p = handle_position(shape.kind, shape.coords, handle)
        rasterize_filled_rectangle(img, (p.x - size, p.y - size), (p.x + size, p.y + size), color)
    return img


def render_areas(img, image_map: ImageMap, style: PreviewStyle = STYLE_DEFAULT,
                 handles=False):
    """Draw every area of *image_map* onto *img* in drawing order.

    Grid scopes are dashed and followed by their tiles.  Returns *img*.
    """
    for shape in image_map.areas:
        if shape.is_grid:
            rasterize_area(img, shape.kind, shape.coords, style.grid_color,
                           style.thickness, dashed=True)
            for tile in shape.grid.tiles:
                rasterize_area(img, shape.grid.pattern.kind, tile, style.tile_color,
                               style.thickness)
        else:
            rasterize_area(img, shape.kind, shape.coords, style.area_color, style.thickness)
        if handles:
            rasterize_handles(img, shape, style.handle_color, style.handle_size)
    return img


def render_preview(image_map: ImageMap, image_path=None, style: PreviewStyle = STYLE_DEFAULT,
                   handles=False):
    """Areas over the source image, or over a white canvas of the map size."""
    if image_path:
        img = load_image(image_path)
    else:
        img = blank_canvas(image_map.width, image_map.height)
    return render_areas(img, image_map, style, handles)
