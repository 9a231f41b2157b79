"""
Command line entry points.

Usage:
    python -m areamap.cli export board.json --name board --output board.html
    python -m areamap.cli import board.html --image board.png --output board.json
    python -m areamap.cli preview board.json --image board.png --save-path preview.png
    python -m areamap.cli freeze board.json --output frozen.json
"""

import argparse
import os
import sys

from areamap.config import PREVIEW_STYLES
from areamap.htmlmap import import_html, iter_areas, to_html
from areamap.project import load_project, save_project
from areamap.raster import image_size, render_preview, save_preview


def _load(path):
    image_map, errors = load_project(path)
    for msg in errors:
        print(f"  skipped {msg}")
    print(f"Loaded {len(image_map)} areas from {path} ({image_map.width}x{image_map.height})")
    return image_map


def export(project_path, name, output=None):
    image_map = _load(project_path)
    text = to_html(image_map, name)
    if output:
        os.makedirs(os.path.dirname(output) or ".", exist_ok=True)
        with open(output, "w") as f:
            f.write(text)
        print(f"Wrote {sum(1 for _ in iter_areas(image_map))} <area> elements to {output}")
    else:
        sys.stdout.write(text)


def import_map(html_path, output, image_path=None, width=None, height=None):
    if image_path:
        width, height = image_size(image_path)
    if not width or not height:
        raise ValueError("Canvas size unknown: pass --image or --width and --height")
    with open(html_path) as f:
        image_map = import_html(f.read(), width, height)
    save_project(image_map, output, image_path)
    print(f"Imported {len(image_map)} areas from {html_path} -> {output}")


def preview(project_path, save_path, image_path=None, style="default", handles=False):
    image_map = _load(project_path)
    img = render_preview(image_map, image_path, PREVIEW_STYLES[style], handles)
    os.makedirs(os.path.dirname(save_path) or ".", exist_ok=True)
    save_preview(img, save_path)
    print(f"Saved preview to {save_path}")


def freeze(project_path, output, index=None):
    image_map = _load(project_path)
    grids = [s for s in image_map.areas if s.is_grid]
    if index is not None:
        if not 0 <= index < len(image_map):
            raise ValueError(f"Area index {index} out of range")
        target = image_map.areas[index]
        if not target.is_grid:
            raise ValueError(f"Area {index} is not a grid")
        grids = [target]
    for grid_shape in grids:
        created = image_map.freeze(grid_shape)
        print(f"  froze {grid_shape.kind.value} grid into {len(created)} areas")
    save_project(image_map, output)
    print(f"Saved {len(image_map)} areas to {output}")


# -----------------------------------------------------------------------
# CLI
# -----------------------------------------------------------------------

def main(argv=None):
    p = argparse.ArgumentParser(description="areamap image map toolkit")
    sub = p.add_subparsers(dest="command")

    ex = sub.add_parser("export", help="Write the HTML <map> of a project")
    ex.add_argument("project")
    ex.add_argument("--name", default="map")
    ex.add_argument("--output", default=None, help="HTML file (stdout when omitted)")

    im = sub.add_parser("import", help="Build a project from an HTML <map>")
    im.add_argument("html")
    im.add_argument("--output", required=True)
    im.add_argument("--image", default=None, help="Source image, sets the canvas size")
    im.add_argument("--width", type=int, default=None)
    im.add_argument("--height", type=int, default=None)

    pv = sub.add_parser("preview", help="Render the areas over the image")
    pv.add_argument("project")
    pv.add_argument("--image", default=None)
    pv.add_argument("--style", choices=sorted(PREVIEW_STYLES), default="default")
    pv.add_argument("--handles", action="store_true", help="Draw edit handles")
    pv.add_argument("--save-path", default="outputs/preview.png")

    fr = sub.add_parser("freeze", help="Replace grids by independent areas")
    fr.add_argument("project")
    fr.add_argument("--output", required=True)
    fr.add_argument("--index", type=int, default=None,
                    help="Area index of the grid to freeze (all grids when omitted)")

    args = p.parse_args(argv)

    if args.command == "export":
        export(args.project, args.name, args.output)

    elif args.command == "import":
        import_map(args.html, args.output, args.image, args.width, args.height)

    elif args.command == "preview":
        preview(args.project, args.save_path, args.image, args.style, args.handles)

    elif args.command == "freeze":
        freeze(args.project, args.output, args.index)

    else:
        p.print_help()


if __name__ == "__main__":
    main()
