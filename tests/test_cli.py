"""Tests for the command line entry points."""

import pytest

from areamap.cli import main
from areamap.document import ImageMap
from areamap.project import load_project, save_project
from areamap.shapes import AreaProperties, BoxCoords, Kind, Shape


@pytest.fixture
def project(tmp_path):
    image_map = ImageMap(100, 100)
    pattern = image_map.add(Shape(Kind.RECTANGLE, BoxCoords(0, 0, 10, 10)))
    image_map.add_grid(pattern, Kind.RECTANGLE, BoxCoords(0, 0, 25, 25),
                       properties=AreaProperties(href="/t/[#]"))
    path = str(tmp_path / "board.json")
    save_project(image_map, path)
    return path


class TestCommands:
    def test_export_stdout(self, project, capsys):
        main(["export", project, "--name", "board"])
        out = capsys.readouterr().out
        assert '<map name="board">' in out
        assert out.count("<area ") == 4

    def test_export_then_import(self, project, tmp_path):
        html_path = str(tmp_path / "board.html")
        main(["export", project, "--output", html_path])
        imported = str(tmp_path / "imported.json")
        main(["import", html_path, "--output", imported, "--width", "100", "--height", "100"])
        image_map, errors = load_project(imported)
        assert errors == []
        assert len(image_map) == 4
        assert image_map.areas[0].properties.href == "/t/4"

    def test_import_needs_size(self, tmp_path):
        html_path = tmp_path / "m.html"
        html_path.write_text('<area shape="rect" coords="0,0,5,5">')
        with pytest.raises(ValueError):
            main(["import", str(html_path), "--output", str(tmp_path / "o.json")])

    def test_freeze(self, project, tmp_path, capsys):
        out_path = str(tmp_path / "frozen.json")
        main(["freeze", project, "--output", out_path])
        image_map, _ = load_project(out_path)
        assert len(image_map) == 4
        assert not any(s.is_grid for s in image_map.areas)
        assert "froze rectangle grid into 3 areas" in capsys.readouterr().out

    def test_freeze_non_grid(self, project, tmp_path):
        with pytest.raises(ValueError):
            main(["freeze", project, "--output", str(tmp_path / "o.json"), "--index", "0"])

    def test_preview(self, project, tmp_path):
        save_path = str(tmp_path / "out" / "preview.png")
        main(["preview", project, "--save-path", save_path, "--handles"])
        assert (tmp_path / "out" / "preview.png").exists()

    def test_no_command(self, capsys):
        main([])
        assert "usage" in capsys.readouterr().out.lower()
