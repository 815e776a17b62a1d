"""Tests for the command-line interface."""

import argparse

import numpy as np
import pytest
from PIL import Image as PILImage

from pathtracer.cli import build_parser, main, parse_vector

TINY = ["-W", "8", "-H", "4", "-s", "2", "-j", "2", "--seed", "1", "--quiet"]


class TestParseVector:
    """Tests for "x,y,z" parsing."""

    def test_valid(self):
        assert parse_vector("1,-2.5,3e1") == (1.0, -2.5, 30.0)

    @pytest.mark.parametrize("text", ["1,2", "1,2,3,4", "a,b,c", ""])
    def test_invalid(self, text):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_vector(text)


class TestParser:
    """Tests for argument defaults."""

    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.scene == "field"
        assert (args.width, args.height, args.samples) == (400, 225, 50)
        assert args.camera_pos is None
        assert args.camera_fov == 20.0
        assert args.camera_aperture == 0.1
        assert args.output is None

    def test_camera_flags(self):
        args = build_parser().parse_args(["-p", "1,2,3", "-t", "0,0,-1", "-f", "45", "hollow"])
        assert args.camera_pos == (1.0, 2.0, 3.0)
        assert args.camera_target == (0.0, 0.0, -1.0)
        assert args.camera_fov == 45.0
        assert args.scene == "hollow"

    def test_scene_name_is_case_insensitive(self):
        assert build_parser().parse_args(["Hollow"]).scene == "hollow"
        assert build_parser().parse_args(["FIELD"]).scene == "field"

    def test_unknown_scene_exits(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["teapot"])


class TestMain:
    """End-to-end runs of the entry point."""

    def test_png_output(self, tmp_path):
        path = tmp_path / "hollow.png"
        assert main([*TINY, "-o", str(path), "hollow"]) == 0
        with PILImage.open(path) as image:
            assert image.size == (8, 4)

    def test_ppm_on_stdout(self, capsys):
        assert main([*TINY, "hollow"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[:3] == ["P3", "8 4", "255"]
        assert len(lines) == 3 + 8 * 4

    def test_seeded_runs_match(self, tmp_path):
        paths = [tmp_path / "a.png", tmp_path / "b.png"]
        for path in paths:
            assert main([*TINY, "-o", str(path), "hollow"]) == 0
        images = []
        for path in paths:
            with PILImage.open(path) as image:
                images.append(np.asarray(image))
        np.testing.assert_array_equal(images[0], images[1])

    def test_progress_goes_to_stderr(self, tmp_path, capsys):
        args = ["-W", "4", "-H", "2", "-s", "1", "--seed", "2", "-o", str(tmp_path / "a.ppm"), "hollow"]
        assert main(args) == 0
        captured = capsys.readouterr()
        assert "Progress:" in captured.err
        assert captured.out == ""

    def test_unsupported_output_reports_error(self, tmp_path, capsys):
        assert main([*TINY, "-o", str(tmp_path / "out.gif"), "hollow"]) == 1
        assert "Error: Unsupported image format" in capsys.readouterr().err

    def test_invalid_size_reports_error(self, capsys):
        assert main(["-W", "0", "--quiet", "hollow"]) == 1
        assert "width must be at least 1" in capsys.readouterr().err

    def test_mixed_case_scene_renders(self, tmp_path):
        path = tmp_path / "hollow.ppm"
        assert main([*TINY, "-o", str(path), "HoLLow"]) == 0
        assert path.read_text().startswith("P3\n8 4\n255\n")
