"""Tests for the command line entry point."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import logging

import pytest
from PIL import Image
from seamcarve.cli import main, output_path_for

PLUS_PGM = (
    "P2\n"
    "# plus\n"
    "3 3\n"
    "9\n"
    "1 2 1 \n"
    "2 9 2 \n"
    "1 2 1 \n"
)


@pytest.fixture
def plus_file(tmp_path):
    path = tmp_path / "plus.pgm"
    path.write_text(PLUS_PGM)
    return path


class TestOutputPath:
    def test_keeps_extension(self):
        assert output_path_for("img/cat.pgm", 4, 2) == "img/cat_processed_4_2.pgm"

    def test_default_extension_by_channels(self):
        assert output_path_for("cat", 1, 0) == "cat_processed_1_0.pgm"
        assert output_path_for("cat", 1, 0, channels=3) == "cat_processed_1_0.ppm"

    def test_dotted_directory(self):
        assert output_path_for("v1.2/cat", 0, 1) == "v1.2/cat_processed_0_1.pgm"


class TestMain:
    def test_carves_and_writes(self, plus_file, tmp_path, capsys):
        assert main([str(plus_file), "1", "0"]) == 0

        out = tmp_path / "plus_processed_1_0.pgm"
        assert out.read_text() == "P2\n# plus\n2 3\n9\n2 1 \n9 2 \n2 1 \n"
        assert f"Saved: {out}" in capsys.readouterr().out

    def test_zero_seams_reproduces_input(self, plus_file, tmp_path):
        assert main([str(plus_file), "0", "0"]) == 0
        assert (tmp_path / "plus_processed_0_0.pgm").read_text() == PLUS_PGM

    def test_explicit_output(self, plus_file, tmp_path):
        out = tmp_path / "small.pgm"
        assert main([str(plus_file), "0", "1", "-o", str(out)]) == 0
        assert out.read_text() == "P2\n# plus\n3 2\n9\n2 9 2 \n1 2 1 \n"

    def test_too_many_seams(self, plus_file, tmp_path, capsys):
        assert main([str(plus_file), "3", "0"]) == 1
        err = capsys.readouterr().err
        assert "Error: requested seams (3,0) exceed dimensions (3,3)" in err
        assert not (tmp_path / "plus_processed_3_0.pgm").exists()

    def test_missing_input(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope.pgm"), "1", "1"]) == 1
        assert "Fatal:" in capsys.readouterr().err

    def test_bad_file(self, tmp_path, capsys):
        path = tmp_path / "bad.pgm"
        path.write_text("P2\n2 2\n255\n1\n")
        assert main([str(path), "1", "1"]) == 1
        assert "Fatal: Insufficient pixel data" in capsys.readouterr().err

    def test_negative_count_rejected_by_parser(self, plus_file):
        with pytest.raises(SystemExit):
            main([str(plus_file), "-1", "0"])


class TestLogging:
    def test_verbose_logs_every_seam(self, plus_file, caplog):
        caplog.set_level(logging.DEBUG)
        assert main([str(plus_file), "2", "1", "-v"]) == 0
        messages = [r.getMessage() for r in caplog.records if r.levelno == logging.DEBUG]
        assert sum(m.startswith("Removed vertical seam") for m in messages) == 3
        assert sum(m.startswith("Removed horizontal seam") for m in messages) == 1

    def test_quiet_by_default(self, plus_file, caplog):
        caplog.set_level(logging.DEBUG)
        assert main([str(plus_file), "2", "1"]) == 0
        assert not [r for r in caplog.records if r.name.startswith('seamcarve')]

    def test_output_png_from_pgm(self, plus_file, tmp_path):
        out = tmp_path / "plus.png"
        assert main([str(plus_file), "1", "0", "-o", str(out)]) == 0
        with Image.open(out) as img:
            assert img.format == 'PNG'
            assert img.size == (2, 3)
