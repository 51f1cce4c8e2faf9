"""Tests for the command-line entry point."""

import numpy as np

from quadsketch.cli import main
from tests.conftest import MIXED_2X2, checkerboard


def test_prints_sketch(png_file, capsys):
    path = png_file(MIXED_2X2)
    assert main([str(path), "1"]) == 0
    assert capsys.readouterr().out == "(...#)\n"


def test_default_cell_size_single_leaf(png_file, capsys):
    path = png_file(np.full((20, 30), 100, dtype=np.uint8))
    assert main([str(path)]) == 0
    assert capsys.readouterr().out == "/\n"


def test_budget_and_seed(png_file, capsys):
    path = png_file(checkerboard(16, cell=2))
    assert main([str(path), "1", "--budget", "64", "--seed", "3"]) == 0
    sketch = capsys.readouterr().out.strip()
    assert 0 < len(sketch.replace("(", "").replace(")", "")) * 2 <= 64


def test_invalid_cell_size(png_file, capsys):
    path = png_file(MIXED_2X2)
    assert main([str(path), "abc"]) == 1
    assert "invalid cell size" in capsys.readouterr().err


def test_zero_cell_size(png_file, capsys):
    path = png_file(MIXED_2X2)
    assert main([str(path), "0"]) == 1
    assert "invalid cell size" in capsys.readouterr().err


def test_missing_image(tmp_path, capsys):
    assert main([str(tmp_path / "nope.png")]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "cannot read image" in captured.err


def test_legacy_snapshot_too_complex(png_file, capsys, monkeypatch):
    monkeypatch.setattr(
        "quadsketch.engine.stage2.s2_02_simplify.random_index_stream",
        lambda seed=None: (lambda n: 0),
    )
    path = png_file(checkerboard(4))
    assert main([str(path), "1", "--budget", "2", "--legacy-snapshot"]) == 1
    assert "hopelessly complex" in capsys.readouterr().err


def test_extra_argument_single_line(png_file, capsys):
    path = png_file(MIXED_2X2)
    assert main([str(path), "1", "extra"]) == 1
    err = capsys.readouterr().err
    assert err.count("\n") == 1
    assert "unrecognized arguments" in err


def test_no_arguments_single_line(capsys):
    assert main([]) == 1
    err = capsys.readouterr().err
    assert err.count("\n") == 1
    assert "image" in err
