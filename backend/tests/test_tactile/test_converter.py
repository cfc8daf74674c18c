"""Tests for the builtin braille converter and the converter factory."""

from __future__ import annotations

import subprocess

import numpy as np
import pytest
from PIL import Image

from img2brl.models.failures import ConverterFailed
from img2brl.tactile.converter import (
    BuiltinConverter,
    MagickConverter,
    create_converter,
    dot_grid,
    grid_to_braille,
)
from img2brl.tactile.parser import parse_tactile


def test_grid_to_braille_single_cell():
    grid = np.zeros((4, 2), dtype=bool)
    grid[0, 0] = True  # dot 1
    grid[3, 1] = True  # dot 8
    assert grid_to_braille(grid) == [chr(0x2800 | 0x01 | 0x80)]


def test_grid_to_braille_pads_partial_cells():
    grid = np.ones((5, 3), dtype=bool)
    lines = grid_to_braille(grid)
    assert len(lines) == 2
    assert all(len(line) == 2 for line in lines)
    assert lines[0][0] == chr(0x28FF)
    # Bottom-right cell only has its top-left dot set
    assert lines[1][1] == chr(0x2801)


def test_grid_to_braille_empty():
    assert grid_to_braille(np.zeros((0, 0), dtype=bool)) == []


def test_dot_grid_dark_is_raised():
    image = Image.new("L", (2, 1))
    image.putpixel((0, 0), 0)
    image.putpixel((1, 0), 255)
    assert dot_grid(image).tolist() == [[True, False]]


def test_dot_grid_transparent_is_background():
    image = Image.new("RGBA", (1, 1), (0, 0, 0, 0))
    assert dot_grid(image).tolist() == [[False]]


def test_builtin_output_follows_protocol(sample_image):
    raw = BuiltinConverter().convert(sample_image)
    result = parse_tactile(raw)
    # 200×100 pixels, 2×4 pixels per cell
    assert result.width_cells == 100
    assert result.height_cells == 25
    lines = result.text.split("\n")
    assert lines[-1] == ""
    assert len(lines) == 26
    assert all(len(line) == 100 for line in lines[:-1])
    # The black square shows up as full cells
    assert chr(0x28FF) in result.text


def test_builtin_odd_size_rounds_up():
    raw = BuiltinConverter().convert(Image.new("RGB", (5, 5), "black"))
    result = parse_tactile(raw)
    assert (result.width_cells, result.height_cells) == (3, 2)


def test_create_converter():
    assert isinstance(create_converter("builtin"), BuiltinConverter)
    magick = create_converter("magick", magick_binary="convert", timeout=5)
    assert isinstance(magick, MagickConverter)
    assert magick.binary == "convert"
    assert isinstance(create_converter("nonsense"), BuiltinConverter)


def test_magick_missing_binary(sample_image):
    converter = MagickConverter(binary="/nonexistent/img2brl-magick")
    with pytest.raises(ConverterFailed, match="not found"):
        converter.convert(sample_image)


def test_magick_nonzero_exit(monkeypatch, sample_image):
    def fake_run(cmd, **kwargs):
        assert cmd == ["magick", "png:-", "ubrl:-"]
        assert kwargs["input"].startswith(b"\x89PNG")
        return subprocess.CompletedProcess(cmd, 1, stdout=b"", stderr=b"no decode delegate")

    monkeypatch.setattr(subprocess, "run", fake_run)
    with pytest.raises(ConverterFailed, match="no decode delegate"):
        MagickConverter().convert(sample_image)


def test_magick_returns_stdout(monkeypatch, sample_image):
    def fake_run(cmd, **kwargs):
        return subprocess.CompletedProcess(cmd, 0, stdout=b"Width: 1\nHeight: 1\n\n\xe2\xa0\x81\n", stderr=b"")

    monkeypatch.setattr(subprocess, "run", fake_run)
    assert parse_tactile(MagickConverter().convert(sample_image)).text == "⠁\n"
