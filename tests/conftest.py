"""Shared test fixtures."""

from __future__ import annotations

import io

import numpy as np
import pytest
from PIL import Image


# Grids are indexed [row, col]

ZEROS_2X2 = np.zeros((2, 2), dtype=np.uint8)

# Three dark, one light (bottom-right)
MIXED_2X2 = np.array([[0, 0], [0, 255]], dtype=np.uint8)

# TL quadrant uniform light, BL uniform dark, TR and BR mixed
PATCHY_4X4 = np.array(
    [
        [200, 200, 0, 255],
        [200, 200, 100, 0],
        [0, 0, 0, 0],
        [0, 0, 0, 255],
    ],
    dtype=np.uint8,
)


def checkerboard(size: int, cell: int = 1) -> np.ndarray:
    """Dark/light checkerboard of ``cell``-sized squares."""
    rows, cols = np.indices((size, size))
    dark = ((rows // cell) + (cols // cell)) % 2 == 0
    return np.where(dark, 0, 255).astype(np.uint8)


def random_grid(size: int, seed: int = 0) -> np.ndarray:
    return np.random.default_rng(seed).integers(0, 256, (size, size), dtype=np.uint8)


def png_bytes(grid: np.ndarray, mode: str = "L") -> bytes:
    img = Image.fromarray(grid).convert(mode)
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def zeros_2x2() -> np.ndarray:
    return ZEROS_2X2.copy()


@pytest.fixture
def mixed_2x2() -> np.ndarray:
    return MIXED_2X2.copy()


@pytest.fixture
def patchy_4x4() -> np.ndarray:
    return PATCHY_4X4.copy()


@pytest.fixture
def png_file(tmp_path):
    """Write a grid to a PNG under tmp_path and return its path."""

    def _write(grid: np.ndarray, name: str = "image.png"):
        path = tmp_path / name
        path.write_bytes(png_bytes(grid))
        return path

    return _write
