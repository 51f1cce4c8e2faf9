"""Raster utilities — image decoding and power-of-two squaring.

Grids are 2-D ``uint8`` numpy arrays indexed ``[row, col]``.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path

import numpy as np
from numpy.typing import NDArray
from PIL import Image, UnidentifiedImageError

from quadsketch.engine.errors import ImageDecodeError

logger = logging.getLogger(__name__)


def next_pow2(n: int) -> int:
    """Smallest power of two >= n (n >= 1)."""
    if n <= 1:
        return 1
    return 1 << (n - 1).bit_length()


def is_pow2(n: int) -> bool:
    return n >= 1 and n & (n - 1) == 0


def load_grid(source: str | Path | bytes) -> NDArray[np.uint8]:
    """Decode an image file (path or raw bytes) to an 8-bit luminance grid."""
    name = "<bytes>" if isinstance(source, bytes) else str(source)
    try:
        fp = io.BytesIO(source) if isinstance(source, bytes) else source
        with Image.open(fp) as img:
            gray = img.convert("L")
            grid = np.asarray(gray, dtype=np.uint8)
    except (OSError, UnidentifiedImageError, ValueError) as e:
        raise ImageDecodeError(f"cannot read image {name}: {e}") from e

    if grid.ndim != 2 or grid.size == 0:
        raise ImageDecodeError(f"image {name} is empty")

    logger.info("Read %s: %dx%d", name, grid.shape[1], grid.shape[0])
    return grid


def make_square(grid: NDArray[np.uint8]) -> NDArray[np.uint8]:
    """Nearest-neighbour resample a WxH grid up to an SxS grid, S = next_pow2(max(W, H)).

    Source column ``x`` lands on target column ``x * S // W`` (rows likewise);
    every target cell takes the source cell that maps onto or just before it.
    """
    height, width = grid.shape
    size = next_pow2(max(width, height))
    if width == height == size:
        return grid

    cols = _source_indices(width, size)
    rows = _source_indices(height, size)
    square = grid[np.ix_(rows, cols)]
    logger.debug("Squared %dx%d grid to %dx%d", width, height, size, size)
    return np.ascontiguousarray(square, dtype=np.uint8)


def _source_indices(extent: int, size: int) -> NDArray[np.intp]:
    # Largest source index i with i * size // extent <= target index.
    targets = np.arange(size)
    return ((targets + 1) * extent + size - 1) // size - 1
