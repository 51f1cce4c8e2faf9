"""S0.01 — Make Square.

Nearest-neighbour resample the decoded grid up to a power-of-two square so
the quadtree can halve it evenly.
"""

from __future__ import annotations

import logging

from quadsketch.engine.context import SketchContext
from quadsketch.engine.registry import Phase, stage
from quadsketch.utils.raster import make_square

logger = logging.getLogger(__name__)


@stage(
    id="S0.01",
    phase=Phase.PREPROCESS,
    description="Resample the grid to a power-of-two square",
)
def make_square_grid(ctx: SketchContext) -> None:
    logger.info("Making matrix square")
    ctx.square_grid = make_square(ctx.grid)
