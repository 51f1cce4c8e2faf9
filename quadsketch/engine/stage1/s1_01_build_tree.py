"""S1.01 — Build Quadtree."""

from __future__ import annotations

import logging

from quadsketch.engine.context import SketchContext
from quadsketch.engine.quadtree import QuadTree
from quadsketch.engine.registry import Phase, stage

logger = logging.getLogger(__name__)


@stage(
    id="S1.01",
    phase=Phase.CONSTRUCTION,
    dependencies=["S0.01"],
    description="Build the three-category quadtree",
)
def build_tree(ctx: SketchContext) -> None:
    logger.info("Building quadtree")
    ctx.tree = QuadTree.build(ctx.square_grid, ctx.config.minimum_cell_size)
    ctx.built_size = ctx.tree.encoded_size()
