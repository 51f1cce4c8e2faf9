"""S2.01 — Merge Leaves.

Lossless: collapse every split whose four children already agree.
"""

from __future__ import annotations

import logging

from quadsketch.engine.context import SketchContext
from quadsketch.engine.registry import Phase, stage

logger = logging.getLogger(__name__)


@stage(
    id="S2.01",
    phase=Phase.REDUCTION,
    dependencies=["S1.01"],
    description="Collapse homogeneous splits",
)
def merge_leaves(ctx: SketchContext) -> None:
    logger.info("Merging leaves")
    ctx.lossless_merges = ctx.tree.merge_leaves()
    ctx.merged_size = ctx.tree.encoded_size()
    logger.info(
        "Merged %d splits: size %d -> %d",
        ctx.lossless_merges,
        ctx.built_size,
        ctx.merged_size,
    )
