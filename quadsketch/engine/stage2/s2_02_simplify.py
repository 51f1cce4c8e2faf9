"""S2.02 — Simplify.

Lossy: randomly merge leaves into their parents until the encoded size fits
the budget, or fail with TooComplexError.
"""

from __future__ import annotations

import logging

from quadsketch.engine.context import SketchContext
from quadsketch.engine.registry import Phase, stage
from quadsketch.engine.simplifier import StochasticSimplifier, random_index_stream

logger = logging.getLogger(__name__)


@stage(
    id="S2.02",
    phase=Phase.REDUCTION,
    dependencies=["S2.01"],
    description="Trade detail for size until the budget fits",
)
def simplify(ctx: SketchContext) -> None:
    logger.info("Simplifying")
    config = ctx.config
    simplifier = StochasticSimplifier(
        budget=config.encoded_size_budget,
        index_stream=ctx.index_stream or random_index_stream(config.seed),
        max_detail_loss=config.max_detail_loss,
        refresh_leaves=config.refresh_leaves,
    )
    ctx.simplify_report = simplifier.simplify(ctx.tree)
    logger.info(
        "Simplified: %d merges, size %d (budget %d)",
        ctx.simplify_report.merges,
        ctx.simplify_report.final_size,
        config.encoded_size_budget,
    )
