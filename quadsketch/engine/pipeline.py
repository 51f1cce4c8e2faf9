"""Pipeline orchestrator — runs sketch stages in phase order."""

from __future__ import annotations

import importlib
import logging
import pkgutil
import time
from pathlib import Path

import numpy as np
from numpy.typing import NDArray

from quadsketch.engine.config import SketchConfig
from quadsketch.engine.context import SketchContext
from quadsketch.engine.registry import StageRegistry, get_registry
from quadsketch.engine.simplifier import IndexStream

logger = logging.getLogger(__name__)

_STAGE_PACKAGES = ["stage0", "stage1", "stage2", "stage3"]


class Pipeline:
    """Orchestrates the sketch stages.

    Every stage failure is fatal: it is logged and re-raised so a partially
    reduced tree is never rendered.
    """

    def __init__(self, registry: StageRegistry | None = None) -> None:
        self.registry = registry or get_registry()

    def run(self, ctx: SketchContext) -> SketchContext:
        """Run every registered stage on the given context."""
        start = time.perf_counter()
        ordered = self.registry.ordered()
        logger.info("Pipeline: %d stages queued", len(ordered))

        for spec in ordered:
            t0 = time.perf_counter()
            try:
                spec.fn(ctx)
            except Exception as e:
                logger.warning("  %s FAILED: %s", spec.id, e)
                raise
            elapsed = (time.perf_counter() - t0) * 1000
            ctx.completed_stages.append(spec.id)
            ctx.timings_ms[spec.id] = round(elapsed, 1)
            logger.debug("  %s completed in %.1fms", spec.id, elapsed)

        total = (time.perf_counter() - start) * 1000
        logger.info(
            "Pipeline complete: %d stages in %.0fms, encoded size %d",
            len(ctx.completed_stages),
            total,
            ctx.encoded_size,
        )
        return ctx


def register_stages() -> None:
    """Import all stage modules so @stage decorators fire."""
    for package_suffix in _STAGE_PACKAGES:
        package_name = f"quadsketch.engine.{package_suffix}"
        package = importlib.import_module(package_name)
        for _, module_name, _ in pkgutil.iter_modules(package.__path__):
            importlib.import_module(f"{package_name}.{module_name}")


def create_pipeline() -> Pipeline:
    """Factory function for a pipeline over the global stage registry."""
    register_stages()
    return Pipeline()


def sketch_grid(
    grid: NDArray[np.uint8],
    config: SketchConfig | None = None,
    index_stream: IndexStream | None = None,
) -> SketchContext:
    """Run the full pipeline over an already-decoded brightness grid."""
    config = (config or SketchConfig()).validate()
    ctx = SketchContext(grid=grid, config=config, index_stream=index_stream)
    return create_pipeline().run(ctx)


def sketch_image(
    source: str | Path | bytes,
    config: SketchConfig | None = None,
    index_stream: IndexStream | None = None,
) -> SketchContext:
    """Decode an image file (or bytes) and run the full pipeline."""
    from quadsketch.utils.raster import load_grid

    config = (config or SketchConfig()).validate()
    return sketch_grid(load_grid(source), config, index_stream)
