"""quadsketch quadtree sketch engine."""

from quadsketch.engine.registry import stage, Phase, get_registry
from quadsketch.engine.context import SketchContext
from quadsketch.engine.config import SketchConfig
from quadsketch.engine.pipeline import Pipeline, create_pipeline, sketch_grid, sketch_image

__all__ = [
    "stage",
    "Phase",
    "get_registry",
    "SketchContext",
    "SketchConfig",
    "Pipeline",
    "create_pipeline",
    "sketch_grid",
    "sketch_image",
]
