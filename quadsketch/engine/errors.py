"""Exception taxonomy for the sketch engine.

Everything raised on purpose derives from ``SketchError`` so callers (CLI, API)
can turn it into a single diagnostic line.
"""

from __future__ import annotations


class SketchError(Exception):
    """Base class for all sketch failures."""


class ConfigError(SketchError, ValueError):
    """Invalid configuration (cell size, budget, tolerance)."""


class ImageDecodeError(SketchError):
    """The source image could not be decoded into a brightness grid."""


class TooComplexError(SketchError):
    """The simplifier ran out of detail-loss tolerance before fitting the budget."""

    def __init__(self, encoded_size: int, budget: int, detail_loss: int) -> None:
        self.encoded_size = encoded_size
        self.budget = budget
        self.detail_loss = detail_loss
        super().__init__(
            f"image is hopelessly complex (size {encoded_size} > budget {budget}); "
            "try a larger cell size or budget"
        )


class InvariantError(SketchError, RuntimeError):
    """A quadtree precondition was violated. Indicates a bug, never retried."""
