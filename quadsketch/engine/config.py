"""Sketch configuration — controls tree resolution and the size budget."""

from __future__ import annotations

from dataclasses import dataclass

from quadsketch.engine.errors import ConfigError
from quadsketch.engine.quadtree import LEAF_COST
from quadsketch.engine.simplifier import DEFAULT_BUDGET, DEFAULT_MAX_DETAIL_LOSS


@dataclass
class SketchConfig:
    """Knobs for one sketch run."""

    # Regions at or below this side length become leaves
    minimum_cell_size: int = 64

    # Ceiling for the tree's encoded size (2 units per leaf)
    encoded_size_budget: int = DEFAULT_BUDGET

    # Split siblings a single merge may destroy before giving up
    max_detail_loss: int = DEFAULT_MAX_DETAIL_LOSS

    # None = fresh entropy each run
    seed: int | None = None

    # Re-derive the leaf list after each merge instead of keeping the
    # initial snapshot
    refresh_leaves: bool = True

    def validate(self) -> SketchConfig:
        if self.minimum_cell_size < 1:
            raise ConfigError(f"invalid cell size: {self.minimum_cell_size}")
        if self.encoded_size_budget < LEAF_COST:
            raise ConfigError(
                f"invalid budget: {self.encoded_size_budget} (a single leaf costs {LEAF_COST})"
            )
        if self.max_detail_loss < 0:
            raise ConfigError(f"invalid max detail loss: {self.max_detail_loss}")
        return self
