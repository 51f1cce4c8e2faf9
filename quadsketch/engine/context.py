"""SketchContext — the single mutable state object flowing through all stages."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from quadsketch.engine.config import SketchConfig
from quadsketch.engine.quadtree import QuadTree
from quadsketch.engine.simplifier import IndexStream, SimplifyReport


@dataclass
class SketchContext:
    """Shared state for one image → sketch run."""

    # Decoded brightness samples, any WxH
    grid: NDArray[np.uint8] = field(default_factory=lambda: np.zeros((1, 1), dtype=np.uint8))
    config: SketchConfig = field(default_factory=SketchConfig)
    # Overrides the seeded generator from config
    index_stream: IndexStream | None = None

    # --- Populated by stages ---
    square_grid: NDArray[np.uint8] | None = None
    tree: QuadTree | None = None
    built_size: int = 0
    merged_size: int = 0
    lossless_merges: int = 0
    simplify_report: SimplifyReport | None = None
    sketch: str = ""

    # --- Pipeline metadata ---
    completed_stages: list[str] = field(default_factory=list)
    timings_ms: dict[str, float] = field(default_factory=dict)

    @property
    def grid_size(self) -> int:
        return 0 if self.square_grid is None else int(self.square_grid.shape[0])

    @property
    def encoded_size(self) -> int:
        return 0 if self.tree is None else self.tree.encoded_size()

    @property
    def leaf_count(self) -> int:
        if self.tree is None:
            return 0
        return sum(1 for node_id in self.tree.walk() if self.tree.is_leaf(node_id))
