"""Stochastic, budget-driven quadtree simplification.

Repeatedly picks a random leaf and collapses its parent into a single
category-averaged leaf until the tree's encoded size fits the budget. When an
iteration makes no progress the detail-loss tolerance (how many split
siblings one merge may destroy) is raised; once it exceeds the configured
maximum the image is declared too complex.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

import numpy as np

from quadsketch.engine.errors import ConfigError, TooComplexError
from quadsketch.engine.quadtree import LEAF_COST, QuadTree

logger = logging.getLogger(__name__)

DEFAULT_BUDGET = 903
DEFAULT_MAX_DETAIL_LOSS = 4

# Returns an index in [0, n).
IndexStream = Callable[[int], int]


def random_index_stream(seed: int | None = None) -> IndexStream:
    """Uniform index stream backed by a seeded numpy generator."""
    rng = np.random.default_rng(seed)

    def _next(n: int) -> int:
        return int(rng.integers(n))

    return _next


def sequence_index_stream(indices: list[int]) -> IndexStream:
    """Replay fixed indices (cycling), each wrapped into range."""
    if not indices:
        raise ConfigError("index sequence must not be empty")
    position = 0

    def _next(n: int) -> int:
        nonlocal position
        index = indices[position % len(indices)]
        position += 1
        return index % n

    return _next


@dataclass
class SimplifyReport:
    initial_size: int
    final_size: int
    iterations: int = 0
    merges: int = 0
    failed_attempts: int = 0
    detail_loss: int = 0


class StochasticSimplifier:
    """Lossy reduction of a ``QuadTree`` down to an encoded-size budget."""

    def __init__(
        self,
        budget: int = DEFAULT_BUDGET,
        index_stream: IndexStream | None = None,
        max_detail_loss: int = DEFAULT_MAX_DETAIL_LOSS,
        refresh_leaves: bool = True,
    ) -> None:
        if budget < LEAF_COST:
            raise ConfigError(f"budget must be at least {LEAF_COST}, got {budget}")
        if max_detail_loss < 0:
            raise ConfigError(f"max_detail_loss must be non-negative, got {max_detail_loss}")
        self.budget = budget
        self.index_stream = index_stream or random_index_stream()
        self.max_detail_loss = max_detail_loss
        self.refresh_leaves = refresh_leaves

    def simplify(self, tree: QuadTree) -> SimplifyReport:
        leaves = tree.leaves()
        current_size = tree.encoded_size()
        report = SimplifyReport(initial_size=current_size, final_size=current_size)
        last_size: int | None = None
        detail_loss = 0

        while leaves and current_size > self.budget:
            report.iterations += 1

            if current_size == last_size:
                detail_loss += 1
                report.detail_loss = detail_loss
                if detail_loss > self.max_detail_loss:
                    logger.warning(
                        "Simplify gave up after %d iterations at size %d (budget %d)",
                        report.iterations,
                        current_size,
                        self.budget,
                    )
                    raise TooComplexError(current_size, self.budget, detail_loss)
            last_size = current_size

            leaf = leaves[self.index_stream(len(leaves))]
            parent = tree.node(leaf).parent
            family = tree.shape(parent) if parent is not None else None
            if not tree.merge_with_siblings(leaf, detail_loss):
                report.failed_attempts += 1
                continue

            report.merges += 1
            removed = [n for child in family.children for n in tree.leaves_under(child)]
            current_size -= LEAF_COST * (len(removed) - 1)
            if self.refresh_leaves:
                _replace_run(leaves, removed, parent, tree)

        report.final_size = current_size
        logger.debug(
            "Simplify: %d -> %d in %d iterations (%d merges, tolerance %d)",
            report.initial_size,
            report.final_size,
            report.iterations,
            report.merges,
            detail_loss,
        )
        return report


def _replace_run(leaves: list[int], removed: list[int], parent: int, tree: QuadTree) -> None:
    # A subtree's leaves are contiguous in pre-order, so the collapsed parent
    # takes their place and the list stays equal to tree.leaves().
    start = leaves.index(removed[0])
    replacement = [parent] if tree.node(parent).parent is not None else []
    leaves[start:start + len(removed)] = replacement
