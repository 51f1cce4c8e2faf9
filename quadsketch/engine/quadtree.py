"""QuadTree — three-category brightness quadtree with in-place reduction.

Nodes live in an arena (``QuadTree.nodes``) and refer to each other by index.
A node's shape is a closed sum type:

    Leaf(category)              terminal region
    Split(children)             four child ids: TL, TR, BL, BR

The parent index is a non-owning back-reference used only to find siblings
when the simplifier merges a leaf into its parent. The only mutation ever
applied after construction is replacing a ``Split`` shape with a ``Leaf``;
the collapsed split's descendants stay in the arena but are unreachable from
the root.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from quadsketch.engine.classifier import SYMBOLS, LeafCategory, classify
from quadsketch.engine.errors import InvariantError

logger = logging.getLogger(__name__)

# Structural cost of one leaf. Splits cost nothing beyond their children.
LEAF_COST = 2

_OPEN = "("
_CLOSE = ")"


@dataclass(frozen=True)
class Leaf:
    category: LeafCategory


@dataclass(frozen=True)
class Split:
    # Ordered top-left, top-right, bottom-left, bottom-right.
    children: tuple[int, ...]


Shape = Leaf | Split


@dataclass
class Node:
    """One square region of the grid."""

    # None only while the node is being constructed
    shape: Shape | None
    size: int
    x: int
    y: int
    parent: int | None = None


@dataclass
class QuadTree:
    nodes: list[Node] = field(default_factory=list)
    minimum_cell_size: int = 64
    root: int = 0

    # ── Construction ──

    @classmethod
    def build(cls, grid: NDArray[np.uint8], minimum_cell_size: int = 64) -> QuadTree:
        """Build the tree over a square, power-of-two grid indexed ``[row, col]``.

        Regions at or below ``minimum_cell_size`` become leaves classified from
        their top-left sample only; larger regions split into four quadrants.
        """
        tree = cls(minimum_cell_size=minimum_cell_size)
        tree.root = tree._build(grid, 0, 0, int(grid.shape[0]), None)
        logger.debug(
            "Built quadtree: %d nodes over %dx%d grid (cell size %d)",
            len(tree.nodes),
            grid.shape[1],
            grid.shape[0],
            minimum_cell_size,
        )
        return tree

    def _build(
        self,
        grid: NDArray[np.uint8],
        x: int,
        y: int,
        size: int,
        parent: int | None,
    ) -> int:
        node_id = len(self.nodes)
        node = Node(shape=None, size=size, x=x, y=y, parent=parent)
        self.nodes.append(node)

        if size <= self.minimum_cell_size:
            node.shape = Leaf(classify(int(grid[y, x])))
            return node_id

        half = size // 2
        node.shape = Split(
            children=(
                self._build(grid, x, y, half, node_id),
                self._build(grid, x + half, y, half, node_id),
                self._build(grid, x, y + half, half, node_id),
                self._build(grid, x + half, y + half, half, node_id),
            )
        )
        return node_id

    # ── Access ──

    def node(self, node_id: int) -> Node:
        if not 0 <= node_id < len(self.nodes):
            raise InvariantError(f"unknown node id {node_id}")
        return self.nodes[node_id]

    def shape(self, node_id: int) -> Shape:
        shape = self.node(node_id).shape
        if shape is None:
            raise InvariantError(f"node {node_id} was never classified")
        return shape

    def children(self, node_id: int) -> tuple[int, ...]:
        shape = self.shape(node_id)
        if not isinstance(shape, Split):
            raise InvariantError(f"node {node_id} is not a split")
        if len(shape.children) != 4:
            raise InvariantError(
                f"split {node_id} has {len(shape.children)} children, expected 4"
            )
        return shape.children

    def is_leaf(self, node_id: int) -> bool:
        return isinstance(self.shape(node_id), Leaf)

    def walk(self, node_id: int | None = None) -> Iterator[int]:
        """Yield every node reachable from ``node_id`` (default root), pre-order."""
        stack = [self.root if node_id is None else node_id]
        while stack:
            current = stack.pop()
            yield current
            if not self.is_leaf(current):
                stack.extend(reversed(self.children(current)))

    def leaves(self) -> list[int]:
        """Reachable leaves that still have a parent, i.e. can be merged."""
        return [
            node_id
            for node_id in self.walk()
            if self.is_leaf(node_id) and self.nodes[node_id].parent is not None
        ]

    def leaves_under(self, node_id: int) -> list[int]:
        """Leaves of the subtree rooted at ``node_id``, pre-order."""
        return [n for n in self.walk(node_id) if self.is_leaf(n)]

    def is_orphaned(self, node_id: int) -> bool:
        """True when some ancestor has been collapsed into a leaf."""
        parent = self.node(node_id).parent
        while parent is not None:
            if self.is_leaf(parent):
                return True
            parent = self.nodes[parent].parent
        return False

    # ── Size estimate ──

    def encoded_size(self, node_id: int | None = None) -> int:
        node_id = self.root if node_id is None else node_id
        if self.is_leaf(node_id):
            return LEAF_COST
        return sum(self.encoded_size(child) for child in self.children(node_id))

    # ── Lossless reduction ──

    def merge_leaves(self, node_id: int | None = None) -> int:
        """Collapse every split whose four children are leaves of one category.

        Post-order, so merges cascade upward. Returns the number of collapses.
        """
        node_id = self.root if node_id is None else node_id
        if self.is_leaf(node_id):
            return 0

        children = self.children(node_id)
        merged = sum(self.merge_leaves(child) for child in children)

        shapes = [self.shape(child) for child in children]
        if not all(isinstance(s, Leaf) for s in shapes):
            return merged
        categories = {s.category for s in shapes}
        if len(categories) != 1:
            return merged

        self.nodes[node_id].shape = Leaf(categories.pop())
        return merged + 1

    # ── Lossy reduction ──

    def mean_category(self, node_id: int) -> LeafCategory:
        shape = self.shape(node_id)
        if isinstance(shape, Leaf):
            return shape.category
        total = sum(int(self.mean_category(child)) for child in self.children(node_id))
        mean = total // 4
        assert mean in (LeafCategory.DARK, LeafCategory.MID, LeafCategory.LIGHT)
        return LeafCategory(mean)

    def merge_with_siblings(self, leaf_id: int, maximum_detail_loss: int) -> bool:
        """Collapse ``leaf_id``'s parent into a leaf of the averaged category.

        Split siblings stand in with their mean category, but at most
        ``maximum_detail_loss`` of them may be destroyed by one merge; beyond
        that nothing is mutated and False is returned. A leaf whose ancestors
        were already collapsed is stale and also yields False.
        """
        if not self.is_leaf(leaf_id):
            raise InvariantError(f"merge_with_siblings() on non-leaf {leaf_id}")
        parent = self.nodes[leaf_id].parent
        if parent is None:
            raise InvariantError(f"merge_with_siblings() on parentless leaf {leaf_id}")
        if self.is_orphaned(leaf_id):
            return False

        values: list[int] = []
        sibling_splits = 0
        for sibling in self.children(parent):
            if self.is_leaf(sibling):
                values.append(int(self.mean_category(sibling)))
                continue
            sibling_splits += 1
            if sibling_splits > maximum_detail_loss:
                return False
            values.append(int(self.mean_category(sibling)))

        mean = sum(values) // 4
        assert mean in (LeafCategory.DARK, LeafCategory.MID, LeafCategory.LIGHT)
        self.nodes[parent].shape = Leaf(LeafCategory(mean))
        return True

    # ── Serialization ──

    def render(self, node_id: int | None = None) -> str:
        node_id = self.root if node_id is None else node_id
        shape = self.shape(node_id)
        if isinstance(shape, Leaf):
            return SYMBOLS[shape.category]
        return _OPEN + "".join(self.render(child) for child in self.children(node_id)) + _CLOSE

    def __str__(self) -> str:
        return self.render()
