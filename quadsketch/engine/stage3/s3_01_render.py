"""S3.01 — Render.

Nested text form: ``.`` dark, ``/`` mid, ``#`` light, ``( ... )`` around the
four quadrants of a split.
"""

from __future__ import annotations

from quadsketch.engine.context import SketchContext
from quadsketch.engine.registry import Phase, stage


@stage(
    id="S3.01",
    phase=Phase.RENDERING,
    dependencies=["S2.02"],
    description="Serialize the tree to its text sketch",
)
def render(ctx: SketchContext) -> None:
    ctx.sketch = ctx.tree.render()
