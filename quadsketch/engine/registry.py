"""Stage registry — each sketch step is a function registered via decorator.

Usage:
    @stage(id="S2.01", phase=Phase.REDUCTION, dependencies=["S1.01"])
    def merge_leaves(ctx: SketchContext) -> None:
        ctx.lossless_merges = ctx.tree.merge_leaves()

Stages run by phase, then by ID within a phase. A dependency is a promise
that another stage has already filled in part of the context, so it must
sort before its dependant; the registry refuses any other arrangement
instead of reordering around it.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from quadsketch.engine.context import SketchContext

logger = logging.getLogger(__name__)


class Phase(enum.IntEnum):
    PREPROCESS = 0
    CONSTRUCTION = 1
    REDUCTION = 2
    RENDERING = 3


@dataclass
class StageSpec:
    id: str
    phase: Phase
    fn: Callable[["SketchContext"], None]
    dependencies: list[str] = field(default_factory=list)
    description: str = ""


class StageRegistry:
    def __init__(self) -> None:
        self._stages: dict[str, StageSpec] = {}

    def register(self, spec: StageSpec) -> None:
        if spec.id in self._stages:
            raise ValueError(f"Duplicate stage ID: {spec.id}")
        self._stages[spec.id] = spec
        logger.debug("Registered stage %s (%s)", spec.id, spec.phase.name)

    def ordered(self) -> list[StageSpec]:
        """Stages in run order; raises ValueError if a dependency would run late or not at all."""
        ordered = sorted(self._stages.values(), key=lambda s: (s.phase, s.id))
        done: set[str] = set()
        for spec in ordered:
            late = [dep for dep in spec.dependencies if dep not in done]
            if late:
                raise ValueError(f"Stage {spec.id} needs {late} to run before it")
            done.add(spec.id)
        return ordered

    @property
    def count(self) -> int:
        return len(self._stages)


# Module-level singleton
_registry = StageRegistry()


def get_registry() -> StageRegistry:
    return _registry


def stage(
    *,
    id: str,
    phase: Phase,
    dependencies: list[str] | None = None,
    description: str = "",
):
    """Decorator to register a stage function."""

    def decorator(fn: Callable[["SketchContext"], None]):
        _registry.register(
            StageSpec(
                id=id,
                phase=phase,
                fn=fn,
                dependencies=dependencies or [],
                description=description,
            )
        )
        return fn

    return decorator
