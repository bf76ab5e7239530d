"""Transform registry: every analysis step is a standalone function registered via decorator.

Usage:
    @transform(id="T1.01", layer=Layer.DECOMPOSITION, dependencies=["T0.01", "T0.02"])
    def segmentation_lines(ctx: CharacterContext) -> None:
        ctx.segmentation_lines = build(ctx.character)

Adding a new transform = creating one file with the decorator. Nothing else changes.
"""

from __future__ import annotations

import enum
import heapq
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from glyphshape.engine.context import CharacterContext

logger = logging.getLogger(__name__)


class Layer(enum.IntEnum):
    CHARACTER_STRUCTURE = 0
    DECOMPOSITION = 1
    REGION_ANALYSIS = 2


@dataclass
class TransformSpec:
    id: str
    layer: Layer
    fn: Callable[["CharacterContext"], None]
    dependencies: list[str] = field(default_factory=list)
    tags: set[str] = field(default_factory=set)
    description: str = ""


class TransformRegistry:
    """Registry of transforms keyed by ID."""

    def __init__(self) -> None:
        self._transforms: dict[str, TransformSpec] = {}

    def register(self, spec: TransformSpec) -> None:
        if spec.id in self._transforms:
            raise ValueError(f"Duplicate transform ID: {spec.id}")
        self._transforms[spec.id] = spec
        logger.debug("Registered transform %s (%s)", spec.id, spec.layer.name)

    def get(self, transform_id: str) -> TransformSpec:
        return self._transforms[transform_id]

    def get_layer(self, layer: Layer) -> list[TransformSpec]:
        specs = [s for s in self._transforms.values() if s.layer == layer]
        return sorted(specs, key=lambda s: s.id)

    def all(self) -> list[TransformSpec]:
        return sorted(self._transforms.values(), key=lambda s: (s.layer, s.id))

    def with_tag(self, tag: str) -> set[str]:
        return {tid for tid, spec in self._transforms.items() if tag in spec.tags}

    def resolve_order(self, requested_ids: set[str] | None = None) -> list[TransformSpec]:
        """Dependency order, lowest ID first among ready transforms.

        Requested IDs pull in their transitive dependencies. None means all.
        """
        pool = self._transforms
        if requested_ids is not None:
            needed: set[str] = set()
            pending = list(requested_ids)
            while pending:
                tid = pending.pop()
                if tid in needed or tid not in pool:
                    continue
                needed.add(tid)
                pending.extend(pool[tid].dependencies)
            pool = {tid: spec for tid, spec in pool.items() if tid in needed}

        dependents: dict[str, list[str]] = {tid: [] for tid in pool}
        waiting: dict[str, int] = {}
        for tid, spec in pool.items():
            deps = [d for d in spec.dependencies if d in pool]
            waiting[tid] = len(deps)
            for dep in deps:
                dependents[dep].append(tid)

        ready = [tid for tid, n in waiting.items() if n == 0]
        heapq.heapify(ready)
        ordered: list[TransformSpec] = []
        while ready:
            tid = heapq.heappop(ready)
            ordered.append(pool[tid])
            for child in dependents[tid]:
                waiting[child] -= 1
                if waiting[child] == 0:
                    heapq.heappush(ready, child)

        if len(ordered) != len(pool):
            stuck = set(pool) - {s.id for s in ordered}
            raise ValueError(f"Circular dependency detected among: {sorted(stuck)}")

        return ordered

    @property
    def count(self) -> int:
        return len(self._transforms)


# Module-level singleton
_registry = TransformRegistry()


def get_registry() -> TransformRegistry:
    return _registry


def transform(
    *,
    id: str,
    layer: Layer,
    dependencies: list[str] | None = None,
    tags: set[str] | None = None,
    description: str = "",
):
    """Decorator to register a transform function."""

    def decorator(fn: Callable[["CharacterContext"], None]):
        _registry.register(TransformSpec(
            id=id,
            layer=layer,
            fn=fn,
            dependencies=dependencies or [],
            tags=tags or set(),
            description=description,
        ))
        return fn

    return decorator
