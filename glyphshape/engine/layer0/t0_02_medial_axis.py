"""T0.02: Medial Axis / Skeleton. ★★★

Ridges of the chamfer distance field, traced into branches. Branches shorter
than the pruning threshold are dropped and the axis is rebuilt from the rest.
"""

from __future__ import annotations

from glyphshape.engine.context import CharacterContext
from glyphshape.engine.registry import Layer, transform
from glyphshape.engine.skeleton import compute_medial_axis


@transform(
    id="T0.02",
    layer=Layer.CHARACTER_STRUCTURE,
    description="Extract and prune the medial-axis skeleton",
)
def medial_axis(ctx: CharacterContext) -> None:
    compute_medial_axis(ctx.character)
