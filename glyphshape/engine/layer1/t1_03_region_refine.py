"""T1.03: Region Refine. ★

Fragments under min_region_size fold into the first touching fragment that
was already accepted; isolated small fragments stay as they are.
"""

from __future__ import annotations

from glyphshape.engine.context import CharacterContext
from glyphshape.engine.decomposer import refine_regions
from glyphshape.engine.registry import Layer, transform


@transform(
    id="T1.03",
    layer=Layer.DECOMPOSITION,
    dependencies=["T1.02"],
    description="Merge undersized fragments into adjacent ones",
)
def region_refine(ctx: CharacterContext) -> None:
    copies = [r.copy() for r in ctx.raw_regions]
    ctx.regions = refine_regions(copies, ctx.config.min_region_size)
