"""T0.03: Topology Summary. ★★ CONDITIONAL: enable_topology_analysis

Branch count, skeleton length, components, holes and the Euler number.
"""

from __future__ import annotations

from glyphshape.engine.context import CharacterContext
from glyphshape.engine.registry import Layer, transform
from glyphshape.engine.skeleton import summarize_topology


@transform(
    id="T0.03",
    layer=Layer.CHARACTER_STRUCTURE,
    dependencies=["T0.02"],
    tags={"topology"},
    description="Summarize skeleton branches, components and holes",
)
def topology_summary(ctx: CharacterContext) -> None:
    ctx.character.topology = summarize_topology(ctx.character)
