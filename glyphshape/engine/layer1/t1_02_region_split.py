"""T1.02: Region Split. ★★

Starting from one fragment holding the whole glyph, every kept line splits
every current fragment by side of line. Empty sides are discarded.
"""

from __future__ import annotations

from glyphshape.engine.context import CharacterContext
from glyphshape.engine.decomposer import split_regions
from glyphshape.engine.registry import Layer, transform
from glyphshape.models.region import BinaryRegion


@transform(
    id="T1.02",
    layer=Layer.DECOMPOSITION,
    dependencies=["T1.01"],
    description="Split the glyph along the kept segmentation lines",
)
def region_split(ctx: CharacterContext) -> None:
    char = ctx.character
    if char.is_empty:
        ctx.raw_regions = []
        return
    initial = BinaryRegion.from_points(char.width, char.height, char.pixels())
    ctx.raw_regions = split_regions(initial, ctx.segmentation_lines)
