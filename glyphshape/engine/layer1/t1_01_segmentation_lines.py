"""T1.01: Segmentation Lines. ★★★

Candidate cuts from anchors (junction reach, corner pairs, extrema to centre),
from the skeleton (branch-point rays, nearby branch ends) and, when stroke
analysis is on, from sudden stroke-width changes. Near-duplicates are dropped
and at most max_regions - 1 lines survive.
"""

from __future__ import annotations

from glyphshape.engine.context import CharacterContext
from glyphshape.engine.decomposer import segmentation_lines
from glyphshape.engine.registry import Layer, transform


@transform(
    id="T1.01",
    layer=Layer.DECOMPOSITION,
    dependencies=["T0.01", "T0.02"],
    description="Build and filter candidate segmentation lines",
)
def segmentation_lines_transform(ctx: CharacterContext) -> None:
    if ctx.is_empty:
        ctx.segmentation_lines = []
        return
    ctx.segmentation_lines = segmentation_lines(ctx.character)
