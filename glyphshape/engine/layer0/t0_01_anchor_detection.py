"""T0.01: Anchor Point Detection. ★★★

Curvature peaks along the contour, stroke junctions and bounding-box
extrema, thinned by strength-ordered spatial suppression.
Feeds the anchor-based segmentation lines in layer 1.
"""

from __future__ import annotations

from glyphshape.engine.anchors import detect_anchors
from glyphshape.engine.context import CharacterContext
from glyphshape.engine.registry import Layer, transform


@transform(
    id="T0.01",
    layer=Layer.CHARACTER_STRUCTURE,
    description="Detect corner, junction and extremum anchors",
)
def anchor_detection(ctx: CharacterContext) -> None:
    detect_anchors(ctx.character)
