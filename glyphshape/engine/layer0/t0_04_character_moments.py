"""T0.04: Character Moments. ★

Raw and central moments of the whole glyph plus its Hu fingerprint.
"""

from __future__ import annotations

from glyphshape.engine.context import CharacterContext
from glyphshape.engine.registry import Layer, transform
from glyphshape.utils.moments import compute_moments, hu_invariants


@transform(
    id="T0.04",
    layer=Layer.CHARACTER_STRUCTURE,
    description="Compute whole-character image moments and Hu invariants",
)
def character_moments(ctx: CharacterContext) -> None:
    char = ctx.character
    char.moments = compute_moments(char.mask)
    char.hu = hu_invariants(char.moments)
