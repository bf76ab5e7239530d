"""glyphshape: binary glyph shape analysis and region decomposition."""

from glyphshape.api import (
    analysis_summary,
    analyze_character_topology,
    compute_hu_invariants,
    compute_moments,
    compute_shape_descriptor,
    comprehensive_analysis,
    decompose_character,
    decompose_characters,
)
from glyphshape.engine.config import CharacterConfig
from glyphshape.models import (
    AnchorKind,
    AnchorPoint,
    BinaryRegion,
    Character,
    CharacterTopology,
    FillKind,
    ShapeDescriptor,
    ShapeKind,
)

__version__ = "0.1.0"

__all__ = [
    "AnchorKind",
    "AnchorPoint",
    "BinaryRegion",
    "Character",
    "CharacterConfig",
    "CharacterTopology",
    "FillKind",
    "ShapeDescriptor",
    "ShapeKind",
    "analysis_summary",
    "analyze_character_topology",
    "compute_hu_invariants",
    "compute_moments",
    "compute_shape_descriptor",
    "comprehensive_analysis",
    "decompose_character",
    "decompose_characters",
]
