"""CharacterContext: the mutable state one character carries through the transforms.

Structure results (anchors, medial axis, topology, moments) are stored on the
Character itself; decomposition and fragment analysis live on the context.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from glyphshape.engine.config import CharacterConfig
from glyphshape.models.analysis import CharacterClassification, CharacterMetrics, RegionAnalysis
from glyphshape.models.character import Character
from glyphshape.models.region import BinaryRegion
from glyphshape.models.segmentation import SegmentationLine


@dataclass
class CharacterContext:
    character: Character

    # --- Layer 1: decomposition ---
    segmentation_lines: list[SegmentationLine] = field(default_factory=list)
    # Fragments straight from the line splits, before merging
    raw_regions: list[BinaryRegion] = field(default_factory=list)
    regions: list[BinaryRegion] = field(default_factory=list)

    # --- Layer 2: fragment analysis ---
    region_analyses: list[RegionAnalysis] = field(default_factory=list)
    metrics: CharacterMetrics | None = None
    classification: CharacterClassification | None = None

    # --- Pipeline metadata ---
    completed_transforms: set[str] = field(default_factory=set)
    errors: dict[str, str] = field(default_factory=dict)
    elapsed_ms: float = 0.0

    @property
    def config(self) -> CharacterConfig:
        return self.character.config

    @property
    def is_empty(self) -> bool:
        return self.character.is_empty
