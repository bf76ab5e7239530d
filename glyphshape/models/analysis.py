"""Per-fragment and character-level analysis records."""

from __future__ import annotations

from dataclasses import dataclass, field

from glyphshape.models.shape import Moments, ShapeDescriptor


@dataclass
class RegionAnalysis:
    """Moment metrics and classification of one decomposed fragment."""

    index: int
    pixel_count: int
    moments: Moments
    hu: list[float]
    circularity: float
    linearity: float
    rectangularity: float
    ellipse_ratio: float
    descriptor: ShapeDescriptor | None = None


@dataclass
class CharacterMetrics:
    average_circularity: float = 0.0
    average_linearity: float = 0.0
    average_rectangularity: float = 0.0
    total_area: float = 0.0
    region_count: int = 0
    # shape kind value -> fragment count
    shape_distribution: dict[str, int] = field(default_factory=dict)
    anchor_density: float = 0.0
    medial_axis_complexity: float = 0.0
    skeleton_branch_count: int = 0


@dataclass
class CharacterClassification:
    is_circular: bool = False
    is_linear: bool = False
    is_rectangular: bool = False
    complexity_level: str = "simple"  # simple | moderate | complex
    topology_type: str | None = None  # solid | single_hole | multiple_holes | disconnected
    has_multiple_junctions: bool = False
    has_many_corners: bool = False
    significant_anchors: int = 0
