"""Data models for regions, characters and analysis results."""

from glyphshape.models.analysis import CharacterClassification, CharacterMetrics, RegionAnalysis
from glyphshape.models.region import BinaryRegion
from glyphshape.models.shape import EdgePoint, FillKind, HoughCandidate, Moments, ShapeDescriptor, ShapeKind
from glyphshape.models.topology import (
    AnchorKind,
    AnchorPoint,
    CharacterTopology,
    SkeletonBranch,
    TopologySummary,
)
from glyphshape.models.segmentation import LineSource, SegmentationLine
from glyphshape.models.character import Character

__all__ = [
    "AnchorKind",
    "AnchorPoint",
    "BinaryRegion",
    "Character",
    "CharacterClassification",
    "CharacterMetrics",
    "CharacterTopology",
    "EdgePoint",
    "FillKind",
    "HoughCandidate",
    "LineSource",
    "Moments",
    "RegionAnalysis",
    "SegmentationLine",
    "ShapeDescriptor",
    "ShapeKind",
    "SkeletonBranch",
    "TopologySummary",
]
