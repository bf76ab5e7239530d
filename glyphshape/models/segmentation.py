"""Candidate cut lines used while decomposing a character."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class LineSource(str, enum.Enum):
    ANCHOR_BASED = "anchor_based"
    MEDIAL_BASED = "medial_based"
    STROKE_BOUNDARY = "stroke_boundary"


@dataclass(frozen=True)
class SegmentationLine:
    start: tuple[int, int]
    end: tuple[int, int]
    source: LineSource
    strength: float
