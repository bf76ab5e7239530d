"""Region-level geometric records: edges, Hough candidates, moments, shape descriptors."""

from __future__ import annotations

import enum
from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class EdgePoint:
    x: int
    y: int
    # Sobel gradient orientation, radians in (-pi, pi]
    angle: float = 0.0


@dataclass(frozen=True)
class HoughCandidate:
    """One accumulator peak.

    Lines: (rho, theta, votes) with theta the normal angle in [0, pi).
    Circles reuse the triple as (radius, atan2(b, a) of the centre, votes).
    """

    rho: float
    theta: float
    votes: int


@dataclass(frozen=True)
class Moments:
    """Raw moments up to order 3, centroid and central moments."""

    m00: float = 0.0
    m10: float = 0.0
    m01: float = 0.0
    m20: float = 0.0
    m11: float = 0.0
    m02: float = 0.0
    m30: float = 0.0
    m21: float = 0.0
    m12: float = 0.0
    m03: float = 0.0
    cx: float = 0.0
    cy: float = 0.0
    mu20: float = 0.0
    mu11: float = 0.0
    mu02: float = 0.0
    mu30: float = 0.0
    mu21: float = 0.0
    mu12: float = 0.0
    mu03: float = 0.0

    @property
    def is_empty(self) -> bool:
        return self.m00 == 0

    def as_dict(self) -> dict[str, float]:
        return asdict(self)


class ShapeKind(str, enum.Enum):
    CIRCLE = "circle"
    STRAIGHT_LINE = "straight_line"
    CURVED_LINE = "curved_line"
    TRIANGLE = "triangle"
    RECTANGLE = "rectangle"


class FillKind(str, enum.Enum):
    FILLED = "filled"
    STROKE = "stroke"
    OUTLINE = "stroke"  # alias


@dataclass(frozen=True)
class ShapeDescriptor:
    """Classification verdict for one region.

    Only the payload matching ``kind`` is set: ``ellipse_ratio`` for circles,
    ``line_degree`` for straight lines, ``curve_strength`` for curves.
    """

    kind: ShapeKind
    fill: FillKind
    ellipse_ratio: float | None = None
    line_degree: float | None = None
    curve_strength: float | None = None

    @property
    def payload(self) -> float | None:
        if self.kind == ShapeKind.CIRCLE:
            return self.ellipse_ratio
        if self.kind == ShapeKind.STRAIGHT_LINE:
            return self.line_degree
        if self.kind == ShapeKind.CURVED_LINE:
            return self.curve_strength
        return None
