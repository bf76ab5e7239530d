"""Character topology records: anchors, skeleton branches and the summary."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field


class AnchorKind(str, enum.Enum):
    CORNER = "corner"
    SHARP_CORNER = "sharp_corner"
    JUNCTION = "junction"
    EXTREMUM_LEFT = "extremum_left"
    EXTREMUM_RIGHT = "extremum_right"
    EXTREMUM_TOP = "extremum_top"
    EXTREMUM_BOTTOM = "extremum_bottom"

    @property
    def is_extremum(self) -> bool:
        return self.value.startswith("extremum_")

    @property
    def is_corner(self) -> bool:
        return self in (AnchorKind.CORNER, AnchorKind.SHARP_CORNER)


@dataclass(frozen=True)
class AnchorPoint:
    x: int
    y: int
    kind: AnchorKind
    strength: float  # 0..1
    curvature: float = 0.0
    angle: float = 0.0  # gradient direction, radians

    @property
    def point(self) -> tuple[int, int]:
        return (self.x, self.y)


@dataclass
class SkeletonBranch:
    """Medial-axis points of one traced group, in discovery order.

    Consecutive points are not guaranteed to be adjacent.
    """

    id: int
    points: list[tuple[int, int]] = field(default_factory=list)

    @property
    def length(self) -> float:
        total = 0.0
        for (x0, y0), (x1, y1) in zip(self.points, self.points[1:]):
            total += math.hypot(x1 - x0, y1 - y0)
        return total

    @property
    def start(self) -> tuple[int, int]:
        return self.points[0]

    @property
    def end(self) -> tuple[int, int]:
        return self.points[-1]


@dataclass(frozen=True)
class TopologySummary:
    branch_count: int = 0
    medial_axis_length: float = 0.0
    components: int = 0
    holes: int = 0

    @property
    def euler_number(self) -> int:
        return self.components - self.holes


@dataclass
class CharacterTopology:
    """Result bundle of a topology analysis."""

    anchors: list[AnchorPoint] = field(default_factory=list)
    medial_axis: list[tuple[int, int]] = field(default_factory=list)
    branches: list[SkeletonBranch] = field(default_factory=list)
    summary: TopologySummary = field(default_factory=TopologySummary)

    @property
    def is_empty(self) -> bool:
        return not self.anchors and not self.medial_axis and self.summary.components == 0
