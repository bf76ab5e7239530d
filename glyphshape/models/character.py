"""Character: a binary region plus the character-level analysis state."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from glyphshape.engine.config import CharacterConfig
from glyphshape.models.region import BinaryRegion
from glyphshape.models.topology import AnchorKind, AnchorPoint, SkeletonBranch, TopologySummary

if TYPE_CHECKING:
    from glyphshape.models.shape import Moments


class Character(BinaryRegion):
    """A glyph raster with bounding-box tracking and cached analysis results.

    Unlike a plain region, erasing a pixel also drops its first draw-log
    entry, so the log never resurrects an erased stroke.
    """

    def __init__(self, width: int, height: int, config: CharacterConfig | None = None) -> None:
        super().__init__(width, height)
        self.config = config or CharacterConfig()
        self._bbox: tuple[int, int, int, int] | None = None

        # Analysis results, rebuilt by the engine
        self.anchors: list[AnchorPoint] = []
        self.medial_axis: list[tuple[int, int]] = []
        self.branches: list[SkeletonBranch] = []
        self.topology: TopologySummary | None = None
        self.moments: Moments | None = None
        self.hu: NDArray[np.float64] | None = None

    @classmethod
    def from_region(cls, region: BinaryRegion, config: CharacterConfig | None = None) -> Character:
        char = cls(region.width, region.height, config)
        for x, y in region.pixels():
            char.draw(x, y)
        return char

    def draw(self, x: int, y: int) -> None:
        super().draw(x, y)
        if self._bbox is None:
            self._bbox = (x, y, x, y)
            return
        min_x, min_y, max_x, max_y = self._bbox
        self._bbox = (min(min_x, x), min(min_y, y), max(max_x, x), max(max_y, y))

    def erase(self, x: int, y: int) -> bool:
        # A repeat erase still consumes the next log entry of a pixel drawn twice
        if (x, y) in self._draws:
            self._draws.remove((x, y))
        if not super().erase(x, y):
            return False
        self._bbox = super().bounding_box()
        return True

    def bounding_box(self) -> tuple[int, int, int, int] | None:
        return self._bbox

    @property
    def bbox_width(self) -> int:
        if self._bbox is None:
            return 0
        return self._bbox[2] - self._bbox[0] + 1

    @property
    def bbox_height(self) -> int:
        if self._bbox is None:
            return 0
        return self._bbox[3] - self._bbox[1] + 1

    def anchors_by_kind(self, kind: AnchorKind) -> list[AnchorPoint]:
        return [a for a in self.anchors if a.kind == kind]

    def clear_analysis_results(self) -> None:
        self.anchors = []
        self.medial_axis = []
        self.branches = []
        self.topology = None
        self.moments = None
        self.hu = None

    def copy(self) -> Character:
        other = Character(self.width, self.height, self.config)
        other._grid = self._grid.copy()
        other._draws = list(self._draws)
        other._bbox = self._bbox
        return other
