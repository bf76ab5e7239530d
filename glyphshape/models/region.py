"""Binary raster region: the pixel store every analysis reads from.

Membership lives in a flat bool grid indexed ``[y, x]``. Draw operations are
also appended to an ordered log; erase only flips membership, so the log can
hold stale and duplicate entries.
"""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np
from numpy.typing import NDArray


class BinaryRegion:
    """Fixed-size binary mask with an insertion-ordered draw log."""

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Region dimensions must be positive, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self._grid = np.zeros((self.height, self.width), dtype=bool)
        self._draws: list[tuple[int, int]] = []

    @classmethod
    def from_array(cls, mask: NDArray) -> BinaryRegion:
        """Build a region from a 2-D array; nonzero cells become foreground.

        Pixels are logged in column-major order (x outer, y inner).
        """
        grid = np.asarray(mask).astype(bool)
        if grid.ndim != 2:
            raise ValueError(f"Expected a 2-D mask, got shape {grid.shape}")
        height, width = grid.shape
        region = cls(width, height)
        xs, ys = np.nonzero(grid.T)
        for x, y in zip(xs.tolist(), ys.tolist()):
            region.draw(x, y)
        return region

    @classmethod
    def from_points(cls, width: int, height: int, points: Iterable[tuple[int, int]]) -> BinaryRegion:
        region = cls(width, height)
        for x, y in points:
            region.draw(x, y)
        return region

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def draw(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} region")
        self._grid[y, x] = True
        self._draws.append((int(x), int(y)))

    def erase(self, x: int, y: int) -> bool:
        """Clear membership of a pixel. Returns False when it was not drawn."""
        if not self.in_bounds(x, y) or not self._grid[y, x]:
            return False
        self._grid[y, x] = False
        return True

    def is_drawn(self, x: int, y: int) -> bool:
        if not self.in_bounds(x, y):
            return False
        return bool(self._grid[y, x])

    @property
    def mask(self) -> NDArray[np.bool_]:
        """Read-only view of the membership grid, shape (height, width)."""
        view = self._grid.view()
        view.flags.writeable = False
        return view

    def to_array(self) -> NDArray[np.bool_]:
        return self._grid.copy()

    @property
    def draw_log(self) -> list[tuple[int, int]]:
        return list(self._draws)

    @property
    def draw_count(self) -> int:
        """Length of the draw log, duplicates and stale entries included."""
        return len(self._draws)

    @property
    def pixel_count(self) -> int:
        return int(self._grid.sum())

    @property
    def is_empty(self) -> bool:
        return not self._grid.any()

    def pixels(self) -> list[tuple[int, int]]:
        """Unique foreground pixels in first-draw order."""
        seen: set[tuple[int, int]] = set()
        result: list[tuple[int, int]] = []
        for p in self._draws:
            if p in seen or not self._grid[p[1], p[0]]:
                continue
            seen.add(p)
            result.append(p)
        return result

    def bounding_box(self) -> tuple[int, int, int, int] | None:
        """(min_x, min_y, max_x, max_y) of the foreground, None when empty."""
        ys, xs = np.nonzero(self._grid)
        if len(xs) == 0:
            return None
        return (int(xs.min()), int(ys.min()), int(xs.max()), int(ys.max()))

    def copy(self) -> BinaryRegion:
        other = BinaryRegion(self.width, self.height)
        other._grid = self._grid.copy()
        other._draws = list(self._draws)
        return other

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.width}x{self.height}, pixels={self.pixel_count})"
