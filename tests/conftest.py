"""Shared test fixtures and glyph builders."""

from __future__ import annotations

import numpy as np
import pytest
from skimage import draw

from glyphshape.engine.config import CharacterConfig
from glyphshape.models.character import Character
from glyphshape.models.region import BinaryRegion


def rect_mask(width: int, height: int, x0: int, y0: int, w: int, h: int) -> np.ndarray:
    mask = np.zeros((height, width), dtype=bool)
    mask[y0 : y0 + h, x0 : x0 + w] = True
    return mask


def disk_mask(size: int, radius: float) -> np.ndarray:
    mask = np.zeros((size, size), dtype=bool)
    rr, cc = draw.disk((size // 2, size // 2), radius, shape=mask.shape)
    mask[rr, cc] = True
    return mask


def ellipse_mask(width: int, height: int, rx: float, ry: float) -> np.ndarray:
    mask = np.zeros((height, width), dtype=bool)
    rr, cc = draw.ellipse(height // 2, width // 2, ry, rx, shape=mask.shape)
    mask[rr, cc] = True
    return mask


def l_mask() -> np.ndarray:
    mask = np.zeros((30, 30), dtype=bool)
    mask[4:24, 4:9] = True
    mask[19:24, 4:20] = True
    return mask


def x_mask() -> np.ndarray:
    """Two one-pixel diagonals crossing at (20, 20)."""
    mask = np.zeros((41, 41), dtype=bool)
    for i in range(10, 31):
        mask[i, i] = True
        mask[40 - i, i] = True
    return mask


def ring_character(config: CharacterConfig | None = None) -> Character:
    """Filled disk with a 4x4 square erased from its middle."""
    char = Character.from_region(BinaryRegion.from_array(disk_mask(31, 12)), config)
    for x in range(14, 18):
        for y in range(14, 18):
            char.erase(x, y)
    return char


def two_blobs_mask() -> np.ndarray:
    mask = np.zeros((30, 40), dtype=bool)
    mask[5:15, 3:13] = True
    mask[12:25, 22:35] = True
    return mask


def character_from(mask: np.ndarray, config: CharacterConfig | None = None) -> Character:
    return Character.from_region(BinaryRegion.from_array(mask), config)


def pixel_set(region: BinaryRegion) -> set[tuple[int, int]]:
    return set(region.pixels())


@pytest.fixture
def square_region() -> BinaryRegion:
    return BinaryRegion.from_array(rect_mask(30, 30, 5, 5, 20, 20))


@pytest.fixture
def horizontal_line_region() -> BinaryRegion:
    return BinaryRegion.from_points(60, 21, [(x, 10) for x in range(10, 50)])


@pytest.fixture
def diagonal_line_region() -> BinaryRegion:
    return BinaryRegion.from_points(50, 50, [(i, i) for i in range(5, 45)])


@pytest.fixture
def bar_character() -> Character:
    """Horizontal 30x10 bar in a 40x20 raster."""
    return character_from(rect_mask(40, 20, 5, 5, 30, 10))


@pytest.fixture
def x_character() -> Character:
    return character_from(x_mask())
