"""Tests for chamfer distance, component and hole counting, ring connectivity."""

import math

import numpy as np

from glyphshape.utils.morphology import (
    RING_COMPONENTS,
    chamfer_distance,
    count_components,
    count_holes,
    neighborhood_components,
    ring_code,
)
from tests.conftest import disk_mask, rect_mask


def test_chamfer_background_is_zero_and_foreground_positive():
    mask = disk_mask(31, 10)
    dist = chamfer_distance(mask)
    assert np.all(dist[~mask] == 0)
    assert np.all(dist[mask] >= 1.0)


def test_chamfer_square_centre():
    dist = chamfer_distance(rect_mask(15, 15, 3, 3, 9, 9))
    assert dist[7, 7] == 5.0
    assert dist[3, 3] == 1.0
    assert dist[4, 4] == 2.0


def test_chamfer_isolated_pixel():
    mask = np.zeros((5, 5), dtype=bool)
    mask[2, 2] = True
    assert chamfer_distance(mask)[2, 2] == 1.0


def test_chamfer_full_raster_has_no_background():
    dist = chamfer_distance(np.ones((4, 4), dtype=bool))
    assert np.all(np.isinf(dist))


def test_chamfer_diagonal_step():
    mask = np.ones((5, 5), dtype=bool)
    mask[0, 0] = False
    dist = chamfer_distance(mask)
    assert dist[1, 1] == math.sqrt(2.0)
    assert dist[0, 1] == 1.0


def test_components_respect_connectivity():
    mask = np.zeros((10, 10), dtype=bool)
    mask[2:5, 2:5] = True
    mask[5:8, 5:8] = True
    assert count_components(mask, 8) == 1
    assert count_components(mask, 4) == 2
    assert count_components(np.zeros((3, 3), dtype=bool)) == 0


def test_hole_count():
    mask = rect_mask(12, 12, 2, 2, 8, 8)
    assert count_holes(mask) == 0
    mask[5:7, 5:7] = False
    assert count_holes(mask) == 1
    mask[3, 3] = False
    assert count_holes(mask) == 2


def test_background_touching_border_is_not_a_hole():
    mask = rect_mask(12, 12, 2, 2, 8, 8)
    mask[5:7, 2:7] = False
    assert count_holes(mask) == 0


def test_hole_connectivity_dual():
    # diagonal gap in the wall: 8-connected background escapes, 4-connected does not
    mask = np.zeros((7, 7), dtype=bool)
    mask[1:6, 1:6] = True
    mask[2:5, 2:5] = False
    mask[1, 1] = False
    assert count_holes(mask, 4) == 1
    assert count_holes(mask, 8) == 0


def test_ring_components_table():
    assert len(RING_COMPONENTS) == 256
    assert RING_COMPONENTS[0] == 0
    assert RING_COMPONENTS[0xFF] == 1
    # four diagonal cells: bits 0, 2, 4, 6
    assert RING_COMPONENTS[0b01010101] == 4
    # four orthogonal cells chain through their corners
    assert RING_COMPONENTS[0b10101010] == 1
    # opposite sides
    assert RING_COMPONENTS[(1 << 1) | (1 << 5)] == 2


def test_ring_code_outside_reads_unset():
    mask = np.ones((3, 3), dtype=bool)
    assert ring_code(mask, 1, 1) == 0xFF
    assert ring_code(mask, 0, 0) == (1 << 3) | (1 << 4) | (1 << 5)
    assert neighborhood_components(mask, 0, 0) == 1
