"""Tests for moments, Hu invariants and moment-derived metrics."""

import numpy as np
import pytest

from glyphshape.models.shape import Moments
from glyphshape.utils.moments import (
    circularity,
    compute_moments,
    ellipse_axis_ratio,
    hu_invariants,
    linearity,
    rectangularity,
)
from tests.conftest import disk_mask, ellipse_mask, l_mask, rect_mask


def test_empty_mask_gives_zero_moments():
    m = compute_moments(np.zeros((5, 5), dtype=bool))
    assert m == Moments()
    assert m.is_empty
    assert np.all(hu_invariants(m) == 0)
    assert circularity(hu_invariants(m)) == 0.0


def test_central_moments_match_direct_sums():
    mask = l_mask()
    m = compute_moments(mask)
    ys, xs = np.nonzero(mask)
    dx = xs - xs.mean()
    dy = ys - ys.mean()
    assert m.m00 == len(xs)
    assert m.cx == pytest.approx(xs.mean())
    assert m.cy == pytest.approx(ys.mean())
    assert m.mu20 == pytest.approx(np.sum(dx**2))
    assert m.mu11 == pytest.approx(np.sum(dx * dy))
    assert m.mu02 == pytest.approx(np.sum(dy**2))
    assert m.mu30 == pytest.approx(np.sum(dx**3))
    assert m.mu21 == pytest.approx(np.sum(dx**2 * dy))
    assert m.mu12 == pytest.approx(np.sum(dx * dy**2))
    assert m.mu03 == pytest.approx(np.sum(dy**3))


def test_hu_invariants_are_translation_invariant():
    shape = l_mask()[4:24, 4:20]
    a = np.zeros((40, 40), dtype=bool)
    b = np.zeros((40, 40), dtype=bool)
    a[2:22, 3:19] = shape
    b[15:35, 20:36] = shape
    hu_a = hu_invariants(compute_moments(a))
    hu_b = hu_invariants(compute_moments(b))
    assert hu_a == pytest.approx(hu_b, rel=1e-6, abs=1e-9)


def test_disk_is_more_circular_than_elongated_ellipse():
    disk = circularity(hu_invariants(compute_moments(disk_mask(41, 10))))
    ellipse = circularity(hu_invariants(compute_moments(ellipse_mask(81, 21, 31.6, 3.16))))
    assert disk > 0.95
    assert ellipse < 0.6
    assert disk > ellipse


def test_square_is_rectangular():
    hu = hu_invariants(compute_moments(rect_mask(30, 30, 5, 5, 20, 20)))
    assert rectangularity(hu) > 0.85


def test_straight_line_is_linear():
    mask = np.zeros((21, 60), dtype=bool)
    mask[10, 10:50] = True
    assert linearity(hu_invariants(compute_moments(mask))) > 0.99


def test_ellipse_axis_ratio_of_rectangle():
    m = compute_moments(rect_mask(60, 30, 5, 5, 40, 10))
    assert ellipse_axis_ratio(m) == pytest.approx((10**2 - 1) / (40**2 - 1))


def test_ellipse_axis_ratio_square_and_degenerate():
    assert ellipse_axis_ratio(compute_moments(rect_mask(20, 20, 2, 2, 10, 10))) == pytest.approx(1.0)
    mask = np.zeros((5, 20), dtype=bool)
    mask[2, 3:15] = True
    assert ellipse_axis_ratio(compute_moments(mask)) == 1.0
