"""Tests for Hough line and circle voting."""

import math

import pytest
from skimage import draw

from glyphshape.models.shape import EdgePoint
from glyphshape.utils.hough import detect_circles, detect_lines


def _horizontal_edges() -> list[EdgePoint]:
    return [EdgePoint(x, 10) for x in range(10, 50)]


def test_too_few_edges():
    assert detect_lines([EdgePoint(1, 1)], 10, 10) == []
    assert detect_circles([EdgePoint(1, 1), EdgePoint(2, 2)], 30, 30) == []


def test_horizontal_line_peak():
    lines = detect_lines(_horizontal_edges(), 60, 21)
    assert lines
    assert lines[0].votes == 40
    assert lines[0].theta == pytest.approx(math.pi / 2)
    assert lines[0].rho == pytest.approx(10.0, abs=1.0)


def test_vertical_line_peak():
    edges = [EdgePoint(10, y) for y in range(10, 50)]
    lines = detect_lines(edges, 21, 60)
    assert lines[0].theta == 0.0
    assert lines[0].votes == 40


def test_lines_are_ranked_and_capped():
    lines = detect_lines(_horizontal_edges(), 60, 21)
    assert len(lines) <= 5
    votes = [line.votes for line in lines]
    assert votes == sorted(votes, reverse=True)
    assert all(v > 40 // 4 for v in votes)


def test_detection_is_deterministic():
    edges = _horizontal_edges()
    assert detect_lines(edges, 60, 21) == detect_lines(edges, 60, 21)


def test_no_radius_fits_small_raster():
    edges = [EdgePoint(1, 1), EdgePoint(2, 1), EdgePoint(3, 1)]
    assert detect_circles(edges, 8, 8) == []


def test_circle_peak_radius():
    rr, cc = draw.circle_perimeter(20, 20, 9)
    edges = [EdgePoint(int(x), int(y)) for y, x in zip(rr, cc)]
    circles = detect_circles(edges, 41, 41)
    assert 1 <= len(circles) <= 3
    assert circles[0].rho == 9.0
    assert circles[0].votes > len(edges) // 10
