"""Shape classifier: turns moments, Hough peaks and contour corners into a ShapeDescriptor.

Decision order (first match wins):
    1. circle        strong circle peak and circular Hu profile
    2. straight line strong line peak and linear Hu profile
    3. triangle      exactly 3 contour corners
       rectangle     exactly 4 contour corners and rectangular Hu profile
    4. curved line   moderate mean curvature
    5. straight line fallback
"""

from __future__ import annotations

import logging
import math

import numpy as np
from numpy.typing import NDArray

from glyphshape.models.region import BinaryRegion
from glyphshape.models.shape import EdgePoint, FillKind, HoughCandidate, ShapeDescriptor, ShapeKind
from glyphshape.utils import contour, hough
from glyphshape.utils.math_helpers import hough_theta_to_line_degree, snap_line_degree
from glyphshape.utils.moments import (
    circularity,
    compute_moments,
    ellipse_axis_ratio,
    hu_invariants,
    linearity,
    rectangularity,
)

logger = logging.getLogger(__name__)

MIN_PIXELS = 3
MIN_EDGES = 3

CIRCLE_MIN_CIRCULARITY = 0.7
LINE_MIN_LINEARITY = 0.8
RECTANGLE_MIN_RECTANGULARITY = 0.7
CURVE_MIN_MEAN = 0.1  # radians
CURVE_MAX_MEAN = 0.8
STROKE_FILL_RATIO = 0.3  # edge-like / total interior foreground


def determine_fill_type(mask: NDArray[np.bool_]) -> FillKind:
    """Stroke when more than 30% of interior foreground pixels touch background."""
    interior = np.zeros_like(mask, dtype=bool)
    if mask.shape[0] >= 3 and mask.shape[1] >= 3:
        interior[1:-1, 1:-1] = mask[1:-1, 1:-1]
    total = int(interior.sum())
    if total == 0:
        return FillKind.FILLED
    edge_like = int((interior & contour.boundary_mask(mask)).sum())
    if edge_like / total > STROKE_FILL_RATIO:
        return FillKind.STROKE
    return FillKind.FILLED


def classify_shape(
    draw_count: int,
    hu: NDArray[np.float64],
    curvatures: list[float],
    lines: list[HoughCandidate],
    circles: list[HoughCandidate],
) -> ShapeKind:
    if circles and circles[0].votes > draw_count // 3:
        if circularity(hu) > CIRCLE_MIN_CIRCULARITY:
            return ShapeKind.CIRCLE

    if lines and lines[0].votes > draw_count // 2:
        if linearity(hu) > LINE_MIN_LINEARITY:
            return ShapeKind.STRAIGHT_LINE

    corners = contour.detect_corners(curvatures)
    if len(corners) == 3:
        return ShapeKind.TRIANGLE
    if len(corners) == 4 and rectangularity(hu) > RECTANGLE_MIN_RECTANGULARITY:
        return ShapeKind.RECTANGLE

    if curvatures:
        mean_curvature = float(np.mean(np.abs(curvatures)))
        if CURVE_MIN_MEAN < mean_curvature < CURVE_MAX_MEAN:
            return ShapeKind.CURVED_LINE

    return ShapeKind.STRAIGHT_LINE


def compute_line_degree(lines: list[HoughCandidate]) -> float:
    """Snapped direction of the strongest line: 0, 45, 90, 135 or 180."""
    if not lines:
        return 0.0
    return snap_line_degree(hough_theta_to_line_degree(lines[0].theta))


def compute_curve_strength(curvatures: list[float], ordered_edges: list[EdgePoint]) -> float:
    """Signed bend strength in [-1, 1].

    Magnitude is tanh(2 * mean |k|) plus a bias for the share of positive
    turning; the sign follows the chord from the first to the last contour
    point (+1 when it heads right or up).
    """
    if not curvatures:
        return 0.0

    total = sum(abs(c) for c in curvatures)
    positive = sum(c for c in curvatures if c > 0)

    direction = 0.0
    if len(ordered_edges) >= 2:
        dx = ordered_edges[-1].x - ordered_edges[0].x
        dy = ordered_edges[-1].y - ordered_edges[0].y
        direction = 1.0 if dx > 0 or dy < 0 else -1.0

    strength = math.tanh(2.0 * total / len(curvatures))
    if total > 0:
        strength += (positive / total - 0.5) * 0.3
    strength *= direction
    return max(-1.0, min(1.0, strength))


def compute_shape_descriptor(region: BinaryRegion) -> ShapeDescriptor | None:
    """Classify one region. None when it has fewer than 3 draws or 3 edges."""
    if region.draw_count < MIN_PIXELS:
        return None

    mask = region.mask
    edges = contour.extract_edges(mask)
    if len(edges) < MIN_EDGES:
        return None

    ordered = contour.sort_edges_for_contour(edges)
    curv = contour.curvatures(contour.chain_code(ordered))

    moments = compute_moments(mask)
    hu = hu_invariants(moments)

    lines = hough.detect_lines(edges, region.width, region.height)
    circles = hough.detect_circles(edges, region.width, region.height)

    fill = determine_fill_type(mask)
    kind = classify_shape(region.draw_count, hu, curv, lines, circles)

    descriptor = ShapeDescriptor(kind=kind, fill=fill)
    if kind == ShapeKind.CIRCLE:
        descriptor = ShapeDescriptor(kind=kind, fill=fill, ellipse_ratio=ellipse_axis_ratio(moments))
    elif kind == ShapeKind.STRAIGHT_LINE:
        degree = compute_line_degree(lines)
        logger.debug("Line detected with degree: %.0f", degree)
        descriptor = ShapeDescriptor(kind=kind, fill=fill, line_degree=degree)
    elif kind == ShapeKind.CURVED_LINE:
        strength = compute_curve_strength(curv, ordered)
        logger.debug("Curve detected with strength: %.3f", strength)
        descriptor = ShapeDescriptor(kind=kind, fill=fill, curve_strength=strength)
    elif kind in (ShapeKind.TRIANGLE, ShapeKind.RECTANGLE):
        logger.debug("%s detected (%d corners)", kind.value.capitalize(), len(contour.detect_corners(curv)))

    contour.log_angle_distribution(edges)
    return descriptor
