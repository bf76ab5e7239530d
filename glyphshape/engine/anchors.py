"""Anchor detector: curvature corners, stroke junctions and bounding-box extrema.

Steps run in a fixed order and always start from an empty anchor list:
    1. contour pixels (unique, in draw order)
    2. windowed turning angle per contour pixel
    3. curvature peaks -> corner / sharp_corner
    4. 3x3 ring components >= 3 -> junction (when enabled)
    5. bounding-box extrema
    6. strength-ordered spatial suppression
"""

from __future__ import annotations

import logging
import math

import numpy as np
from numpy.typing import NDArray

from glyphshape.models.character import Character
from glyphshape.models.topology import AnchorKind, AnchorPoint
from glyphshape.utils.contour import boundary_mask, gradient_angles
from glyphshape.utils.geometry import distance
from glyphshape.utils.morphology import neighborhood_components

logger = logging.getLogger(__name__)

MIN_CONTOUR_POINTS = 3
MIN_CURVATURE_WINDOW = 3
PEAK_WINDOW = 3
JUNCTION_MIN_COMPONENTS = 3
EXTREMUM_STRENGTH = 0.8


def contour_points(char: Character) -> list[tuple[int, int]]:
    """Boundary pixels in draw order.

    The sequence is not a perimeter walk: curvature is taken along the order
    the glyph was drawn in.
    """
    edge = boundary_mask(char.mask)
    return [p for p in char.pixels() if edge[p[1], p[0]]]


def contour_curvatures(points: list[tuple[int, int]], epsilon: float) -> list[float]:
    """Unsigned turning angle between the incoming and outgoing window vectors."""
    n = len(points)
    window = max(MIN_CURVATURE_WINDOW, round(1.0 / epsilon))
    window = min(window, n // 3)

    result: list[float] = []
    for i in range(n):
        p1 = points[(i - window) % n]
        p2 = points[i]
        p3 = points[(i + window) % n]

        v1x, v1y = p2[0] - p1[0], p2[1] - p1[1]
        v2x, v2y = p3[0] - p2[0], p3[1] - p2[1]
        len1 = math.hypot(v1x, v1y)
        len2 = math.hypot(v2x, v2y)
        if len1 < epsilon or len2 < epsilon:
            result.append(0.0)
            continue

        v1x, v1y = v1x / len1, v1y / len1
        v2x, v2y = v2x / len2, v2y / len2
        dot = max(-1.0, min(1.0, v1x * v2x + v1y * v2y))
        cross = v1x * v2y - v1y * v2x
        angle = math.acos(dot)
        if cross < 0:
            angle = -angle
        result.append(abs(angle))
    return result


def _is_curvature_peak(curvatures: list[float], i: int) -> bool:
    n = len(curvatures)
    for offset in range(-PEAK_WINDOW, PEAK_WINDOW + 1):
        j = (i + offset) % n
        if offset == 0 or j == i:
            continue
        if curvatures[j] >= curvatures[i]:
            return False
    return True


def curvature_anchors(
    points: list[tuple[int, int]],
    curvatures: list[float],
    threshold: float,
    angles: NDArray[np.float64],
) -> list[AnchorPoint]:
    anchors: list[AnchorPoint] = []
    for i, (x, y) in enumerate(points):
        c = curvatures[i]
        if c <= threshold or not _is_curvature_peak(curvatures, i):
            continue
        kind = AnchorKind.SHARP_CORNER if c > 2 * threshold else AnchorKind.CORNER
        anchors.append(AnchorPoint(
            x=x,
            y=y,
            kind=kind,
            strength=min(c / math.pi, 1.0),
            curvature=c,
            angle=float(angles[y, x]),
        ))
    return anchors


def junction_anchors(char: Character, angles: NDArray[np.float64]) -> list[AnchorPoint]:
    mask = char.mask
    anchors: list[AnchorPoint] = []
    for x, y in char.pixels():
        components = neighborhood_components(mask, x, y)
        if components < JUNCTION_MIN_COMPONENTS:
            continue
        anchors.append(AnchorPoint(
            x=x,
            y=y,
            kind=AnchorKind.JUNCTION,
            strength=min((components - 2) / 3.0, 1.0),
            angle=float(angles[y, x]),
        ))
    return anchors


def extremum_anchors(char: Character, angles: NDArray[np.float64]) -> list[AnchorPoint]:
    bbox = char.bounding_box()
    if bbox is None:
        return []
    min_x, min_y, max_x, max_y = bbox
    anchors: list[AnchorPoint] = []
    for x, y in char.pixels():
        angle = float(angles[y, x])
        for hit, kind in (
            (x == min_x, AnchorKind.EXTREMUM_LEFT),
            (x == max_x, AnchorKind.EXTREMUM_RIGHT),
            (y == min_y, AnchorKind.EXTREMUM_TOP),
            (y == max_y, AnchorKind.EXTREMUM_BOTTOM),
        ):
            if hit:
                anchors.append(AnchorPoint(x=x, y=y, kind=kind, strength=EXTREMUM_STRENGTH, angle=angle))
    return anchors


def suppress_anchors(anchors: list[AnchorPoint], min_distance: float) -> list[AnchorPoint]:
    """Keep strongest first; drop anchors within ``min_distance`` of a kept one."""
    ranked = sorted(anchors, key=lambda a: -a.strength)
    kept: list[AnchorPoint] = []
    for anchor in ranked:
        if all(distance(anchor.point, k.point) > min_distance for k in kept):
            kept.append(anchor)
    return kept


def detect_anchors(char: Character) -> list[AnchorPoint]:
    """Recompute the character's anchors in place and return them."""
    char.anchors = []
    if char.is_empty:
        return []

    config = char.config
    points = contour_points(char)
    if len(points) < MIN_CONTOUR_POINTS:
        return []

    angles = gradient_angles(char.mask)
    curvatures = contour_curvatures(points, config.medial_axis_epsilon)

    candidates = curvature_anchors(points, curvatures, config.curvature_threshold, angles)
    if config.enable_junction_detection:
        candidates.extend(junction_anchors(char, angles))
    candidates.extend(extremum_anchors(char, angles))

    char.anchors = suppress_anchors(candidates, config.min_anchor_distance)
    logger.debug("Anchors: %d candidates, %d kept", len(candidates), len(char.anchors))
    return char.anchors
