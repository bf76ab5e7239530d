"""Region decomposer: cuts a character into sub-regions along anchor/skeleton-derived lines.

The output is a partition of the character's foreground: every pixel lands
in exactly one fragment, in the order the iterative split produced them.
"""

from __future__ import annotations

import logging
import math

import numpy as np
from numpy.typing import NDArray

from glyphshape.engine.anchors import detect_anchors
from glyphshape.engine.skeleton import compute_medial_axis
from glyphshape.models.character import Character
from glyphshape.models.region import BinaryRegion
from glyphshape.models.segmentation import LineSource, SegmentationLine
from glyphshape.models.topology import AnchorKind
from glyphshape.utils.geometry import (
    Point,
    cast_ray_to_background,
    cast_ray_to_boundary,
    distance,
    pixel_centroid,
    side_of_line,
)

logger = logging.getLogger(__name__)

JUNCTION_REACH = 20.0  # pixels
CORNER_PAIR_WEIGHT = 0.8
EXTREMUM_WEIGHT = 0.6
BRANCH_POINT_MIN_NEIGHBORS = 3
BRANCH_RAY_STRENGTH = 0.7
BRANCH_LINK_STRENGTH = 0.8
BRANCH_LINK_REACH = 1.5  # x min_anchor_distance
WIDTH_CHANGE_THRESHOLD = 2.0
STROKE_BOUNDARY_STRENGTH = 0.6
LINE_OVERLAP_THRESHOLD = 3.0

RAY_ANGLES = tuple(k * math.pi / 4 for k in range(8))
WIDTH_ANGLES = (0.0, math.pi / 4, math.pi / 2, 3 * math.pi / 4)

_NEIGHBOR_OFFSETS = tuple((dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1) if dx or dy)


# --- Candidate lines --------------------------------------------------------


def anchor_lines(char: Character) -> list[SegmentationLine]:
    lines: list[SegmentationLine] = []
    anchors = char.anchors

    for junction in char.anchors_by_kind(AnchorKind.JUNCTION):
        for other in anchors:
            if other is junction:
                continue
            if distance(junction.point, other.point) <= JUNCTION_REACH:
                lines.append(SegmentationLine(
                    start=junction.point,
                    end=other.point,
                    source=LineSource.ANCHOR_BASED,
                    strength=(junction.strength + other.strength) / 2.0,
                ))

    corners = char.anchors_by_kind(AnchorKind.CORNER)
    min_gap = char.config.min_anchor_distance * 2
    for i, c1 in enumerate(corners):
        for c2 in corners[i + 1:]:
            if distance(c1.point, c2.point) > min_gap:
                lines.append(SegmentationLine(
                    start=c1.point,
                    end=c2.point,
                    source=LineSource.ANCHOR_BASED,
                    strength=(c1.strength + c2.strength) / 2.0 * CORNER_PAIR_WEIGHT,
                ))

    extrema = [a for a in anchors if a.kind.is_extremum]
    if extrema:
        center = pixel_centroid(char.pixels())
        for anchor in extrema:
            lines.append(SegmentationLine(
                start=anchor.point,
                end=center,
                source=LineSource.ANCHOR_BASED,
                strength=anchor.strength * EXTREMUM_WEIGHT,
            ))

    return lines


def _medial_neighbors(point: Point, members: set[Point]) -> list[Point]:
    x, y = point
    return [(x + dx, y + dy) for dx, dy in _NEIGHBOR_OFFSETS if (x + dx, y + dy) in members]


def medial_lines(char: Character) -> list[SegmentationLine]:
    lines: list[SegmentationLine] = []
    mask = char.mask
    members = set(char.medial_axis)

    for point in char.medial_axis:
        if len(_medial_neighbors(point, members)) < BRANCH_POINT_MIN_NEIGHBORS:
            continue
        for angle in RAY_ANGLES:
            hit = cast_ray_to_boundary(mask, point, angle)
            if hit is not None:
                lines.append(SegmentationLine(
                    start=point,
                    end=hit,
                    source=LineSource.MEDIAL_BASED,
                    strength=BRANCH_RAY_STRENGTH,
                ))

    reach = char.config.min_anchor_distance * BRANCH_LINK_REACH
    endpoints = [(b.start, b.end) for b in char.branches if b.points]
    for i, ends1 in enumerate(endpoints):
        for ends2 in endpoints[i + 1:]:
            for p1 in ends1:
                for p2 in ends2:
                    if distance(p1, p2) < reach:
                        lines.append(SegmentationLine(
                            start=p1,
                            end=p2,
                            source=LineSource.MEDIAL_BASED,
                            strength=BRANCH_LINK_STRENGTH,
                        ))

    return lines


def local_stroke_width(mask: NDArray[np.bool_], point: Point) -> float:
    """Widest of the four opposing ray pairs through ``point``."""
    return max(
        cast_ray_to_background(mask, point, angle) + cast_ray_to_background(mask, point, angle + math.pi)
        for angle in WIDTH_ANGLES
    )


def local_stroke_direction(point: Point, members: set[Point]) -> float:
    """Angle of the summed vectors to adjacent medial points; 0 when isolated."""
    neighbors = _medial_neighbors(point, members)
    if not neighbors:
        return 0.0
    sx = sum(n[0] - point[0] for n in neighbors)
    sy = sum(n[1] - point[1] for n in neighbors)
    return math.atan2(sy, sx)


def stroke_boundary_lines(char: Character) -> list[SegmentationLine]:
    mask = char.mask
    members = set(char.medial_axis)
    widths = {p: local_stroke_width(mask, p) for p in char.medial_axis}

    lines: list[SegmentationLine] = []
    for point in char.medial_axis:
        width = widths[point]
        changed = any(
            abs(width - widths[n]) > WIDTH_CHANGE_THRESHOLD
            for n in _medial_neighbors(point, members)
        )
        if not changed:
            continue
        perp = local_stroke_direction(point, members) + math.pi / 2
        b1 = cast_ray_to_boundary(mask, point, perp)
        b2 = cast_ray_to_boundary(mask, point, perp + math.pi)
        if b1 is not None and b2 is not None:
            lines.append(SegmentationLine(
                start=b1,
                end=b2,
                source=LineSource.STROKE_BOUNDARY,
                strength=STROKE_BOUNDARY_STRENGTH,
            ))
    return lines


def lines_overlap(a: SegmentationLine, b: SegmentationLine, threshold: float = LINE_OVERLAP_THRESHOLD) -> bool:
    direct = distance(a.start, b.start) + distance(a.end, b.end)
    swapped = distance(a.start, b.end) + distance(a.end, b.start)
    return min(direct, swapped) < threshold


def filter_lines(lines: list[SegmentationLine], max_regions: int) -> list[SegmentationLine]:
    """Strongest first, skipping near-duplicates; at most ``max_regions - 1`` lines."""
    limit = max_regions - 1
    kept: list[SegmentationLine] = []
    for line in sorted(lines, key=lambda s: -s.strength):
        if len(kept) >= limit:
            break
        if any(lines_overlap(line, k) for k in kept):
            continue
        kept.append(line)
    return kept


def segmentation_lines(char: Character) -> list[SegmentationLine]:
    candidates = anchor_lines(char) + medial_lines(char)
    if char.config.enable_stroke_analysis:
        candidates += stroke_boundary_lines(char)
    kept = filter_lines(candidates, char.config.max_regions)
    logger.debug("Segmentation lines: %d candidates, %d kept", len(candidates), len(kept))
    return kept


# --- Splitting and refinement ----------------------------------------------


def split_region(region: BinaryRegion, line: SegmentationLine) -> list[BinaryRegion]:
    """Split by side of ``line``; the non-negative side comes first. Empty sides vanish."""
    positive = BinaryRegion(region.width, region.height)
    negative = BinaryRegion(region.width, region.height)
    for point in region.pixels():
        target = positive if side_of_line(point, line.start, line.end) >= 0 else negative
        target.draw(*point)
    result = [r for r in (positive, negative) if not r.is_empty]
    return result or [region]


def split_regions(initial: BinaryRegion, lines: list[SegmentationLine]) -> list[BinaryRegion]:
    regions = [initial]
    for line in lines:
        regions = [part for region in regions for part in split_region(region, line)]
    return regions


def regions_adjacent(a: BinaryRegion, b: BinaryRegion) -> bool:
    """True when some pixel of ``a`` has an 8-neighbour in ``b``."""
    for x, y in a.pixels():
        for dx, dy in _NEIGHBOR_OFFSETS:
            if b.is_drawn(x + dx, y + dy):
                return True
    return False


def refine_regions(regions: list[BinaryRegion], min_size: int) -> list[BinaryRegion]:
    """Merge undersized fragments into the first adjacent accepted fragment."""
    refined: list[BinaryRegion] = []
    for region in regions:
        if region.pixel_count >= min_size:
            refined.append(region)
            continue
        target = next((other for other in refined if regions_adjacent(region, other)), None)
        if target is None:
            refined.append(region)
            continue
        for x, y in region.pixels():
            target.draw(x, y)
    return refined


def decompose(char: Character) -> list[BinaryRegion]:
    """Partition the character's foreground into fragments.

    Anchors and the medial axis are computed on demand when missing.
    """
    if char.is_empty:
        return []

    if not char.anchors:
        detect_anchors(char)
    if not char.medial_axis:
        compute_medial_axis(char)

    lines = segmentation_lines(char)
    initial = BinaryRegion.from_points(char.width, char.height, char.pixels())
    regions = refine_regions(split_regions(initial, lines), char.config.min_region_size)
    logger.debug("Decomposed into %d regions using %d lines", len(regions), len(lines))
    return regions
