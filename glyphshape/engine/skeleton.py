"""Skeleton engine: chamfer distance ridges, branch tracing, pruning and topology counts."""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray
from scipy import ndimage

from glyphshape.models.character import Character
from glyphshape.models.topology import SkeletonBranch, TopologySummary
from glyphshape.utils.morphology import chamfer_distance, count_components, count_holes

logger = logging.getLogger(__name__)

RIDGE_TOLERANCE = 0.9  # fraction of the strongest neighbour a ridge must reach

_RING_FOOTPRINT = np.ones((3, 3), dtype=bool)
_RING_FOOTPRINT[1, 1] = False


def extract_medial_points(
    mask: NDArray[np.bool_],
    dist: NDArray[np.float64],
    epsilon: float,
) -> list[tuple[int, int]]:
    """Interior ridge pixels of the distance field, x outer then y inner.

    A ridge pixel exceeds ``epsilon``, is not beaten by any 8-neighbour and
    reaches 90% of its strongest neighbour.
    """
    height, width = mask.shape
    if height < 3 or width < 3:
        return []

    neighbor_max = ndimage.maximum_filter(dist, footprint=_RING_FOOTPRINT, mode="constant", cval=0.0)
    ridge = (
        mask
        & (dist > epsilon)
        & (dist >= neighbor_max)
        & (dist >= RIDGE_TOLERANCE * neighbor_max)
    )
    ridge[0, :] = False
    ridge[-1, :] = False
    ridge[:, 0] = False
    ridge[:, -1] = False

    xs, ys = np.nonzero(ridge.T)
    return list(zip(xs.tolist(), ys.tolist()))


def trace_branches(medial_points: list[tuple[int, int]]) -> list[SkeletonBranch]:
    """Depth-first grouping of 8-adjacent medial points, one branch per group."""
    members = set(medial_points)
    visited: set[tuple[int, int]] = set()
    branches: list[SkeletonBranch] = []

    for start in medial_points:
        if start in visited:
            continue
        points: list[tuple[int, int]] = []
        stack = [start]
        while stack:
            current = stack.pop()
            if current in visited:
                continue
            visited.add(current)
            points.append(current)
            cx, cy = current
            for dx in (-1, 0, 1):
                for dy in (-1, 0, 1):
                    if dx == 0 and dy == 0:
                        continue
                    neighbor = (cx + dx, cy + dy)
                    if neighbor in members and neighbor not in visited:
                        stack.append(neighbor)
        branches.append(SkeletonBranch(id=len(branches), points=points))

    return branches


def prune_branches(branches: list[SkeletonBranch], min_length: float) -> list[SkeletonBranch]:
    return [b for b in branches if b.length >= min_length]


def compute_medial_axis(char: Character) -> list[SkeletonBranch]:
    """Rebuild the character's medial axis and branches from scratch."""
    char.medial_axis = []
    char.branches = []
    if char.is_empty:
        return []

    mask = char.mask
    dist = chamfer_distance(mask)
    medial = extract_medial_points(mask, dist, char.config.medial_axis_epsilon)
    traced = trace_branches(medial)
    kept = prune_branches(traced, char.config.skeleton_pruning_threshold)

    char.branches = kept
    char.medial_axis = [p for branch in kept for p in branch.points]
    logger.debug(
        "Medial axis: %d ridge points, %d/%d branches kept",
        len(medial),
        len(kept),
        len(traced),
    )
    return kept


def summarize_topology(char: Character) -> TopologySummary:
    """Branch and component counts. Holes use the connectivity dual to the foreground's."""
    if char.is_empty:
        return TopologySummary()

    fg = char.config.foreground_connectivity
    bg = 4 if fg == 8 else 8
    mask = char.mask
    return TopologySummary(
        branch_count=len(char.branches),
        medial_axis_length=float(sum(b.length for b in char.branches)),
        components=count_components(mask, fg),
        holes=count_holes(mask, bg),
    )
