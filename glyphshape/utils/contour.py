"""Edge extraction, contour ordering, chain codes and discrete curvature. No engine imports."""

from __future__ import annotations

import logging
import math

import numpy as np
from numpy.typing import NDArray
from scipy import ndimage

from glyphshape.models.shape import EdgePoint

logger = logging.getLogger(__name__)

SOBEL_X = np.array([[-1, 0, 1], [-2, 0, 2], [-1, 0, 1]], dtype=np.float64)
SOBEL_Y = np.array([[-1, -2, -1], [0, 0, 0], [1, 2, 1]], dtype=np.float64)

EIGHT_NEIGHBORS = np.ones((3, 3), dtype=bool)

# (dx, dy) -> direction code, image y axis pointing down
CHAIN_DIRECTIONS: dict[tuple[int, int], int] = {
    (1, 0): 0,
    (1, -1): 1,
    (0, -1): 2,
    (-1, -1): 3,
    (-1, 0): 4,
    (-1, 1): 5,
    (0, 1): 6,
    (1, 1): 7,
}

CORNER_THRESHOLD = math.pi / 6  # radians
CORNER_WINDOW = 2

HISTOGRAM_ANGLES = (0, 45, 90, 135, 180)


def gradient_angles(mask: NDArray[np.bool_]) -> NDArray[np.float64]:
    """Per-pixel Sobel orientation atan2(Gy, Gx); out-of-range neighbours read as 0."""
    values = mask.astype(np.float64)
    gx = ndimage.correlate(values, SOBEL_X, mode="constant", cval=0.0)
    gy = ndimage.correlate(values, SOBEL_Y, mode="constant", cval=0.0)
    return np.arctan2(gy, gx)


def boundary_mask(mask: NDArray[np.bool_]) -> NDArray[np.bool_]:
    """Foreground pixels with at least one background 8-neighbour (outside counts as background)."""
    interior = ndimage.binary_erosion(mask, structure=EIGHT_NEIGHBORS, border_value=0)
    return mask & ~interior


def interior_edge_mask(mask: NDArray[np.bool_]) -> NDArray[np.bool_]:
    """Boundary pixels restricted to [1, W-2] x [1, H-2]; border rows and columns are never edges."""
    edges = np.zeros_like(mask, dtype=bool)
    if mask.shape[0] < 3 or mask.shape[1] < 3:
        return edges
    edges[1:-1, 1:-1] = boundary_mask(mask)[1:-1, 1:-1]
    return edges


def column_major_points(mask: NDArray[np.bool_]) -> NDArray[np.int64]:
    """(x, y) coordinates of set pixels, x ascending then y ascending. Shape (n, 2)."""
    xs, ys = np.nonzero(mask.T)
    return np.column_stack([xs, ys]).astype(np.int64)


def extract_edges(mask: NDArray[np.bool_]) -> list[EdgePoint]:
    """Edge points in scan order (x outer, y inner) with their gradient angles."""
    points = column_major_points(interior_edge_mask(mask))
    if len(points) == 0:
        return []
    angles = gradient_angles(mask)
    return [
        EdgePoint(int(x), int(y), float(angles[y, x]))
        for x, y in points
    ]


def nearest_neighbor_order(points: NDArray) -> NDArray[np.int64]:
    """Greedy nearest-unvisited walk from the first point. Ties go to the lowest index."""
    n = len(points)
    if n == 0:
        return np.empty(0, dtype=np.int64)
    pts = np.asarray(points, dtype=np.float64)
    visited = np.zeros(n, dtype=bool)
    order = np.empty(n, dtype=np.int64)
    current = 0
    visited[0] = True
    order[0] = 0
    for k in range(1, n):
        d2 = np.sum((pts - pts[current]) ** 2, axis=1)
        d2[visited] = np.inf
        current = int(np.argmin(d2))
        visited[current] = True
        order[k] = current
    return order


def sort_edges_for_contour(edges: list[EdgePoint]) -> list[EdgePoint]:
    if not edges:
        return []
    coords = np.array([(e.x, e.y) for e in edges])
    return [edges[i] for i in nearest_neighbor_order(coords)]


def chain_code(ordered: list[EdgePoint] | list[tuple[int, int]]) -> list[int]:
    """8-direction codes of consecutive steps. Non-unit steps fall back to 0."""
    coords = [(p.x, p.y) if isinstance(p, EdgePoint) else p for p in ordered]
    codes: list[int] = []
    for (x0, y0), (x1, y1) in zip(coords, coords[1:]):
        codes.append(CHAIN_DIRECTIONS.get((x1 - x0, y1 - y0), 0))
    return codes


def _wrap_half_turn(angle: float) -> float:
    """Wrap into (-pi, pi]."""
    if angle > math.pi:
        angle -= 2 * math.pi
    elif angle <= -math.pi:
        angle += 2 * math.pi
    return angle


def curvatures(codes: list[int]) -> list[float]:
    """Cyclic mean of incoming and outgoing turns at each chain-code index."""
    n = len(codes)
    result: list[float] = []
    for i in range(n):
        prev = codes[(i - 1) % n]
        curr = codes[i]
        nxt = codes[(i + 1) % n]
        angle1 = _wrap_half_turn((curr - prev) * math.pi / 4)
        angle2 = _wrap_half_turn((nxt - curr) * math.pi / 4)
        result.append((angle1 + angle2) / 2)
    return result


def detect_corners(curv: list[float]) -> list[int]:
    """Indices where |curvature| > pi/6 and peaks inside a cyclic +-2 window.

    A corner must beat every earlier window member and tie or beat every later
    one, so a plateau reports only its first index.
    """
    n = len(curv)
    mags = [abs(c) for c in curv]
    corners: list[int] = []
    for i in range(n):
        if mags[i] <= CORNER_THRESHOLD:
            continue
        is_peak = True
        for offset in range(-CORNER_WINDOW, CORNER_WINDOW + 1):
            if offset == 0:
                continue
            j = (i + offset) % n
            if j == i:
                continue
            if offset < 0 and mags[j] >= mags[i]:
                is_peak = False
                break
            if offset > 0 and mags[j] > mags[i]:
                is_peak = False
                break
        if is_peak:
            corners.append(i)
    return corners


def edge_angle_histogram(edges: list[EdgePoint]) -> dict[int, int]:
    """Count edge orientations within 22.5 deg of 0/45/90/135/180, folded into [0, 180)."""
    histogram = {angle: 0 for angle in HISTOGRAM_ANGLES}
    for edge in edges:
        degree = math.degrees(edge.angle)
        if degree < 0:
            degree += 180
        for target in HISTOGRAM_ANGLES:
            if (
                abs(degree - target) < 22.5
                or abs(degree - target + 180) < 22.5
                or abs(degree - target - 180) < 22.5
            ):
                histogram[target] += 1
                break
    return histogram


def log_angle_distribution(edges: list[EdgePoint]) -> None:
    if not edges or not logger.isEnabledFor(logging.DEBUG):
        return
    histogram = edge_angle_histogram(edges)
    for angle, count in histogram.items():
        if count:
            logger.debug(
                "  %3d deg: %d edges (%.1f%%)", angle, count, count * 100.0 / len(edges)
            )
