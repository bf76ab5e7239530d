"""Hough voting for lines and circles over edge points. No engine imports.

Accumulators are counted with ``numpy.unique`` over packed integer keys, so
peaks are ranked by votes descending with ties resolved by ascending key.
"""

from __future__ import annotations

import math

import numpy as np

from glyphshape.models.shape import EdgePoint, HoughCandidate

THETA_SAMPLES = 180  # 1 degree over [0, pi)
RHO_STEP = 1.0
MAX_LINES = 5

MIN_RADIUS = 5
RADIUS_STEP = 2
CIRCLE_ANGLE_SAMPLES = 36  # pi/18 over [0, 2pi)
MAX_CIRCLES = 3


def _edge_arrays(edges: list[EdgePoint]) -> tuple[np.ndarray, np.ndarray]:
    xs = np.array([e.x for e in edges], dtype=np.float64)
    ys = np.array([e.y for e in edges], dtype=np.float64)
    return xs, ys


def _rank(keys: np.ndarray, threshold: int, limit: int) -> tuple[np.ndarray, np.ndarray]:
    unique_keys, counts = np.unique(keys, return_counts=True)
    keep = counts > threshold
    unique_keys, counts = unique_keys[keep], counts[keep]
    order = np.argsort(-counts, kind="stable")[:limit]
    return unique_keys[order], counts[order]


def detect_lines(edges: list[EdgePoint], width: int, height: int) -> list[HoughCandidate]:
    """Top lines in (rho, theta) space; keeps peaks with more than len(edges)//4 votes."""
    if len(edges) < 2:
        return []

    max_rho = math.sqrt(width * width + height * height)
    theta_step = math.pi / THETA_SAMPLES
    theta_idx = np.arange(THETA_SAMPLES)
    thetas = theta_idx * theta_step

    xs, ys = _edge_arrays(edges)
    rho = np.outer(xs, np.cos(thetas)) + np.outer(ys, np.sin(thetas))
    rho_idx = np.floor((rho + max_rho) / RHO_STEP).astype(np.int64)
    keys = rho_idx * THETA_SAMPLES + theta_idx[np.newaxis, :]

    threshold = len(edges) // 4
    top_keys, votes = _rank(keys.ravel(), threshold, MAX_LINES)

    lines: list[HoughCandidate] = []
    for key, count in zip(top_keys.tolist(), votes.tolist()):
        r_idx, t_idx = divmod(key, THETA_SAMPLES)
        lines.append(HoughCandidate(
            rho=r_idx * RHO_STEP - max_rho,
            theta=t_idx * theta_step,
            votes=int(count),
        ))
    return lines


def detect_circles(edges: list[EdgePoint], width: int, height: int) -> list[HoughCandidate]:
    """Top circles; keeps peaks with more than len(edges)//10 votes.

    Each candidate is (radius, atan2(b, a) of the centre, votes).
    """
    if len(edges) < 3:
        return []

    max_radius = min(width, height) / 2.0
    radii = np.arange(MIN_RADIUS, math.floor(max_radius) + 1, RADIUS_STEP, dtype=np.float64)
    radii = radii[radii <= max_radius]
    if len(radii) == 0:
        return []

    thetas = np.arange(CIRCLE_ANGLE_SAMPLES) * (2 * math.pi / CIRCLE_ANGLE_SAMPLES)
    xs, ys = _edge_arrays(edges)

    # (edges, radii, angles)
    a = xs[:, None, None] - radii[None, :, None] * np.cos(thetas)[None, None, :]
    b = ys[:, None, None] - radii[None, :, None] * np.sin(thetas)[None, None, :]
    r_idx = np.broadcast_to(np.arange(len(radii))[None, :, None], a.shape)

    inside = (a >= 0) & (a < width) & (b >= 0) & (b < height)
    qa = np.round(a[inside]).astype(np.int64)
    qb = np.round(b[inside]).astype(np.int64)
    qr = r_idx[inside].astype(np.int64)
    if len(qa) == 0:
        return []

    keys = (qa * (height + 1) + qb) * len(radii) + qr

    threshold = len(edges) // 10
    top_keys, votes = _rank(keys, threshold, MAX_CIRCLES)

    circles: list[HoughCandidate] = []
    for key, count in zip(top_keys.tolist(), votes.tolist()):
        ab, ri = divmod(key, len(radii))
        ca, cb = divmod(ab, height + 1)
        circles.append(HoughCandidate(
            rho=float(radii[ri]),
            theta=math.atan2(cb, ca),
            votes=int(count),
        ))
    return circles
