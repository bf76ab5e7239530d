"""Leaf-node geometry helpers for pixel coordinates. No engine imports."""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray

Point = tuple[int, int]

MAX_BACKGROUND_STEPS = 50


def distance(p1: Point, p2: Point) -> float:
    return math.hypot(p1[0] - p2[0], p1[1] - p2[1])


def side_of_line(point: Point, start: Point, end: Point) -> float:
    """Cross product sign: >0 on one side, <0 on the other, 0 on the line."""
    x1, y1 = start
    x2, y2 = end
    x, y = point
    return (x2 - x1) * (y - y1) - (y2 - y1) * (x - x1)


def pixel_centroid(points: list[Point]) -> Point:
    """Integer (floored) mean of the points."""
    if not points:
        return (0, 0)
    sx = sum(p[0] for p in points)
    sy = sum(p[1] for p in points)
    return (sx // len(points), sy // len(points))


def cast_ray_to_boundary(mask: NDArray[np.bool_], start: Point, angle: float) -> Point | None:
    """Walk from ``start`` in unit steps; return the last foreground pixel before background.

    Returns None when the ray leaves the raster without meeting background.
    """
    height, width = mask.shape
    dx, dy = math.cos(angle), math.sin(angle)
    x, y = float(start[0]), float(start[1])
    for _ in range(max(width, height)):
        nx, ny = round(x + dx), round(y + dy)
        if not (0 <= nx < width and 0 <= ny < height):
            return None
        if not mask[ny, nx]:
            return (round(x), round(y))
        x += dx
        y += dy
    return None


def cast_ray_to_background(mask: NDArray[np.bool_], start: Point, angle: float) -> float:
    """Steps taken until background or the raster edge, capped at 50."""
    height, width = mask.shape
    dx, dy = math.cos(angle), math.sin(angle)
    x, y = float(start[0]), float(start[1])
    steps = 0.0
    for _ in range(MAX_BACKGROUND_STEPS):
        x += dx
        y += dy
        steps += 1.0
        nx, ny = round(x), round(y)
        if not (0 <= nx < width and 0 <= ny < height) or not mask[ny, nx]:
            return steps
    return steps
