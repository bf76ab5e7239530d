"""Angle helpers. No engine imports."""

from __future__ import annotations

import math

LINE_DEGREES = (0.0, 45.0, 90.0, 135.0)


def wrap_degrees(degrees: float, period: float = 180.0) -> float:
    """Wrap into [0, period)."""
    wrapped = math.fmod(degrees, period)
    if wrapped < 0:
        wrapped += period
    if wrapped >= period:
        wrapped -= period
    return wrapped


def snap_line_degree(degrees: float) -> float:
    """Snap a line direction in [0, 180) to 0/45/90/135, reporting near-180 as 180."""
    best = 0.0
    best_diff = math.inf
    for target in LINE_DEGREES:
        for candidate in (target, target + 180.0, target - 180.0):
            diff = abs(degrees - candidate)
            if diff < best_diff:
                best_diff = diff
                best = target
    if best == 0.0 and abs(degrees - 180.0) < abs(degrees):
        return 180.0
    return best


def hough_theta_to_line_degree(theta: float) -> float:
    """Line direction in degrees from a Hough normal angle, wrapped into [0, 180)."""
    degrees = round(math.degrees(theta), 6)
    return wrap_degrees(degrees - 90.0)
