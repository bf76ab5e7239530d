"""Image moments, Hu invariants and moment-derived shape metrics. No engine imports."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from glyphshape.models.shape import Moments

# Empirical Hu vector of an axis-aligned rectangle
REFERENCE_RECTANGLE_HU = np.array([0.16, 0.0013, 0.0, 0.0, 0.0, 0.0, 0.0])


def compute_moments(mask: NDArray[np.bool_]) -> Moments:
    """Raw moments m_pq (p+q <= 3) by summation over foreground pixels, then central moments.

    Returns an all-zero record for an empty mask.
    """
    ys, xs = np.nonzero(mask)
    if len(xs) == 0:
        return Moments()

    x = xs.astype(np.float64)
    y = ys.astype(np.float64)

    m00 = float(len(x))
    m10 = float(np.sum(x))
    m01 = float(np.sum(y))
    m20 = float(np.sum(x * x))
    m11 = float(np.sum(x * y))
    m02 = float(np.sum(y * y))
    m30 = float(np.sum(x**3))
    m21 = float(np.sum(x * x * y))
    m12 = float(np.sum(x * y * y))
    m03 = float(np.sum(y**3))

    cx = m10 / m00
    cy = m01 / m00

    # Binomial expansion of sum((x-cx)^p (y-cy)^q)
    mu20 = m20 - cx * m10
    mu11 = m11 - cx * m01
    mu02 = m02 - cy * m01
    mu30 = m30 - 3 * cx * m20 + 2 * cx * cx * m10
    mu21 = m21 - 2 * cx * m11 - cy * m20 + 2 * cx * cx * m01
    mu12 = m12 - 2 * cy * m11 - cx * m02 + 2 * cy * cy * m10
    mu03 = m03 - 3 * cy * m02 + 2 * cy * cy * m01

    return Moments(
        m00=m00, m10=m10, m01=m01,
        m20=m20, m11=m11, m02=m02,
        m30=m30, m21=m21, m12=m12, m03=m03,
        cx=cx, cy=cy,
        mu20=mu20, mu11=mu11, mu02=mu02,
        mu30=mu30, mu21=mu21, mu12=mu12, mu03=mu03,
    )


def hu_invariants(m: Moments) -> NDArray[np.float64]:
    """Hu's seven invariants from normalized central moments eta_pq = mu_pq / m00^((p+q)/2 + 1)."""
    if m.m00 <= 0:
        return np.zeros(7)

    def eta(mu: float, order: int) -> float:
        return mu / m.m00 ** (order / 2 + 1)

    n20 = eta(m.mu20, 2)
    n11 = eta(m.mu11, 2)
    n02 = eta(m.mu02, 2)
    n30 = eta(m.mu30, 3)
    n21 = eta(m.mu21, 3)
    n12 = eta(m.mu12, 3)
    n03 = eta(m.mu03, 3)

    a = n30 + n12
    b = n21 + n03

    i1 = n20 + n02
    i2 = (n20 - n02) ** 2 + 4 * n11**2
    i3 = (n30 - 3 * n12) ** 2 + (3 * n21 - n03) ** 2
    i4 = a**2 + b**2
    i5 = (n30 - 3 * n12) * a * (a**2 - 3 * b**2) + (3 * n21 - n03) * b * (3 * a**2 - b**2)
    i6 = (n20 - n02) * (a**2 - b**2) + 4 * n11 * a * b
    i7 = (3 * n21 - n03) * a * (a**2 - 3 * b**2) - (n30 - 3 * n12) * b * (3 * a**2 - b**2)

    return np.array([i1, i2, i3, i4, i5, i6, i7], dtype=np.float64)


def circularity(hu: NDArray[np.float64]) -> float:
    """1 for a perfect disk, falling toward 0.5 for a segment."""
    if hu[0] <= 0:
        return 0.0
    return float(1.0 / (1.0 + np.sqrt(hu[1]) / hu[0]))


def linearity(hu: NDArray[np.float64]) -> float:
    """Near 1 when the higher-order invariants I3..I7 vanish."""
    return float(1.0 / (1.0 + 100.0 * np.sum(np.abs(hu[2:7]))))


def rectangularity(hu: NDArray[np.float64]) -> float:
    return float(np.exp(-10.0 * np.sum(np.abs(hu - REFERENCE_RECTANGLE_HU))))


def ellipse_axis_ratio(m: Moments) -> float:
    """min/max eigenvalue of the central-moment covariance; 1.0 when degenerate."""
    cov = np.array([[m.mu20, m.mu11], [m.mu11, m.mu02]], dtype=np.float64)
    lam = np.linalg.eigvalsh(cov)
    lo, hi = float(lam[0]), float(lam[1])
    if lo <= 0 or hi <= 0:
        return 1.0
    return lo / hi
