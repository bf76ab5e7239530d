"""Raster morphology: chamfer distance, component/hole labelling, ring connectivity. No engine imports."""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray
from skimage import measure

SQRT2 = math.sqrt(2.0)

# Chamfer neighbours as (dx, dy). The scan runs x outer, y inner, so
# "earlier" means the previous column or the row above in the same column.
FORWARD_NEIGHBORS = ((-1, -1), (-1, 0), (-1, 1), (0, -1))
BACKWARD_NEIGHBORS = ((1, 1), (1, 0), (1, -1), (0, 1))

# Clockwise ring around a centre pixel as (dx, dy); bit i of a ring code is RING[i]
RING = ((-1, -1), (0, -1), (1, -1), (1, 0), (1, 1), (0, 1), (-1, 1), (-1, 0))


def chamfer_distance(mask: NDArray[np.bool_]) -> NDArray[np.float64]:
    """Two-pass chamfer approximation of the Euclidean distance to background.

    Background cells are 0, foreground starts at +inf. Neighbours outside the
    raster are ignored, so a fully drawn raster stays at +inf.
    """
    height, width = mask.shape
    dist = np.where(mask, np.inf, 0.0)

    for pass_neighbors, xs, ys in (
        (FORWARD_NEIGHBORS, range(width), range(height)),
        (BACKWARD_NEIGHBORS, range(width - 1, -1, -1), range(height - 1, -1, -1)),
    ):
        steps = [(dx, dy, SQRT2 if dx and dy else 1.0) for dx, dy in pass_neighbors]
        for x in xs:
            for y in ys:
                if not mask[y, x]:
                    continue
                best = dist[y, x]
                for dx, dy, cost in steps:
                    nx, ny = x + dx, y + dy
                    if 0 <= nx < width and 0 <= ny < height:
                        candidate = dist[ny, nx] + cost
                        if candidate < best:
                            best = candidate
                dist[y, x] = best
    return dist


def count_components(mask: NDArray[np.bool_], connectivity: int = 8) -> int:
    """Number of foreground components under 4- or 8-connectivity."""
    if not mask.any():
        return 0
    _, n = measure.label(mask, connectivity=2 if connectivity == 8 else 1, background=0, return_num=True)
    return int(n)


def count_holes(mask: NDArray[np.bool_], connectivity: int = 4) -> int:
    """Background components that never touch the raster border.

    ``connectivity`` applies to the background, normally the dual of the
    foreground connectivity.
    """
    background = ~mask
    if not background.any():
        return 0
    labels = measure.label(
        background.astype(np.uint8),
        connectivity=2 if connectivity == 8 else 1,
        background=0,
    )
    border = np.concatenate([labels[0, :], labels[-1, :], labels[:, 0], labels[:, -1]])
    touching = set(np.unique(border).tolist())
    inner = set(np.unique(labels).tolist()) - touching - {0}
    return len(inner)


def _ring_components(code: int) -> int:
    """8-connected components among the set ring cells of ``code`` (centre excluded)."""
    cells = [RING[i] for i in range(8) if code & (1 << i)]
    remaining = set(cells)
    components = 0
    while remaining:
        components += 1
        stack = [remaining.pop()]
        while stack:
            cx, cy = stack.pop()
            adjacent = [
                c for c in remaining
                if max(abs(c[0] - cx), abs(c[1] - cy)) == 1
            ]
            for c in adjacent:
                remaining.discard(c)
                stack.append(c)
    return components


RING_COMPONENTS: tuple[int, ...] = tuple(_ring_components(code) for code in range(256))


def ring_code(mask: NDArray[np.bool_], x: int, y: int) -> int:
    """Bitmask of drawn 8-neighbours of (x, y) in RING order; outside cells read as unset."""
    height, width = mask.shape
    code = 0
    for i, (dx, dy) in enumerate(RING):
        nx, ny = x + dx, y + dy
        if 0 <= nx < width and 0 <= ny < height and mask[ny, nx]:
            code |= 1 << i
    return code


def neighborhood_components(mask: NDArray[np.bool_], x: int, y: int) -> int:
    return RING_COMPONENTS[ring_code(mask, x, y)]
