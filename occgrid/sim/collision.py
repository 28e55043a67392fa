"""Collision grid utilities: inflate occupancy for an agent radius."""

from __future__ import annotations

import math

import numpy as np
from scipy.ndimage import binary_dilation

from ..constants import OCCUPIED_VALUE
from ..errors import InvalidArgument
from ..types import OccupancyGrid


def _disk_kernel(radius_cells: float) -> np.ndarray:
    r = int(math.floor(radius_cells + 1e-9))
    yy, xx = np.ogrid[-r : r + 1, -r : r + 1]
    mask = (xx * xx + yy * yy) <= (radius_cells * radius_cells + 1e-9)
    return mask.astype(bool)


def inflate_obstacles(grid: OccupancyGrid, radius: float, inflate_unknown: bool = False) -> OccupancyGrid:
    """Grow occupied regions by ``radius`` (world units).

    Every cell whose centre lies within ``radius`` of an occupied cell's centre
    becomes occupied; other cells keep their value. With ``inflate_unknown``,
    unknown cells are treated as obstacles too.

    Returns:
        A new grid with the same metadata; ``grid`` is left untouched.
    """
    if not (radius >= 0.0):
        raise InvalidArgument(f"inflation radius must be >= 0, got {radius}")
    radius_cells = float(radius) / grid.info.resolution
    inflated = grid.occupied_mask()
    if inflate_unknown:
        inflated = inflated | grid.unknown_mask()
    if radius_cells >= 1.0 and inflated.any():
        inflated = binary_dilation(inflated, structure=_disk_kernel(radius_cells))
    out = grid.as_array().copy()
    out[inflated] = OCCUPIED_VALUE
    return OccupancyGrid(grid.info, out.reshape(-1))


__all__ = ["inflate_obstacles"]
