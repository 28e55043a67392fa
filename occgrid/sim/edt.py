from __future__ import annotations

import numpy as np
from scipy.ndimage import distance_transform_edt

from ..types import OccupancyGrid


def obstacle_distance_field(grid: OccupancyGrid, include_unknown: bool = False) -> np.ndarray:
    """Distance (metres) from every cell centre to the nearest obstacle cell centre.

    Args:
        grid: occupancy grid.
        include_unknown: count unknown cells as obstacles.

    Returns:
        ``[y, x]`` float64 array; zero on obstacles, ``inf`` everywhere when the
        grid has no obstacle at all.
    """
    obstacles = grid.occupied_mask()
    if include_unknown:
        obstacles = obstacles | grid.unknown_mask()
    if not obstacles.any():
        return np.full(obstacles.shape, np.inf, dtype=np.float64)
    # EDT measures distance to the nearest zero, so obstacles are the zeros.
    return distance_transform_edt(~obstacles) * float(grid.info.resolution)


__all__ = ["obstacle_distance_field"]
