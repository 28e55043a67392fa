"""Grid geometry: cell/index/point conversions and planar transforms."""

from .coordinates import (
    cell_center,
    cell_index,
    get_cell,
    index_cell,
    point_cell,
    point_index,
    set_cell,
    within_bounds,
)
from .transforms import identity_pose, wrap_to_pi

__all__ = [
    "cell_center",
    "cell_index",
    "get_cell",
    "index_cell",
    "point_cell",
    "point_index",
    "set_cell",
    "within_bounds",
    "identity_pose",
    "wrap_to_pi",
]
