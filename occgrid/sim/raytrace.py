"""Ray traversal over occupancy grids using DDA (Amanatides & Woo).

Design decisions:
- Walks run in the grid frame in cell units; distances are reported in world units.
- A cell boundary belongs to the cell with the larger index (floor convention).
- Direction components below DIRECTION_EPS are treated as exactly zero, so an
  axis-aligned ray stays in its row or column.
- Corner crossings (both boundary distances equal within BOUNDARY_TIE_EPS)
  visit the x-side cell, then the y-side cell, then the diagonal cell, all at
  the same distance. Rays cannot slip between diagonally touching obstacles.
"""

from __future__ import annotations

from math import atan2, cos, floor, hypot, inf, sin
from typing import Iterator, Optional, Tuple

from ..constants import BOUNDARY_TIE_EPS, DIRECTION_EPS, OCCUPIED_VALUE, UNKNOWN_VALUE
from ..errors import InvalidArgument
from ..geometry.coordinates import cell_index, within_bounds
from ..geometry.transforms import bearing_in_frame, world_to_frame
from ..types import Cell, GridMetadata, OccupancyGrid, Point


def _walk(gx: float, gy: float, theta: float, max_t: float) -> Iterator[Tuple[Cell, float]]:
    """Yield (cell, entry distance) in cell units from grid-frame (gx, gy) along theta."""
    dirx = cos(theta)
    diry = sin(theta)
    if abs(dirx) < DIRECTION_EPS:
        dirx = 0.0
    if abs(diry) < DIRECTION_EPS:
        diry = 0.0

    j = int(floor(gx))
    i = int(floor(gy))
    step_x = 1 if dirx > 0.0 else -1
    step_y = 1 if diry > 0.0 else -1

    if dirx == 0.0:
        t_max_x = inf
        t_delta_x = inf
    else:
        t_max_x = max(0.0, ((j + (1 if dirx > 0.0 else 0)) - gx) / dirx)
        t_delta_x = 1.0 / abs(dirx)

    if diry == 0.0:
        t_max_y = inf
        t_delta_y = inf
    else:
        t_max_y = max(0.0, ((i + (1 if diry > 0.0 else 0)) - gy) / diry)
        t_delta_y = 1.0 / abs(diry)

    yield Cell(j, i), 0.0

    while True:
        if t_max_x != inf and t_max_y != inf and abs(t_max_x - t_max_y) <= BOUNDARY_TIE_EPS:
            # Corner crossing
            t = min(t_max_x, t_max_y)
            if t > max_t:
                return
            yield Cell(j + step_x, i), t
            yield Cell(j, i + step_y), t
            j += step_x
            i += step_y
            t_max_x += t_delta_x
            t_max_y += t_delta_y
        elif t_max_x < t_max_y:
            t = t_max_x
            if t > max_t:
                return
            j += step_x
            t_max_x += t_delta_x
        else:
            t = t_max_y
            if t > max_t:
                return
            i += step_y
            t_max_y += t_delta_y
        yield Cell(j, i), t


def trace_cells(info: GridMetadata, start: Point, end: Point) -> Iterator[Tuple[Cell, float]]:
    """Yield every cell the segment start->end crosses with its entry distance.

    The first item is the cell containing ``start`` at distance 0. Cells are not
    bounds-checked; combine with ``within_bounds`` where that matters.
    """
    res = info.resolution
    sx, sy = world_to_frame(info.origin, start.x, start.y)
    ex, ey = world_to_frame(info.origin, end.x, end.y)
    length = hypot(ex - sx, ey - sy)
    theta = atan2(ey - sy, ex - sx)
    for cell, t in _walk(sx / res, sy / res, theta, length / res):
        yield cell, t * res


def cast_ray(
    grid: OccupancyGrid,
    origin: Point,
    bearing: float,
    max_range: float,
    treat_unknown_as_occupied: bool = False,
) -> Optional[float]:
    """Distance from ``origin`` to the first blocking cell along a world-frame bearing.

    Returns None when the ray leaves the grid or runs past ``max_range`` first.
    A ray starting in a blocking cell hits at distance 0.
    """
    if not (max_range >= 0.0):
        raise InvalidArgument(f"max_range must be >= 0, got {max_range}")
    info = grid.info
    res = info.resolution
    gx, gy = world_to_frame(info.origin, origin.x, origin.y)
    theta = bearing_in_frame(info.origin, bearing)
    data = grid.data
    for cell, t in _walk(gx / res, gy / res, theta, float(max_range) / res):
        if not within_bounds(info, cell):
            return None
        v = data[cell_index(info, cell)]
        if v == OCCUPIED_VALUE or (treat_unknown_as_occupied and v == UNKNOWN_VALUE):
            return t * res
    return None


__all__ = ["trace_cells", "cast_ray"]
