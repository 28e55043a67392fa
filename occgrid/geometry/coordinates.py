"""Conversions between cells, linear indices and world points.

Row-major indexing (index = y * width + x) is the only indexing rule; every
other module goes through these functions. Nothing here clamps: out-of-grid
arguments raise ``OutOfBounds`` from the index-returning functions, and
``within_bounds`` is the non-throwing check.
"""

from __future__ import annotations

from math import floor
from typing import Union

from ..errors import InvalidArgument, OutOfBounds
from ..types import Cell, GridMetadata, Occupancy, OccupancyGrid, Point
from .transforms import frame_to_world, world_to_frame


def _cell_in_extent(info: GridMetadata, cell: Cell) -> bool:
    return 0 <= cell.x < info.width and 0 <= cell.y < info.height


def cell_index(info: GridMetadata, cell: Cell) -> int:
    if not _cell_in_extent(info, cell):
        raise OutOfBounds(f"cell ({cell.x}, {cell.y}) outside {info.width}x{info.height} grid")
    return int(cell.y) * int(info.width) + int(cell.x)


def index_cell(info: GridMetadata, index: int) -> Cell:
    if not (0 <= index < info.num_cells):
        raise OutOfBounds(f"index {index} outside [0, {info.num_cells})")
    y, x = divmod(int(index), int(info.width))
    return Cell(x, y)


def point_cell(info: GridMetadata, point: Point) -> Cell:
    """Cell whose footprint contains ``point``; not bounds-checked."""
    gx, gy = world_to_frame(info.origin, point.x, point.y)
    return Cell(int(floor(gx / info.resolution)), int(floor(gy / info.resolution)))


def cell_center(info: GridMetadata, cell: Cell) -> Point:
    lx = (cell.x + 0.5) * info.resolution
    ly = (cell.y + 0.5) * info.resolution
    wx, wy = frame_to_world(info.origin, lx, ly)
    return Point(wx, wy, info.origin.position.z)


def point_index(info: GridMetadata, point: Point) -> int:
    return cell_index(info, point_cell(info, point))


def within_bounds(info: GridMetadata, where: Union[Cell, Point]) -> bool:
    if isinstance(where, Cell):
        return _cell_in_extent(info, where)
    if isinstance(where, Point):
        return _cell_in_extent(info, point_cell(info, where))
    raise InvalidArgument(f"within_bounds expects a Cell or Point, got {type(where).__name__}")


def get_cell(grid: OccupancyGrid, cell: Cell) -> Occupancy:
    return Occupancy(int(grid.data[cell_index(grid.info, cell)]))


def set_cell(grid: OccupancyGrid, cell: Cell, value: Occupancy) -> OccupancyGrid:
    """Return a copy of ``grid`` with ``cell`` set to ``value``."""
    return grid.with_cells([cell], value)


__all__ = [
    "cell_index",
    "index_cell",
    "point_cell",
    "cell_center",
    "point_index",
    "within_bounds",
    "get_cell",
    "set_cell",
]
