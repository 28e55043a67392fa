"""Occupancy grid geometry, range-scan simulation and grid path planning."""

from .config import CostPolicy, LoadConfig
from .errors import GridError, InvalidArgument, MalformedMetadata, OutOfBounds
from .geometry import (
    cell_center,
    cell_index,
    get_cell,
    identity_pose,
    index_cell,
    point_cell,
    point_index,
    set_cell,
    within_bounds,
)
from .maps import load_grid, load_map_yaml, save_grid
from .planning import cells_connected, shortest_path, single_source_shortest_paths
from .sim import (
    GridRangeSensor,
    cast_ray,
    inflate_obstacles,
    obstacle_distance_field,
    simulate_range_scan,
    trace_cells,
)
from .types import (
    Cell,
    GridMetadata,
    Occupancy,
    OccupancyGrid,
    Path,
    Point,
    Pose,
    Quaternion,
    Scan,
    SensorDescription,
    allocate_grid,
)

OCCUPIED = Occupancy.OCCUPIED
UNOCCUPIED = Occupancy.UNOCCUPIED
UNKNOWN = Occupancy.UNKNOWN

__all__ = [
    "OCCUPIED",
    "UNOCCUPIED",
    "UNKNOWN",
    "Occupancy",
    "Cell",
    "Point",
    "Quaternion",
    "Pose",
    "GridMetadata",
    "OccupancyGrid",
    "allocate_grid",
    "SensorDescription",
    "Scan",
    "Path",
    "CostPolicy",
    "LoadConfig",
    "GridError",
    "OutOfBounds",
    "InvalidArgument",
    "MalformedMetadata",
    "cell_index",
    "index_cell",
    "point_cell",
    "cell_center",
    "point_index",
    "within_bounds",
    "get_cell",
    "set_cell",
    "identity_pose",
    "trace_cells",
    "cast_ray",
    "simulate_range_scan",
    "GridRangeSensor",
    "inflate_obstacles",
    "obstacle_distance_field",
    "shortest_path",
    "single_source_shortest_paths",
    "cells_connected",
    "load_grid",
    "load_map_yaml",
    "save_grid",
]
