"""Grid simulation: ray tracing, range scans, inflation and distance fields."""

from .collision import inflate_obstacles
from .edt import obstacle_distance_field
from .raytrace import cast_ray, trace_cells
from .scan import GridRangeSensor, simulate_range_scan

__all__ = [
    "inflate_obstacles",
    "obstacle_distance_field",
    "cast_ray",
    "trace_cells",
    "GridRangeSensor",
    "simulate_range_scan",
]
