"""Graph search over occupancy grids."""

from .connectivity import cells_connected
from .shortest_path import (
    HEURISTICS,
    ShortestPathResult,
    shortest_path,
    single_source_shortest_paths,
)

__all__ = [
    "cells_connected",
    "HEURISTICS",
    "ShortestPathResult",
    "shortest_path",
    "single_source_shortest_paths",
]
