from __future__ import annotations

import math

# Stored cell values
OCCUPIED_VALUE: int = 100
UNOCCUPIED_VALUE: int = 0
UNKNOWN_VALUE: int = -1

# Geometry
DEFAULT_RESOLUTION_M: float = 1.0
DIRECTION_EPS: float = 1e-12
BOUNDARY_TIE_EPS: float = 1e-9

# Scan
NO_RETURN: float = math.inf

# Planner
DEFAULT_CONNECTIVITY: int = 8
DEFAULT_DIAGONAL_COST: float = math.sqrt(2.0)
DEFAULT_HEURISTIC: str = "octile"

# Map images (greyscale, 0=black)
IMAGE_OCCUPIED_THRESH: float = 0.65
IMAGE_FREE_THRESH: float = 0.196
IMAGE_OCCUPIED_PIXEL: int = 0
IMAGE_FREE_PIXEL: int = 254
IMAGE_UNKNOWN_PIXEL: int = 205
