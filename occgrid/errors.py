"""Error taxonomy for grid geometry, ray tracing, planning and map files.

"No path" is a normal planner outcome and is reported by returning ``None``,
never by raising.
"""

from __future__ import annotations


class GridError(Exception):
    """Base class for all occgrid errors."""


class OutOfBounds(GridError, IndexError):
    """A cell, index or point lies outside the grid extent."""


class InvalidArgument(GridError, ValueError):
    """A structural precondition on an argument is violated."""


class MalformedMetadata(GridError, ValueError):
    """A map descriptor is missing fields or is inconsistent with its image."""


__all__ = ["GridError", "OutOfBounds", "InvalidArgument", "MalformedMetadata"]
