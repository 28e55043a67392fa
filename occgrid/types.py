"""Value types and the occupancy grid aggregate.

Conventions:
- Cells are (x, y) with x along grid columns and y along grid rows.
- The flat cell array is row-major: index = y * width + x.
- A grid's data array is read-only; every modification returns a new grid.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional

import numpy as np

from .constants import (
    DEFAULT_RESOLUTION_M,
    NO_RETURN,
    OCCUPIED_VALUE,
    UNKNOWN_VALUE,
    UNOCCUPIED_VALUE,
)
from .errors import InvalidArgument, OutOfBounds


class Occupancy(enum.Enum):
    """Closed set of cell states; ``value`` is the stored int8 byte."""

    OCCUPIED = OCCUPIED_VALUE
    UNOCCUPIED = UNOCCUPIED_VALUE
    UNKNOWN = UNKNOWN_VALUE


_VALID_VALUES = np.array([m.value for m in Occupancy], dtype=np.int8)


@dataclass(frozen=True, order=True)
class Cell:
    x: int
    y: int

    def __iter__(self) -> Iterator[int]:
        yield self.x
        yield self.y


@dataclass(frozen=True)
class Point:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


@dataclass(frozen=True)
class Quaternion:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0

    @classmethod
    def from_yaw(cls, yaw: float) -> "Quaternion":
        half = 0.5 * float(yaw)
        return cls(0.0, 0.0, math.sin(half), math.cos(half))

    def yaw(self) -> float:
        """Rotation about +z in radians, wrapped to (-pi, pi]."""
        siny = 2.0 * (self.w * self.z + self.x * self.y)
        cosy = 1.0 - 2.0 * (self.y * self.y + self.z * self.z)
        return math.atan2(siny, cosy)


@dataclass(frozen=True)
class Pose:
    position: Point = field(default_factory=Point)
    orientation: Quaternion = field(default_factory=Quaternion)

    @classmethod
    def from_xy_yaw(cls, x: float, y: float, yaw: float = 0.0) -> "Pose":
        return cls(Point(float(x), float(y), 0.0), Quaternion.from_yaw(yaw))

    @property
    def yaw(self) -> float:
        return self.orientation.yaw()


@dataclass(frozen=True)
class GridMetadata:
    """Resolution (metres per cell), extent in cells and pose of cell (0,0)'s corner."""

    resolution: float = DEFAULT_RESOLUTION_M
    width: int = 0
    height: int = 0
    origin: Pose = field(default_factory=Pose)

    def __post_init__(self) -> None:
        if not (self.resolution > 0.0) or not math.isfinite(self.resolution):
            raise InvalidArgument(f"resolution must be > 0, got {self.resolution}")
        if int(self.width) != self.width or int(self.height) != self.height:
            raise InvalidArgument(f"width/height must be integers, got {self.width}x{self.height}")
        if self.width < 0 or self.height < 0:
            raise InvalidArgument(f"width/height must be >= 0, got {self.width}x{self.height}")
        object.__setattr__(self, "width", int(self.width))
        object.__setattr__(self, "height", int(self.height))

    @property
    def num_cells(self) -> int:
        return int(self.width) * int(self.height)


class OccupancyGrid:
    """Metadata plus a flat, read-only int8 array of occupancy values.

    Args:
        info: grid metadata.
        data: any array-like of length ``width * height`` holding values from
            ``Occupancy``; it is copied.
    """

    __slots__ = ("info", "data")

    def __init__(self, info: GridMetadata, data: Iterable[int] | np.ndarray) -> None:
        raw = np.asarray(data).reshape(-1)
        if raw.size != info.num_cells:
            raise InvalidArgument(
                f"data has {raw.size} cells, expected {info.width}*{info.height}={info.num_cells}"
            )
        bad = ~np.isin(raw, _VALID_VALUES)
        if bad.any():
            raise InvalidArgument(
                f"data holds values outside {sorted(int(v) for v in _VALID_VALUES)}: "
                f"{sorted(set(int(v) for v in raw[bad]))[:5]}"
            )
        arr = raw.astype(np.int8, copy=True)
        arr.setflags(write=False)
        self.info = info
        self.data = arr

    @classmethod
    def from_array(
        cls,
        array: np.ndarray,
        resolution: float = DEFAULT_RESOLUTION_M,
        origin: Optional[Pose] = None,
    ) -> "OccupancyGrid":
        """Build a grid from a 2D ``[y, x]`` array.

        Boolean arrays use True=occupied, False=free; integer arrays must hold
        occupancy byte values.
        """
        a = np.asarray(array)
        if a.ndim != 2:
            raise InvalidArgument(f"array must be 2D, got shape {a.shape}")
        if a.dtype == bool:
            a = np.where(a, OCCUPIED_VALUE, UNOCCUPIED_VALUE)
        h, w = a.shape
        info = GridMetadata(float(resolution), int(w), int(h), origin or Pose())
        return cls(info, a.reshape(-1))

    def as_array(self) -> np.ndarray:
        """Read-only ``[y, x]`` view of the cell values."""
        return self.data.reshape(self.info.height, self.info.width)

    def get(self, cell: Cell) -> Occupancy:
        if not (0 <= cell.x < self.info.width and 0 <= cell.y < self.info.height):
            raise OutOfBounds(f"{cell} outside {self.info.width}x{self.info.height} grid")
        return Occupancy(int(self.data[cell.y * self.info.width + cell.x]))

    def with_cells(self, cells: Iterable[Cell], value: Occupancy) -> "OccupancyGrid":
        """Return a copy with every cell in ``cells`` set to ``value``."""
        out = self.data.copy()
        w, h = self.info.width, self.info.height
        for c in cells:
            if not (0 <= c.x < w and 0 <= c.y < h):
                raise OutOfBounds(f"{c} outside {w}x{h} grid")
            out[c.y * w + c.x] = value.value
        return OccupancyGrid(self.info, out)

    def occupied_mask(self) -> np.ndarray:
        return self.as_array() == OCCUPIED_VALUE

    def free_mask(self) -> np.ndarray:
        return self.as_array() == UNOCCUPIED_VALUE

    def unknown_mask(self) -> np.ndarray:
        return self.as_array() == UNKNOWN_VALUE

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OccupancyGrid):
            return NotImplemented
        return self.info == other.info and np.array_equal(self.data, other.data)

    def __repr__(self) -> str:
        i = self.info
        return f"OccupancyGrid({i.width}x{i.height}, res={i.resolution})"


def allocate_grid(info: GridMetadata, fill: Occupancy = Occupancy.UNOCCUPIED) -> OccupancyGrid:
    return OccupancyGrid(info, np.full(info.num_cells, fill.value, dtype=np.int8))


@dataclass(frozen=True)
class SensorDescription:
    """Angular sweep and range limits of a planar range sensor.

    ``sample_count`` or ``angle_max`` defines the sweep; when both are given
    they must agree.
    """

    angle_min: float
    angle_increment: float
    range_min: float
    range_max: float
    sample_count: Optional[int] = None
    angle_max: Optional[float] = None

    def __post_init__(self) -> None:
        given_max = self.angle_max
        both_given = self.sample_count is not None and given_max is not None
        if self.sample_count is None:
            if given_max is None:
                raise InvalidArgument("sensor needs sample_count or angle_max")
            if self.angle_increment == 0.0:
                n = 1 if given_max == self.angle_min else 0
            else:
                n = int(round((given_max - self.angle_min) / self.angle_increment)) + 1
            object.__setattr__(self, "sample_count", n)
        if self.sample_count <= 0:
            raise InvalidArgument(f"sample_count must be > 0, got {self.sample_count}")
        if not (self.range_max > 0.0):
            raise InvalidArgument(f"range_max must be > 0, got {self.range_max}")
        if self.range_min < 0.0 or self.range_min > self.range_max:
            raise InvalidArgument(
                f"range_min must be in [0, range_max], got {self.range_min} (range_max={self.range_max})"
            )
        end = self.angle_min + (self.sample_count - 1) * self.angle_increment
        if given_max is None:
            object.__setattr__(self, "angle_max", end)
        elif both_given and not math.isclose(given_max, end, rel_tol=1e-9, abs_tol=1e-9):
            raise InvalidArgument(
                f"angle_max {given_max} does not match {self.sample_count} samples "
                f"from {self.angle_min} in steps of {self.angle_increment} (ends at {end})"
            )

    def bearings(self) -> np.ndarray:
        """Sensor-frame bearing of every sample, in sample order."""
        return self.angle_min + np.arange(self.sample_count, dtype=np.float64) * self.angle_increment


@dataclass
class Scan:
    angle_min: float
    angle_max: float
    angle_increment: float
    range_min: float
    range_max: float
    ranges: np.ndarray
    sensor_pose: Pose = field(default_factory=Pose)

    def __len__(self) -> int:
        return int(self.ranges.shape[0])

    def returns_mask(self) -> np.ndarray:
        """True where the beam produced a return."""
        return self.ranges != NO_RETURN


@dataclass
class Path:
    cells: List[Cell]
    cost: float = 0.0

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)

    @property
    def start(self) -> Cell:
        return self.cells[0]

    @property
    def goal(self) -> Cell:
        return self.cells[-1]


__all__ = [
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
]
