"""Range scan simulation over occupancy grids.

One ray per sensor sample, cast from the sensor position with the sensor's
range limit. Readings below ``range_min`` and rays without a hit are reported
as ``NO_RETURN``. The grid is only read, so scans may be simulated from many
threads against the same grid.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from ..constants import NO_RETURN
from ..errors import InvalidArgument
from ..types import OccupancyGrid, Pose, Scan, SensorDescription
from .raytrace import cast_ray


def simulate_range_scan(
    grid: OccupancyGrid,
    sensor_pose: Pose,
    sensor: SensorDescription,
    treat_unknown_as_occupied: bool = False,
) -> Scan:
    """Synthesize the scan ``sensor`` would see from ``sensor_pose``.

    Sample k looks along yaw(sensor_pose) + angle_min + k * angle_increment.
    The returned ranges have exactly ``sensor.sample_count`` entries.
    """
    yaw = sensor_pose.yaw
    angles = yaw + sensor.bearings()
    ranges = np.empty((sensor.sample_count,), dtype=np.float64)
    for k in range(sensor.sample_count):
        d = cast_ray(grid, sensor_pose.position, float(angles[k]), sensor.range_max, treat_unknown_as_occupied)
        if d is None or d < sensor.range_min:
            ranges[k] = NO_RETURN
        else:
            ranges[k] = d
    return Scan(
        angle_min=sensor.angle_min,
        angle_max=float(sensor.angle_max),
        angle_increment=sensor.angle_increment,
        range_min=sensor.range_min,
        range_max=sensor.range_max,
        ranges=ranges,
        sensor_pose=sensor_pose,
    )


class GridRangeSensor:
    """Range sensor bound to a sweep description, with optional Gaussian noise.

    Args:
        sensor: angular sweep and range limits.
        noise_std_m: Gaussian noise std in metres applied to returns.
        treat_unknown_as_occupied: unknown cells stop beams.
        rng: optional numpy Generator; if None, created internally.
    """

    def __init__(
        self,
        sensor: SensorDescription,
        *,
        noise_std_m: float = 0.0,
        treat_unknown_as_occupied: bool = False,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        if noise_std_m < 0.0:
            raise InvalidArgument(f"noise_std_m must be >= 0, got {noise_std_m}")
        self.sensor = sensor
        self.noise_std = float(noise_std_m)
        self.treat_unknown_as_occupied = bool(treat_unknown_as_occupied)
        self._rng = rng or np.random.default_rng()

    def set_seed(self, seed: int) -> None:
        self._rng = np.random.default_rng(seed)

    def sense(self, grid: OccupancyGrid, pose: Pose) -> Scan:
        scan = simulate_range_scan(grid, pose, self.sensor, self.treat_unknown_as_occupied)
        scan.ranges = self._apply_noise_and_clip(scan.ranges)
        return scan

    def _apply_noise_and_clip(self, dists: np.ndarray) -> np.ndarray:
        hits = dists != NO_RETURN
        if self.noise_std > 0.0 and hits.any():
            noise = self._rng.normal(loc=0.0, scale=self.noise_std, size=int(hits.sum()))
            dists = dists.copy()
            # Clip noisy returns to [range_min, range_max]
            dists[hits] = np.clip(dists[hits] + noise, self.sensor.range_min, self.sensor.range_max)
        return dists


__all__ = ["simulate_range_scan", "GridRangeSensor"]
