"""Planar rigid transforms between the world frame and a grid's frame.

Only the yaw of a pose is used; the grid plane is z = origin.z.
"""

from __future__ import annotations

from math import cos, pi, sin
from typing import Tuple

from ..types import Point, Pose, Quaternion


def identity_pose() -> Pose:
    return Pose(Point(0.0, 0.0, 0.0), Quaternion(0.0, 0.0, 0.0, 1.0))


def wrap_to_pi(theta: float) -> float:
    """Normalize angle to [-pi, pi)."""
    wrapped = (theta + pi) % (2.0 * pi) - pi
    if wrapped >= pi:
        wrapped -= 2.0 * pi
    return wrapped


def world_to_frame(frame: Pose, x: float, y: float) -> Tuple[float, float]:
    """Express world point (x, y) in the frame of ``frame``."""
    dx = float(x) - frame.position.x
    dy = float(y) - frame.position.y
    th = frame.yaw
    c = cos(-th)
    s = sin(-th)
    return c * dx - s * dy, s * dx + c * dy


def frame_to_world(frame: Pose, x: float, y: float) -> Tuple[float, float]:
    """Express frame-local point (x, y) in the world frame."""
    th = frame.yaw
    c = cos(th)
    s = sin(th)
    return frame.position.x + c * x - s * y, frame.position.y + s * x + c * y


def bearing_in_frame(frame: Pose, world_bearing: float) -> float:
    return wrap_to_pi(float(world_bearing) - frame.yaw)


__all__ = [
    "identity_pose",
    "wrap_to_pi",
    "world_to_frame",
    "frame_to_world",
    "bearing_in_frame",
]
