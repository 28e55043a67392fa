from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Sequence

from .constants import (
    DEFAULT_DIAGONAL_COST,
    DEFAULT_RESOLUTION_M,
    IMAGE_FREE_THRESH,
    IMAGE_OCCUPIED_THRESH,
)
from .errors import InvalidArgument, MalformedMetadata
from .types import Pose


@dataclass(frozen=True)
class CostPolicy:
    """Traversability and edge-cost rules for grid search.

    An edge costs its length in world units times (1 + penalty of the entered
    cell). Penalties are never negative, so distance heuristics stay admissible.

    - diagonal_cost: length of a diagonal move relative to an axis move.
    - unknown_traversable: unknown cells may be entered.
    - unknown_cost: penalty for entering an unknown cell.
    - obstacle_weight, obstacle_radius: cells whose centre is d < radius metres
      from an obstacle get penalty weight * (1 - d / radius).
    - allow_blocked_endpoints: start/goal may be non-traversable cells.
    - allow_corner_cutting: diagonal moves between two blocked axis neighbours.
    """

    diagonal_cost: float = DEFAULT_DIAGONAL_COST
    unknown_traversable: bool = False
    unknown_cost: float = 0.0
    obstacle_weight: float = 0.0
    obstacle_radius: float = 0.0
    allow_blocked_endpoints: bool = False
    allow_corner_cutting: bool = True

    def __post_init__(self) -> None:
        if not (1.0 <= self.diagonal_cost <= 2.0):
            raise InvalidArgument(f"diagonal_cost must be in [1, 2], got {self.diagonal_cost}")
        for name in ("unknown_cost", "obstacle_weight", "obstacle_radius"):
            if not (getattr(self, name) >= 0.0):
                raise InvalidArgument(f"{name} must be >= 0, got {getattr(self, name)}")

    @property
    def uses_clearance(self) -> bool:
        return self.obstacle_weight > 0.0 and self.obstacle_radius > 0.0

    @classmethod
    def from_dict(cls, cfg: Mapping[str, Any] | None) -> "CostPolicy":
        d = dict(cfg or {})
        unknown = set(d) - set(cls.__dataclass_fields__)
        if unknown:
            raise InvalidArgument(f"unknown cost policy keys: {sorted(unknown)}")
        return cls(**d)


def _pose_from_xyyaw(origin: Any) -> Pose:
    if isinstance(origin, Pose):
        return origin
    if not isinstance(origin, Sequence) or isinstance(origin, str) or len(origin) != 3:
        raise MalformedMetadata(f"origin must be [x, y, yaw], got {origin!r}")
    try:
        x, y, yaw = (float(v) for v in origin)
    except (TypeError, ValueError) as exc:
        raise MalformedMetadata(f"origin must be numeric [x, y, yaw], got {origin!r}") from exc
    return Pose.from_xy_yaw(x, y, yaw)


@dataclass(frozen=True)
class LoadConfig:
    """How to turn a greyscale map image into a grid.

    Pixel darkness p = (255 - v) / 255 (v / 255 when ``negate``) above
    ``occupied_thresh`` is occupied, below ``free_thresh`` is free, otherwise
    unknown.
    """

    resolution: float = DEFAULT_RESOLUTION_M
    origin: Pose = field(default_factory=Pose)
    occupied_thresh: float = IMAGE_OCCUPIED_THRESH
    free_thresh: float = IMAGE_FREE_THRESH
    negate: bool = False

    def __post_init__(self) -> None:
        if not (self.resolution > 0.0):
            raise MalformedMetadata(f"resolution must be > 0, got {self.resolution}")
        if not (0.0 <= self.free_thresh <= self.occupied_thresh <= 1.0):
            raise MalformedMetadata(
                "thresholds must satisfy 0 <= free_thresh <= occupied_thresh <= 1, "
                f"got free={self.free_thresh} occupied={self.occupied_thresh}"
            )

    @classmethod
    def from_dict(cls, cfg: Mapping[str, Any] | None) -> "LoadConfig":
        """Build from a map descriptor mapping (``resolution``, ``origin: [x, y, yaw]``, ...)."""
        d: Dict[str, Any] = dict(cfg or {})
        try:
            kwargs: Dict[str, Any] = {
                "resolution": float(d.get("resolution", DEFAULT_RESOLUTION_M)),
                "occupied_thresh": float(d.get("occupied_thresh", IMAGE_OCCUPIED_THRESH)),
                "free_thresh": float(d.get("free_thresh", IMAGE_FREE_THRESH)),
                "negate": bool(int(d.get("negate", 0))),
            }
        except (TypeError, ValueError) as exc:
            raise MalformedMetadata(f"non-numeric map metadata: {exc}") from exc
        if "origin" in d:
            kwargs["origin"] = _pose_from_xyyaw(d["origin"])
        return cls(**kwargs)


__all__ = ["CostPolicy", "LoadConfig"]
