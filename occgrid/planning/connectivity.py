"""Reachability queries sharing the planner's traversability rules."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from ..config import CostPolicy
from ..constants import DEFAULT_CONNECTIVITY
from ..geometry.coordinates import within_bounds
from ..types import Cell, OccupancyGrid
from .shortest_path import _moves, _search, _SearchSpace

logger = logging.getLogger(__name__)


def cells_connected(
    grid: OccupancyGrid,
    a: Cell,
    b: Cell,
    connectivity: int = DEFAULT_CONNECTIVITY,
    cost_policy: Optional[CostPolicy] = None,
) -> bool:
    """True if ``shortest_path(grid, a, b, connectivity, cost_policy)`` would find a path.

    Out-of-bounds endpoints are never connected. Clearance weights do not
    change reachability and are ignored.
    """
    moves = _moves(connectivity)
    policy = replace(cost_policy or CostPolicy(), obstacle_weight=0.0, unknown_cost=0.0)
    if not within_bounds(grid.info, a) or not within_bounds(grid.info, b):
        return False
    space = _SearchSpace(grid, policy)
    if not space.admit_endpoint(a) or not space.admit_endpoint(b):
        return False
    if a == b:
        return True
    state, found = _search(space, a, moves, goal=b)
    logger.debug("reachability %s -> %s: %d expansions, connected=%s", a, b, state.expansions, found)
    return found


__all__ = ["cells_connected"]
