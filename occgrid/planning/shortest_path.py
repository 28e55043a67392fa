"""Minimum-cost paths over the implicit 4/8-connected lattice of a grid.

A* with an admissible distance heuristic, or plain Dijkstra when the heuristic
is None. Frontier ties are broken by insertion order and neighbours are
expanded in a fixed order, so identical inputs always yield the identical path.
Each call builds its own search state; the grid is only read.
"""

from __future__ import annotations

import heapq
import logging
from dataclasses import dataclass
from math import hypot, inf, sqrt
from typing import Callable, Optional, Tuple

import numpy as np

from ..config import CostPolicy
from ..constants import DEFAULT_CONNECTIVITY, DEFAULT_HEURISTIC
from ..errors import InvalidArgument, OutOfBounds
from ..geometry.coordinates import cell_index, index_cell, within_bounds
from ..sim.edt import obstacle_distance_field
from ..types import Cell, GridMetadata, OccupancyGrid, Path

logger = logging.getLogger(__name__)

# E, N, W, S
_AXIS_MOVES: Tuple[Tuple[int, int], ...] = ((1, 0), (0, 1), (-1, 0), (0, -1))
# NE, NW, SW, SE
_DIAGONAL_MOVES: Tuple[Tuple[int, int], ...] = ((1, 1), (-1, 1), (-1, -1), (1, -1))

HEURISTICS = ("octile", "euclidean", "manhattan")

Heuristic = Callable[[int, int], float]


def _moves(connectivity: int) -> Tuple[Tuple[int, int, bool], ...]:
    if connectivity == 4:
        return tuple((dx, dy, False) for dx, dy in _AXIS_MOVES)
    if connectivity == 8:
        return tuple((dx, dy, False) for dx, dy in _AXIS_MOVES) + tuple(
            (dx, dy, True) for dx, dy in _DIAGONAL_MOVES
        )
    raise InvalidArgument(f"connectivity must be 4 or 8, got {connectivity}")


def _make_heuristic(
    name: Optional[str], goal: Cell, connectivity: int, policy: CostPolicy, resolution: float
) -> Optional[Heuristic]:
    """Lower bound on the remaining cost, scaled by the cheapest possible edge."""
    if name is None:
        return None
    if name not in HEURISTICS:
        raise InvalidArgument(f"heuristic must be one of {HEURISTICS} or None, got {name!r}")
    if name == "manhattan" and connectivity != 4:
        raise InvalidArgument("manhattan heuristic overestimates with 8-connectivity")
    gx, gy = goal.x, goal.y
    res = float(resolution)
    diag = policy.diagonal_cost

    if name == "manhattan":
        def h(x: int, y: int) -> float:
            return res * (abs(x - gx) + abs(y - gy))
    elif name == "octile":
        def h(x: int, y: int) -> float:
            dx = abs(x - gx)
            dy = abs(y - gy)
            return res * ((dx + dy) + (diag - 2.0) * min(dx, dy))
    else:
        scale = res * min(1.0, diag / sqrt(2.0))

        def h(x: int, y: int) -> float:
            return scale * hypot(x - gx, y - gy)
    return h


class _SearchSpace:
    """Traversability mask and per-cell entry penalties derived from a grid."""

    def __init__(self, grid: OccupancyGrid, policy: CostPolicy) -> None:
        self.info: GridMetadata = grid.info
        self.policy = policy
        passable = grid.free_mask()
        penalty = np.zeros(passable.shape, dtype=np.float64)
        if policy.unknown_traversable:
            unknown = grid.unknown_mask()
            passable = passable | unknown
            if policy.unknown_cost > 0.0:
                penalty[unknown] += policy.unknown_cost
        if policy.uses_clearance:
            dist = obstacle_distance_field(grid)
            near = dist < policy.obstacle_radius
            penalty[near] += policy.obstacle_weight * (1.0 - dist[near] / policy.obstacle_radius)
        self.passable = passable
        self.penalty = penalty

    def check_cell(self, cell: Cell, role: str) -> None:
        if not within_bounds(self.info, cell):
            raise OutOfBounds(
                f"{role} cell ({cell.x}, {cell.y}) outside {self.info.width}x{self.info.height} grid"
            )

    def admit_endpoint(self, cell: Cell) -> bool:
        """True if ``cell`` can start or end a path under the policy."""
        if self.passable[cell.y, cell.x]:
            return True
        if self.policy.allow_blocked_endpoints:
            self.passable = self.passable.copy()
            self.passable[cell.y, cell.x] = True
            return True
        return False


@dataclass
class _SearchState:
    g: np.ndarray
    parent: np.ndarray
    expansions: int


def _search(
    space: _SearchSpace,
    start: Cell,
    moves: Tuple[Tuple[int, int, bool], ...],
    goal: Optional[Cell] = None,
    heuristic: Optional[Heuristic] = None,
    max_expansions: Optional[int] = None,
    max_distance: Optional[float] = None,
) -> Tuple[_SearchState, bool]:
    """Best-first search from ``start``; returns (state, reached_goal)."""
    info = space.info
    W, H = info.width, info.height
    res = info.resolution
    axis_len = res
    diag_len = res * space.policy.diagonal_cost
    corner_cutting = space.policy.allow_corner_cutting
    passable = space.passable
    penalty = space.penalty

    g = np.full((H, W), inf, dtype=np.float64)
    parent = np.full(info.num_cells, -1, dtype=np.int64)
    closed = np.zeros((H, W), dtype=bool)

    counter = 0
    g[start.y, start.x] = 0.0
    h0 = heuristic(start.x, start.y) if heuristic else 0.0
    frontier: list[Tuple[float, int, int, int]] = [(h0, counter, start.x, start.y)]
    expansions = 0

    while frontier:
        _, _, x, y = heapq.heappop(frontier)
        if closed[y, x]:
            continue
        closed[y, x] = True
        if goal is not None and x == goal.x and y == goal.y:
            return _SearchState(g, parent, expansions), True
        expansions += 1
        if max_expansions is not None and expansions > max_expansions:
            logger.warning("search aborted after %d expansions (cap %d)", expansions - 1, max_expansions)
            return _SearchState(g, parent, expansions), False

        g_here = g[y, x]
        here_idx = cell_index(info, Cell(x, y))
        for dx, dy, diagonal in moves:
            nx = x + dx
            ny = y + dy
            if not (0 <= nx < W and 0 <= ny < H):
                continue
            if closed[ny, nx] or not passable[ny, nx]:
                continue
            if diagonal and not corner_cutting and not (passable[y, nx] and passable[ny, x]):
                continue
            step = diag_len if diagonal else axis_len
            ng = g_here + step * (1.0 + penalty[ny, nx])
            if max_distance is not None and ng > max_distance:
                continue
            if ng < g[ny, nx]:
                g[ny, nx] = ng
                parent[cell_index(info, Cell(nx, ny))] = here_idx
                counter += 1
                f = ng + (heuristic(nx, ny) if heuristic else 0.0)
                heapq.heappush(frontier, (f, counter, nx, ny))

    return _SearchState(g, parent, expansions), goal is None


def _extract_path(info: GridMetadata, state: _SearchState, source: Cell, target: Cell) -> Path:
    cells = [target]
    idx = cell_index(info, target)
    source_idx = cell_index(info, source)
    while idx != source_idx:
        idx = int(state.parent[idx])
        cells.append(index_cell(info, idx))
    cells.reverse()
    return Path(cells=cells, cost=float(state.g[target.y, target.x]))


def shortest_path(
    grid: OccupancyGrid,
    start: Cell,
    goal: Cell,
    connectivity: int = DEFAULT_CONNECTIVITY,
    cost_policy: Optional[CostPolicy] = None,
    heuristic: Optional[str] = DEFAULT_HEURISTIC,
    max_expansions: Optional[int] = None,
) -> Optional[Path]:
    """Minimum-cost path from ``start`` to ``goal``.

    Args:
        grid: occupancy grid; only read.
        start, goal: endpoint cells.
        connectivity: 4 or 8.
        cost_policy: traversability and edge-cost rules (defaults to ``CostPolicy()``).
        heuristic: "octile", "euclidean", "manhattan" (4-connectivity only) or
            None for plain Dijkstra.
        max_expansions: optional cap on expanded cells.

    Returns:
        The path (both endpoints included) or None when no path exists, an
        endpoint is not traversable, or the expansion cap was hit.

    Raises:
        OutOfBounds: start or goal outside the grid.
        InvalidArgument: unsupported connectivity or heuristic.
    """
    policy = cost_policy or CostPolicy()
    moves = _moves(connectivity)
    h = _make_heuristic(heuristic, goal, connectivity, policy, grid.info.resolution)
    if max_expansions is not None and max_expansions < 0:
        raise InvalidArgument(f"max_expansions must be >= 0, got {max_expansions}")

    space = _SearchSpace(grid, policy)
    space.check_cell(start, "start")
    space.check_cell(goal, "goal")
    if not space.admit_endpoint(start) or not space.admit_endpoint(goal):
        logger.debug("endpoint not traversable: start=%s goal=%s", start, goal)
        return None
    if start == goal:
        return Path(cells=[start], cost=0.0)

    state, found = _search(space, start, moves, goal=goal, heuristic=h, max_expansions=max_expansions)
    logger.debug("search %s -> %s: %d expansions, found=%s", start, goal, state.expansions, found)
    if not found:
        return None
    return _extract_path(grid.info, state, start, goal)


class ShortestPathResult:
    """Distances and parent links from one source cell to every reachable cell."""

    def __init__(self, info: GridMetadata, source: Cell, state: _SearchState) -> None:
        self.info = info
        self.source = source
        self._state = state

    @property
    def distances(self) -> np.ndarray:
        """``[y, x]`` costs from the source; ``inf`` where unreachable."""
        return self._state.g

    def distance(self, cell: Cell) -> float:
        if not within_bounds(self.info, cell):
            raise OutOfBounds(f"cell ({cell.x}, {cell.y}) outside {self.info.width}x{self.info.height} grid")
        return float(self._state.g[cell.y, cell.x])

    def reachable(self, cell: Cell) -> bool:
        return self.distance(cell) < inf

    def path_to(self, cell: Cell) -> Optional[Path]:
        if not self.reachable(cell):
            return None
        return _extract_path(self.info, self._state, self.source, cell)


def single_source_shortest_paths(
    grid: OccupancyGrid,
    source: Cell,
    connectivity: int = DEFAULT_CONNECTIVITY,
    cost_policy: Optional[CostPolicy] = None,
    max_distance: Optional[float] = None,
) -> ShortestPathResult:
    """Dijkstra from ``source`` over every traversable cell.

    ``max_distance`` (world units) stops expansion past that cost. A source
    that is not traversable under the policy reaches nothing but itself.
    """
    policy = cost_policy or CostPolicy()
    moves = _moves(connectivity)
    space = _SearchSpace(grid, policy)
    space.check_cell(source, "source")
    if not space.admit_endpoint(source):
        g = np.full((grid.info.height, grid.info.width), inf, dtype=np.float64)
        g[source.y, source.x] = 0.0
        parent = np.full(grid.info.num_cells, -1, dtype=np.int64)
        return ShortestPathResult(grid.info, source, _SearchState(g, parent, 0))
    state, _ = _search(space, source, moves, max_distance=max_distance)
    logger.debug("single-source search from %s: %d expansions", source, state.expansions)
    return ShortestPathResult(grid.info, source, state)


__all__ = [
    "HEURISTICS",
    "shortest_path",
    "single_source_shortest_paths",
    "ShortestPathResult",
]
