from __future__ import annotations

import argparse
import logging
import math
from typing import Any, Dict, List, Optional

import numpy as np

from occgrid import (
    Cell,
    CostPolicy,
    Pose,
    SensorDescription,
    cell_center,
    inflate_obstacles,
    load_map_yaml,
    save_grid,
    shortest_path,
    simulate_range_scan,
)
from occgrid.logging_config import setup_logging
from occgrid.utils.config import load_config_dict

logger = logging.getLogger("occgrid.tools")


def _planner_settings(path: Optional[str]) -> Dict[str, Any]:
    cfg = load_config_dict(path) if path else {}
    return {
        "connectivity": int(cfg.get("connectivity", 8)),
        "heuristic": cfg.get("heuristic", "octile"),
        "inflation_radius": float(cfg.get("inflation_radius", 0.0)),
        "max_expansions": cfg.get("max_expansions"),
        "cost_policy": CostPolicy.from_dict(cfg.get("cost_policy")),
    }


def cmd_plan(args: argparse.Namespace) -> int:
    grid = load_map_yaml(args.map)
    settings = _planner_settings(args.config)
    if args.connectivity is not None:
        settings["connectivity"] = args.connectivity
    radius = args.inflate if args.inflate is not None else settings["inflation_radius"]
    if radius > 0.0:
        grid = inflate_obstacles(grid, radius)
    path = shortest_path(
        grid,
        Cell(args.sx, args.sy),
        Cell(args.gx, args.gy),
        connectivity=settings["connectivity"],
        cost_policy=settings["cost_policy"],
        heuristic=settings["heuristic"],
        max_expansions=settings["max_expansions"],
    )
    if path is None:
        print("[WARN] No path found.")
        return 1
    print(f"[INFO] cells={len(path)} cost={path.cost:.3f}")
    for c in path:
        if args.world:
            p = cell_center(grid.info, c)
            print(f"{p.x:.3f} {p.y:.3f}")
        else:
            print(f"{c.x} {c.y}")
    return 0


def cmd_scan(args: argparse.Namespace) -> int:
    grid = load_map_yaml(args.map)
    fov = math.radians(args.fov_deg)
    beams = int(args.beams)
    sensor = SensorDescription(
        angle_min=-0.5 * fov,
        angle_increment=(fov / (beams - 1)) if beams > 1 else 0.0,
        range_min=args.min_range,
        range_max=args.max_range,
        sample_count=beams,
    )
    scan = simulate_range_scan(grid, Pose.from_xy_yaw(args.x, args.y, args.yaw), sensor, args.unknown_obstacles)
    hits = int(np.count_nonzero(scan.returns_mask()))
    print(f"[INFO] beams={len(scan)} returns={hits}")
    for k, r in enumerate(scan.ranges):
        print(f"{scan.angle_min + k * scan.angle_increment:.4f} {r:.4f}")
    return 0


def cmd_inflate(args: argparse.Namespace) -> int:
    grid = load_map_yaml(args.map)
    out = save_grid(inflate_obstacles(grid, args.radius, inflate_unknown=args.unknown_obstacles), args.out)
    print(f"[INFO] Saved inflated map: {out}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Plan, scan and inflate on occupancy grid maps")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, ...)")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("plan", help="Shortest path between two cells")
    p.add_argument("map", help="Map YAML descriptor")
    p.add_argument("sx", type=int)
    p.add_argument("sy", type=int)
    p.add_argument("gx", type=int)
    p.add_argument("gy", type=int)
    p.add_argument("--config", default=None, help="Planner YAML (connectivity, heuristic, cost_policy, ...)")
    p.add_argument("--connectivity", type=int, choices=(4, 8), default=None)
    p.add_argument("--inflate", type=float, default=None, help="Inflation radius in metres")
    p.add_argument("--world", action="store_true", help="Print cell centres in world coordinates")
    p.set_defaults(func=cmd_plan)

    s = sub.add_parser("scan", help="Simulate a range scan")
    s.add_argument("map")
    s.add_argument("x", type=float)
    s.add_argument("y", type=float)
    s.add_argument("yaw", type=float)
    s.add_argument("--beams", type=int, default=24)
    s.add_argument("--fov-deg", type=float, default=240.0)
    s.add_argument("--min-range", type=float, default=0.0)
    s.add_argument("--max-range", type=float, default=4.0)
    s.add_argument("--unknown-obstacles", action="store_true")
    s.set_defaults(func=cmd_scan)

    i = sub.add_parser("inflate", help="Inflate obstacles and save a new map")
    i.add_argument("map")
    i.add_argument("radius", type=float)
    i.add_argument("out", help="Output YAML (image is written beside it)")
    i.add_argument("--unknown-obstacles", action="store_true")
    i.set_defaults(func=cmd_inflate)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(getattr(logging, str(args.log_level).upper(), logging.WARNING))
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
