import numpy as np

from occgrid import OccupancyGrid, load_map_yaml, save_grid
from scripts.grid_tool import main


def _map(tmp_path, wall: bool = False):
    arr = np.zeros((5, 5), dtype=bool)
    if wall:
        arr[2, :] = True
    return save_grid(OccupancyGrid.from_array(arr, resolution=0.5), tmp_path / "map.yaml")


def test_plan_prints_path(tmp_path, capsys) -> None:
    yaml_path = _map(tmp_path)
    assert main(["plan", str(yaml_path), "0", "0", "4", "4", "--connectivity", "4"]) == 0
    out = capsys.readouterr().out
    assert "cells=9" in out
    assert out.strip().splitlines()[-1] == "4 4"


def test_plan_without_path_returns_one(tmp_path, capsys) -> None:
    yaml_path = _map(tmp_path, wall=True)
    assert main(["plan", str(yaml_path), "0", "0", "4", "4"]) == 1
    assert "No path" in capsys.readouterr().out


def test_plan_reads_planner_config(tmp_path, capsys) -> None:
    yaml_path = _map(tmp_path, wall=True)
    cfg = tmp_path / "planner.yaml"
    cfg.write_text("connectivity: 4\ncost_policy:\n  allow_blocked_endpoints: true\n", encoding="utf-8")
    assert main(["plan", str(yaml_path), "0", "0", "0", "2", "--config", str(cfg)]) == 0
    assert "cells=3" in capsys.readouterr().out


def test_scan_and_inflate_commands(tmp_path, capsys) -> None:
    yaml_path = _map(tmp_path, wall=True)
    assert main(["scan", str(yaml_path), "1.25", "0.25", "0.0", "--beams", "5"]) == 0
    assert "beams=5" in capsys.readouterr().out
    out_yaml = tmp_path / "inflated.yaml"
    assert main(["inflate", str(yaml_path), "0.5", str(out_yaml)]) == 0
    inflated = load_map_yaml(out_yaml)
    assert inflated.occupied_mask().sum() == 15
