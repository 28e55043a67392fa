import math

import pytest

from occgrid import CostPolicy, InvalidArgument, LoadConfig, MalformedMetadata
from occgrid.utils.config import load_config_dict, save_config_dict


def test_cost_policy_defaults() -> None:
    policy = CostPolicy()
    assert policy.diagonal_cost == pytest.approx(math.sqrt(2.0))
    assert not policy.unknown_traversable
    assert not policy.uses_clearance


def test_cost_policy_from_dict() -> None:
    policy = CostPolicy.from_dict({"diagonal_cost": 1.5, "obstacle_weight": 2.0, "obstacle_radius": 0.5})
    assert policy.diagonal_cost == 1.5
    assert policy.uses_clearance
    assert CostPolicy.from_dict(None) == CostPolicy()


@pytest.mark.parametrize(
    "cfg",
    [
        {"diagonal_cost": 0.9},
        {"diagonal_cost": 2.5},
        {"unknown_cost": -1.0},
        {"obstacle_radius": -0.2},
        {"not_a_field": 1},
    ],
)
def test_cost_policy_rejects_bad_values(cfg: dict) -> None:
    with pytest.raises(InvalidArgument):
        CostPolicy.from_dict(cfg)


def test_load_config_from_dict() -> None:
    cfg = LoadConfig.from_dict({"resolution": 0.05, "origin": [1.0, 2.0, 0.0], "negate": 1})
    assert cfg.resolution == 0.05
    assert cfg.negate is True
    assert cfg.origin.position.x == 1.0 and cfg.origin.position.y == 2.0
    with pytest.raises(MalformedMetadata):
        LoadConfig.from_dict({"origin": "0 0 0"})
    with pytest.raises(MalformedMetadata):
        LoadConfig.from_dict({"resolution": "fine"})


def test_yaml_round_trip(tmp_path) -> None:
    path = tmp_path / "planner.yaml"
    save_config_dict({"connectivity": 4, "cost_policy": {"unknown_traversable": True}}, path)
    cfg = load_config_dict(path)
    assert cfg["connectivity"] == 4
    assert CostPolicy.from_dict(cfg["cost_policy"]).unknown_traversable


def test_load_config_dict_requires_mapping(tmp_path) -> None:
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(TypeError):
        load_config_dict(path)
