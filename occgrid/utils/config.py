"""YAML helpers for map descriptors and planner settings.

Reads go through OmegaConf so descriptors may use interpolation; results are
plain resolved containers.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Mapping, Union

from omegaconf import OmegaConf


def load_config_any(path: Union[str, Path]) -> Any:
    """Parse a YAML file into plain Python containers with interpolations resolved.

    Parse and interpolation failures propagate as PyYAML / OmegaConf errors;
    ``load_map_yaml`` turns them into ``MalformedMetadata``.
    """
    return OmegaConf.to_container(OmegaConf.load(str(path)), resolve=True)


def load_config_dict(path: Union[str, Path]) -> Dict[str, Any]:
    """Like ``load_config_any`` but the top level must be a mapping.

    A map descriptor or planner config that parses to a list or scalar raises
    TypeError.
    """
    cfg = load_config_any(path)
    if not isinstance(cfg, dict):
        raise TypeError(f"{path}: expected a mapping at the top level, got {type(cfg).__name__}")
    return cfg


def save_config_dict(cfg: Mapping[str, Any], path: Union[str, Path]) -> None:
    """Write a plain mapping (e.g. a map descriptor) as YAML."""
    with open(path, "w", encoding="utf-8") as f:
        f.write(OmegaConf.to_yaml(OmegaConf.create(dict(cfg))))
