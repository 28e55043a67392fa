"""Utility helpers shared across the library and tooling."""

from .config import load_config_any, load_config_dict, save_config_dict

__all__ = [
    "load_config_any",
    "load_config_dict",
    "save_config_dict",
]
