"""Map persistence (image + YAML descriptor)."""

from .grid_file import load_grid, load_map_yaml, save_grid

__all__ = ["load_grid", "load_map_yaml", "save_grid"]
