"""Grid persistence: greyscale map images plus a YAML descriptor.

Descriptor keys: image, resolution, origin [x, y, yaw], negate,
occupied_thresh, free_thresh. Image row 0 is the top of the map, which is grid
row height - 1.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

import numpy as np
import yaml
from omegaconf.errors import OmegaConfBaseException
from PIL import Image

from ..config import LoadConfig
from ..constants import (
    IMAGE_FREE_PIXEL,
    IMAGE_FREE_THRESH,
    IMAGE_OCCUPIED_PIXEL,
    IMAGE_OCCUPIED_THRESH,
    IMAGE_UNKNOWN_PIXEL,
    OCCUPIED_VALUE,
    UNKNOWN_VALUE,
    UNOCCUPIED_VALUE,
)
from ..errors import MalformedMetadata
from ..types import GridMetadata, OccupancyGrid
from ..utils.config import load_config_dict, save_config_dict

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def load_grid(path: PathLike, config: Optional[LoadConfig] = None) -> OccupancyGrid:
    """Read a greyscale image into a grid.

    Raises:
        OSError: the image is missing or cannot be decoded.
    """
    cfg = config or LoadConfig()
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(f"map image not found: {p}")
    with Image.open(p) as img:
        pixels = np.asarray(img.convert("L"), dtype=np.float64)

    if cfg.negate:
        darkness = pixels / 255.0
    else:
        darkness = (255.0 - pixels) / 255.0
    values = np.full(pixels.shape, UNKNOWN_VALUE, dtype=np.int8)
    values[darkness > cfg.occupied_thresh] = OCCUPIED_VALUE
    values[darkness < cfg.free_thresh] = UNOCCUPIED_VALUE
    values = values[::-1, :]

    h, w = values.shape
    info = GridMetadata(resolution=cfg.resolution, width=int(w), height=int(h), origin=cfg.origin)
    logger.info("Loaded %dx%d grid from %s (res=%.3f)", w, h, p, cfg.resolution)
    return OccupancyGrid(info, values.reshape(-1))


def load_map_yaml(path: PathLike) -> OccupancyGrid:
    """Load a grid from a YAML descriptor and the image it references.

    Raises:
        OSError: the descriptor or image is missing or unreadable.
        MalformedMetadata: required keys are missing or inconsistent.
    """
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(f"map descriptor not found: {p}")
    try:
        meta = load_config_dict(p)
    except (TypeError, yaml.YAMLError, OmegaConfBaseException) as exc:
        raise MalformedMetadata(f"{p}: {exc}") from exc
    for key in ("image", "resolution"):
        if key not in meta:
            raise MalformedMetadata(f"{p}: missing required key '{key}'")
    image = Path(str(meta["image"]))
    if not image.is_absolute():
        image = p.parent / image
    return load_grid(image, LoadConfig.from_dict(meta))


def _image_and_descriptor_paths(path: PathLike) -> tuple[Path, Path]:
    p = Path(path)
    if p.suffix.lower() in (".yaml", ".yml"):
        return p.with_suffix(".png"), p
    return p, p.with_suffix(".yaml")


def save_grid(grid: OccupancyGrid, path: PathLike) -> Path:
    """Write ``grid`` as an image plus YAML descriptor sharing one stem.

    ``path`` may name either file. Only the yaw of the origin is stored.

    Returns:
        Path of the written descriptor.

    Raises:
        MalformedMetadata: the grid has no cells; image files cannot be empty.
    """
    if grid.info.num_cells == 0:
        raise MalformedMetadata(
            f"cannot save an empty {grid.info.width}x{grid.info.height} grid as an image"
        )
    image_path, yaml_path = _image_and_descriptor_paths(path)
    cells = grid.as_array()
    pixels = np.full(cells.shape, IMAGE_UNKNOWN_PIXEL, dtype=np.uint8)
    pixels[cells == OCCUPIED_VALUE] = IMAGE_OCCUPIED_PIXEL
    pixels[cells == UNOCCUPIED_VALUE] = IMAGE_FREE_PIXEL
    Image.fromarray(np.ascontiguousarray(pixels[::-1, :])).save(image_path)

    origin = grid.info.origin
    save_config_dict(
        {
            "image": image_path.name,
            "resolution": float(grid.info.resolution),
            "origin": [float(origin.position.x), float(origin.position.y), float(origin.yaw)],
            "negate": 0,
            "occupied_thresh": IMAGE_OCCUPIED_THRESH,
            "free_thresh": IMAGE_FREE_THRESH,
        },
        yaml_path,
    )
    logger.info("Saved %dx%d grid to %s", grid.info.width, grid.info.height, yaml_path)
    return yaml_path


__all__ = ["load_grid", "load_map_yaml", "save_grid"]
