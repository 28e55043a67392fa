import numpy as np
import pytest

from occgrid import (
    Cell,
    InvalidArgument,
    OccupancyGrid,
    UNKNOWN,
    UNOCCUPIED,
    inflate_obstacles,
)


def test_inflate_increases_occupied() -> None:
    grid = np.zeros((20, 20), dtype=bool)
    grid[10, 10] = True
    inflated = inflate_obstacles(OccupancyGrid.from_array(grid, resolution=0.1), radius=0.5)
    assert inflated.occupied_mask().sum() > 1


@pytest.mark.parametrize("radius,res", [(0.25, 0.1), (2.0, 1.0), (0.75, 0.5)])
def test_single_cell_inflates_to_disk_of_centres(radius: float, res: float) -> None:
    n = 21
    arr = np.zeros((n, n), dtype=bool)
    arr[10, 10] = True
    inflated = inflate_obstacles(OccupancyGrid.from_array(arr, resolution=res), radius)
    yy, xx = np.mgrid[0:n, 0:n]
    expected = np.hypot(xx - 10, yy - 10) * res <= radius
    assert np.array_equal(inflated.occupied_mask(), expected)


def test_inflation_returns_new_grid() -> None:
    arr = np.zeros((9, 9), dtype=bool)
    arr[4, 4] = True
    grid = OccupancyGrid.from_array(arr)
    inflated = inflate_obstacles(grid, 1.5)
    assert grid.occupied_mask().sum() == 1
    assert inflated.occupied_mask().sum() == 9
    assert inflated.info == grid.info


def test_small_radius_is_identity() -> None:
    arr = np.zeros((5, 5), dtype=bool)
    arr[2, 2] = True
    grid = OccupancyGrid.from_array(arr, resolution=1.0)
    assert inflate_obstacles(grid, 0.0) == grid
    assert inflate_obstacles(grid, 0.9) == grid


def test_negative_radius_rejected() -> None:
    with pytest.raises(InvalidArgument):
        inflate_obstacles(OccupancyGrid.from_array(np.zeros((3, 3), dtype=bool)), -0.1)


def test_unknown_cells_keep_value_unless_inflated() -> None:
    arr = np.zeros((5, 5), dtype=np.int8)
    arr[0, 0] = 100
    arr[4, 4] = -1
    grid = OccupancyGrid.from_array(arr)
    inflated = inflate_obstacles(grid, 1.0)
    assert inflated.get(Cell(4, 4)) is UNKNOWN
    assert inflated.get(Cell(3, 4)) is UNOCCUPIED
    with_unknown = inflate_obstacles(grid, 1.0, inflate_unknown=True)
    assert with_unknown.unknown_mask().sum() == 0
    assert with_unknown.occupied_mask()[3, 4] and with_unknown.occupied_mask()[4, 3]
