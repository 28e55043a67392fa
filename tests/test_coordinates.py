from __future__ import annotations

import math

import pytest

from occgrid import (
    Cell,
    GridMetadata,
    OccupancyGrid,
    OutOfBounds,
    Point,
    Pose,
    UNOCCUPIED,
    OCCUPIED,
    allocate_grid,
    cell_center,
    cell_index,
    get_cell,
    index_cell,
    point_cell,
    point_index,
    set_cell,
    within_bounds,
)


def _meta(width: int = 7, height: int = 4, res: float = 0.25, origin: Pose | None = None) -> GridMetadata:
    return GridMetadata(resolution=res, width=width, height=height, origin=origin or Pose())


def test_cell_index_round_trip() -> None:
    info = _meta()
    for y in range(info.height):
        for x in range(info.width):
            c = Cell(x, y)
            assert cell_index(info, c) == y * info.width + x
            assert index_cell(info, cell_index(info, c)) == c


def test_index_cell_round_trip() -> None:
    info = _meta()
    for idx in range(info.num_cells):
        assert cell_index(info, index_cell(info, idx)) == idx


@pytest.mark.parametrize("cell", [Cell(-1, 0), Cell(0, -1), Cell(7, 0), Cell(0, 4), Cell(100, 100)])
def test_out_of_bounds_cells_raise(cell: Cell) -> None:
    info = _meta()
    assert not within_bounds(info, cell)
    with pytest.raises(OutOfBounds):
        cell_index(info, cell)


@pytest.mark.parametrize("index", [-1, 28, 1000])
def test_index_cell_out_of_range(index: int) -> None:
    with pytest.raises(OutOfBounds):
        index_cell(_meta(), index)


def test_point_cell_floors_and_is_not_clamped() -> None:
    info = _meta(res=0.5)
    assert point_cell(info, Point(0.0, 0.0)) == Cell(0, 0)
    assert point_cell(info, Point(0.49, 0.51)) == Cell(0, 1)
    assert point_cell(info, Point(0.5, 0.5)) == Cell(1, 1)
    assert point_cell(info, Point(-0.1, 10.0)) == Cell(-1, 20)


def test_cell_center_with_translated_origin() -> None:
    info = _meta(res=0.5, origin=Pose.from_xy_yaw(-2.0, 1.0, 0.0))
    p = cell_center(info, Cell(2, 1))
    assert p.x == pytest.approx(-0.75)
    assert p.y == pytest.approx(1.75)
    assert point_cell(info, p) == Cell(2, 1)


def test_rotated_origin_round_trip() -> None:
    info = _meta(width=5, height=5, res=1.0, origin=Pose.from_xy_yaw(10.0, 0.0, math.pi / 2))
    assert point_cell(info, Point(9.5, 2.5)) == Cell(2, 0)
    center = cell_center(info, Cell(2, 0))
    assert center.x == pytest.approx(9.5)
    assert center.y == pytest.approx(2.5)
    for y in range(info.height):
        for x in range(info.width):
            assert point_cell(info, cell_center(info, Cell(x, y))) == Cell(x, y)


def test_point_index_and_within_bounds_for_points() -> None:
    info = _meta(res=1.0)
    assert within_bounds(info, Point(6.9, 3.9))
    assert not within_bounds(info, Point(7.0, 1.0))
    assert not within_bounds(info, Point(-0.01, 1.0))
    assert point_index(info, Point(2.2, 1.7)) == 1 * 7 + 2
    with pytest.raises(OutOfBounds):
        point_index(info, Point(7.5, 0.5))


def test_get_and_set_cell_do_not_mutate() -> None:
    grid = allocate_grid(_meta())
    updated = set_cell(grid, Cell(3, 2), OCCUPIED)
    assert get_cell(updated, Cell(3, 2)) is OCCUPIED
    assert get_cell(grid, Cell(3, 2)) is UNOCCUPIED
    assert isinstance(updated, OccupancyGrid)
    with pytest.raises(OutOfBounds):
        get_cell(grid, Cell(7, 0))
