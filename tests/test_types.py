import numpy as np
import pytest

from occgrid import (
    OCCUPIED,
    UNKNOWN,
    UNOCCUPIED,
    Cell,
    GridMetadata,
    InvalidArgument,
    Occupancy,
    OccupancyGrid,
    OutOfBounds,
    Pose,
    Quaternion,
    SensorDescription,
)


def test_occupancy_sentinels_are_distinct() -> None:
    assert len({OCCUPIED, UNOCCUPIED, UNKNOWN}) == 3
    assert UNKNOWN.value not in (OCCUPIED.value, UNOCCUPIED.value)
    assert not isinstance(OCCUPIED, int)
    assert Occupancy(100) is OCCUPIED


@pytest.mark.parametrize("res", [0.0, -0.1, float("nan")])
def test_metadata_rejects_bad_resolution(res: float) -> None:
    with pytest.raises(InvalidArgument):
        GridMetadata(resolution=res, width=2, height=2)


def test_metadata_rejects_negative_extent() -> None:
    with pytest.raises(InvalidArgument):
        GridMetadata(resolution=1.0, width=-1, height=2)


def test_grid_validates_length_and_values() -> None:
    info = GridMetadata(resolution=1.0, width=2, height=2)
    with pytest.raises(InvalidArgument):
        OccupancyGrid(info, [0, 0, 0])
    with pytest.raises(InvalidArgument):
        OccupancyGrid(info, [0, 0, 0, 50])
    with pytest.raises(InvalidArgument):
        OccupancyGrid(info, [0, 0, 0, 255])


def test_grid_data_is_read_only_copy() -> None:
    src = np.zeros(6, dtype=np.int8)
    grid = OccupancyGrid(GridMetadata(resolution=1.0, width=3, height=2), src)
    src[0] = 100
    assert grid.get(Cell(0, 0)) is UNOCCUPIED
    with pytest.raises(ValueError):
        grid.data[0] = 100


def test_from_array_is_row_major() -> None:
    arr = np.zeros((2, 3), dtype=bool)
    arr[1, 2] = True
    grid = OccupancyGrid.from_array(arr, resolution=0.5)
    assert grid.info.width == 3 and grid.info.height == 2
    assert grid.data[1 * 3 + 2] == OCCUPIED.value
    assert grid.get(Cell(2, 1)) is OCCUPIED
    with pytest.raises(OutOfBounds):
        grid.get(Cell(3, 1))


def test_with_cells_returns_new_grid() -> None:
    grid = OccupancyGrid.from_array(np.zeros((3, 3), dtype=bool))
    other = grid.with_cells([Cell(0, 0), Cell(2, 2)], UNKNOWN)
    assert other != grid
    assert int(other.unknown_mask().sum()) == 2
    assert int(grid.unknown_mask().sum()) == 0


def test_quaternion_yaw_round_trip() -> None:
    for yaw in (-3.0, -1.0, 0.0, 0.5, 3.0):
        assert Quaternion.from_yaw(yaw).yaw() == pytest.approx(yaw)
    assert Pose().yaw == 0.0


def test_sensor_description_derives_sample_count() -> None:
    s = SensorDescription(angle_min=-1.0, angle_increment=0.5, range_min=0.0, range_max=5.0, angle_max=1.0)
    assert s.sample_count == 5
    assert np.allclose(s.bearings(), [-1.0, -0.5, 0.0, 0.5, 1.0])
    t = SensorDescription(angle_min=0.0, angle_increment=0.1, range_min=0.0, range_max=5.0, sample_count=3)
    assert t.angle_max == pytest.approx(0.2)
    u = SensorDescription(angle_min=0.0, angle_increment=0.1, range_min=0.0, range_max=5.0, sample_count=3, angle_max=0.2)
    assert u.sample_count == 3


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(sample_count=0),
        dict(sample_count=-2),
        dict(sample_count=3, range_max=0.0),
        dict(sample_count=3, range_min=6.0),
        dict(sample_count=3, angle_max=5.0),
        dict(),
    ],
)
def test_sensor_description_rejects_malformed(kwargs: dict) -> None:
    base = dict(angle_min=0.0, angle_increment=0.1, range_min=0.0, range_max=5.0)
    base.update(kwargs)
    with pytest.raises(InvalidArgument):
        SensorDescription(**base)
