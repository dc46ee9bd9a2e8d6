import math

import numpy as np
import pytest

from threshold_detection.core.errors import InvalidInput
from threshold_detection.core.models import Box, Direction, Grid, is_active


def test_grid_dimensions_and_access() -> None:
    grid = Grid([[0.1, 0.2, 0.3], [0.4, 0.5, 0.6]])

    assert grid.height() == 2
    assert grid.width() == 3
    assert grid.shape == (2, 3)
    assert grid.value(1, 2) == 0.6
    assert isinstance(grid.value(0, 0), float)


def test_grid_accepts_numpy_and_copies_source() -> None:
    source = np.array([[1, 2], [3, 4]])
    grid = Grid(source)
    source[0, 0] = 99

    assert grid.value(0, 0) == 1.0
    assert grid.values.dtype == np.float64
    with pytest.raises(ValueError):
        grid.values[0, 0] = 5.0


def test_grid_keeps_nan_cells() -> None:
    grid = Grid([[float("nan"), 1.0]])

    assert math.isnan(grid.value(0, 0))


@pytest.mark.parametrize(
    "source",
    [
        None,
        [],
        [[]],
        [[1.0, 2.0], [3.0]],
        [1.0, 2.0],
        [[[1.0]]],
        np.zeros((0, 3)),
        np.zeros((3, 0)),
        np.zeros(4),
        [["a", "b"]],
        5,
        3.0,
        object(),
    ],
)
def test_grid_rejects_malformed_sources(source) -> None:
    with pytest.raises(InvalidInput):
        Grid(source)


def test_invalid_input_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        Grid([[1.0], [1.0, 2.0]])


def test_box_extents_and_overlap() -> None:
    box = Box(x_start=1, y_start=2, x_length=3, y_length=4)

    assert box.x_end == 4
    assert box.y_end == 6
    assert box.contains(1, 2)
    assert box.contains(3, 5)
    assert not box.contains(4, 5)
    assert box.to_dict() == {"x_start": 1, "y_start": 2, "x_length": 3, "y_length": 4}

    assert box.overlaps_horizontally(Box(3, 0, 2, 1))
    assert not box.overlaps_horizontally(Box(4, 0, 2, 1))
    assert not box.overlaps_horizontally(Box(0, 0, 1, 1))


@pytest.mark.parametrize("args", [(-1, 0, 1, 1), (0, -1, 1, 1), (0, 0, 0, 1), (0, 0, 1, 0)])
def test_box_rejects_degenerate_values(args) -> None:
    with pytest.raises(InvalidInput):
        Box(*args)


def test_direction_offsets() -> None:
    offsets = {d.value for d in Direction.all_directions()}

    assert len(offsets) == 8
    assert (0, 0) not in offsets
    assert offsets == {(dx, dy) for dy in (-1, 0, 1) for dx in (-1, 0, 1)} - {(0, 0)}
    assert list(Direction)[0] is Direction.NORTHWEST


def test_is_active_is_strict_and_rejects_nan() -> None:
    assert is_active(0.6, 0.5)
    assert not is_active(0.5, 0.5)
    assert not is_active(float("nan"), -1e9)
    assert is_active(-0.5, -1.0)
