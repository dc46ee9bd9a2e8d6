import pytest

from threshold_detection.core.errors import InvalidInput
from threshold_detection.core.models import Box, Grid
from threshold_detection.perception.merger import EdgeWraparoundMerger
from threshold_detection.perception.scanner import RegionScanner


def test_region_split_by_top_and_bottom_edges_is_fused() -> None:
    grid = Grid(
        [
            [0.0, 0.9, 0.0],
            [0.0, 0.0, 0.0],
            [0.0, 0.0, 0.0],
            [0.0, 0.8, 0.0],
        ]
    )
    boxes = RegionScanner().scan(grid, 0.5)
    assert boxes == [Box(1, 0, 1, 1), Box(1, 3, 1, 1)]

    merged = EdgeWraparoundMerger().merge(grid.height(), boxes)

    assert merged == [Box(x_start=1, y_start=3, x_length=1, y_length=2)]


def test_fused_box_covers_both_horizontal_spans() -> None:
    bottom = Box(2, 5, 3, 2)
    top = Box(0, 0, 4, 3)

    merged = EdgeWraparoundMerger().merge(7, [bottom, top])

    assert merged == [Box(0, 5, 5, 5)]


def test_bottom_edge_accepts_one_row_of_tolerance() -> None:
    # Le bas s'arrête une ligne avant le bord : la fusion a quand même lieu
    boxes = [Box(1, 0, 1, 1), Box(1, 2, 1, 1)]

    merged = EdgeWraparoundMerger().merge(4, boxes)

    assert merged == [Box(1, 2, 1, 2)]


def test_exact_bottom_edge_without_tolerance() -> None:
    merger = EdgeWraparoundMerger(bottom_tolerance=0)

    assert merger.merge(4, [Box(1, 0, 1, 1), Box(1, 2, 1, 1)]) == [Box(1, 0, 1, 1), Box(1, 2, 1, 1)]
    assert merger.merge(4, [Box(1, 0, 1, 1), Box(1, 3, 1, 1)]) == [Box(1, 3, 1, 2)]


def test_top_edge_must_start_exactly_at_row_zero() -> None:
    boxes = [Box(1, 1, 1, 1), Box(1, 3, 1, 1)]

    assert EdgeWraparoundMerger().merge(4, boxes) == boxes


def test_bottom_two_rows_short_is_not_fused() -> None:
    boxes = [Box(1, 0, 1, 1), Box(1, 1, 1, 1)]

    assert EdgeWraparoundMerger().merge(4, boxes) == boxes


def test_horizontally_adjacent_boxes_are_not_fused() -> None:
    boxes = [Box(1, 0, 1, 1), Box(0, 3, 1, 1)]

    assert EdgeWraparoundMerger().merge(4, boxes) == boxes


def test_each_box_is_fused_at_most_once() -> None:
    grid = Grid(
        [
            [0.9, 0.9, 0.9, 0.9, 0.9],
            [0.0, 0.0, 0.0, 0.0, 0.0],
            [0.0, 0.0, 0.0, 0.0, 0.0],
            [0.9, 0.0, 0.0, 0.0, 0.9],
        ]
    )
    boxes = RegionScanner().scan(grid, 0.5)

    merged = EdgeWraparoundMerger().merge(grid.height(), boxes)

    assert merged == [Box(4, 3, 1, 1), Box(0, 3, 5, 2)]


def test_boxes_with_identical_coordinates_are_tracked_by_position() -> None:
    boxes = [Box(0, 3, 2, 1), Box(0, 0, 2, 1), Box(0, 0, 2, 1)]

    merged = EdgeWraparoundMerger().merge(4, boxes)

    assert merged == [Box(0, 0, 2, 1), Box(0, 3, 2, 2)]


def test_full_height_box_never_fuses_with_itself() -> None:
    boxes = [Box(0, 0, 1, 4)]

    assert EdgeWraparoundMerger().merge(4, boxes) == boxes


def test_unmerged_boxes_keep_order_and_fused_boxes_come_last() -> None:
    boxes = [Box(0, 0, 1, 1), Box(3, 1, 1, 1), Box(0, 4, 1, 1), Box(5, 2, 1, 1)]

    merged = EdgeWraparoundMerger().merge(5, boxes)

    assert merged == [Box(3, 1, 1, 1), Box(5, 2, 1, 1), Box(0, 4, 1, 2)]


def test_merged_box_may_exceed_grid_height() -> None:
    merged = EdgeWraparoundMerger().merge(3, [Box(0, 0, 2, 2), Box(0, 1, 2, 2)])

    assert merged == [Box(0, 1, 2, 4)]
    assert merged[0].y_length > 3


def test_empty_box_list_is_accepted() -> None:
    assert EdgeWraparoundMerger().merge(3, []) == []


def test_invalid_arguments_are_rejected() -> None:
    with pytest.raises(InvalidInput):
        EdgeWraparoundMerger().merge(0, [])
    with pytest.raises(InvalidInput):
        EdgeWraparoundMerger(bottom_tolerance=-1)
