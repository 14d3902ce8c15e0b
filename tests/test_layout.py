"""
tests/test_layout
~~~~~~~~~~~~~~~~~
"""

import pytest

from upsetviz import UpsetMatrix, compute_layout
from upsetviz.core.layout import (
    LayoutParams,
    compute_ticks,
    resolve_label_font_size,
    resolve_margins,
)


@pytest.mark.api
def test_layout_geometry(toy_matrix):
    """
    Ensures margins, splits and cell sizes follow the layout rules.

    Args:
        toy_matrix (UpsetMatrix): Toy matrix fixture.
    """
    layout = compute_layout(toy_matrix, 500, 400, 12)
    assert layout is not None
    assert layout.margins == (30.0, 60.0, 10.0, 75.0)
    assert layout.chart_width == pytest.approx(365.0)
    assert layout.chart_height == pytest.approx(360.0)
    assert layout.label_font_size == pytest.approx(12.0)
    assert layout.value_font_size == pytest.approx(9.6)
    assert layout.label_height == pytest.approx(28.8)
    assert layout.dot_height == pytest.approx(331.2)
    assert layout.dot_width == pytest.approx(182.5)
    assert layout.cell_width == pytest.approx(layout.dot_width / layout.n_sets)
    assert layout.cell_height == pytest.approx(30.0)
    assert layout.bar_x == pytest.approx(182.5 + 9.125)
    assert layout.bar_width == pytest.approx(365.0 - 182.5 - 9.125 - 40.0)
    assert layout.bar_length(layout.max_value) == pytest.approx(layout.bar_width)
    assert layout.bar_length(0) == 0.0


@pytest.mark.api
def test_cell_height_is_capped_and_shrinks():
    """
    Ensures row height never exceeds 30 px and shrinks with many rows.
    """
    few = UpsetMatrix.from_records([("A", 1), ("B", 2)])
    many = UpsetMatrix.from_records([(f"S{i}", i) for i in range(100)])
    assert compute_layout(few, 500, 800, 16).cell_height == pytest.approx(30.0)
    layout = compute_layout(many, 500, 400, 16)
    assert layout.cell_height < 30.0
    assert layout.cell_height * layout.n_rows == pytest.approx(layout.dot_height)


@pytest.mark.api
def test_empty_matrix_has_no_layout():
    """
    Ensures an empty matrix produces no layout.
    """
    assert compute_layout(UpsetMatrix.empty(), 500, 500, 16) is None


@pytest.mark.api
@pytest.mark.parametrize("width, height", [(100, 500), (500, 40), (0, 0), (float("nan"), 500)])
def test_no_drawing_area_has_no_layout(toy_matrix, width, height):
    """
    Ensures dimensions leaving no positive area after margins produce no layout.

    Args:
        toy_matrix (UpsetMatrix): Toy matrix fixture.
        width (float): Total width.
        height (float): Total height.
    """
    assert compute_layout(toy_matrix, width, height, 16) is None


@pytest.mark.unit
def test_margins():
    """
    Ensures side margins take the larger of their minimum and width fraction.
    """
    assert resolve_margins(300) == (30.0, 60.0, 10.0, 70.0)
    assert resolve_margins(1000) == (30.0, 100.0, 10.0, 150.0)


@pytest.mark.unit
@pytest.mark.parametrize(
    "name_length, hint, expected",
    [(4, 16, 12.0), (4, 10, 10.0), (20, 16, 9.0), (40, 16, 8.0), (40, 6, 6.0)],
)
def test_adaptive_label_font(name_length, hint, expected):
    """
    Ensures longer set names shrink the label font within its bounds.

    Args:
        name_length (int): Longest set name length.
        hint (float): Font size hint.
        expected (float): Resolved font size.
    """
    assert resolve_label_font_size(name_length, hint) == pytest.approx(expected)


@pytest.mark.api
def test_set_labels_rotate_for_many_narrow_columns(wide_matrix, toy_matrix):
    """
    Ensures set labels rotate only with more than five sets in narrow columns.

    Args:
        wide_matrix (UpsetMatrix): Eight-set matrix.
        toy_matrix (UpsetMatrix): Two-set matrix.
    """
    narrow = compute_layout(wide_matrix, 300, 400, 12)
    assert narrow.cell_width < 20
    assert narrow.rotate_set_labels
    assert not compute_layout(wide_matrix, 1000, 400, 12).rotate_set_labels
    # Narrow columns alone are not enough
    assert not compute_layout(toy_matrix, 140, 400, 12).rotate_set_labels


@pytest.mark.api
def test_intersection_labels_are_truncated(toy_matrix):
    """
    Ensures labels longer than the left margin allows end in an ellipsis.

    Args:
        toy_matrix (UpsetMatrix): Toy matrix fixture.
    """
    layout = compute_layout(toy_matrix, 500, 400, 12)
    # floor(75 / (12 * 0.6)) - 2
    assert layout.max_label_chars == 8
    assert layout.row_labels == ("SetA", "SetB", "SetA,...")
    assert layout.row_titles == ("SetA", "SetB", "SetA,SetB")
    wide = compute_layout(toy_matrix, 1000, 400, 12)
    assert wide.row_labels == wide.row_titles


@pytest.mark.api
def test_ticks_within_domain(toy_matrix):
    """
    Ensures there are at most five ticks, all within [0, max], starting at 0.

    Args:
        toy_matrix (UpsetMatrix): Toy matrix fixture.
    """
    layout = compute_layout(toy_matrix, 500, 400, 12)
    assert 2 <= len(layout.ticks) <= 5
    assert layout.ticks[0] == 0.0
    assert all(0.0 <= t <= 150.0 for t in layout.ticks)
    assert layout.tick_labels[0] == "0"
    assert len(layout.tick_labels) == len(layout.ticks)


@pytest.mark.unit
@pytest.mark.parametrize("max_value", [1, 3, 5, 7, 10, 45, 100, 150, 1000, 1999, 2_500_000])
def test_compute_ticks_counts(max_value):
    """
    Ensures tick generation respects the tick budget for small and large domains.

    Args:
        max_value (int): Domain maximum.
    """
    ticks, labels = compute_ticks(max_value)
    assert 1 <= len(ticks) <= 5
    assert all(0 <= t <= max_value for t in ticks)
    assert list(ticks) == sorted(ticks)
    assert len(labels) == len(ticks)


@pytest.mark.unit
def test_compute_ticks_zero_domain():
    """
    Ensures an all-zero matrix yields a single 0 tick.
    """
    assert compute_ticks(0) == ((0.0,), ("0",))


@pytest.mark.api
def test_value_label_moves_inside_long_bar():
    """
    Ensures a value label that would overflow the chart is flagged to sit inside its bar.
    """
    matrix = UpsetMatrix.from_records([("A", 1234567), ("B", 1)])
    layout = compute_layout(matrix, 500, 400, 12)
    assert layout.value_labels_inside == (True, False)


@pytest.mark.api
def test_zero_counts_draw_zero_bars():
    """
    Ensures an all-zero matrix lays out with zero-length bars.
    """
    matrix = UpsetMatrix.from_records([("A", 0), ("B", 0)])
    layout = compute_layout(matrix, 500, 400, 12)
    assert layout is not None
    assert layout.max_value == 0
    assert layout.bar_length(0) == 0.0


@pytest.mark.api
def test_layout_is_deterministic(wide_matrix):
    """
    Ensures identical inputs give identical geometry.

    Args:
        wide_matrix (UpsetMatrix): Eight-set matrix.
    """
    assert compute_layout(wide_matrix, 640, 480, 14) == compute_layout(wide_matrix, 640, 480, 14)


@pytest.mark.unit
def test_custom_params(toy_matrix):
    """
    Ensures layout constants can be overridden.

    Args:
        toy_matrix (UpsetMatrix): Toy matrix fixture.
    """
    layout = compute_layout(toy_matrix, 500, 400, 12, params=LayoutParams(max_cell_height=20.0))
    assert layout.cell_height == pytest.approx(20.0)
