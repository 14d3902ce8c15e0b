"""
upsetviz/core/layout
~~~~~~~~~~~~~~~~~~~~
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import NamedTuple, Optional, Tuple, TYPE_CHECKING

import numpy as np
from matplotlib.ticker import MaxNLocator

from ..text.labels import estimate_text_width, format_si, max_label_chars, truncate_label

if TYPE_CHECKING:
    from .matrix import UpsetMatrix


class Margins(NamedTuple):
    """
    Pixel margins around the chart area.
    """

    top: float
    right: float
    bottom: float
    left: float


@dataclass(frozen=True)
class LayoutParams:
    """
    Data class for the fixed constants of the UpSet layout.
    """

    margin_top: float = 30.0
    margin_bottom: float = 10.0
    min_margin_right: float = 60.0
    margin_right_frac: float = 0.10
    min_margin_left: float = 70.0
    margin_left_frac: float = 0.15
    max_label_font_size: float = 12.0
    min_label_font_size: float = 8.0
    label_font_base: float = 14.0
    label_font_name_divisor: float = 4.0
    label_height_font_factor: float = 1.5
    label_height_frac: float = 0.08
    dot_width_frac: float = 0.5
    spacer_frac: float = 0.025
    bar_label_reserve: float = 40.0
    max_cell_height: float = 30.0
    max_ticks: int = 5
    max_value_font_size: float = 10.0
    value_font_factor: float = 0.8
    value_label_pad: float = 5.0
    rotate_below_cell_width: float = 20.0
    rotate_above_set_count: int = 5


DEFAULT_LAYOUT_PARAMS = LayoutParams()


@dataclass(frozen=True)
class UpsetLayout:
    """
    Data class for the resolved pixel geometry of one UpSet chart.

    All coordinates are relative to the chart origin, i.e. the top-left corner of the
    area inside the margins, with y growing downward.
    """

    width: float
    height: float
    margins: Margins
    chart_width: float
    chart_height: float
    label_font_size: float
    value_font_size: float
    label_height: float
    dot_height: float
    dot_width: float
    spacer_width: float
    bar_x: float
    bar_y: float
    bar_width: float
    cell_width: float
    cell_height: float
    n_sets: int
    n_rows: int
    max_value: int
    ticks: Tuple[float, ...]
    tick_labels: Tuple[str, ...]
    rotate_set_labels: bool
    max_label_chars: int
    row_labels: Tuple[str, ...]
    row_titles: Tuple[str, ...]
    value_labels_inside: Tuple[bool, ...]
    value_label_pad: float = 5.0

    @property
    def dot_radius(self) -> float:
        """
        Returns the membership dot radius: a third of the smaller cell side.
        """
        return min(self.cell_height, self.cell_width) / 3.0

    def bar_length(self, value: float) -> float:
        """
        Maps a count to a bar length with the linear scale [0, max_value] -> [0, bar_width].

        Args:
            value (float): Intersection count.

        Returns:
            float: Bar length in pixels (0 when the maximum count is 0).
        """
        if self.max_value <= 0:
            return 0.0
        return float(value) / float(self.max_value) * self.bar_width

    def tick_x(self, tick: float) -> float:
        """
        Returns the x coordinate of an axis tick.
        """
        return self.bar_x + self.bar_length(tick)

    def row_top(self, row: int) -> float:
        """
        Returns the top y coordinate of an intersection row.

        Args:
            row (int): Row index.

        Returns:
            float: Y coordinate relative to the chart origin.
        """
        return self.label_height + row * self.cell_height

    def row_center(self, row: int) -> float:
        """
        Returns the vertical center of an intersection row.

        Args:
            row (int): Row index.

        Returns:
            float: Y coordinate relative to the chart origin.
        """
        return self.row_top(row) + self.cell_height / 2.0

    def column_left(self, col: int) -> float:
        """
        Returns the left x coordinate of a set column.

        Args:
            col (int): Column index.

        Returns:
            float: X coordinate relative to the chart origin.
        """
        return col * self.cell_width

    def column_center(self, col: int) -> float:
        """
        Returns the horizontal center of a set column.

        Args:
            col (int): Column index.

        Returns:
            float: X coordinate relative to the chart origin.
        """
        return self.column_left(col) + self.cell_width / 2.0

    def row_tops(self) -> np.ndarray:
        """
        Returns the top y coordinate of every intersection row.

        Returns:
            np.ndarray: Array of shape (n_rows,).
        """
        return self.label_height + np.arange(self.n_rows, dtype=float) * self.cell_height


def resolve_label_font_size(
    max_set_name_length: int,
    font_size: float,
    params: LayoutParams = DEFAULT_LAYOUT_PARAMS,
) -> float:
    """
    Resolves the adaptive label font size: longer set names shrink the font.

    Args:
        max_set_name_length (int): Length of the longest set name.
        font_size (float): Font size hint.
        params (LayoutParams): Layout constants. Defaults to DEFAULT_LAYOUT_PARAMS.

    Returns:
        float: min(12, font_size, max(8, 14 - max_set_name_length / 4)).
    """
    shrunk = params.label_font_base - max_set_name_length / params.label_font_name_divisor
    return min(params.max_label_font_size, float(font_size), max(params.min_label_font_size, shrunk))


def resolve_margins(width: float, params: LayoutParams = DEFAULT_LAYOUT_PARAMS) -> Margins:
    """
    Resolves chart margins for a total width.

    Args:
        width (float): Total width in pixels.
        params (LayoutParams): Layout constants. Defaults to DEFAULT_LAYOUT_PARAMS.

    Returns:
        Margins: Top, right, bottom and left margins.
    """
    return Margins(
        top=params.margin_top,
        right=max(params.min_margin_right, width * params.margin_right_frac),
        bottom=params.margin_bottom,
        left=max(params.min_margin_left, width * params.margin_left_frac),
    )


def compute_ticks(
    max_value: int,
    params: LayoutParams = DEFAULT_LAYOUT_PARAMS,
) -> Tuple[Tuple[float, ...], Tuple[str, ...]]:
    """
    Computes at most `max_ticks` round tick values within [0, max_value] and their
    SI-formatted labels.

    Args:
        max_value (int): Upper end of the bar-scale domain.
        params (LayoutParams): Layout constants. Defaults to DEFAULT_LAYOUT_PARAMS.

    Returns:
        Tuple[Tuple[float, ...], Tuple[str, ...]]: (tick values, tick labels).
    """
    if max_value <= 0:
        return (0.0,), (format_si(0),)
    # nbins counts intervals, so the locator returns up to nbins + 1 values
    nbins = max(1, min(params.max_ticks - 1, math.ceil(max_value)))
    locator = MaxNLocator(nbins=nbins, steps=[1, 2, 5, 10])
    values = locator.tick_values(0, max_value)
    eps = max_value * 1e-9
    ticks = tuple(float(v) for v in values if -eps <= v <= max_value + eps)[: params.max_ticks]
    return ticks, tuple(format_si(v) for v in ticks)


def compute_layout(
    matrix: UpsetMatrix,
    width: float,
    height: float,
    font_size: float,
    *,
    params: LayoutParams = DEFAULT_LAYOUT_PARAMS,
) -> Optional[UpsetLayout]:
    """
    Computes the chart geometry for a matrix and a pixel budget. The result is a pure
    function of its inputs; callers recompute it whenever any input changes.

    Args:
        matrix (UpsetMatrix): Parsed sets and intersections.
        width (float): Total width in pixels.
        height (float): Total height in pixels.
        font_size (float): Font size hint in pixels.

    Kwargs:
        params (LayoutParams): Layout constants. Defaults to DEFAULT_LAYOUT_PARAMS.

    Returns:
        Optional[UpsetLayout]: Geometry, or None when there is nothing to draw (no sets,
            no intersections, or no positive drawing area after margins).
    """
    if matrix.is_empty:
        return None
    if not all(math.isfinite(v) for v in (width, height, font_size)):
        return None

    margins = resolve_margins(width, params)
    chart_width = width - margins.left - margins.right
    chart_height = height - margins.top - margins.bottom
    if chart_width <= 0 or chart_height <= 0:
        return None

    label_font_size = resolve_label_font_size(matrix.max_set_name_length(), font_size, params)
    value_font_size = min(params.max_value_font_size, label_font_size * params.value_font_factor)

    # Vertical split: set-name row on top, dot matrix and bars below
    label_height = max(
        label_font_size * params.label_height_font_factor,
        chart_height * params.label_height_frac,
    )
    dot_height = chart_height - label_height
    if dot_height <= 0:
        return None

    # Horizontal split: dot matrix | spacer | bars | value-label reserve
    dot_width = chart_width * params.dot_width_frac
    spacer_width = chart_width * params.spacer_frac
    bar_x = dot_width + spacer_width
    bar_width = max(0.0, chart_width - dot_width - spacer_width - params.bar_label_reserve)

    n_sets = matrix.n_sets
    n_rows = matrix.n_intersections
    cell_width = dot_width / n_sets
    cell_height = min(params.max_cell_height, dot_height / n_rows)

    max_value = matrix.max_intersection_value()
    ticks, tick_labels = compute_ticks(max_value, params)

    rotate = cell_width < params.rotate_below_cell_width and n_sets > params.rotate_above_set_count

    max_chars = max_label_chars(margins.left, label_font_size)
    keys = matrix.keys()
    row_labels = tuple(truncate_label(key, max_chars) for key in keys)

    # Value labels that would run past the chart edge are drawn inside the bar
    lengths = _scale_values([inter.value for inter in matrix.intersections], max_value, bar_width)
    inside = tuple(
        bool(
            bar_x
            + length
            + estimate_text_width(str(inter.value), value_font_size)
            + 2 * params.value_label_pad
            > chart_width
        )
        for inter, length in zip(matrix.intersections, lengths)
    )

    return UpsetLayout(
        width=float(width),
        height=float(height),
        margins=margins,
        chart_width=chart_width,
        chart_height=chart_height,
        label_font_size=label_font_size,
        value_font_size=value_font_size,
        label_height=label_height,
        dot_height=dot_height,
        dot_width=dot_width,
        spacer_width=spacer_width,
        bar_x=bar_x,
        bar_y=label_height,
        bar_width=bar_width,
        cell_width=cell_width,
        cell_height=cell_height,
        n_sets=n_sets,
        n_rows=n_rows,
        max_value=max_value,
        ticks=ticks,
        tick_labels=tick_labels,
        rotate_set_labels=rotate,
        max_label_chars=max_chars,
        row_labels=row_labels,
        row_titles=keys,
        value_labels_inside=inside,
        value_label_pad=params.value_label_pad,
    )


def _scale_values(values, max_value: float, bar_width: float) -> np.ndarray:
    """
    Applies the linear bar scale [0, max_value] -> [0, bar_width] to many values.

    Args:
        values (Sequence[float]): Counts.
        max_value (float): Domain maximum.
        bar_width (float): Range maximum in pixels.

    Returns:
        np.ndarray: Bar lengths in pixels (all zero when max_value is 0).
    """
    arr = np.asarray(values, dtype=float)
    if max_value <= 0:
        return np.zeros_like(arr)
    return arr / float(max_value) * bar_width
