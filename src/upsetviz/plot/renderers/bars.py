"""
upsetviz/plot/renderers/bars
~~~~~~~~~~~~~~~~~~~~~~~~~~~~
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import matplotlib.pyplot as plt
from matplotlib.collections import LineCollection
from matplotlib.patches import Rectangle

from ..style import resolve_fill
from .base import ArtistRegistry, apply_font, chart_transform

if TYPE_CHECKING:
    from ...core.layout import UpsetLayout
    from ...core.matrix import UpsetMatrix
    from ..interaction import InteractionState
    from ..style import StyleConfig

# Bars fill the middle 80% of their row
_BAR_INSET = 0.1


class BarRenderer:
    """
    Class for rendering value bars, their numeric labels and the top value axis.
    """

    def __init__(self, *, show_values: bool = True, show_axis: bool = True) -> None:
        """
        Initializes the BarRenderer instance.

        Kwargs:
            show_values (bool): Whether to draw numeric value labels. Defaults to True.
            show_axis (bool): Whether to draw the top axis. Defaults to True.
        """
        self.show_values = show_values
        self.show_axis = show_axis

    def render(
        self,
        ax: plt.Axes,
        matrix: UpsetMatrix,
        layout: UpsetLayout,
        state: InteractionState,
        style: StyleConfig,
        *,
        registry: ArtistRegistry,
    ) -> None:
        """
        Renders the bar region.

        Args:
            ax (plt.Axes): Target axes.
            matrix (UpsetMatrix): Matrix being drawn.
            layout (UpsetLayout): Resolved geometry.
            state (InteractionState): Current hover/selection state.
            style (StyleConfig): Style configuration.

        Kwargs:
            registry (ArtistRegistry): Registry collecting recolorable artists.
        """
        transform = chart_transform(ax, layout)
        self._render_bars(ax, matrix, layout, state, registry, transform)
        if self.show_values:
            self._render_value_labels(ax, matrix, layout, style, transform)
        if self.show_axis:
            self._render_axis(ax, layout, style, transform)

    @staticmethod
    def _render_bars(ax, matrix, layout, state, registry, transform) -> None:
        for i, inter in enumerate(matrix.intersections):
            bar = Rectangle(
                (layout.bar_x, layout.bar_y + i * layout.cell_height + layout.cell_height * _BAR_INSET),
                layout.bar_length(inter.value),
                layout.cell_height * (1.0 - 2 * _BAR_INSET),
                facecolor=resolve_fill(
                    "bar",
                    selected=state.is_selected(inter.key),
                    hovered=state.is_hovered(inter.key),
                ),
                edgecolor="none",
                transform=transform,
                zorder=2,
            )
            ax.add_patch(bar)
            registry.register(bar, element="bar", key=inter.key)

    @staticmethod
    def _render_value_labels(ax, matrix, layout, style, transform) -> None:
        pad = layout.value_label_pad
        font = style.get("font", None)
        for i, inter in enumerate(matrix.intersections):
            end = layout.bar_x + layout.bar_length(inter.value)
            y = layout.bar_y + i * layout.cell_height + layout.cell_height / 2.0
            inside = layout.value_labels_inside[i]
            txt = ax.text(
                end - pad if inside else end + pad,
                y,
                str(inter.value),
                ha="right" if inside else "left",
                va="center",
                fontsize=layout.value_font_size,
                color=style["value_label_inside_color"] if inside else style["value_label_color"],
                transform=transform,
                zorder=5,
            )
            apply_font(txt, font)

    @staticmethod
    def _render_axis(ax, layout, style, transform) -> None:
        color = style["axis_color"]
        lw = style["axis_lw"]
        tick_len = style["axis_tick_length"]
        y = layout.bar_y
        xs = [layout.tick_x(t) for t in layout.ticks]
        # Domain line plus one upward tick per value
        segments = [((layout.bar_x, y), (layout.bar_x + layout.bar_width, y))]
        segments.extend(((x, y), (x, y - tick_len)) for x in xs)
        ax.add_collection(
            LineCollection(segments, colors=color, linewidths=lw, transform=transform, zorder=4)
        )
        font = style.get("font", None)
        for x, label in zip(xs, layout.tick_labels):
            txt = ax.text(
                x,
                y - tick_len - style["axis_tick_pad"],
                label,
                ha="center",
                va="bottom",
                fontsize=layout.value_font_size,
                color=style["text_color"],
                transform=transform,
                zorder=5,
            )
            apply_font(txt, font)
