"""
upsetviz/plot/renderers/labels
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle

from .base import ArtistRegistry, apply_font, chart_transform

if TYPE_CHECKING:
    from ...core.layout import UpsetLayout
    from ...core.matrix import UpsetMatrix
    from ..interaction import InteractionState
    from ..style import StyleConfig


class SetLabelsRenderer:
    """
    Class for rendering set names above the dot-matrix columns.
    """

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
        Renders set labels, centered per column or rotated when columns are narrow.

        Args:
            ax (plt.Axes): Target axes.
            matrix (UpsetMatrix): Matrix being drawn.
            layout (UpsetLayout): Resolved geometry.
            state (InteractionState): Current hover/selection state.
            style (StyleConfig): Style configuration.

        Kwargs:
            registry (ArtistRegistry): Unused; set labels do not react to interaction.
        """
        transform = chart_transform(ax, layout)
        font = style.get("font", None)
        pad = style["set_label_pad"]
        for j, name in enumerate(matrix.sets):
            if layout.rotate_set_labels:
                # Rotated labels hang from the column center, right-aligned
                txt = ax.text(
                    layout.column_center(j),
                    layout.label_height - 2.0,
                    name,
                    ha="right",
                    va="baseline",
                    rotation=style["set_label_rotation"],
                    rotation_mode="anchor",
                    fontsize=layout.label_font_size,
                    color=style["text_color"],
                    transform=transform,
                )
            else:
                txt = ax.text(
                    layout.column_center(j),
                    layout.label_height - pad,
                    name,
                    ha="center",
                    va="baseline",
                    fontsize=layout.label_font_size,
                    color=style["text_color"],
                    transform=transform,
                )
            apply_font(txt, font)


class IntersectionLabelsRenderer:
    """
    Class for rendering (possibly truncated) intersection labels left of the dot matrix.
    """

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
        transform = chart_transform(ax, layout)
        font = style.get("font", None)
        x = -float(style["row_label_pad"])
        for i, (shown, full) in enumerate(zip(layout.row_labels, layout.row_titles)):
            txt = ax.text(
                x,
                layout.row_center(i),
                shown,
                ha="right",
                va="center",
                fontsize=layout.value_font_size,
                color=style["text_color"],
                transform=transform,
            )
            # Untruncated name stays available on the artist
            txt.set_label(full)
            apply_font(txt, font)


class HitSurfaceRenderer:
    """
    Class for rendering one transparent full-row surface per intersection, used for
    pointer hit-testing.
    """

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
        transform = chart_transform(ax, layout)
        for i, inter in enumerate(matrix.intersections):
            surface = Rectangle(
                (0.0, layout.row_top(i)),
                layout.chart_width,
                layout.cell_height,
                facecolor="none",
                edgecolor="none",
                transform=transform,
                zorder=10,
            )
            ax.add_patch(surface)
            registry.register_hit_surface(surface, row=i, key=inter.key)
