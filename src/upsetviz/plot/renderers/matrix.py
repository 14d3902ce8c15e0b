"""
upsetviz/plot/renderers/matrix
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
"""

from __future__ import annotations

from typing import Optional, TYPE_CHECKING

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.patches import Circle, Rectangle

from ..style import resolve_fill
from .base import ArtistRegistry, chart_transform

if TYPE_CHECKING:
    from ...core.layout import UpsetLayout
    from ...core.matrix import UpsetMatrix
    from ..interaction import InteractionState
    from ..style import StyleConfig


class MatrixFrameRenderer:
    """
    Class for rendering the bounding rectangle of the dot matrix.
    """

    def __init__(self, *, color: Optional[str] = None, lw: Optional[float] = None) -> None:
        """
        Initializes the MatrixFrameRenderer instance.

        Kwargs:
            color (Optional[str]): Frame color override. Defaults to None.
            lw (Optional[float]): Frame linewidth override. Defaults to None.
        """
        self.color = color
        self.lw = lw

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
        ax.add_patch(
            Rectangle(
                (0.0, layout.label_height),
                layout.dot_width,
                layout.dot_height,
                fill=False,
                edgecolor=self.color if self.color is not None else style["matrix_border_color"],
                linewidth=self.lw if self.lw is not None else style["matrix_border_lw"],
                transform=chart_transform(ax, layout),
                zorder=4,
            )
        )


class DotMatrixRenderer:
    """
    Class for rendering one row per intersection: a background cell and a membership
    dot for every set.
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
        Renders background cells and membership dots.

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
        included = matrix.membership().to_numpy(dtype=bool)
        row_tops = layout.row_tops()
        col_lefts = np.arange(layout.n_sets, dtype=float) * layout.cell_width
        radius = layout.dot_radius

        for i, inter in enumerate(matrix.intersections):
            selected = state.is_selected(inter.key)
            hovered = state.is_hovered(inter.key)
            for j in range(layout.n_sets):
                cell = Rectangle(
                    (col_lefts[j], row_tops[i]),
                    layout.cell_width,
                    layout.cell_height,
                    facecolor=resolve_fill(
                        "cell", selected=selected, hovered=hovered, included=included[i, j]
                    ),
                    edgecolor=style["cell_edge_color"],
                    linewidth=style["cell_edge_lw"],
                    transform=transform,
                    zorder=2,
                )
                ax.add_patch(cell)
                registry.register(cell, element="cell", key=inter.key, included=included[i, j])

                dot = Circle(
                    (col_lefts[j] + layout.cell_width / 2.0, row_tops[i] + layout.cell_height / 2.0),
                    radius,
                    facecolor=resolve_fill(
                        "dot", selected=selected, hovered=hovered, included=included[i, j]
                    ),
                    edgecolor=style["dot_edge_color"],
                    linewidth=style["dot_edge_lw"],
                    transform=transform,
                    zorder=3,
                )
                ax.add_patch(dot)
                registry.register(dot, element="dot", key=inter.key, included=included[i, j])
