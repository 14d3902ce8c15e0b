"""
upsetviz/plot/chart
~~~~~~~~~~~~~~~~~~~
"""

from __future__ import annotations

from os import PathLike
from typing import Any, Iterable, List, Optional, Tuple, Union

import matplotlib.pyplot as plt

from ..core.layout import DEFAULT_LAYOUT_PARAMS, LayoutParams, UpsetLayout, compute_layout
from ..core.matrix import ParsedFile, UpsetMatrix
from .interaction import ClickHandler, InteractionController, InteractionState
from .renderers.bars import BarRenderer
from .renderers.base import ArtistRegistry, Renderer
from .renderers.labels import HitSurfaceRenderer, IntersectionLabelsRenderer, SetLabelsRenderer
from .renderers.matrix import DotMatrixRenderer, MatrixFrameRenderer
from .renderers.tooltip import Tooltip
from .style import StyleConfig


def _default_layers() -> List[Renderer]:
    """
    Returns the renderer layers of a full draw, in drawing order.

    Returns:
        List[Renderer]: Frame, set labels, dot matrix, bars, intersection labels, hit surfaces.
    """
    return [
        MatrixFrameRenderer(),
        SetLabelsRenderer(),
        DotMatrixRenderer(),
        BarRenderer(),
        IntersectionLabelsRenderer(),
        HitSurfaceRenderer(),
    ]


class UpsetChart:
    """
    Class for one mounted UpSet chart: a Matplotlib figure sized in pixels, its layout,
    its tooltip overlay and its interaction controller.

    Two update paths exist. `draw()` recomputes the layout and redraws every layer; it
    runs for any change to the matrix, the dimensions, the font size or the selection.
    `recolor()` only repaints fills of already drawn cells, dots and bars; it runs for
    hover changes.
    """

    def __init__(
        self,
        matrix: UpsetMatrix,
        *,
        width: Optional[float] = None,
        height: Optional[float] = None,
        font_size: Optional[float] = None,
        style: Optional[StyleConfig] = None,
        layout_params: LayoutParams = DEFAULT_LAYOUT_PARAMS,
        on_click: Optional[ClickHandler] = None,
        interactive: bool = True,
    ) -> None:
        """
        Initializes (mounts) the UpsetChart. Nothing is drawn until `draw()` is called.

        Args:
            matrix (UpsetMatrix): Matrix to draw.

        Kwargs:
            width (Optional[float]): Total width in pixels. Defaults to style "width".
            height (Optional[float]): Total height in pixels. Defaults to style "height".
            font_size (Optional[float]): Base font size in pixels. Defaults to style "font_size".
            style (Optional[StyleConfig]): Style configuration. Defaults to None (defaults).
            layout_params (LayoutParams): Layout constants. Defaults to DEFAULT_LAYOUT_PARAMS.
            on_click (Optional[ClickHandler]): External row click handler. Defaults to None.
            interactive (bool): Whether to connect pointer events. Defaults to True.

        Raises:
            TypeError: If `matrix` is not an UpsetMatrix.
        """
        if not isinstance(matrix, UpsetMatrix):
            raise TypeError(f"UpsetChart expects an UpsetMatrix, got {type(matrix).__name__}")
        self.style = style if style is not None else StyleConfig()
        self.matrix = matrix
        self.width = float(width if width is not None else self.style["width"])
        self.height = float(height if height is not None else self.style["height"])
        self.font_size = float(font_size if font_size is not None else self.style["font_size"])
        self.layout_params = layout_params
        self.layout: Optional[UpsetLayout] = None
        self.registry = ArtistRegistry()
        self.layers: List[Renderer] = _default_layers()

        dpi = float(self.style["dpi"])
        self.fig = plt.figure(figsize=self._figsize(dpi), dpi=dpi)
        self.fig.patch.set_facecolor(self.style["background_color"])
        self.ax = self.fig.add_axes((0.0, 0.0, 1.0, 1.0), frameon=False)
        self._reset_axes()

        self.tooltip = Tooltip(self.fig, self.style)
        self.controller = InteractionController(self, on_click=on_click)
        if interactive:
            self.controller.connect()
        self._closed = False
        self._drawn = False

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def _figsize(self, dpi: float) -> Tuple[float, float]:
        return (max(self.width, 1.0) / dpi, max(self.height, 1.0) / dpi)

    def _reset_axes(self) -> None:
        """
        Clears the axes and sets pixel coordinates with the origin at the top-left.
        """
        self.ax.clear()
        self.ax.set_axis_off()
        self.ax.set_autoscale_on(False)
        self.ax.set_xlim(0.0, max(self.width, 1.0))
        self.ax.set_ylim(max(self.height, 1.0), 0.0)

    @property
    def state(self) -> InteractionState:
        return self.controller.state

    @property
    def is_empty(self) -> bool:
        """
        Returns True when the last draw produced no chart (empty matrix or no room).
        """
        return self.layout is None

    def draw(self) -> UpsetChart:
        """
        Recomputes the layout and redraws every layer.

        Returns:
            UpsetChart: This chart, for chaining.
        """
        self._ensure_open()
        self.registry.clear()
        self._reset_axes()
        self.layout = compute_layout(
            self.matrix,
            self.width,
            self.height,
            self.font_size,
            params=self.layout_params,
        )
        if self.layout is not None:
            state = self.controller.state
            for layer in self.layers:
                layer.render(
                    self.ax,
                    self.matrix,
                    self.layout,
                    state,
                    self.style,
                    registry=self.registry,
                )
        self._drawn = True
        self.request_redraw()
        return self

    def recolor(self) -> UpsetChart:
        """
        Repaints cell, dot and bar fills from the current interaction state without
        recomputing the layout.

        Returns:
            UpsetChart: This chart, for chaining.
        """
        self.registry.recolor(self.controller.state)
        self.request_redraw()
        return self

    def request_redraw(self) -> None:
        if not self._closed:
            self.fig.canvas.draw_idle()

    def update(
        self,
        *,
        matrix: Optional[UpsetMatrix] = None,
        width: Optional[float] = None,
        height: Optional[float] = None,
        font_size: Optional[float] = None,
    ) -> UpsetChart:
        """
        Applies new inputs and performs a full draw.

        Kwargs:
            matrix (Optional[UpsetMatrix]): New matrix. Defaults to None (unchanged).
            width (Optional[float]): New width in pixels. Defaults to None (unchanged).
            height (Optional[float]): New height in pixels. Defaults to None (unchanged).
            font_size (Optional[float]): New font size. Defaults to None (unchanged).

        Returns:
            UpsetChart: This chart, for chaining.
        """
        if matrix is not None:
            if not isinstance(matrix, UpsetMatrix):
                raise TypeError(f"matrix must be an UpsetMatrix, got {type(matrix).__name__}")
            if matrix is not self.matrix:
                self.controller.reset()
            self.matrix = matrix
        if width is not None:
            self.width = float(width)
        if height is not None:
            self.height = float(height)
        if font_size is not None:
            self.font_size = float(font_size)
        if width is not None or height is not None:
            self.fig.set_size_inches(*self._figsize(self.fig.get_dpi()), forward=True)
        return self.draw()

    # ------------------------------------------------------------------
    # Selection API
    # ------------------------------------------------------------------

    @property
    def selected_intersections(self) -> Tuple[str, ...]:
        return self.controller.state.selected

    def set_selected_intersections(self, keys: Iterable[str]) -> UpsetChart:
        """
        Replaces the selected intersections and redraws.

        Args:
            keys (Iterable[str]): Combination keys to select.

        Returns:
            UpsetChart: This chart, for chaining.
        """
        self.controller.set_selected(keys)
        return self

    def set_on_intersection_click(self, callback: Optional[ClickHandler]) -> UpsetChart:
        """
        Registers an external row click handler. While set, clicks call it with the
        row's key and do not change the local selection.

        Args:
            callback (Optional[ClickHandler]): Handler, or None to restore toggling.

        Returns:
            UpsetChart: This chart, for chaining.
        """
        self.controller.on_click = callback
        return self

    # ------------------------------------------------------------------
    # Output and lifecycle
    # ------------------------------------------------------------------

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("UpsetChart has been closed.")

    def save(self, path: Union[str, PathLike[str]], **kwargs: Any) -> None:
        """
        Saves the drawn chart. The format follows the file extension (e.g. .svg, .png).
        The tooltip overlay is never part of the output.

        Args:
            path (Union[str, PathLike[str]]): Output path.

        Kwargs:
            **kwargs: Additional matplotlib savefig options. Defaults to {}.

        Raises:
            RuntimeError: If the chart has been closed.
        """
        self._ensure_open()
        if not self._drawn:
            self.draw()
        was_visible = self.tooltip.visible
        self.tooltip.hide()
        try:
            self.fig.savefig(
                path,
                facecolor=self.fig.get_facecolor(),
                **kwargs,
            )
        finally:
            self.tooltip.set_visible(was_visible)

    def show(self) -> None:
        """
        Shows the chart, drawing it first if needed.
        """
        self._ensure_open()
        if not self._drawn:
            self.draw()
        plt.show()

    def close(self) -> None:
        """
        Unmounts the chart: disconnects events, removes the tooltip and closes the figure.
        """
        if self._closed:
            return
        self.controller.disconnect()
        self.tooltip.remove()
        self.registry.clear()
        plt.close(self.fig)
        self._closed = True

    def __enter__(self) -> UpsetChart:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


def plot_upset(
    source: Union[UpsetMatrix, ParsedFile],
    *,
    width: Optional[float] = None,
    height: Optional[float] = None,
    font_size: Optional[float] = None,
    style: Optional[StyleConfig] = None,
    on_click: Optional[ClickHandler] = None,
    interactive: bool = True,
) -> UpsetChart:
    """
    Mounts and draws an UpSet chart.

    A ParsedFile whose status is not VALID is not drawn: the chart is mounted with an
    empty matrix.

    Args:
        source (Union[UpsetMatrix, ParsedFile]): Matrix or parsed file to draw.

    Kwargs:
        width (Optional[float]): Total width in pixels. Defaults to None (style default).
        height (Optional[float]): Total height in pixels. Defaults to None (style default).
        font_size (Optional[float]): Base font size. Defaults to None (style default).
        style (Optional[StyleConfig]): Style configuration. Defaults to None.
        on_click (Optional[ClickHandler]): External row click handler. Defaults to None.
        interactive (bool): Whether to connect pointer events. Defaults to True.

    Returns:
        UpsetChart: Drawn chart.

    Raises:
        TypeError: If `source` is neither an UpsetMatrix nor a ParsedFile.
    """
    if isinstance(source, ParsedFile):
        matrix = source.data if source.is_valid else UpsetMatrix.empty()
    elif isinstance(source, UpsetMatrix):
        matrix = source
    else:
        raise TypeError("plot_upset expects an UpsetMatrix or a ParsedFile")

    chart = UpsetChart(
        matrix,
        width=width,
        height=height,
        font_size=font_size,
        style=style,
        on_click=on_click,
        interactive=interactive,
    )
    return chart.draw()
