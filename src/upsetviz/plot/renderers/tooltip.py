"""
upsetviz/plot/renderers/tooltip
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
"""

from __future__ import annotations

from typing import Optional, Tuple, TYPE_CHECKING

import matplotlib.pyplot as plt
from matplotlib.transforms import IdentityTransform

if TYPE_CHECKING:
    from ..style import StyleConfig


class Tooltip:
    """
    Class for the hover overlay of one chart. The overlay is a figure-level text box
    positioned in display pixels; it is created once when the chart is mounted, reused
    across redraws, and removed when the chart is closed.
    """

    def __init__(self, fig: plt.Figure, style: StyleConfig) -> None:
        """
        Initializes the Tooltip instance.

        Args:
            fig (plt.Figure): Figure owning the overlay.
            style (StyleConfig): Style configuration.
        """
        dx, dy = style["tooltip_offset"]
        self.offset: Tuple[float, float] = (float(dx), float(dy))
        alpha = float(style["tooltip_alpha"])
        self._text = fig.text(
            0.0,
            0.0,
            "",
            transform=IdentityTransform(),
            ha="left",
            va="top",
            fontsize=style["tooltip_fontsize"],
            color=style["text_color"],
            alpha=alpha,
            zorder=100,
            visible=False,
            bbox={
                "boxstyle": f"round,pad={style['tooltip_pad']}",
                "facecolor": style["tooltip_facecolor"],
                "edgecolor": style["tooltip_edgecolor"],
                "alpha": alpha,
            },
        )
        if style.get("font", None) is not None:
            self._text.set_fontfamily(style["font"])
        self._fig: Optional[plt.Figure] = fig

    @property
    def visible(self) -> bool:
        return self._text.get_visible()

    @property
    def text(self) -> str:
        return self._text.get_text()

    @property
    def position(self) -> Tuple[float, float]:
        """
        Returns the anchor of the box in display pixels (pointer position plus offset).
        """
        x, y = self._text.get_position()
        return float(x), float(y)

    def show(self, text: str, x: float, y: float) -> None:
        """
        Shows the overlay with `text` next to the pointer.

        Args:
            text (str): Tooltip content.
            x (float): Pointer x in display pixels.
            y (float): Pointer y in display pixels.
        """
        self._text.set_text(text)
        self.move(x, y)
        self._text.set_visible(True)

    def move(self, x: float, y: float) -> None:
        """
        Moves the overlay so it tracks the pointer.

        Args:
            x (float): Pointer x in display pixels.
            y (float): Pointer y in display pixels.
        """
        # Display y grows upward; the box hangs below-right of the pointer
        self._text.set_position((x + self.offset[0], y - self.offset[1]))

    def hide(self) -> None:
        self._text.set_visible(False)

    def set_visible(self, visible: bool) -> None:
        self._text.set_visible(bool(visible))

    def remove(self) -> None:
        """
        Detaches the overlay from its figure. Safe to call more than once.
        """
        if self._fig is None:
            return
        self._text.remove()
        self._fig = None
