"""
upsetviz/plot/renderers/base
~~~~~~~~~~~~~~~~~~~~~~~~~~~~
"""

from __future__ import annotations

from typing import Any, List, NamedTuple, Optional, Protocol, Tuple, TYPE_CHECKING

import matplotlib.pyplot as plt
from matplotlib.artist import Artist
from matplotlib.backend_bases import MouseEvent
from matplotlib.patches import Patch
from matplotlib.transforms import Affine2D, Transform

from ..style import resolve_fill

if TYPE_CHECKING:
    from ...core.layout import UpsetLayout
    from ...core.matrix import UpsetMatrix
    from ..interaction import InteractionState
    from ..style import StyleConfig


class Renderer(Protocol):
    """
    Class for defining the renderer interface used by chart layers.
    Protocol only; implement in concrete renderers.
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
        Executes rendering logic.

        Args:
            ax (plt.Axes): Target axes, in pixel coordinates with y growing downward.
            matrix (UpsetMatrix): Matrix being drawn.
            layout (UpsetLayout): Resolved geometry.
            state (InteractionState): Current hover/selection state.
            style (StyleConfig): Style configuration.

        Kwargs:
            registry (ArtistRegistry): Registry collecting recolorable artists and hit surfaces.
        """
        # Protocol stub; no runtime implementation
        ...


def chart_transform(ax: plt.Axes, layout: UpsetLayout) -> Transform:
    """
    Returns the transform from chart coordinates (origin at the top-left corner inside
    the margins) to display coordinates.

    Args:
        ax (plt.Axes): Pixel-coordinate axes.
        layout (UpsetLayout): Layout providing the margins.

    Returns:
        Transform: Chart-to-display transform.
    """
    return Affine2D().translate(layout.margins.left, layout.margins.top) + ax.transData


class _RecolorEntry(NamedTuple):
    artist: Artist
    element: str
    key: str
    included: bool


class _HitSurface(NamedTuple):
    patch: Patch
    row: int
    key: str


class ArtistRegistry:
    """
    Class for tracking drawn artists whose fill depends on interaction state, and the
    per-row hit surfaces used for pointer hit-testing.
    """

    def __init__(self) -> None:
        """
        Initializes the ArtistRegistry instance.
        """
        self._entries: List[_RecolorEntry] = []
        self._hit_surfaces: List[_HitSurface] = []

    def register(self, artist: Artist, *, element: str, key: str, included: bool = True) -> None:
        """
        Registers an artist for recoloring.

        Args:
            artist (Artist): Patch whose facecolor follows the interaction state.

        Kwargs:
            element (str): Palette element, one of "cell", "dot", "bar".
            key (str): Combination key of the artist's row.
            included (bool): Whether the artist's set belongs to the row. Defaults to True.
        """
        self._entries.append(_RecolorEntry(artist, element, key, bool(included)))

    def register_hit_surface(self, patch: Patch, *, row: int, key: str) -> None:
        """
        Registers the transparent full-row surface of one intersection.

        Args:
            patch (Patch): Hit surface.

        Kwargs:
            row (int): Row index.
            key (str): Combination key of the row.
        """
        self._hit_surfaces.append(_HitSurface(patch, int(row), key))

    def recolor(self, state: InteractionState) -> int:
        """
        Re-applies palette fills to every registered artist without touching geometry.

        Args:
            state (InteractionState): Current interaction state.

        Returns:
            int: Number of artists recolored.
        """
        for entry in self._entries:
            entry.artist.set_facecolor(
                resolve_fill(
                    entry.element,
                    selected=state.is_selected(entry.key),
                    hovered=state.is_hovered(entry.key),
                    included=entry.included,
                )
            )
        return len(self._entries)

    def hit_test(self, event: MouseEvent) -> Optional[Tuple[int, str]]:
        """
        Finds the row whose hit surface contains a pointer event.

        Args:
            event (MouseEvent): Matplotlib mouse event.

        Returns:
            Optional[Tuple[int, str]]: (row, key) of the hit row, or None.
        """
        for surface in self._hit_surfaces:
            hit, _details = surface.patch.contains(event)
            if hit:
                return surface.row, surface.key
        return None

    def artists(self, element: Optional[str] = None) -> List[Artist]:
        """
        Returns registered artists, optionally restricted to one palette element.

        Args:
            element (Optional[str]): Palette element filter. Defaults to None.

        Returns:
            List[Artist]: Registered artists in registration order.
        """
        return [e.artist for e in self._entries if element is None or e.element == element]

    @property
    def n_hit_surfaces(self) -> int:
        return len(self._hit_surfaces)

    def clear(self) -> None:
        self._entries.clear()
        self._hit_surfaces.clear()

    def __len__(self) -> int:
        return len(self._entries)


def apply_font(text_obj: Any, font: Optional[str]) -> None:
    """
    Applies an optional font family to a text artist.

    Args:
        text_obj (Any): Matplotlib text artist.
        font (Optional[str]): Font family name, or None to keep the default.
    """
    if font is not None:
        text_obj.set_fontfamily(font)
