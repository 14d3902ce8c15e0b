"""
upsetviz/plot/interaction
~~~~~~~~~~~~~~~~~~~~~~~~~
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, Iterable, List, Optional, Tuple, TYPE_CHECKING

from matplotlib.backend_bases import MouseEvent

from ..text.labels import tooltip_text

if TYPE_CHECKING:
    from .chart import UpsetChart

ClickHandler = Callable[[str], None]


@dataclass(frozen=True)
class InteractionState:
    """
    Data class for transient chart state: the hovered row (Idle when None) and the
    independent collection of selected rows.
    """

    hovered: Optional[str] = None
    selected: Tuple[str, ...] = ()

    def is_hovered(self, key: str) -> bool:
        return self.hovered is not None and self.hovered == key

    def is_selected(self, key: str) -> bool:
        return key in self.selected


def hover(state: InteractionState, key: str) -> InteractionState:
    """
    Transition for a pointer entering a row. Returns `state` itself when `key` is
    already hovered.

    Args:
        state (InteractionState): Current state.
        key (str): Combination key of the entered row.

    Returns:
        InteractionState: Next state.
    """
    if state.hovered == key:
        return state
    return replace(state, hovered=key)


def leave(state: InteractionState) -> InteractionState:
    """
    Transition for the pointer leaving the rows.

    Args:
        state (InteractionState): Current state.

    Returns:
        InteractionState: Next state with no hovered row.
    """
    if state.hovered is None:
        return state
    return replace(state, hovered=None)


def toggle_selection(state: InteractionState, key: str) -> InteractionState:
    """
    Transition for a click without an external handler: removes `key` from the
    selection if present, otherwise appends it.

    Args:
        state (InteractionState): Current state.
        key (str): Combination key of the clicked row.

    Returns:
        InteractionState: Next state.
    """
    if key in state.selected:
        return replace(state, selected=tuple(k for k in state.selected if k != key))
    return replace(state, selected=state.selected + (key,))


def with_selection(state: InteractionState, keys: Iterable[str]) -> InteractionState:
    """
    Transition replacing the whole selection.

    Args:
        state (InteractionState): Current state.
        keys (Iterable[str]): Keys to select; duplicates are collapsed.

    Returns:
        InteractionState: Next state.
    """
    return replace(state, selected=tuple(dict.fromkeys(keys)))


class InteractionController:
    """
    Class owning the hover/selection state of one chart and translating pointer events
    into state transitions.

    Hover changes take the recolor-only path of the chart; selection changes trigger a
    full redraw. No other object mutates the state.
    """

    def __init__(self, chart: UpsetChart, *, on_click: Optional[ClickHandler] = None) -> None:
        """
        Initializes the InteractionController instance.

        Args:
            chart (UpsetChart): Chart to update.

        Kwargs:
            on_click (Optional[ClickHandler]): External click handler. When set, clicks
                are forwarded to it and the local selection is left untouched. Defaults to None.
        """
        self.chart = chart
        self.on_click = on_click
        self._state = InteractionState()
        self._cids: List[int] = []

    @property
    def state(self) -> InteractionState:
        return self._state

    @property
    def connected(self) -> bool:
        return bool(self._cids)

    def pointer_enter(
        self,
        key: str,
        *,
        value: Optional[int] = None,
        position: Optional[Tuple[float, float]] = None,
    ) -> bool:
        """
        Handles the pointer entering a row's hit surface.

        Args:
            key (str): Combination key of the row.

        Kwargs:
            value (Optional[int]): Row count shown in the tooltip. Defaults to None.
            position (Optional[Tuple[float, float]]): Pointer position in display
                pixels. Defaults to None (tooltip untouched).

        Returns:
            bool: True if the hovered row changed and a recolor was performed.
        """
        previous = self._state
        self._state = hover(previous, key)
        changed = self._state is not previous
        if changed:
            self.chart.recolor()
        if position is not None and value is not None:
            self.chart.tooltip.show(tooltip_text(key, value), *position)
        return changed

    def pointer_leave(self) -> bool:
        """
        Handles the pointer leaving every row.

        Returns:
            bool: True if a hovered row was cleared.
        """
        previous = self._state
        self._state = leave(previous)
        self.chart.tooltip.hide()
        changed = self._state is not previous
        if changed:
            self.chart.recolor()
        else:
            self.chart.request_redraw()
        return changed

    def pointer_move(self, x: float, y: float) -> None:
        """
        Moves the tooltip with the pointer while a row is hovered.

        Args:
            x (float): Pointer x in display pixels.
            y (float): Pointer y in display pixels.
        """
        if self._state.hovered is None:
            return
        self.chart.tooltip.move(x, y)
        self.chart.request_redraw()

    def click(self, key: str) -> None:
        """
        Handles a click on a row: forwards to the external handler if registered,
        otherwise toggles the row's selection and redraws the chart.

        Args:
            key (str): Combination key of the clicked row.
        """
        if self.on_click is not None:
            self.on_click(key)
            return
        self._state = toggle_selection(self._state, key)
        self.chart.draw()

    def set_selected(self, keys: Iterable[str]) -> None:
        """
        Replaces the selection and redraws the chart.

        Args:
            keys (Iterable[str]): Keys to select.
        """
        self._state = with_selection(self._state, keys)
        self.chart.draw()

    def reset(self) -> None:
        """
        Clears hover and selection without repainting; used when the drawn rows are
        replaced by a new dataset.
        """
        self._state = InteractionState()
        self.chart.tooltip.hide()

    # ------------------------------------------------------------------
    # Matplotlib event wiring
    # ------------------------------------------------------------------

    def connect(self) -> None:
        """
        Connects pointer handlers to the chart's figure canvas. Idempotent.
        """
        if self._cids:
            return
        canvas = self.chart.fig.canvas
        self._cids = [
            canvas.mpl_connect("motion_notify_event", self._on_motion),
            canvas.mpl_connect("button_press_event", self._on_press),
            canvas.mpl_connect("axes_leave_event", self._on_leave),
            canvas.mpl_connect("figure_leave_event", self._on_leave),
        ]

    def disconnect(self) -> None:
        canvas = self.chart.fig.canvas
        for cid in self._cids:
            canvas.mpl_disconnect(cid)
        self._cids = []

    def _on_motion(self, event: MouseEvent) -> None:
        hit = self.chart.registry.hit_test(event)
        if hit is None:
            if self._state.hovered is not None:
                self.pointer_leave()
            return
        row, key = hit
        value = self.chart.matrix.intersections[row].value
        if self._state.hovered == key and self.chart.tooltip.visible:
            self.pointer_move(event.x, event.y)
            return
        self.pointer_enter(key, value=value, position=(event.x, event.y))
        self.chart.request_redraw()

    def _on_press(self, event: MouseEvent) -> None:
        if event.button != 1:
            return
        hit = self.chart.registry.hit_test(event)
        if hit is None:
            return
        _row, key = hit
        self.click(key)

    def _on_leave(self, _event) -> None:
        if self._state.hovered is not None:
            self.pointer_leave()
