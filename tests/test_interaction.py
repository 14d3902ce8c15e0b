"""
tests/test_interaction
~~~~~~~~~~~~~~~~~~~~~~
"""

import pytest
from matplotlib.backend_bases import MouseEvent
from matplotlib.colors import to_hex

import upsetviz.plot.chart as chart_module
from upsetviz import UpsetChart
from upsetviz.plot.interaction import (
    InteractionState,
    hover,
    leave,
    toggle_selection,
    with_selection,
)
from upsetviz.plot.renderers.base import chart_transform


def _row_point(chart, row):
    """
    Returns the display coordinates of the center of a row's dot-matrix area.

    Args:
        chart (UpsetChart): Drawn chart.
        row (int): Row index.

    Returns:
        Tuple[float, float]: Display (x, y) in pixels.
    """
    layout = chart.layout
    x, y = chart_transform(chart.ax, layout).transform((layout.dot_width / 2.0, layout.row_center(row)))
    return float(x), float(y)


def _dispatch(chart, name, x, y, button=None):
    """
    Sends a synthetic mouse event through the chart's canvas callbacks.

    Args:
        chart (UpsetChart): Target chart.
        name (str): Event name.
        x (float): Display x.
        y (float): Display y.
        button (Optional[int]): Mouse button. Defaults to None.
    """
    canvas = chart.fig.canvas
    event = MouseEvent(name, canvas, x, y, button=button)
    canvas.callbacks.process(name, event)


def _bar_color(chart, row):
    return to_hex(chart.registry.artists("bar")[row].get_facecolor())


@pytest.fixture
def live_chart(toy_matrix):
    """
    Returns a drawn chart with pointer events connected.

    Args:
        toy_matrix (UpsetMatrix): Toy matrix.

    Yields:
        UpsetChart: Drawn interactive chart.
    """
    chart = UpsetChart(toy_matrix, width=500, height=400, font_size=12, interactive=True)
    chart.draw()
    yield chart
    chart.close()


@pytest.mark.unit
def test_state_transitions():
    """
    Ensures hover, leave and selection transitions are pure and minimal.
    """
    idle = InteractionState()
    hovered = hover(idle, "A")
    assert hovered.hovered == "A" and idle.hovered is None
    assert hover(hovered, "A") is hovered
    assert leave(hovered) == idle
    assert leave(idle) is idle

    one = toggle_selection(idle, "A")
    two = toggle_selection(one, "B")
    assert two.selected == ("A", "B")
    assert toggle_selection(two, "A").selected == ("B",)
    assert toggle_selection(toggle_selection(idle, "A"), "A") == idle
    assert with_selection(idle, ["A", "B", "A"]).selected == ("A", "B")


@pytest.mark.api
def test_hover_recolors_without_layout(toy_chart, monkeypatch):
    """
    Ensures hover changes repaint fills without recomputing the layout.

    Args:
        toy_chart (UpsetChart): Drawn chart.
        monkeypatch (MonkeyPatch): Pytest monkeypatch fixture.
    """
    calls = []
    original = chart_module.compute_layout

    def counting(*args, **kwargs):
        calls.append(args)
        return original(*args, **kwargs)

    monkeypatch.setattr(chart_module, "compute_layout", counting)
    controller = toy_chart.controller

    assert controller.pointer_enter("SetB")
    assert toy_chart.state.hovered == "SetB"
    assert _bar_color(toy_chart, 1) == "#ff9c46"
    assert _bar_color(toy_chart, 0) == "#030202"
    assert not controller.pointer_enter("SetB")

    assert controller.pointer_leave()
    assert toy_chart.state.hovered is None
    assert _bar_color(toy_chart, 1) == "#030202"
    assert calls == []


@pytest.mark.api
def test_hover_colors_dots_by_membership(toy_chart):
    """
    Ensures hovered rows color included dots orange and leave excluded dots grey.

    Args:
        toy_chart (UpsetChart): Drawn chart.
    """
    toy_chart.controller.pointer_enter("SetB")
    dots = toy_chart.registry.artists("dot")
    cells = toy_chart.registry.artists("cell")
    # Row 1 is "SetB": column 0 is SetA (excluded), column 1 is SetB (included)
    assert to_hex(dots[2].get_facecolor()) == "#807a79"
    assert to_hex(dots[3].get_facecolor()) == "#ff9c46"
    assert to_hex(cells[2].get_facecolor()) == "#ffbd62"
    assert to_hex(dots[0].get_facecolor()) == "#030202"
    assert to_hex(dots[1].get_facecolor()) == "#807a79"
    assert to_hex(cells[0].get_facecolor()) == "#ffffff"


@pytest.mark.api
def test_click_toggles_selection_and_redraws(toy_chart, monkeypatch):
    """
    Ensures clicking without an external handler toggles selection via a full draw.

    Args:
        toy_chart (UpsetChart): Drawn chart.
        monkeypatch (MonkeyPatch): Pytest monkeypatch fixture.
    """
    calls = []
    original = chart_module.compute_layout

    def counting(*args, **kwargs):
        calls.append(args)
        return original(*args, **kwargs)

    monkeypatch.setattr(chart_module, "compute_layout", counting)
    toy_chart.controller.click("SetA,SetB")
    assert toy_chart.selected_intersections == ("SetA,SetB",)
    assert len(calls) == 1
    assert _bar_color(toy_chart, 2) == "#ff6f00"

    toy_chart.controller.click("SetA,SetB")
    assert toy_chart.selected_intersections == ()
    assert _bar_color(toy_chart, 2) == "#030202"
    assert len(calls) == 2


@pytest.mark.api
def test_selection_outranks_hover(toy_chart):
    """
    Ensures a selected row keeps the selected palette while hovered.

    Args:
        toy_chart (UpsetChart): Drawn chart.
    """
    toy_chart.set_selected_intersections(["SetA"])
    toy_chart.controller.pointer_enter("SetA")
    assert _bar_color(toy_chart, 0) == "#ff6f00"


@pytest.mark.api
def test_external_click_handler_leaves_selection(toy_matrix):
    """
    Ensures an external click handler receives the key and selection is untouched.

    Args:
        toy_matrix (UpsetMatrix): Toy matrix fixture.
    """
    clicked = []
    chart = UpsetChart(toy_matrix, on_click=clicked.append, interactive=False)
    chart.draw()
    chart.controller.click("SetA")
    assert clicked == ["SetA"]
    assert chart.selected_intersections == ()
    chart.set_on_intersection_click(None)
    chart.controller.click("SetA")
    assert chart.selected_intersections == ("SetA",)
    chart.close()


@pytest.mark.api
def test_tooltip_show_move_hide(toy_chart):
    """
    Ensures the tooltip appears next to the pointer, follows it, and hides on leave.

    Args:
        toy_chart (UpsetChart): Drawn chart.
    """
    controller = toy_chart.controller
    controller.pointer_enter("SetA,SetB", value=45, position=(100.0, 200.0))
    tooltip = toy_chart.tooltip
    assert tooltip.visible
    assert tooltip.text.splitlines()[0] == "SetA ∩ SetB"
    assert tooltip.text.endswith("Count: 45")
    assert tooltip.position == (110.0, 190.0)

    controller.pointer_move(150.0, 250.0)
    assert tooltip.position == (160.0, 240.0)

    controller.pointer_leave()
    assert not tooltip.visible


@pytest.mark.api
def test_pointer_events_drive_hover(live_chart):
    """
    Ensures motion events over a row hover it and motion outside every row clears it.

    Args:
        live_chart (UpsetChart): Drawn interactive chart.
    """
    assert live_chart.controller.connected
    x, y = _row_point(live_chart, 1)
    _dispatch(live_chart, "motion_notify_event", x, y)
    assert live_chart.state.hovered == "SetB"
    assert live_chart.tooltip.visible
    assert live_chart.tooltip.text.endswith("Count: 150")
    assert _bar_color(live_chart, 1) == "#ff9c46"

    # Inside the set-label band, above every row
    top_x, top_y = chart_transform(live_chart.ax, live_chart.layout).transform((10.0, 5.0))
    _dispatch(live_chart, "motion_notify_event", float(top_x), float(top_y))
    assert live_chart.state.hovered is None
    assert not live_chart.tooltip.visible


@pytest.mark.api
def test_press_event_toggles_selection(live_chart):
    """
    Ensures a left-button press on a row toggles its selection and other buttons do not.

    Args:
        live_chart (UpsetChart): Drawn interactive chart.
    """
    x, y = _row_point(live_chart, 2)
    _dispatch(live_chart, "button_press_event", x, y, button=3)
    assert live_chart.selected_intersections == ()
    _dispatch(live_chart, "button_press_event", x, y, button=1)
    assert live_chart.selected_intersections == ("SetA,SetB",)


@pytest.mark.api
def test_disconnect_stops_events(live_chart):
    """
    Ensures disconnected charts ignore pointer events.

    Args:
        live_chart (UpsetChart): Drawn interactive chart.
    """
    live_chart.controller.disconnect()
    assert not live_chart.controller.connected
    x, y = _row_point(live_chart, 0)
    _dispatch(live_chart, "motion_notify_event", x, y)
    assert live_chart.state.hovered is None
