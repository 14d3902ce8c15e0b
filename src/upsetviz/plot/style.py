"""
upsetviz/plot/style
~~~~~~~~~~~~~~~~~~~
"""

from __future__ import annotations

from typing import Dict, Mapping, Optional, Sequence, TypeAlias, TypedDict, Union

# Type alias for style values
StyleValue: TypeAlias = Union[
    str,
    float,
    int,
    bool,
    None,
    Sequence[float],
    Mapping[str, float],
]


class StyleDefaults(TypedDict):
    """
    Type class for chart style defaults.
    """

    width: float
    height: float
    font_size: float
    dpi: float
    background_color: str
    text_color: str
    font: Optional[str]
    matrix_border_color: str
    matrix_border_lw: float
    cell_edge_color: str
    cell_edge_lw: float
    dot_edge_color: str
    dot_edge_lw: float
    set_label_pad: float
    set_label_rotation: float
    row_label_pad: float
    value_label_color: str
    value_label_inside_color: str
    axis_color: str
    axis_lw: float
    axis_tick_length: float
    axis_tick_pad: float
    tooltip_offset: Sequence[float]
    tooltip_alpha: float
    tooltip_facecolor: str
    tooltip_edgecolor: str
    tooltip_fontsize: float
    tooltip_pad: float


DEFAULT_STYLE: StyleDefaults = {
    # Figure size in pixels (1 pt == 1 px at dpi 72)
    "width": 500,
    "height": 500,
    "font_size": 16,
    "dpi": 72,
    "background_color": "white",
    "text_color": "black",
    "font": None,
    # Dot matrix
    "matrix_border_color": "black",
    "matrix_border_lw": 1.0,
    "cell_edge_color": "black",
    "cell_edge_lw": 0.75,
    "dot_edge_color": "black",
    "dot_edge_lw": 0.75,
    # Set labels sit this many pixels above the dot matrix
    "set_label_pad": 5.0,
    "set_label_rotation": -45.0,
    # Intersection labels end this many pixels left of the dot matrix
    "row_label_pad": 5.0,
    # Bar value labels
    "value_label_color": "black",
    "value_label_inside_color": "white",
    # Top axis of the bar region
    "axis_color": "black",
    "axis_lw": 1.0,
    "axis_tick_length": 6.0,
    "axis_tick_pad": 3.0,
    # Tooltip overlay (offset from the pointer, display pixels)
    "tooltip_offset": (10.0, 10.0),
    "tooltip_alpha": 0.9,
    "tooltip_facecolor": "white",
    "tooltip_edgecolor": "#dddddd",
    "tooltip_fontsize": 10,
    "tooltip_pad": 0.5,
}

# Fill colors per element, keyed by (tier, included)
FILL_PALETTE: Dict[str, Dict[tuple[str, bool], str]] = {
    "cell": {
        ("selected", True): "#FF9806",
        ("selected", False): "#FF9806",
        ("hovered", True): "#FFBD62",
        ("hovered", False): "#FFBD62",
        ("default", True): "white",
        ("default", False): "white",
    },
    "dot": {
        ("selected", True): "#FF6F00",
        ("selected", False): "#807A79",
        ("hovered", True): "#FF9C46",
        ("hovered", False): "#807A79",
        ("default", True): "#030202",
        ("default", False): "#807A79",
    },
    "bar": {
        ("selected", True): "#FF6F00",
        ("selected", False): "#FF6F00",
        ("hovered", True): "#FF9C46",
        ("hovered", False): "#FF9C46",
        ("default", True): "#030202",
        ("default", False): "#030202",
    },
}


def fill_tier(*, selected: bool, hovered: bool) -> str:
    """
    Resolves the highlight tier of a row. Selection outranks hover.

    Kwargs:
        selected (bool): Whether the row is selected.
        hovered (bool): Whether the row is hovered.

    Returns:
        str: One of "selected", "hovered", "default".
    """
    if selected:
        return "selected"
    if hovered:
        return "hovered"
    return "default"


def resolve_fill(element: str, *, selected: bool, hovered: bool, included: bool = True) -> str:
    """
    Looks up the fill color of a drawn element in FILL_PALETTE.

    Args:
        element (str): One of "cell", "dot", "bar".

    Kwargs:
        selected (bool): Whether the element's row is selected.
        hovered (bool): Whether the element's row is hovered.
        included (bool): Whether the element's set belongs to the row's intersection.
            Defaults to True.

    Returns:
        str: Fill color.

    Raises:
        ValueError: If `element` is unknown.
    """
    if element not in FILL_PALETTE:
        raise ValueError(f"Unknown element {element!r}; expected one of {sorted(FILL_PALETTE)}")
    return FILL_PALETTE[element][(fill_tier(selected=selected, hovered=hovered), bool(included))]


class StyleConfig:
    """
    Class for storing chart style defaults and overrides.
    """

    def __init__(self, defaults: Optional[Mapping[str, StyleValue]] = None) -> None:
        """
        Initializes the StyleConfig instance.

        Args:
            defaults (Optional[Mapping[str, StyleValue]]): Base style defaults. Defaults to None.
        """
        if defaults is None:
            defaults = DEFAULT_STYLE
        self._defaults: Dict[str, StyleValue] = dict(defaults)
        self._overrides: Dict[str, StyleValue] = {}

    def get(self, key: str, default: Optional[StyleValue] = None) -> StyleValue:
        """
        Gets a style value with override priority.

        Args:
            key (str): Style key.
            default (Optional[StyleValue]): Default value if key not found. Defaults to None.

        Returns:
            StyleValue: Resolved style value.
        """
        if key in self._overrides:
            return self._overrides[key]
        return self._defaults.get(key, default)

    def set(self, key: str, value: StyleValue) -> None:
        """
        Overrides a style value.

        Args:
            key (str): Style key.
            value (StyleValue): Style value to set.
        """
        self._overrides[key] = value

    def update(self, overrides: Mapping[str, StyleValue]) -> None:
        """
        Applies multiple overrides at once.

        Args:
            overrides (Mapping[str, StyleValue]): Mapping of style keys to values.

        Raises:
            KeyError: If a key is not a known style key.
        """
        unknown = [key for key in overrides if key not in self._defaults]
        if unknown:
            raise KeyError(f"Unknown style key(s): {unknown}")
        for key, value in overrides.items():
            self._overrides[key] = value

    def as_dict(self) -> Dict[str, StyleValue]:
        """
        Returns a merged view of defaults and overrides.

        Returns:
            Dict[str, StyleValue]: Merged style dictionary.
        """
        merged = dict(self._defaults)
        merged.update(self._overrides)
        return merged

    def __getitem__(self, key: str) -> StyleValue:
        """
        Gets a style value with override priority.

        Args:
            key (str): Style key.

        Returns:
            StyleValue: Resolved style value.
        """
        return self.get(key)

    def __contains__(self, key: object) -> bool:
        """
        Checks if a style key exists in defaults or overrides.

        Args:
            key (object): Style key.

        Returns:
            bool: True if key exists, False otherwise.
        """
        return key in self._overrides or key in self._defaults
