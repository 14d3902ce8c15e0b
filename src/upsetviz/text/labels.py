"""Label truncation, SI tick formatting and tooltip text."""

from __future__ import annotations

import math
from typing import Optional

ELLIPSIS = "..."
INTERSECTION_GLYPH = "∩"
# Average glyph width as a fraction of the font size
GLYPH_WIDTH_RATIO = 0.6

_SI_PREFIXES = ("y", "z", "a", "f", "p", "n", "µ", "m", "", "k", "M", "G", "T", "P", "E", "Z", "Y")
_SI_OFFSET = 8


def max_label_chars(available_px: float, font_size: float) -> int:
    """
    Number of characters an intersection label may keep in `available_px` pixels.

    Parameters
    ----------
    available_px : float
        Horizontal room for the label (the left margin).
    font_size : float
        Label font size in pixels.

    Returns
    -------
    int
        floor(available_px / (font_size * 0.6)) - 2, never below zero.
    """
    if font_size <= 0:
        return 0
    return max(0, math.floor(available_px / (font_size * GLYPH_WIDTH_RATIO)) - 2)


def truncate_label(label: str, max_chars: int) -> str:
    """
    Shorten `label` to at most `max_chars` characters, ending in an ellipsis.

    Labels that fit are returned unchanged. Truncated labels keep
    ``max_chars - 3`` leading characters followed by "...".
    """
    if len(label) <= max_chars:
        return label
    keep = max(0, max_chars - len(ELLIPSIS))
    return label[:keep] + ELLIPSIS


def estimate_text_width(text: str, font_size: float) -> float:
    """Approximate rendered width of `text` in pixels."""
    return len(text) * font_size * GLYPH_WIDTH_RATIO


def format_si(value: float, precision: int = 2) -> str:
    """
    Format a tick value with `precision` significant digits and an SI prefix.

    Parameters
    ----------
    value : float
        Tick value.
    precision : int
        Significant digits. Defaults to 2.

    Returns
    -------
    str
        e.g. 0 -> "0", 40 -> "40", 150 -> "150", 1500 -> "1.5k", 2000000 -> "2M".
    """
    if value == 0 or not math.isfinite(value):
        return "0" if value == 0 else str(value)

    exponent = math.floor(math.log10(abs(value)))
    idx = max(-_SI_OFFSET, min(_SI_OFFSET, math.floor(exponent / 3)))
    scaled = value / 1000.0**idx
    # Keep at least the integer digits of the scaled value
    decimals = max(0, precision - 1 - (exponent - 3 * idx))
    rounded = round(scaled, decimals)
    if abs(rounded) >= 1000 and idx < _SI_OFFSET:
        idx += 1
        scaled = value / 1000.0**idx
        decimals = max(0, precision - 1 - (exponent + 1 - 3 * idx))
        rounded = round(scaled, decimals)

    text = f"{rounded:.{decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        text = "0"
    return text + _SI_PREFIXES[idx + _SI_OFFSET]


def tooltip_text(key: str, value: int, *, glyph: Optional[str] = None) -> str:
    """
    Compose hover text: component set names joined with the intersection glyph,
    followed by the row's count.
    """
    glyph = INTERSECTION_GLYPH if glyph is None else glyph
    names = f" {glyph} ".join(key.split(","))
    return f"{names}\n{'─' * max(8, min(len(names), 24))}\nCount: {value}"
