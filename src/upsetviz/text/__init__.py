"""Label text helpers shared by layout and renderers."""

from .labels import (
    INTERSECTION_GLYPH,
    ELLIPSIS,
    estimate_text_width,
    format_si,
    max_label_chars,
    tooltip_text,
    truncate_label,
)

__all__ = [
    "INTERSECTION_GLYPH",
    "ELLIPSIS",
    "estimate_text_width",
    "format_si",
    "max_label_chars",
    "tooltip_text",
    "truncate_label",
]
