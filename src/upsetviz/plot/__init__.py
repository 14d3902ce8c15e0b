"""
upsetviz/plot
~~~~~~~~~~~~~
"""

from .chart import UpsetChart, plot_upset
from .interaction import InteractionController, InteractionState
from .style import FILL_PALETTE, StyleConfig, resolve_fill

__all__ = [
    "UpsetChart",
    "plot_upset",
    "InteractionController",
    "InteractionState",
    "FILL_PALETTE",
    "StyleConfig",
    "resolve_fill",
]
