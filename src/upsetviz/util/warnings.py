"""
upsetviz/util/warnings
"""

from __future__ import annotations

import warnings
from typing import Type


class ValueWarning(UserWarning):
    """
    Warning category for data lines dropped because their count is not a valid integer.
    """


def warn(message: str, category: Type[Warning] = ValueWarning, stacklevel: int = 2) -> None:
    """
    Emits a warning with a default stacklevel.

    Args:
        message (str): Warning message text.
        category (Type[Warning]): Warning category class. Defaults to ValueWarning.
        stacklevel (int): Stacklevel to report. Defaults to 2.
    """
    warnings.warn(message, category=category, stacklevel=stacklevel)
