"""
upsetviz/util
~~~~~~~~~~~~~
"""

from .warnings import ValueWarning, warn

__all__ = ["ValueWarning", "warn"]
