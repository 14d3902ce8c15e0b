"""
upsetviz
~~~~~~~~

UpSet plots of set-intersection counts read from tab-separated files.
"""

from .core.errors import FileReadError, FormatError, UpsetError
from .core.layout import UpsetLayout, compute_layout
from .core.matrix import FileStatus, Intersection, ParsedFile, UpsetMatrix
from .core.parser import parse_upset_matrix, read_upset_matrix
from .core.session import UploadSession
from .plot.chart import UpsetChart, plot_upset
from .util.warnings import ValueWarning

__all__ = [
    "FileReadError",
    "FormatError",
    "UpsetError",
    "UpsetLayout",
    "compute_layout",
    "FileStatus",
    "Intersection",
    "ParsedFile",
    "UpsetMatrix",
    "parse_upset_matrix",
    "read_upset_matrix",
    "UploadSession",
    "UpsetChart",
    "plot_upset",
    "ValueWarning",
]

__version__ = "0.1.0"
