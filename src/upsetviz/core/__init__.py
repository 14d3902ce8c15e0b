"""
upsetviz/core
~~~~~~~~~~~~~
"""

from .errors import FileReadError, FormatError, UpsetError
from .layout import LayoutParams, Margins, UpsetLayout, compute_layout
from .matrix import FileStatus, Intersection, ParsedFile, UpsetMatrix
from .parser import parse_upset_matrix, read_upset_matrix
from .session import UploadSession

__all__ = [
    "FileReadError",
    "FormatError",
    "UpsetError",
    "LayoutParams",
    "Margins",
    "UpsetLayout",
    "compute_layout",
    "FileStatus",
    "Intersection",
    "ParsedFile",
    "UpsetMatrix",
    "parse_upset_matrix",
    "read_upset_matrix",
    "UploadSession",
]
