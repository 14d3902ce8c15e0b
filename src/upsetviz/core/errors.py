"""
upsetviz/core/errors
~~~~~~~~~~~~~~~~~~~~
"""

from __future__ import annotations

from typing import Optional


class UpsetError(Exception):
    """
    Base class for failures that prevent a file from producing an UpsetMatrix.
    """


class FileReadError(UpsetError, OSError):
    """
    Raised when the underlying file cannot be read or decoded.
    """

    def __init__(self, message: str, *, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path


class FormatError(UpsetError, ValueError):
    """
    Raised when a data line does not split into exactly two tab-separated fields.
    The whole file is rejected; no partial matrix is produced.
    """

    def __init__(self, message: str, *, line_number: int, line: str) -> None:
        super().__init__(message)
        self.line_number = line_number
        self.line = line
