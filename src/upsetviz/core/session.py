"""
upsetviz/core/session
~~~~~~~~~~~~~~~~~~~~~
"""

from __future__ import annotations

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from os import PathLike
from typing import Optional, Union

from .errors import UpsetError
from .matrix import FileStatus, ParsedFile, UpsetMatrix
from .parser import read_upset_matrix

DEFAULT_WIDTH = 500
DEFAULT_HEIGHT = 500
DEFAULT_FONT_SIZE = 16


class UploadSession:
    """
    Class for holding the application state around uploaded files: the current
    ParsedFile and the render settings.

    Each upload replaces the ParsedFile wholesale. Reads submitted with `submit()` run
    on a single background worker; a read that completes after a newer upload was
    submitted is discarded, so the state always reflects the latest request.
    """

    def __init__(
        self,
        *,
        width: float = DEFAULT_WIDTH,
        height: float = DEFAULT_HEIGHT,
        font_size: float = DEFAULT_FONT_SIZE,
    ) -> None:
        """
        Initializes the UploadSession instance.

        Kwargs:
            width (float): Render width in pixels. Defaults to 500.
            height (float): Render height in pixels. Defaults to 500.
            font_size (float): Base font size in pixels. Defaults to 16.
        """
        self.width = width
        self.height = height
        self.font_size = font_size
        self.parsed_file = ParsedFile.pending()
        self.last_error: Optional[UpsetError] = None
        self._last_valid: UpsetMatrix = UpsetMatrix.empty()
        self._generation = 0
        self._lock = threading.Lock()
        self._executor: Optional[ThreadPoolExecutor] = None

    def load(self, path: Union[str, PathLike[str]]) -> ParsedFile:
        """
        Reads and parses `path` synchronously and applies the result.

        Args:
            path (Union[str, PathLike[str]]): File to upload.

        Returns:
            ParsedFile: The session's new ParsedFile (status VALID or ERROR).
        """
        with self._lock:
            self._generation += 1
            generation = self._generation
        return self._read_and_apply(path, generation)

    def submit(self, path: Union[str, PathLike[str]]) -> Future:
        """
        Starts an asynchronous upload of `path`.

        Args:
            path (Union[str, PathLike[str]]): File to upload.

        Returns:
            Future: Resolves to the ParsedFile produced by this read. The session state
                is only updated if no newer upload was submitted meanwhile.
        """
        with self._lock:
            self._generation += 1
            generation = self._generation
            if self._executor is None:
                self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="upsetviz-read")
            executor = self._executor
            # Mark the upload in progress, keeping the previous data visible
            self.parsed_file = ParsedFile(
                self.parsed_file.data, self.parsed_file.file_name, FileStatus.PENDING
            )
        return executor.submit(self._read_and_apply, path, generation)

    def _read_and_apply(self, path: Union[str, PathLike[str]], generation: int) -> ParsedFile:
        """
        Reads `path` and stores the outcome if `generation` is still the latest upload.

        Args:
            path (Union[str, PathLike[str]]): File to read.
            generation (int): Upload generation number.

        Returns:
            ParsedFile: Outcome of this read.
        """
        error: Optional[UpsetError] = None
        try:
            result = read_upset_matrix(path)
        except UpsetError as exc:
            error = exc
            result = None

        with self._lock:
            if result is None:
                # Previous data stays; the caller shows the error indicator
                result = ParsedFile(
                    self.parsed_file.data, self.parsed_file.file_name, FileStatus.ERROR
                )
            if generation != self._generation:
                return result
            self.parsed_file = result
            self.last_error = error
            if result.is_valid:
                self._last_valid = result.data
        return result

    @property
    def generation(self) -> int:
        return self._generation

    def renderable_matrix(self) -> UpsetMatrix:
        """
        Returns the matrix to draw: the current data when valid, otherwise the last
        successfully parsed data (empty before any successful upload).

        Returns:
            UpsetMatrix: Matrix to hand to the chart.
        """
        if self.parsed_file.is_valid:
            return self.parsed_file.data
        return self._last_valid

    def close(self) -> None:
        """
        Shuts down the background reader, waiting for an in-flight read.
        """
        with self._lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)
