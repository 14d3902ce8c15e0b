"""
upsetviz/core/parser
~~~~~~~~~~~~~~~~~~~~
"""

from __future__ import annotations

import os
import re
from os import PathLike
from typing import List, Optional, Tuple, Union

from .errors import FileReadError, FormatError
from .matrix import FileStatus, ParsedFile, UpsetMatrix
from ..util.warnings import ValueWarning, warn

COMMENT_PREFIX = "#"
FIELD_SEPARATOR = "\t"
BYTE_ORDER_MARK = "\ufeff"
# Leading signed decimal integer; trailing characters are ignored ("12.5" -> 12)
_INT_PREFIX = re.compile(r"[+-]?\d+")


def parse_count(field: str) -> Optional[int]:
    """
    Parses the count field of a data line.

    Args:
        field (str): Raw second field of the line.

    Returns:
        Optional[int]: Parsed non-negative count, or None if the field is not a valid count.
    """
    match = _INT_PREFIX.match(field.strip())
    if match is None:
        return None
    value = int(match.group(0), 10)
    if value < 0:
        return None
    return value


def _is_skipped(line: str) -> bool:
    """
    Checks whether a line is blank or a comment.

    Args:
        line (str): Raw line.

    Returns:
        bool: True if the line carries no record.
    """
    stripped = line.strip()
    return stripped == "" or stripped.startswith(COMMENT_PREFIX)


def parse_records(text: str) -> List[Tuple[str, int]]:
    """
    Applies the line grammar and returns accepted (key, value) records in file order.

    Args:
        text (str): Raw file contents.

    Returns:
        List[Tuple[str, int]]: Accepted records.

    Raises:
        FormatError: If a data line does not have exactly two tab-separated fields.
    """
    # A leading byte-order mark is not part of the first key
    if text.startswith(BYTE_ORDER_MARK):
        text = text[len(BYTE_ORDER_MARK):]
    records: List[Tuple[str, int]] = []
    for line_number, line in enumerate(text.split("\n"), start=1):
        if _is_skipped(line):
            continue
        fields = line.split(FIELD_SEPARATOR)
        if len(fields) != 2:
            raise FormatError(
                f"Invalid line format at line {line_number}: expected 2 tab-separated "
                f"fields, got {len(fields)}: {line!r}",
                line_number=line_number,
                line=line,
            )
        key = fields[0].strip()
        value = parse_count(fields[1])
        if value is None:
            # Dropped line; the file still parses
            warn(
                f"Invalid value at line {line_number}, line dropped: {line!r}",
                ValueWarning,
                stacklevel=3,
            )
            continue
        records.append((key, value))
    return records


def parse_upset_matrix(text: str) -> UpsetMatrix:
    """
    Parses tab-separated intersection counts into an UpsetMatrix.

    Each non-blank, non-comment line must be `<combination key><TAB><count>`. Lines
    whose count is not an integer are dropped with a ValueWarning.

    Args:
        text (str): Raw file contents.

    Returns:
        UpsetMatrix: Matrix with one intersection per accepted line, in file order.

    Raises:
        FormatError: If any data line does not split into exactly two fields.
    """
    return UpsetMatrix.from_records(parse_records(text))


def read_upset_matrix(
    path: Union[str, PathLike[str]],
    *,
    encoding: str = "utf-8-sig",
) -> ParsedFile:
    """
    Reads and parses an intersection-count file.

    Args:
        path (Union[str, PathLike[str]]): Path to the file.

    Kwargs:
        encoding (str): Text encoding of the file. Defaults to "utf-8-sig", which drops a
            leading byte-order mark.

    Returns:
        ParsedFile: Parsed file with status VALID.

    Raises:
        FileReadError: If the file cannot be read or decoded.
        FormatError: If the file violates the line grammar.
    """
    file_name = os.path.basename(os.fspath(path))
    try:
        with open(path, "rb") as handle:
            raw = handle.read()
        text = raw.decode(encoding)
    except (OSError, UnicodeDecodeError) as exc:
        raise FileReadError(f"Failed to read the file {file_name!r}: {exc}", path=str(path)) from exc

    return ParsedFile(parse_upset_matrix(text), file_name, FileStatus.VALID)
