"""
upsetviz/core/matrix
~~~~~~~~~~~~~~~~~~~~
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import IntEnum
from typing import Iterable, List, NamedTuple, Tuple

import pandas as pd

# Separator between component set names inside a combination key
KEY_SEPARATOR = ","


class Intersection(NamedTuple):
    """
    One row of an UpSet plot: a combination key and its count.
    """

    key: str
    value: int

    @property
    def components(self) -> Tuple[str, ...]:
        """
        Returns the component set names encoded in the combination key.

        Returns:
            Tuple[str, ...]: Comma-split set names, in key order.
        """
        return split_key(self.key)


def split_key(key: str) -> Tuple[str, ...]:
    """
    Splits a combination key into its component set names. No trimming is applied.

    Args:
        key (str): Combination key, e.g. "SetA,SetB".

    Returns:
        Tuple[str, ...]: Component set names.
    """
    return tuple(key.split(KEY_SEPARATOR))


@dataclass(frozen=True)
class UpsetMatrix:
    """
    Immutable container for parsed sets and intersections.

    Every mutation returns a new UpsetMatrix, so a model handed to a chart can never
    change underneath it. `sets` keeps first-discovery order (used as column order);
    `intersections` keeps insertion order (used as row order).
    """

    sets: Tuple[str, ...] = ()
    intersections: Tuple[Intersection, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """
        Validates that the set collection is exactly the union of all components.

        Raises:
            ValueError: If set names are duplicated or do not match the components.
            TypeError: If an intersection value is not an integer.
        """
        object.__setattr__(self, "sets", tuple(self.sets))
        object.__setattr__(
            self,
            "intersections",
            tuple(Intersection(str(key), value) for key, value in self.intersections),
        )
        if len(set(self.sets)) != len(self.sets):
            raise ValueError("Set names must be unique")

        components = set()
        for inter in self.intersections:
            if isinstance(inter.value, bool) or not isinstance(inter.value, int):
                raise TypeError(
                    f"Intersection value for {inter.key!r} must be an int, "
                    f"got {type(inter.value).__name__}"
                )
            if inter.value < 0:
                raise ValueError(f"Intersection value for {inter.key!r} must be non-negative")
            components.update(inter.components)
        # Registered sets without any intersection are allowed (explicit with_set)
        missing = components - set(self.sets)
        if missing:
            raise ValueError(f"Sets missing for intersection components: {sorted(missing)}")

    @classmethod
    def empty(cls) -> UpsetMatrix:
        """
        Returns an UpsetMatrix with no sets and no intersections.

        Returns:
            UpsetMatrix: Empty matrix.
        """
        return cls()

    @classmethod
    def from_records(cls, records: Iterable[Tuple[str, int]]) -> UpsetMatrix:
        """
        Builds a matrix by adding (key, value) records in order.

        Args:
            records (Iterable[Tuple[str, int]]): Combination keys and counts.

        Returns:
            UpsetMatrix: Matrix holding one intersection per record.
        """
        sets: List[str] = []
        known = set()
        intersections: List[Intersection] = []
        for key, value in records:
            intersections.append(Intersection(key, value))
            for name in split_key(key):
                if name not in known:
                    known.add(name)
                    sets.append(name)
        return cls(tuple(sets), tuple(intersections))

    def with_set(self, name: str) -> UpsetMatrix:
        """
        Registers a set name. Re-adding a known name returns this matrix unchanged.

        Args:
            name (str): Set name.

        Returns:
            UpsetMatrix: Matrix containing `name` in its sets.
        """
        if name in self.sets:
            return self
        return replace(self, sets=self.sets + (name,))

    def with_intersection(self, key: str, value: int) -> UpsetMatrix:
        """
        Appends an intersection and registers every component set of its key.

        Args:
            key (str): Combination key.
            value (int): Non-negative count.

        Returns:
            UpsetMatrix: New matrix with the intersection appended.
        """
        sets = list(self.sets)
        for name in split_key(key):
            if name not in sets:
                sets.append(name)
        return UpsetMatrix(tuple(sets), self.intersections + (Intersection(key, value),))

    @property
    def n_sets(self) -> int:
        """
        Returns the number of distinct set names.

        Returns:
            int: Set count.
        """
        return len(self.sets)

    @property
    def n_intersections(self) -> int:
        """
        Returns the number of intersection rows.

        Returns:
            int: Row count, duplicates included.
        """
        return len(self.intersections)

    @property
    def is_empty(self) -> bool:
        """
        Returns True when there is nothing to draw (no sets or no intersections).
        """
        return self.n_sets == 0 or self.n_intersections == 0

    def keys(self) -> Tuple[str, ...]:
        """
        Returns the combination keys in row order.

        Returns:
            Tuple[str, ...]: Combination keys.
        """
        return tuple(inter.key for inter in self.intersections)

    def max_intersection_value(self) -> int:
        """
        Returns the largest intersection count, or 0 for an empty matrix.

        Returns:
            int: Maximum count.
        """
        if not self.intersections:
            return 0
        return max(inter.value for inter in self.intersections)

    def max_set_name_length(self) -> int:
        """
        Returns the length of the longest set name, or 0 when there are no sets.

        Returns:
            int: Longest set name length in characters.
        """
        return max((len(name) for name in self.sets), default=0)

    @staticmethod
    def is_set_in_intersection(set_name: str, key: str) -> bool:
        """
        Checks whether `set_name` is exactly one of the comma-split components of `key`.

        Args:
            set_name (str): Set name.
            key (str): Combination key.

        Returns:
            bool: True if the set participates in the intersection.
        """
        return set_name in split_key(key)

    def membership(self) -> pd.DataFrame:
        """
        Returns the dot-matrix membership table.

        Returns:
            pd.DataFrame: Boolean frame with one row per intersection (index = keys,
                in row order) and one column per set (in column order).
        """
        rows = [[name in inter.components for name in self.sets] for inter in self.intersections]
        return pd.DataFrame(
            rows,
            index=pd.Index(self.keys(), dtype=object, name="intersection"),
            columns=pd.Index(self.sets, dtype=object, name="set"),
            dtype=bool,
        )

    def to_frame(self) -> pd.DataFrame:
        """
        Returns the intersections as a two-column DataFrame.

        Returns:
            pd.DataFrame: Columns "intersection" and "value", in row order.
        """
        return pd.DataFrame(
            {
                "intersection": pd.Series(self.keys(), dtype=object),
                "value": pd.Series([inter.value for inter in self.intersections], dtype="int64"),
            }
        )


class FileStatus(IntEnum):
    """
    Tri-state status of an uploaded file.
    """

    VALID = 1
    PENDING = 0
    ERROR = -1


@dataclass(frozen=True)
class ParsedFile:
    """
    Data class pairing a parsed matrix with its source file name and status.
    """

    data: UpsetMatrix
    file_name: str
    status: FileStatus

    @classmethod
    def pending(cls, file_name: str = "") -> ParsedFile:
        """
        Returns an empty ParsedFile awaiting a parse.

        Args:
            file_name (str): Source file name. Defaults to "".

        Returns:
            ParsedFile: Pending ParsedFile with an empty matrix.
        """
        return cls(UpsetMatrix.empty(), file_name, FileStatus.PENDING)

    def with_status(self, status: FileStatus) -> ParsedFile:
        """
        Returns a copy carrying a different status.

        Args:
            status (FileStatus): New status.

        Returns:
            ParsedFile: Updated ParsedFile.
        """
        return replace(self, status=FileStatus(status))

    @property
    def is_valid(self) -> bool:
        """
        Returns True when the file parsed successfully and may be drawn.
        """
        return self.status == FileStatus.VALID
