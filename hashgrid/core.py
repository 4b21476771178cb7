"""Core types and data structures for hashgrid.

This module defines the building blocks shared by the table engine and the
serialization helpers:
- MISSING: the marker stored in cells that were never given a value
- Column: the full, ordered sequence of cells stored under one key
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from .types import ColKey, RowPos

MISSING = None
"""Marker for a cell with no value.

A cell is either Present (any object other than ``None``) or Missing. Tables
refuse ``None`` as a value so the two states can never be confused.
"""


def is_missing(cell: Any) -> bool:
    """True if ``cell`` holds the Missing marker."""
    return cell is MISSING


@dataclass
class Column:
    """All cells stored under one column key.

    Attributes
    ----------
    key : ColKey
        The column key
    cells : list
        One cell per row position. Missing cells hold ``MISSING``.
        Inside a Table the length always equals the table's row count.
    """

    key: ColKey
    cells: list = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.cells)

    def get(self, row: RowPos) -> Any | None:
        """Return the value at ``row``, or None if Missing or out of range."""
        if 0 <= row < len(self.cells):
            return self.cells[row]
        return None

    def is_present(self, row: RowPos) -> bool:
        """True if ``row`` is in range and holds a value."""
        return self.get(row) is not None

    def present(self) -> Iterator[tuple[RowPos, Any]]:
        """Yield ``(row, value)`` for every Present cell, in row order."""
        for row, cell in enumerate(self.cells):
            if not is_missing(cell):
                yield row, cell

    @property
    def present_count(self) -> int:
        """Number of Present cells."""
        return sum(1 for cell in self.cells if not is_missing(cell))

    def mask(self) -> np.ndarray:
        """Boolean presence mask, shape (len(self),)."""
        return np.fromiter(
            (not is_missing(cell) for cell in self.cells),
            dtype=bool,
            count=len(self.cells),
        )

    def to_list(self) -> list:
        """Return a copy of the cells."""
        return list(self.cells)
