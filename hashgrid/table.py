"""Keyed-column, positional-row table storage.

A :class:`Table` is a two-dimensional grid of cells. Columns are looked up
by an arbitrary hashable key; rows are addressed by dense, zero-based
positions. Every column always holds exactly ``row_count`` cells, with
``MISSING`` marking cells that were never given a value. Writing beyond the
last row grows the table (and every column in it) on demand, so tables can
be filled incrementally and out of order without declaring dimensions.

Removing a row shifts all later rows down by one, which costs time
proportional to the total number of cells but keeps row positions in
insertion order.
"""

from __future__ import annotations

import logging
import operator
from collections.abc import (
    Callable,
    Iterable,
    Iterator,
    KeysView,
    Mapping,
    MutableMapping,
)
from typing import Any

import numpy as np

from .core import MISSING, Column, is_missing
from .errors import FormatError, ResourceExhaustedError
from .types import ColKey, RowPos

logger = logging.getLogger(__name__)


def _padding(count: int) -> list:
    """Return ``count`` Missing cells."""
    return [MISSING] * count


def _check_value(key: ColKey, value: Any) -> None:
    if value is None:
        raise ValueError(
            f"None cannot be stored in column {key!r}: it is the Missing marker"
        )


class RowView(Mapping):
    """Editable view of one table row.

    Reads show the Present cells of the row. Assigning ``view[key] = value``
    writes through :meth:`Table.set`, so an unknown key creates a column.
    The view addresses a row position: after a row removal above it, the
    view sees the row that moved into that position.
    """

    def __init__(self, table: Table, row: RowPos) -> None:
        self._table = table
        self._row = row

    
    def position(self) -> RowPos:
        return self._row

    def __getitem__(self, key: ColKey) -> Any:
        value = self._table.get(key, self._row)
        if value is None:
            raise KeyError(key)
        return value

    def __setitem__(self, key: ColKey, value: Any) -> None:
        self._table.set(key, self._row, value)

    def update(self, values: Mapping[ColKey, Any]) -> None:
        """Write several cells; all values are checked before any is stored."""
        values = dict(values)
        for key, value in values.items():
            _check_value(key, value)
        for key, value in values.items():
            self._table.set(key, self._row, value)

    def __iter__(self) -> Iterator[ColKey]:
        if self._row >= self._table.row_count:
            return iter(())
        return (key for key, _ in self._table._row_items(self._row))

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __repr__(self) -> str:
        return f"RowView(row={self._row}, {dict(self)!r})"


class Table:
    """Two-dimensional table with hashable column keys and integer rows.

    Parameters
    ----------
    map_factory : Callable[[], MutableMapping], optional
        Zero-argument callable building the mapping that stores columns by
        key. Defaults to ``dict``. Any mapping with dict semantics works;
        the choice only affects performance.

    Examples
    --------
    >>> table = Table()
    >>> table.set("name", 2, "carol")
    >>> table.row_count
    3
    >>> table.get("name", 0) is None
    True
    """

    def __init__(
        self,
        *,
        map_factory: Callable[[], MutableMapping[ColKey, Column]] = dict,
    ) -> None:
        self._map_factory = map_factory
        self._columns: MutableMapping[ColKey, Column] = map_factory()
        self._row_count = 0

    # ------------------------------------------------------------------
    # Constructors

    @classmethod
    def with_columns(cls, keys: Iterable[ColKey], **kwargs: Any) -> Table:
        """Create an empty table that already has the given columns."""
        table = cls(**kwargs)
        for key in keys:
            table.ensure_column(key)
        return table

    @classmethod
    def from_columns(
        cls,
        columns: Iterable[Column | tuple[ColKey, Iterable[Any]]],
        row_count: int | None = None,
        **kwargs: Any,
    ) -> Table:
        """Build a table from whole columns.

        Parameters
        ----------
        columns : Iterable[Column | tuple[ColKey, Iterable]]
            Columns given either as :class:`Column` objects or as
            ``(key, cells)`` pairs. ``None`` cells are Missing.
        row_count : int, optional
            Number of rows. Required to keep rows in a table without
            columns. If None, the common column length is used.

        Returns
        -------
        Table
            Table with ``row_count`` rows.

        Raises
        ------
        FormatError
            If two columns share a key, their lengths disagree with each
            other or with ``row_count``, or ``row_count`` is negative.
        """
        if row_count is not None:
            row_count = operator.index(row_count)
            if row_count < 0:
                raise FormatError(f"Row count must be non-negative, got {row_count}")
        staged: list[Column] = []
        seen: set = set()
        expected_length = row_count
        for i, item in enumerate(columns):
            if isinstance(item, Column):
                key, cells = item.key, list(item.cells)
            else:
                key, cells = item
                cells = list(cells)
            if key in seen:
                raise FormatError(f"Duplicate column key {key!r}")
            seen.add(key)
            if expected_length is None:
                expected_length = len(cells)
            elif len(cells) != expected_length:
                raise FormatError(
                    f"Column {i} ({key!r}) has {len(cells)} cells, "
                    f"expected {expected_length}"
                )
            staged.append(Column(key, cells))

        table = cls(**kwargs)
        for column in staged:
            table._columns[column.key] = column
        table._row_count = expected_length or 0
        return table

    @classmethod
    def from_keys_and_rows(
        cls,
        keys: Iterable[ColKey],
        rows: Iterable[Iterable[Any]],
        **kwargs: Any,
    ) -> Table:
        """Build a table from column keys and positional rows.

        Each row lists its cells in the order of ``keys``. Rows shorter than
        ``keys`` leave their trailing cells Missing, as do ``None`` cells.

        Raises
        ------
        ValueError
            If ``keys`` repeats a key or a row has more cells than there
            are keys.
        """
        keys = list(keys)
        if len(set(keys)) != len(keys):
            raise ValueError("Column keys must be unique")
        table = cls.with_columns(keys, **kwargs)
        for position, row in enumerate(rows):
            cells = list(row)
            if len(cells) > len(keys):
                raise ValueError(
                    f"Row {position} has {len(cells)} cells but there are "
                    f"only {len(keys)} columns"
                )
            table.push_row(
                {key: cell for key, cell in zip(keys, cells) if cell is not None}
            )
        return table

    @classmethod
    def from_rows(
        cls, rows: Iterable[Mapping[ColKey, Any]], **kwargs: Any
    ) -> Table:
        """Build a table by pushing each ``{key: value}`` row in turn."""
        table = cls(**kwargs)
        for row in rows:
            table.push_row(row)
        return table

    # ------------------------------------------------------------------
    # Dimensions

    @property
    def row_count(self) -> int:
        """Number of rows."""
        return self._row_count

    @property
    def column_count(self) -> int:
        """Number of columns."""
        return len(self._columns)

    def column_keys(self) -> KeysView:
        """Live view of the column keys (unordered)."""
        return self._columns.keys()

    def has_column(self, key: ColKey) -> bool:
        return key in self._columns

    # ------------------------------------------------------------------
    # Growth helpers

    def _new_column(self, key: ColKey) -> Column:
        try:
            return Column(key, _padding(self._row_count))
        except MemoryError as exc:
            raise ResourceExhaustedError(
                f"Could not allocate column {key!r} with {self._row_count} rows"
            ) from exc

    def _create_columns(self, keys: Iterable[ColKey]) -> list[ColKey]:
        """Add Missing-filled columns for every unknown key.

        Returns the keys that were created. Either all of them are created
        or none are.
        """
        created: list[ColKey] = []
        try:
            for key in keys:
                if key not in self._columns:
                    self._columns[key] = self._new_column(key)
                    created.append(key)
        except MemoryError as exc:
            for key in created:
                self._columns.pop(key, None)
            if isinstance(exc, ResourceExhaustedError):
                raise
            raise ResourceExhaustedError(
                f"Could not add columns to a table with {self._row_count} rows"
            ) from exc
        for key in created:
            logger.debug("Created column %r with %d rows", key, self._row_count)
        return created

    def _grow(self, new_count: int, created: Iterable[ColKey] = ()) -> None:
        """Extend every column with Missing cells up to ``new_count`` rows.

        On allocation failure all columns are truncated back to the old row
        count and the columns listed in ``created`` are dropped again.
        """
        old_count = self._row_count
        extra = new_count - old_count
        if extra <= 0:
            return
        try:
            for column in self._columns.values():
                column.cells.extend(_padding(extra))
        except MemoryError as exc:
            for column in self._columns.values():
                del column.cells[old_count:]
            for key in created:
                self._columns.pop(key, None)
            raise ResourceExhaustedError(
                f"Could not grow table from {old_count} to {new_count} rows"
            ) from exc
        self._row_count = new_count
        logger.debug("Grew table from %d to %d rows", old_count, new_count)

    # ------------------------------------------------------------------
    # Columns

    def ensure_column(self, key: ColKey) -> bool:
        """Create an all-Missing column for ``key`` if it does not exist.

        Returns
        -------
        bool
            True if the column was created, False if it already existed.
        """
        if key in self._columns:
            return False
        self._create_columns([key])
        return True

    def remove_column(self, key: ColKey) -> Column | None:
        """Remove a column and return it, or None if there is no such column."""
        column = self._columns.pop(key, None)
        if column is not None:
            logger.debug("Removed column %r", key)
        return column

    def get_column(self, key: ColKey) -> Column | None:
        """Return a snapshot of the column for ``key``, or None.

        The snapshot does not share its cell list with the table, so
        changing it leaves the table untouched.
        """
        column = self._columns.get(key)
        if column is None:
            return None
        return Column(key, column.to_list())

    def insert_column(self, key: ColKey, values: Iterable[Any]) -> None:
        """Add a column from one cell per existing row.

        Parameters
        ----------
        key : ColKey
            Key of the new column
        values : Iterable
            Exactly ``row_count`` cells; ``None`` cells are Missing.

        Raises
        ------
        ValueError
            If the key already exists or the number of cells is not
            ``row_count``.
        """
        if key in self._columns:
            raise ValueError(f"Column {key!r} already exists")
        cells = list(values)
        if len(cells) != self._row_count:
            raise ValueError(
                f"Column {key!r} needs {self._row_count} cells, got {len(cells)}"
            )
        self._columns[key] = Column(key, cells)
        logger.debug("Inserted column %r", key)

    def insert_column_with(
        self, key: ColKey, func: Callable[[dict[ColKey, Any]], Any]
    ) -> None:
        """Add a column whose cells are computed from each row.

        ``func`` receives the ``{key: value}`` dictionary of the Present
        cells of a row and returns the new cell (``None`` for Missing).
        """
        if key in self._columns:
            raise ValueError(f"Column {key!r} already exists")
        cells = [
            func(dict(self._row_items(row))) for row in range(self._row_count)
        ]
        self.insert_column(key, cells)

    def columns(self) -> Iterator[tuple[ColKey, Column]]:
        """Iterate over ``(key, column)`` pairs.

        The order follows the backing mapping and must not be relied upon.
        Each call returns a fresh iterator. Columns are snapshots taken as
        the iterator reaches them, as with :meth:`get_column`.
        """
        return (
            (key, Column(key, column.to_list()))
            for key, column in self._columns.items()
        )

    # ------------------------------------------------------------------
    # Cells

    def get(self, key: ColKey, row: RowPos) -> Any | None:
        """Return the value at ``(key, row)``.

        Returns None when the column does not exist, the row is out of
        range, or the cell is Missing.
        """
        row = operator.index(row)
        column = self._columns.get(key)
        if column is None:
            return None
        return column.get(row)

    def set(self, key: ColKey, row: RowPos, value: Any) -> Any | None:
        """Store ``value`` at ``(key, row)``, growing the table as needed.

        A missing column is created first. If ``row`` is past the last row,
        every column is extended with Missing cells up to ``row``.

        Parameters
        ----------
        key : ColKey
            Column key
        row : RowPos
            Non-negative row position
        value : Any
            Value to store. Must not be None.

        Returns
        -------
        Any | None
            The value previously stored in the cell, or None if it was
            Missing.

        Raises
        ------
        ValueError
            If ``value`` is None.
        IndexError
            If ``row`` is negative.
        ResourceExhaustedError
            If storage could not be grown; the table is left unchanged.
        """
        _check_value(key, value)
        row = operator.index(row)
        if row < 0:
            raise IndexError(f"Row position must be non-negative, got {row}")
        created = self._create_columns([key])
        self._grow(row + 1, created)
        column = self._columns[key]
        previous = column.cells[row]
        column.cells[row] = value
        return previous

    def __getitem__(self, index: tuple[ColKey, RowPos]) -> Any:
        key, row = index
        value = self.get(key, row)
        if value is None:
            raise KeyError(index)
        return value

    def __setitem__(self, index: tuple[ColKey, RowPos], value: Any) -> None:
        key, row = index
        self.set(key, row, value)

    # ------------------------------------------------------------------
    # Rows

    def _row_items(self, row: RowPos) -> Iterator[tuple[ColKey, Any]]:
        for key, column in self._columns.items():
            cell = column.cells[row]
            if not is_missing(cell):
                yield key, cell

    def row(self, row: RowPos) -> Iterator[tuple[ColKey, Any]] | None:
        """Return an iterator of ``(key, value)`` over the Present cells of a row.

        Returns None if ``row`` is out of range.
        """
        row = operator.index(row)
        if not 0 <= row < self._row_count:
            return None
        return self._row_items(row)

    def row_view(self, row: RowPos) -> RowView | None:
        """Return an editable :class:`RowView` of a row, or None if out of range."""
        row = operator.index(row)
        if not 0 <= row < self._row_count:
            return None
        return RowView(self, row)

    def iter_row_views(self) -> Iterator[RowView]:
        """Yield an editable view for every row, in position order."""
        for row in range(self._row_count):
            yield RowView(self, row)

    def iter_rows(self) -> Iterator[dict[ColKey, Any]]:
        """Yield one ``{key: value}`` dictionary of Present cells per row."""
        for row in range(self._row_count):
            yield dict(self._row_items(row))

    def push_row(self, values: Mapping[ColKey, Any]) -> RowPos:
        """Append a row and return its position.

        Columns not named in ``values`` get a Missing cell. Keys that are
        not yet columns create new columns, Missing for all earlier rows.

        Raises
        ------
        ValueError
            If any value is None; the table is left unchanged.
        """
        values = dict(values)
        for key, value in values.items():
            _check_value(key, value)
        row = self._row_count
        created = self._create_columns(values)
        self._grow(row + 1, created)
        for key, value in values.items():
            self._columns[key].cells[row] = value
        return row

    def push_row_with(self, func: Callable[[ColKey], Any]) -> RowPos:
        """Append a row whose cell in each column is ``func(key)``.

        ``func`` may return None to leave a cell Missing.
        """
        values = {key: func(key) for key in self._columns}
        return self.push_row(
            {key: value for key, value in values.items() if value is not None}
        )

    def remove_row(self, row: RowPos) -> dict[ColKey, Any] | None:
        """Remove a row, shifting every later row down by one.

        Returns
        -------
        dict[ColKey, Any] | None
            The Present cells of the removed row keyed by column, or None
            if ``row`` is out of range.
        """
        row = operator.index(row)
        if not 0 <= row < self._row_count:
            return None
        removed = {}
        for key, column in self._columns.items():
            cell = column.cells.pop(row)
            if not is_missing(cell):
                removed[key] = cell
        self._row_count -= 1
        logger.debug("Removed row %d, %d rows left", row, self._row_count)
        return removed

    # ------------------------------------------------------------------
    # Whole-table helpers

    def presence_mask(self, keys: Iterable[ColKey] | None = None) -> np.ndarray:
        """Boolean array of shape (row_count, n_keys) marking Present cells.

        Columns appear in the order of ``keys`` (default: ``column_keys()``).
        Keys without a column produce an all-False column.
        """
        keys = list(self._columns) if keys is None else list(keys)
        mask = np.zeros((self._row_count, len(keys)), dtype=bool)
        for j, key in enumerate(keys):
            column = self._columns.get(key)
            if column is not None:
                mask[:, j] = column.mask()
        return mask

    def copy(self) -> Table:
        """Return an independent copy; cell values themselves are shared."""
        other = type(self)(map_factory=self._map_factory)
        for key, column in self._columns.items():
            other._columns[key] = Column(key, list(column.cells))
        other._row_count = self._row_count
        return other

    def __contains__(self, key: object) -> bool:
        return key in self._columns

    def __len__(self) -> int:
        return self._row_count

    def __iter__(self) -> Iterator[dict[ColKey, Any]]:
        return self.iter_rows()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Table):
            return NotImplemented
        if self._row_count != other._row_count:
            return False
        if set(self._columns) != set(other._columns):
            return False
        return all(
            column.cells == other._columns[key].cells
            for key, column in self._columns.items()
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Table(columns={self.column_count}, rows={self._row_count})"
