"""Structural encoding and decoding of tables.

Three plain-Python shapes are supported, all built from lists, tuples and
dictionaries so they can be handed to any serializer:

* column list (the canonical form):
  ``{"row_count": n, "columns": [(key, [cell, ...]), ...]}``
* column mapping: ``{"row_count": n, "columns": {key: [cell, ...], ...}}``
* row list: ``[{key: value, ...}, ...]`` holding only Present cells

The row count is stored explicitly so tables with rows but no columns
survive a round trip. Missing cells are written as ``None``. Decoding is
all-or-nothing: input is fully validated before a table is built, and any
inconsistency raises :class:`~hashgrid.errors.FormatError`.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from .errors import FormatError
from .table import Table
from .types import ColKey

logger = logging.getLogger(__name__)

ROW_COUNT = "row_count"
COLUMNS = "columns"


def encode(table: Table) -> dict[str, Any]:
    """Encode a table as its row count and an ordered list of columns.

    Parameters
    ----------
    table : Table
        The table to encode.

    Returns
    -------
    dict
        ``{"row_count": n, "columns": [(key, cells), ...]}``. Every cell
        list has ``n`` entries, with None for Missing cells.
    """
    return {
        ROW_COUNT: table.row_count,
        COLUMNS: [(key, column.cells) for key, column in table.columns()],
    }


def decode(data: Any, **kwargs: Any) -> Table:
    """Rebuild a table from the output of :func:`encode`.

    Parameters
    ----------
    data : Mapping or Iterable
        The encoded table. A bare sequence of ``(key, cells)`` pairs is
        also accepted; its row count is then the common column length.
    **kwargs
        Passed to the :class:`Table` constructor (e.g. ``map_factory``).

    Returns
    -------
    Table
        A table with the encoded row count and cells.

    Raises
    ------
    FormatError
        If the envelope is malformed, an entry is not a ``(key, cells)``
        pair, a key is unhashable or repeated, or a column's length
        disagrees with the row count or the other columns.
    """
    row_count, entries = _unwrap(data)
    columns = []
    for i, entry in enumerate(entries):
        if isinstance(entry, (str, bytes, Mapping)) or not isinstance(
            entry, Iterable
        ):
            raise _reject(f"Entry {i} is not a (key, cells) pair")
        pair = list(entry)
        if len(pair) != 2:
            raise _reject(f"Entry {i} has {len(pair)} items, expected 2")
        key, cells = pair
        try:
            hash(key)
        except TypeError:
            raise _reject(f"Entry {i} has unhashable key {key!r}") from None
        if isinstance(cells, (str, bytes, Mapping)) or not isinstance(
            cells, Iterable
        ):
            raise _reject(f"Cells of column {key!r} are not a sequence")
        columns.append((key, list(cells)))
    try:
        return Table.from_columns(columns, row_count=row_count, **kwargs)
    except FormatError as exc:
        logger.debug("Rejected encoded table: %s", exc)
        raise


def encode_mapping(table: Table) -> dict[str, Any]:
    """Encode a table as its row count and a ``{key: cells}`` dictionary."""
    encoded = encode(table)
    return {ROW_COUNT: encoded[ROW_COUNT], COLUMNS: dict(encoded[COLUMNS])}


def decode_mapping(data: Mapping[str, Any], **kwargs: Any) -> Table:
    """Rebuild a table from the output of :func:`encode_mapping`."""
    if not isinstance(data, Mapping) or not isinstance(data.get(COLUMNS), Mapping):
        raise _reject("Expected a mapping with a 'columns' mapping")
    return decode(
        {ROW_COUNT: data.get(ROW_COUNT), COLUMNS: data[COLUMNS].items()}, **kwargs
    )


def encode_rows(table: Table) -> list[dict[ColKey, Any]]:
    """Encode a table as one dictionary of Present cells per row.

    Columns in which every cell is Missing do not appear in this form and
    are lost when decoding it.
    """
    return list(table.iter_rows())


def decode_rows(rows: Iterable[Any], **kwargs: Any) -> Table:
    """Rebuild a table from the output of :func:`encode_rows`.

    Raises
    ------
    FormatError
        If a row is not a mapping or holds a None value.
    """
    staged = []
    for i, row in enumerate(rows):
        if not isinstance(row, Mapping):
            raise _reject(f"Row {i} is not a mapping")
        for key, value in row.items():
            if value is None:
                raise _reject(f"Row {i} has None for column {key!r}")
        staged.append(row)
    return Table.from_rows(staged, **kwargs)


def _unwrap(data: Any) -> tuple[int | None, Iterable[Any]]:
    """Split encoded data into its declared row count and column entries."""
    if not isinstance(data, Mapping):
        if isinstance(data, (str, bytes)) or not isinstance(data, Iterable):
            raise _reject(f"Expected an encoded table, got {type(data).__name__}")
        return None, data
    unknown = set(data) - {ROW_COUNT, COLUMNS}
    if unknown:
        raise _reject(f"Unknown fields {sorted(map(repr, unknown))}")
    row_count = data.get(ROW_COUNT)
    if row_count is not None and (
        isinstance(row_count, bool) or not isinstance(row_count, int) or row_count < 0
    ):
        raise _reject(f"Row count must be a non-negative integer, got {row_count!r}")
    entries = data.get(COLUMNS, ())
    if isinstance(entries, (str, bytes, Mapping)) or not isinstance(entries, Iterable):
        raise _reject("Field 'columns' is not a sequence of (key, cells) pairs")
    return row_count, entries


def _reject(message: str) -> FormatError:
    logger.debug("Rejected encoded table: %s", message)
    return FormatError(message)
