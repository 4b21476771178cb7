"""Conversion between tables and pandas DataFrames.

A Table maps naturally onto a DataFrame: table column keys become DataFrame
column labels and row positions become a ``RangeIndex``. Missing cells are
written as None (pandas may store them as NaN depending on the dtype it
infers) and any pandas null scalar is read back as Missing.
"""

from typing import Any

import pandas as pd

from .core import MISSING
from .errors import FormatError
from .table import Table


def _as_cell(value: Any) -> Any:
    """Map pandas null scalars (None, NaN, NA, NaT) to MISSING."""
    if pd.api.types.is_scalar(value) and pd.isna(value):
        return MISSING
    return value


def to_dataframe(table: Table) -> pd.DataFrame:
    """Convert a table to a DataFrame.

    Parameters
    ----------
    table : Table
        The table to convert.

    Returns
    -------
    pd.DataFrame
        Frame with one column per table column (in ``column_keys()``
        order) and ``table.row_count`` rows.
    """
    data = {key: column.to_list() for key, column in table.columns()}
    return pd.DataFrame(
        data, index=pd.RangeIndex(table.row_count), columns=list(data)
    )


def from_dataframe(df: pd.DataFrame, **kwargs: Any) -> Table:
    """Convert a DataFrame to a table.

    Row positions follow the frame's row order; the index labels are
    ignored.

    Raises
    ------
    FormatError
        If the frame has duplicate column labels.
    """
    if df.columns.has_duplicates:
        duplicated = list(df.columns[df.columns.duplicated()])
        raise FormatError(f"Duplicate column labels: {duplicated!r}")
    columns = [
        (label, [_as_cell(value) for value in df[label].tolist()])
        for label in df.columns
    ]
    return Table.from_columns(columns, row_count=len(df), **kwargs)
