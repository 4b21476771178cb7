"""hashgrid: a two-dimensional table with hashable column keys and integer rows.

The hashgrid package provides a sparse-spreadsheet style container:
- Columns looked up by arbitrary hashable keys
- Rows addressed by dense, zero-based positions
- Automatic growth when writing past the last row
- Order-preserving row removal
- Structural encoding and pandas DataFrame interchange
"""

import logging
from importlib import metadata

# Core types and data structures
from .core import MISSING, Column, is_missing
from .errors import FormatError, HashGridError, ResourceExhaustedError

# DataFrame interchange
from .frames import from_dataframe, to_dataframe

# Structural encoding
from .serialize import (
    decode,
    decode_mapping,
    decode_rows,
    encode,
    encode_mapping,
    encode_rows,
)
from .table import RowView, Table
from .types import ColKey, RowPos

try:
    __version__ = metadata.version("hashgrid")
except metadata.PackageNotFoundError:
    # Fallback for development installs
    __version__ = "0.1.0"

__all__ = [
    # Core types
    "Table",
    "RowView",
    "Column",
    "MISSING",
    "is_missing",
    "ColKey",
    "RowPos",
    # Errors
    "HashGridError",
    "FormatError",
    "ResourceExhaustedError",
    # Encoding
    "encode",
    "decode",
    "encode_mapping",
    "decode_mapping",
    "encode_rows",
    "decode_rows",
    # pandas
    "to_dataframe",
    "from_dataframe",
    # Logging
    "get_logger",
]


# Configure package-wide logging
def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger for the hashgrid package.

    Parameters
    ----------
    name : str | None, optional
        Logger name. If None, uses the package name.

    Returns
    -------
    logging.Logger
        Configured logger instance.
    """
    if name is None:
        name = __name__.split(".")[0]
    return logging.getLogger(name)


# Set up default logging configuration
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
