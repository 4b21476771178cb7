"""Exceptions raised by hashgrid.

Absence of a value is not an error: lookups return ``None``. The exceptions
here cover hard failures that leave the caller's table untouched.
"""


class HashGridError(Exception):
    """Base class for all hashgrid errors."""


class FormatError(HashGridError, ValueError):
    """Encoded table data is malformed or inconsistent.

    Raised while decoding, before any table is constructed.
    """


class ResourceExhaustedError(HashGridError, MemoryError):
    """Storage could not be grown.

    The triggering operation is rolled back, so the table keeps the state it
    had before the call.
    """
