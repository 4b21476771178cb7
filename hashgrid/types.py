"""Type aliases for hashgrid.

This module defines type aliases used throughout the package for clarity
and consistency. The actual data structures are in core.py and table.py.
"""

from collections.abc import Hashable

# Type aliases for row and column references
ColKey = Hashable
"""Alias for column keys within a Table.

Any hashable, equality-comparable object can name a column (strings,
integers, tuples, etc.). No ordering between keys is required.
"""

RowPos = int
"""Alias for row positions within a Table.

Always a zero-based, dense integer position. Removing a row renumbers all
later rows down by one.
"""
