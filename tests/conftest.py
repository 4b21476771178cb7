"""Shared test fixtures for hashgrid tests."""

import pytest

from hashgrid import Table


@pytest.fixture
def empty_table():
    """Table with no columns and no rows."""
    return Table()


@pytest.fixture
def abc_table():
    """Three rows A, B, C over columns "name" and "age"; C has no age."""
    table = Table()
    table.push_row({"name": "A", "age": 30})
    table.push_row({"name": "B", "age": 41})
    table.push_row({"name": "C"})
    return table


@pytest.fixture
def sparse_table():
    """Table built out of order with gaps in every column."""
    table = Table()
    table.set("x", 4, 1.5)
    table.set("y", 0, "first")
    table.set("z", 2, (1, 2))
    return table
