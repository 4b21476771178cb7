"""Tests for pandas DataFrame interchange."""

import numpy as np
import pandas as pd
import pytest

from hashgrid import FormatError, Table, from_dataframe, to_dataframe


@pytest.fixture
def sample_df():
    """Sample DataFrame with gaps in several columns."""
    return pd.DataFrame(
        {
            "A": [1.0, np.nan, 3.0],
            "B": ["x", None, "z"],
            "C": [True, False, True],
        }
    )


class TestToDataFrame:
    """Test Table -> DataFrame."""

    def test_shape_and_values(self, abc_table):
        df = to_dataframe(abc_table)

        assert df.shape == (3, 2)
        assert set(df.columns) == {"name", "age"}
        assert list(df["name"]) == ["A", "B", "C"]
        assert df["age"].iloc[1] == 41
        assert pd.isna(df["age"].iloc[2])

    def test_range_index(self, sparse_table):
        df = to_dataframe(sparse_table)

        assert isinstance(df.index, pd.RangeIndex)
        assert len(df) == 5

    def test_empty(self, empty_table):
        df = to_dataframe(empty_table)
        assert df.shape == (0, 0)


class TestFromDataFrame:
    """Test DataFrame -> Table."""

    def test_nulls_become_missing(self, sample_df):
        table = from_dataframe(sample_df)

        assert table.row_count == 3
        assert table.get("A", 1) is None
        assert table.get("B", 1) is None
        assert table.get("A", 2) == 3.0
        assert table.get("C", 1) is False

    def test_ignores_index_labels(self):
        df = pd.DataFrame({"v": [10, 20]}, index=["r1", "r2"])

        table = from_dataframe(df)

        assert table.get("v", 0) == 10
        assert table.get("v", 1) == 20

    def test_duplicate_labels(self):
        df = pd.DataFrame([[1, 2]], columns=["a", "a"])

        with pytest.raises(FormatError, match="Duplicate"):
            from_dataframe(df)

    def test_rows_without_columns(self):
        df = pd.DataFrame(index=range(4))

        table = from_dataframe(df)

        assert table.row_count == 4
        assert table.column_count == 0

    def test_round_trip_presence(self, abc_table):
        table = from_dataframe(to_dataframe(abc_table))

        assert np.array_equal(
            table.presence_mask(["name", "age"]),
            abc_table.presence_mask(["name", "age"]),
        )
        assert table.get("name", 2) == "C"
        assert table.get("age", 0) == 30

    def test_mixed_table(self):
        table = Table()
        table.set("k", 2, "v")

        result = from_dataframe(to_dataframe(table))

        assert result == table
