"""Tests for structural encoding and decoding."""

import pytest

from hashgrid import (
    FormatError,
    Table,
    decode,
    decode_mapping,
    decode_rows,
    encode,
    encode_mapping,
    encode_rows,
)


class TestColumnEncoding:
    """Test the canonical column-list form."""

    def test_encode_shape(self, abc_table):
        encoded = encode(abc_table)

        assert encoded["row_count"] == 3
        assert dict(encoded["columns"]) == {
            "name": ["A", "B", "C"],
            "age": [30, 41, None],
        }

    def test_round_trip_sparse(self, sparse_table):
        decoded = decode(encode(sparse_table))

        assert decoded == sparse_table
        assert decoded.row_count == 5
        assert decoded.get_column("y").cells == ["first", None, None, None, None]

    def test_round_trip_ignores_entry_order(self, abc_table):
        encoded = encode(abc_table)
        encoded["columns"].reverse()

        assert decode(encoded) == abc_table

    def test_all_missing_column_survives(self):
        table = Table.from_rows([{"a": 1}, {"a": 2}])
        table.ensure_column("empty")

        decoded = decode(encode(table))

        assert "empty" in decoded
        assert decoded.get_column("empty").cells == [None, None]

    def test_empty_table(self, empty_table):
        assert encode(empty_table) == {"row_count": 0, "columns": []}
        assert decode(encode(empty_table)) == empty_table

    def test_rows_without_columns(self):
        table = Table()
        table.push_row({})
        table.push_row({})

        decoded = decode(encode(table))

        assert decoded.row_count == 2
        assert decoded.column_count == 0
        assert decoded == table

    def test_all_columns_removed(self):
        table = Table.from_rows([{"a": 1}, {"a": 2}, {"a": 3}])
        table.remove_column("a")

        decoded = decode(encode(table))

        assert decoded.row_count == 3
        assert decoded == table

    def test_declared_row_count_mismatch(self):
        with pytest.raises(FormatError, match="expected 3"):
            decode({"row_count": 3, "columns": [("a", [1, 2])]})

    def test_declared_row_count_invalid(self):
        with pytest.raises(FormatError, match="non-negative"):
            decode({"row_count": -1, "columns": []})
        with pytest.raises(FormatError, match="non-negative"):
            decode({"row_count": "3", "columns": []})

    def test_unknown_field(self):
        with pytest.raises(FormatError, match="Unknown fields"):
            decode({"row_count": 0, "columns": [], "rows": []})

    def test_bare_column_list(self):
        table = decode([("a", [1, None]), ("b", [None, 2])])

        assert table.row_count == 2
        assert table.get("b", 1) == 2

    def test_decoded_table_is_independent(self, abc_table):
        encoded = encode(abc_table)
        decoded = decode(encoded)
        encoded["columns"][0][1].append("extra")

        assert decoded.row_count == 3
        assert abc_table.row_count == 3
        assert len(abc_table.get_column(encoded["columns"][0][0])) == 3

    def test_length_mismatch(self):
        with pytest.raises(FormatError, match="expected 2"):
            decode([("a", [1, 2]), ("b", [1])])

    def test_duplicate_keys(self):
        with pytest.raises(FormatError, match="Duplicate"):
            decode([("a", [1]), ("a", [2])])

    def test_not_a_pair(self):
        with pytest.raises(FormatError, match="expected 2"):
            decode([("a", [1], "extra")])
        with pytest.raises(FormatError, match="not a"):
            decode([42])
        with pytest.raises(FormatError, match="Expected an encoded table"):
            decode(42)

    def test_unhashable_key(self):
        with pytest.raises(FormatError, match="unhashable"):
            decode([(["a"], [1])])

    def test_cells_must_be_sequence(self):
        with pytest.raises(FormatError, match="not a sequence"):
            decode([("a", "abc")])

    def test_format_error_is_value_error(self):
        with pytest.raises(ValueError):
            decode([("a", [1]), ("b", [])])

    def test_map_factory_passed_through(self, abc_table):
        decoded = decode(encode(abc_table), map_factory=dict)
        assert decoded == abc_table


class TestMappingEncoding:
    """Test the column-mapping form."""

    def test_round_trip(self, sparse_table):
        encoded = encode_mapping(sparse_table)

        assert encoded["row_count"] == 5
        assert set(encoded["columns"]) == {"x", "y", "z"}
        assert decode_mapping(encoded) == sparse_table

    def test_rows_without_columns(self):
        table = Table.from_rows([{}, {}, {}, {}])

        assert decode_mapping(encode_mapping(table)).row_count == 4

    def test_rejects_non_mapping(self):
        with pytest.raises(FormatError, match="Expected a mapping"):
            decode_mapping([("a", [1])])
        with pytest.raises(FormatError, match="Expected a mapping"):
            decode_mapping({"row_count": 1, "columns": [("a", [1])]})

    def test_length_mismatch(self):
        with pytest.raises(FormatError):
            decode_mapping({"columns": {"a": [1, 2, 3], "b": [None]}})
        with pytest.raises(FormatError, match="expected 2"):
            decode_mapping({"row_count": 2, "columns": {"a": [1, 2, 3]}})


class TestRowEncoding:
    """Test the row-list form."""

    def test_encode_rows(self, abc_table):
        assert encode_rows(abc_table) == [
            {"name": "A", "age": 30},
            {"name": "B", "age": 41},
            {"name": "C"},
        ]

    def test_round_trip(self, abc_table):
        assert decode_rows(encode_rows(abc_table)) == abc_table

    def test_empty_rows_preserved(self):
        table = Table.from_rows([{}, {"a": 1}, {}])

        decoded = decode_rows(encode_rows(table))

        assert decoded.row_count == 3
        assert decoded == table

    def test_rejects_non_mapping_row(self):
        with pytest.raises(FormatError, match="Row 1"):
            decode_rows([{"a": 1}, ["a", 1]])

    def test_rejects_none_value(self):
        with pytest.raises(FormatError, match="None"):
            decode_rows([{"a": None}])
