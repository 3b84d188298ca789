"""Tests for the query engine."""

from sheetdb.table.models import CellValue, coerce_row
from sheetdb.table.query import count_populated, find_column_value, row_matches, select_rows


ROWS = [
    coerce_row({"name": "John", "city": "Paris"}),
    coerce_row({"name": "Jane", "city": "Rome"}),
    coerce_row({"name": "John", "city": "Oslo"}),
    coerce_row({"name": "Ann"}),
]


class TestRowMatches:
    """Test matching a single row."""

    def test_none_and_empty_query_match(self):
        assert row_matches(ROWS[0], None)
        assert row_matches(ROWS[0], {})

    def test_all_pairs_must_match(self):
        assert row_matches(ROWS[0], coerce_row({"name": "John", "city": "Paris"}))
        assert not row_matches(ROWS[0], coerce_row({"name": "John", "city": "Rome"}))

    def test_missing_column_does_not_match(self):
        assert not row_matches(ROWS[3], coerce_row({"city": ""}))

    def test_kind_must_match(self):
        row = coerce_row({"age": 30})
        assert row_matches(row, coerce_row({"age": 30}))
        assert not row_matches(row, {"age": CellValue.text("30")})


class TestSelectRows:
    """Test selecting rows."""

    def test_wildcard_returns_everything_in_order(self):
        assert select_rows(ROWS) == ROWS
        assert select_rows(ROWS, {}) == ROWS

    def test_every_pair_of_a_row_selects_it(self):
        for row in ROWS:
            for column, value in row.items():
                assert row in select_rows(ROWS, {column: value})

    def test_preserves_storage_order(self):
        result = select_rows(ROWS, coerce_row({"name": "John"}))
        assert [row["city"].value for row in result] == ["Paris", "Oslo"]

    def test_no_match_is_empty_list(self):
        assert select_rows(ROWS, coerce_row({"name": "Nobody"})) == []
        assert select_rows([], None) == []

    def test_returns_copies(self):
        result = select_rows(ROWS, coerce_row({"name": "Jane"}))
        result[0]["city"] = CellValue.text("Berlin")
        assert ROWS[1]["city"] == CellValue.text("Rome")


class TestFindColumnValue:
    """Test the first-match column lookup."""

    def test_first_match_wins(self):
        assert find_column_value(ROWS, "name", CellValue.text("John"), "city") == CellValue.text("Paris")

    def test_no_match(self):
        assert find_column_value(ROWS, "name", CellValue.text("Zed"), "city") is None

    def test_match_without_target_column(self):
        assert find_column_value(ROWS, "name", CellValue.text("Ann"), "city") is None


class TestCountPopulated:
    """Test counting populated cells."""

    def test_absent_and_empty_are_excluded(self):
        rows = [coerce_row({"a": "1"}), coerce_row({"a": ""}), {}]
        assert count_populated(rows, "a") == 1

    def test_whitespace_is_empty(self):
        rows = [coerce_row({"a": "  "}), coerce_row({"a": 0})]
        assert count_populated(rows, "a") == 1
