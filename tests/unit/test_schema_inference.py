"""
Unit tests for CSV schema inference.

Covers:
- End-to-end schema for a small dataset
- Row count independent of sampling and blank lines
- Type collapse to string and its monotonicity
- Numeric statistics (min/max/mean/median)
- Nullable and unique value tracking
- Empty and ragged documents
"""

import pytest

from insighthub.data_processing.csv_parser import infer_csv_schema, _numeric_summary
from insighthub.data_processing.schemas import CSVSchema


def _column(schema, name):
    return next(column for column in schema.columns if column.name == name)


class TestEndToEndSchema:
    """Test the full schema of a small people dataset."""

    def test_sample_dataset(self, sample_csv):
        schema = infer_csv_schema(sample_csv)
        result = schema.to_dict()

        assert result["row_count"] == 3
        assert result["columns"][0] == {
            "name": "name", "type": "string", "nullable": False, "unique_values": 3
        }
        assert result["columns"][1] == {
            "name": "age", "type": "number", "nullable": True, "unique_values": 2,
            "min": 30, "max": 45, "mean": 37.5, "median": 37.5
        }
        assert result["columns"][2] == {
            "name": "joined", "type": "date", "nullable": False, "unique_values": 3
        }

    def test_returns_schema_model(self, sample_csv):
        assert isinstance(infer_csv_schema(sample_csv), CSVSchema)


class TestRowCount:
    """Test that row_count is physical lines minus the header."""

    @pytest.mark.parametrize("sample_size", [0, 1, 2, 100])
    def test_independent_of_sample_size(self, sample_size):
        doc = "a\n1.5\n2.5\n3.5\n4.5"
        assert infer_csv_schema(doc, sample_size=sample_size).row_count == 4

    def test_blank_and_trailing_lines_are_counted(self):
        """Blank lines are skipped for typing but still counted."""
        assert infer_csv_schema("a\n1.5\n\n2.5").row_count == 3
        assert infer_csv_schema("a\n1.5\n").row_count == 2

    def test_header_only(self):
        schema = infer_csv_schema("a,b")
        assert schema.row_count == 0
        assert [column.type for column in schema.columns] == ["unknown", "unknown"]

    def test_empty_document(self):
        schema = infer_csv_schema("")
        assert schema.columns == []
        assert schema.row_count == 0


class TestSampling:
    """Test that only the first sample_size data rows are examined."""

    def test_late_values_are_not_sampled(self):
        """A conflicting value after the sampling window doesn't change the type."""
        doc = "v\n10\n20\nabc"
        assert _column(infer_csv_schema(doc, sample_size=2), "v").type == "number"
        assert _column(infer_csv_schema(doc, sample_size=3), "v").type == "string"

    def test_stats_only_cover_sample(self):
        schema = infer_csv_schema("v\n10\n20\n1000", sample_size=2)
        column = _column(schema, "v")
        assert column.max == 20
        assert column.unique_values == 2


class TestTypeCollapse:
    """Test the collapse-to-string rule."""

    def test_number_then_string(self):
        assert _column(infer_csv_schema("v\n5\nabc"), "v").type == "string"

    def test_collapse_is_permanent(self):
        """Once string, later consistent values don't bring the old type back."""
        schema = infer_csv_schema("v\n5\nabc\n7\n8\n9")
        assert _column(schema, "v").type == "string"

    def test_number_then_date_collapses(self):
        assert _column(infer_csv_schema("v\n5\n2023-01-01"), "v").type == "string"

    def test_zero_one_encoding_is_boolean(self):
        """A 0/1 column is boolean for the schema path."""
        assert _column(infer_csv_schema("flag\n0\n1\n1"), "flag").type == "boolean"

    def test_mixed_boolean_and_number(self):
        """'1' is boolean, so mixing it with other numbers collapses to string."""
        column = _column(infer_csv_schema("v\n1\n2\n3"), "v")
        assert column.type == "string"
        assert column.min is None

    def test_first_value_sets_type(self):
        schema = infer_csv_schema("a,b\n,true\n2.5,no")
        assert _column(schema, "a").type == "number"
        assert _column(schema, "b").type == "boolean"


class TestNumericStatistics:
    """Test numeric summary statistics."""

    def test_even_count_median(self):
        column = _column(infer_csv_schema("v\n1.0\n2.0\n3.0\n4.0"), "v")
        assert column.median == 2.5
        assert column.mean == 2.5
        assert column.min == 1.0
        assert column.max == 4.0

    def test_odd_count_median(self):
        column = _column(infer_csv_schema("v\n30\n10\n20"), "v")
        assert column.median == 20

    def test_summary_helper(self):
        assert _numeric_summary([1, 2, 3, 4])["median"] == 2.5
        assert _numeric_summary([1, 2, 3])["median"] == 2

    def test_non_number_columns_have_no_stats(self, sample_csv):
        column = _column(infer_csv_schema(sample_csv), "name")
        assert column.min is None
        assert column.max is None
        assert column.mean is None
        assert column.median is None


class TestColumnTracking:
    """Test nullable flags, unique counts and header handling."""

    def test_nullable_from_blank_or_whitespace(self):
        schema = infer_csv_schema("a,b\n1.5,x\n  ,y")
        assert _column(schema, "a").nullable is True
        assert _column(schema, "b").nullable is False

    def test_unique_values_collapse_duplicates(self):
        schema = infer_csv_schema("city\nParis\nRome\nParis\n Paris ")
        assert _column(schema, "city").unique_values == 2

    def test_headers_are_trimmed_and_unquoted(self):
        schema = infer_csv_schema(' "Name" ,Age\r\nAda,36\r\n')
        assert [column.name for column in schema.columns] == ["Name", "Age"]
        assert _column(schema, "Age").type == "number"

    def test_duplicate_headers_kept_separately(self):
        schema = infer_csv_schema("x,x\n1.5,abc")
        assert [column.name for column in schema.columns] == ["x", "x"]
        assert [column.type for column in schema.columns] == ["number", "string"]

    def test_extra_fields_ignored_and_missing_fields_tolerated(self):
        schema = infer_csv_schema("a,b\n1.5,x,extra\n2.5")
        assert len(schema.columns) == 2
        assert _column(schema, "a").unique_values == 2
        assert _column(schema, "b").unique_values == 1
        assert _column(schema, "b").nullable is False

    def test_quoted_values(self):
        schema = infer_csv_schema('city,pop\n"Paris, FR",2.1\n"Rome, IT",2.8')
        assert _column(schema, "city").type == "string"
        assert _column(schema, "pop").max == 2.8
