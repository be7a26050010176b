"""
Unit tests for rule-based insight generation.

Tests per-column insights for numeric, string, date and boolean data,
plus skipping rules for empty and unsupported columns.
"""

from datetime import datetime, timezone

from insighthub.data_processing import parse_csv_to_objects
from insighthub.data_processing.insights import generate_data_insights, get_top_values


def _by_column(result):
    return {item["column"]: item for item in result["insights"]}


class TestEmptyInput:
    """Empty data yields no insights."""

    def test_no_records(self):
        assert generate_data_insights([]) == {"insights": []}

    def test_record_without_keys(self):
        assert generate_data_insights([{}]) == {"insights": []}

    def test_none(self):
        assert generate_data_insights(None) == {"insights": []}


class TestNumberInsights:
    """Test numeric column insights."""

    def test_stats_and_text(self, sample_csv):
        insights = _by_column(generate_data_insights(parse_csv_to_objects(sample_csv)))
        age = insights["age"]

        assert age["type"] == "number"
        assert age["stats"] == {"count": 2, "min": 30, "max": 45, "avg": 37.5, "sum": 75}
        assert age["insight"] == "age ranges from 30 to 45 with an average of 37.50."

    def test_float_values(self):
        records = [{"price": 1.5}, {"price": 2.4}, {"price": 3.25}]
        price = _by_column(generate_data_insights(records))["price"]
        assert price["insight"] == "price ranges from 1.5 to 3.25 with an average of 2.38."

    def test_integral_floats_print_without_decimal(self):
        records = [{"v": 2.0}, {"v": 4.0}]
        v = _by_column(generate_data_insights(records))["v"]
        assert v["insight"] == "v ranges from 2 to 4 with an average of 3.00."


class TestStringInsights:
    """Test string column insights."""

    def test_all_unique(self, sample_csv):
        name = _by_column(generate_data_insights(parse_csv_to_objects(sample_csv)))["name"]
        assert name["insight"] == "name has all unique values."
        assert name["stats"]["unique"] == 3

    def test_repeated_values(self):
        records = [{"city": c} for c in ["Paris", "Rome", "Paris", "Oslo", "Rome", "Paris"]]
        city = _by_column(generate_data_insights(records))["city"]

        assert city["insight"] == "city has 3 unique values out of 6 total."
        assert city["stats"]["count"] == 6
        assert city["stats"]["top_values"] == [
            {"value": "Paris", "count": 3},
            {"value": "Rome", "count": 2},
            {"value": "Oslo", "count": 1}
        ]

    def test_mixed_kinds_count_every_value(self):
        """Numbers in a string column still count toward total and unique."""
        records = parse_csv_to_objects("code\nabc\n123\nabc\n")
        code = _by_column(generate_data_insights(records))["code"]

        assert code["type"] == "string"
        assert code["insight"] == "code has 2 unique values out of 3 total."
        assert code["stats"]["count"] == 3
        assert code["stats"]["top_values"] == [
            {"value": "abc", "count": 2},
            {"value": "123", "count": 1}
        ]

    def test_top_values_count_by_text(self):
        assert get_top_values(["123", 123, 1.5, True]) == [
            {"value": "123", "count": 2},
            {"value": "1.5", "count": 1},
            {"value": "true", "count": 1}
        ]

    def test_boolean_and_one_are_distinct(self):
        records = [{"v": "x"}, {"v": True}, {"v": 1}]
        assert _by_column(generate_data_insights(records))["v"]["stats"]["unique"] == 3

    def test_top_values_ties_keep_first_seen_order(self):
        values = ["b", "a", "c", "d", "a", "b"]
        assert get_top_values(values) == [
            {"value": "b", "count": 2},
            {"value": "a", "count": 2},
            {"value": "c", "count": 1}
        ]


class TestDateInsights:
    """Test date column insights."""

    def test_span(self, sample_csv):
        joined = _by_column(generate_data_insights(parse_csv_to_objects(sample_csv)))["joined"]

        assert joined["type"] == "date"
        assert joined["stats"]["min_date"] == datetime(2023, 1, 15)
        assert joined["stats"]["max_date"] == datetime(2023, 3, 10)
        assert joined["insight"] == "joined spans from 1/15/2023 to 3/10/2023."

    def test_unordered_dates(self):
        records = [{"d": datetime(2024, 5, 1)}, {"d": datetime(2021, 12, 31)}, {"d": datetime(2022, 6, 15)}]
        d = _by_column(generate_data_insights(records))["d"]
        assert d["insight"] == "d spans from 12/31/2021 to 5/1/2024."

    def test_naive_dates_are_ordered_as_utc(self):
        """Naive and UTC-aware values compare the same on every host."""
        aware = datetime(2023, 1, 15, 10, 0, tzinfo=timezone.utc)
        naive = datetime(2023, 1, 15, 11, 0)
        d = _by_column(generate_data_insights([{"d": naive}, {"d": aware}]))["d"]

        assert d["stats"]["min_date"] == aware
        assert d["stats"]["max_date"] == naive


class TestBooleanInsights:
    """Boolean columns get a true/false count."""

    def test_true_false_counts(self):
        records = parse_csv_to_objects("active\nyes\nno\ntrue\n")
        active = _by_column(generate_data_insights(records))["active"]

        assert active["type"] == "boolean"
        assert active["stats"] == {"count": 3, "true_count": 2, "false_count": 1}
        assert active["insight"] == "active is true for 2 of 3 values."

    def test_booleans_are_not_numbers(self):
        records = [{"flag": True}, {"flag": False}]
        assert _by_column(generate_data_insights(records))["flag"]["type"] == "boolean"


class TestColumnSelection:
    """Test which columns produce insights."""

    def test_all_null_column_is_skipped(self):
        records = [{"a": None, "b": 1}, {"a": None, "b": 2}]
        assert list(_by_column(generate_data_insights(records))) == ["b"]

    def test_unsupported_type_is_skipped(self):
        records = [{"tags": ["x"], "n": 1}]
        assert list(_by_column(generate_data_insights(records))) == ["n"]

    def test_columns_come_from_first_record(self):
        records = [{"a": 1}, {"a": 2, "extra": "x"}]
        assert list(_by_column(generate_data_insights(records))) == ["a"]

    def test_missing_keys_count_as_null(self):
        records = [{"a": 1, "b": "x"}, {"a": 3}]
        b = _by_column(generate_data_insights(records))["b"]
        assert b["stats"]["count"] == 1

    def test_dispatch_on_first_non_null_value(self):
        """Values of another kind than the first one are left out of the stats."""
        records = [{"v": None}, {"v": 10}, {"v": "N/A"}, {"v": 20}]
        v = _by_column(generate_data_insights(records))["v"]
        assert v["type"] == "number"
        assert v["stats"]["count"] == 2
        assert v["stats"]["max"] == 20
