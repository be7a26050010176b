"""
Rule-based insights over typed records.

Works on the output of parse_csv_to_objects(), not on raw text, and
dispatches per column on the runtime type of the first non-null value.
No LLM involved - results are deterministic.
"""

from collections import Counter
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

TOP_VALUES_LIMIT = 3


def _format_number(value: float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _format_date(value: datetime) -> str:
    # en-US short date, e.g. 1/15/2023
    return f"{value.month}/{value.day}/{value.year}"


def _value_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _format_number(value)
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def get_top_values(values: List[Any], limit: int = TOP_VALUES_LIMIT) -> List[Dict[str, Any]]:
    """
    Most frequent values with their counts.

    Values are counted by their text, so 123 and "123" are the same value.
    Ties keep first-seen order.
    """
    counts = Counter(_value_text(value) for value in values)
    return [{"value": value, "count": count} for value, count in counts.most_common(limit)]


def _number_insight(column: str, values: List[Any]) -> Dict[str, Any]:
    minimum = min(values)
    maximum = max(values)
    total = sum(values)
    avg = total / len(values)

    return {
        "column": column,
        "type": "number",
        "stats": {
            "count": len(values),
            "min": minimum,
            "max": maximum,
            "avg": avg,
            "sum": total
        },
        "insight": (
            f"{column} ranges from {_format_number(minimum)} to {_format_number(maximum)} "
            f"with an average of {avg:.2f}."
        )
    }


def _string_insight(column: str, values: List[Any]) -> Dict[str, Any]:
    # True and 1 hash alike in Python; tag booleans so they stay distinct
    unique = len({(isinstance(value, bool), value) for value in values})

    if unique == len(values):
        text = f"{column} has all unique values."
    else:
        text = f"{column} has {unique} unique values out of {len(values)} total."

    return {
        "column": column,
        "type": "string",
        "stats": {
            "count": len(values),
            "unique": unique,
            "top_values": get_top_values(values)
        },
        "insight": text
    }


def _date_key(value: datetime) -> datetime:
    # Naive values are read as UTC so ordering doesn't depend on the host time zone
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _date_insight(column: str, values: List[datetime]) -> Dict[str, Any]:
    min_date = min(values, key=_date_key)
    max_date = max(values, key=_date_key)

    return {
        "column": column,
        "type": "date",
        "stats": {
            "count": len(values),
            "min_date": min_date,
            "max_date": max_date
        },
        "insight": f"{column} spans from {_format_date(min_date)} to {_format_date(max_date)}."
    }


def _boolean_insight(column: str, values: List[bool]) -> Dict[str, Any]:
    true_count = sum(1 for value in values if value)

    return {
        "column": column,
        "type": "boolean",
        "stats": {
            "count": len(values),
            "true_count": true_count,
            "false_count": len(values) - true_count
        },
        "insight": f"{column} is true for {true_count} of {len(values)} values."
    }


def _value_kind(value: Any) -> Optional[str]:
    # bool first: it is a subclass of int
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, datetime):
        return "date"
    return None


_BUILDERS = {
    "number": _number_insight,
    "string": _string_insight,
    "date": _date_insight,
    "boolean": _boolean_insight
}


def generate_data_insights(data: Optional[List[Dict[str, Any]]]) -> Dict[str, List[Dict[str, Any]]]:
    """
    Generate one natural-language insight per column of typed records.

    Columns are taken from the first record. A column with no non-null values
    is skipped, as is one whose first value has an unsupported type. String
    columns count every non-null value; number, date and boolean columns leave
    values of another kind out of their stats.

    Args:
        data: Typed records, e.g. from parse_csv_to_objects()

    Returns:
        {"insights": [{"column", "type", "stats", "insight"}, ...]}
    """
    if not data:
        return {"insights": []}

    insights = []

    for column in data[0].keys():
        values = [row.get(column) for row in data if row.get(column) is not None]
        if not values:
            continue

        kind = _value_kind(values[0])
        if kind is None:
            continue

        if kind != "string":
            values = [value for value in values if _value_kind(value) == kind]
        insights.append(_BUILDERS[kind](column, values))

    return {"insights": insights}
