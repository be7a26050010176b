"""
CSV parser - schema inference and typed row parsing over raw CSV text.

Two independent typing paths live here on purpose:
- detect_type() drives schema inference (0/1 are booleans, dates by pattern)
- coerce_value() drives record parsing (0/1 are numbers, dates must contain '-')
Charts built from parsed records rely on numeric 0/1, so the two must not be merged.

Everything is pure: text in, fresh values out.
"""

import re
from typing import Dict, List, Optional, Union
from datetime import datetime

import pandas as pd

from .schemas import ColumnSchema, CSVSchema, DataType

DEFAULT_SAMPLE_SIZE = 100

_BOOLEAN_LITERALS = {"true", "false", "yes", "no", "0", "1"}
_TRUE_LITERALS = {"true", "yes"}
_FALSE_LITERALS = {"false", "no"}

# Signed decimals with optional exponent, Infinity, and unsigned 0x/0o/0b integers
_INTEGER_PATTERN = re.compile(r"[+-]?\d+", re.ASCII)
_DECIMAL_PATTERN = re.compile(
    r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|[+-]?Infinity", re.ASCII
)
_RADIX_PATTERN = re.compile(r"0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+", re.ASCII)

# Day/month/year order is deliberately not resolved
_DATE_PATTERN = re.compile(
    r"\d{1,4}[-/]\d{1,2}[-/]\d{1,4}"
    r"|\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(?:\.\d+)?(?:Z|[+-]\d{2}:\d{2})?",
    re.ASCII
)
_HEADER_QUOTES = re.compile(r'^"|"$')
_FOUR_DIGIT_YEAR = re.compile(r"(?<!\d)\d{4}(?!\d)", re.ASCII)

RecordValue = Union[str, int, float, bool, datetime, None]


def parse_csv_row(row: str, delimiter: str = ",") -> List[str]:
    """
    Split one physical line into field values.

    Double quotes toggle quoted mode and are dropped; a doubled quote inside
    a quoted field yields one literal quote. Delimiters inside quotes are kept.
    A line with N delimiters always yields N+1 fields.

    Args:
        row: A single line of CSV text (no line continuation)
        delimiter: Single-character field delimiter

    Returns:
        Ordered list of raw (untrimmed) field values
    """
    fields = []
    current = []
    in_quotes = False
    i = 0

    while i < len(row):
        char = row[i]

        if char == '"':
            if not in_quotes:
                in_quotes = True
            elif i + 1 < len(row) and row[i + 1] == '"':
                current.append('"')
                i += 1
            else:
                in_quotes = False
        elif char == delimiter and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)

        i += 1

    fields.append("".join(current))
    return fields


def to_number(value: str) -> Optional[Union[int, float]]:
    """
    Parse a numeric literal, or return None if the text is not one.

    Integer literals come back as int, everything else as float.
    Python-only spellings such as 'nan', 'inf' or '1_000' are rejected.
    """
    text = value.strip()
    if not text:
        return None

    if _RADIX_PATTERN.fullmatch(text):
        return int(text, 0)
    if _INTEGER_PATTERN.fullmatch(text):
        return int(text)
    if _DECIMAL_PATTERN.fullmatch(text):
        return float(text)
    return None


def detect_type(value: Optional[str]) -> DataType:
    """
    Classify a single scalar value for schema inference.

    Priority: boolean literal -> number -> date pattern -> string.
    Blank input is 'unknown'.

    Args:
        value: Raw field value

    Returns:
        One of 'boolean', 'number', 'date', 'string', 'unknown'
    """
    if value is None or not value.strip():
        return "unknown"

    if value.lower() in _BOOLEAN_LITERALS:
        return "boolean"

    if to_number(value) is not None:
        return "number"

    if _DATE_PATTERN.fullmatch(value):
        return "date"

    return "string"


def _split_lines(csv_content: str) -> List[str]:
    if csv_content.startswith("\ufeff"):
        csv_content = csv_content[1:]
    return csv_content.split("\n")


def _parse_headers(header_line: str) -> List[str]:
    return [_HEADER_QUOTES.sub("", header.strip()) for header in parse_csv_row(header_line)]


def _numeric_summary(values: List[Union[int, float]]) -> Dict[str, float]:
    series = pd.Series(values, dtype="float64")
    return {
        "min": float(series.min()),
        "max": float(series.max()),
        "mean": float(series.mean()),
        "median": float(series.median())
    }


def infer_csv_schema(csv_content: str, sample_size: int = DEFAULT_SAMPLE_SIZE) -> CSVSchema:
    """
    Infer a column schema from the first `sample_size` data rows.

    A column takes the type of its first non-blank value and collapses to
    'string' on the first conflicting value; it never leaves 'string' again.
    Numeric statistics are only reported for columns that end up 'number'.

    Args:
        csv_content: Full CSV document text
        sample_size: Number of leading data rows to examine

    Returns:
        CSVSchema whose row_count is the physical line count minus the header,
        regardless of sampling or blank lines
    """
    lines = _split_lines(csv_content)
    if lines == [""]:
        return CSVSchema(columns=[], row_count=0)

    columns = [ColumnSchema(name=name) for name in _parse_headers(lines[0])]
    unique_values = [set() for _ in columns]
    numeric_values = [[] for _ in columns]

    sample_end = min(sample_size, len(lines) - 1)
    for row in lines[1:sample_end + 1]:
        if not row.strip():
            continue

        for col_index, raw_value in enumerate(parse_csv_row(row)):
            if col_index >= len(columns):
                break

            column = columns[col_index]
            value = raw_value.strip()

            if not value:
                column.nullable = True
                continue

            unique_values[col_index].add(value)

            detected = detect_type(value)
            if detected == "number":
                numeric_values[col_index].append(to_number(value))

            if column.type == "unknown":
                column.type = detected
            elif column.type != detected and column.type != "string":
                column.type = "string"

    for col_index, column in enumerate(columns):
        column.unique_values = len(unique_values[col_index])

        if column.type == "number" and numeric_values[col_index]:
            summary = _numeric_summary(numeric_values[col_index])
            column.min = summary["min"]
            column.max = summary["max"]
            column.mean = summary["mean"]
            column.median = summary["median"]

    return CSVSchema(columns=columns, row_count=len(lines) - 1)


def _to_timestamp(value: str, **kwargs) -> Optional[pd.Timestamp]:
    try:
        return pd.to_datetime(value, **kwargs)
    except (ValueError, TypeError, OverflowError):
        return None


def _parse_date(value: str) -> Optional[datetime]:
    """
    ISO 8601 first; other layouts only when they open with a digit and carry
    a four-digit year, so codes like 'T-800' or '1-2' stay strings.
    """
    timestamp = _to_timestamp(value, format="ISO8601")
    if timestamp is None and value[0].isdigit() and _FOUR_DIGIT_YEAR.search(value):
        timestamp = _to_timestamp(value)

    if pd.isna(timestamp):
        return None
    return timestamp.to_pydatetime()


def coerce_value(raw_value: Optional[str]) -> RecordValue:
    """
    Convert one raw field into a typed record value.

    Priority: blank -> None, number, true/yes / false/no, hyphenated date,
    then the trimmed string. Unlike detect_type(), '0' and '1' are numbers and
    slash-formatted dates stay strings.
    """
    if raw_value is None:
        return None

    value = raw_value.strip()
    if not value:
        return None

    number = to_number(value)
    if number is not None:
        return number

    lowered = value.lower()
    if lowered in _TRUE_LITERALS:
        return True
    if lowered in _FALSE_LITERALS:
        return False

    if "-" in value:
        parsed = _parse_date(value)
        if parsed is not None:
            return parsed

    return value


def parse_csv_to_objects(
    csv_content: str,
    limit: Optional[int] = None
) -> List[Dict[str, RecordValue]]:
    """
    Parse CSV text into typed records keyed by header.

    Blank lines are dropped before rows are counted. Fields beyond the header
    are ignored; missing trailing fields are left out of the record.

    Args:
        csv_content: Full CSV document text
        limit: Maximum number of data rows to convert (falsy = all)

    Returns:
        List of record dicts, one per non-blank data row
    """
    lines = [line for line in _split_lines(csv_content) if line.strip()]
    if len(lines) <= 1:
        return []

    headers = _parse_headers(lines[0])
    row_count = min(len(lines) - 1, limit) if limit else len(lines) - 1

    records = []
    for line in lines[1:row_count + 1]:
        values = parse_csv_row(line)
        record = {}
        for index, header in enumerate(headers):
            if index >= len(values):
                break
            record[header] = coerce_value(values[index])
        records.append(record)

    return records
