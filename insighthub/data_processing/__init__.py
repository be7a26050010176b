"""
Data Processing Module

CSV schema inference, typed row parsing and rule-based insights.
"""

from .schemas import ColumnSchema, CSVSchema, DataType
from .csv_parser import (
    parse_csv_row,
    detect_type,
    to_number,
    coerce_value,
    infer_csv_schema,
    parse_csv_to_objects
)
from .insights import generate_data_insights
from .upload import process_file_upload

__all__ = [
    "ColumnSchema",
    "CSVSchema",
    "DataType",
    "parse_csv_row",
    "detect_type",
    "to_number",
    "coerce_value",
    "infer_csv_schema",
    "parse_csv_to_objects",
    "generate_data_insights",
    "process_file_upload"
]
