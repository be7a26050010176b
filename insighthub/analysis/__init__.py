"""
Analysis Module

Runs natural-language analysis requests against stored data sources.
"""

from .data_processor import (
    DataProcessor,
    DataSource,
    UnsupportedDataSourceError,
    build_data_processor,
    suggest_visualization
)

__all__ = [
    "DataProcessor",
    "DataSource",
    "UnsupportedDataSourceError",
    "build_data_processor",
    "suggest_visualization"
]
