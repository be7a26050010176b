"""
Data Processor - runs analysis requests against stored data sources.

Reads the data source's file, infers its schema when none is stored, and asks
the LLM analyzer. When no analyzer is configured, or the analyzer fails, a
rule-based result built from generate_data_insights() is returned instead,
flagged with graceful-fallback metadata.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from insighthub.core.config import settings
from insighthub.core.logging import setup_logger
from insighthub.data_processing import (
    CSVSchema,
    generate_data_insights,
    infer_csv_schema,
    parse_csv_to_objects
)
from insighthub.llm.analyzer import DataAnalyzer
from insighthub.storage import FileStorage, FileStorageError, StoredFileNotFoundError
from insighthub.utils.graceful_response import (
    add_graceful_context,
    graceful_fallback,
    success_message
)

FALLBACK_DATA_CONTENT = "No data available. This is a fallback response."

SchemaLike = Union[CSVSchema, Dict[str, Any]]


class UnsupportedDataSourceError(ValueError):
    """Data source type has no analysis support."""


@dataclass
class DataSource:
    """
    A registered data source as handed over by the persistence layer.

    CSV sources carry the stored file name in configuration["file_name"].
    """
    id: str
    name: str
    type: str
    configuration: Dict[str, Any] = field(default_factory=dict)
    schema: Optional[SchemaLike] = None


def _schema_dict(schema: Optional[SchemaLike]) -> Optional[Dict[str, Any]]:
    if isinstance(schema, CSVSchema):
        return schema.to_dict()
    return schema


def _empty_result() -> Dict[str, Any]:
    return {"summary": "", "insights": [], "visualization_suggestion": "table", "provider": "none"}


def suggest_visualization(schema: Optional[SchemaLike]) -> str:
    """
    Pick a chart type from column types: dates + numbers -> line chart,
    strings + numbers -> bar chart, otherwise a table.
    """
    schema = _schema_dict(schema)
    if not schema:
        return "table"

    types = {column.get("type") for column in schema.get("columns", [])}
    if "number" in types and "date" in types:
        return "line chart"
    if "number" in types and "string" in types:
        return "bar chart"
    return "table"


class DataProcessor:
    """
    Analysis service over stored data sources.
    """

    def __init__(
        self,
        storage: FileStorage,
        analyzer: Optional[DataAnalyzer] = None,
        logger: Optional[logging.Logger] = None,
        sample_size: Optional[int] = None
    ):
        """
        Args:
            storage: File content provider
            analyzer: LLM analyzer; None means rule-based insights only
            logger: Injected logger
            sample_size: Rows sampled for schema inference (defaults to SCHEMA_SAMPLE_SIZE)
        """
        self.storage = storage
        self.analyzer = analyzer
        self.logger = logger or setup_logger(settings.LOG_LEVEL)
        self.sample_size = sample_size if sample_size is not None else settings.SCHEMA_SAMPLE_SIZE

    def _csv_file_name(self, data_source: DataSource) -> str:
        if data_source.type != "csv":
            self.logger.warning(f"Unsupported data source type: {data_source.type}")
            raise UnsupportedDataSourceError(
                f"Data source type '{data_source.type}' is not supported yet"
            )

        file_name = data_source.configuration.get("file_name")
        if not file_name:
            raise ValueError("No file name found in data source configuration")
        return file_name

    def rule_based_analysis(
        self,
        data_source: DataSource,
        content: str,
        schema: Optional[SchemaLike]
    ) -> Dict[str, Any]:
        """
        Build an analysis result without an LLM.

        Returns:
            Dict with summary, insights, visualization_suggestion and column_insights
        """
        records = parse_csv_to_objects(content, settings.PREVIEW_ROW_LIMIT)
        column_insights = generate_data_insights(records)["insights"]

        schema_dict = _schema_dict(schema) or {}
        row_count = schema_dict.get("row_count", len(records))
        column_count = len(schema_dict.get("columns", [])) or len(records[0] if records else {})

        return {
            "summary": f"{data_source.name} has {row_count} rows across {column_count} columns.",
            "insights": [item["insight"] for item in column_insights],
            "visualization_suggestion": suggest_visualization(schema),
            "column_insights": column_insights,
            "provider": "none"
        }

    def process_data_source_for_analysis(
        self,
        data_source: DataSource,
        prompt: str
    ) -> Dict[str, Any]:
        """
        Answer a natural-language question about a data source.

        Args:
            data_source: Source to analyze
            prompt: User question

        Returns:
            Analysis dict (summary, insights, visualization_suggestion, schema)
            merged with graceful-response fields

        Raises:
            UnsupportedDataSourceError: If the source is not CSV
            ValueError: If the source has no stored file name
        """
        self.logger.info(
            f"Processing data source for analysis id={data_source.id} prompt_length={len(prompt)}"
        )
        file_name = self._csv_file_name(data_source)

        self.logger.info(f"Reading CSV file: {file_name}")
        file_available = True
        try:
            content = self.storage.get_file_content(file_name)
        except (StoredFileNotFoundError, FileStorageError) as e:
            self.logger.error(f"Error reading CSV file {file_name}: {e}")
            content = FALLBACK_DATA_CONTENT
            file_available = False

        schema = data_source.schema
        if schema is None and file_available:
            self.logger.info("Inferring schema from CSV data")
            schema = infer_csv_schema(content, self.sample_size)

        if self.analyzer is None:
            if not file_available:
                result = _empty_result()
                graceful = graceful_fallback("csv_file_unavailable", f"file_name={file_name}")
            else:
                result = self.rule_based_analysis(data_source, content, schema)
                graceful = graceful_fallback("analysis_llm_disabled", "no LLM client configured")
            return add_graceful_context({**result, "schema": _schema_dict(schema)}, graceful)

        self.logger.info(
            f"Sending data to LLM for analysis schema_available={schema is not None} "
            f"data_length={len(content)}"
        )

        try:
            result = self.analyzer.analyze(prompt, content, schema)
        except Exception as e:
            self.logger.error(f"LLM analysis failed, using rule-based insights: {e}")
            if file_available:
                result = self.rule_based_analysis(data_source, content, schema)
            else:
                result = _empty_result()
            graceful = graceful_fallback("analysis_llm_error", type(e).__name__)
            return add_graceful_context({**result, "schema": _schema_dict(schema)}, graceful)

        if result.get("structured", True):
            graceful = success_message("analysis")
        else:
            graceful = graceful_fallback("analysis_unstructured_response", "no JSON object in LLM output")

        self.logger.info(f"Analysis completed provider={result.get('provider')}")
        return add_graceful_context({**result, "schema": _schema_dict(schema)}, graceful)

    def extract_sample_data(
        self,
        data_source: DataSource,
        limit: int = 100
    ) -> Dict[str, Any]:
        """
        Parse the first rows of a data source into typed records.

        Returns:
            Dict with source_type, data (typed records) and schema

        Raises:
            UnsupportedDataSourceError: If the source is not CSV
            ValueError: If the source has no stored file name
            StoredFileNotFoundError / FileStorageError: If the file cannot be read
        """
        self.logger.info(f"Extracting sample data id={data_source.id} limit={limit}")
        file_name = self._csv_file_name(data_source)

        content = self.storage.get_file_content(file_name)
        records: List[Dict[str, Any]] = parse_csv_to_objects(content, limit)
        schema = data_source.schema or infer_csv_schema(content, self.sample_size)

        return {
            "source_type": "csv",
            "data": records,
            "schema": _schema_dict(schema)
        }


def build_data_processor(logger: Optional[logging.Logger] = None) -> DataProcessor:
    """
    Wire storage, the configured LLM client and one shared logger together.
    """
    from insighthub.llm.router import get_llm_client

    logger = logger or setup_logger(settings.LOG_LEVEL)
    storage = FileStorage(settings.UPLOAD_DIR, logger=logger)
    client = get_llm_client(settings, logger=logger)
    analyzer = DataAnalyzer(client, logger=logger) if client is not None else None

    logger.info(f"{settings.APP_NAME} data processor ready llm_enabled={analyzer is not None}")
    return DataProcessor(storage, analyzer=analyzer, logger=logger)
