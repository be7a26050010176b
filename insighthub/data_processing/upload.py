"""
Upload processing - turns an uploaded CSV into schema, preview rows and raw text.
"""

from typing import Any, Dict, Optional, Union

from insighthub.core.config import settings
from .csv_parser import infer_csv_schema, parse_csv_to_objects

CSV_MIME_TYPES = {"text/csv", "application/csv"}


def is_csv_upload(filename: str, content_type: Optional[str] = None) -> bool:
    """Check whether an upload should be treated as CSV (MIME type or extension)."""
    if content_type and content_type.lower() in CSV_MIME_TYPES:
        return True
    return filename.lower().endswith(".csv")


def process_file_upload(
    filename: str,
    content: Union[bytes, str],
    content_type: Optional[str] = None,
    preview_limit: Optional[int] = None
) -> Dict[str, Any]:
    """
    Profile an uploaded file.
    
    Args:
        filename: Original file name
        content: File body as bytes (decoded as UTF-8) or text
        content_type: MIME type reported by the client
        preview_limit: Max rows in sample_data (defaults to PREVIEW_ROW_LIMIT)
        
    Returns:
        Dict with file_type, schema (CSVSchema), sample_data and raw_content
        
    Raises:
        ValueError: If no file was provided or the type is unsupported
    """
    if not filename or content is None:
        raise ValueError("No file provided")
    
    if not is_csv_upload(filename, content_type):
        raise ValueError(f"Unsupported file type: {content_type or filename}")
    
    text = content.decode("utf-8") if isinstance(content, bytes) else content
    limit = preview_limit if preview_limit is not None else settings.PREVIEW_ROW_LIMIT
    
    return {
        "file_type": "csv",
        "schema": infer_csv_schema(text, settings.SCHEMA_SAMPLE_SIZE),
        "sample_data": parse_csv_to_objects(text, limit),
        "raw_content": text
    }
