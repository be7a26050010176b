from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field


DataType = Literal["string", "number", "boolean", "date", "unknown"]


class ColumnSchema(BaseModel):
    """Inferred descriptor for one CSV column."""
    name: str = Field(..., description="Header label, trimmed and quote-stripped")
    type: DataType = Field(default="unknown", description="Dominant detected type in the sample")
    nullable: bool = Field(default=False, description="Whether any sampled value was blank")
    unique_values: int = Field(default=0, description="Distinct non-blank values in the sample")

    # Only set for number columns
    min: Optional[float] = None
    max: Optional[float] = None
    mean: Optional[float] = None
    median: Optional[float] = None


class CSVSchema(BaseModel):
    """Document-level schema: column descriptors plus the data row count."""
    columns: List[ColumnSchema] = Field(default_factory=list)
    row_count: int = Field(default=0, description="Physical lines minus the header line")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-ready dict, omitting statistics that were not computed."""
        return {
            "columns": [column.model_dump(exclude_none=True) for column in self.columns],
            "row_count": self.row_count
        }
