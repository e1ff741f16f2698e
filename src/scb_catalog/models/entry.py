"""
Pydantic models for rows of the flattened catalog cache.

Schema Design:
- One row per visited node (directory or table), flat, not nested
- Rows are identified by their full slash-joined path
- Only table rows carry variable/value descriptions and a date range
"""

from enum import Enum
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator


class NodeType(str, Enum):
    """Node type codes as used by the SCB API."""

    DIRECTORY = "l"
    TABLE = "t"


class TableSummary(BaseModel):
    """
    Condensed metadata of one table.

    Attributes:
        var_desc: Descriptions of the non-time variables, in API order
        val_desc: Value descriptions per non-time variable, aligned with var_desc
        date_start: First year covered by the time variable
        date_end: Last year covered by the time variable

    All fields are None for a table without variables. date_start and
    date_end are None when the table has no time variable or none of its
    time values could be converted.
    """

    var_desc: Optional[List[str]] = None
    val_desc: Optional[List[List[str]]] = None
    date_start: Optional[int] = None
    date_end: Optional[int] = None

    model_config = ConfigDict(frozen=True)

    @model_validator(mode='after')
    def check_date_range(self) -> 'TableSummary':
        if (self.date_start is None) != (self.date_end is None):
            raise ValueError("date_start and date_end must both be set or both be None")
        if self.date_start is not None and self.date_start > self.date_end:
            raise ValueError(
                f"date_start ({self.date_start}) is after date_end ({self.date_end})"
            )
        return self


class DirectoryEntry(BaseModel):
    """
    One row of the flattened catalog cache.

    Invariants:
    - Directory rows have all four metadata fields None
    - Table rows may carry var_desc/val_desc; date_start/date_end are set
      together or not at all

    Example:
        >>> entry = DirectoryEntry(id="AM/AM0101", depth=2, type="l",
        ...                        name="Short-term employment statistics")
        >>> entry.is_table
        False
    """

    id: str = Field(
        ...,
        min_length=1,
        description="Full slash-joined path relative to the database root",
        examples=["AM/AM0101/AM0101A"]
    )

    depth: int = Field(
        ...,
        ge=1,
        description="1 for children of the crawl start, +1 per nesting level"
    )

    type: NodeType = Field(..., description="Directory ('l') or Table ('t')")

    name: str = Field(default="", description="Label supplied by the API")

    var_desc: Optional[List[str]] = Field(
        default=None,
        description="Descriptions of the non-time variables (tables only)"
    )

    val_desc: Optional[List[List[str]]] = Field(
        default=None,
        description="Value descriptions per non-time variable (tables only)"
    )

    date_start: Optional[int] = Field(default=None, description="First year covered (tables only)")
    date_end: Optional[int] = Field(default=None, description="Last year covered (tables only)")

    model_config = ConfigDict(frozen=True, use_enum_values=False)

    @model_validator(mode='after')
    def check_metadata_consistency(self) -> 'DirectoryEntry':
        metadata = (self.var_desc, self.val_desc, self.date_start, self.date_end)

        if self.type == NodeType.DIRECTORY and any(v is not None for v in metadata):
            raise ValueError(f"Directory row '{self.id}' cannot carry table metadata")

        if (self.date_start is None) != (self.date_end is None):
            raise ValueError(f"Row '{self.id}' has a partial date range")

        return self

    @property
    def is_table(self) -> bool:
        return self.type == NodeType.TABLE

    @property
    def parent_id(self) -> Optional[str]:
        """Path of the enclosing node, or None at the top of the id."""
        if "/" not in self.id:
            return None
        return self.id.rsplit("/", 1)[0]

    def with_summary(self, summary: TableSummary) -> 'DirectoryEntry':
        """
        Return a copy of this table row carrying the given metadata.

        Raises:
            ValueError: If called on a directory row
        """
        if not self.is_table:
            raise ValueError(f"Cannot attach table metadata to directory row '{self.id}'")
        return DirectoryEntry(
            id=self.id,
            depth=self.depth,
            type=self.type,
            name=self.name,
            var_desc=summary.var_desc,
            val_desc=summary.val_desc,
            date_start=summary.date_start,
            date_end=summary.date_end,
        )

    def to_record(self) -> Dict[str, Any]:
        """Flat dict for building a DataFrame (type as its code)."""
        record = self.model_dump()
        record['type'] = self.type.value
        return record

    def __str__(self) -> str:
        return f"[{self.type.value}] {self.id}: {self.name}"
