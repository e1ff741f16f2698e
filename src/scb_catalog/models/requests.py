"""
Request models for API and service layer operations.

These Pydantic models provide type-safe, validated interfaces for
cache building, cache search and table queries.
"""

from typing import List, Optional
from pydantic import BaseModel, Field, field_validator, ConfigDict

from scb_catalog.config import get_app_config
from scb_catalog.models.entry import NodeType
from scb_catalog.validators import (
    validate_lang,
    validate_database_id,
    validate_node_path,
    validate_filter_type,
    validate_year
)


def _default_lang() -> str:
    return get_app_config().default_lang


def _default_database_id() -> str:
    return get_app_config().default_database_id


class CacheRequest(BaseModel):
    """
    Request model for building a catalog cache.

    Attributes:
        initial_path: Node path to start the crawl from ('' for the database root)
        lang: API language (e.g., 'en')
        database_id: Database to crawl (e.g., 'ssd')

    Example:
        >>> request = CacheRequest(initial_path="AM/AM0101")
        >>> request.lang
        'en'
    """

    initial_path: str = Field(
        default="",
        description="Path to start crawling from; empty string for the database root",
        examples=["AM/AM0101"]
    )

    lang: str = Field(default_factory=_default_lang, examples=["en"])

    database_id: str = Field(default_factory=_default_database_id, examples=["ssd"])

    _validate_initial_path = field_validator('initial_path', mode='before')(validate_node_path)
    _validate_lang = field_validator('lang')(validate_lang)
    _validate_database_id = field_validator('database_id')(validate_database_id)

    model_config = ConfigDict(frozen=True)


class SearchRequest(BaseModel):
    """
    Request model for searching the flattened cache.

    Every filter is optional. Pattern filters are regular expressions.
    ``type`` accepts the API codes ('l', 't') as well as 'directory' and
    'table'; any other value is kept as given and matches no rows.

    Example:
        >>> request = SearchRequest(type="table", var_desc="observations")
        >>> request.type
        't'
        >>> request.has_metadata_filters
        True
    """

    id: Optional[str] = Field(default=None, description="Pattern matched against the full path")
    type: Optional[str] = Field(default=None, description="Node type code or label")
    name: Optional[str] = Field(default=None, description="Pattern matched against the label")
    var_desc: Optional[str] = Field(default=None, description="Pattern matched against variable descriptions")
    val_desc: Optional[str] = Field(default=None, description="Pattern matched against value descriptions")
    year: Optional[int] = Field(default=None, description="Year that must lie within the table's date range")
    ignore_case: bool = Field(default=False, description="Match patterns case-insensitively")

    model_config = ConfigDict(frozen=True)

    _validate_year = field_validator('year')(validate_year)

    @field_validator('type')
    @classmethod
    def normalize_type(cls, v: Optional[str]) -> Optional[str]:
        """Map 'directory'/'table' labels to their codes."""
        if v is None:
            return v
        labels = {
            'directory': NodeType.DIRECTORY.value,
            'table': NodeType.TABLE.value,
        }
        return labels.get(v.strip().lower(), v)

    @property
    def has_metadata_filters(self) -> bool:
        """True if any filter only makes sense for table rows."""
        return any(f is not None for f in (self.var_desc, self.val_desc, self.year))


class VariableSelection(BaseModel):
    """
    Selection on one variable of a table query.

    Example:
        >>> VariableSelection(code="Tid", filter="top", values=["5"])
    """

    code: str = Field(..., min_length=1, description="Variable code", examples=["SNI2007"])
    filter: str = Field(default="item", description="Filter type", examples=["item"])
    values: List[str] = Field(default_factory=list, examples=[["B", "C"]])

    _validate_filter = field_validator('filter')(validate_filter_type)

    model_config = ConfigDict(frozen=True)

    @field_validator('values', mode='before')
    @classmethod
    def coerce_values(cls, v):
        """Accept a single value as well as a list."""
        if isinstance(v, (str, int)):
            return [str(v)]
        return [str(item) for item in v]


class TableQuery(BaseModel):
    """
    Request model for querying one table.

    Variables without a selection are eliminated (aggregated) by the API
    where their elimination flag allows it.

    Example:
        >>> query = TableQuery(
        ...     table_id="AM/AM0101/AM0101A/LonArb07Privat",
        ...     selections=[
        ...         VariableSelection(code="Overtidstillagg", filter="item", values=["10"]),
        ...         VariableSelection(code="Tid", filter="top", values=["5"]),
        ...     ]
        ... )
    """

    table_id: str = Field(..., min_length=1, examples=["AM/AM0101/AM0101A/LonArb07Privat"])
    selections: List[VariableSelection] = Field(default_factory=list)
    lang: str = Field(default_factory=_default_lang)
    database_id: str = Field(default_factory=_default_database_id)

    _validate_table_id = field_validator('table_id', mode='before')(validate_node_path)
    _validate_lang = field_validator('lang')(validate_lang)
    _validate_database_id = field_validator('database_id')(validate_database_id)

    model_config = ConfigDict(frozen=True)

    def to_payload(self) -> dict:
        """
        Build the JSON body expected by the API.

        Returns:
            {"query": [{"code": ..., "selection": {"filter": ..., "values": [...]}}],
             "response": {"format": "csv"}}
        """
        return {
            "query": [
                {
                    "code": s.code,
                    "selection": {"filter": s.filter, "values": list(s.values)},
                }
                for s in self.selections
            ],
            "response": {"format": "csv"},
        }
