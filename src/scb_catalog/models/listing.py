"""
Pydantic models for parsed SCB listing responses.

A listing call returns one of two shapes:
- Directory node: JSON array of {id, type, text}
- Table node: JSON object {title, variables: [...]}

Every variable field is optional. Absent fields default to "no value"
instead of being conditionally present.
"""

from typing import Any, List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field


class DirectoryNode(BaseModel):
    """
    One child of a directory listing.

    Example:
        >>> DirectoryNode(id="AM", type="l", text="Labour market")
        DirectoryNode(id='AM', type='l', text='Labour market', updated=None)
    """

    id: str = Field(..., description="Path segment of the child node", examples=["AM0101"])
    type: str = Field(..., description="Node type code: 'l' directory, 't' table", examples=["l"])
    text: str = Field(default="", description="Human readable label")
    updated: Optional[str] = Field(default=None, description="Last update timestamp (tables only)")

    model_config = ConfigDict(frozen=True, extra='ignore')


class TableVariable(BaseModel):
    """
    Variable metadata of one table, as returned by a table listing call.

    ``valueTexts`` is accepted under its API name and exposed as
    ``value_texts``.
    """

    code: str = Field(default="", description="Variable code used in queries", examples=["Tid"])
    text: str = Field(default="", description="Description of the variable")
    values: List[str] = Field(default_factory=list, description="Value codes")
    value_texts: List[str] = Field(
        default_factory=list,
        alias="valueTexts",
        description="Descriptions of the value codes"
    )
    elimination: bool = Field(
        default=False,
        description="Whether the variable may be aggregated away in a query"
    )
    time: bool = Field(default=False, description="Whether this is the time dimension")

    model_config = ConfigDict(frozen=True, extra='ignore', populate_by_name=True)


class TableMetadata(BaseModel):
    """Title and variables of one table node."""

    title: str = Field(default="", description="Table title")
    variables: List[TableVariable] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True, extra='ignore')

    @property
    def time_variable(self) -> Optional[TableVariable]:
        """The variable flagged as time dimension, if any (at most one exists)."""
        for variable in self.variables:
            if variable.time:
                return variable
        return None


DirectoryListing = Union[List[DirectoryNode], TableMetadata]


def parse_listing(body: Any) -> DirectoryListing:
    """
    Convert a decoded 200 response body to typed listing models.

    Args:
        body: Decoded JSON; a list for directories, a dict for tables

    Returns:
        List of DirectoryNode for a directory, TableMetadata for a table

    Raises:
        ValueError: If the body has neither shape
    """
    if isinstance(body, list):
        return [DirectoryNode.model_validate(item) for item in body]

    if isinstance(body, dict) and 'variables' in body:
        return TableMetadata.model_validate(body)

    raise ValueError(
        f"Unrecognized listing body of type {type(body).__name__}; "
        f"expected a directory array or a table object"
    )
