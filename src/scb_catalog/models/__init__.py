"""
Pydantic models for request/response validation.

This module contains type-safe models for parsed API listings, rows of
the flattened cache, and service layer requests.
"""

from scb_catalog.models.listing import (
    DirectoryNode,
    TableVariable,
    TableMetadata,
    DirectoryListing,
    parse_listing,
)
from scb_catalog.models.entry import NodeType, TableSummary, DirectoryEntry
from scb_catalog.models.requests import (
    CacheRequest,
    SearchRequest,
    VariableSelection,
    TableQuery,
)

__all__ = [
    'DirectoryNode',
    'TableVariable',
    'TableMetadata',
    'DirectoryListing',
    'parse_listing',
    'NodeType',
    'TableSummary',
    'DirectoryEntry',
    'CacheRequest',
    'SearchRequest',
    'VariableSelection',
    'TableQuery',
]
