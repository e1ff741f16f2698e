"""
User-facing API interfaces for scb-catalog.

This module provides a query session for listing catalog nodes and
querying tables directly against the SCB API.
"""

from scb_catalog.api.query import ScbQuery, build_table_query

__all__ = [
    'ScbQuery',
    'build_table_query',
]
