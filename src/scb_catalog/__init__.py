"""
scb-catalog: searchable local mirror of the Statistics Sweden (SCB) table catalog.

Main package exports for user-facing API.
"""

from scb_catalog.services import (
    CatalogCacheService,
    CacheBuilder,
    build_cache,
    search,
)
from scb_catalog.models import CacheRequest, SearchRequest, DirectoryEntry
from scb_catalog.api import ScbQuery

__all__ = [
    'CatalogCacheService',
    'CacheBuilder',
    'build_cache',
    'search',
    'CacheRequest',
    'SearchRequest',
    'DirectoryEntry',
    'ScbQuery',
    'initialize_cache',
]


def initialize_cache(initial_path: str = "", lang: str = None, database_id: str = None) -> str:
    """
    Initialize the catalog cache.

    Crawls the SCB catalog from initial_path and saves the flattened cache
    to CSV for fast, offline searches afterwards.

    Returns:
        Path to the saved CSV file

    Raises:
        RemoteStatusError: If a directory listing fails during the crawl
        RetryExhaustedError: If the API keeps answering 429

    Example:
        >>> from scb_catalog import initialize_cache
        >>> csv_path = initialize_cache("AM/AM0101")
        >>> print(f"Cache saved to: {csv_path}")
        Cache saved to: data/cache/catalog_cache_en_ssd_20250115_143022.csv

    Note:
        The API allows 10 calls per 10 seconds; a full crawl of the ssd
        database takes a long time. Subsequent searches use the cached data.
    """
    kwargs = {'initial_path': initial_path}
    if lang is not None:
        kwargs['lang'] = lang
    if database_id is not None:
        kwargs['database_id'] = database_id

    service = CatalogCacheService()
    csv_path = service.initialize(CacheRequest(**kwargs))
    return str(csv_path)
