"""
Business logic layer services for scb-catalog.

This module contains service classes that implement core business logic:
- RateTracker: Rolling window of API calls, computes safe wait times
- ScbClient: Raw HTTP listing and table query calls
- ResilientLister: Listing with retry on 429 and typed failures
- CacheBuilder: Crawls the catalog into the flattened cache
- CatalogSearch: Filters the flattened cache
- CatalogCacheService: CSV-backed cache management
"""

from scb_catalog.services.rate_tracker import RateTracker
from scb_catalog.services.client import ScbClient, RawResponse
from scb_catalog.services.lister import ResilientLister, ListResult
from scb_catalog.services.cache_builder import CacheBuilder, build_cache
from scb_catalog.services.search import CatalogSearch, search
from scb_catalog.services.cache_service import CatalogCacheService

__all__ = [
    'RateTracker',
    'ScbClient',
    'RawResponse',
    'ResilientLister',
    'ListResult',
    'CacheBuilder',
    'build_cache',
    'CatalogSearch',
    'search',
    'CatalogCacheService',
]
