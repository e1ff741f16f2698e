"""
Catalog Cache Service

Service for managing the flattened catalog cache with CSV-backed storage.
Replaces repeated, rate-limited API listings with lookups in a cached
DataFrame.

Design:
- Explicit initialization via initialize() (full crawl) or load_from_csv()
- CSV storage in {cache_db_dir}/catalog_cache_{lang}_{db}_{timestamp}.csv
- Fast DataFrame-based lookups and searches after initialization
"""

from pathlib import Path
from typing import Dict, List, Optional
from datetime import datetime
import logging

import pandas as pd

from scb_catalog.config import get_app_config
from scb_catalog.models.entry import DirectoryEntry
from scb_catalog.models.requests import CacheRequest, SearchRequest
from scb_catalog.services.cache_builder import CacheBuilder
from scb_catalog.services.frames import (
    decode_from_csv,
    encode_for_csv,
    entries_to_frame,
    frame_to_entries,
)
from scb_catalog.services.search import CatalogSearch

logger = logging.getLogger(__name__)


class CatalogCacheService:
    """
    Service for managing the catalog cache with CSV-backed storage.

    Usage:
        # Build once (crawls the API and saves to CSV)
        service = CatalogCacheService()
        service.initialize(CacheRequest(initial_path="AM"))

        # Or load a previous snapshot
        service.load_from_csv(Path("data/cache/catalog_cache_en_ssd_20250115_143022.csv"))

        # Fast lookups (from cached DataFrame)
        row = service.find_by_id("AM/AM0101/AM0101A")
        tables = service.search(SearchRequest(type="t", name="wages"))

    Performance:
        - initialize(): bounded by the API rate limit (10 calls / 10 s),
          roughly one call per directory plus one per table
        - find_by_id(), search(): in-memory DataFrame operations
    """

    def __init__(self, builder: Optional[CacheBuilder] = None, cache_dir: Optional[Path] = None):
        """
        Args:
            builder: CacheBuilder used by initialize()
            cache_dir: Directory for CSV files; defaults to AppConfig.cache_db_dir
        """
        self._builder = builder
        self._cache_dir = Path(cache_dir) if cache_dir is not None else None
        self._df: Optional[pd.DataFrame] = None
        self._csv_path: Optional[Path] = None

    @property
    def is_initialized(self) -> bool:
        return self._df is not None

    def _require_initialized(self) -> pd.DataFrame:
        if self._df is None:
            raise RuntimeError(
                "CatalogCacheService not initialized. "
                "Call initialize() or load_from_csv() first."
            )
        return self._df

    def initialize(self, request: Optional[CacheRequest] = None, force_refresh: bool = False) -> Path:
        """
        Crawl the catalog, cache it in memory and save it to a timestamped CSV.

        Args:
            request: What to crawl; defaults to the whole default database
            force_refresh: Crawl again even if a cache is already loaded

        Returns:
            Path to the saved CSV file

        Raises:
            RemoteStatusError: A directory listing failed during the crawl
            RetryExhaustedError: The API kept answering 429
        """
        if self._df is not None and not force_refresh:
            logger.info("CatalogCacheService already initialized, using cached data")
            return self._csv_path

        request = request or CacheRequest()
        builder = self._builder or CacheBuilder()

        logger.info("Crawling catalog from SCB API...")
        entries = builder.build(request)

        logger.info("Creating DataFrame...")
        self._df = entries_to_frame(entries)

        db_dir = self._cache_dir or Path(get_app_config().cache_db_dir)
        db_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        self._csv_path = db_dir / f"catalog_cache_{request.lang}_{request.database_id}_{timestamp}.csv"
        self.save_to_csv(self._csv_path)

        return self._csv_path

    def save_to_csv(self, csv_path: Path) -> Path:
        """
        Save the cached DataFrame to csv_path.

        Returns:
            The path written to
        """
        df = self._require_initialized()
        csv_path = Path(csv_path)
        csv_path.parent.mkdir(parents=True, exist_ok=True)

        logger.info(f"Saving to {csv_path}...")
        encode_for_csv(df).to_csv(csv_path, index=False, encoding='utf-8')
        logger.info(f"✓ Saved {len(df)} rows to CSV")
        return csv_path

    def load_from_csv(self, csv_path: Path) -> None:
        """
        Load a cache snapshot from a CSV file.

        Overwrites the current cached DataFrame.

        Raises:
            FileNotFoundError: If the CSV file doesn't exist
        """
        csv_path = Path(csv_path)
        if not csv_path.exists():
            raise FileNotFoundError(f"CSV file not found: {csv_path}")

        logger.info(f"Loading catalog cache from {csv_path}...")
        raw = pd.read_csv(csv_path, encoding='utf-8', dtype={'id': str, 'type': str, 'name': str})
        self._df = decode_from_csv(raw)
        self._csv_path = csv_path
        logger.info(f"✓ Loaded {len(self._df)} rows from CSV")

    def set_entries(self, entries: List[DirectoryEntry]) -> None:
        """Use an already built list of entries as the cache."""
        self._df = entries_to_frame(entries)
        self._csv_path = None

    def get_all(self) -> pd.DataFrame:
        """
        Get the whole cache as a DataFrame (a copy).

        Raises:
            RuntimeError: If service not initialized
        """
        return self._require_initialized().copy()

    def get_entries(self) -> List[DirectoryEntry]:
        """Get the whole cache as DirectoryEntry objects."""
        return frame_to_entries(self._require_initialized())

    def find_by_id(self, node_id: str) -> Optional[Dict]:
        """
        Find one row by its full path.

        Returns:
            Row as a dict with native Python values (None for missing),
            or None if the id is not cached

        Raises:
            RuntimeError: If service not initialized
        """
        df = self._require_initialized()
        result = df[df['id'] == node_id]

        if len(result) == 0:
            return None

        return frame_to_entries(result.iloc[[0]])[0].to_record()

    def search(self, request: Optional[SearchRequest] = None, **filters) -> pd.DataFrame:
        """
        Search the cache.

        Args:
            request: SearchRequest, or pass the filters as keywords

        Returns:
            DataFrame of matching rows (empty if nothing matches)

        Raises:
            RuntimeError: If service not initialized
        """
        df = self._require_initialized()
        if request is None:
            request = SearchRequest(**filters)
        return CatalogSearch(df).filter(request)

    def get_latest_db_path(self) -> Optional[Path]:
        """Path of the CSV file backing the cache, or None."""
        return self._csv_path
