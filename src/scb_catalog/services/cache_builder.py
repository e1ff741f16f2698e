"""
Cache Builder

Walks the SCB catalog from a start path and produces the flattened cache:
one DirectoryEntry per directory or table encountered, with table rows
carrying condensed variable metadata.

Traversal:
- Depth-first, pre-order, driven by an explicit work stack
- Children of a directory are appended as rows as soon as it is listed,
  then handled in listing order: tables get a metadata call, directories
  are listed in turn
- One RateTracker is shared by every call of the crawl

Failure policy:
- A failing directory listing aborts the crawl
- A failing table metadata call is absorbed: the row is kept with empty
  metadata and a warning is logged
"""

from typing import List, Optional, Set, Tuple, Union
import logging

from scb_catalog.config import get_app_config
from scb_catalog.errors import RemoteStatusError
from scb_catalog.models.entry import DirectoryEntry, NodeType
from scb_catalog.models.listing import DirectoryNode, TableMetadata
from scb_catalog.models.requests import CacheRequest
from scb_catalog.parsers.metadata import flatten_variables
from scb_catalog.parsers.year_parser import YearParser, parse_year
from scb_catalog.services.lister import ResilientLister
from scb_catalog.services.rate_tracker import RateTracker

logger = logging.getLogger(__name__)

# Work items: ("dir", path, depth) or ("table", row_index)
_WorkItem = Tuple


def join_path(parent: str, child_id: str) -> str:
    """
    Join a parent path and a child id.

    Example:
        >>> join_path("AM/AM0101", "AM0101A")
        'AM/AM0101/AM0101A'
        >>> join_path("", "AM")
        'AM'
    """
    return f"{parent}/{child_id}" if parent else child_id


class CacheBuilder:
    """
    Builds the flattened catalog cache.

    Usage:
        builder = CacheBuilder()
        entries = builder.build(CacheRequest(initial_path="AM/AM0101"))
        tables = [e for e in entries if e.is_table]

    Attributes:
        lister: ResilientLister used for every call
        year_parser: Converts time values to years for date ranges
    """

    def __init__(
        self,
        lister: Optional[ResilientLister] = None,
        year_parser: YearParser = parse_year
    ):
        self.lister = lister or ResilientLister()
        self.year_parser = year_parser

    def _new_tracker(self) -> RateTracker:
        config = get_app_config()
        return RateTracker(
            window_seconds=config.rate_window_seconds,
            max_calls=config.rate_max_calls
        )

    def _list_directory(
        self,
        path: str,
        request: CacheRequest,
        tracker: RateTracker
    ) -> List[DirectoryNode]:
        result = self.lister.try_list(path, request.lang, request.database_id, tracker)
        if not result.ok:
            logger.error(f"Crawl aborted at '{path}': {result.error}")
        listing = result.unwrap()

        if isinstance(listing, TableMetadata):
            raise ValueError(f"'{path}' is a table, expected a directory")
        return listing

    def _fetch_table_row(
        self,
        entry: DirectoryEntry,
        request: CacheRequest,
        tracker: RateTracker
    ) -> DirectoryEntry:
        result = self.lister.try_list(entry.id, request.lang, request.database_id, tracker)

        if not result.ok:
            if isinstance(result.error, RemoteStatusError):
                logger.warning(
                    f"Metadata for table '{entry.id}' unavailable "
                    f"(status {result.status_code}), keeping row without metadata"
                )
                return entry
            result.unwrap()

        if not isinstance(result.listing, TableMetadata):
            logger.warning(
                f"Expected table metadata for '{entry.id}' but got a directory listing, "
                f"keeping row without metadata"
            )
            return entry

        summary = flatten_variables(result.listing, year_parser=self.year_parser)
        return entry.with_summary(summary)

    def build(self, request: Union[CacheRequest, str, None] = None) -> List[DirectoryEntry]:
        """
        Crawl the catalog and return the flattened cache.

        Args:
            request: CacheRequest, or a start path (defaults to the database root)

        Returns:
            List of DirectoryEntry in pre-order

        Raises:
            RemoteStatusError: A directory listing failed (e.g., 404)
            RetryExhaustedError: The API kept answering 429
            ValueError: The start path is a table, or the API returned an
                unknown node type or a duplicate path
        """
        if request is None:
            request = CacheRequest()
        elif isinstance(request, str):
            request = CacheRequest(initial_path=request)

        tracker = self._new_tracker()
        cache: List[DirectoryEntry] = []
        seen: Set[str] = set()

        logger.info(
            f"Building cache for '{request.initial_path or '/'}' "
            f"(lang={request.lang}, database={request.database_id})"
        )

        stack: List[_WorkItem] = [("dir", request.initial_path, 0)]
        directories = tables = 0

        while stack:
            item = stack.pop()

            if item[0] == "table":
                row_index = item[1]
                cache[row_index] = self._fetch_table_row(cache[row_index], request, tracker)
                tables += 1
                continue

            _, path, depth = item
            children = self._list_directory(path, request, tracker)
            directories += 1

            pending: List[_WorkItem] = []
            for child in children:
                child_path = join_path(path, child.id)
                if child.type not in (NodeType.DIRECTORY.value, NodeType.TABLE.value):
                    raise ValueError(f"Unknown node type '{child.type}' at '{child_path}'")
                if child_path in seen:
                    raise ValueError(f"Duplicate node path '{child_path}'")
                seen.add(child_path)

                cache.append(DirectoryEntry(
                    id=child_path,
                    depth=depth + 1,
                    type=NodeType(child.type),
                    name=child.text,
                ))

                if child.type == NodeType.TABLE.value:
                    pending.append(("table", len(cache) - 1))
                else:
                    pending.append(("dir", child_path, depth + 1))

            # Reversed so the first child is handled first
            stack.extend(reversed(pending))

            logger.debug(f"Listed '{path or '/'}': {len(children)} children")
            if directories % 50 == 0:
                logger.info(f"Progress: {directories} directories, {tables} tables, {len(cache)} rows")

        logger.info(
            f"✓ Cache built: {len(cache)} rows "
            f"({directories} directories listed, {tables} tables described)"
        )
        return cache


def build_cache(
    initial_path: str = "",
    lang: Optional[str] = None,
    database_id: Optional[str] = None,
    lister: Optional[ResilientLister] = None
) -> List[DirectoryEntry]:
    """
    Crawl the catalog from initial_path and return the flattened cache.

    Args:
        initial_path: Path to start from ('' for the database root)
        lang: API language; defaults to AppConfig.default_lang
        database_id: Database id; defaults to AppConfig.default_database_id
        lister: ResilientLister to use (a default one is created otherwise)

    Returns:
        List of DirectoryEntry

    Example:
        >>> entries = build_cache("AM/AM0101")
        >>> entries[0].depth
        1
    """
    kwargs = {'initial_path': initial_path}
    if lang is not None:
        kwargs['lang'] = lang
    if database_id is not None:
        kwargs['database_id'] = database_id

    return CacheBuilder(lister=lister).build(CacheRequest(**kwargs))
