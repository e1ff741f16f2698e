"""
High-level interface for listing catalog nodes and querying tables.

This module provides ScbQuery, a thin session object that owns one
RateTracker so that every listing and table query made through it
shares the API's rolling rate limit.
"""

from typing import Dict, Iterable, List, Optional, Union

import pandas as pd

from scb_catalog.config import get_app_config
from scb_catalog.models.listing import DirectoryListing
from scb_catalog.models.requests import TableQuery, VariableSelection
from scb_catalog.services.client import ScbClient
from scb_catalog.services.lister import ResilientLister
from scb_catalog.services.rate_tracker import RateTracker
from scb_catalog.validators import validate_database_id, validate_lang, validate_node_path


SelectionLike = Union[VariableSelection, Dict]


class ScbQuery:
    """
    Query session against the SCB API.

    Example:
        >>> scb = ScbQuery()
        >>> scb.list()                       # top-level directories
        >>> scb.list("AM/AM0101/AM0101A")    # subdirectories or table metadata
        >>> df = scb.query(
        ...     "AM/AM0101/AM0101A/LonArb07Privat",
        ...     {"code": "Overtidstillagg", "filter": "item", "values": ["10"]},
        ...     {"code": "Tid", "filter": "top", "values": ["5"]},
        ...     {"code": "SNI2007", "filter": "item", "values": ["B", "C"]},
        ... )
    """

    def __init__(
        self,
        client: Optional[ScbClient] = None,
        lister: Optional[ResilientLister] = None,
        tracker: Optional[RateTracker] = None
    ):
        """
        Args:
            client: ScbClient used for table queries (and the default lister)
            lister: ResilientLister used for listings
            tracker: RateTracker shared by every call of this session
        """
        config = get_app_config()
        self._client = client or ScbClient()
        self._lister = lister or ResilientLister(client=self._client)
        self._tracker = tracker or RateTracker(
            window_seconds=config.rate_window_seconds,
            max_calls=config.rate_max_calls
        )
        self._config = config

    @property
    def tracker(self) -> RateTracker:
        return self._tracker

    def list(
        self,
        path: Optional[str] = None,
        lang: Optional[str] = None,
        database_id: Optional[str] = None
    ) -> DirectoryListing:
        """
        List a directory, or fetch a table's metadata.

        Args:
            path: Node path such as 'AM/AM0101/AM0101A'; None for the top level
            lang: API language; defaults to AppConfig.default_lang
            database_id: Database id; defaults to AppConfig.default_database_id

        Returns:
            List of DirectoryNode for a directory, TableMetadata for a table

        Raises:
            ValueError: If lang or database_id is not supported
            RemoteStatusError: If the API answers e.g. 404
            RetryExhaustedError: If the API keeps answering 429
        """
        lang = validate_lang(lang or self._config.default_lang)
        database_id = validate_database_id(database_id or self._config.default_database_id)
        return self._lister.list(validate_node_path(path), lang, database_id, self._tracker)

    def query(
        self,
        table_id: str,
        *selections: SelectionLike,
        lang: Optional[str] = None,
        database_id: Optional[str] = None
    ) -> pd.DataFrame:
        """
        Query a table.

        Args:
            table_id: Path of the table to query
            *selections: VariableSelection objects or dicts with keys
                code, filter ('item', 'all', 'top', 'agg', 'vs') and values
            lang: API language
            database_id: Database id

        Returns:
            DataFrame with the query result

        Raises:
            pydantic.ValidationError: If arguments are invalid
            RemoteStatusError: If the API answers with a non-200 status
        """
        query = build_table_query(
            table_id,
            selections,
            lang=lang or self._config.default_lang,
            database_id=database_id or self._config.default_database_id,
        )
        return self._client.query_table(query, tracker=self._tracker)


def build_table_query(
    table_id: str,
    selections: Iterable[SelectionLike],
    lang: str,
    database_id: str
) -> TableQuery:
    """Build a validated TableQuery from selections given as models or dicts."""
    parsed: List[VariableSelection] = [
        s if isinstance(s, VariableSelection) else VariableSelection(**s)
        for s in selections
    ]
    return TableQuery(table_id=table_id, selections=parsed, lang=lang, database_id=database_id)
