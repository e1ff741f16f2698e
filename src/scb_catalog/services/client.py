"""
SCB API Client

Thin HTTP layer over the SCB PX-Web API (v1):
- GET  {base}/{lang}/{database_id}/{path}   directory listing or table metadata
- POST {base}/{lang}/{database_id}/{path}   table query (CSV response)

raw_list() does not interpret status codes; retry and error policy live
in ResilientLister. query_table() fails on any non-200 status.
"""

from dataclasses import dataclass
from io import StringIO
from typing import Any, Optional
import logging

import pandas as pd
import requests

from scb_catalog.config import get_app_config
from scb_catalog.errors import RemoteStatusError
from scb_catalog.models.requests import TableQuery
from scb_catalog.services.rate_tracker import RateTracker

logger = logging.getLogger(__name__)


@dataclass
class RawResponse:
    """Status code and decoded body of one listing call."""
    status_code: int
    body: Any = None

    @property
    def ok(self) -> bool:
        return self.status_code == 200


class ScbClient:
    """
    HTTP client for the SCB API.

    Usage:
        client = ScbClient()
        response = client.raw_list("en", "ssd", "AM/AM0101")
        if response.ok:
            print(response.body)

        df = client.query_table(TableQuery(table_id="AM/AM0101/AM0101A/LonArb07Privat"))
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None
    ):
        """
        Args:
            base_url: API root; defaults to AppConfig.scb_base_url
            timeout: Request timeout in seconds; defaults to AppConfig.request_timeout
            session: requests.Session to reuse (a new one is created otherwise)
        """
        config = get_app_config()
        self.base_url = (base_url or config.scb_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else config.request_timeout
        self.session = session or requests.Session()

    def build_url(self, lang: str, database_id: str, path: str = "") -> str:
        """
        Build the URL of a node.

        Example:
            >>> ScbClient(base_url="http://api.scb.se/OV0104/v1/doris").build_url("en", "ssd", "AM")
            'http://api.scb.se/OV0104/v1/doris/en/ssd/AM'
        """
        url = f"{self.base_url}/{lang}/{database_id}"
        path = (path or "").strip("/")
        if path:
            url = f"{url}/{path}"
        return url

    def raw_list(self, lang: str, database_id: str, path: str = "") -> RawResponse:
        """
        List one node of the catalog.

        Args:
            lang: API language
            database_id: Database id
            path: Slash-joined node path ('' for the database root)

        Returns:
            RawResponse with the decoded JSON body on 200, body None otherwise

        Raises:
            requests.RequestException: On network failure
        """
        url = self.build_url(lang, database_id, path)
        logger.debug(f"GET {url}")

        response = self.session.get(url, timeout=self.timeout)

        if response.status_code != 200:
            logger.debug(f"GET {url} -> {response.status_code}")
            return RawResponse(status_code=response.status_code)

        # utf-8-sig: the API prefixes JSON bodies with a BOM
        response.encoding = 'utf-8-sig'
        return RawResponse(status_code=200, body=response.json())

    def query_table(self, query: TableQuery, tracker: Optional[RateTracker] = None) -> pd.DataFrame:
        """
        Query a table and return the result as a DataFrame.

        Args:
            query: Validated TableQuery
            tracker: Optional RateTracker to register the call with

        Returns:
            DataFrame parsed from the CSV response

        Raises:
            RemoteStatusError: If the API answers with a non-200 status

        Example:
            >>> client = ScbClient()
            >>> df = client.query_table(TableQuery(
            ...     table_id="AM/AM0101/AM0101A/LonArb07Privat",
            ...     selections=[VariableSelection(code="Tid", filter="top", values=["5"])]
            ... ))
        """
        url = self.build_url(query.lang, query.database_id, query.table_id)

        if tracker is not None:
            tracker.record()

        logger.debug(f"POST {url} ({len(query.selections)} selections)")
        response = self.session.post(url, json=query.to_payload(), timeout=self.timeout)

        if response.status_code != 200:
            logger.error(f"POST {url} failed with status {response.status_code}")
            raise RemoteStatusError(query.table_id, response.status_code, method="POST")

        response.encoding = 'utf-8-sig'
        return pd.read_csv(StringIO(response.text))

    def close(self) -> None:
        self.session.close()
