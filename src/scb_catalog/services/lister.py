"""
Resilient Lister

Single point through which all listing traffic of a crawl flows:
- Every attempt is registered with the shared RateTracker first
- 429 responses are retried after waiting for a slot in the rolling window
- Any other non-200 status fails immediately, without retry
- A hard ceiling on attempts stops runaway retry loops
"""

from dataclasses import dataclass
from typing import Callable, Optional
import logging
import threading
import time

from scb_catalog.config import get_app_config
from scb_catalog.errors import (
    RateLimitedError,
    RemoteStatusError,
    RetryExhaustedError,
    ScbCatalogError,
)
from scb_catalog.models.listing import DirectoryListing, parse_listing
from scb_catalog.services.client import ScbClient
from scb_catalog.services.rate_tracker import RateTracker

logger = logging.getLogger(__name__)


@dataclass
class ListResult:
    """Outcome of one listing operation: a listing or the error that ended it."""
    path: str
    listing: Optional[DirectoryListing] = None
    error: Optional[ScbCatalogError] = None
    attempts: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def status_code(self) -> Optional[int]:
        """Status code of a RemoteStatusError, None otherwise."""
        if isinstance(self.error, RemoteStatusError):
            return self.error.status_code
        return None

    def unwrap(self) -> DirectoryListing:
        """
        Return the listing, or raise the carried error.

        Raises:
            RemoteStatusError: Non-200, non-429 status
            RetryExhaustedError: Retry ceiling hit
        """
        if self.error is not None:
            raise self.error
        return self.listing


class ResilientLister:
    """
    Listing calls with rate-limit aware retry.

    Usage:
        tracker = RateTracker()
        lister = ResilientLister(client=ScbClient())
        listing = lister.list("AM/AM0101", "en", "ssd", tracker)

    The tracker registration and the HTTP call of one attempt run under a
    lock, so listers used from several threads still respect one shared
    window.
    """

    def __init__(
        self,
        client: Optional[ScbClient] = None,
        max_attempts: Optional[int] = None,
        sleep: Callable[[float], None] = time.sleep
    ):
        """
        Args:
            client: ScbClient performing the raw calls
            max_attempts: Retry ceiling; defaults to AppConfig.max_list_attempts
            sleep: Suspends the caller for the given number of seconds
        """
        config = get_app_config()
        self.client = client or ScbClient()
        self.max_attempts = max_attempts if max_attempts is not None else config.max_list_attempts
        self._sleep = sleep
        self._lock = threading.Lock()

    def _attempt(self, path: str, lang: str, database_id: str, tracker: RateTracker) -> DirectoryListing:
        with self._lock:
            tracker.record()
            response = self.client.raw_list(lang, database_id, path)

        if response.status_code == 200:
            return parse_listing(response.body)

        if response.status_code == 429:
            wait = tracker.time_until_slot_free()
            if wait <= 0:
                # 429 with room in our own window: calls we did not track
                wait = tracker.window_seconds / tracker.max_calls
            raise RateLimitedError(path, wait)

        raise RemoteStatusError(path, response.status_code)

    def try_list(self, path: str, lang: str, database_id: str, tracker: RateTracker) -> ListResult:
        """
        List one node, returning the outcome instead of raising.

        Args:
            path: Slash-joined node path ('' for the database root)
            lang: API language
            database_id: Database id
            tracker: RateTracker shared by the whole crawl

        Returns:
            ListResult holding either the parsed listing or a
            RemoteStatusError / RetryExhaustedError
        """
        for attempt in range(1, self.max_attempts + 1):
            try:
                listing = self._attempt(path, lang, database_id, tracker)
                return ListResult(path=path, listing=listing, attempts=attempt)
            except RateLimitedError as e:
                logger.warning(
                    f"Rate limited on '{path}' (attempt {attempt}), "
                    f"waiting {e.wait_seconds:.2f}s"
                )
                if attempt < self.max_attempts:
                    self._sleep(e.wait_seconds)
            except RemoteStatusError as e:
                logger.debug(f"Listing '{path}' failed: {e}")
                return ListResult(path=path, error=e, attempts=attempt)

        error = RetryExhaustedError(path, self.max_attempts)
        logger.error(str(error))
        return ListResult(path=path, error=error, attempts=self.max_attempts)

    def list(self, path: str, lang: str, database_id: str, tracker: RateTracker) -> DirectoryListing:
        """
        List one node.

        Returns:
            List of DirectoryNode for a directory, TableMetadata for a table

        Raises:
            RemoteStatusError: Non-200, non-429 status (e.g., 404)
            RetryExhaustedError: Still rate limited after max_attempts
        """
        return self.try_list(path, lang, database_id, tracker).unwrap()
