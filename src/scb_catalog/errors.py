"""
Error and warning types raised while crawling and searching the catalog.

Fatal errors derive from ScbCatalogError. Non-fatal data problems are
reported through ``warnings.warn`` with the Warning subclasses below.
"""

from typing import Optional


class ScbCatalogError(Exception):
    """Base class for catalog errors."""


class RemoteStatusError(ScbCatalogError):
    """
    The API answered with a non-200 status other than 429.

    Never retried. Carries the path and status code that caused it so a
    failed crawl can report exactly where it stopped.
    """

    def __init__(self, path: str, status_code: int, method: str = "GET"):
        self.path = path
        self.status_code = status_code
        self.method = method
        super().__init__(
            f"Unexpected status code from {method}: {status_code} (path: '{path}')"
        )


class RateLimitedError(ScbCatalogError):
    """A single attempt was answered with 429. Resolved by waiting and retrying."""

    def __init__(self, path: str, wait_seconds: float):
        self.path = path
        self.wait_seconds = wait_seconds
        super().__init__(
            f"Rate limited on '{path}', slot frees in {wait_seconds:.2f}s"
        )


class RetryExhaustedError(ScbCatalogError):
    """The retry ceiling was hit while the API kept answering 429."""

    def __init__(self, path: str, attempts: int, last_status: Optional[int] = 429):
        self.path = path
        self.attempts = attempts
        self.last_status = last_status
        super().__init__(
            f"Gave up listing '{path}' after {attempts} attempts "
            f"(last status: {last_status})"
        )


class UnrecognizedTimeFormatWarning(UserWarning):
    """A time value could not be converted to a year."""


class AmbiguousSearchFiltersWarning(UserWarning):
    """Search filters combine a node type with metadata that type cannot carry."""
