"""
Pytest configuration for unit tests.

Provides fixtures and mocks that apply to all unit tests:
- A fake SCB client answering from an in-memory catalog (no network)
- A controllable clock for RateTracker
- A sample flattened cache
"""

import pytest
from unittest.mock import Mock

from scb_catalog.models.entry import DirectoryEntry, NodeType
from scb_catalog.services.client import RawResponse, ScbClient


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def _route(routes):
    """
    Build a raw_list side effect from {path: RawResponse | [RawResponse, ...]}.

    Lists are consumed in order; the last response repeats. Unknown paths
    answer 404.
    """
    pending = {path: (list(r) if isinstance(r, list) else r) for path, r in routes.items()}

    def raw_list(lang, database_id, path=""):
        if path not in pending:
            return RawResponse(status_code=404)
        response = pending[path]
        if isinstance(response, list):
            return response.pop(0) if len(response) > 1 else response[0]
        return response

    return raw_list


@pytest.fixture
def make_client():
    """Factory for a mocked ScbClient answering from a routes dict."""
    def _make(routes):
        client = Mock(spec=ScbClient)
        client.raw_list.side_effect = _route(routes)
        return client
    return _make


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def no_sleep():
    """Replacement for time.sleep that records waits instead of blocking."""
    return Mock()


@pytest.fixture
def sample_table_body():
    """Metadata body of a table with a time variable."""
    return {
        "title": "Employees by sex and year",
        "variables": [
            {
                "code": "Kon",
                "text": "sex",
                "values": ["1", "2"],
                "valueTexts": ["men", "women"],
                "elimination": True,
            },
            {
                "code": "ContentsCode",
                "text": "observations",
                "values": ["AM0101X"],
                "valueTexts": ["Number of observations"],
            },
            {
                "code": "Tid",
                "text": "year",
                "values": ["2015", "2016K1", "2018/19"],
                "valueTexts": ["2015", "2016K1", "2018/19"],
                "time": True,
            },
        ],
    }


@pytest.fixture
def catalog_routes(sample_table_body):
    """
    Small catalog below 'AM':

        AM
        ├── AM0101 (l)
        │   ├── AM0101A (t, time variable)
        │   └── AM0101B (l)
        │       └── T1 (t, removed: 404)
        └── AM0102 (t, no time variable)
    """
    return {
        "AM": RawResponse(200, [
            {"id": "AM0101", "type": "l", "text": "Short-term employment statistics"},
            {"id": "AM0102", "type": "t", "text": "Wages by region"},
        ]),
        "AM/AM0101": RawResponse(200, [
            {"id": "AM0101A", "type": "t", "text": "Employees by sex"},
            {"id": "AM0101B", "type": "l", "text": "Archived"},
        ]),
        "AM/AM0101/AM0101A": RawResponse(200, sample_table_body),
        "AM/AM0101/AM0101B": RawResponse(200, [
            {"id": "T1", "type": "t", "text": "Removed table"},
        ]),
        "AM/AM0102": RawResponse(200, {
            "title": "Wages by region",
            "variables": [
                {"code": "Region", "text": "region", "values": ["00"], "valueTexts": ["Sweden"]},
            ],
        }),
    }


@pytest.fixture
def sample_entries():
    """Flattened cache with one directory and two tables."""
    return [
        DirectoryEntry(id="AM", depth=1, type=NodeType.DIRECTORY, name="Labour market"),
        DirectoryEntry(
            id="AM/AM0101A",
            depth=2,
            type=NodeType.TABLE,
            name="Employees by sex",
            var_desc=["sex", "observations"],
            val_desc=[["men", "women"], ["Number of observations"]],
            date_start=2015,
            date_end=2019,
        ),
        DirectoryEntry(
            id="AM/AM0102",
            depth=2,
            type=NodeType.TABLE,
            name="Wages by region",
            var_desc=["region"],
            val_desc=[["Sweden"]],
        ),
    ]
