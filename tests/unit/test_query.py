"""
Unit tests for the ScbQuery session object.
"""

from unittest.mock import Mock

import pandas as pd
import pytest
from pydantic import ValidationError

from scb_catalog.api.query import ScbQuery, build_table_query
from scb_catalog.errors import RemoteStatusError
from scb_catalog.models.listing import TableMetadata
from scb_catalog.models.requests import VariableSelection
from scb_catalog.services.client import RawResponse, ScbClient
from scb_catalog.services.lister import ResilientLister
from scb_catalog.services.rate_tracker import RateTracker


@pytest.fixture
def scb(make_client, no_sleep, catalog_routes, fake_clock):
    client = make_client(catalog_routes)
    client.query_table.return_value = pd.DataFrame({"value": [1]})
    lister = ResilientLister(client=client, sleep=no_sleep)
    return ScbQuery(client=client, lister=lister, tracker=RateTracker(clock=fake_clock))


class TestList:

    def test_directory(self, scb):
        nodes = scb.list("AM")
        assert [n.id for n in nodes] == ["AM0101", "AM0102"]

    def test_table_metadata(self, scb):
        metadata = scb.list("AM/AM0101/AM0101A")
        assert isinstance(metadata, TableMetadata)

    def test_path_is_normalized(self, scb):
        scb.list("/AM/")
        scb._client.raw_list.assert_called_once_with("en", "ssd", "AM")

    def test_top_level_by_default(self, make_client, no_sleep):
        client = make_client({"": RawResponse(200, [{"id": "AM", "type": "l", "text": "Labour"}])})
        scb = ScbQuery(client=client, lister=ResilientLister(client=client, sleep=no_sleep))

        assert [n.id for n in scb.list()] == ["AM"]

    def test_language(self, scb):
        scb.list("AM", lang="sv")
        scb._client.raw_list.assert_called_once_with("sv", "ssd", "AM")

    def test_invalid_language_raises(self, scb):
        with pytest.raises(ValueError, match="lang"):
            scb.list("AM", lang="fr")
        scb._client.raw_list.assert_not_called()

    def test_invalid_database_raises(self, scb):
        with pytest.raises(ValueError, match="database"):
            scb.list("AM", database_id="nope")

    def test_missing_node_raises(self, scb):
        with pytest.raises(RemoteStatusError):
            scb.list("bar")

    def test_calls_share_one_tracker(self, scb):
        scb.list("AM")
        scb.list("AM/AM0101")

        assert len(scb.tracker) == 2


class TestQuery:

    def test_dict_selections(self, scb):
        df = scb.query(
            "AM/AM0101/AM0101A",
            {"code": "Tid", "filter": "top", "values": ["5"]},
            {"code": "Kon", "values": "1"},
        )

        assert df["value"].tolist() == [1]
        query = scb._client.query_table.call_args.args[0]
        assert [s.code for s in query.selections] == ["Tid", "Kon"]
        assert query.selections[1].values == ["1"]
        assert scb._client.query_table.call_args.kwargs["tracker"] is scb.tracker

    def test_invalid_filter_raises(self, scb):
        with pytest.raises(ValidationError):
            scb.query("AM/AM0101/AM0101A", {"code": "Tid", "filter": "latest", "values": ["5"]})
        scb._client.query_table.assert_not_called()


class TestBuildTableQuery:

    def test_mixed_selection_types(self):
        query = build_table_query(
            "AM/AM0101/AM0101A",
            [VariableSelection(code="Tid", filter="all", values=["*"]), {"code": "Kon", "values": ["1"]}],
            lang="en",
            database_id="ssd",
        )

        assert query.to_payload() == {
            "query": [
                {"code": "Tid", "selection": {"filter": "all", "values": ["*"]}},
                {"code": "Kon", "selection": {"filter": "item", "values": ["1"]}},
            ],
            "response": {"format": "csv"},
        }

    def test_no_selections(self):
        query = build_table_query("AM/AM0101/AM0101A", [], lang="en", database_id="ssd")
        assert query.to_payload()["query"] == []


def test_default_tracker_follows_app_config():
    scb = ScbQuery(client=Mock(spec=ScbClient))
    assert isinstance(scb.tracker, RateTracker)
    assert scb.tracker.max_calls == 10
