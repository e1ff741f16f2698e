"""
Unit tests for flatten_variables().
"""

import pytest

from scb_catalog.errors import UnrecognizedTimeFormatWarning
from scb_catalog.models.entry import TableSummary
from scb_catalog.models.listing import TableMetadata
from scb_catalog.parsers.metadata import flatten_variables


class TestFlattenVariables:

    def test_time_variable_gives_date_range(self, sample_table_body):
        summary = flatten_variables(sample_table_body["variables"])

        assert summary.date_start == 2015
        assert summary.date_end == 2019

    def test_descriptions_exclude_time_variable(self, sample_table_body):
        summary = flatten_variables(sample_table_body["variables"])

        assert summary.var_desc == ["sex", "observations"]
        assert summary.val_desc == [["men", "women"], ["Number of observations"]]

    def test_accepts_table_metadata(self, sample_table_body):
        metadata = TableMetadata.model_validate(sample_table_body)

        assert flatten_variables(metadata) == flatten_variables(sample_table_body["variables"])

    def test_no_time_variable_leaves_dates_empty(self):
        summary = flatten_variables([
            {"code": "Region", "text": "region", "values": ["00"], "valueTexts": ["Sweden"]},
        ])

        assert summary.var_desc == ["region"]
        assert summary.val_desc == [["Sweden"]]
        assert summary.date_start is None
        assert summary.date_end is None

    def test_zero_variables_gives_empty_summary(self):
        assert flatten_variables([]) == TableSummary()
        assert flatten_variables(None) == TableSummary()

    def test_missing_fields_default_to_empty(self):
        """Variables lacking valueTexts or text should not break flattening."""
        summary = flatten_variables([{"code": "X", "values": ["1"]}])

        assert summary.var_desc == [""]
        assert summary.val_desc == [[]]

    def test_only_time_variable(self):
        summary = flatten_variables([
            {"code": "Tid", "text": "year", "values": ["2001", "2003"], "time": True},
        ])

        assert summary.var_desc == []
        assert summary.val_desc == []
        assert (summary.date_start, summary.date_end) == (2001, 2003)

    def test_unrecognized_time_values_warn_but_do_not_fail(self):
        with pytest.warns(UnrecognizedTimeFormatWarning):
            summary = flatten_variables([
                {"code": "Tid", "text": "year", "values": ["2010", "winter"], "time": True},
            ])

        assert (summary.date_start, summary.date_end) == (2010, 2010)

    def test_pluggable_year_parser(self):
        summary = flatten_variables(
            [{"code": "Tid", "text": "period", "values": ["P1", "P9"], "time": True}],
            year_parser=lambda token: 2000 + int(token[1:]),
        )

        assert (summary.date_start, summary.date_end) == (2001, 2009)
