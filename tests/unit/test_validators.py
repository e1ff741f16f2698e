"""
Unit tests for validation functions.

Tests reusable field validators used with Pydantic models for input
validation against config/catalog.yaml specifications.
"""

import pytest
from pydantic import BaseModel, field_validator, ValidationError


class TestValidateLang:
    """Test suite for validate_lang() validator."""

    @pytest.mark.parametrize("code", ['en', 'sv'])
    def test_accepts_supported_languages(self, code):
        from scb_catalog.validators import validate_lang

        assert validate_lang(code) == code

    def test_rejects_unsupported_language(self):
        """Error message should name the parameter and the accepted values."""
        from scb_catalog.validators import validate_lang

        with pytest.raises(ValueError, match="lang parameter must be one of") as exc_info:
            validate_lang('fr')

        assert 'en' in str(exc_info.value)
        assert 'sv' in str(exc_info.value)

    def test_case_sensitive(self):
        from scb_catalog.validators import validate_lang

        with pytest.raises(ValueError):
            validate_lang('EN')


class TestValidateDatabaseId:
    """Test suite for validate_database_id() validator."""

    def test_accepts_ssd(self):
        from scb_catalog.validators import validate_database_id

        assert validate_database_id('ssd') == 'ssd'

    def test_rejects_unknown_database(self):
        from scb_catalog.validators import validate_database_id

        with pytest.raises(ValueError, match="Unknown database_id"):
            validate_database_id('foo')


class TestValidateNodePath:
    """Test suite for validate_node_path() validator."""

    def test_none_is_root(self):
        from scb_catalog.validators import validate_node_path

        assert validate_node_path(None) == ""

    def test_empty_is_root(self):
        from scb_catalog.validators import validate_node_path

        assert validate_node_path("") == ""
        assert validate_node_path("/") == ""

    def test_surrounding_slashes_are_dropped(self):
        from scb_catalog.validators import validate_node_path

        assert validate_node_path("/AM/AM0101/") == "AM/AM0101"
        assert validate_node_path(" AM ") == "AM"

    def test_rejects_empty_segment(self):
        from scb_catalog.validators import validate_node_path

        with pytest.raises(ValueError, match="empty segment"):
            validate_node_path("AM//AM0101")


class TestValidateFilterType:
    """Test suite for validate_filter_type() validator."""

    @pytest.mark.parametrize("code", ['item', 'all', 'top', 'agg', 'vs'])
    def test_accepts_api_filters(self, code):
        from scb_catalog.validators import validate_filter_type

        assert validate_filter_type(code) == code

    def test_rejects_unknown_filter(self):
        from scb_catalog.validators import validate_filter_type

        with pytest.raises(ValueError, match="Invalid filter type 'latest'"):
            validate_filter_type('latest')


class TestValidateYear:
    """Test suite for validate_year() validator."""

    def test_accepts_four_digit_year(self):
        from scb_catalog.validators import validate_year

        assert validate_year(2018) == 2018

    def test_accepts_none(self):
        from scb_catalog.validators import validate_year

        assert validate_year(None) is None

    @pytest.mark.parametrize("year", [18, 999, 10000, -2018])
    def test_rejects_other_years(self, year):
        from scb_catalog.validators import validate_year

        with pytest.raises(ValueError, match="four digits"):
            validate_year(year)


class TestValidatorsWithPydantic:
    """Validators should plug into Pydantic models."""

    def test_field_validator_integration(self):
        from scb_catalog.validators import validate_lang, validate_node_path

        class Node(BaseModel):
            lang: str
            path: str

            _validate_lang = field_validator('lang')(validate_lang)
            _validate_path = field_validator('path')(validate_node_path)

        node = Node(lang='sv', path='/AM/')
        assert node.path == 'AM'

        with pytest.raises(ValidationError):
            Node(lang='fr', path='AM')
