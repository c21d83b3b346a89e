"""
Tests for input validation module.

Tests validation.py and the request schemas with valid and invalid inputs.
"""

import pytest

from saveit.schemas import ChangelogVersionBody, ListBookmarksQuery, UrlQuery
from saveit.validation import check_url, validate_input


class TestValidateInput:
    """Tests for validate_input function"""

    def test_valid_input(self):
        result = validate_input(ChangelogVersionBody, {'version': '2.0'}, 'body')
        assert result.is_valid is True
        assert result.value.version == '2.0'
        assert result.issues == []

    def test_missing_field(self):
        result = validate_input(ChangelogVersionBody, {}, 'body')
        assert result.is_valid is False
        assert result.value is None
        assert result.issues[0]['field'] == 'version'

    def test_not_a_mapping(self):
        result = validate_input(ChangelogVersionBody, None, 'body')
        assert not result
        assert result.issues == [{'field': 'body', 'message': 'Body must be a JSON object'}]

    def test_query_strings_are_coerced(self):
        result = validate_input(ListBookmarksQuery, {'limit': '5'}, 'query')
        assert result.value.limit == 5


class TestUrlCheck:
    """Tests for check_url"""

    @pytest.mark.parametrize('url', ['https://example.com', 'http://localhost:3000/a?b=c'])
    def test_valid_urls(self, url):
        assert check_url(url) == url

    @pytest.mark.parametrize('url', ['', 'example.com', '/relative', 'mailto:someone'])
    def test_invalid_urls(self, url):
        with pytest.raises(ValueError):
            check_url(url)

    def test_url_query_schema(self):
        result = validate_input(UrlQuery, {'url': 'example.com'}, 'query')
        assert result.issues[0]['field'] == 'url'
        assert 'Invalid URL format' in result.issues[0]['message']


class TestSpecialFilters:
    """Tests for ListBookmarksQuery.special_filters"""

    def test_unknown_filters_are_dropped(self):
        query = ListBookmarksQuery(special='READ,,STAR,bogus')
        assert query.special_filters() == ['READ', 'STAR']

    def test_no_filters(self):
        assert ListBookmarksQuery().special_filters() == []
