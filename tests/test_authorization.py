"""
Unit tests for auth token extraction.
"""

import logging
from unittest.mock import MagicMock

import pytest

from core.errors import FetchError, TokenNotFoundError
from services.authorization import (
    AuthorizationExtractor,
    MarkupTokenExtractor,
    find_token,
)


class TestFindToken:
    """Tests for marker-bounded token scraping."""

    def test_extracts_value_after_marker(self):
        assert find_token('<div data-auth="abc123" data-x="y">') == "abc123"

    def test_uses_first_marker(self):
        assert find_token('data-auth="first" data-auth="second"') == "first"

    def test_missing_marker(self):
        assert find_token('<div data-tconst="tt0133093">') is None

    def test_empty_token(self):
        assert find_token('<div data-auth="">') is None

    def test_missing_closing_quote(self):
        assert find_token('<div data-auth="abc123') is None

    def test_custom_marker(self):
        assert find_token("token='x' auth:\"secret\"", marker='auth:"') == "secret"


class TestMarkupTokenExtractor:
    """Tests for MarkupTokenExtractor."""

    def test_extract_token(self, config, http, title_page):
        """Should fetch the title page with the session cookie and scrape the token."""
        http.get.return_value = title_page
        extractor = MarkupTokenExtractor(config, http)

        token = extractor.extract("tt0133093")

        assert token == "BCYm-Mk2Ros7BTxsLNL2XJX_DbuIG5X2k7gSP0HhM"
        http.get.assert_called_once_with(
            "http://imdb.test/title/tt0133093",
            headers={"Cookie": "id=user-cookie-id;"},
        )

    def test_missing_token_raises(self, config, http):
        http.get.return_value = b"<html><body>Sign in to rate</body></html>"
        extractor = MarkupTokenExtractor(config, http)

        with pytest.raises(TokenNotFoundError) as exc_info:
            extractor.extract("tt0133093")

        assert exc_info.value.identifier == "tt0133093"

    def test_empty_token_raises(self, config, http):
        http.get.return_value = b'<div data-auth=""></div>'
        extractor = MarkupTokenExtractor(config, http)

        with pytest.raises(TokenNotFoundError):
            extractor.extract("tt0133093")

    def test_undecodable_bytes_do_not_break_scrape(self, config, http):
        http.get.return_value = b'\xff\xfe<div data-auth="tok"></div>'
        extractor = MarkupTokenExtractor(config, http)

        assert extractor.extract("tt0133093") == "tok"

    def test_fetch_error_propagates(self, config, http):
        http.get.side_effect = FetchError("HTTP 404", url="http://imdb.test/title/tt0133093", status_code=404)
        extractor = MarkupTokenExtractor(config, http)

        with pytest.raises(FetchError):
            extractor.extract("tt0133093")

    def test_is_authorization_extractor(self, config, http):
        assert isinstance(MarkupTokenExtractor(config, http), AuthorizationExtractor)

    def test_logs_through_injected_logger(self, config, http, title_page):
        http.get.return_value = title_page
        log = MagicMock(spec=logging.Logger)
        extractor = MarkupTokenExtractor(config, http, log)

        extractor.extract("tt0133093")

        log.debug.assert_called_once_with("Found auth token for %s", "tt0133093")


class TestAuthorizationExtractor:
    """Tests for the extractor interface."""

    def test_cannot_instantiate_abstract(self):
        with pytest.raises(TypeError):
            AuthorizationExtractor()

    def test_subclass_must_implement_extract(self):
        class Incomplete(AuthorizationExtractor):
            pass

        with pytest.raises(TypeError):
            Incomplete()
