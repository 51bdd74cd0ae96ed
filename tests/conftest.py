"""
Pytest configuration and shared fixtures.
"""

from unittest.mock import MagicMock

import pytest

from core.config import ImporterConfig
from core.http import HttpClient

BASE_URL = "http://imdb.test"


@pytest.fixture
def config():
    """Importer config pointing at a fake IMDb host."""
    return ImporterConfig(session_identity="user-cookie-id", base_url=BASE_URL)


@pytest.fixture
def http():
    """HTTP client double; tests set get/post return values."""
    return MagicMock(spec=HttpClient)


@pytest.fixture
def matrix_search_payload():
    """Search response where the exact-title bucket holds The Matrix."""
    return {
        "title_exact": [
            {"id": "tt0133093", "title": "The Matrix", "name": "", "description": "1999, Lana Wachowski"},
            {"id": "tt0410519", "title": "The Matrix Revisited", "description": "2001 documentary"},
        ],
        "title_approx": [
            {"id": "tt0234215", "title": "The Matrix Reloaded", "description": "2003"},
        ],
    }


@pytest.fixture
def title_page():
    """Title page markup containing an auth token."""
    return (
        b'<html><body><div class="rating" data-tconst="tt0133093" '
        b'data-auth="BCYm-Mk2Ros7BTxsLNL2XJX_DbuIG5X2k7gSP0HhM" data-ga-identifier="title">'
        b"</div></body></html>"
    )
