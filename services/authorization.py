"""
Authorization token extraction for IMDb title pages.

Rating a title requires the short-lived token IMDb embeds in the title page
as a data-auth attribute. Extraction sits behind AuthorizationExtractor so a
different strategy can be swapped in without touching the submitter.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from core.config import ImporterConfig
from core.errors import TokenNotFoundError
from core.http import HttpClient, build_session_header

logger = logging.getLogger(__name__)

TITLE_PATH = "/title/{identifier}"
TOKEN_MARKER = 'data-auth="'


def find_token(content: str, marker: str = TOKEN_MARKER) -> Optional[str]:
    """
    Return the text between `marker` and the next double quote.

    Returns None if the marker or the closing quote is missing, or if the
    enclosed value is empty.
    """
    start = content.find(marker)
    if start == -1:
        return None
    start += len(marker)
    end = content.find('"', start)
    if end == -1:
        return None
    return content[start:end] or None


class AuthorizationExtractor(ABC):
    """Strategy for obtaining the auth token needed to rate a title."""

    @abstractmethod
    def extract(self, identifier: str) -> str:
        """
        Fetch a fresh authorization token for a title.

        Args:
            identifier: Canonical tt******* id

        Returns:
            Token valid for the next rating submission only

        Raises:
            TokenNotFoundError: If no token could be located
        """
        pass


class MarkupTokenExtractor(AuthorizationExtractor):
    """Scrapes the data-auth attribute from the raw title page markup."""

    def __init__(self, config: ImporterConfig, http: HttpClient, log: Optional[logging.Logger] = None):
        self.config = config
        self.http = http
        self.log = log or logger

    def page_url(self, identifier: str) -> str:
        return self.config.base_url + TITLE_PATH.format(identifier=identifier)

    def extract(self, identifier: str) -> str:
        headers = {"Cookie": build_session_header(self.config.session_identity)}
        content = self.http.get(self.page_url(identifier), headers=headers)

        token = find_token(content.decode("utf-8", errors="replace"))
        if token is None:
            raise TokenNotFoundError(identifier)

        self.log.debug("Found auth token for %s", identifier)
        return token
