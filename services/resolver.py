"""
Resolve rating requests to canonical IMDb identifiers.

Explicit ids are normalised locally. Titles go through IMDb's find endpoint,
which groups hits into buckets; only the first bucket present is considered.
"""

import logging
import re
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from app.schemas import RatingRequest, SearchCandidate
from core.config import ImporterConfig
from core.errors import DecodeError, InvalidIdentifierError
from core.http import HttpClient, decode_json

logger = logging.getLogger(__name__)

ID_PREFIX = "tt"
ID_WIDTH = 7
SEARCH_PATH = "/xml/find"

# Search buckets in priority order
SEARCH_BUCKETS = ("title_popular", "title_exact", "title_approx")

_NUMERIC_ID = re.compile(r"^[0-9]+$")


def format_identifier(value: str | int) -> str:
    """
    Turn a numerical id into a tt******* formatted string if required.

    Examples:
        >>> format_identifier(133093)
        'tt0133093'
        >>> format_identifier("tt0133093")
        'tt0133093'
    """
    if isinstance(value, bool):
        raise InvalidIdentifierError(value)
    text = str(value)
    if text.startswith(ID_PREFIX):
        return text
    if _NUMERIC_ID.match(text):
        return ID_PREFIX + text.zfill(ID_WIDTH)
    raise InvalidIdentifierError(value)


def select_bucket(payload: Dict[str, Any]) -> Optional[str]:
    """Return the highest-priority non-empty bucket in a search payload."""
    for bucket in SEARCH_BUCKETS:
        if payload.get(bucket):
            return bucket
    return None


def match_title(candidates: List[SearchCandidate], title: str) -> Optional[SearchCandidate]:
    """First candidate whose title equals `title`, ignoring case."""
    wanted = title.lower()
    return next((c for c in candidates if c.title.lower() == wanted), None)


class IdentifierResolver:
    def __init__(self, config: ImporterConfig, http: HttpClient, log: Optional[logging.Logger] = None):
        self.config = config
        self.http = http
        self.log = log or logger

    def resolve(self, request: RatingRequest) -> Optional[str]:
        """
        Resolve a request to a tt******* id.

        Returns None when a title search finds no exact match.

        Raises:
            InvalidIdentifierError: Explicit id is neither numeric nor tt-prefixed
            FetchError: Search request failed
            DecodeError: Search response was not the expected JSON
        """
        if request.identifier is not None:
            return format_identifier(request.identifier)
        return self.find_by_title(request.title)

    def find_by_title(self, title: str) -> Optional[str]:
        payload = self._search(title)

        # TODO: fall through to the next bucket when the chosen one has no exact title match
        bucket = select_bucket(payload)
        if bucket is None:
            self.log.warning('Could not find title "%s"', title)
            return None

        candidates = self._parse_candidates(payload[bucket], title)
        match = match_title(candidates, title)
        if match is None:
            self.log.warning('Could not find title "%s"', title)
            return None

        return match.id

    def _search(self, title: str) -> Dict[str, Any]:
        params = {"json": 1, "nr": 1, "tt": "on", "q": title}
        content = self.http.get(f"{self.config.base_url}{SEARCH_PATH}", params=params)
        payload = decode_json(content, title)
        if not isinstance(payload, dict):
            raise DecodeError(f"Unexpected search response type {type(payload)} for {title}.")
        return payload

    def _parse_candidates(self, raw: Any, title: str) -> List[SearchCandidate]:
        if not isinstance(raw, list):
            raise DecodeError(f"Search bucket must be a list for {title}, got {type(raw)}.")
        try:
            return [SearchCandidate.model_validate(item) for item in raw]
        except ValidationError as exc:
            raise DecodeError(f"Malformed search candidate for {title}: {exc}") from exc
