import json
import logging
import math
from typing import Any, Optional

from app.schemas import RatingRequest
from core.config import ImporterConfig
from core.http import HttpClient, build_session_header, decode_json

logger = logging.getLogger(__name__)

RATINGS_PATH = "/ratings/_ajax/title"
TRACKING_TAG = "title-maindetails"
SUCCESS_STATUS = 200

# IMDb only accepts whole-number ratings out of 10
IMDB_SCALE = 10


def rescale_rating(rating: float, rating_scale: int) -> int:
    """Map a rating on `rating_scale` onto IMDb's 10 point scale, rounding down."""
    return math.floor(rating / rating_scale * IMDB_SCALE)


def _response_status(payload: Any) -> Any:
    if isinstance(payload, dict):
        return payload.get("status")
    return None


def _error_status(status_code: int, content: bytes) -> Any:
    """Status to report for an HTTP error reply: its JSON status if it has one, else the HTTP code."""
    try:
        status = _response_status(json.loads(content))
    except ValueError:
        status = None
    if status is None or status == SUCCESS_STATUS:
        return status_code
    return status


class RatingSubmitter:
    def __init__(self, config: ImporterConfig, http: HttpClient, log: Optional[logging.Logger] = None):
        self.config = config
        self.http = http
        self.log = log or logger

    def submit(self, request: RatingRequest, identifier: str, token: str) -> None:
        """
        Post one rating to IMDb.

        A rejected rating (HTTP error status, or a JSON status other than 200)
        is logged as an error and does not raise; only transport failures and
        undecodable success replies do.
        """
        self.log.debug("Submitting rating for %s %s", request.to_log_json(), identifier)

        if not self.config.dry_run:
            data = {
                "tconst": identifier,
                "rating": rescale_rating(request.rating, self.config.rating_scale),
                "auth": token,
                "tracking_tag": TRACKING_TAG,
            }
            headers = {"Cookie": build_session_header(self.config.session_identity)}
            status_code, content = self.http.post(
                f"{self.config.base_url}{RATINGS_PATH}", headers=headers, body=data
            )

            if status_code >= 400:
                status = _error_status(status_code, content)
            else:
                status = _response_status(decode_json(content, request.display_name))
            if status != SUCCESS_STATUS:
                self.log.error(
                    "Could not submit rating for %s status = %s.",
                    request.to_log_json(),
                    status,
                )
                return

        self.log.info("Submitted rating for %s", request.display_name)
