import json
import logging
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlencode

import requests

from core.config import settings
from core.errors import DecodeError, FetchError

logger = logging.getLogger(__name__)

# Connect timeout in seconds; the read timeout comes from settings
CONNECT_TIMEOUT = 5

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0 Safari/537.36"
)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def build_cookie_header(values: Mapping[str, Any]) -> str:
    """Render cookie pairs as 'key=value;' in insertion order."""
    return "".join(f"{key}={value};" for key, value in values.items())


def build_session_header(identity: str) -> str:
    """Cookie header value that identifies the impersonated IMDb account."""
    return build_cookie_header({"id": identity})


def decode_json(content: bytes, context: str) -> Any:
    """
    Decode a JSON response body.

    Args:
        content: Raw response bytes
        context: Short description used in the error message

    Raises:
        DecodeError: If the body is not valid UTF-8 JSON
    """
    try:
        return json.loads(content)
    except ValueError as exc:
        raise DecodeError(f"Could not decode json result for {context}.") from exc


class HttpClient:
    """
    Thin wrapper around a requests Session.

    Every call is a single attempt. Connection failures and timeouts are
    reported as FetchError. GET also treats HTTP error statuses as
    FetchError; POST hands the status back to the caller with the body.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: tuple[float, float] | float | None = None,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        self.session = session or requests.Session()
        self.timeout = timeout if timeout is not None else (CONNECT_TIMEOUT, settings.IMDB_REQUEST_TIMEOUT)
        self.user_agent = user_agent

    def get(
        self,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> bytes:
        response = self._send("GET", url, headers=headers, params=params)
        if response.status_code >= 400:
            raise FetchError(
                f"GET {url} returned HTTP {response.status_code}",
                url=url,
                status_code=response.status_code,
            )
        return response.content

    def post(
        self,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        body: Mapping[str, Any] | str | None = None,
    ) -> tuple[int, bytes]:
        """
        POST a form body. Mappings are urlencoded and sent with form headers.

        Returns:
            (status_code, content). An HTTP error status does not raise; the
            caller decides what a rejected POST means.
        """
        headers = dict(headers or {})
        if body is not None and not isinstance(body, str):
            body = urlencode(body)
        if body is not None:
            headers.setdefault("Content-Type", FORM_CONTENT_TYPE)
            headers["Content-Length"] = str(len(body.encode("utf-8")))
        response = self._send("POST", url, headers=headers, data=body)
        return response.status_code, response.content

    def _send(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
        data: Optional[str] = None,
    ) -> requests.Response:
        request_headers = {"User-Agent": self.user_agent}
        request_headers.update(headers or {})

        logger.debug("%s %s params=%s", method, url, params)
        try:
            return self.session.request(
                method,
                url,
                headers=request_headers,
                params=params,
                data=data,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise FetchError(f"{method} {url} failed: {exc}", url=url) from exc
