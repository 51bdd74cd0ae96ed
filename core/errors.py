"""
Exception taxonomy for the rating importer.

Everything raised on purpose while processing a rating derives from
ImporterError so the batch driver can isolate one bad entry from the rest.
"""

from typing import Any, List, Optional, Tuple


class ImporterError(Exception):
    """Base class for all importer failures."""
    pass


class ConfigError(ImporterError):
    """Raised when the importer configuration is invalid."""
    pass


class InvalidIdentifierError(ImporterError):
    """Raised when an explicit identifier is not a valid IMDb id."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(f"Failed to validate [{value}] as an IMDb ID: not a valid identifier")


class FetchError(ImporterError):
    """Raised when an HTTP request fails or returns an error status."""

    def __init__(self, message: str, url: str, status_code: Optional[int] = None):
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class DecodeError(ImporterError):
    """Raised when a response body cannot be decoded."""
    pass


class TokenNotFoundError(ImporterError):
    """Raised when the auth token marker is missing from a title page."""

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"Could not fetch data auth token for {identifier}.")


class BatchSubmissionError(ImporterError):
    """Raised after a batch completes when one or more entries failed."""

    def __init__(self, failures: List[Tuple[Any, ImporterError]]):
        self.failures = failures
        super().__init__(f"{len(failures)} rating(s) failed to import")
