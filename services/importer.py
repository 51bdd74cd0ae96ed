"""
Batch driver for importing ratings into IMDb.

Each rating goes through three stages, strictly in order:
resolve the IMDb id, scrape an auth token from the title page, post the rating.
Ratings are processed one at a time in input order; one failing entry never
stops the rest of the batch.
"""

import logging
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from app.schemas import RatingRequest
from core.config import ImporterConfig
from core.errors import BatchSubmissionError, ImporterError
from core.http import HttpClient
from services.authorization import AuthorizationExtractor, MarkupTokenExtractor
from services.resolver import IdentifierResolver
from services.submitter import RatingSubmitter


class RatingImporter:
    """
    Submits batches of ratings as the account identified by the config.

    Not safe for concurrent use: call submit() from one thread at a time.
    """

    def __init__(
        self,
        config: ImporterConfig,
        http: Optional[HttpClient] = None,
        extractor: Optional[AuthorizationExtractor] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.config = config
        self.http = http or HttpClient()
        self._extractor = extractor
        self._logger = logger

    @classmethod
    def from_settings(cls, **kwargs) -> "RatingImporter":
        return cls(ImporterConfig.from_settings(), **kwargs)

    @property
    def logger(self) -> logging.Logger:
        if self._logger is None:
            self._logger = logging.getLogger(__name__)
        return self._logger

    def set_logger(self, logger: logging.Logger) -> "RatingImporter":
        self._logger = logger
        return self

    def set_dry_run(self, value: bool) -> "RatingImporter":
        """Toggle dry run for subsequent batches."""
        self.config = self.config.with_dry_run(value)
        return self

    @property
    def extractor(self) -> AuthorizationExtractor:
        """The injected extractor, or a markup scraper bound to the current config and logger."""
        if self._extractor is not None:
            return self._extractor
        return MarkupTokenExtractor(self.config, self.http, self.logger)

    def submit(self, requests: Iterable[RatingRequest | Mapping[str, Any]]) -> None:
        """
        Submit ratings to IMDb.

        Args:
            requests: RatingRequest objects or mappings such as
                {"title": "The Matrix", "id": 133093, "rating": 5}.
                When an id is given it is used instead of searching by title.

        Raises:
            BatchSubmissionError: After the whole batch ran, if any entry hit
                an invalid id, a transport/decode failure or a missing token.
        """
        resolver = IdentifierResolver(self.config, self.http, self.logger)
        submitter = RatingSubmitter(self.config, self.http, self.logger)
        extractor = self.extractor
        failures: List[Tuple[Any, ImporterError]] = []

        # Validate the whole batch before touching the network
        batch = [
            raw if isinstance(raw, RatingRequest) else RatingRequest.model_validate(raw)
            for raw in requests
        ]
        for request in batch:
            try:
                self._process(request, resolver, extractor, submitter)
            except ImporterError as exc:
                self.logger.error("Failed to import rating for %s: %s", request.display_name, exc)
                failures.append((request, exc))

        if failures:
            raise BatchSubmissionError(failures)

    def _process(
        self,
        request: RatingRequest,
        resolver: IdentifierResolver,
        extractor: AuthorizationExtractor,
        submitter: RatingSubmitter,
    ) -> None:
        if request.identifier is None:
            self.logger.debug("Searching for %s", request.title)

        identifier = resolver.resolve(request)
        if identifier is None:
            return

        token = extractor.extract(identifier)
        submitter.submit(request, identifier, token)
