import logging
from dataclasses import dataclass, replace
from typing import Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://www.imdb.com"
DEFAULT_RATING_SCALE = 10


class Settings(BaseSettings):
    PROJECT_NAME: str = "IMDb Rating Importer"
    IMDB_SESSION_ID: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("IMDB_SESSION_ID", "IMDB_COOKIE_ID"),
        description="Value of the IMDb 'id' cookie for the account being rated as"
    )
    IMDB_RATING_SCALE: int = DEFAULT_RATING_SCALE
    IMDB_DRY_RUN: bool = False
    IMDB_BASE_URL: str = DEFAULT_BASE_URL
    # Read timeout in seconds; the connect timeout is fixed in core.http
    IMDB_REQUEST_TIMEOUT: float = 30.0
    LOG_LEVEL: str = "INFO"

    @field_validator("IMDB_BASE_URL")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Ensure the IMDb URL is properly formatted."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"IMDB_BASE_URL must start with http:// or https://, got: {v}")
        return v.rstrip("/")

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown LOG_LEVEL: {v}")
        return level

    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )


@dataclass(frozen=True)
class ImporterConfig:
    """
    Configuration for one importer instance.

    Attributes:
        session_identity: IMDb 'id' cookie of the impersonated account
        rating_scale: Scale the caller's ratings are expressed on (e.g. 5 or 100)
        dry_run: Resolve and authorize but never POST the rating
        base_url: Scheme and host the IMDb endpoints live under
    """

    session_identity: str
    rating_scale: int = DEFAULT_RATING_SCALE
    dry_run: bool = False
    base_url: str = DEFAULT_BASE_URL

    def __post_init__(self) -> None:
        if not self.session_identity:
            raise ConfigError("A session identity is required to submit ratings.")
        if self.rating_scale <= 0:
            raise ConfigError(
                f"Invalid rating base value {self.rating_scale}. Rating base must be positive."
            )
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    def with_dry_run(self, value: bool) -> "ImporterConfig":
        return replace(self, dry_run=value)

    @classmethod
    def from_settings(cls, source: Optional[Settings] = None) -> "ImporterConfig":
        """Build an importer config from environment-backed settings."""
        source = source or settings
        if not source.IMDB_SESSION_ID:
            raise ConfigError("IMDB_SESSION_ID is not set; cannot impersonate an account.")
        return cls(
            session_identity=source.IMDB_SESSION_ID,
            rating_scale=source.IMDB_RATING_SCALE,
            dry_run=source.IMDB_DRY_RUN,
            base_url=source.IMDB_BASE_URL,
        )


settings = Settings()
