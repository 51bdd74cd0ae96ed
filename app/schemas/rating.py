"""
Pydantic models for rating import data structures.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class RatingRequest(BaseModel):
    """A single rating to submit, identified by title or IMDb id."""

    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
        json_schema_extra={
            "example": {
                "title": "The Matrix",
                "id": 133093,
                "rating": 5,
            }
        },
    )

    title: str | None = Field(None, description="Film title, searched when no id is given")
    identifier: str | int | None = Field(
        None,
        alias="id",
        description="IMDb id, either numeric (133093) or prefixed (tt0133093)",
    )
    rating: float = Field(..., gt=0, description="Rating on the caller's own scale")

    @field_validator("title", mode="before")
    @classmethod
    def blank_title_is_missing(cls, v):
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @field_validator("identifier", mode="before")
    @classmethod
    def blank_identifier_is_missing(cls, v):
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @model_validator(mode="after")
    def require_title_or_identifier(self) -> "RatingRequest":
        if self.title is None and self.identifier is None:
            raise ValueError("A rating needs either a title or an id")
        return self

    @property
    def display_name(self) -> str:
        """Title if known, otherwise the identifier."""
        return self.title if self.title is not None else str(self.identifier)

    def to_log_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True)


class SearchCandidate(BaseModel):
    """One hit in a title search bucket."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., description="Canonical IMDb id (tt0000000)")
    title: str = Field(..., description="Title as listed by IMDb")
