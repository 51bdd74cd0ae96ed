"""
Unit tests for rating schemas.
"""

import json

import pytest
from pydantic import ValidationError

from app.schemas import RatingRequest, SearchCandidate


class TestRatingRequest:
    """Tests for RatingRequest validation."""

    def test_accepts_id_alias(self):
        """Should populate identifier from the 'id' key."""
        request = RatingRequest.model_validate({"id": 133093, "rating": 5})
        assert request.identifier == 133093
        assert request.title is None

    def test_accepts_field_name(self):
        request = RatingRequest(identifier="tt0133093", rating=5)
        assert request.identifier == "tt0133093"

    def test_title_only(self):
        request = RatingRequest(title="The Matrix", rating=7.5)
        assert request.title == "The Matrix"
        assert request.rating == 7.5

    def test_strips_title(self):
        assert RatingRequest(title="  The Matrix ", rating=5).title == "The Matrix"

    def test_requires_title_or_id(self):
        """Should reject entries with neither a title nor an id."""
        with pytest.raises(ValidationError):
            RatingRequest(rating=5)

    def test_blank_values_count_as_missing(self):
        with pytest.raises(ValidationError):
            RatingRequest(title="   ", identifier="", rating=5)

    @pytest.mark.parametrize("rating", [0, -1])
    def test_rating_must_be_positive(self, rating):
        with pytest.raises(ValidationError):
            RatingRequest(title="The Matrix", rating=rating)

    def test_rating_from_string(self):
        """Should coerce numeric strings as read from CSV files."""
        assert RatingRequest(title="The Matrix", rating="4").rating == 4.0

    def test_display_name_prefers_title(self):
        request = RatingRequest(title="The Matrix", identifier=133093, rating=5)
        assert request.display_name == "The Matrix"

    def test_display_name_falls_back_to_identifier(self):
        assert RatingRequest(identifier=133093, rating=5).display_name == "133093"

    def test_log_json_uses_original_keys(self):
        request = RatingRequest(identifier=133093, rating=5)
        assert json.loads(request.to_log_json()) == {"id": 133093, "rating": 5.0}

    def test_is_frozen(self):
        request = RatingRequest(title="The Matrix", rating=5)
        with pytest.raises(ValidationError):
            request.rating = 6


class TestSearchCandidate:
    """Tests for SearchCandidate parsing."""

    def test_ignores_extra_keys(self):
        candidate = SearchCandidate.model_validate(
            {"id": "tt0133093", "title": "The Matrix", "description": "1999"}
        )
        assert candidate.id == "tt0133093"
        assert candidate.title == "The Matrix"

    def test_requires_title(self):
        with pytest.raises(ValidationError):
            SearchCandidate.model_validate({"id": "tt0133093"})
