"""
Pydantic schemas for type-safe data structures.
"""

from app.schemas.rating import RatingRequest, SearchCandidate

__all__ = [
    "RatingRequest",
    "SearchCandidate",
]
