# app/schemas/review.py
"""
Review Pydantic Schemas
Request models with validation
"""

from typing import Optional

from pydantic import Field, field_validator

from .base import CamelModel


# ======================
# REVIEW SCHEMAS
# ======================

class ReviewCreate(CamelModel):
    """Schema for creating a review"""
    reviewee_id: int = Field(..., description="User being reviewed")
    rating: int = Field(..., description="Rating from 1 to 5 stars")
    review_text: Optional[str] = Field(None, max_length=1000, description="Review text (max 1000 chars)")

    @field_validator("rating")
    @classmethod
    def validate_rating(cls, v: int) -> int:
        if not (1 <= v <= 5):
            raise ValueError("Rating must be between 1 and 5")
        return v

    @field_validator("review_text")
    @classmethod
    def blank_text_is_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None
