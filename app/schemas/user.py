from datetime import date
from typing import List, Optional

from pydantic import AliasChoices, Field

from .base import CamelModel


# ======================
# PROFILE SCHEMAS
# ======================

class ProfileUpdate(CamelModel):
    """Partial profile update; omitted or null fields keep their stored value."""
    occupation: Optional[str] = Field(None, max_length=100)
    gender: Optional[str] = Field(None, max_length=20)
    birth_date: Optional[date] = None
    bio: Optional[str] = Field(None, max_length=2000)
    location: Optional[str] = Field(None, max_length=255)
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    radius_km: Optional[int] = Field(
        None,
        validation_alias=AliasChoices("radius", "radiusKm", "radius_km"),
        ge=1,
        le=500,
    )
    profile_image_url: Optional[str] = Field(None, max_length=500)
    # Interest names; replaces the current set when provided
    interests: Optional[List[str]] = None
