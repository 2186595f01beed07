from typing import Optional

from pydantic import Field, field_validator

from app.models.skill import SKILL_LEVELS
from .base import CamelModel

# ======================
# SKILL SCHEMAS
# ======================

class SkillCreate(CamelModel):
    skill_name: str = Field(..., min_length=1, max_length=100)
    skill_category: str = Field(..., min_length=1, max_length=50)
    skill_level: str
    description: Optional[str] = Field(None, max_length=2000)
    is_offering: bool = True

    @field_validator("skill_level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Accept any casing, store the canonical label."""
        for level in SKILL_LEVELS:
            if v.strip().lower() == level.lower():
                return level
        raise ValueError(f"Skill level must be one of: {', '.join(SKILL_LEVELS)}")
