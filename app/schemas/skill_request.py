from typing import Optional

from pydantic import Field, field_validator

from .base import CamelModel

UPDATABLE_STATUSES = ("accepted", "rejected", "completed", "cancelled")


class SkillRequestCreate(CamelModel):
    provider_id: int
    skill_id: int
    message: Optional[str] = Field(None, max_length=2000)


class SkillRequestStatusUpdate(CamelModel):
    status: str

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: str) -> str:
        normalized = v.strip().lower()
        if normalized not in UPDATABLE_STATUSES:
            raise ValueError("Invalid status")
        return normalized
