"""JSON shapes shared by several routers (camelCase keys, ISO timestamps)."""

from datetime import date, datetime
from typing import Any, Dict, Optional, Union

from app import models


def iso(value: Optional[Union[datetime, date]]) -> Optional[str]:
    return value.isoformat() if value else None


def user_card(user: Optional[models.User]) -> Optional[Dict[str, Any]]:
    """Minimal identity block embedded in requests, reviews and conversations."""
    if user is None:
        return None
    return {
        "id": user.id,
        "name": user.name,
        "profileImageUrl": user.profile_image_url,
    }


def user_summary(user: models.User) -> Dict[str, Any]:
    """Browse-list view of another user."""
    return {
        "id": user.id,
        "name": user.name,
        "occupation": user.occupation,
        "bio": user.bio,
        "location": user.location,
        "profileImageUrl": user.profile_image_url,
    }


def skill_to_dict(skill: models.Skill) -> Dict[str, Any]:
    return {
        "id": skill.id,
        "skillName": skill.skill_name,
        "skillCategory": skill.skill_category,
        "skillLevel": skill.skill_level,
        "description": skill.description,
        "isOffering": skill.is_offering,
        "createdAt": iso(skill.created_at),
    }


def interest_to_dict(interest: models.Interest) -> Dict[str, Any]:
    return {
        "id": interest.id,
        "name": interest.name,
        "category": interest.category,
    }


def skill_request_to_dict(request: models.SkillRequest) -> Dict[str, Any]:
    skill = request.skill
    return {
        "id": request.id,
        "status": request.status,
        "message": request.message,
        "createdAt": iso(request.created_at),
        "updatedAt": iso(request.updated_at),
        "requester": user_card(request.requester),
        "provider": user_card(request.provider),
        "skill": {
            "id": skill.id,
            "name": skill.skill_name,
            "category": skill.skill_category,
        } if skill else None,
    }
