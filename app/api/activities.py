"""Activity feed views built from skill requests and favorites."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.crud import favorite as favorite_crud
from app.database import get_db
from app.schemas.auth import SessionUser
from app.services import skill_request_service
from app.utils.security import get_current_user
from app.utils.serializers import skill_request_to_dict, skill_to_dict, user_card

router = APIRouter(prefix="/api/activities", tags=["Activities"])

PAST_ACTIVITY_LIMIT = 30


@router.get("/nearby")
def nearby_activities(
    current_user: SessionUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Open requests other users have made."""
    requests = skill_request_service.list_pending_from_others(db, current_user.id)
    return {"activities": [skill_request_to_dict(r) for r in requests]}


@router.get("/my-activities")
def my_activities(
    current_user: SessionUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    requests = skill_request_service.list_involving(db, current_user.id, ("pending", "accepted"))
    return {"activities": [skill_request_to_dict(r) for r in requests]}


@router.get("/requests")
def awaiting_response(
    current_user: SessionUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    requests = skill_request_service.list_awaiting_response(db, current_user.id)
    return {"activities": [skill_request_to_dict(r) for r in requests]}


@router.get("/past")
def past_activities(
    current_user: SessionUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    requests = skill_request_service.list_involving(
        db,
        current_user.id,
        ("completed", "rejected"),
        limit=PAST_ACTIVITY_LIMIT,
    )
    return {"activities": [skill_request_to_dict(r) for r in requests]}


@router.get("/favorites")
def favorites_activities(
    current_user: SessionUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """What the caller's favorited users currently offer."""
    users = favorite_crud.list_favorited_users(db, current_user.id)
    return {
        "activities": [
            {
                "user": user_card(u),
                "skillsOffered": [skill_to_dict(s) for s in u.offered_skills],
            }
            for u in users
        ]
    }
