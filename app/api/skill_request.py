from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.auth import SessionUser
from app.schemas.skill_request import SkillRequestCreate, SkillRequestStatusUpdate
from app.services import notification_service, skill_request_service
from app.services.exceptions import ServiceError
from app.utils.security import get_current_user
from app.utils.serializers import skill_request_to_dict

router = APIRouter(prefix="/api/skill-requests", tags=["Skill Requests"])


@router.get("")
def get_my_requests(
    current_user: SessionUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Requests the caller received and requests the caller made, newest first."""
    received = skill_request_service.list_received(db, current_user.id)
    sent = skill_request_service.list_sent(db, current_user.id)
    return {
        "requests": [skill_request_to_dict(r) for r in received],
        "requestsMade": [skill_request_to_dict(r) for r in sent],
    }


@router.post("", status_code=status.HTTP_201_CREATED)
def create_request(
    payload: SkillRequestCreate,
    current_user: SessionUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    try:
        skill_request, notification = skill_request_service.create_request(
            db,
            requester=current_user,
            provider_id=payload.provider_id,
            skill_id=payload.skill_id,
            message=payload.message,
        )
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))

    notification_service.dispatch_email_for_notification(db, notification)
    return {"success": True, "request": skill_request_to_dict(skill_request)}


@router.patch("/{request_id}")
def update_request_status(
    request_id: int,
    payload: SkillRequestStatusUpdate,
    current_user: SessionUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    try:
        skill_request, notification = skill_request_service.update_status(
            db,
            request_id=request_id,
            actor=current_user,
            new_status=payload.status,
        )
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))

    notification_service.dispatch_email_for_notification(db, notification)
    return {"success": True, "request": skill_request_to_dict(skill_request)}
