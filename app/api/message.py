from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.crud import user as user_crud
from app.database import get_db
from app.schemas.auth import SessionUser
from app.schemas.message import MessageCreate
from app.services import message_service, notification_service
from app.services.exceptions import ServiceError
from app.utils.security import get_current_user

router = APIRouter(prefix="/api/messages", tags=["Messages"])


@router.get("/conversations")
def get_conversations(
    current_user: SessionUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return {"conversations": message_service.list_conversations(db, user_id=current_user.id)}


@router.get("/{user_id}")
def get_thread(
    user_id: int,
    current_user: SessionUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Thread with one user, oldest first. Marks their messages to the caller read."""
    if not user_crud.get_user(db, user_id):
        raise HTTPException(status_code=404, detail="User not found")

    messages = message_service.get_thread(db, user_id=current_user.id, other_user_id=user_id)
    return {"messages": messages}


@router.post("", status_code=status.HTTP_201_CREATED)
def send_message(
    payload: MessageCreate,
    current_user: SessionUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    try:
        message, notification = message_service.send_message(
            db,
            sender=current_user,
            receiver_id=payload.receiver_id,
            message_text=payload.message_text,
            skill_request_id=payload.skill_request_id,
        )
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))

    notification_service.dispatch_email_for_notification(db, notification)
    return {"success": True, "message": message_service.message_to_dict(message)}
