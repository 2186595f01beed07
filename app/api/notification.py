from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.notification import Notification
from app.schemas.auth import SessionUser
from app.services import notification_service
from app.services.exceptions import ServiceError
from app.utils.security import get_current_user
from app.utils.serializers import iso

router = APIRouter(prefix="/api/notifications", tags=["Notifications"])


def notification_to_dict(n: Notification) -> dict:
    return {
        "id": n.id,
        "type": n.type,
        "title": n.title,
        "message": n.message,
        "link": n.link,
        "isRead": n.is_read,
        "createdAt": iso(n.created_at),
    }


@router.get("")
def get_my_notifications(
    current_user: SessionUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Latest 50 notifications; everything is marked read once fetched."""
    notifications = notification_service.list_user_notifications(db, user_id=current_user.id)
    payload = [notification_to_dict(n) for n in notifications]

    notification_service.mark_all_notifications_read(db, user_id=current_user.id)
    return {"notifications": payload}


@router.get("/unread-count")
def get_unread_count(
    current_user: SessionUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return {"count": notification_service.get_unread_count(db, user_id=current_user.id)}


@router.patch("/{notification_id}/read")
def mark_notification_read(
    notification_id: int,
    current_user: SessionUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    try:
        notification = notification_service.mark_notification_read(
            db, user_id=current_user.id, notification_id=notification_id
        )
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))

    return {"success": True, "id": notification.id}
