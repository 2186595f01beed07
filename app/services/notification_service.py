from __future__ import annotations

import logging
import threading
from typing import List, Optional

from sqlalchemy.orm import Session

from app import models
from app.models.notification import NOTIFICATION_TYPES, Notification
from app.services.exceptions import NotFoundError, PermissionDeniedError
from app.utils.email import is_email_enabled, send_email

logger = logging.getLogger(__name__)


EMAIL_SUBJECT_BY_TYPE = {
    "favorite": "Someone favorited you on SkillSwap",
    "message": "New message on SkillSwap",
    "review": "You received a new review on SkillSwap",
    "skill_request": "New skill swap request on SkillSwap",
    "request_update": "Skill swap request update on SkillSwap",
}


def list_user_notifications(
    db: Session,
    *,
    user_id: int,
    unread_only: bool = False,
    limit: int = 50,
) -> List[Notification]:
    query = db.query(Notification).filter(Notification.user_id == user_id)
    if unread_only:
        query = query.filter(Notification.is_read.is_(False))
    return query.order_by(Notification.created_at.desc(), Notification.id.desc()).limit(limit).all()


def mark_notification_read(
    db: Session,
    *,
    user_id: int,
    notification_id: int,
) -> Notification:
    notification = db.query(Notification).filter(Notification.id == notification_id).first()
    if not notification:
        raise NotFoundError("Notification not found")
    if notification.user_id != user_id:
        raise PermissionDeniedError("Not allowed to modify this notification")
    notification.is_read = True
    db.commit()
    return notification


def mark_all_notifications_read(db: Session, *, user_id: int) -> int:
    updated = db.query(Notification).filter(
        Notification.user_id == user_id,
        Notification.is_read.is_(False),
    ).update({"is_read": True}, synchronize_session=False)
    db.commit()
    return int(updated)


def get_unread_count(db: Session, *, user_id: int) -> int:
    return db.query(Notification).filter(
        Notification.user_id == user_id,
        Notification.is_read.is_(False),
    ).count()


def create_notification(
    db: Session,
    *,
    user_id: int,
    notification_type: str,
    title: str,
    message: str = "",
    link: Optional[str] = None,
) -> Notification:
    """
    Stage a notification in the caller's transaction.
    The caller commits it together with the write that caused it.
    """
    if notification_type not in NOTIFICATION_TYPES:
        raise ValueError(f"Unknown notification type: {notification_type}")
    notification = Notification(
        user_id=user_id,
        type=notification_type,
        title=title,
        message=message,
        link=link,
    )
    db.add(notification)
    db.flush()
    return notification


def _send_notification_email(to_email: str, subject: str, body_text: str, *, notification_id: Optional[int], user_id: Optional[int]) -> None:
    """Send SMTP mail in a background thread so API latency stays low."""
    sent = send_email(
        to_email=to_email,
        subject=subject,
        body_text=body_text,
    )
    if not sent:
        logger.info(
            "Notification email not sent (user_id=%s, notification_id=%s)",
            user_id,
            notification_id,
        )


def dispatch_email_for_notification(db: Session, notification: Optional[Notification]) -> bool:
    """
    Best-effort email copy of a committed notification.
    This function never raises and should not impact request success.
    """
    if notification is None:
        return False
    try:
        if not is_email_enabled():
            return False

        recipient = db.query(models.User).filter(
            models.User.id == notification.user_id
        ).first()
        if not recipient or not recipient.email:
            return False

        subject = EMAIL_SUBJECT_BY_TYPE.get(
            notification.type,
            "New notification from SkillSwap",
        )
        recipient_name = (recipient.name or "there").strip() or "there"
        body_lines = [f"Hi {recipient_name},", "", notification.title]
        if notification.message:
            body_lines.append(notification.message)
        body_lines += ["", "Open SkillSwap to view details."]

        worker = threading.Thread(
            target=_send_notification_email,
            args=(
                recipient.email,
                subject,
                "\n".join(body_lines),
            ),
            kwargs={
                "notification_id": notification.id,
                "user_id": notification.user_id,
            },
            daemon=True,
        )
        worker.start()
        return True
    except Exception as exc:
        logger.warning(
            "Notification email dispatch failed (notification_id=%s): %s",
            getattr(notification, "id", None),
            exc,
        )
        return False
