"""Direct messages between users, thread reads and the conversation inbox."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app import models
from app.schemas.auth import SessionUser
from app.services import notification_service
from app.services.exceptions import NotFoundError, ServiceError
from app.utils.serializers import iso

logger = logging.getLogger(__name__)


def message_to_dict(message: models.Message) -> Dict[str, Any]:
    return {
        "id": message.id,
        "senderId": message.sender_id,
        "receiverId": message.receiver_id,
        "messageText": message.message_text,
        "isRead": message.is_read,
        "skillRequestId": message.skill_request_id,
        "createdAt": iso(message.created_at),
    }


def send_message(
    db: Session,
    *,
    sender: SessionUser,
    receiver_id: int,
    message_text: str,
    skill_request_id: Optional[int] = None,
) -> Tuple[models.Message, models.Notification]:
    """Store the message and the receiver's notification in one transaction."""
    if receiver_id == sender.id:
        raise ServiceError("Cannot send a message to yourself")

    receiver = db.query(models.User).filter(models.User.id == receiver_id).first()
    if not receiver:
        raise NotFoundError("Receiver not found")

    if skill_request_id is not None:
        linked = db.query(models.SkillRequest).filter(models.SkillRequest.id == skill_request_id).first()
        if not linked or {linked.requester_id, linked.provider_id} != {sender.id, receiver_id}:
            raise NotFoundError("Skill request not found")

    try:
        message = models.Message(
            sender_id=sender.id,
            receiver_id=receiver_id,
            message_text=message_text,
            skill_request_id=skill_request_id,
        )
        db.add(message)
        db.flush()

        notification = notification_service.create_notification(
            db,
            user_id=receiver_id,
            notification_type="message",
            title="New message",
            message=f"{sender.name} sent you a message",
            link=f"/messages/{sender.id}",
        )
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("Message %s sent from user %s to user %s", message.id, sender.id, receiver_id)
    return message, notification


def get_thread(db: Session, *, user_id: int, other_user_id: int) -> List[Dict[str, Any]]:
    """
    Messages exchanged with other_user_id, oldest first.

    The payload reflects read flags as they were before this fetch; afterwards
    every unread message from the counterparty is marked read.
    """
    messages = (
        db.query(models.Message)
        .filter(
            or_(
                (models.Message.sender_id == user_id) & (models.Message.receiver_id == other_user_id),
                (models.Message.sender_id == other_user_id) & (models.Message.receiver_id == user_id),
            )
        )
        .order_by(models.Message.created_at.asc(), models.Message.id.asc())
        .all()
    )
    payload = [message_to_dict(m) for m in messages]

    db.query(models.Message).filter(
        models.Message.sender_id == other_user_id,
        models.Message.receiver_id == user_id,
        models.Message.is_read.is_(False),
    ).update({"is_read": True}, synchronize_session=False)
    db.commit()

    return payload


def list_conversations(db: Session, *, user_id: int) -> List[Dict[str, Any]]:
    """Latest message and unread count per counterparty, most recent thread first."""
    messages = (
        db.query(models.Message)
        .filter(or_(models.Message.sender_id == user_id, models.Message.receiver_id == user_id))
        .order_by(models.Message.created_at.desc(), models.Message.id.desc())
        .all()
    )

    threads: Dict[int, Dict[str, Any]] = {}
    for message in messages:
        incoming = message.receiver_id == user_id
        partner = message.sender if incoming else message.receiver
        thread = threads.get(partner.id)
        if thread is None:
            # First hit per partner is the most recent message
            thread = {
                "userId": partner.id,
                "userName": partner.name,
                "userProfileImage": partner.profile_image_url,
                "lastMessage": message.message_text,
                "lastMessageTime": iso(message.created_at),
                "unreadCount": 0,
            }
            threads[partner.id] = thread
        if incoming and not message.is_read:
            thread["unreadCount"] += 1

    return list(threads.values())
