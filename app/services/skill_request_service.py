"""
Skill swap request lifecycle.

pending -> accepted | rejected
accepted -> completed | cancelled

Only the provider moves a request; the requester only creates it.
"""

from __future__ import annotations

import logging
from typing import Dict, FrozenSet, List, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app import models
from app.schemas.auth import SessionUser
from app.services import notification_service
from app.services.exceptions import ConflictError, NotFoundError, PermissionDeniedError, ServiceError

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS: Dict[str, FrozenSet[str]] = {
    "pending": frozenset({"accepted", "rejected"}),
    "accepted": frozenset({"completed", "cancelled"}),
    "rejected": frozenset(),
    "completed": frozenset(),
    "cancelled": frozenset(),
}
TERMINAL_STATUSES = frozenset(s for s, targets in ALLOWED_TRANSITIONS.items() if not targets)

STATUS_UPDATE_TITLES = {
    "accepted": "Your skill swap request was accepted!",
    "rejected": "Your skill swap request was declined",
    "completed": "Your skill swap was marked as completed",
    "cancelled": "Your skill swap was cancelled",
}


def can_transition(current: str, target: str) -> bool:
    return target in ALLOWED_TRANSITIONS.get(current, frozenset())


def create_request(
    db: Session,
    *,
    requester: SessionUser,
    provider_id: int,
    skill_id: int,
    message: Optional[str] = None,
) -> Tuple[models.SkillRequest, models.Notification]:
    """Open a pending request for one of the provider's skills and notify the provider."""
    if provider_id == requester.id:
        raise ServiceError("Cannot request a skill swap with yourself")

    provider = db.query(models.User).filter(models.User.id == provider_id).first()
    if not provider:
        raise NotFoundError("Provider not found")

    skill = db.query(models.Skill).filter(
        models.Skill.id == skill_id,
        models.Skill.user_id == provider_id,
    ).first()
    if not skill:
        raise NotFoundError("Skill not found")

    try:
        skill_request = models.SkillRequest(
            requester_id=requester.id,
            provider_id=provider_id,
            skill_id=skill_id,
            message=message or None,
            status="pending",
        )
        db.add(skill_request)
        db.flush()

        notification = notification_service.create_notification(
            db,
            user_id=provider_id,
            notification_type="skill_request",
            title="New skill swap request!",
            message=f"{requester.name} wants to swap skills for {skill.skill_name}",
            link="/requests",
        )
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(
        "Skill request %s created by user %s for skill %s",
        skill_request.id, requester.id, skill_id,
    )
    return skill_request, notification


def update_status(
    db: Session,
    *,
    request_id: int,
    actor: SessionUser,
    new_status: str,
) -> Tuple[models.SkillRequest, models.Notification]:
    """Provider-only status transition; the requester is notified of the outcome."""
    skill_request = db.query(models.SkillRequest).filter(models.SkillRequest.id == request_id).first()
    if not skill_request:
        raise NotFoundError("Skill request not found")

    if skill_request.provider_id != actor.id:
        raise PermissionDeniedError("Only the provider can update this request")

    if skill_request.status in TERMINAL_STATUSES:
        raise ConflictError(f"Request is already {skill_request.status}")

    if not can_transition(skill_request.status, new_status):
        raise ConflictError(
            f"Cannot change request status from {skill_request.status} to {new_status}"
        )

    previous = skill_request.status
    try:
        skill_request.status = new_status
        notification = notification_service.create_notification(
            db,
            user_id=skill_request.requester_id,
            notification_type="request_update",
            title=STATUS_UPDATE_TITLES[new_status],
            message=f"{actor.name} updated your request to {new_status}",
            link="/requests",
        )
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("Skill request %s moved %s -> %s", request_id, previous, new_status)
    return skill_request, notification


# ======================
# LISTINGS
# ======================

def _base_query(db: Session):
    return db.query(models.SkillRequest).order_by(
        models.SkillRequest.created_at.desc(), models.SkillRequest.id.desc()
    )


def list_received(db: Session, user_id: int) -> List[models.SkillRequest]:
    return _base_query(db).filter(models.SkillRequest.provider_id == user_id).all()


def list_sent(db: Session, user_id: int) -> List[models.SkillRequest]:
    return _base_query(db).filter(models.SkillRequest.requester_id == user_id).all()


def list_pending_from_others(db: Session, user_id: int, limit: int = 20) -> List[models.SkillRequest]:
    """Open requests made by other users (activity feed)."""
    return (
        _base_query(db)
        .filter(
            models.SkillRequest.status == "pending",
            models.SkillRequest.requester_id != user_id,
        )
        .limit(limit)
        .all()
    )


def list_involving(
    db: Session,
    user_id: int,
    statuses: Tuple[str, ...],
    limit: Optional[int] = None,
) -> List[models.SkillRequest]:
    query = _base_query(db).filter(
        or_(
            models.SkillRequest.requester_id == user_id,
            models.SkillRequest.provider_id == user_id,
        ),
        models.SkillRequest.status.in_(statuses),
    )
    if limit:
        query = query.limit(limit)
    return query.all()


def list_awaiting_response(db: Session, user_id: int) -> List[models.SkillRequest]:
    return _base_query(db).filter(
        models.SkillRequest.provider_id == user_id,
        models.SkillRequest.status == "pending",
    ).all()
