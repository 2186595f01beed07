import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.crud import favorite as favorite_crud
from app.crud import user as user_crud
from app.database import get_db
from app.schemas.auth import SessionUser
from app.schemas.favorite import FavoriteCreate
from app.services import notification_service
from app.utils.security import get_current_user
from app.utils.serializers import user_summary

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/favorites", tags=["Favorites"])


@router.get("")
def get_my_favorites(
    current_user: SessionUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    users = favorite_crud.list_favorited_users(db, current_user.id)
    return {"favorites": [user_summary(u) for u in users]}


@router.get("/favorited-me")
def get_users_who_favorited_me(
    current_user: SessionUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    users = favorite_crud.list_users_who_favorited(db, current_user.id)
    return {"users": [user_summary(u) for u in users]}


@router.post("")
def add_favorite(
    payload: FavoriteCreate,
    current_user: SessionUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Favorite another user. Repeating the call keeps a single edge but the
    target is notified every time.
    """
    if payload.user_id == current_user.id:
        raise HTTPException(status_code=400, detail="You cannot favorite yourself")

    if not user_crud.get_user(db, payload.user_id):
        raise HTTPException(status_code=404, detail="User not found")

    try:
        _, created = favorite_crud.add_favorite(db, current_user.id, payload.user_id)
        notification = notification_service.create_notification(
            db,
            user_id=payload.user_id,
            notification_type="favorite",
            title="New connection!",
            message=f"{current_user.name} added you to their favorites",
            link=f"/user/{current_user.id}",
        )
        db.commit()
    except Exception:
        db.rollback()
        raise

    notification_service.dispatch_email_for_notification(db, notification)
    logger.info("User %s favorited user %s (new=%s)", current_user.id, payload.user_id, created)
    return {"success": True, "created": created}


@router.delete("/{user_id}")
def remove_favorite(
    user_id: int,
    current_user: SessionUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    removed = favorite_crud.remove_favorite(db, current_user.id, user_id)
    db.commit()
    return {"success": True, "removed": removed}
