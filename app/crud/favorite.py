from typing import List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app import models


def get_favorite(db: Session, user_id: int, favorited_user_id: int) -> Optional[models.Favorite]:
    return db.query(models.Favorite).filter(
        models.Favorite.user_id == user_id,
        models.Favorite.favorited_user_id == favorited_user_id,
    ).first()


def is_favorite(db: Session, user_id: int, favorited_user_id: int) -> bool:
    return get_favorite(db, user_id, favorited_user_id) is not None


def add_favorite(db: Session, user_id: int, favorited_user_id: int) -> Tuple[models.Favorite, bool]:
    """Insert the edge unless it exists. Returns (favorite, created)."""
    existing = get_favorite(db, user_id, favorited_user_id)
    if existing:
        return existing, False

    try:
        with db.begin_nested():
            favorite = models.Favorite(user_id=user_id, favorited_user_id=favorited_user_id)
            db.add(favorite)
    except IntegrityError:
        # Concurrent insert of the same edge won the unique constraint
        return get_favorite(db, user_id, favorited_user_id), False
    return favorite, True


def remove_favorite(db: Session, user_id: int, favorited_user_id: int) -> bool:
    favorite = get_favorite(db, user_id, favorited_user_id)
    if not favorite:
        return False
    db.delete(favorite)
    db.flush()
    return True


def list_favorited_users(db: Session, user_id: int) -> List[models.User]:
    """Users the given user favorited, most recent first."""
    rows = (
        db.query(models.Favorite)
        .filter(models.Favorite.user_id == user_id)
        .order_by(models.Favorite.created_at.desc(), models.Favorite.id.desc())
        .all()
    )
    return [row.favorited_user for row in rows]


def list_users_who_favorited(db: Session, user_id: int) -> List[models.User]:
    rows = (
        db.query(models.Favorite)
        .filter(models.Favorite.favorited_user_id == user_id)
        .order_by(models.Favorite.created_at.desc(), models.Favorite.id.desc())
        .all()
    )
    return [row.user for row in rows]
