from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from app import models, schemas
from app.database import utcnow
from app.utils.geo import haversine_km
from app.utils.security import get_password_hash


def normalize_email(email: str) -> str:
    return email.strip().lower()


def get_user(db: Session, user_id: int) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.email == normalize_email(email)).first()


def create_user(db: Session, signup: schemas.SignupRequest) -> models.User:
    db_user = models.User(
        email=normalize_email(signup.email),
        password_hash=get_password_hash(signup.password),
        name=signup.name,
        occupation=signup.occupation or None,
        gender=signup.gender or None,
        birth_date=signup.birth_date,
    )
    db.add(db_user)
    db.flush()
    return db_user


def touch_last_login(db: Session, user: models.User) -> None:
    user.last_login = utcnow()
    db.flush()


def update_profile(db: Session, user: models.User, profile_update: schemas.ProfileUpdate) -> models.User:
    """Apply non-null fields; an explicit interests list replaces the current set."""
    update_data = profile_update.model_dump(exclude={"interests"}, exclude_none=True)
    for key, value in update_data.items():
        setattr(user, key, value)
    user.updated_at = utcnow()

    if profile_update.interests is not None:
        replace_interests(db, user, profile_update.interests)

    db.flush()
    return user


def replace_interests(db: Session, user: models.User, names: List[str]) -> List[models.Interest]:
    """Link the user to catalog interests by name; unknown names are skipped."""
    wanted = [name.strip() for name in names if name and name.strip()]
    matched = []
    if wanted:
        matched = db.query(models.Interest).filter(models.Interest.name.in_(wanted)).all()
    user.interests = matched
    return matched


def list_users(db: Session, *, exclude_user_id: int, limit: int) -> List[models.User]:
    """Other users in signup order."""
    return (
        db.query(models.User)
        .options(selectinload(models.User.skills))
        .filter(models.User.id != exclude_user_id)
        .order_by(models.User.id.asc())
        .limit(limit)
        .all()
    )


def list_other_users(db: Session, *, exclude_user_id: int, limit: int) -> List[models.User]:
    """Random sample of users other than the caller."""
    return (
        db.query(models.User)
        .options(selectinload(models.User.skills))
        .filter(models.User.id != exclude_user_id)
        .order_by(func.random())
        .limit(limit)
        .all()
    )


def list_users_within_radius(
    db: Session,
    *,
    origin: models.User,
    limit: int,
) -> List[Tuple[models.User, float]]:
    """Users with coordinates within origin.radius_km of the origin, nearest first."""
    radius_km = origin.radius_km or 25
    candidates = (
        db.query(models.User)
        .filter(
            models.User.id != origin.id,
            models.User.latitude.isnot(None),
            models.User.longitude.isnot(None),
        )
        .all()
    )

    in_range = []
    for candidate in candidates:
        distance = haversine_km(
            origin.latitude, origin.longitude, candidate.latitude, candidate.longitude
        )
        if distance <= radius_km:
            in_range.append((candidate, distance))

    in_range.sort(key=lambda pair: (pair[1], pair[0].id))
    return in_range[:limit]
