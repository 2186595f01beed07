from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app import models
from app.config import settings
from app.crud import favorite as favorite_crud
from app.crud import user as user_crud
from app.database import get_db
from app.schemas.auth import SessionUser
from app.schemas.user import ProfileUpdate
from app.utils.security import get_current_user
from app.utils.serializers import interest_to_dict, iso, skill_to_dict, user_summary

router = APIRouter(prefix="/api/users", tags=["Users"])
profile_router = APIRouter(prefix="/api/user", tags=["Users"])


def profile_to_dict(user: models.User) -> Dict[str, Any]:
    return {
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "bio": user.bio,
        "occupation": user.occupation,
        "gender": user.gender,
        "birthDate": iso(user.birth_date),
        "location": user.location,
        "latitude": user.latitude,
        "longitude": user.longitude,
        "radiusKm": user.radius_km,
        "profileImageUrl": user.profile_image_url,
        "createdAt": iso(user.created_at),
        "interests": [interest_to_dict(i) for i in user.interests],
        "skills": [skill_to_dict(s) for s in user.skills],
    }


def _card_with_skills(user: models.User) -> Dict[str, Any]:
    data = user_summary(user)
    data["skills"] = [skill_to_dict(s) for s in user.skills]
    return data


# ======================
# OWN PROFILE
# ======================
@profile_router.get("/profile")
def get_my_profile(
    current_user: SessionUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    user = user_crud.get_user(db, current_user.id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return {"user": profile_to_dict(user)}


@profile_router.put("/profile")
def update_my_profile(
    profile_update: ProfileUpdate,
    current_user: SessionUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Partial update; only fields present in the body change."""
    user = user_crud.get_user(db, current_user.id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    user_crud.update_profile(db, user, profile_update)
    db.commit()
    db.refresh(user)
    return {"success": True, "user": profile_to_dict(user)}


# ======================
# BROWSE
# ======================
@router.get("/all")
def all_users(
    current_user: SessionUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Other users in signup order, each with the skills they offer."""
    users = user_crud.list_users(
        db, exclude_user_id=current_user.id, limit=settings.EXPLORE_PAGE_SIZE
    )
    results = []
    for user in users:
        data = user_summary(user)
        data["skills"] = [skill_to_dict(s) for s in user.offered_skills]
        results.append(data)
    return {"users": results}


@router.get("/explore")
def explore_users(
    current_user: SessionUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    users = user_crud.list_other_users(
        db, exclude_user_id=current_user.id, limit=settings.EXPLORE_PAGE_SIZE
    )
    return {"users": [_card_with_skills(u) for u in users]}


@router.get("/nearby")
def nearby_users(
    current_user: SessionUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Random sample of other users. With NEARBY_GEO_FILTER enabled and a
    located caller, users within the caller's radius instead, nearest first.
    """
    me = user_crud.get_user(db, current_user.id)
    if not me:
        return {"users": []}

    if settings.NEARBY_GEO_FILTER and me.latitude is not None and me.longitude is not None:
        results = []
        for user, distance in user_crud.list_users_within_radius(
            db, origin=me, limit=settings.NEARBY_PAGE_SIZE
        ):
            data = _card_with_skills(user)
            data["distanceKm"] = round(distance, 1)
            results.append(data)
        return {"users": results}

    users = user_crud.list_other_users(
        db, exclude_user_id=me.id, limit=settings.NEARBY_PAGE_SIZE
    )
    return {"users": [_card_with_skills(u) for u in users]}


@router.get("/{user_id}")
def get_user_profile(
    user_id: int,
    current_user: SessionUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    user = user_crud.get_user(db, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    data = user_summary(user)
    data.update({
        "gender": user.gender,
        "createdAt": iso(user.created_at),
        "interests": [interest_to_dict(i) for i in user.interests],
        "skills": [skill_to_dict(s) for s in user.skills],
        "isFavorite": favorite_crud.is_favorite(db, current_user.id, user.id),
    })
    return {"user": data}
