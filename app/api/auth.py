import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.crud import user as user_crud
from app.database import get_db
from app.schemas.auth import LoginRequest, SessionUser, SignupRequest
from app.utils.security import (
    clear_session_cookie,
    create_session_token,
    get_optional_user,
    set_session_cookie,
    verify_password,
)
from app.utils.serializers import iso

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


def _start_session(response: Response, identity: SessionUser) -> dict:
    set_session_cookie(response, create_session_token(identity))
    return {"success": True, "user": identity.model_dump()}


# ===== SIGNUP ENDPOINT =====

@router.post("/signup", status_code=status.HTTP_201_CREATED)
def signup(user_data: SignupRequest, response: Response, db: Session = Depends(get_db)):
    """Create an account and sign the new user in."""
    if user_crud.get_user_by_email(db, user_data.email):
        raise HTTPException(status_code=409, detail="User with this email already exists")

    try:
        new_user = user_crud.create_user(db, user_data)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="User with this email already exists")
    except Exception:
        db.rollback()
        logger.exception("Signup error")
        raise HTTPException(status_code=500, detail="Internal server error")

    logger.info("User %s signed up", new_user.id)
    identity = SessionUser(id=new_user.id, email=new_user.email, name=new_user.name)
    return _start_session(response, identity)


# ===== LOGIN ENDPOINT =====

@router.post("/login")
def login(credentials: LoginRequest, response: Response, db: Session = Depends(get_db)):
    """Verify credentials and set the session cookie"""
    user = user_crud.get_user_by_email(db, credentials.email)

    if not user or not verify_password(credentials.password, user.password_hash):
        raise HTTPException(status_code=401, detail="Invalid email or password")

    user_crud.touch_last_login(db, user)
    db.commit()

    identity = SessionUser(id=user.id, email=user.email, name=user.name)
    return _start_session(response, identity)


@router.post("/logout")
def logout(response: Response):
    clear_session_cookie(response)
    return {"success": True, "message": "Logged out successfully"}


@router.get("/me")
def me(
    current_user: Optional[SessionUser] = Depends(get_optional_user),
    db: Session = Depends(get_db)
):
    """Current identity, or ``{"user": null}`` when signed out."""
    if current_user is None:
        return {"user": None}

    user = user_crud.get_user(db, current_user.id)
    if user is None:
        return {"user": None}

    return {
        "user": {
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
        }
    }
