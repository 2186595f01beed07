from datetime import UTC, datetime, timedelta
from typing import Optional

from fastapi import Depends, HTTPException, Response, status
from fastapi.security import APIKeyCookie
from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import ValidationError

from app.config import settings
from app.schemas.auth import SessionUser


# ==========================
# AUTH CONFIG
# ==========================

cookie_scheme = APIKeyCookie(name=settings.SESSION_COOKIE_NAME, auto_error=False)

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)

SESSION_MAX_AGE_SECONDS = settings.SESSION_EXPIRE_DAYS * 24 * 60 * 60


# ==========================
# PASSWORD UTILS
# ==========================

def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return pwd_context.verify(_truncate_for_bcrypt(plain_password), hashed_password)
    except ValueError:
        # Unknown or corrupt hash format
        return False


def get_password_hash(password: str) -> str:
    return pwd_context.hash(_truncate_for_bcrypt(password))


def _truncate_for_bcrypt(password: str) -> str:
    """
    Bcrypt max input length = 72 bytes
    Truncate safely to avoid crash
    """
    password_bytes = password.encode("utf-8")
    if len(password_bytes) > 72:
        password = password_bytes[:72].decode("utf-8", errors="ignore")
    return password


# ==========================
# SESSION TOKEN
# ==========================

def create_session_token(identity: SessionUser, expires_delta: Optional[timedelta] = None) -> str:
    """Sign a session token carrying the user's id, email and name."""
    if expires_delta is None:
        expires_delta = timedelta(days=settings.SESSION_EXPIRE_DAYS)

    to_encode = {
        "sub": str(identity.id),
        "email": identity.email,
        "name": identity.name,
        "exp": datetime.now(UTC) + expires_delta,
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def verify_session_token(token: Optional[str]) -> Optional[SessionUser]:
    """
    Return the identity in the token, or None when it is missing, malformed,
    badly signed or expired. Callers never learn which.
    """
    if not token:
        return None
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        return SessionUser(
            id=int(payload.get("sub")),
            email=payload.get("email"),
            name=payload.get("name"),
        )
    except (JWTError, ValidationError, TypeError, ValueError):
        return None


# ==========================
# COOKIE HELPERS
# ==========================

def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=SESSION_MAX_AGE_SECONDS,
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
        path="/",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
    )


# ==========================
# AUTH DEPENDENCIES
# ==========================

def get_optional_user(token: Optional[str] = Depends(cookie_scheme)) -> Optional[SessionUser]:
    return verify_session_token(token)


def get_current_user(token: Optional[str] = Depends(cookie_scheme)) -> SessionUser:
    user = verify_session_token(token)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )
    return user
