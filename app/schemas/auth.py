from datetime import date
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from .base import CamelModel

# ======================
# SESSION PRINCIPAL
# ======================

class SessionUser(BaseModel):
    """Identity carried by the session cookie and handed to route handlers."""
    id: int
    email: str
    name: str


# ======================
# USER AUTHENTICATION SCHEMAS
# ======================

class SignupRequest(CamelModel):
    email: EmailStr
    # Bcrypt limit is 72 bytes; max_length=72 prevents the "password too long" crash
    password: str = Field(..., min_length=6, max_length=72)
    name: str = Field(..., min_length=1, max_length=100)
    occupation: Optional[str] = Field(None, max_length=100)
    gender: Optional[str] = Field(None, max_length=20)
    birth_date: Optional[date] = None


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)
