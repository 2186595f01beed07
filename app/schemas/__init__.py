# app/schemas/__init__.py

# Auth schemas
from .auth import SessionUser, SignupRequest, LoginRequest

# Profile schemas
from .user import ProfileUpdate

# Resource schemas
from .skill import SkillCreate
from .favorite import FavoriteCreate
from .message import MessageCreate
from .review import ReviewCreate
from .skill_request import SkillRequestCreate, SkillRequestStatusUpdate, UPDATABLE_STATUSES

__all__ = [
    "SessionUser",
    "SignupRequest",
    "LoginRequest",
    "ProfileUpdate",
    "SkillCreate",
    "FavoriteCreate",
    "MessageCreate",
    "ReviewCreate",
    "SkillRequestCreate",
    "SkillRequestStatusUpdate",
    "UPDATABLE_STATUSES",
]
