# app/api/__init__.py
# This file makes the api directory a Python package.

from . import activities
from . import auth
from . import favorite
from . import message
from . import notification
from . import profile
from . import review
from . import skill
from . import skill_request
from . import users

__all__ = [
    "activities",
    "auth",
    "favorite",
    "message",
    "notification",
    "profile",
    "review",
    "skill",
    "skill_request",
    "users",
]
