# app/models/__init__.py
# Import models in dependency order
from .user import User, Interest, UserInterest
from .skill import Skill, SKILL_LEVELS
from .skill_request import SkillRequest
from .favorite import Favorite
from .message import Message
from .notification import Notification, NOTIFICATION_TYPES
from .review import Review

__all__ = [
    "User",
    "Interest",
    "UserInterest",
    "Skill",
    "SKILL_LEVELS",
    "SkillRequest",
    "Favorite",
    "Message",
    "Notification",
    "NOTIFICATION_TYPES",
    "Review",
]
