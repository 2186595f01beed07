from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, TIMESTAMP
from sqlalchemy.orm import relationship
from app.database import Base, utcnow

NOTIFICATION_TYPES = ("favorite", "message", "review", "skill_request", "request_update")


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(String(50), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    message = Column(String(500), nullable=False, default="")
    link = Column(String(255))
    is_read = Column(Boolean, default=False, nullable=False)
    created_at = Column(TIMESTAMP, default=utcnow, nullable=False)

    user = relationship("User")
