from sqlalchemy import Column, Integer, String, Text, Boolean, ForeignKey, TIMESTAMP
from sqlalchemy.orm import relationship
from app.database import Base, utcnow

SKILL_LEVELS = ("Beginner", "Intermediate", "Advanced", "Expert")


# app/models/skill.py
class Skill(Base):
    __tablename__ = "skills"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
        nullable=False
    )
    skill_name = Column(String(100), nullable=False, index=True)
    skill_category = Column(String(50), nullable=False)
    skill_level = Column(String(20), nullable=False)
    description = Column(Text)
    is_offering = Column(Boolean, default=True, nullable=False)
    created_at = Column(TIMESTAMP, default=utcnow, nullable=False)

    owner = relationship("User", back_populates="skills")
    requests = relationship("SkillRequest", back_populates="skill", cascade="all, delete-orphan")
