from sqlalchemy import Column, Integer, String, Text, Float, Date, ForeignKey, TIMESTAMP, UniqueConstraint
from sqlalchemy.orm import relationship
from app.database import Base, utcnow


# ---------------- USER (AUTH + PROFILE TABLE) ----------------
class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(100), nullable=False)
    bio = Column(Text)
    occupation = Column(String(100))
    gender = Column(String(20))
    birth_date = Column(Date)
    location = Column(String(255))
    latitude = Column(Float)
    longitude = Column(Float)
    radius_km = Column(Integer, default=25)
    profile_image_url = Column(String(500))
    created_at = Column(TIMESTAMP, default=utcnow, nullable=False)
    updated_at = Column(TIMESTAMP, default=utcnow, onupdate=utcnow)
    last_login = Column(TIMESTAMP)

    skills = relationship(
        "Skill",
        back_populates="owner",
        cascade="all, delete-orphan",
        order_by="Skill.created_at.desc()",
    )
    interests = relationship(
        "Interest",
        secondary="user_interests",
        back_populates="users",
        order_by="Interest.name",
    )

    @property
    def offered_skills(self):
        return [skill for skill in self.skills if skill.is_offering]


# ---------------- INTEREST CATALOG ----------------
class Interest(Base):
    __tablename__ = "interests"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False, index=True)
    category = Column(String(50))

    users = relationship("User", secondary="user_interests", back_populates="interests")


class UserInterest(Base):
    __tablename__ = "user_interests"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    interest_id = Column(Integer, ForeignKey("interests.id", ondelete="CASCADE"), nullable=False, index=True)

    __table_args__ = (
        UniqueConstraint("user_id", "interest_id", name="uq_user_interests_pair"),
    )
