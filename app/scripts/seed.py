"""
Populate a development database with the interest catalog and demo users.

Run with:  python -m app.scripts.seed

Safe to re-run: interests are matched by name and users by email.
"""

import sys
from typing import Dict, List

from sqlalchemy.orm import Session

from app import models
from app.database import Base, SessionLocal, engine
from app.utils.security import get_password_hash

DEMO_PASSWORD = "SecurePass123!"

INTEREST_CATALOG = {
    "Technology": ["Web Development", "Data Science", "Mobile Apps"],
    "Creative": ["Photography", "Graphic Design", "Music"],
    "Lifestyle": ["Cooking", "Yoga", "Fitness", "Nutrition"],
    "Languages": ["Spanish", "Korean", "French"],
}

DEMO_USERS: List[Dict] = [
    {
        "email": "alice@skillswap.com",
        "name": "Alice Johnson",
        "bio": "Full-stack developer passionate about teaching web development and learning graphic design.",
        "location": "San Francisco, CA",
        "occupation": "Software Engineer",
        "gender": "female",
        "latitude": 37.7749,
        "longitude": -122.4194,
        "radius_km": 25,
        "interests": ["Web Development", "Graphic Design"],
        "skills": [
            ("Web Development", "Technology", "Expert", True),
            ("Graphic Design", "Creative", "Beginner", False),
        ],
    },
    {
        "email": "bob@skillswap.com",
        "name": "Bob Martinez",
        "bio": "Professional photographer looking to trade photography lessons for cooking classes.",
        "location": "Austin, TX",
        "occupation": "Photographer",
        "gender": "male",
        "latitude": 30.2672,
        "longitude": -97.7431,
        "radius_km": 20,
        "interests": ["Photography", "Cooking"],
        "skills": [
            ("Photography", "Creative", "Expert", True),
            ("Cooking", "Lifestyle", "Beginner", False),
        ],
    },
    {
        "email": "carol@skillswap.com",
        "name": "Carol Chen",
        "bio": "Yoga instructor and wellness coach. Open to skill exchanges in fitness and nutrition.",
        "location": "Seattle, WA",
        "occupation": "Yoga Instructor",
        "gender": "female",
        "latitude": 47.6062,
        "longitude": -122.3321,
        "radius_km": 30,
        "interests": ["Yoga", "Fitness", "Nutrition"],
        "skills": [
            ("Yoga", "Lifestyle", "Expert", True),
            ("Nutrition", "Lifestyle", "Intermediate", True),
        ],
    },
    {
        "email": "david@skillswap.com",
        "name": "David Kim",
        "bio": "Marketing specialist and language enthusiast. I teach Korean and want to learn Spanish.",
        "location": "New York, NY",
        "occupation": "Marketing Manager",
        "gender": "male",
        "latitude": 40.7128,
        "longitude": -74.006,
        "radius_km": 15,
        "interests": ["Korean", "Spanish"],
        "skills": [
            ("Korean", "Languages", "Expert", True),
            ("Spanish", "Languages", "Beginner", False),
        ],
    },
]


def seed_interests(db: Session) -> Dict[str, models.Interest]:
    existing = {i.name: i for i in db.query(models.Interest).all()}
    for category, names in INTEREST_CATALOG.items():
        for name in names:
            if name not in existing:
                interest = models.Interest(name=name, category=category)
                db.add(interest)
                existing[name] = interest
    db.flush()
    return existing


def seed_users(db: Session, interests: Dict[str, models.Interest]) -> List[models.User]:
    created = []
    password_hash = get_password_hash(DEMO_PASSWORD)

    for data in DEMO_USERS:
        if db.query(models.User).filter(models.User.email == data["email"]).first():
            continue

        user = models.User(
            email=data["email"],
            password_hash=password_hash,
            name=data["name"],
            bio=data["bio"],
            location=data["location"],
            occupation=data["occupation"],
            gender=data["gender"],
            latitude=data["latitude"],
            longitude=data["longitude"],
            radius_km=data["radius_km"],
        )
        user.interests = [interests[name] for name in data["interests"]]
        db.add(user)
        db.flush()

        for skill_name, category, level, is_offering in data["skills"]:
            db.add(models.Skill(
                user_id=user.id,
                skill_name=skill_name,
                skill_category=category,
                skill_level=level,
                is_offering=is_offering,
            ))
        created.append(user)

    db.flush()
    return created


def seed(db: Session) -> List[models.User]:
    """Seed inside the given session; the caller commits."""
    interests = seed_interests(db)
    return seed_users(db, interests)


def main() -> int:
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        created = seed(db)
        db.commit()
    except Exception as exc:
        db.rollback()
        print(f"Seed failed: {exc}", file=sys.stderr)
        return 1
    finally:
        db.close()

    for user in created:
        print(f"Created user: {user.name} ({user.email})")
    print(f"Seed complete. Demo password for every user: {DEMO_PASSWORD}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
