"""Pytest bootstrap: test settings, project imports and database fixtures."""

import os
import sys
from pathlib import Path
from types import SimpleNamespace
from typing import Optional

# Settings are read at import time, so configure them before `import app`
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("EMAIL_NOTIFICATIONS_ENABLED", "false")

# Ensure project root is on sys.path so `import app` works
PROJECT_ROOT = Path(__file__).resolve().parents[1]
project_root_str = str(PROJECT_ROOT)
if project_root_str not in sys.path:
    sys.path.insert(0, project_root_str)

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app import models
from app.database import Base
from app.schemas.auth import SessionUser
from app.utils.security import get_password_hash


@pytest.fixture
def db_session():
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine, autoflush=False)
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


@pytest.fixture
def make_user(db_session):
    counter = {"n": 0}

    def _make_user(name: Optional[str] = None, email: Optional[str] = None, password: str = "secret123", **fields) -> models.User:
        counter["n"] += 1
        n = counter["n"]
        user = models.User(
            name=name or f"User {n}",
            email=email or f"user{n}@skillswap.com",
            password_hash=get_password_hash(password),
            **fields,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def make_skill(db_session):
    def _make_skill(owner: models.User, skill_name: str = "Guitar", is_offering: bool = True, **fields) -> models.Skill:
        skill = models.Skill(
            user_id=owner.id,
            skill_name=skill_name,
            skill_category=fields.pop("skill_category", "Music"),
            skill_level=fields.pop("skill_level", "Intermediate"),
            is_offering=is_offering,
            **fields,
        )
        db_session.add(skill)
        db_session.commit()
        db_session.refresh(skill)
        return skill

    return _make_skill


def principal(user: models.User) -> SessionUser:
    """Session identity for calling route functions directly."""
    return SessionUser(id=user.id, email=user.email, name=user.name)


@pytest.fixture
def as_principal():
    return principal


@pytest.fixture
def captured_emails(monkeypatch):
    """Enable notification email, run workers inline and record what would be sent."""
    from app.services import notification_service

    sent = []

    class InlineThread:
        def __init__(self, target=None, args=(), kwargs=None, daemon=None):
            self._target = target
            self._args = args
            self._kwargs = kwargs or {}

        def start(self):
            self._target(*self._args, **self._kwargs)

    def fake_send_email(*, to_email, subject, body_text, body_html=None):
        sent.append({"to": to_email, "subject": subject, "body": body_text})
        return True

    monkeypatch.setattr(notification_service, "threading", SimpleNamespace(Thread=InlineThread))
    monkeypatch.setattr(notification_service, "is_email_enabled", lambda: True)
    monkeypatch.setattr(notification_service, "send_email", fake_send_email)
    return sent
