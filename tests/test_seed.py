from app.models.skill import Skill
from app.models.user import Interest, User
from app.scripts.seed import DEMO_PASSWORD, DEMO_USERS, INTEREST_CATALOG, seed
from app.utils.security import verify_password


def test_seed_creates_demo_users_with_skills(db_session):
    created = seed(db_session)
    db_session.commit()

    assert len(created) == len(DEMO_USERS) == 4
    alice = db_session.query(User).filter(User.email == "alice@skillswap.com").one()
    assert verify_password(DEMO_PASSWORD, alice.password_hash)
    assert {i.name for i in alice.interests} == {"Web Development", "Graphic Design"}
    assert [s.skill_name for s in alice.offered_skills] == ["Web Development"]


def test_seed_is_idempotent(db_session):
    seed(db_session)
    db_session.commit()
    second = seed(db_session)
    db_session.commit()

    assert second == []
    assert db_session.query(User).count() == 4
    assert db_session.query(Skill).count() == 8
    assert db_session.query(Interest).count() == sum(len(v) for v in INTEREST_CATALOG.values())
