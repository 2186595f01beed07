import pytest
from fastapi import HTTPException
from pydantic import ValidationError

from app.api.skill import add_skill, delete_skill, get_my_skills
from app.models.skill import Skill
from app.schemas.skill import SkillCreate


def test_add_skill_canonicalizes_level(db_session, make_user, as_principal):
    user = make_user()

    result = add_skill(
        SkillCreate(skillName="Guitar", skillCategory="Music", skillLevel="advanced"),
        current_user=as_principal(user),
        db=db_session,
    )

    assert result["success"] is True
    assert result["skill"]["skillLevel"] == "Advanced"
    assert result["skill"]["isOffering"] is True
    assert db_session.query(Skill).filter(Skill.user_id == user.id).count() == 1


def test_skill_level_must_be_known():
    with pytest.raises(ValidationError):
        SkillCreate(skillName="Guitar", skillCategory="Music", skillLevel="Guru")


def test_skill_requires_name_category_and_level():
    with pytest.raises(ValidationError):
        SkillCreate(skillName="Guitar")


def test_list_skills_newest_first_and_only_own(db_session, make_user, make_skill, as_principal):
    user = make_user()
    other = make_user()
    first = make_skill(user, "Guitar")
    second = make_skill(user, "Piano")
    make_skill(other, "Drums")

    result = get_my_skills(current_user=as_principal(user), db=db_session)

    assert [s["id"] for s in result["skills"]] == [second.id, first.id]


def test_owner_can_delete_skill(db_session, make_user, make_skill, as_principal):
    user = make_user()
    skill = make_skill(user)

    assert delete_skill(skill.id, current_user=as_principal(user), db=db_session)["success"] is True
    assert db_session.get(Skill, skill.id) is None


def test_non_owner_delete_is_forbidden_and_row_remains(db_session, make_user, make_skill, as_principal):
    owner = make_user()
    intruder = make_user()
    skill = make_skill(owner)

    with pytest.raises(HTTPException) as exc:
        delete_skill(skill.id, current_user=as_principal(intruder), db=db_session)

    assert exc.value.status_code == 403
    assert db_session.get(Skill, skill.id) is not None


def test_delete_missing_skill_is_404(db_session, make_user, as_principal):
    user = make_user()
    with pytest.raises(HTTPException) as exc:
        delete_skill(12345, current_user=as_principal(user), db=db_session)
    assert exc.value.status_code == 404
