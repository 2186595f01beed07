import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.crud import skill as skill_crud
from app.database import get_db
from app.schemas.auth import SessionUser
from app.schemas.skill import SkillCreate
from app.utils.security import get_current_user
from app.utils.serializers import skill_to_dict

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/skills", tags=["Skills"])


# ======================
# GET: Caller's skills
# ======================
@router.get("")
def get_my_skills(
    current_user: SessionUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    skills = skill_crud.list_user_skills(db, current_user.id)
    return {"skills": [skill_to_dict(s) for s in skills]}


# ======================
# POST: Add skill
# ======================
@router.post("", status_code=status.HTTP_201_CREATED)
def add_skill(
    skill: SkillCreate,
    current_user: SessionUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    new_skill = skill_crud.create_skill(db, current_user.id, skill)
    db.commit()
    db.refresh(new_skill)

    logger.info("User %s added skill %s", current_user.id, new_skill.id)
    return {"success": True, "skill": skill_to_dict(new_skill)}


# ======================
# DELETE: Remove own skill
# ======================
@router.delete("/{skill_id}")
def delete_skill(
    skill_id: int,
    current_user: SessionUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    skill = skill_crud.get_skill(db, skill_id)
    if not skill:
        raise HTTPException(status_code=404, detail="Skill not found")
    if skill.user_id != current_user.id:
        raise HTTPException(status_code=403, detail="You can only delete your own skills")

    skill_crud.delete_skill(db, skill)
    db.commit()
    return {"success": True, "message": "Skill deleted"}
