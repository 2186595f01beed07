from typing import List, Optional

from sqlalchemy.orm import Session

from app import models, schemas


def create_skill(db: Session, user_id: int, skill: schemas.SkillCreate) -> models.Skill:
    new_skill = models.Skill(
        user_id=user_id,
        skill_name=skill.skill_name,
        skill_category=skill.skill_category,
        skill_level=skill.skill_level,
        description=skill.description or None,
        is_offering=skill.is_offering,
    )
    db.add(new_skill)
    db.flush()
    return new_skill


def get_skill(db: Session, skill_id: int) -> Optional[models.Skill]:
    return db.query(models.Skill).filter(models.Skill.id == skill_id).first()


def list_user_skills(db: Session, user_id: int) -> List[models.Skill]:
    return (
        db.query(models.Skill)
        .filter(models.Skill.user_id == user_id)
        .order_by(models.Skill.created_at.desc(), models.Skill.id.desc())
        .all()
    )


def delete_skill(db: Session, skill: models.Skill) -> None:
    db.delete(skill)
    db.flush()
