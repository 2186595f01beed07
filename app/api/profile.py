from fastapi import APIRouter, Depends

from app.schemas.auth import SessionUser
from app.utils.security import get_current_user

router = APIRouter(prefix="/api/profile", tags=["Users"])


@router.get("/viewers")
def get_profile_viewers(current_user: SessionUser = Depends(get_current_user)):
    # Profile views are not recorded yet
    return {"viewers": []}
