# backend/routes/achievements.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from schemas.achievement import AchievementCreate, AchievementOut, AchievementUpdate
from schemas.user import CurrentUser
from storage.base import Storage
from storage.factory import get_storage
from utils.tokenJWT import require_admin

router = APIRouter(prefix="/api/achievements", tags=["Achievements"])


@router.get("", response_model=List[AchievementOut])
def list_achievements(
    featured: Optional[bool] = Query(None),
    limit: Optional[int] = Query(None, ge=0),
    offset: Optional[int] = Query(None, ge=0),
    storage: Storage = Depends(get_storage),
):
    return storage.get_achievements(featured, limit, offset)


@router.get("/{achievement_id}", response_model=AchievementOut)
def get_achievement(achievement_id: str, storage: Storage = Depends(get_storage)):
    achievement = storage.get_achievement(achievement_id)
    if not achievement:
        raise HTTPException(status_code=404, detail="Achievement not found")
    return achievement


@router.post("", response_model=AchievementOut)
def create_achievement(
    payload: AchievementCreate,
    _: CurrentUser = Depends(require_admin),
    storage: Storage = Depends(get_storage),
):
    return storage.create_achievement(payload)


@router.patch("/{achievement_id}", response_model=AchievementOut)
def update_achievement(
    achievement_id: str,
    payload: AchievementUpdate,
    _: CurrentUser = Depends(require_admin),
    storage: Storage = Depends(get_storage),
):
    updates = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None}
    achievement = storage.update_achievement(achievement_id, updates)
    if not achievement:
        raise HTTPException(status_code=404, detail="Achievement not found")
    return achievement


@router.delete("/{achievement_id}")
def delete_achievement(
    achievement_id: str,
    _: CurrentUser = Depends(require_admin),
    storage: Storage = Depends(get_storage),
):
    if not storage.delete_achievement(achievement_id):
        raise HTTPException(status_code=404, detail="Achievement not found")
    return {"message": "Achievement deleted successfully"}
