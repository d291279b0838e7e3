# backend/routes/likes.py
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from schemas.like import LikeOut, LikeToggleRequest, ToggleResult
from schemas.user import CurrentUser
from storage.base import InvalidTargetError, LikeTarget, NotFoundError, Storage
from storage.factory import get_storage
from utils.tokenJWT import get_current_user

router = APIRouter(prefix="/api/likes", tags=["Likes"])
logger = logging.getLogger(__name__)


# Like or unlike a project/achievement; returns the new state and stored counter
@router.post("/toggle", response_model=ToggleResult)
def toggle_like(
    payload: LikeToggleRequest,
    current_user: CurrentUser = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    try:
        target = LikeTarget.from_refs(payload.project_id, payload.achievement_id)
        result = storage.toggle_like(current_user.id, target)
    except InvalidTargetError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    logger.debug(
        "User %s %s %s %s (count=%d)",
        current_user.id,
        "liked" if result.liked else "unliked",
        target.target_type,
        target.target_id,
        result.count,
    )
    return result


@router.get("/user", response_model=List[LikeOut])
def get_user_likes(
    current_user: CurrentUser = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    return storage.get_user_likes(current_user.id)
