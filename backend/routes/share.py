# backend/routes/share.py
from fastapi import APIRouter, Depends, HTTPException

from config import settings
from models.like import PROJECT
from schemas.share import ShareRequest, ShareResponse
from schemas.user import CurrentUser
from storage.base import InvalidTargetError, LikeTarget, Storage
from storage.factory import get_storage
from utils.linkedin import build_share_url
from utils.tokenJWT import get_current_user

router = APIRouter(prefix="/api/share", tags=["Share"])


@router.post("/linkedin", response_model=ShareResponse)
def share_on_linkedin(
    payload: ShareRequest,
    _: CurrentUser = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    try:
        target = LikeTarget.from_refs(payload.project_id, payload.achievement_id)
    except InvalidTargetError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if not storage.target_exists(target):
        raise HTTPException(status_code=404, detail=f"{target.target_type.capitalize()} not found")

    section = "projects" if target.target_type == PROJECT else "achievements"
    page_url = f"{settings.FRONTEND_URL.rstrip('/')}/{section}/{target.target_id}"
    return ShareResponse(share_url=build_share_url(page_url))
