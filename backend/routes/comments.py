# backend/routes/comments.py
import logging
from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query

from schemas.comment import CommentCreate, CommentOut, CommentWithUser
from schemas.user import CurrentUser
from storage.base import InvalidTargetError, NotFoundError, Storage
from storage.factory import get_storage
from utils.notifications import NEW_COMMENT, ConnectionManager, get_notifier
from utils.tokenJWT import get_current_user, require_admin

router = APIRouter(prefix="/api/comments", tags=["Comments"])
logger = logging.getLogger(__name__)


@router.get("", response_model=List[CommentWithUser])
def list_comments(
    project_id: Optional[str] = Query(None, alias="projectId"),
    achievement_id: Optional[str] = Query(None, alias="achievementId"),
    storage: Storage = Depends(get_storage),
):
    return storage.get_comments(project_id or None, achievement_id or None)


@router.post("", response_model=CommentOut)
def create_comment(
    payload: CommentCreate,
    background_tasks: BackgroundTasks,
    current_user: CurrentUser = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
    notifier: ConnectionManager = Depends(get_notifier),
):
    try:
        comment = storage.create_comment(current_user.id, payload)
    except InvalidTargetError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    logger.info("Comment %s added by user %s", comment.id, current_user.id)

    # Pushed to open dashboards after the response is sent
    background_tasks.add_task(
        notifier.broadcast,
        NEW_COMMENT,
        {
            "comment": comment.model_dump(mode="json", by_alias=True),
            "projectId": comment.project_id,
            "achievementId": comment.achievement_id,
        },
    )
    return comment


@router.delete("/{comment_id}")
def delete_comment(
    comment_id: str,
    _: CurrentUser = Depends(require_admin),
    storage: Storage = Depends(get_storage),
):
    if not storage.delete_comment(comment_id):
        raise HTTPException(status_code=404, detail="Comment not found")
    return {"message": "Comment deleted successfully"}
