# backend/routes/admin.py
from fastapi import APIRouter, Depends

from schemas.stats import AdminStats
from schemas.user import CurrentUser
from storage.base import Storage
from storage.factory import get_storage
from utils.tokenJWT import require_admin

router = APIRouter(prefix="/api/admin", tags=["Admin"])

RECENT_COMMENTS = 5
POPULAR_PROJECTS = 5


# Dashboard summary (Admin only)
@router.get("/stats", response_model=AdminStats)
def get_stats(
    _: CurrentUser = Depends(require_admin),
    storage: Storage = Depends(get_storage),
):
    projects = storage.get_projects()
    achievements = storage.get_achievements()
    comments = storage.get_comments()
    published = sum(1 for p in projects if p.is_published)

    total_likes = sum(p.likes for p in projects) + sum(a.likes for a in achievements)
    popular = sorted(projects, key=lambda p: p.likes, reverse=True)[:POPULAR_PROJECTS]

    return AdminStats(
        total_projects=len(projects),
        published_projects=published,
        draft_projects=len(projects) - published,
        total_achievements=len(achievements),
        total_tools=len(storage.get_tools()),
        total_likes=total_likes,
        total_comments=len(comments),
        recent_comments=comments[:RECENT_COMMENTS],
        popular_projects=popular,
    )
