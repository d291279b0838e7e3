# backend/schemas/stats.py
from typing import List

from schemas.base import ORMBase
from schemas.comment import CommentWithUser
from schemas.project import ProjectOut


# Dashboard summary for GET /api/admin/stats
class AdminStats(ORMBase):
    total_projects: int
    published_projects: int
    draft_projects: int
    total_achievements: int
    total_tools: int
    total_likes: int
    total_comments: int
    recent_comments: List[CommentWithUser]
    popular_projects: List[ProjectOut]
