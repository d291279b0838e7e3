# backend/schemas/comment.py

from typing import Optional

from pydantic import Field

from schemas.base import ORMBase, UTCDateTime
from schemas.like import TargetRef


# Request body for POST /api/comments; the author comes from the token
class CommentCreate(TargetRef):
    content: str = Field(min_length=1)


class CommentOut(ORMBase):
    id: str
    content: str
    user_id: str
    project_id: Optional[str] = None
    achievement_id: Optional[str] = None
    created_at: UTCDateTime


# Reduced author projection embedded in comment listings
class CommentAuthor(ORMBase):
    id: str
    name: str
    avatar: Optional[str] = None


class CommentWithUser(CommentOut):
    user: CommentAuthor
