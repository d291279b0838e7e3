# backend/schemas/like.py

from typing import Optional

from pydantic import field_validator

from schemas.base import ORMBase, UTCDateTime


# Reference to a project or an achievement; "" counts as absent
class TargetRef(ORMBase):
    project_id: Optional[str] = None
    achievement_id: Optional[str] = None

    @field_validator("project_id", "achievement_id", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


# Request body for POST /api/likes/toggle
class LikeToggleRequest(TargetRef):
    pass


class LikeOut(ORMBase):
    id: str
    user_id: str
    project_id: Optional[str] = None
    achievement_id: Optional[str] = None
    created_at: UTCDateTime


class ToggleResult(ORMBase):
    liked: bool
    count: int
