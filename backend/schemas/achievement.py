# backend/schemas/achievement.py

from typing import Optional

from pydantic import Field

from schemas.base import ORMBase, UTCDateTime


class AchievementCreate(ORMBase):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    icon: str = Field(min_length=1)
    date: UTCDateTime
    is_featured: bool = False


class AchievementUpdate(ORMBase):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    icon: Optional[str] = Field(None, min_length=1)
    date: Optional[UTCDateTime] = None
    is_featured: Optional[bool] = None


class AchievementOut(AchievementCreate):
    id: str
    likes: int = 0
    created_at: UTCDateTime
