# backend/schemas/tool.py

from typing import Optional

from pydantic import Field

from schemas.base import ORMBase, UTCDateTime


class ToolCreate(ORMBase):
    name: str = Field(min_length=1)
    icon_url: Optional[str] = None
    category: Optional[str] = None
    website: Optional[str] = None
    is_featured: bool = False
    order: int = 0


class ToolUpdate(ORMBase):
    name: Optional[str] = Field(None, min_length=1)
    icon_url: Optional[str] = None
    category: Optional[str] = None
    website: Optional[str] = None
    is_featured: Optional[bool] = None
    order: Optional[int] = None


class ToolOut(ToolCreate):
    id: str
    created_at: UTCDateTime
