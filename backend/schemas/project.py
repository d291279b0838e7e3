# backend/schemas/project.py

from typing import List, Optional

from pydantic import Field

from schemas.base import ORMBase, UTCDateTime


# Shared base attributes for project entities
class ProjectBase(ORMBase):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    full_description: Optional[str] = None
    category: str = Field(min_length=1)
    tags: List[str] = []
    technologies: List[str] = []
    image_url: Optional[str] = None
    video_url: Optional[str] = None
    demo_url: Optional[str] = None
    github_url: Optional[str] = None
    is_published: bool = False
    is_featured: bool = False


# Schema for creating a new project
class ProjectCreate(ProjectBase):
    # likes/timestamps are owned by the store, media URLs may come from uploads
    pass


# Schema for partial project updates - all fields optional
class ProjectUpdate(ORMBase):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    full_description: Optional[str] = None
    category: Optional[str] = Field(None, min_length=1)
    tags: Optional[List[str]] = None
    technologies: Optional[List[str]] = None
    image_url: Optional[str] = None
    video_url: Optional[str] = None
    demo_url: Optional[str] = None
    github_url: Optional[str] = None
    is_published: Optional[bool] = None
    is_featured: Optional[bool] = None


# Full project representation
class ProjectOut(ProjectBase):
    id: str
    likes: int = 0
    created_at: UTCDateTime
    updated_at: UTCDateTime
