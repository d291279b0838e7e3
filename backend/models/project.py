# backend/models/project.py
import uuid

from sqlalchemy import Column, String, Boolean, Integer, DateTime, JSON, CheckConstraint
from database import Base, utcnow

# Model Project
# A portfolio entry. `likes` is a cached count of rows in `likes`
# pointing at this project and is only changed by the like toggle.
class Project(Base):
    __tablename__ = "projects"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String, nullable=False)
    description = Column(String, nullable=False)
    full_description = Column(String, nullable=True)
    category = Column(String, nullable=False, index=True)

    tags = Column(JSON, nullable=False, default=list)
    technologies = Column(JSON, nullable=False, default=list)

    # Media and external links
    image_url = Column(String, nullable=True)
    video_url = Column(String, nullable=True)
    demo_url = Column(String, nullable=True)
    github_url = Column(String, nullable=True)

    is_published = Column(Boolean, nullable=False, default=False, index=True)
    is_featured = Column(Boolean, nullable=False, default=False, index=True)

    likes = Column(Integer, CheckConstraint("likes >= 0"), nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
