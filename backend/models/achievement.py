# backend/models/achievement.py
import uuid

from sqlalchemy import Column, String, Boolean, Integer, DateTime, CheckConstraint
from database import Base, utcnow

# Certification or award; carries the same like counter as Project
class Achievement(Base):
    __tablename__ = "achievements"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String, nullable=False)
    description = Column(String, nullable=False)
    icon = Column(String, nullable=False)
    date = Column(DateTime(timezone=True), nullable=False)
    is_featured = Column(Boolean, nullable=False, default=False, index=True)

    likes = Column(Integer, CheckConstraint("likes >= 0"), nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
