# backend/models/like.py
import uuid

from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint, Index
from database import Base, utcnow

PROJECT = "project"
ACHIEVEMENT = "achievement"

# "User U likes target T". project_id/achievement_id keep the foreign keys,
# target_type/target_id repeat the non-null one so the unique constraint
# below works (NULLs never collide in a UNIQUE index).
class Like(Base):
    __tablename__ = "likes"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    project_id = Column(String(36), ForeignKey("projects.id", ondelete="CASCADE"), nullable=True)
    achievement_id = Column(String(36), ForeignKey("achievements.id", ondelete="CASCADE"), nullable=True)

    target_type = Column(String(20), nullable=False)
    target_id = Column(String(36), nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (
        # One like per user and target
        UniqueConstraint("user_id", "target_type", "target_id", name="uq_like_user_target"),
        Index("ix_likes_target", "target_type", "target_id"),
    )
