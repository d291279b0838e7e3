# backend/models/comment.py
import uuid

from sqlalchemy import Column, String, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from database import Base, utcnow

# A note left on exactly one project or achievement
class Comment(Base):
    __tablename__ = "comments"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    content = Column(String, nullable=False)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    project_id = Column(String(36), ForeignKey("projects.id", ondelete="CASCADE"), nullable=True, index=True)
    achievement_id = Column(String(36), ForeignKey("achievements.id", ondelete="CASCADE"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)

    # Author for the {id, name, avatar} projection; may be missing
    user = relationship("User", lazy="joined", uselist=False)

    __table_args__ = (
        CheckConstraint(
            "project_id IS NULL OR achievement_id IS NULL",
            name="ck_comment_single_target",
        ),
    )
