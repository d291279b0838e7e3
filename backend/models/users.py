# backend/models/users.py
import uuid

from sqlalchemy import Column, String, Boolean, DateTime, JSON
from database import Base, utcnow

# Represents an account; exactly one row is expected to carry is_admin=True
class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    name = Column(String, nullable=False)

    # Public profile shown on the portfolio landing page
    avatar = Column(String, nullable=True)
    about_photo = Column(String, nullable=True)
    about_text = Column(String, nullable=True)
    about_description = Column(String, nullable=True)
    hero_subtitle = Column(String, nullable=True)
    skills = Column(JSON, nullable=False, default=list)

    is_admin = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
