# backend/models/tool.py
import uuid

from sqlalchemy import Column, String, Boolean, Integer, DateTime
from database import Base, utcnow

# Technology badge shown in the tools carousel
class Tool(Base):
    __tablename__ = "tools"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False)
    icon_url = Column(String, nullable=True)
    category = Column(String, nullable=True)
    website = Column(String, nullable=True)
    is_featured = Column(Boolean, nullable=False, default=False)
    order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
