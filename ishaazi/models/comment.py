"""Reader comment on a content item. approved=False until an admin approves it."""
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.sql import false, func

from ishaazi.db.base import Base


class Comment(Base):
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    content_type = Column(String(32), nullable=False)
    content_id = Column(Integer, ForeignKey("content_items.id", ondelete="CASCADE"), nullable=False, index=True)
    author = Column(String(128), nullable=False)
    email = Column(String(256), nullable=False)
    content = Column(Text, nullable=False)
    approved = Column(Boolean, nullable=False, default=False, server_default=false())
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
