"""Engagement counters per content item, keyed by (content_type, content_id).

Row is created on the first engagement call against an existing item; never deleted on its own.
"""
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.sql import func

from ishaazi.db.base import Base


class EngagementStats(Base):
    __tablename__ = "engagement_stats"
    __table_args__ = (UniqueConstraint("content_type", "content_id", name="uq_engagement_stats_content"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    content_type = Column(String(32), nullable=False)
    content_id = Column(Integer, ForeignKey("content_items.id", ondelete="CASCADE"), nullable=False, index=True)
    views = Column(Integer, nullable=False, default=0, server_default="0")
    likes = Column(Integer, nullable=False, default=0, server_default="0")
    shares = Column(Integer, nullable=False, default=0, server_default="0")
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
