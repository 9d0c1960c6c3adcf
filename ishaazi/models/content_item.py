"""Published content item (blog, news, event, ...) that engagement and comments attach to.

Only the fields engagement and notifications need; the editorial body lives with the CMS.
"""
from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.sql import func

from ishaazi.db.base import Base


class ContentItem(Base):
    __tablename__ = "content_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    content_type = Column(String(32), nullable=False, index=True)
    title = Column(String(256), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
