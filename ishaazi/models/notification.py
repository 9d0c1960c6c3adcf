"""Notification issued when content is published (content_published, event_created, newsletter_sent).

id: uuid string; it is the dedup key on the client.
content_type/content_id: optional deep link to the published item.
status/sent_to: delivery bookkeeping for the admin dashboard.
Read state is per recipient, see NotificationRead.
"""
import uuid

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.sql import func

from ishaazi.db.base import Base


def _new_id() -> str:
    return uuid.uuid4().hex


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(String(36), primary_key=True, default=_new_id)
    type = Column(String(32), nullable=False, index=True)
    title = Column(String(256), nullable=False)
    description = Column(Text, nullable=False)
    content_type = Column(String(32), nullable=True)
    content_id = Column(Integer, nullable=True)
    status = Column(String(16), nullable=False, default="sent", server_default="sent")
    sent_to = Column(Integer, nullable=False, default=0, server_default="0")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)


class NotificationRead(Base):
    """recipient_id: bearer token subject. Row present = read."""

    __tablename__ = "notification_reads"
    __table_args__ = (UniqueConstraint("notification_id", "recipient_id", name="uq_notification_reads_recipient"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    notification_id = Column(
        String(36), ForeignKey("notifications.id", ondelete="CASCADE"), nullable=False, index=True
    )
    recipient_id = Column(String(64), nullable=False, index=True)
    read_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
