"""
Engagement counters (views, likes, shares) per content item.

Counters are bumped with a single UPDATE ... SET n = n + delta so concurrent requests
never lose increments; the stats row is created on first use.
"""
import logging

from sqlalchemy import case
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ishaazi.core.constants import CONTENT_TYPES, LIKE_ACTION, UNLIKE_ACTION
from ishaazi.core.errors import (
    MSG_CONTENT_NOT_FOUND,
    MSG_INVALID_CONTENT_TYPE,
    NotFoundError,
    ValidationError,
)
from ishaazi.models.content_item import ContentItem
from ishaazi.models.engagement_stats import EngagementStats

logger = logging.getLogger(__name__)


def validate_content_type(content_type: str) -> str:
    ct = (content_type or "").strip().lower()
    if ct not in CONTENT_TYPES:
        raise ValidationError(f"{MSG_INVALID_CONTENT_TYPE}: {content_type!r}")
    return ct


def get_content_item(db: Session, content_type: str, content_id: int) -> ContentItem:
    """Return the content item or raise NotFoundError (unknown id or id of another type)."""
    ct = validate_content_type(content_type)
    item = (
        db.query(ContentItem)
        .filter(ContentItem.id == content_id, ContentItem.content_type == ct)
        .first()
    )
    if item is None:
        raise NotFoundError(MSG_CONTENT_NOT_FOUND)
    return item


def _get_or_create_stats(db: Session, content_type: str, content_id: int) -> EngagementStats:
    q = db.query(EngagementStats).filter(
        EngagementStats.content_type == content_type,
        EngagementStats.content_id == content_id,
    )
    row = q.first()
    if row is not None:
        return row
    try:
        row = EngagementStats(content_type=content_type, content_id=content_id, views=0, likes=0, shares=0)
        db.add(row)
        db.commit()
    except IntegrityError:
        # Another request created it first
        db.rollback()
        row = q.one()
    return row


def _increment(db: Session, content_type: str, content_id: int, field: str, delta: int) -> EngagementStats:
    item = get_content_item(db, content_type, content_id)
    row = _get_or_create_stats(db, item.content_type, item.id)
    column = getattr(EngagementStats, field)
    # Floor at 0 inside the same UPDATE so a concurrent increment is never overwritten
    new_value = column + delta if delta >= 0 else case((column + delta < 0, 0), else_=column + delta)
    db.query(EngagementStats).filter(EngagementStats.id == row.id).update(
        {column: new_value}, synchronize_session=False
    )
    db.commit()
    db.refresh(row)
    return row


def track_view(db: Session, content_type: str, content_id: int) -> int:
    """Increment views once. Returns the new view count."""
    return _increment(db, content_type, content_id, "views", 1).views


def track_like(db: Session, content_type: str, content_id: int, action: str) -> int:
    """Apply 'like' (+1) or 'unlike' (-1). Likes never go below 0. Returns the new like count."""
    action = (action or "").strip().lower()
    if action not in (LIKE_ACTION, UNLIKE_ACTION):
        raise ValidationError(f"action must be '{LIKE_ACTION}' or '{UNLIKE_ACTION}'")
    return _increment(db, content_type, content_id, "likes", 1 if action == LIKE_ACTION else -1).likes


def track_share(db: Session, content_type: str, content_id: int) -> int:
    """Increment shares once per call (no de-duplication). Returns the new share count."""
    return _increment(db, content_type, content_id, "shares", 1).shares


def get_engagement_stats(db: Session, content_type: str, content_id: int) -> dict[str, int]:
    """Current counters; zeros when the item exists but was never engaged with."""
    item = get_content_item(db, content_type, content_id)
    row = (
        db.query(EngagementStats)
        .filter(EngagementStats.content_type == item.content_type, EngagementStats.content_id == item.id)
        .first()
    )
    if row is None:
        return {"views": 0, "likes": 0, "shares": 0}
    return {"views": row.views or 0, "likes": row.likes or 0, "shares": row.shares or 0}
