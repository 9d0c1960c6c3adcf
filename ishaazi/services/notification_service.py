"""
Notifications: created when content is published, listed per recipient with read state,
administered (list, analytics, trigger, delete) and pruned by the retention job.

Recipient = bearer token subject. Notifications are broadcast; a NotificationRead row
per (notification, recipient) records that the recipient has read it.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Any

from sqlalchemy import case, func, select
from sqlalchemy.orm import Session

from ishaazi.core.constants import (
    ANALYTICS_TIMEFRAME_DAYS,
    NOTIFICATION_CONTENT_PUBLISHED,
    NOTIFICATION_EVENT_CREATED,
    NOTIFICATION_NEWSLETTER_SENT,
    NOTIFICATION_STATUS_SENT,
    NOTIFICATION_STATUSES,
    NOTIFICATION_TYPES,
)
from ishaazi.core.errors import (
    MSG_NOTIFICATION_ALREADY_SENT,
    MSG_NOTIFICATION_NOT_FOUND,
    NotFoundError,
    ValidationError,
)
from ishaazi.models.notification import Notification, NotificationRead

logger = logging.getLogger(__name__)

# Content types whose publication is announced with a dedicated notification type
_TYPE_BY_CONTENT_TYPE = {
    "events": NOTIFICATION_EVENT_CREATED,
    "newsletters": NOTIFICATION_NEWSLETTER_SENT,
}


def notification_type_for(content_type: str) -> str:
    return _TYPE_BY_CONTENT_TYPE.get(content_type, NOTIFICATION_CONTENT_PUBLISHED)


def _as_utc(dt: datetime | None) -> datetime | None:
    # SQLite hands back naive datetimes; stored values are UTC
    if dt is None:
        return None
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)


def notification_to_dict(n: Notification, *, read: bool | None = None, read_at: datetime | None = None) -> dict[str, Any]:
    d: dict[str, Any] = {
        "id": n.id,
        "type": n.type,
        "title": n.title,
        "description": n.description,
        "content_type": n.content_type,
        "content_id": n.content_id,
        "status": n.status,
        "sent_to": n.sent_to,
        "created_at": _as_utc(n.created_at).isoformat() if n.created_at else None,
    }
    if read is not None:
        d["read"] = read
        d["read_at"] = _as_utc(read_at).isoformat() if read_at else None
    return d


def create_notification(
    db: Session,
    *,
    type: str,
    title: str,
    description: str,
    content_type: str | None = None,
    content_id: int | None = None,
    status: str = NOTIFICATION_STATUS_SENT,
    sent_to: int = 0,
) -> Notification:
    title = (title or "").strip()
    description = (description or "").strip()
    if not title or not description:
        raise ValidationError("title and description are required")
    if type not in NOTIFICATION_TYPES:
        raise ValidationError(f"Unknown notification type: {type!r}")
    if status not in NOTIFICATION_STATUSES:
        raise ValidationError(f"Unknown notification status: {status!r}")
    row = Notification(
        type=type,
        title=title,
        description=description,
        content_type=content_type,
        content_id=content_id,
        status=status,
        sent_to=sent_to,
        created_at=datetime.now(timezone.utc),
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    logger.info("Notification %s (%s) created for %s/%s", row.id, row.type, content_type, content_id)
    return row


def _read_ids_subquery(recipient_id: str):
    return select(NotificationRead.notification_id).where(NotificationRead.recipient_id == recipient_id)


def recent_for_recipient(db: Session, recipient_id: str, limit: int) -> dict[str, Any]:
    """Newest delivered notifications first, each with this recipient's read flag, plus the unread count."""
    delivered = Notification.status == NOTIFICATION_STATUS_SENT
    rows = (
        db.query(Notification)
        .filter(delivered)
        .order_by(Notification.created_at.desc(), Notification.id.desc())
        .limit(limit)
        .all()
    )
    reads: dict[str, datetime] = {}
    if rows:
        reads = dict(
            db.query(NotificationRead.notification_id, NotificationRead.read_at)
            .filter(
                NotificationRead.recipient_id == recipient_id,
                NotificationRead.notification_id.in_([r.id for r in rows]),
            )
            .all()
        )
    unread_count = (
        db.query(func.count(Notification.id))
        .filter(delivered, Notification.id.not_in(_read_ids_subquery(recipient_id)))
        .scalar()
    )
    return {
        "notifications": [
            notification_to_dict(r, read=r.id in reads, read_at=reads.get(r.id)) for r in rows
        ],
        "unread_count": unread_count or 0,
    }


def mark_read(db: Session, notification_id: str, recipient_id: str) -> datetime:
    """Mark one notification read for the recipient. Idempotent: keeps the first read_at."""
    if db.get(Notification, notification_id) is None:
        raise NotFoundError(MSG_NOTIFICATION_NOT_FOUND)
    existing = (
        db.query(NotificationRead)
        .filter(NotificationRead.notification_id == notification_id, NotificationRead.recipient_id == recipient_id)
        .first()
    )
    if existing is not None:
        return _as_utc(existing.read_at)
    row = NotificationRead(
        notification_id=notification_id,
        recipient_id=recipient_id,
        read_at=datetime.now(timezone.utc),
    )
    db.add(row)
    db.commit()
    return _as_utc(row.read_at)


def list_notifications(
    db: Session,
    *,
    page: int = 1,
    limit: int = 20,
    status: str | None = None,
    content_type: str | None = None,
) -> dict[str, Any]:
    """Admin listing, newest first, with pagination and a summary over the same filter."""
    criteria = []
    if status:
        criteria.append(Notification.status == status)
    if content_type:
        criteria.append(Notification.content_type == content_type)
    q = db.query(Notification).filter(*criteria)
    total = q.count()
    rows = (
        q.order_by(Notification.created_at.desc(), Notification.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return {
        "notifications": [notification_to_dict(r) for r in rows],
        "pagination": {
            "total": total,
            "page": page,
            "limit": limit,
            "total_pages": (total + limit - 1) // limit,
        },
        "summary": _summarize(db, criteria),
    }


def _count_status(status: str):
    return func.coalesce(func.sum(case((Notification.status == status, 1), else_=0)), 0)


def _summarize(db: Session, criteria: list) -> dict[str, Any]:
    """Totals over notifications matching criteria, computed in the database."""
    total, sent, failed, pending, recipients = (
        db.query(
            func.count(Notification.id),
            _count_status(NOTIFICATION_STATUS_SENT),
            _count_status("failed"),
            _count_status("pending"),
            func.coalesce(func.sum(Notification.sent_to), 0),
        )
        .filter(*criteria)
        .one()
    )
    total_reads = (
        db.query(func.count(NotificationRead.id))
        .join(Notification, Notification.id == NotificationRead.notification_id)
        .filter(*criteria)
        .scalar()
        or 0
    )
    recipients = int(recipients or 0)
    return {
        "total_notifications": total,
        "total_sent": int(sent),
        "total_failed": int(failed),
        "total_pending": int(pending),
        "total_recipients": recipients,
        "total_reads": total_reads,
        "read_rate": round(total_reads / recipients * 100, 2) if recipients > 0 else 0,
    }


def get_analytics(db: Session, timeframe: str = "30d", now: datetime | None = None) -> dict[str, Any]:
    """Summary, per-content-type breakdown and daily activity for the last 7/30/90 days."""
    days_back = ANALYTICS_TIMEFRAME_DAYS.get(timeframe)
    if days_back is None:
        raise ValidationError(f"timeframe must be one of {', '.join(ANALYTICS_TIMEFRAME_DAYS)}")
    now = now or datetime.now(timezone.utc)
    start = now - timedelta(days=days_back)
    criteria = [Notification.created_at >= start]

    by_content_type: dict[str, dict[str, int]] = {}
    grouped = (
        db.query(
            Notification.content_type,
            func.count(Notification.id),
            _count_status(NOTIFICATION_STATUS_SENT),
            func.coalesce(func.sum(Notification.sent_to), 0),
        )
        .filter(*criteria)
        .group_by(Notification.content_type)
        .all()
    )
    for content_type, count, sent, recipients in grouped:
        by_content_type[content_type or "none"] = {
            "count": count,
            "sent": int(sent),
            "recipients": int(recipients),
        }

    # Day bucketing stays in Python; date functions differ between Postgres and SQLite
    per_day: dict[str, int] = {}
    for (created_at,) in db.query(Notification.created_at).filter(*criteria):
        day = _as_utc(created_at).date().isoformat()
        per_day[day] = per_day.get(day, 0) + 1
    daily_activity = []
    for i in range(days_back, -1, -1):
        day = (now - timedelta(days=i)).date().isoformat()
        daily_activity.append({"date": day, "notifications": per_day.get(day, 0)})

    return {
        "summary": _summarize(db, criteria),
        "by_content_type": by_content_type,
        "daily_activity": daily_activity,
        "timeframe": timeframe,
    }


def resend_notification(db: Session, notification_id: str) -> Notification:
    """
    Re-issue a notification that did not go out (pending or failed).
    It becomes "sent" with a fresh created_at, so it shows up at the top of readers' feeds.
    Raises NotFoundError for an unknown id and ValidationError when it was already sent.
    """
    row = db.get(Notification, notification_id)
    if row is None:
        raise NotFoundError(MSG_NOTIFICATION_NOT_FOUND)
    if row.status == NOTIFICATION_STATUS_SENT:
        raise ValidationError(MSG_NOTIFICATION_ALREADY_SENT)
    previous = row.status
    row.status = NOTIFICATION_STATUS_SENT
    row.created_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(row)
    logger.info("Notification %s resent (was %s)", row.id, previous)
    return row



def delete_notification(db: Session, notification_id: str) -> None:
    row = db.get(Notification, notification_id)
    if row is None:
        raise NotFoundError(MSG_NOTIFICATION_NOT_FOUND)
    db.query(NotificationRead).filter(NotificationRead.notification_id == notification_id).delete(
        synchronize_session=False
    )
    db.delete(row)
    db.commit()


def prune_old_notifications(db: Session, retention_days: int, now: datetime | None = None) -> int:
    """Delete notifications (and their read rows) older than retention_days. Returns notifications deleted."""
    cutoff = (now or datetime.now(timezone.utc)) - timedelta(days=retention_days)
    old_ids = select(Notification.id).where(Notification.created_at < cutoff)
    db.query(NotificationRead).filter(NotificationRead.notification_id.in_(old_ids)).delete(
        synchronize_session=False
    )
    deleted = db.query(Notification).filter(Notification.created_at < cutoff).delete(synchronize_session=False)
    db.commit()
    return deleted
