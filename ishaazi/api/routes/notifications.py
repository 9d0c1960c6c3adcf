"""
Notifications API: per-reader recent list with read state, and admin management.

Recipient is the bearer token subject. Readers: GET /recent (delivered only, polled by clients every 30s),
POST /{id}/read. Admins: list with filters, analytics, manual trigger, resend, delete.
"""
import logging
from typing import Any

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from ishaazi.core.constants import RECENT_NOTIFICATIONS_LIMIT, RECENT_NOTIFICATIONS_MAX
from ishaazi.db.session import get_db
from ishaazi.security.jwt_utils import get_current_user, require_admin
from ishaazi.services import content_service, notification_service
from ishaazi.services.notification_service import notification_to_dict

router = APIRouter()
logger = logging.getLogger(__name__)


# --- Reader ---


@router.get("/recent")
def recent_notifications(
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
    limit: int = Query(RECENT_NOTIFICATIONS_LIMIT, ge=1, le=RECENT_NOTIFICATIONS_MAX),
) -> dict[str, Any]:
    """Newest notifications first, with this reader's read flag and unread count."""
    return notification_service.recent_for_recipient(db, user["sub"], limit)


@router.post("/{notification_id}/read")
def mark_notification_read(
    notification_id: str,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
) -> dict[str, Any]:
    """Mark a single notification as read for the caller (idempotent)."""
    read_at = notification_service.mark_read(db, notification_id, user["sub"])
    return {"ok": True, "id": notification_id, "read_at": read_at.isoformat()}


# --- Admin ---


@router.get("")
def list_notifications(
    db: Session = Depends(get_db),
    _admin: dict = Depends(require_admin),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    status: str | None = Query(None),
    content_type: str | None = Query(None),
) -> dict[str, Any]:
    """All notifications, newest first, paginated, with a summary over the same filter."""
    return notification_service.list_notifications(
        db, page=page, limit=limit, status=status, content_type=content_type
    )


@router.get("/analytics")
def notification_analytics(
    db: Session = Depends(get_db),
    _admin: dict = Depends(require_admin),
    timeframe: str = Query("30d", description="7d, 30d or 90d"),
) -> dict[str, Any]:
    return notification_service.get_analytics(db, timeframe)


class TriggerNotificationRequest(BaseModel):
    content_type: str
    content_id: int
    title: str = Field(..., description="Notification title")
    description: str = Field(..., description="Notification body")


@router.post("/trigger", status_code=201)
def trigger_notification(
    body: TriggerNotificationRequest,
    db: Session = Depends(get_db),
    _admin: dict = Depends(require_admin),
) -> dict[str, Any]:
    """Manually announce an existing content item."""
    row = content_service.trigger_notification(db, body.content_type, body.content_id, body.title, body.description)
    return {"ok": True, "notification": notification_to_dict(row)}


@router.post("/{notification_id}/resend")
def resend_notification(
    notification_id: str,
    db: Session = Depends(get_db),
    _admin: dict = Depends(require_admin),
) -> dict[str, Any]:
    """Re-issue a pending or failed notification; 400 when it already went out."""
    row = notification_service.resend_notification(db, notification_id)
    return {"ok": True, "notification": notification_to_dict(row)}


@router.delete("/{notification_id}")
def delete_notification(
    notification_id: str,
    db: Session = Depends(get_db),
    _admin: dict = Depends(require_admin),
) -> dict[str, Any]:
    notification_service.delete_notification(db, notification_id)
    return {"ok": True, "id": notification_id}
