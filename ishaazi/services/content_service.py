"""
Publishing: register a content item so it can collect engagement, and announce it.

The editorial record itself is owned by the CMS; this keeps only id, type and title.
"""
import logging

from sqlalchemy.orm import Session

from ishaazi.core.errors import ValidationError
from ishaazi.models.content_item import ContentItem
from ishaazi.models.notification import Notification
from ishaazi.services.engagement_service import get_content_item, validate_content_type
from ishaazi.services.notification_service import create_notification, notification_type_for

logger = logging.getLogger(__name__)


def _singular(content_type: str) -> str:
    if content_type in ("news", "basics"):
        return content_type
    if content_type.endswith("ies"):
        return content_type[:-3] + "y"
    return content_type[:-1] if content_type.endswith("s") else content_type


def publish_content(
    db: Session,
    content_type: str,
    title: str,
    description: str | None = None,
    *,
    notify: bool = True,
) -> tuple[ContentItem, Notification | None]:
    """Create the content item and, when notify, a notification pointing at it."""
    ct = validate_content_type(content_type)
    title = (title or "").strip()
    if not title:
        raise ValidationError("title is required")
    item = ContentItem(content_type=ct, title=title)
    db.add(item)
    db.commit()
    db.refresh(item)
    logger.info("Published %s/%s: %s", ct, item.id, title)
    if not notify:
        return item, None
    notification = create_notification(
        db,
        type=notification_type_for(ct),
        title=title,
        description=(description or "").strip() or f"New {_singular(ct)} published: {title}",
        content_type=ct,
        content_id=item.id,
    )
    return item, notification


def trigger_notification(
    db: Session,
    content_type: str,
    content_id: int,
    title: str,
    description: str,
) -> Notification:
    """Manually (re)announce an existing content item."""
    item = get_content_item(db, content_type, content_id)
    return create_notification(
        db,
        type=notification_type_for(item.content_type),
        title=title,
        description=description,
        content_type=item.content_type,
        content_id=item.id,
    )
