"""Comment gate: submissions wait for moderation; approve/delete are admin operations."""
import logging
from typing import Any

from sqlalchemy.orm import Session

from ishaazi.core.errors import MSG_COMMENT_FIELDS_REQUIRED, MSG_COMMENT_NOT_FOUND, NotFoundError, ValidationError
from ishaazi.models.comment import Comment
from ishaazi.services.engagement_service import get_content_item

logger = logging.getLogger(__name__)


def comment_to_dict(c: Comment) -> dict[str, Any]:
    return {
        "id": c.id,
        "content_type": c.content_type,
        "content_id": c.content_id,
        "author": c.author,
        "email": c.email,
        "content": c.content,
        "approved": bool(c.approved),
        "created_at": c.created_at.isoformat() if c.created_at else None,
    }


def add_comment(
    db: Session,
    content_type: str,
    content_id: int,
    author: str | None,
    email: str | None,
    content: str | None,
) -> Comment:
    """Store an unapproved comment. Author, email and content must be non-blank."""
    author = (author or "").strip()
    email = (email or "").strip()
    content = (content or "").strip()
    if not author or not email or not content:
        raise ValidationError(MSG_COMMENT_FIELDS_REQUIRED)
    item = get_content_item(db, content_type, content_id)
    row = Comment(
        content_type=item.content_type,
        content_id=item.id,
        author=author,
        email=email,
        content=content,
        approved=False,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    logger.info("Comment %s queued for moderation on %s/%s", row.id, item.content_type, item.id)
    return row


def list_comments(db: Session, content_type: str, content_id: int, *, include_pending: bool = False) -> list[Comment]:
    """Comments on the item, oldest first. Pending ones only when include_pending."""
    item = get_content_item(db, content_type, content_id)
    q = db.query(Comment).filter(Comment.content_type == item.content_type, Comment.content_id == item.id)
    if not include_pending:
        q = q.filter(Comment.approved.is_(True))
    return q.order_by(Comment.created_at.asc(), Comment.id.asc()).all()


def _get_comment(db: Session, content_type: str, content_id: int, comment_id: int) -> Comment:
    item = get_content_item(db, content_type, content_id)
    row = (
        db.query(Comment)
        .filter(
            Comment.id == comment_id,
            Comment.content_type == item.content_type,
            Comment.content_id == item.id,
        )
        .first()
    )
    if row is None:
        raise NotFoundError(MSG_COMMENT_NOT_FOUND)
    return row


def approve_comment(db: Session, content_type: str, content_id: int, comment_id: int) -> Comment:
    row = _get_comment(db, content_type, content_id, comment_id)
    if not row.approved:
        row.approved = True
        db.commit()
        db.refresh(row)
    return row


def delete_comment(db: Session, content_type: str, content_id: int, comment_id: int) -> None:
    row = _get_comment(db, content_type, content_id, comment_id)
    db.delete(row)
    db.commit()
    logger.info("Comment %s deleted from %s/%s", comment_id, content_type, content_id)
