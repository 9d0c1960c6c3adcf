"""
Content engagement API: view/like/share counters, comments and publishing.

All routes are mounted under /api/content. Tracking and comment submission are public;
publishing and comment moderation need an admin bearer token.
"""
import logging
from typing import Any

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from ishaazi.core.constants import LIKE_ACTION
from ishaazi.db.session import get_db
from ishaazi.security.jwt_utils import get_optional_user, is_admin, require_admin
from ishaazi.services import comment_service, content_service, engagement_service
from ishaazi.services.comment_service import comment_to_dict
from ishaazi.services.notification_service import notification_to_dict

router = APIRouter()
logger = logging.getLogger(__name__)


# --- Publishing ---


class PublishContentRequest(BaseModel):
    content_type: str = Field(..., description="blogs, news, events, newsletters, dairies, beefs, ...")
    title: str
    description: str | None = Field(None, description="Notification text; defaults to 'New <type> published: <title>'")
    notify: bool = True


@router.post("/items", status_code=201)
def publish_content_item(
    body: PublishContentRequest,
    db: Session = Depends(get_db),
    _admin: dict = Depends(require_admin),
) -> dict[str, Any]:
    """Register a published item so it can collect engagement; announce it unless notify=false."""
    item, notification = content_service.publish_content(
        db, body.content_type, body.title, body.description, notify=body.notify
    )
    return {
        "item": {"id": item.id, "content_type": item.content_type, "title": item.title},
        "notification": notification_to_dict(notification) if notification else None,
    }


# --- Engagement ---


class LikeRequest(BaseModel):
    action: str = Field(LIKE_ACTION, description="'like' or 'unlike'")


@router.get("/engagement/{content_type}/{content_id}")
def get_engagement_stats(content_type: str, content_id: int, db: Session = Depends(get_db)) -> dict[str, int]:
    return engagement_service.get_engagement_stats(db, content_type, content_id)


@router.post("/track/view/{content_type}/{content_id}")
def track_view(content_type: str, content_id: int, db: Session = Depends(get_db)) -> dict[str, int]:
    return {"views": engagement_service.track_view(db, content_type, content_id)}


@router.post("/track/like/{content_type}/{content_id}")
def track_like(
    content_type: str,
    content_id: int,
    body: LikeRequest,
    db: Session = Depends(get_db),
) -> dict[str, int]:
    return {"likes": engagement_service.track_like(db, content_type, content_id, body.action)}


@router.post("/track/share/{content_type}/{content_id}")
def track_share(content_type: str, content_id: int, db: Session = Depends(get_db)) -> dict[str, int]:
    return {"shares": engagement_service.track_share(db, content_type, content_id)}


# --- Comments ---


class AddCommentRequest(BaseModel):
    # Blank values are rejected by the service with a 400, not by schema validation
    author: str = ""
    email: str = ""
    content: str = ""


@router.get("/comments/{content_type}/{content_id}")
def list_comments(
    content_type: str,
    content_id: int,
    include_pending: bool = Query(False, description="Admins only; ignored otherwise"),
    db: Session = Depends(get_db),
    user: dict | None = Depends(get_optional_user),
) -> dict[str, Any]:
    """Approved comments, oldest first. Admins may include comments awaiting moderation."""
    show_pending = include_pending and user is not None and is_admin(user)
    rows = comment_service.list_comments(db, content_type, content_id, include_pending=show_pending)
    return {"comments": [comment_to_dict(c) for c in rows]}


@router.post("/comments/{content_type}/{content_id}", status_code=201)
def add_comment(
    content_type: str,
    content_id: int,
    body: AddCommentRequest,
    db: Session = Depends(get_db),
) -> dict[str, Any]:
    """Submit a comment; it stays hidden until approved."""
    row = comment_service.add_comment(db, content_type, content_id, body.author, body.email, body.content)
    return {"message": "Comment added successfully (pending approval)", "comment": comment_to_dict(row)}


@router.delete("/comments/{content_type}/{content_id}/{comment_id}")
def delete_comment(
    content_type: str,
    content_id: int,
    comment_id: int,
    db: Session = Depends(get_db),
    _admin: dict = Depends(require_admin),
) -> dict[str, Any]:
    comment_service.delete_comment(db, content_type, content_id, comment_id)
    return {"ok": True, "id": comment_id}


@router.patch("/comments/{content_type}/{content_id}/{comment_id}/approve")
def approve_comment(
    content_type: str,
    content_id: int,
    comment_id: int,
    db: Session = Depends(get_db),
    _admin: dict = Depends(require_admin),
) -> dict[str, Any]:
    row = comment_service.approve_comment(db, content_type, content_id, comment_id)
    return {"ok": True, "comment": comment_to_dict(row)}
