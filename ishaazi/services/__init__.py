from ishaazi.services.comment_service import add_comment, approve_comment, delete_comment, list_comments
from ishaazi.services.content_service import publish_content, trigger_notification
from ishaazi.services.engagement_service import get_engagement_stats, track_like, track_share, track_view

__all__ = [
    "add_comment",
    "approve_comment",
    "delete_comment",
    "list_comments",
    "publish_content",
    "trigger_notification",
    "get_engagement_stats",
    "track_like",
    "track_share",
    "track_view",
]
