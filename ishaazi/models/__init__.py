from ishaazi.models.comment import Comment
from ishaazi.models.content_item import ContentItem
from ishaazi.models.engagement_stats import EngagementStats
from ishaazi.models.notification import Notification, NotificationRead

__all__ = [
    "Comment",
    "ContentItem",
    "EngagementStats",
    "Notification",
    "NotificationRead",
]
