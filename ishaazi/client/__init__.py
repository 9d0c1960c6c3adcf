"""Client side of engagement and notifications: tracker, polled store, toasts, bell."""
from ishaazi.client.api_client import ApiClient
from ishaazi.client.config import ClientConfig
from ishaazi.client.engagement import CommentRecord, EngagementStats, EngagementTracker
from ishaazi.client.notifications import NotificationPoller, NotificationRecord, NotificationStore
from ishaazi.client.toast import ToastMessage, ToastPresenter
from ishaazi.client.token_store import TokenStore

__all__ = [
    "ApiClient",
    "ClientConfig",
    "CommentRecord",
    "EngagementStats",
    "EngagementTracker",
    "NotificationPoller",
    "NotificationRecord",
    "NotificationStore",
    "ToastMessage",
    "ToastPresenter",
    "TokenStore",
]
