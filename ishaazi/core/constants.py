"""
Centralized constants for engagement, notifications and the scheduler.

Change content types, caps or intervals here instead of scattering literals across routes and the client.
"""

# Content types that carry engagement counters and comments (URL segment form).
CONTENT_TYPES = (
    "blogs",
    "news",
    "events",
    "newsletters",
    "dairies",
    "beefs",
    "farms",
    "piggeries",
    "goats",
    "basics",
    "magazines",
)

# Notification kinds emitted when something is published
NOTIFICATION_CONTENT_PUBLISHED = "content_published"
NOTIFICATION_EVENT_CREATED = "event_created"
NOTIFICATION_NEWSLETTER_SENT = "newsletter_sent"
NOTIFICATION_TYPES = (
    NOTIFICATION_CONTENT_PUBLISHED,
    NOTIFICATION_EVENT_CREATED,
    NOTIFICATION_NEWSLETTER_SENT,
)

# Delivery status of a notification record; readers only see "sent" ones
NOTIFICATION_STATUS_SENT = "sent"
NOTIFICATION_STATUSES = ("pending", NOTIFICATION_STATUS_SENT, "failed")

# Like toggle actions accepted by POST /track/like
LIKE_ACTION = "like"
UNLIKE_ACTION = "unlike"

# Scheduler job IDs (must match ids used in main.py add_job)
NOTIFICATION_RETENTION_JOB_ID = "notification_retention"
NOTIFICATION_RETENTION_INTERVAL_HOURS = 6

# Client polling: fixed interval, no backoff, no jitter
NOTIFICATION_POLL_INTERVAL_SECONDS = 30
NOTIFICATION_POLL_JOB_ID = "notification_poll"
# Client-side store keeps the most recent N notifications
NOTIFICATION_STORE_LIMIT = 50
# GET /api/notifications/recent default and hard cap
RECENT_NOTIFICATIONS_LIMIT = 50
RECENT_NOTIFICATIONS_MAX = 200

# Toasts
TOAST_KINDS = ("success", "error", "warning", "info")
TOAST_DEFAULT_DURATION_MS = 4000
TOAST_DEFAULT_POSITION = "top-right"

# Analytics timeframes accepted by GET /api/notifications/analytics
ANALYTICS_TIMEFRAME_DAYS = {"7d": 7, "30d": 30, "90d": 90}

# Bearer token key in the client's persistent storage
TOKEN_STORAGE_KEY = "token"
