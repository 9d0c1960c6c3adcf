"""
Single source of truth for database tables that exist after migrations (001).

Use these names when writing raw SQL or checking model registration in alembic/env.py.
"""
# All tables that exist in the DB. Must match models and migration 001.
ALL_TABLE_NAMES = (
    "content_items",
    "engagement_stats",
    "comments",
    "notifications",
    "notification_reads",
)
