"""Runs every few hours: delete notifications older than NOTIFICATION_RETENTION_DAYS so the table stays bounded."""
import logging

from ishaazi.config import settings
from ishaazi.db.session import SessionLocal
from ishaazi.services.notification_service import prune_old_notifications

logger = logging.getLogger(__name__)


def run_notification_retention_job() -> None:
    db = SessionLocal()
    try:
        deleted = prune_old_notifications(db, settings.notification_retention_days)
        if deleted:
            logger.info(
                "Retention job: pruned %s notifications older than %s days",
                deleted,
                settings.notification_retention_days,
            )
    except Exception as e:
        logger.exception("Retention job failed: %s", e)
        db.rollback()
    finally:
        db.close()
