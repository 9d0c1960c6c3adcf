#!/usr/bin/env python3
"""
Delete notifications older than the retention window now (same work as the scheduled job).
Run: poetry run python scripts/prune_notifications.py [--days 90]
"""
import argparse
import sys
from pathlib import Path

root_dir = Path(__file__).resolve().parent.parent
if str(root_dir) not in sys.path:
    sys.path.insert(0, str(root_dir))

from ishaazi.config import settings
from ishaazi.db.session import SessionLocal
from ishaazi.services.notification_service import prune_old_notifications


def main():
    parser = argparse.ArgumentParser(description="Prune old notifications")
    parser.add_argument("--days", type=int, default=settings.notification_retention_days)
    args = parser.parse_args()

    db = SessionLocal()
    try:
        deleted = prune_old_notifications(db, args.days)
        print(f"Done. Deleted {deleted} notifications older than {args.days} days.")
    except Exception as e:
        db.rollback()
        print("Error:", e, file=sys.stderr)
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    main()
