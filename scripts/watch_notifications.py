#!/usr/bin/env python3
"""
Poll the notification feed and show new notifications as toasts (terminal notification bell).

Uses the token stored by scripts/issue_token.py. Ctrl+C to stop.
Run:
  poetry run python scripts/watch_notifications.py
  poetry run python scripts/watch_notifications.py --once
"""
import argparse
import logging
import sys
import time
from pathlib import Path

root_dir = Path(__file__).resolve().parent.parent
if str(root_dir) not in sys.path:
    sys.path.insert(0, str(root_dir))

from ishaazi.client import ApiClient, ClientConfig, NotificationPoller, ToastPresenter
from ishaazi.client.bell import render_lines


def main():
    parser = argparse.ArgumentParser(description="Watch Ishaazi notifications")
    parser.add_argument("--base-url", default=None, help="API URL (default ISHAAZI_API_URL or http://127.0.0.1:8000)")
    parser.add_argument("--interval", type=int, default=None, help="Poll interval in seconds (default 30)")
    parser.add_argument("--once", action="store_true", help="Poll once, print the bell and exit")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    config = ClientConfig(base_url=args.base_url)
    toasts = ToastPresenter()

    def on_new(records):
        for n in records:
            toasts.info(f"{n.title}: {n.description}" if n.description else n.title)

    with ApiClient(config) as api:
        poller = NotificationPoller(api, interval_seconds=args.interval, on_new=on_new)
        if args.once:
            poller.poll_once()
            if not poller.is_connected:
                toasts.error(f"Could not reach {config.base_url}: {poller.last_error}")
                sys.exit(1)
            print(f"{poller.unread_count} unread")
            for line in render_lines(poller.notifications):
                print(line)
            return
        with poller:
            try:
                while True:
                    time.sleep(1)
            except KeyboardInterrupt:
                print(f"\n{poller.unread_count} unread")
                for line in render_lines(poller.notifications):
                    print(line)


if __name__ == "__main__":
    main()
