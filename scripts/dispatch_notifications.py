"""
Notification email dispatcher.

Sends pending notification emails once and exits.  Meant to be run
periodically (cron, systemd timer).

Usage:
    python scripts/dispatch_notifications.py [--limit 100]
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv

load_dotenv()

from sqlmodel import Session

from app.core.app_logging import configure_logging
from app.db.session import engine
from app.services.notification_service import NotificationDispatcher

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Deliver pending notification emails.")
    parser.add_argument("--limit", type=int, default=100, help="Maximum notifications to process")
    args = parser.parse_args()

    configure_logging()
    with Session(engine) as session:
        report = NotificationDispatcher(session).dispatch_pending(limit=args.limit)

    print(f"sent={report.sent} failed={report.failed} skipped={report.skipped}")
    sys.exit(1 if report.failed else 0)
