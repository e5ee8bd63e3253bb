"""
Run the housekeeping reminder once (same logic as the daily 07:00 job).

Run from project root:
  python scripts/send_housekeeping_reminders.py                 # overdue tasks, all properties
  python scripts/send_housekeeping_reminders.py --property-id 3 --all-open
"""
import argparse
import json
import logging
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from innkeep.database import SessionLocal
from innkeep.services.housekeeping_reminder import run_housekeeping_reminder


def main():
    parser = argparse.ArgumentParser(description="Send housekeeping reminders to assigned staff")
    parser.add_argument("--property-id", type=int, default=None, help="Only this property")
    parser.add_argument("--all-open", action="store_true", help="Include tasks that are open but not yet overdue")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    db = SessionLocal()
    try:
        result = run_housekeeping_reminder(db, property_id=args.property_id, check_overdue_only=not args.all_open)
    finally:
        db.close()
    print(json.dumps(result, indent=2))
    failed = [n for n in result["notifications"] if not n["success"]]
    sys.exit(1 if failed else 0)


if __name__ == "__main__":
    main()
