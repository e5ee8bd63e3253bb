"""
Create an admin login, or reset its password if the username already exists.

Run from project root:
  python scripts/create_admin_user.py --username admin --password 'Password123!'
"""
import argparse
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from innkeep.database import Base, SessionLocal, engine
from innkeep.models import User  # noqa: F401
from innkeep.models.user import UserRole
from innkeep.services.users import UsersService


def main():
    parser = argparse.ArgumentParser(description="Create or reset an admin login")
    parser.add_argument("--username", type=str, default="admin")
    parser.add_argument("--password", type=str, required=True)
    parser.add_argument("--role", type=str, default=UserRole.admin.value, choices=[r.value for r in UserRole])
    args = parser.parse_args()

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        users = UsersService(db)
        existing = users.get_by_username(args.username)
        if existing:
            users.update_by_id(existing.id, {"password": args.password, "role": args.role})
            print(f"Reset password for {args.username} (role={args.role})")
        else:
            users.create({"username": args.username, "password": args.password, "role": args.role})
            print(f"Created {args.username} (role={args.role})")
    finally:
        db.close()


if __name__ == "__main__":
    main()
