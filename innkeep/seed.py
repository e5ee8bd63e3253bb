"""Seed the bootstrap admin login from ADMIN_USERNAME / ADMIN_PASSWORD."""
import logging
from sqlalchemy.orm import Session
from innkeep.config import get_settings
from innkeep.models.user import UserRole
from innkeep.services.users import UsersService

logger = logging.getLogger(__name__)


def seed_admin_user(db: Session) -> None:
    settings = get_settings()
    if not settings.admin_username or not settings.admin_password:
        return
    users = UsersService(db)
    if users.get_by_username(settings.admin_username) is not None:
        return
    users.create({
        "username": settings.admin_username,
        "password": settings.admin_password,
        "role": UserRole.admin.value,
    })
    logger.info("Seeded admin user %s", settings.admin_username)
