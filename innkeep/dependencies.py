"""Shared dependencies: DB session, current user."""
from fastapi import Depends, HTTPException
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from innkeep.database import get_db
from innkeep.models.user import User, UserRole
from innkeep.services.auth import decode_token_with_error

security = HTTPBearer(auto_error=False)

ADMIN_ROLES = (UserRole.admin.value, UserRole.owner.value)


def get_current_user(
    db: Session = Depends(get_db),
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> User:
    if not credentials:
        raise HTTPException(status_code=401, detail="Not authenticated")
    payload, _ = decode_token_with_error((credentials.credentials or "").strip())
    if not payload:
        raise HTTPException(status_code=401, detail="Invalid or expired token")
    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise HTTPException(status_code=401, detail="Invalid token")
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=401, detail="User not found")
    return user


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    """Admin or owner role; guards user and property-owner writes."""
    if current_user.role not in ADMIN_ROLES:
        raise HTTPException(status_code=403, detail="Admin or owner role required")
    return current_user
