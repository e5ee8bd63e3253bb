"""Envelope API over PropertyOwnerService: every call returns {"success": ..., "data"|"error": ...} for the dashboard."""
import logging
from typing import Any, Callable

from sqlalchemy.orm import Session

from innkeep.errors import ServiceError
from innkeep.schemas.property_owner import PropertyOwnerResponse
from innkeep.services.property_owners import PropertyOwnerService

logger = logging.getLogger(__name__)


def error_message(error: Exception) -> str:
    return str(error) or "Unknown error"


class ErrorEnvelope(dict):
    """{"success": False, "error": message}; the service error code rides along as an attribute, not in the body."""

    def __init__(self, message: str, code: str):
        super().__init__(success=False, error=message)
        self.code = code


def envelope(fn: Callable[..., Any], *args, **kwargs) -> dict[str, Any]:
    """Run fn; {"success": True, "data": result} or {"success": False, "error": message}. None results carry no data."""
    try:
        result = fn(*args, **kwargs)
    except Exception as e:
        logger.info("[API] %s failed: %s", getattr(fn, "__name__", "call"), e)
        return ErrorEnvelope(error_message(e), e.code if isinstance(e, ServiceError) else "UNKNOWN_ERROR")
    if result is None:
        return {"success": True}
    return {"success": True, "data": result}


def _owner_dict(owner) -> dict[str, Any]:
    return PropertyOwnerResponse.model_validate(owner).model_dump(mode="json")


def create_property_owner(db: Session, data: dict[str, Any]) -> dict[str, Any]:
    return envelope(lambda: _owner_dict(PropertyOwnerService(db).create_owner(data)))


def get_property_owner(db: Session, id: int) -> dict[str, Any]:
    return envelope(lambda: _owner_dict(PropertyOwnerService(db).get_owner_by_id(id)))


def update_property_owner(db: Session, id: int, data: dict[str, Any]) -> dict[str, Any]:
    return envelope(lambda: _owner_dict(PropertyOwnerService(db).update_owner(id, data)))


def delete_property_owner(db: Session, id: int) -> dict[str, Any]:
    return envelope(PropertyOwnerService(db).delete_owner, id)


def get_all_property_owners(db: Session) -> dict[str, Any]:
    return envelope(lambda: [_owner_dict(o) for o in PropertyOwnerService(db).get_all_owners()])
