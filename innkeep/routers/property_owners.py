"""Property owners. Responses use the {success, data | error} envelope the dashboard expects."""
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from innkeep.database import get_db
from innkeep.dependencies import get_current_user, require_admin
from innkeep.models.user import User
from innkeep.schemas.property_owner import PropertyOwnerCreate, PropertyOwnerResponse, PropertyOwnerUpdate
from innkeep.services import owner_api
from innkeep.services.property_owners import PropertyOwnerService

router = APIRouter(prefix="/owners", tags=["owners"])


def _respond(result: dict) -> JSONResponse | dict:
    if result["success"]:
        return result
    status_code = 404 if getattr(result, "code", None) == "NOT_FOUND" else 400
    return JSONResponse(status_code=status_code, content=dict(result))


@router.get("")
def list_owners(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return _respond(owner_api.get_all_property_owners(db))


@router.get("/search")
def search_owners(
    email: str | None = None,
    role: str | None = None,
    search: str | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    result = owner_api.envelope(
        lambda: [
            PropertyOwnerResponse.model_validate(o).model_dump(mode="json")
            for o in PropertyOwnerService(db).get_owners_by_filters(email=email, role=role, search=search)
        ]
    )
    return _respond(result)


@router.get("/{owner_id}")
def get_owner(owner_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    result = owner_api.get_property_owner(db, owner_id)
    return _respond(result)


@router.post("", status_code=201)
def create_owner(data: PropertyOwnerCreate, db: Session = Depends(get_db), current_user: User = Depends(require_admin)):
    return _respond(owner_api.create_property_owner(db, data.model_dump(mode="json")))


@router.put("/{owner_id}")
def update_owner(
    owner_id: int,
    data: PropertyOwnerUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    result = owner_api.update_property_owner(db, owner_id, data.model_dump(mode="json", exclude_unset=True))
    return _respond(result)


@router.delete("/{owner_id}")
def delete_owner(owner_id: int, db: Session = Depends(get_db), current_user: User = Depends(require_admin)):
    result = owner_api.delete_property_owner(db, owner_id)
    return _respond(result)
