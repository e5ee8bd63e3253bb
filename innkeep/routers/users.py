"""Dashboard logins. Writes need the admin or owner role."""
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
from innkeep.database import get_db
from innkeep.dependencies import get_current_user, require_admin
from innkeep.models.user import User
from innkeep.schemas.auth import UserCreate, UserResponse, UserUpdate
from innkeep.services.users import UsersService
from innkeep.utils.listing import paginated_list

router = APIRouter(prefix="/users", tags=["users"])


@router.get("")
def list_users(request: Request, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return paginated_list(request, UsersService(db), UserResponse)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return UsersService(db).require(user_id)


@router.post("", response_model=UserResponse, status_code=201)
def create_user(data: UserCreate, db: Session = Depends(get_db), current_user: User = Depends(require_admin)):
    return UsersService(db).create(data.model_dump(exclude_none=True))


@router.put("/{user_id}", response_model=UserResponse)
def update_user(user_id: int, data: UserUpdate, db: Session = Depends(get_db), current_user: User = Depends(require_admin)):
    return UsersService(db).update_by_id(user_id, data.model_dump(exclude_unset=True))


@router.delete("/{user_id}", status_code=204)
def delete_user(user_id: int, db: Session = Depends(get_db), current_user: User = Depends(require_admin)):
    UsersService(db).delete_by_id(user_id)
