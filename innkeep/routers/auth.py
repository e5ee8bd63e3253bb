"""Login and current user."""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from innkeep.database import get_db
from innkeep.dependencies import get_current_user
from innkeep.models.user import User
from innkeep.schemas.auth import Token, UserLogin, UserResponse
from innkeep.services.auth import create_access_token
from innkeep.services.users import UsersService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=Token)
def login(data: UserLogin, db: Session = Depends(get_db)):
    user = UsersService(db).authenticate(data.username, data.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid username or password")
    return Token(access_token=create_access_token(user.id, user.username, user.role))


@router.get("/me", response_model=UserResponse)
def me(current_user: User = Depends(get_current_user)):
    return current_user
