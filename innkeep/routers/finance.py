"""Finance snapshots CRUD and period lookup."""
from datetime import date
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
from innkeep.database import get_db
from innkeep.dependencies import get_current_user
from innkeep.models.user import User
from innkeep.schemas.finance import FinanceCreate, FinanceResponse, FinanceUpdate
from innkeep.services.finance import FinanceService
from innkeep.utils.listing import paginated_list

router = APIRouter(prefix="/finance", tags=["finance"])


@router.get("")
def list_finance(request: Request, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return paginated_list(request, FinanceService(db), FinanceResponse)


@router.get("/period/{property_id}", response_model=list[FinanceResponse])
def finance_for_period(
    property_id: int,
    start: date,
    end: date,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return FinanceService(db).get_for_period(property_id, start, end)


@router.get("/{finance_id}", response_model=FinanceResponse)
def get_finance(finance_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return FinanceService(db).require(finance_id)


@router.post("", response_model=FinanceResponse, status_code=201)
def create_finance(data: FinanceCreate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return FinanceService(db).create(data.model_dump(exclude_none=True))


@router.put("/{finance_id}", response_model=FinanceResponse)
def update_finance(finance_id: int, data: FinanceUpdate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return FinanceService(db).update(finance_id, data.model_dump(exclude_unset=True))


@router.delete("/{finance_id}", status_code=204)
def delete_finance(finance_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    FinanceService(db).delete(finance_id)
