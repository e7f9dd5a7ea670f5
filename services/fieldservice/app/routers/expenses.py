from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.auth_dependencies import TokenPayload, admin_only
from app.core.database import get_db
from app.crud.base import date_range_criteria
from app.crud.expenses import expenses as crud
from app.models.expense import Expense
from app.schemas.expense_schema import ExpenseCreate, ExpenseOut, ExpenseStats, ExpenseUpdate
from shared.pagination import Page
from . import validators

router = APIRouter(prefix="/expenses", tags=["Expenses"])


@router.post("/", response_model=ExpenseOut, status_code=status.HTTP_201_CREATED)
def criar_despesa(
    payload: ExpenseCreate,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(admin_only),
):
    data = payload.model_dump()
    data.update(created_by=current_token.sub, updated_by=current_token.sub)
    return crud.create(db, current_token.tenant_id, data)


@router.get("/", response_model=Page[ExpenseOut])
def listar_despesas(
    page: Optional[str] = Query(default=None),
    limit: Optional[str] = Query(default=None),
    search: Optional[str] = Query(default=None),
    category: Optional[str] = Query(default=None),
    start_date: Optional[date] = Query(default=None),
    end_date: Optional[date] = Query(default=None),
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(admin_only),
):
    result = crud.list_page(
        db,
        current_token.tenant_id,
        page=page,
        limit=limit,
        search=search,
        filters={"category": category},
        criteria=date_range_criteria(Expense.expense_date, start_date, end_date),
    )
    return Page[ExpenseOut].from_result(result)


# declarada antes de /{expense_id}
@router.get("/stats", response_model=ExpenseStats)
def estatisticas_despesas(
    start_date: Optional[date] = Query(default=None),
    end_date: Optional[date] = Query(default=None),
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(admin_only),
):
    return crud.stats(db, current_token.tenant_id, start_date, end_date)


@router.get("/{expense_id}", response_model=ExpenseOut)
def obter_despesa(
    expense_id: UUID,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(admin_only),
):
    return validators.ou_404(crud.get(db, current_token.tenant_id, expense_id), "Despesa não encontrada")


@router.put("/{expense_id}", response_model=ExpenseOut)
def atualizar_despesa(
    expense_id: UUID,
    payload: ExpenseUpdate,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(admin_only),
):
    data = payload.model_dump(exclude_unset=True)
    data["updated_by"] = current_token.sub
    return validators.ou_404(crud.update(db, current_token.tenant_id, expense_id, data), "Despesa não encontrada")


@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
def deletar_despesa(
    expense_id: UUID,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(admin_only),
):
    validators.ou_404(crud.delete(db, current_token.tenant_id, expense_id), "Despesa não encontrada")
    return None
