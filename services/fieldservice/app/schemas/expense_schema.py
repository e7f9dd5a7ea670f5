from datetime import date, datetime
from typing import Annotated, List, Optional
from uuid import UUID
from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from app.models.expense import EXPENSE_CATEGORIES


def _validar_categoria(value: Optional[str]) -> Optional[str]:
    if value is not None and value not in EXPENSE_CATEGORIES:
        raise ValueError(f"categoria inválida: {value}")
    return value


ExpenseCategory = Annotated[Optional[str], AfterValidator(_validar_categoria)]


class ExpenseBase(BaseModel):
    title: Optional[str] = None
    category: ExpenseCategory = Field(default=None, examples=["fuel"])
    amount: float = Field(..., ge=0)
    expense_date: date


class ExpenseCreate(ExpenseBase):
    pass


class ExpenseUpdate(BaseModel):
    title: Optional[str] = None
    category: ExpenseCategory = None
    amount: Optional[float] = Field(default=None, ge=0)
    expense_date: Optional[date] = None


class ExpenseOut(ExpenseBase):
    id: UUID
    tenant_id: UUID
    approved_by: Optional[UUID] = None
    approved_date: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CategoryTotal(BaseModel):
    category: Optional[str]
    total: float
    count: int


class MonthTotal(BaseModel):
    month: str  # YYYY-MM
    total: float
    count: int


class ExpenseStats(BaseModel):
    total_amount: float
    count: int
    by_category: List[CategoryTotal]
    by_month: List[MonthTotal]
