from datetime import datetime
from typing import Literal, Optional, Self
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field, model_validator
from app.schemas.common import CustomerRef

ContractStatus = Literal["pending", "active", "expired", "cancelled"]
ContractFrequency = Literal["monthly", "bimonthly", "quarterly", "biannual", "annual"]


class ContractBase(BaseModel):
    customer_id: UUID
    start_date: datetime
    expire_date: datetime
    status: ContractStatus = "active"
    frequency: ContractFrequency
    terms: str = Field(..., min_length=1)
    value: float = Field(..., ge=0)


class ContractCreate(ContractBase):
    @model_validator(mode="after")
    def validar_vigencia(self) -> Self:
        if self.expire_date <= self.start_date:
            raise ValueError("expire_date deve ser posterior a start_date")
        return self


class ContractUpdate(BaseModel):
    customer_id: Optional[UUID] = None
    start_date: Optional[datetime] = None
    expire_date: Optional[datetime] = None
    status: Optional[ContractStatus] = None
    frequency: Optional[ContractFrequency] = None
    terms: Optional[str] = Field(default=None, min_length=1)
    value: Optional[float] = Field(default=None, ge=0)


class ContractOut(ContractBase):
    id: UUID
    tenant_id: UUID
    customer: Optional[CustomerRef] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
