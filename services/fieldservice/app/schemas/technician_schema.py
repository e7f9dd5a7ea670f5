from datetime import date, datetime
from typing import Literal, Optional
from uuid import UUID
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from app.schemas.common import Address, UserRef

TechnicianStatus = Literal["active", "inactive", "suspended"]


class TechnicianAccount(BaseModel):
    """Conta de acesso opcional criada junto com o técnico."""

    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=8)


class TechnicianBase(BaseModel):
    cpf: str = Field(..., min_length=1, examples=["123.456.789-00"])
    status: TechnicianStatus = "active"
    start_date: date
    end_date: Optional[date] = None
    address: Address
    phone_number: str = Field(..., min_length=1)


class TechnicianCreate(TechnicianBase):
    account: Optional[TechnicianAccount] = None


class TechnicianUpdate(BaseModel):
    cpf: Optional[str] = Field(default=None, min_length=1)
    status: Optional[TechnicianStatus] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    address: Optional[Address] = None
    phone_number: Optional[str] = None


class TechnicianOut(TechnicianBase):
    id: UUID
    tenant_id: UUID
    user_id: Optional[UUID] = None
    user: Optional[UserRef] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
