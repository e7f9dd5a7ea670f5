from datetime import datetime
from typing import Literal, Optional
from uuid import UUID
from pydantic import BaseModel, ConfigDict, EmailStr, Field

TenantPlan = Literal["free", "pro", "enterprise"]
TenantStatus = Literal["pending", "active", "suspended"]


class TenantSignup(BaseModel):
    """Cadastro público: cria o tenant e o primeiro administrador."""

    name: str = Field(..., min_length=1, examples=["Clima Frio Refrigeração"])
    plan: TenantPlan = "free"
    logo_url: Optional[str] = None
    reply_to_email: Optional[EmailStr] = None
    admin_first_name: str = Field(..., min_length=1, examples=["Maria"])
    admin_last_name: str = Field(..., min_length=1, examples=["Souza"])
    admin_email: EmailStr = Field(..., examples=["maria@climafrio.com.br"])
    admin_password: str = Field(..., min_length=8)


class TenantUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    logo_url: Optional[str] = None
    reply_to_email: Optional[EmailStr] = None


class AdminTenantUpdate(TenantUpdate):
    plan: Optional[TenantPlan] = None
    expire_date: Optional[datetime] = None


class TenantStatusUpdate(BaseModel):
    status: TenantStatus


class TenantOut(BaseModel):
    id: UUID
    name: str
    plan: TenantPlan
    status: TenantStatus
    logo_url: Optional[str] = None
    reply_to_email: Optional[str] = None
    expire_date: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TenantDeletedOut(BaseModel):
    id: UUID
    name: str
    message: str
