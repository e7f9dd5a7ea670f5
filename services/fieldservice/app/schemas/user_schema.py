from datetime import datetime
from typing import Literal, Optional
from uuid import UUID
from pydantic import BaseModel, ConfigDict, EmailStr, Field

UserType = Literal["admin", "supervisor", "technician"]
UserStatus = Literal["active", "inactive", "suspended"]


class UserBase(BaseModel):
    first_name: str = Field(..., min_length=1, examples=["João"])
    last_name: str = Field(..., min_length=1, examples=["Silva"])
    email: EmailStr = Field(..., examples=["joao.silva@exemplo.com"])
    user_type: UserType = "technician"
    status: UserStatus = "active"
    language: Optional[str] = Field(default=None, examples=["pt-BR"])


class UserCreate(UserBase):
    password: str = Field(..., min_length=8, examples=["senha123"])


class UserUpdate(BaseModel):
    first_name: Optional[str] = Field(default=None, min_length=1)
    last_name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[EmailStr] = None
    user_type: Optional[UserType] = None
    status: Optional[UserStatus] = None
    language: Optional[str] = None
    password: Optional[str] = Field(default=None, min_length=8)


class UserOut(UserBase):
    id: UUID
    tenant_id: UUID
    is_master_admin: bool = False
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
