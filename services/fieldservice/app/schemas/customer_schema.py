from datetime import datetime
from typing import List, Literal, Optional
from uuid import UUID
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from app.schemas.common import Address, Equipment

CustomerType = Literal["residential", "commercial"]
CustomerStatus = Literal["active", "inactive", "suspended"]


class Note(BaseModel):
    date: datetime
    content: str
    created_by: UUID


class CustomerBase(BaseModel):
    name: str = Field(..., min_length=1, examples=["ACME Comércio Ltda"])
    email: Optional[EmailStr] = None
    type: CustomerType = "residential"
    cpf: Optional[str] = None
    cnpj: Optional[str] = None
    contact_name: Optional[str] = None
    status: CustomerStatus = "active"
    phone_numbers: List[str] = Field(default_factory=list)
    notes: Optional[str] = None
    address: Optional[Address] = None
    equipments: List[Equipment] = Field(default_factory=list)


class CustomerCreate(CustomerBase):
    pass


class CustomerUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[EmailStr] = None
    type: Optional[CustomerType] = None
    cpf: Optional[str] = None
    cnpj: Optional[str] = None
    contact_name: Optional[str] = None
    status: Optional[CustomerStatus] = None
    phone_numbers: Optional[List[str]] = None
    notes: Optional[str] = None
    address: Optional[Address] = None
    equipments: Optional[List[Equipment]] = None


class NoteCreate(BaseModel):
    content: str = Field(..., min_length=1)


class CustomerOut(CustomerBase):
    id: UUID
    tenant_id: UUID
    email: Optional[str] = None
    note_history: List[Note] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
