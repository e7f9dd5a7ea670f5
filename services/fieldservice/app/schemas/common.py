from typing import Optional
from uuid import UUID
from pydantic import BaseModel, ConfigDict


class CustomerRef(BaseModel):
    """Projeção reduzida do cliente embutida nas listagens."""

    id: UUID
    name: str
    email: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class UserRef(BaseModel):
    id: UUID
    first_name: str
    last_name: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class Address(BaseModel):
    street: Optional[str] = None
    number: Optional[str] = None
    complement: Optional[str] = None
    neighborhood: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: str = "Brazil"


class Equipment(BaseModel):
    name: str
    room: Optional[str] = None
    btus: Optional[int] = None
    maker: Optional[str] = None
    model: Optional[str] = None


class OtherDiscount(BaseModel):
    description: str
    amount: float


class DeletedOut(BaseModel):
    id: UUID
    message: str
