from datetime import datetime
from typing import List, Literal, Optional
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field
from app.schemas.common import CustomerRef, Equipment, OtherDiscount

QuoteStatus = Literal["draft", "sent", "accepted", "rejected"]


class QuoteServiceLine(BaseModel):
    service_id: UUID
    quantity: int = Field(..., ge=1)
    unit_value: float = Field(..., ge=0)


class QuoteProductLine(BaseModel):
    product_id: UUID
    quantity: int = Field(..., ge=1)
    unit_value: float = Field(..., ge=0)


class QuoteBase(BaseModel):
    customer_id: UUID
    equipments: List[Equipment] = Field(default_factory=list)
    services: List[QuoteServiceLine] = Field(default_factory=list)
    products: List[QuoteProductLine] = Field(default_factory=list)
    total_value: float = Field(..., ge=0)
    description: Optional[str] = None
    discount: Optional[float] = Field(default=None, ge=0, le=100)
    other_discounts: List[OtherDiscount] = Field(default_factory=list)
    status: QuoteStatus = "draft"
    valid_until: datetime
    issued_at: Optional[datetime] = None


class QuoteCreate(QuoteBase):
    pass


class QuoteUpdate(BaseModel):
    customer_id: Optional[UUID] = None
    equipments: Optional[List[Equipment]] = None
    services: Optional[List[QuoteServiceLine]] = None
    products: Optional[List[QuoteProductLine]] = None
    total_value: Optional[float] = Field(default=None, ge=0)
    description: Optional[str] = None
    discount: Optional[float] = Field(default=None, ge=0, le=100)
    other_discounts: Optional[List[OtherDiscount]] = None
    status: Optional[QuoteStatus] = None
    valid_until: Optional[datetime] = None


class QuoteOut(QuoteBase):
    id: UUID
    tenant_id: UUID
    issued_at: datetime
    customer: Optional[CustomerRef] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
