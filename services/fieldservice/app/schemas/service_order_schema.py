from datetime import datetime
from typing import List, Literal, Optional
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field
from app.schemas.common import CustomerRef, Equipment, OtherDiscount

ServiceOrderStatus = Literal["pending", "scheduled", "in_progress", "completed", "payment_order_created", "cancelled"]
ServiceOrderPriority = Literal["low", "normal", "high", "urgent"]


class ServiceOrderItem(BaseModel):
    type: Literal["service", "product"]
    item_id: UUID
    name: str
    description: Optional[str] = None
    quantity: int = Field(..., ge=1)
    unit_value: float = Field(..., ge=0)
    total_value: float = Field(..., ge=0)


class ServiceOrderBase(BaseModel):
    quote_id: UUID
    customer_id: UUID
    assigned_technician_id: Optional[UUID] = None
    equipments: List[Equipment] = Field(default_factory=list)
    items: List[ServiceOrderItem] = Field(default_factory=list)
    description: Optional[str] = None
    discount: Optional[float] = Field(default=None, ge=0, le=100)
    other_discounts: List[OtherDiscount] = Field(default_factory=list)
    subtotal: float = Field(default=0, ge=0)
    total_value: float = Field(default=0, ge=0)
    scheduled_date: Optional[datetime] = None
    status: ServiceOrderStatus = "pending"
    priority: ServiceOrderPriority = "normal"
    notes: Optional[str] = None
    customer_notes: Optional[str] = None


class ServiceOrderCreate(ServiceOrderBase):
    pass


class ServiceOrderFromQuote(BaseModel):
    assigned_technician_id: Optional[UUID] = None
    scheduled_date: Optional[datetime] = None
    priority: ServiceOrderPriority = "normal"
    notes: Optional[str] = None
    customer_notes: Optional[str] = None


class ServiceOrderUpdate(BaseModel):
    assigned_technician_id: Optional[UUID] = None
    equipments: Optional[List[Equipment]] = None
    items: Optional[List[ServiceOrderItem]] = None
    description: Optional[str] = None
    discount: Optional[float] = Field(default=None, ge=0, le=100)
    other_discounts: Optional[List[OtherDiscount]] = None
    subtotal: Optional[float] = Field(default=None, ge=0)
    total_value: Optional[float] = Field(default=None, ge=0)
    scheduled_date: Optional[datetime] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    status: Optional[ServiceOrderStatus] = None
    priority: Optional[ServiceOrderPriority] = None
    notes: Optional[str] = None
    customer_notes: Optional[str] = None


class ServiceOrderOut(ServiceOrderBase):
    id: UUID
    tenant_id: UUID
    order_number: str
    issued_at: datetime
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    customer: Optional[CustomerRef] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
