from datetime import datetime
from typing import List, Literal, Optional
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field
from app.schemas.common import CustomerRef

FollowUpStatus = Literal["pending", "completed"]


class FollowUpCreate(BaseModel):
    customer_id: UUID
    start_date: datetime
    status: FollowUpStatus = "pending"
    notes: List[str] = Field(default_factory=list)


class FollowUpUpdate(BaseModel):
    customer_id: Optional[UUID] = None
    start_date: Optional[datetime] = None
    status: Optional[FollowUpStatus] = None
    # anotações novas são acrescentadas às existentes
    notes: Optional[List[str]] = None


class FollowUpOut(BaseModel):
    id: UUID
    tenant_id: UUID
    customer_id: UUID
    customer: Optional[CustomerRef] = None
    start_date: datetime
    status: FollowUpStatus
    completed_at: Optional[datetime] = None
    completed_by: Optional[UUID] = None
    notes: List[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
