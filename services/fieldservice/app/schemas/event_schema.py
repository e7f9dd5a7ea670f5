import datetime as dt
from typing import Literal, Optional, Self
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field, model_validator
from app.schemas.common import CustomerRef

EventStatus = Literal["scheduled", "completed", "cancelled"]
_TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class EventBase(BaseModel):
    date: dt.date
    start_time: str = Field(..., pattern=_TIME_PATTERN, examples=["08:30"])
    end_time: str = Field(..., pattern=_TIME_PATTERN, examples=["10:00"])
    customer_id: UUID
    technician_id: UUID
    service_order_id: Optional[UUID] = None
    title: Optional[str] = None
    description: Optional[str] = None
    status: EventStatus = "scheduled"


class EventCreate(EventBase):
    @model_validator(mode="after")
    def validar_horarios(self) -> Self:
        if self.start_time >= self.end_time:
            raise ValueError("start_time deve ser menor que end_time")
        return self


class EventUpdate(BaseModel):
    date: Optional[dt.date] = None
    start_time: Optional[str] = Field(default=None, pattern=_TIME_PATTERN)
    end_time: Optional[str] = Field(default=None, pattern=_TIME_PATTERN)
    customer_id: Optional[UUID] = None
    technician_id: Optional[UUID] = None
    service_order_id: Optional[UUID] = None
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[EventStatus] = None

    @model_validator(mode="after")
    def validar_horarios(self) -> Self:
        if self.start_time and self.end_time and self.start_time >= self.end_time:
            raise ValueError("start_time deve ser menor que end_time")
        return self


class EventComplete(BaseModel):
    completion_notes: Optional[str] = None


class EventOut(EventBase):
    id: UUID
    tenant_id: UUID
    customer: Optional[CustomerRef] = None
    completion_notes: Optional[str] = None
    completed_at: Optional[dt.datetime] = None
    completed_by: Optional[UUID] = None
    created_at: dt.datetime
    updated_at: dt.datetime

    model_config = ConfigDict(from_attributes=True)
