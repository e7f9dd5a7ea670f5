from datetime import datetime
from typing import Literal, Optional, Self
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field, model_validator


class VehicleBase(BaseModel):
    name: str = Field(..., min_length=1, examples=["Fiorino 01"])
    license_plate: str = Field(..., min_length=1, examples=["ABC1D23"])
    make: Optional[str] = None
    model: Optional[str] = None
    year: Optional[int] = Field(default=None, ge=1900, le=2100)
    is_active: bool = True


class VehicleCreate(VehicleBase):
    pass


class VehicleUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    license_plate: Optional[str] = Field(default=None, min_length=1)
    make: Optional[str] = None
    model: Optional[str] = None
    year: Optional[int] = Field(default=None, ge=1900, le=2100)
    is_active: Optional[bool] = None


class VehicleOut(VehicleBase):
    id: UUID
    tenant_id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class VehicleUsageBase(BaseModel):
    vehicle_id: UUID
    technician_id: UUID
    departure_date: datetime
    departure_mileage: int = Field(..., ge=0)
    arrival_date: Optional[datetime] = None
    arrival_mileage: Optional[int] = Field(default=None, ge=0)


class VehicleUsageCreate(VehicleUsageBase):
    @model_validator(mode="after")
    def validar_quilometragem(self) -> Self:
        if self.arrival_mileage is not None and self.arrival_mileage < self.departure_mileage:
            raise ValueError("arrival_mileage não pode ser menor que departure_mileage")
        return self


class VehicleUsageUpdate(BaseModel):
    vehicle_id: Optional[UUID] = None
    technician_id: Optional[UUID] = None
    departure_date: Optional[datetime] = None
    departure_mileage: Optional[int] = Field(default=None, ge=0)
    arrival_date: Optional[datetime] = None
    arrival_mileage: Optional[int] = Field(default=None, ge=0)


class VehicleUsageOut(VehicleUsageBase):
    id: UUID
    tenant_id: UUID
    status: Literal["pending", "approved"]
    approved_by: Optional[UUID] = None
    approved_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
