from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field


class ServiceBase(BaseModel):
    name: str = Field(..., min_length=1, examples=["Higienização de split"])
    description: Optional[str] = None
    value: float = Field(..., ge=0, examples=[180.0])


class ServiceCreate(ServiceBase):
    pass


class ServiceUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    value: Optional[float] = Field(default=None, ge=0)


class ServiceOut(ServiceBase):
    id: UUID
    tenant_id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProductBase(BaseModel):
    name: str = Field(..., min_length=1, examples=["Capacitor 35uF"])
    description: Optional[str] = None
    maker: Optional[str] = None
    model: Optional[str] = None
    sku: Optional[str] = None
    value: float = Field(..., ge=0)


class ProductCreate(ProductBase):
    pass


class ProductUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    maker: Optional[str] = None
    model: Optional[str] = None
    sku: Optional[str] = None
    value: Optional[float] = Field(default=None, ge=0)


class ProductOut(ProductBase):
    id: UUID
    tenant_id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
