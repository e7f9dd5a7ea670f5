import uuid
from sqlalchemy import JSON, Column, DateTime, Float, ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import relationship
from app.core.database import Base, utcnow
from app.models.customer import Customer
from app.models.quote import Quote  # noqa: F401
from app.models.technician import Technician


class ServiceOrder(Base):
    __tablename__ = "service_orders"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    tenant_id = Column(UUID(as_uuid=True), nullable=False, index=True)
    order_number = Column(String, nullable=False, unique=True)
    quote_id = Column(UUID(as_uuid=True), ForeignKey("quotes.id"), nullable=False)
    customer_id = Column(UUID(as_uuid=True), ForeignKey("customers.id"), nullable=False, index=True)
    assigned_technician_id = Column(UUID(as_uuid=True), ForeignKey("technicians.id"), nullable=True)
    equipments = Column(JSONB().with_variant(JSON, "sqlite"), nullable=False, default=list)
    # [{"type": "service"|"product", "item_id", "name", "quantity", "unit_value", "total_value"}]
    items = Column(JSONB().with_variant(JSON, "sqlite"), nullable=False, default=list)
    description = Column(Text, nullable=True)
    discount = Column(Float, nullable=True)
    other_discounts = Column(JSONB().with_variant(JSON, "sqlite"), nullable=False, default=list)
    subtotal = Column(Float, nullable=False, default=0)
    total_value = Column(Float, nullable=False, default=0)
    issued_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    scheduled_date = Column(DateTime(timezone=True), nullable=True)
    started_at = Column(DateTime(timezone=True), nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    status = Column(String, nullable=False, default="pending")
    priority = Column(String, nullable=False, default="normal")  # low | normal | high | urgent
    notes = Column(Text, nullable=True)
    customer_notes = Column(Text, nullable=True)
    created_by = Column(UUID(as_uuid=True), nullable=True)
    updated_by = Column(UUID(as_uuid=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    customer = relationship(Customer)
    assigned_technician = relationship(Technician)
