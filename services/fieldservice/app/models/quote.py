import uuid
from sqlalchemy import JSON, Column, DateTime, Float, ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import relationship
from app.core.database import Base, utcnow
from app.models.customer import Customer


class Quote(Base):
    __tablename__ = "quotes"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    tenant_id = Column(UUID(as_uuid=True), nullable=False, index=True)
    customer_id = Column(UUID(as_uuid=True), ForeignKey("customers.id"), nullable=False, index=True)
    equipments = Column(JSONB().with_variant(JSON, "sqlite"), nullable=False, default=list)
    # [{"service_id", "quantity", "unit_value"}]
    services = Column(JSONB().with_variant(JSON, "sqlite"), nullable=False, default=list)
    # [{"product_id", "quantity", "unit_value"}]
    products = Column(JSONB().with_variant(JSON, "sqlite"), nullable=False, default=list)
    total_value = Column(Float, nullable=False)
    description = Column(Text, nullable=True)
    discount = Column(Float, nullable=True)
    other_discounts = Column(JSONB().with_variant(JSON, "sqlite"), nullable=False, default=list)
    status = Column(String, nullable=False, default="draft")  # draft | sent | accepted | rejected
    valid_until = Column(DateTime(timezone=True), nullable=False)
    issued_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    created_by = Column(UUID(as_uuid=True), nullable=True)
    updated_by = Column(UUID(as_uuid=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    customer = relationship(Customer)
