import uuid
from sqlalchemy import Column, DateTime, Float, ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from app.core.database import Base, utcnow
from app.models.customer import Customer


class Contract(Base):
    __tablename__ = "contracts"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    tenant_id = Column(UUID(as_uuid=True), nullable=False, index=True)
    customer_id = Column(UUID(as_uuid=True), ForeignKey("customers.id"), nullable=False, index=True)
    start_date = Column(DateTime(timezone=True), nullable=False)
    expire_date = Column(DateTime(timezone=True), nullable=False, index=True)
    status = Column(String, nullable=False, default="active")  # pending | active | expired | cancelled
    frequency = Column(String, nullable=False)  # monthly | bimonthly | quarterly | biannual | annual
    terms = Column(Text, nullable=False)
    value = Column(Float, nullable=False)
    created_by = Column(UUID(as_uuid=True), nullable=True)
    updated_by = Column(UUID(as_uuid=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    customer = relationship(Customer)
