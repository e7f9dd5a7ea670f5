import uuid
from sqlalchemy import JSON, Column, DateTime, String, Text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from app.core.database import Base, utcnow


class Customer(Base):
    __tablename__ = "customers"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    tenant_id = Column(UUID(as_uuid=True), nullable=False, index=True)
    name = Column(String, nullable=False, index=True)
    email = Column(String, nullable=True, index=True)
    type = Column(String, nullable=False, default="residential")  # residential | commercial
    cpf = Column(String, nullable=True)
    cnpj = Column(String, nullable=True)
    contact_name = Column(String, nullable=True)
    status = Column(String, nullable=False, default="active")
    phone_numbers = Column(JSONB().with_variant(JSON, "sqlite"), nullable=False, default=list)
    notes = Column(Text, nullable=True)
    note_history = Column(JSONB().with_variant(JSON, "sqlite"), nullable=False, default=list)
    address = Column(JSONB().with_variant(JSON, "sqlite"), nullable=True)
    equipments = Column(JSONB().with_variant(JSON, "sqlite"), nullable=False, default=list)
    created_by = Column(UUID(as_uuid=True), nullable=True)
    updated_by = Column(UUID(as_uuid=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
