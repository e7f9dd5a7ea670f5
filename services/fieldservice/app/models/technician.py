import uuid
from sqlalchemy import JSON, Column, Date, DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import relationship
from app.core.database import Base, utcnow
from app.models.user import User


class Technician(Base):
    __tablename__ = "technicians"
    __table_args__ = (
        UniqueConstraint("tenant_id", "cpf", name="uq_technicians_tenant_cpf"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    tenant_id = Column(UUID(as_uuid=True), nullable=False, index=True)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    cpf = Column(String, nullable=False)
    status = Column(String, nullable=False, default="active")
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)
    address = Column(JSONB().with_variant(JSON, "sqlite"), nullable=False, default=dict)
    phone_number = Column(String, nullable=False)
    created_by = Column(UUID(as_uuid=True), nullable=True)
    updated_by = Column(UUID(as_uuid=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    user = relationship(User)
