import uuid
from sqlalchemy import Column, DateTime, String
from sqlalchemy.dialects.postgresql import UUID
from app.core.database import Base, utcnow


class Tenant(Base):
    __tablename__ = "tenants"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False, index=True)
    plan = Column(String, nullable=False, default="free")  # free | pro | enterprise
    status = Column(String, nullable=False, default="pending")  # pending | active | suspended
    logo_url = Column(String, nullable=True)
    reply_to_email = Column(String, nullable=True)
    expire_date = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
