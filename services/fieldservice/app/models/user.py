import uuid
from sqlalchemy import Boolean, Column, DateTime, String
from sqlalchemy.dialects.postgresql import UUID
from app.core.database import Base, utcnow


class User(Base):
    __tablename__ = "users"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    tenant_id = Column(UUID(as_uuid=True), nullable=False, index=True)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    # login é feito só pelo email, então ele é único na plataforma inteira
    email = Column(String, nullable=False, unique=True, index=True)
    password_hash = Column(String, nullable=False)
    user_type = Column(String, nullable=False, default="technician")
    status = Column(String, nullable=False, default="active")  # active | inactive | suspended
    is_master_admin = Column(Boolean, nullable=False, default=False)
    language = Column(String, nullable=True)
    created_by = Column(UUID(as_uuid=True), nullable=True)
    updated_by = Column(UUID(as_uuid=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
