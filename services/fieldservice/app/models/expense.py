import uuid
from sqlalchemy import Column, Date, DateTime, Float, String
from sqlalchemy.dialects.postgresql import UUID
from app.core.database import Base, utcnow

EXPENSE_CATEGORIES = (
    "material", "parts", "consumables", "tools", "equipment",
    "fuel", "vehicle_maintenance", "transportation", "tolls", "parking",
    "labor", "contractor", "subcontractor", "consultant",
    "equipment_rental", "vehicle_rental", "facility_rental",
    "software_license", "utilities", "internet", "telephone",
    "insurance", "security", "marketing", "advertising",
    "promotional_materials", "office_supplies", "software",
    "training", "certification", "legal_fees", "accounting_fees",
    "facility_maintenance", "cleaning", "repairs", "security_systems",
    "miscellaneous", "taxes", "donations", "entertainment", "meals",
)


class Expense(Base):
    __tablename__ = "expenses"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    tenant_id = Column(UUID(as_uuid=True), nullable=False, index=True)
    title = Column(String, nullable=True)
    category = Column(String, nullable=True, index=True)
    amount = Column(Float, nullable=False)
    expense_date = Column(Date, nullable=False, index=True)
    approved_by = Column(UUID(as_uuid=True), nullable=True)
    approved_date = Column(DateTime(timezone=True), nullable=True)
    created_by = Column(UUID(as_uuid=True), nullable=True)
    updated_by = Column(UUID(as_uuid=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
