from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session

from app.core.database import utcnow
from app.crud.base import SearchOptions, TenantScopedCRUD
from app.models.vehicle import Vehicle, VehicleUsage


class VehicleUsageCRUD(TenantScopedCRUD[VehicleUsage]):
    def approve(self, db: Session, tenant_id: UUID, usage_id: UUID, approver_id: UUID) -> Optional[VehicleUsage]:
        usage = self.get(db, tenant_id, usage_id)
        if usage is None:
            return None

        usage.status = "approved"
        usage.approved_by = approver_id
        usage.approved_at = utcnow()
        usage.updated_by = approver_id
        self._commit(db)
        db.refresh(usage)
        return usage


vehicles = TenantScopedCRUD(
    Vehicle,
    SearchOptions(
        search_columns=(Vehicle.name, Vehicle.license_plate, Vehicle.make, Vehicle.model),
        filters={"is_active": Vehicle.is_active},
    ),
)

vehicle_usages = VehicleUsageCRUD(
    VehicleUsage,
    SearchOptions(
        filters={
            "status": VehicleUsage.status,
            "vehicle_id": VehicleUsage.vehicle_id,
            "technician_id": VehicleUsage.technician_id,
        },
    ),
)
