from typing import Optional, TypeVar
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError
from app.crud.customers import customers
from app.crud.technicians import technicians
from app.crud.vehicles import vehicles
from app.models.user import User

T = TypeVar("T")


def ou_404(obj: Optional[T], detail: str) -> T:
    if obj is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)
    return obj


def ensure_unique_email(db: Session, email: str, user_id: Optional[UUID] = None) -> None:
    query = db.query(User).filter(User.email == email.lower())
    if user_id:
        query = query.filter(User.id != user_id)

    if query.first():
        raise ConflictError("E-mail já cadastrado", {"email": email.lower()})


def validar_referencias(
    db: Session,
    tenant_id: UUID,
    *,
    customer_id: Optional[UUID] = None,
    technician_id: Optional[UUID] = None,
    vehicle_id: Optional[UUID] = None,
) -> None:
    """Garante que as referências informadas existem no mesmo tenant (404 caso contrário)."""
    if customer_id is not None:
        customers.require(db, tenant_id, customer_id, "Cliente")
    if technician_id is not None:
        technicians.require(db, tenant_id, technician_id, "Técnico")
    if vehicle_id is not None:
        vehicles.require(db, tenant_id, vehicle_id, "Veículo")
