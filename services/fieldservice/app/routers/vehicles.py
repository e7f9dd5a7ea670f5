from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.auth_dependencies import TokenPayload, admin_only, admin_or_supervisor, any_role
from app.core.database import get_db
from app.crud.vehicles import vehicle_usages, vehicles
from app.schemas.vehicle_schema import (
    VehicleCreate,
    VehicleOut,
    VehicleUpdate,
    VehicleUsageCreate,
    VehicleUsageOut,
    VehicleUsageUpdate,
)
from shared.pagination import Page
from . import validators

vehicles_router = APIRouter(prefix="/vehicles", tags=["Vehicles"])
usages_router = APIRouter(prefix="/vehicle-usages", tags=["Vehicle Usages"])


@vehicles_router.post("/", response_model=VehicleOut, status_code=status.HTTP_201_CREATED)
def criar_veiculo(
    payload: VehicleCreate,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(admin_or_supervisor),
):
    data = payload.model_dump()
    data.update(created_by=current_token.sub, updated_by=current_token.sub)
    return vehicles.create(db, current_token.tenant_id, data)


@vehicles_router.get("/", response_model=Page[VehicleOut])
def listar_veiculos(
    page: Optional[str] = Query(default=None),
    limit: Optional[str] = Query(default=None),
    search: Optional[str] = Query(default=None),
    is_active: Optional[bool] = Query(default=None),
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(any_role),
):
    result = vehicles.list_page(
        db, current_token.tenant_id, page=page, limit=limit, search=search, filters={"is_active": is_active}
    )
    return Page[VehicleOut].from_result(result)


@vehicles_router.get("/{vehicle_id}", response_model=VehicleOut)
def obter_veiculo(
    vehicle_id: UUID,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(any_role),
):
    return validators.ou_404(vehicles.get(db, current_token.tenant_id, vehicle_id), "Veículo não encontrado")


@vehicles_router.put("/{vehicle_id}", response_model=VehicleOut)
def atualizar_veiculo(
    vehicle_id: UUID,
    payload: VehicleUpdate,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(admin_or_supervisor),
):
    data = payload.model_dump(exclude_unset=True)
    data["updated_by"] = current_token.sub
    return validators.ou_404(vehicles.update(db, current_token.tenant_id, vehicle_id, data), "Veículo não encontrado")


@vehicles_router.delete("/{vehicle_id}", status_code=status.HTTP_204_NO_CONTENT)
def deletar_veiculo(
    vehicle_id: UUID,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(admin_or_supervisor),
):
    try:
        deleted = vehicles.delete(db, current_token.tenant_id, vehicle_id)
    except IntegrityError:
        raise HTTPException(status_code=400, detail="Veículo possui registros de uso")
    validators.ou_404(deleted, "Veículo não encontrado")
    return None


@usages_router.post("/", response_model=VehicleUsageOut, status_code=status.HTTP_201_CREATED)
def registrar_uso(
    payload: VehicleUsageCreate,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(any_role),
):
    validators.validar_referencias(
        db, current_token.tenant_id, vehicle_id=payload.vehicle_id, technician_id=payload.technician_id
    )

    data = payload.model_dump()
    data.update(created_by=current_token.sub, updated_by=current_token.sub)
    return vehicle_usages.create(db, current_token.tenant_id, data)


@usages_router.get("/", response_model=Page[VehicleUsageOut])
def listar_usos(
    page: Optional[str] = Query(default=None),
    limit: Optional[str] = Query(default=None),
    status_filter: Optional[str] = Query(default=None, alias="status"),
    vehicle_id: Optional[UUID] = Query(default=None),
    technician_id: Optional[UUID] = Query(default=None),
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(any_role),
):
    result = vehicle_usages.list_page(
        db,
        current_token.tenant_id,
        page=page,
        limit=limit,
        filters={"status": status_filter, "vehicle_id": vehicle_id, "technician_id": technician_id},
    )
    return Page[VehicleUsageOut].from_result(result)


@usages_router.get("/{usage_id}", response_model=VehicleUsageOut)
def obter_uso(
    usage_id: UUID,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(any_role),
):
    return validators.ou_404(vehicle_usages.get(db, current_token.tenant_id, usage_id), "Registro de uso não encontrado")


@usages_router.put("/{usage_id}", response_model=VehicleUsageOut)
def atualizar_uso(
    usage_id: UUID,
    payload: VehicleUsageUpdate,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(any_role),
):
    validators.validar_referencias(
        db, current_token.tenant_id, vehicle_id=payload.vehicle_id, technician_id=payload.technician_id
    )

    data = payload.model_dump(exclude_unset=True)
    data["updated_by"] = current_token.sub
    usage = vehicle_usages.update(db, current_token.tenant_id, usage_id, data)
    return validators.ou_404(usage, "Registro de uso não encontrado")


@usages_router.post("/{usage_id}/approve", response_model=VehicleUsageOut)
def aprovar_uso(
    usage_id: UUID,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(admin_or_supervisor),
):
    usage = vehicle_usages.approve(db, current_token.tenant_id, usage_id, current_token.sub)
    return validators.ou_404(usage, "Registro de uso não encontrado")


@usages_router.delete("/{usage_id}", status_code=status.HTTP_204_NO_CONTENT)
def deletar_uso(
    usage_id: UUID,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(admin_only),
):
    validators.ou_404(vehicle_usages.delete(db, current_token.tenant_id, usage_id), "Registro de uso não encontrado")
    return None
