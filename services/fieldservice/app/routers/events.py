from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.auth_dependencies import TokenPayload, admin_or_supervisor, any_role
from app.core.database import get_db
from app.crud.base import date_range_criteria
from app.crud.events import events as crud
from app.crud.service_orders import service_orders
from app.models.event import Event
from app.schemas.event_schema import EventComplete, EventCreate, EventOut, EventUpdate
from shared.pagination import Page
from . import validators

router = APIRouter(prefix="/events", tags=["Events"])


def _validar(db: Session, tenant_id: UUID, payload) -> None:
    validators.validar_referencias(
        db, tenant_id, customer_id=payload.customer_id, technician_id=payload.technician_id
    )
    if payload.service_order_id is not None:
        service_orders.require(db, tenant_id, payload.service_order_id, "Ordem de serviço")


@router.post("/", response_model=EventOut, status_code=status.HTTP_201_CREATED)
def criar_evento(
    payload: EventCreate,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(any_role),
):
    _validar(db, current_token.tenant_id, payload)

    data = payload.model_dump()
    data.update(created_by=current_token.sub, updated_by=current_token.sub)
    return crud.create(db, current_token.tenant_id, data)


@router.get("/", response_model=Page[EventOut])
def listar_eventos(
    page: Optional[str] = Query(default=None),
    limit: Optional[str] = Query(default=None),
    search: Optional[str] = Query(default=None),
    status_filter: Optional[str] = Query(default=None, alias="status"),
    technician_id: Optional[UUID] = Query(default=None),
    customer_id: Optional[UUID] = Query(default=None),
    start_date: Optional[date] = Query(default=None),
    end_date: Optional[date] = Query(default=None),
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(any_role),
):
    """Agenda em ordem cronológica (data e horário de início)."""
    result = crud.list_page(
        db,
        current_token.tenant_id,
        page=page,
        limit=limit,
        search=search,
        filters={"status": status_filter, "technician_id": technician_id, "customer_id": customer_id},
        criteria=date_range_criteria(Event.date, start_date, end_date),
    )
    return Page[EventOut].from_result(result)


@router.get("/{event_id}", response_model=EventOut)
def obter_evento(
    event_id: UUID,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(any_role),
):
    return validators.ou_404(crud.get(db, current_token.tenant_id, event_id), "Evento não encontrado")


@router.put("/{event_id}", response_model=EventOut)
def atualizar_evento(
    event_id: UUID,
    payload: EventUpdate,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(any_role),
):
    _validar(db, current_token.tenant_id, payload)

    data = payload.model_dump(exclude_unset=True)
    data["updated_by"] = current_token.sub
    return validators.ou_404(crud.update(db, current_token.tenant_id, event_id, data), "Evento não encontrado")


@router.patch("/{event_id}/complete", response_model=EventOut)
def concluir_evento(
    event_id: UUID,
    payload: EventComplete,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(any_role),
):
    event = crud.complete(db, current_token.tenant_id, event_id, current_token.sub, payload.completion_notes)
    return validators.ou_404(event, "Evento não encontrado")


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
def deletar_evento(
    event_id: UUID,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(admin_or_supervisor),
):
    validators.ou_404(crud.delete(db, current_token.tenant_id, event_id), "Evento não encontrado")
    return None
