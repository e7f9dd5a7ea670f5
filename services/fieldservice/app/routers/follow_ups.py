from datetime import datetime
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.auth_dependencies import TokenPayload, admin_or_supervisor, any_role
from app.core.database import get_db
from app.crud.base import date_range_criteria
from app.crud.follow_ups import follow_ups as crud
from app.models.follow_up import FollowUp
from app.schemas.follow_up_schema import FollowUpCreate, FollowUpOut, FollowUpUpdate
from shared.pagination import Page
from . import validators

router = APIRouter(prefix="/follow-ups", tags=["Follow-ups"])


@router.post("/", response_model=FollowUpOut, status_code=status.HTTP_201_CREATED)
def criar_follow_up(
    payload: FollowUpCreate,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(admin_or_supervisor),
):
    validators.validar_referencias(db, current_token.tenant_id, customer_id=payload.customer_id)

    data = payload.model_dump()
    data["notes"] = [note.strip() for note in data["notes"] if note.strip()]
    data.update(created_by=current_token.sub, updated_by=current_token.sub)
    return crud.create(db, current_token.tenant_id, data)


@router.get("/", response_model=Page[FollowUpOut])
def listar_follow_ups(
    page: Optional[str] = Query(default=None),
    limit: Optional[str] = Query(default=None),
    search: Optional[str] = Query(default=None),
    status_filter: Optional[str] = Query(default=None, alias="status"),
    customer_id: Optional[UUID] = Query(default=None),
    start_date: Optional[datetime] = Query(default=None),
    end_date: Optional[datetime] = Query(default=None),
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(any_role),
):
    """Follow-ups ordenados pela data de início mais próxima."""
    result = crud.list_page(
        db,
        current_token.tenant_id,
        page=page,
        limit=limit,
        search=search,
        filters={"status": status_filter, "customer_id": customer_id},
        criteria=date_range_criteria(FollowUp.start_date, start_date, end_date),
    )
    return Page[FollowUpOut].from_result(result)


@router.get("/{follow_up_id}", response_model=FollowUpOut)
def obter_follow_up(
    follow_up_id: UUID,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(any_role),
):
    return validators.ou_404(crud.get(db, current_token.tenant_id, follow_up_id), "Follow-up não encontrado")


@router.put("/{follow_up_id}", response_model=FollowUpOut)
def atualizar_follow_up(
    follow_up_id: UUID,
    payload: FollowUpUpdate,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(admin_or_supervisor),
):
    validators.validar_referencias(db, current_token.tenant_id, customer_id=payload.customer_id)

    follow_up = crud.update_follow_up(
        db, current_token.tenant_id, follow_up_id, payload.model_dump(exclude_unset=True), current_token.sub
    )
    return validators.ou_404(follow_up, "Follow-up não encontrado")


@router.delete("/{follow_up_id}", status_code=status.HTTP_204_NO_CONTENT)
def deletar_follow_up(
    follow_up_id: UUID,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(admin_or_supervisor),
):
    validators.ou_404(crud.delete(db, current_token.tenant_id, follow_up_id), "Follow-up não encontrado")
    return None
