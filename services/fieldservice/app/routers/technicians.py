from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.auth_dependencies import TokenPayload, admin_only, any_role
from app.core.database import get_db
from app.crud.technicians import technicians as crud
from app.schemas.technician_schema import TechnicianCreate, TechnicianOut, TechnicianUpdate
from shared.pagination import Page
from . import validators

router = APIRouter(prefix="/technicians", tags=["Technicians"])


@router.post("/", response_model=TechnicianOut, status_code=status.HTTP_201_CREATED)
def criar_tecnico(
    payload: TechnicianCreate,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(admin_only),
):
    if payload.account:
        validators.ensure_unique_email(db, payload.account.email)

    data = payload.model_dump(exclude={"account"})
    data.update(created_by=current_token.sub, updated_by=current_token.sub)
    account = payload.account.model_dump() if payload.account else None
    try:
        return crud.create_with_account(db, current_token.tenant_id, data, account)
    except IntegrityError:
        raise HTTPException(status_code=400, detail="CPF já cadastrado para outro técnico")


@router.get("/", response_model=Page[TechnicianOut])
def listar_tecnicos(
    page: Optional[str] = Query(default=None),
    limit: Optional[str] = Query(default=None),
    search: Optional[str] = Query(default=None),
    status_filter: Optional[str] = Query(default=None, alias="status"),
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(any_role),
):
    result = crud.list_page(
        db, current_token.tenant_id, page=page, limit=limit, search=search, filters={"status": status_filter}
    )
    return Page[TechnicianOut].from_result(result)


@router.get("/{technician_id}", response_model=TechnicianOut)
def obter_tecnico(
    technician_id: UUID,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(any_role),
):
    return validators.ou_404(crud.get(db, current_token.tenant_id, technician_id), "Técnico não encontrado")


@router.put("/{technician_id}", response_model=TechnicianOut)
def atualizar_tecnico(
    technician_id: UUID,
    payload: TechnicianUpdate,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(admin_only),
):
    data = payload.model_dump(exclude_unset=True)
    data["updated_by"] = current_token.sub
    try:
        technician = crud.update(db, current_token.tenant_id, technician_id, data)
    except IntegrityError:
        raise HTTPException(status_code=400, detail="CPF já cadastrado para outro técnico")
    return validators.ou_404(technician, "Técnico não encontrado")


@router.delete("/{technician_id}", status_code=status.HTTP_204_NO_CONTENT)
def deletar_tecnico(
    technician_id: UUID,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(admin_only),
):
    """Remove o técnico e o usuário de acesso vinculado."""
    try:
        deleted = crud.delete(db, current_token.tenant_id, technician_id)
    except IntegrityError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Técnico possui agendamentos ou usos de veículo vinculados",
        )
    validators.ou_404(deleted, "Técnico não encontrado")
    return None
