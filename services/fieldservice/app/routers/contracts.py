from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.auth_dependencies import TokenPayload, admin_only, admin_or_supervisor, any_role
from app.core.database import get_db
from app.crud.contracts import contracts as crud
from app.schemas.contract_schema import ContractCreate, ContractOut, ContractUpdate
from shared.pagination import Page
from . import validators

router = APIRouter(prefix="/contracts", tags=["Contracts"])


@router.post("/", response_model=ContractOut, status_code=status.HTTP_201_CREATED)
def criar_contrato(
    payload: ContractCreate,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(admin_or_supervisor),
):
    validators.validar_referencias(db, current_token.tenant_id, customer_id=payload.customer_id)

    data = payload.model_dump()
    data.update(created_by=current_token.sub, updated_by=current_token.sub)
    return crud.create(db, current_token.tenant_id, data)


@router.get("/", response_model=Page[ContractOut])
def listar_contratos(
    page: Optional[str] = Query(default=None),
    limit: Optional[str] = Query(default=None),
    search: Optional[str] = Query(default=None, description="Termos, nome ou email do cliente"),
    status_filter: Optional[str] = Query(default=None, alias="status"),
    customer_id: Optional[UUID] = Query(default=None),
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(any_role),
):
    result = crud.list_page(
        db,
        current_token.tenant_id,
        page=page,
        limit=limit,
        search=search,
        filters={"status": status_filter, "customer_id": customer_id},
    )
    return Page[ContractOut].from_result(result)


@router.get("/{contract_id}", response_model=ContractOut)
def obter_contrato(
    contract_id: UUID,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(any_role),
):
    return validators.ou_404(crud.get(db, current_token.tenant_id, contract_id), "Contrato não encontrado")


@router.put("/{contract_id}", response_model=ContractOut)
def atualizar_contrato(
    contract_id: UUID,
    payload: ContractUpdate,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(admin_or_supervisor),
):
    validators.validar_referencias(db, current_token.tenant_id, customer_id=payload.customer_id)

    data = payload.model_dump(exclude_unset=True)
    data["updated_by"] = current_token.sub
    return validators.ou_404(crud.update(db, current_token.tenant_id, contract_id, data), "Contrato não encontrado")


@router.delete("/{contract_id}", status_code=status.HTTP_204_NO_CONTENT)
def deletar_contrato(
    contract_id: UUID,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(admin_only),
):
    validators.ou_404(crud.delete(db, current_token.tenant_id, contract_id), "Contrato não encontrado")
    return None
