from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.auth_dependencies import TokenPayload, admin_only, admin_or_supervisor, any_role
from app.core.database import get_db
from app.crud.customers import customers as crud
from app.schemas.customer_schema import CustomerCreate, CustomerOut, CustomerUpdate, NoteCreate
from shared.pagination import Page
from . import validators

router = APIRouter(prefix="/customers", tags=["Customers"])


@router.post("/", response_model=CustomerOut, status_code=status.HTTP_201_CREATED)
def criar_cliente(
    payload: CustomerCreate,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(admin_or_supervisor),
):
    data = payload.model_dump()
    data.update(created_by=current_token.sub, updated_by=current_token.sub)
    return crud.create(db, current_token.tenant_id, data)


@router.get("/", response_model=Page[CustomerOut])
def listar_clientes(
    page: Optional[str] = Query(default=None),
    limit: Optional[str] = Query(default=None),
    search: Optional[str] = Query(default=None),
    status_filter: Optional[str] = Query(default=None, alias="status"),
    customer_type: Optional[str] = Query(default=None, alias="type"),
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(any_role),
):
    result = crud.list_page(
        db,
        current_token.tenant_id,
        page=page,
        limit=limit,
        search=search,
        filters={"status": status_filter, "type": customer_type},
    )
    return Page[CustomerOut].from_result(result)


@router.get("/{customer_id}", response_model=CustomerOut)
def obter_cliente(
    customer_id: UUID,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(any_role),
):
    return validators.ou_404(crud.get(db, current_token.tenant_id, customer_id), "Cliente não encontrado")


@router.put("/{customer_id}", response_model=CustomerOut)
def atualizar_cliente(
    customer_id: UUID,
    payload: CustomerUpdate,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(admin_or_supervisor),
):
    data = payload.model_dump(exclude_unset=True)
    data["updated_by"] = current_token.sub
    customer = crud.update(db, current_token.tenant_id, customer_id, data)
    return validators.ou_404(customer, "Cliente não encontrado")


@router.post("/{customer_id}/notes", response_model=CustomerOut)
def adicionar_anotacao(
    customer_id: UUID,
    payload: NoteCreate,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(any_role),
):
    customer = crud.add_note(db, current_token.tenant_id, customer_id, payload.content, current_token.sub)
    return validators.ou_404(customer, "Cliente não encontrado")


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
def deletar_cliente(
    customer_id: UUID,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(admin_only),
):
    try:
        deleted = crud.delete(db, current_token.tenant_id, customer_id)
    except IntegrityError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cliente possui orçamentos, ordens ou agendamentos vinculados",
        )
    validators.ou_404(deleted, "Cliente não encontrado")
    return None
