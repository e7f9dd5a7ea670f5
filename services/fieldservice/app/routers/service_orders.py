from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.auth_dependencies import TokenPayload, admin_or_supervisor, any_role
from app.core.database import get_db
from app.crud.quotes import quotes
from app.crud.service_orders import service_orders as crud
from app.schemas.service_order_schema import (
    ServiceOrderCreate,
    ServiceOrderFromQuote,
    ServiceOrderOut,
    ServiceOrderUpdate,
)
from shared.pagination import Page
from . import validators

router = APIRouter(prefix="/service-orders", tags=["Service Orders"])


@router.post("/", response_model=ServiceOrderOut, status_code=status.HTTP_201_CREATED)
def criar_ordem(
    payload: ServiceOrderCreate,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(admin_or_supervisor),
):
    quotes.require(db, current_token.tenant_id, payload.quote_id, "Orçamento")
    validators.validar_referencias(
        db,
        current_token.tenant_id,
        customer_id=payload.customer_id,
        technician_id=payload.assigned_technician_id,
    )

    data = payload.model_dump()
    data.update(created_by=current_token.sub, updated_by=current_token.sub)
    return crud.create(db, current_token.tenant_id, data)


@router.post("/from-quote/{quote_id}", response_model=ServiceOrderOut, status_code=status.HTTP_201_CREATED)
def criar_ordem_de_orcamento(
    quote_id: UUID,
    payload: ServiceOrderFromQuote,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(admin_or_supervisor),
):
    """Gera a ordem de serviço copiando cliente, equipamentos e itens do orçamento."""
    quote = validators.ou_404(quotes.get(db, current_token.tenant_id, quote_id), "Orçamento não encontrado")
    if quote.status == "rejected":
        raise HTTPException(status_code=400, detail="Orçamento rejeitado não pode gerar ordem de serviço")
    validators.validar_referencias(db, current_token.tenant_id, technician_id=payload.assigned_technician_id)

    data = payload.model_dump()
    data.update(created_by=current_token.sub, updated_by=current_token.sub)
    return crud.create_from_quote(db, current_token.tenant_id, quote, data)


@router.get("/", response_model=Page[ServiceOrderOut])
def listar_ordens(
    page: Optional[str] = Query(default=None),
    limit: Optional[str] = Query(default=None),
    search: Optional[str] = Query(default=None),
    status_filter: Optional[str] = Query(default=None, alias="status"),
    priority: Optional[str] = Query(default=None),
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
        filters={"status": status_filter, "priority": priority, "customer_id": customer_id},
    )
    return Page[ServiceOrderOut].from_result(result)


@router.get("/{order_id}", response_model=ServiceOrderOut)
def obter_ordem(
    order_id: UUID,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(any_role),
):
    return validators.ou_404(crud.get(db, current_token.tenant_id, order_id), "Ordem de serviço não encontrada")


@router.put("/{order_id}", response_model=ServiceOrderOut)
def atualizar_ordem(
    order_id: UUID,
    payload: ServiceOrderUpdate,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(admin_or_supervisor),
):
    validators.validar_referencias(db, current_token.tenant_id, technician_id=payload.assigned_technician_id)

    data = payload.model_dump(exclude_unset=True)
    data["updated_by"] = current_token.sub
    order = crud.update(db, current_token.tenant_id, order_id, data)
    return validators.ou_404(order, "Ordem de serviço não encontrada")


@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
def deletar_ordem(
    order_id: UUID,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(admin_or_supervisor),
):
    try:
        deleted = crud.delete(db, current_token.tenant_id, order_id)
    except IntegrityError:
        raise HTTPException(status_code=400, detail="Erro ao excluir ordem de serviço")
    validators.ou_404(deleted, "Ordem de serviço não encontrada")
    return None
