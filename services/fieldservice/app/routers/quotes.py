from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.auth_dependencies import TokenPayload, admin_or_supervisor, any_role
from app.core.database import get_db
from app.crud.catalog import products, services
from app.crud.quotes import quotes as crud
from app.schemas.quote_schema import QuoteCreate, QuoteOut, QuoteUpdate
from shared.pagination import Page
from . import validators

router = APIRouter(prefix="/quotes", tags=["Quotes"])


def _validar_itens(db: Session, tenant_id: UUID, payload) -> None:
    for line in payload.services or []:
        services.require(db, tenant_id, line.service_id, "Serviço")
    for line in payload.products or []:
        products.require(db, tenant_id, line.product_id, "Produto")


@router.post("/", response_model=QuoteOut, status_code=status.HTTP_201_CREATED)
def criar_orcamento(
    payload: QuoteCreate,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(any_role),
):
    validators.validar_referencias(db, current_token.tenant_id, customer_id=payload.customer_id)
    _validar_itens(db, current_token.tenant_id, payload)

    data = payload.model_dump(exclude_none=True)
    data.update(created_by=current_token.sub, updated_by=current_token.sub)
    return crud.create(db, current_token.tenant_id, data)


@router.get("/", response_model=Page[QuoteOut])
def listar_orcamentos(
    page: Optional[str] = Query(default=None),
    limit: Optional[str] = Query(default=None),
    search: Optional[str] = Query(default=None),
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
    return Page[QuoteOut].from_result(result)


@router.get("/{quote_id}", response_model=QuoteOut)
def obter_orcamento(
    quote_id: UUID,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(any_role),
):
    return validators.ou_404(crud.get(db, current_token.tenant_id, quote_id), "Orçamento não encontrado")


@router.put("/{quote_id}", response_model=QuoteOut)
def atualizar_orcamento(
    quote_id: UUID,
    payload: QuoteUpdate,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(any_role),
):
    validators.validar_referencias(db, current_token.tenant_id, customer_id=payload.customer_id)
    _validar_itens(db, current_token.tenant_id, payload)

    data = payload.model_dump(exclude_unset=True)
    data["updated_by"] = current_token.sub
    return validators.ou_404(crud.update(db, current_token.tenant_id, quote_id, data), "Orçamento não encontrado")


@router.delete("/{quote_id}", status_code=status.HTTP_204_NO_CONTENT)
def deletar_orcamento(
    quote_id: UUID,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(admin_or_supervisor),
):
    try:
        deleted = crud.delete(db, current_token.tenant_id, quote_id)
    except IntegrityError:
        raise HTTPException(status_code=400, detail="Orçamento já convertido em ordem de serviço")
    validators.ou_404(deleted, "Orçamento não encontrado")
    return None
