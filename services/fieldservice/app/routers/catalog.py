"""Catálogo do tenant: serviços e produtos usados nos orçamentos."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.auth_dependencies import TokenPayload, admin_only, any_role
from app.core.database import get_db
from app.crud.catalog import products, services
from app.schemas.catalog_schema import (
    ProductCreate,
    ProductOut,
    ProductUpdate,
    ServiceCreate,
    ServiceOut,
    ServiceUpdate,
)
from shared.pagination import Page
from . import validators

services_router = APIRouter(prefix="/services", tags=["Services"])
products_router = APIRouter(prefix="/products", tags=["Products"])


@services_router.post("/", response_model=ServiceOut, status_code=status.HTTP_201_CREATED)
def criar_servico(
    payload: ServiceCreate,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(admin_only),
):
    data = payload.model_dump()
    data.update(created_by=current_token.sub, updated_by=current_token.sub)
    return services.create(db, current_token.tenant_id, data)


@services_router.get("/", response_model=Page[ServiceOut])
def listar_servicos(
    page: Optional[str] = Query(default=None),
    limit: Optional[str] = Query(default=None),
    search: Optional[str] = Query(default=None),
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(any_role),
):
    result = services.list_page(db, current_token.tenant_id, page=page, limit=limit, search=search)
    return Page[ServiceOut].from_result(result)


@services_router.get("/{service_id}", response_model=ServiceOut)
def obter_servico(
    service_id: UUID,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(any_role),
):
    return validators.ou_404(services.get(db, current_token.tenant_id, service_id), "Serviço não encontrado")


@services_router.put("/{service_id}", response_model=ServiceOut)
def atualizar_servico(
    service_id: UUID,
    payload: ServiceUpdate,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(admin_only),
):
    data = payload.model_dump(exclude_unset=True)
    data["updated_by"] = current_token.sub
    return validators.ou_404(
        services.update(db, current_token.tenant_id, service_id, data), "Serviço não encontrado"
    )


@services_router.delete("/{service_id}", status_code=status.HTTP_204_NO_CONTENT)
def deletar_servico(
    service_id: UUID,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(admin_only),
):
    validators.ou_404(services.delete(db, current_token.tenant_id, service_id), "Serviço não encontrado")
    return None


@products_router.post("/", response_model=ProductOut, status_code=status.HTTP_201_CREATED)
def criar_produto(
    payload: ProductCreate,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(admin_only),
):
    data = payload.model_dump()
    data.update(created_by=current_token.sub, updated_by=current_token.sub)
    return products.create(db, current_token.tenant_id, data)


@products_router.get("/", response_model=Page[ProductOut])
def listar_produtos(
    page: Optional[str] = Query(default=None),
    limit: Optional[str] = Query(default=None),
    search: Optional[str] = Query(default=None),
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(any_role),
):
    result = products.list_page(db, current_token.tenant_id, page=page, limit=limit, search=search)
    return Page[ProductOut].from_result(result)


@products_router.get("/{product_id}", response_model=ProductOut)
def obter_produto(
    product_id: UUID,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(any_role),
):
    return validators.ou_404(products.get(db, current_token.tenant_id, product_id), "Produto não encontrado")


@products_router.put("/{product_id}", response_model=ProductOut)
def atualizar_produto(
    product_id: UUID,
    payload: ProductUpdate,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(admin_only),
):
    data = payload.model_dump(exclude_unset=True)
    data["updated_by"] = current_token.sub
    return validators.ou_404(
        products.update(db, current_token.tenant_id, product_id, data), "Produto não encontrado"
    )


@products_router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def deletar_produto(
    product_id: UUID,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(admin_only),
):
    validators.ou_404(products.delete(db, current_token.tenant_id, product_id), "Produto não encontrado")
    return None
