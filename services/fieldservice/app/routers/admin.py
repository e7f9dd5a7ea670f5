"""Rotas do administrador da plataforma (``is_master_admin``)."""

import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy.orm import Session

from app.core.auth_dependencies import TokenPayload, require_master_admin
from app.core.database import get_db
from app.crud import tenants as crud
from app.schemas.tenant_schema import (
    AdminTenantUpdate,
    TenantDeletedOut,
    TenantOut,
    TenantStatusUpdate,
)
from app.services.tenant_eraser import TenantEraser
from shared.pagination import Page
from . import validators

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"])


def get_tenant_eraser(request: Request) -> TenantEraser:
    return TenantEraser(publisher=getattr(request.app.state, "event_publisher", None))


@router.get("/tenants", response_model=Page[TenantOut])
def listar_tenants(
    page: Optional[str] = Query(default=None),
    limit: Optional[str] = Query(default=None),
    search: Optional[str] = Query(default=None, description="Nome ou id do tenant"),
    db: Session = Depends(get_db),
    _: TokenPayload = Depends(require_master_admin),
):
    return Page[TenantOut].from_result(crud.listar_tenants(db, page=page, limit=limit, search=search))


@router.put("/tenants/{tenant_id}/status", response_model=TenantOut)
def atualizar_status(
    tenant_id: UUID,
    payload: TenantStatusUpdate,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(require_master_admin),
):
    tenant = validators.ou_404(crud.atualizar_status(db, tenant_id, payload.status), "Tenant não encontrado")
    logger.info("Tenant %s passou para %s (por %s)", tenant_id, payload.status, current_token.sub)
    return tenant


@router.put("/tenants/{tenant_id}", response_model=TenantOut)
def atualizar_tenant(
    tenant_id: UUID,
    payload: AdminTenantUpdate,
    db: Session = Depends(get_db),
    _: TokenPayload = Depends(require_master_admin),
):
    tenant = crud.atualizar_tenant(db, tenant_id, payload.model_dump(exclude_unset=True))
    return validators.ou_404(tenant, "Tenant não encontrado")


@router.delete("/tenants/{tenant_id}", response_model=TenantDeletedOut)
def deletar_tenant(
    tenant_id: UUID,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(require_master_admin),
    eraser: TenantEraser = Depends(get_tenant_eraser),
):
    """Exclui o tenant e todos os seus dados em cascata."""
    if current_token.tenant_id == tenant_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Não é possível excluir o tenant do próprio administrador",
        )

    # TenantNotFoundError -> 404 e DeletionFailedError -> 400 via handlers de DomainError
    return eraser.erase(db, tenant_id)
