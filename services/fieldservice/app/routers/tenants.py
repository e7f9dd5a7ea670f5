from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.auth_dependencies import TokenPayload, admin_only, get_current_token
from app.core.database import get_db
from app.crud import tenants as crud
from app.schemas.tenant_schema import TenantOut, TenantSignup, TenantUpdate
from . import validators

router = APIRouter(prefix="/tenants", tags=["Tenants"])


@router.post("/", response_model=TenantOut, status_code=status.HTTP_201_CREATED)
def criar_tenant(payload: TenantSignup, db: Session = Depends(get_db)):
    """Cadastro público. O tenant nasce ``pending`` até ser ativado pelo administrador da plataforma."""
    validators.ensure_unique_email(db, payload.admin_email)

    tenant_data = payload.model_dump(include={"name", "plan", "logo_url", "reply_to_email"})
    admin_data = {
        "first_name": payload.admin_first_name,
        "last_name": payload.admin_last_name,
        "email": payload.admin_email,
    }
    try:
        tenant, _ = crud.criar_tenant_com_admin(db, tenant_data, admin_data, payload.admin_password)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail="Erro ao criar tenant")
    return tenant


@router.get("/me", response_model=TenantOut)
def obter_meu_tenant(
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(get_current_token),
):
    return validators.ou_404(crud.buscar_tenant(db, current_token.tenant_id), "Tenant não encontrado")


@router.put("/{tenant_id}", response_model=TenantOut)
def atualizar_tenant(
    tenant_id: UUID,
    tenant_update: TenantUpdate,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(admin_only),
):
    # admin só pode mexer no próprio tenant
    if current_token.tenant_id != tenant_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Você não tem permissão para atualizar este tenant.",
        )

    tenant = crud.atualizar_tenant(db, tenant_id, tenant_update.model_dump(exclude_unset=True))
    return validators.ou_404(tenant, "Tenant não encontrado")
