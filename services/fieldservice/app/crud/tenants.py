from typing import Any, Optional
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.crud.base import parse_uuid
from app.crud.users import users
from app.models.tenant import Tenant
from app.models.user import User
from shared.pagination import PageResult, PageWindow


def criar_tenant_com_admin(db: Session, tenant_data: dict, admin_data: dict, password: str) -> tuple[Tenant, User]:
    """Cadastro público: tenant ``pending`` e seu primeiro administrador."""
    novo_tenant = Tenant(**tenant_data, status="pending")
    db.add(novo_tenant)
    db.flush()

    admin = users.build_with_password(novo_tenant.id, dict(admin_data, user_type="admin"), password)
    db.add(admin)
    db.commit()
    db.refresh(novo_tenant)
    db.refresh(admin)
    return novo_tenant, admin


def buscar_tenant(db: Session, tenant_id: UUID) -> Optional[Tenant]:
    return db.query(Tenant).filter(Tenant.id == tenant_id).first()


def listar_tenants(db: Session, *, page: Any = None, limit: Any = None, search: Optional[str] = None) -> PageResult[Tenant]:
    window = PageWindow.from_raw(page, limit)
    query = db.query(Tenant)

    term = (search or "").strip()
    if term:
        clauses = [Tenant.name.icontains(term, autoescape=True)]
        as_uuid = parse_uuid(term)
        if as_uuid is not None:
            clauses.append(Tenant.id == as_uuid)
        query = query.filter(or_(*clauses))

    total = query.count()
    items = query.order_by(Tenant.created_at.desc()).offset(window.offset).limit(window.limit).all()
    return PageResult(items=items, total=total, page=window.page, limit=window.limit)


def atualizar_tenant(db: Session, tenant_id: UUID, update_data: dict) -> Optional[Tenant]:
    tenant = buscar_tenant(db, tenant_id)
    if not tenant:
        return None

    for field, value in update_data.items():
        setattr(tenant, field, value)

    db.commit()
    db.refresh(tenant)
    return tenant


def atualizar_status(db: Session, tenant_id: UUID, status: str) -> Optional[Tenant]:
    return atualizar_tenant(db, tenant_id, {"status": status})


def deletar_registro_tenant(db: Session, tenant_id: UUID) -> int:
    """Remove apenas a linha do tenant; quem chama faz o commit."""
    return db.query(Tenant).filter(Tenant.id == tenant_id).delete(synchronize_session=False)
