"""Cascading deletion of a tenant and everything it owns.

The cascade runs inside one database transaction: every step is a bulk
``DELETE ... WHERE tenant_id = :id`` and the tenant row goes last. Steps are
ordered so that a table is emptied before the tables it references, which
keeps foreign keys valid at every point of the cascade. Any failure rolls the
whole cascade back.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Protocol, Sequence
from uuid import UUID

from sqlalchemy.orm import Session

from app.core.exceptions import DeletionFailedError, TenantNotFoundError
from app.crud import tenants as tenants_crud
from app.crud.catalog import products, services
from app.crud.contracts import contracts
from app.crud.customers import customers
from app.crud.events import events
from app.crud.expenses import expenses
from app.crud.follow_ups import follow_ups
from app.crud.quotes import quotes
from app.crud.service_orders import service_orders
from app.crud.technicians import technicians
from app.crud.users import users
from app.crud.vehicles import vehicle_usages, vehicles
from app.models.tenant import Tenant
from shared.messaging import EventPublisher

logger = logging.getLogger(__name__)


class TenantScopedDeleter(Protocol):
    def delete_all_by_tenant(self, db: Session, tenant_id: UUID) -> int:
        ...


@dataclass(frozen=True)
class CascadeStep:
    name: str
    deleter: TenantScopedDeleter


def default_cascade() -> List[CascadeStep]:
    """Ordem de remoção: quem referencia sai antes de quem é referenciado."""
    return [
        CascadeStep("service_orders", service_orders),
        CascadeStep("expenses", expenses),
        CascadeStep("vehicle_usages", vehicle_usages),
        CascadeStep("vehicles", vehicles),
        CascadeStep("quotes", quotes),
        CascadeStep("contracts", contracts),
        CascadeStep("follow_ups", follow_ups),
        CascadeStep("events", events),
        CascadeStep("customers", customers),
        CascadeStep("technicians", technicians),
        CascadeStep("services", services),
        CascadeStep("products", products),
        CascadeStep("users", users),
    ]


class TenantEraser:
    def __init__(
        self,
        steps: Optional[Sequence[CascadeStep]] = None,
        *,
        find_tenant: Callable[[Session, UUID], Optional[Tenant]] = tenants_crud.buscar_tenant,
        delete_tenant: Callable[[Session, UUID], int] = tenants_crud.deletar_registro_tenant,
        publisher: Optional[EventPublisher] = None,
    ) -> None:
        self._steps = list(steps) if steps is not None else default_cascade()
        self._find_tenant = find_tenant
        self._delete_tenant = delete_tenant
        self._publisher = publisher

    @property
    def step_names(self) -> List[str]:
        return [step.name for step in self._steps]

    def erase(self, db: Session, tenant_id: UUID) -> Dict[str, object]:
        """Apaga o tenant e todos os seus dados.

        Returns:
            ``{"id", "name", "message"}`` do tenant removido.

        Raises:
            TenantNotFoundError: o tenant não existe.
            DeletionFailedError: a remoção da linha do tenant não afetou nenhum registro.
        """
        tenant = self._find_tenant(db, tenant_id)
        if tenant is None:
            raise TenantNotFoundError(tenant_id)
        tenant_name = tenant.name

        removed: Dict[str, int] = {}
        try:
            for step in self._steps:
                count = step.deleter.delete_all_by_tenant(db, tenant_id)
                removed[step.name] = count
                logger.info("Cascata do tenant %s: %d registro(s) removidos de %s", tenant_id, count, step.name)

            if self._delete_tenant(db, tenant_id) == 0:
                raise DeletionFailedError(tenant_id)
            db.commit()
        except Exception:
            db.rollback()
            logger.exception("Falha ao excluir tenant %s; cascata desfeita", tenant_id)
            raise

        logger.info("Tenant %s (%s) excluído: %s", tenant_id, tenant_name, removed)

        if self._publisher is not None:
            self._publisher.publish(
                "tenant.deleted",
                {"tenant_id": str(tenant_id), "name": tenant_name, "removed": removed},
                tenant_id=tenant_id,
            )

        return {
            "id": tenant_id,
            "name": tenant_name,
            "message": f"Tenant '{tenant_name}' e todos os seus dados foram excluídos",
        }
