import secrets
from typing import Any, Dict, List
from uuid import UUID

from sqlalchemy.orm import Session

from app.core.database import utcnow
from app.crud.base import SearchOptions, TenantScopedCRUD
from app.crud.catalog import products, services
from app.crud.customers import customer_ref
from app.models.quote import Quote
from app.models.service_order import ServiceOrder


def generate_order_number() -> str:
    """``OS-<AAAAMMDD>-<6 hex>``."""
    return f"OS-{utcnow():%Y%m%d}-{secrets.token_hex(3).upper()}"


def _line(kind: str, item_id: Any, name: str, description: Any, quantity: int, unit_value: float) -> Dict[str, Any]:
    return {
        "type": kind,
        "item_id": str(item_id),
        "name": name,
        "description": description,
        "quantity": quantity,
        "unit_value": unit_value,
        "total_value": round(quantity * unit_value, 2),
    }


def items_from_quote(db: Session, tenant_id: UUID, quote: Quote) -> List[Dict[str, Any]]:
    """Converte as linhas de serviços e produtos do orçamento em itens da OS."""
    items = []
    for line in quote.services or []:
        service = services.require(db, tenant_id, UUID(str(line["service_id"])), "Serviço")
        items.append(_line("service", service.id, service.name, service.description, line["quantity"], line["unit_value"]))
    for line in quote.products or []:
        product = products.require(db, tenant_id, UUID(str(line["product_id"])), "Produto")
        items.append(_line("product", product.id, product.name, product.description, line["quantity"], line["unit_value"]))
    return items


class ServiceOrderCRUD(TenantScopedCRUD[ServiceOrder]):
    def create(self, db: Session, tenant_id: UUID, data: Dict[str, Any]) -> ServiceOrder:
        data = dict(data)
        data.setdefault("order_number", generate_order_number())
        return super().create(db, tenant_id, data)

    def create_from_quote(self, db: Session, tenant_id: UUID, quote: Quote, data: Dict[str, Any]) -> ServiceOrder:
        """Gera a OS a partir do orçamento e marca o orçamento como aceito."""
        items = items_from_quote(db, tenant_id, quote)
        subtotal = round(sum(item["total_value"] for item in items), 2)

        order = self.build(
            tenant_id,
            dict(
                data,
                order_number=generate_order_number(),
                quote_id=quote.id,
                customer_id=quote.customer_id,
                equipments=list(quote.equipments or []),
                items=items,
                description=quote.description,
                discount=quote.discount,
                other_discounts=list(quote.other_discounts or []),
                subtotal=subtotal,
                total_value=quote.total_value,
            ),
        )
        quote.status = "accepted"
        quote.updated_by = data.get("created_by")

        db.add(order)
        self._commit(db)
        db.refresh(order)
        return order


service_orders = ServiceOrderCRUD(
    ServiceOrder,
    SearchOptions(
        search_columns=(ServiceOrder.order_number, ServiceOrder.description),
        joined=(customer_ref(ServiceOrder.customer),),
        filters={
            "status": ServiceOrder.status,
            "priority": ServiceOrder.priority,
            "customer_id": ServiceOrder.customer_id,
        },
    ),
)
