from uuid import UUID
from typing import Optional

from sqlalchemy.orm import Session

from app.core.database import utcnow
from app.crud.base import JoinedRef, SearchOptions, TenantScopedCRUD
from app.models.customer import Customer


class CustomerCRUD(TenantScopedCRUD[Customer]):
    def add_note(
        self, db: Session, tenant_id: UUID, customer_id: UUID, content: str, author_id: UUID
    ) -> Optional[Customer]:
        customer = self.get(db, tenant_id, customer_id)
        if customer is None:
            return None

        note = {"date": utcnow().isoformat(), "content": content, "created_by": str(author_id)}
        # lista nova para o SQLAlchemy detectar a mudança na coluna JSON
        customer.note_history = [*(customer.note_history or []), note]
        customer.updated_by = author_id
        self._commit(db)
        db.refresh(customer)
        return customer


customers = CustomerCRUD(
    Customer,
    SearchOptions(
        search_columns=(Customer.name, Customer.email, Customer.cpf, Customer.cnpj, Customer.contact_name),
        filters={"status": Customer.status, "type": Customer.type},
    ),
)


def customer_ref(relationship, *search_columns) -> JoinedRef:
    """Join com o cliente projetado em ``{id, name, email}``."""
    return JoinedRef(
        relationship,
        search_columns=search_columns or (Customer.name,),
        projection=(Customer.id, Customer.name, Customer.email),
    )
