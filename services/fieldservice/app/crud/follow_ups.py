from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session

from app.core.database import utcnow
from app.crud.base import SearchOptions, TenantScopedCRUD
from app.crud.customers import customer_ref
from app.models.customer import Customer
from app.models.follow_up import FollowUp


class FollowUpCRUD(TenantScopedCRUD[FollowUp]):
    def update_follow_up(
        self, db: Session, tenant_id: UUID, follow_up_id: UUID, data: dict, user_id: UUID
    ) -> Optional[FollowUp]:
        """Atualiza o follow-up acrescentando as novas anotações às existentes.

        Ao passar para ``completed`` registra quando e por quem; ao voltar para
        ``pending`` limpa esses campos.
        """
        follow_up = self.get(db, tenant_id, follow_up_id)
        if follow_up is None:
            return None

        data = dict(data)
        new_notes = [note.strip() for note in data.pop("notes", None) or [] if note and note.strip()]
        if new_notes:
            follow_up.notes = [*(follow_up.notes or []), *new_notes]

        status = data.get("status")
        if status == "completed" and follow_up.status != "completed":
            data["completed_at"] = utcnow()
            data["completed_by"] = user_id
        elif status == "pending":
            data["completed_at"] = None
            data["completed_by"] = None

        self.apply(follow_up, dict(data, updated_by=user_id))
        self._commit(db)
        db.refresh(follow_up)
        return follow_up


follow_ups = FollowUpCRUD(
    FollowUp,
    SearchOptions(
        joined=(customer_ref(FollowUp.customer, Customer.name, Customer.email),),
        filters={"status": FollowUp.status, "customer_id": FollowUp.customer_id},
        order_by=(FollowUp.start_date.asc(), FollowUp.created_at.desc()),
        default_limit=50,
    ),
)
