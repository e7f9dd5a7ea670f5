from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session

from app.core.database import utcnow
from app.crud.base import SearchOptions, TenantScopedCRUD
from app.crud.customers import customer_ref
from app.models.event import Event


class EventCRUD(TenantScopedCRUD[Event]):
    def complete(
        self, db: Session, tenant_id: UUID, event_id: UUID, user_id: UUID, notes: Optional[str] = None
    ) -> Optional[Event]:
        event = self.get(db, tenant_id, event_id)
        if event is None:
            return None

        event.status = "completed"
        event.completion_notes = notes
        event.completed_at = utcnow()
        event.completed_by = user_id
        event.updated_by = user_id
        self._commit(db)
        db.refresh(event)
        return event


events = EventCRUD(
    Event,
    SearchOptions(
        search_columns=(Event.title, Event.description),
        joined=(customer_ref(Event.customer),),
        filters={
            "status": Event.status,
            "technician_id": Event.technician_id,
            "customer_id": Event.customer_id,
        },
        order_by=(Event.date.asc(), Event.start_time.asc()),
        default_limit=50,
    ),
)
