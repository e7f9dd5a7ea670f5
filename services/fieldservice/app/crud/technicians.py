import logging
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.crud.base import JoinedRef, SearchOptions, TenantScopedCRUD
from app.crud.users import users
from app.models.technician import Technician
from app.models.user import User

logger = logging.getLogger(__name__)


class TechnicianCRUD(TenantScopedCRUD[Technician]):
    def create_with_account(
        self, db: Session, tenant_id: UUID, data: dict, account: Optional[dict] = None
    ) -> Technician:
        """Cria o técnico e, opcionalmente, o usuário de acesso numa única transação."""
        technician = self.build(tenant_id, data)
        if account:
            account = dict(account)
            password = account.pop("password")
            user = users.build_with_password(
                tenant_id,
                dict(account, user_type="technician", created_by=data.get("created_by")),
                password,
            )
            db.add(user)
            db.flush()
            technician.user_id = user.id

        db.add(technician)
        self._commit(db)
        db.refresh(technician)
        return technician

    def delete(self, db: Session, tenant_id: UUID, obj_id: UUID) -> Optional[Technician]:
        """Remove o técnico e o usuário vinculado a ele (mesmo tenant)."""
        technician = self.get(db, tenant_id, obj_id)
        if technician is None:
            return None

        user_id = technician.user_id
        db.delete(technician)
        try:
            db.flush()
        except IntegrityError:
            db.rollback()
            raise
        if user_id is not None:
            removed = users.query(db, tenant_id).filter(User.id == user_id).delete(synchronize_session=False)
            logger.info("Técnico %s removido junto com %d usuário(s) vinculado(s)", obj_id, removed)

        self._commit(db)
        return technician


technicians = TechnicianCRUD(
    Technician,
    SearchOptions(
        search_columns=(Technician.cpf, Technician.phone_number),
        joined=(
            JoinedRef(
                Technician.user,
                search_columns=(User.first_name, User.last_name, User.email),
                projection=(User.id, User.first_name, User.last_name, User.email),
            ),
        ),
        filters={"status": Technician.status},
    ),
)
