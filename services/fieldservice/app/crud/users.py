from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session

from app.core.security import get_password_hash, verify_password
from app.crud.base import SearchOptions, TenantScopedCRUD
from app.models.user import User


def _full_name_search(term: str):
    # "Nome Sobrenome" e "Sobrenome Nome"
    return [
        (User.first_name + " " + User.last_name).icontains(term, autoescape=True),
        (User.last_name + " " + User.first_name).icontains(term, autoescape=True),
    ]


class UserCRUD(TenantScopedCRUD[User]):
    def get_by_email(self, db: Session, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == email.lower()).first()

    def build_with_password(self, tenant_id: UUID, data: dict, password: str) -> User:
        data = dict(data, email=data["email"].lower(), password_hash=get_password_hash(password))
        return self.build(tenant_id, data)

    def create_with_password(self, db: Session, tenant_id: UUID, data: dict, password: str) -> User:
        user = self.build_with_password(tenant_id, data, password)
        db.add(user)
        self._commit(db)
        db.refresh(user)
        return user

    def update_with_password(
        self, db: Session, tenant_id: UUID, user_id: UUID, data: dict, password: Optional[str] = None
    ) -> Optional[User]:
        data = dict(data)
        if data.get("email"):
            data["email"] = data["email"].lower()
        if password:
            data["password_hash"] = get_password_hash(password)
        return self.update(db, tenant_id, user_id, data)

    def authenticate(self, db: Session, email: str, password: str) -> Optional[User]:
        user = self.get_by_email(db, email)
        if user is None or not verify_password(password, user.password_hash):
            return None
        return user


users = UserCRUD(
    User,
    SearchOptions(
        search_columns=(User.first_name, User.last_name, User.email),
        filters={"status": User.status, "user_type": User.user_type},
        extra_search=_full_name_search,
    ),
)
