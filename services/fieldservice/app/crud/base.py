"""Tenant-scoped data access shared by every dependent entity.

Every query built here starts from ``Model.tenant_id == tenant_id``; a row
owned by another tenant is indistinguishable from a missing one.

``list_page`` implements the paginated search used by all list endpoints:

* page/limit are coerced permissively (see ``shared.pagination``);
* the search term is matched case-insensitively as a substring of the
  configured text columns (including columns of joined references) and,
  when it parses as a UUID, against the primary key;
* ``total`` counts the whole filtered set, independent of the page window.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, Iterable, List, Optional, Sequence, Type, TypeVar
from uuid import UUID

from fastapi.encoders import jsonable_encoder
from sqlalchemy import JSON, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session, contains_eager

from app.core.exceptions import NotFoundError
from shared.pagination import DEFAULT_LIMIT, PageResult, PageWindow

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


@dataclass(frozen=True)
class JoinedRef:
    """Many-to-one reference joined into list queries.

    ``projection`` lists the only columns loaded for the referenced row.
    """

    relationship: Any
    search_columns: Sequence[Any] = ()
    projection: Sequence[Any] = ()


@dataclass(frozen=True)
class SearchOptions:
    search_columns: Sequence[Any] = ()
    joined: Sequence[JoinedRef] = ()
    # filtros categóricos aceitos por list_page: nome -> coluna
    filters: Dict[str, Any] = field(default_factory=dict)
    order_by: Sequence[Any] = ()
    default_limit: int = DEFAULT_LIMIT
    # cláusulas extras de busca derivadas do termo (ex.: nome completo)
    extra_search: Optional[Callable[[str], List[Any]]] = None


def parse_uuid(value: Any) -> Optional[UUID]:
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value).strip())
    except (TypeError, ValueError, AttributeError):
        return None


def date_range_criteria(column, start: Any = None, end: Any = None) -> List[Any]:
    """Limites inclusivos; ``None`` deixa o lado aberto."""
    criteria = []
    if start is not None:
        criteria.append(column >= start)
    if end is not None:
        criteria.append(column <= end)
    return criteria


class TenantScopedCRUD(Generic[ModelT]):
    def __init__(self, model: Type[ModelT], search: Optional[SearchOptions] = None) -> None:
        self.model = model
        self.search = search or SearchOptions()

    # consultas

    def query(self, db: Session, tenant_id: UUID) -> Query:
        return db.query(self.model).filter(self.model.tenant_id == tenant_id)

    def get(self, db: Session, tenant_id: UUID, obj_id: UUID) -> Optional[ModelT]:
        return self.query(db, tenant_id).filter(self.model.id == obj_id).first()

    def require(self, db: Session, tenant_id: UUID, obj_id: UUID, label: Optional[str] = None) -> ModelT:
        """Como ``get``, mas levanta NotFoundError; usado para validar referências."""
        obj = self.get(db, tenant_id, obj_id)
        if obj is None:
            raise NotFoundError(label or self.model.__name__, obj_id, tenant_id=str(tenant_id))
        return obj

    def search_clause(self, term: str):
        columns = list(self.search.search_columns)
        for ref in self.search.joined:
            columns.extend(ref.search_columns)

        clauses = [column.icontains(term, autoescape=True) for column in columns]
        if self.search.extra_search is not None:
            clauses.extend(self.search.extra_search(term))

        as_uuid = parse_uuid(term)
        if as_uuid is not None:
            clauses.append(self.model.id == as_uuid)

        return or_(*clauses) if clauses else None

    def list_page(
        self,
        db: Session,
        tenant_id: UUID,
        *,
        page: Any = None,
        limit: Any = None,
        search: Optional[str] = None,
        filters: Optional[Dict[str, Any]] = None,
        criteria: Iterable[Any] = (),
    ) -> PageResult[ModelT]:
        window = PageWindow.from_raw(page, limit, default_limit=self.search.default_limit)

        query = self.query(db, tenant_id)
        for ref in self.search.joined:
            query = query.outerjoin(ref.relationship)

        for name, value in (filters or {}).items():
            if value is None or value == "":
                continue
            query = query.filter(self.search.filters[name] == value)

        for clause in criteria:
            query = query.filter(clause)

        term = (search or "").strip()
        if term:
            clause = self.search_clause(term)
            if clause is not None:
                query = query.filter(clause)

        # Session síncrona não é thread-safe: count e página rodam em sequência,
        # sobre o mesmo filtro, dentro da mesma transação
        total = query.order_by(None).count()

        options = [
            contains_eager(ref.relationship).load_only(*ref.projection) if ref.projection
            else contains_eager(ref.relationship)
            for ref in self.search.joined
        ]
        order_by = self.search.order_by or (self.model.created_at.desc(),)
        items = (
            query.options(*options)
            .order_by(*order_by)
            .offset(window.offset)
            .limit(window.limit)
            .all()
        )

        return PageResult(items=items, total=total, page=window.page, limit=window.limit)

    # escrita

    def _column_values(self, data: Dict[str, Any]) -> Dict[str, Any]:
        columns = self.model.__table__.columns
        values = {}
        for key, value in data.items():
            column = columns.get(key)
            # modelos aninhados (endereço, itens...) viram JSON puro
            if column is not None and isinstance(column.type, JSON) and value is not None:
                value = jsonable_encoder(value)
            values[key] = value
        return values

    def build(self, tenant_id: UUID, data: Dict[str, Any]) -> ModelT:
        return self.model(tenant_id=tenant_id, **self._column_values(data))

    def create(self, db: Session, tenant_id: UUID, data: Dict[str, Any]) -> ModelT:
        obj = self.build(tenant_id, data)
        db.add(obj)
        self._commit(db)
        db.refresh(obj)
        return obj

    def update(self, db: Session, tenant_id: UUID, obj_id: UUID, data: Dict[str, Any]) -> Optional[ModelT]:
        obj = self.get(db, tenant_id, obj_id)
        if obj is None:
            return None
        self.apply(obj, data)
        self._commit(db)
        db.refresh(obj)
        return obj

    def apply(self, obj: ModelT, data: Dict[str, Any]) -> ModelT:
        for campo, valor in self._column_values(data).items():
            setattr(obj, campo, valor)
        return obj

    def delete(self, db: Session, tenant_id: UUID, obj_id: UUID) -> Optional[ModelT]:
        obj = self.get(db, tenant_id, obj_id)
        if obj is None:
            return None
        db.delete(obj)
        self._commit(db)
        return obj

    def delete_all_by_tenant(self, db: Session, tenant_id: UUID) -> int:
        """Bulk delete of every row owned by ``tenant_id``; the caller commits."""
        return (
            db.query(self.model)
            .filter(self.model.tenant_id == tenant_id)
            .delete(synchronize_session=False)
        )

    @staticmethod
    def _commit(db: Session) -> None:
        try:
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            logger.warning("Violação de integridade: %s", exc.orig)
            raise
