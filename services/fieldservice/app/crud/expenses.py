from collections import defaultdict
from datetime import date
from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session

from app.crud.base import SearchOptions, TenantScopedCRUD, date_range_criteria
from app.models.expense import Expense


class ExpenseCRUD(TenantScopedCRUD[Expense]):
    def stats(
        self, db: Session, tenant_id: UUID, start: Optional[date] = None, end: Optional[date] = None
    ) -> dict:
        """Total, por categoria (maior total primeiro) e por mês (``AAAA-MM`` crescente)."""
        query = self.query(db, tenant_id).with_entities(Expense.category, Expense.amount, Expense.expense_date)
        for clause in date_range_criteria(Expense.expense_date, start, end):
            query = query.filter(clause)

        by_category = defaultdict(lambda: [0.0, 0])
        by_month = defaultdict(lambda: [0.0, 0])
        total = 0.0
        count = 0
        for category, amount, expense_date in query.all():
            total += amount
            count += 1
            by_category[category][0] += amount
            by_category[category][1] += 1
            month = f"{expense_date:%Y-%m}"
            by_month[month][0] += amount
            by_month[month][1] += 1

        return {
            "total_amount": round(total, 2),
            "count": count,
            "by_category": [
                {"category": category, "total": round(values[0], 2), "count": values[1]}
                for category, values in sorted(by_category.items(), key=lambda item: item[1][0], reverse=True)
            ],
            "by_month": [
                {"month": month, "total": round(values[0], 2), "count": values[1]}
                for month, values in sorted(by_month.items())
            ],
        }


expenses = ExpenseCRUD(
    Expense,
    SearchOptions(
        search_columns=(Expense.title,),
        filters={"category": Expense.category},
        order_by=(Expense.expense_date.desc(), Expense.created_at.desc()),
    ),
)
