from app.crud.base import SearchOptions, TenantScopedCRUD
from app.crud.customers import customer_ref
from app.models.quote import Quote

quotes = TenantScopedCRUD(
    Quote,
    SearchOptions(
        search_columns=(Quote.description,),
        joined=(customer_ref(Quote.customer),),
        filters={"status": Quote.status, "customer_id": Quote.customer_id},
    ),
)
