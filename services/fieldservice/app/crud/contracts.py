from app.crud.base import SearchOptions, TenantScopedCRUD
from app.crud.customers import customer_ref
from app.models.contract import Contract
from app.models.customer import Customer

contracts = TenantScopedCRUD(
    Contract,
    SearchOptions(
        search_columns=(Contract.terms,),
        joined=(customer_ref(Contract.customer, Customer.name, Customer.email),),
        filters={"status": Contract.status, "customer_id": Contract.customer_id},
    ),
)
