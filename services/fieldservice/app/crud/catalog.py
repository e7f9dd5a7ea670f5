from app.crud.base import SearchOptions, TenantScopedCRUD
from app.models.catalog import Product, Service

services = TenantScopedCRUD(
    Service,
    SearchOptions(search_columns=(Service.name, Service.description)),
)

products = TenantScopedCRUD(
    Product,
    SearchOptions(
        search_columns=(Product.name, Product.description, Product.maker, Product.model, Product.sku),
    ),
)
