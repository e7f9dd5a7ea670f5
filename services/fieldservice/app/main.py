import os
from html import escape

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from fastapi.responses import HTMLResponse

from app.core.database import Base, engine
from app.core.exceptions import register_exception_handlers
from app.routers import (
    admin,
    catalog,
    contracts,
    customers,
    events,
    expenses,
    follow_ups,
    quotes,
    service_orders,
    technicians,
    tenants,
    users,
    vehicles,
)
# tabelas registradas no metadata antes do create_all
from app.models import (  # noqa: F401
    catalog as catalog_models,
    contract,
    customer,
    event,
    expense,
    follow_up,
    quote,
    service_order,
    technician,
    tenant,
    user,
    vehicle,
)
from shared import create_event_publisher, database_lifespan_factory, load_service_config
from shared.cors import configure_cors
from shared.health import create_health_router
from shared.logging import RequestContextLogMiddleware, configure_logging

logger = configure_logging("fieldservice")

tags_metadata = [
    {"name": "Tenants", "description": "Cadastro de empresas (tenants) e do administrador inicial."},
    {"name": "Admin", "description": "Administração da plataforma: status, plano e exclusão de tenants."},
    {"name": "Users", "description": "Login e gerenciamento de usuários do tenant."},
    {"name": "Customers", "description": "Clientes, endereços, equipamentos e histórico de notas."},
    {"name": "Technicians", "description": "Técnicos de campo e suas contas de acesso."},
    {"name": "Services", "description": "Catálogo de serviços."},
    {"name": "Products", "description": "Catálogo de produtos."},
    {"name": "Quotes", "description": "Orçamentos."},
    {"name": "Service Orders", "description": "Ordens de serviço, inclusive geradas a partir de orçamentos."},
    {"name": "Follow-ups", "description": "Acompanhamentos de clientes."},
    {"name": "Events", "description": "Agenda de visitas dos técnicos."},
    {"name": "Contracts", "description": "Contratos de manutenção."},
    {"name": "Expenses", "description": "Despesas e estatísticas por categoria e mês."},
    {"name": "Vehicles", "description": "Frota de veículos."},
    {"name": "Vehicle Usages", "description": "Registros de uso de veículos e aprovação."},
]

_CONFIG = load_service_config("fieldservice")
_ROOT_PATH = os.getenv("APP_ROOT_PATH", "")

lifespan = database_lifespan_factory(
    service_name="fieldservice",
    metadata=Base.metadata,
    engine=engine,
)

app = FastAPI(
    title="Field Service API",
    version="0.1.0",
    description="API multi-tenant de gestão de serviços de campo.",
    openapi_tags=tags_metadata,
    root_path=_ROOT_PATH,
    lifespan=lifespan,
    docs_url=None,
    redoc_url="/redoc",
)

register_exception_handlers(app)
app.add_middleware(RequestContextLogMiddleware, logger=logger)
configure_cors(app)

app.state.config = _CONFIG
app.state.event_publisher = create_event_publisher(_CONFIG)


def custom_openapi_schema():
    if app.openapi_schema:
        return app.openapi_schema
    schema = get_openapi(
        title=app.title,
        version=app.version,
        description=app.description,
        routes=app.routes,
        tags=tags_metadata,
    )
    schema["openapi"] = "3.0.3"
    app.openapi_schema = schema
    return app.openapi_schema


app.openapi = custom_openapi_schema


@app.get("/docs", include_in_schema=False)
async def custom_swagger_ui_html():
    return HTMLResponse(f"""
    <!DOCTYPE html>
    <html>
    <head>
        <link type="text/css" rel="stylesheet" href="https://cdn.jsdelivr.net/npm/swagger-ui-dist@5/swagger-ui.css">
        <title>{escape(app.title)} - Swagger UI</title>
    </head>
    <body>
        <div id="swagger-ui"></div>
        <script src="https://cdn.jsdelivr.net/npm/swagger-ui-dist@5/swagger-ui-bundle.js"></script>
        <script>
        const ui = SwaggerUIBundle({{
            url: window.location.pathname.replace(/\\/docs$/, '') + '/openapi.json',
            dom_id: '#swagger-ui',
            presets: [
                SwaggerUIBundle.presets.apis,
                SwaggerUIBundle.SwaggerUIStandalonePreset
            ],
            layout: "BaseLayout",
            deepLinking: true
        }})
        </script>
    </body>
    </html>
    """)


app.include_router(create_health_router("fieldservice", database_engine=engine, redis_url=_CONFIG.redis.url))
app.include_router(tenants.router)
app.include_router(admin.router)
app.include_router(users.router)
app.include_router(customers.router)
app.include_router(technicians.router)
app.include_router(catalog.services_router)
app.include_router(catalog.products_router)
app.include_router(quotes.router)
app.include_router(service_orders.router)
app.include_router(follow_ups.router)
app.include_router(events.router)
app.include_router(contracts.router)
app.include_router(expenses.router)
app.include_router(vehicles.vehicles_router)
app.include_router(vehicles.usages_router)


@app.get("/")
def root():
    return {
        "service": "fieldservice",
        "status": "ok",
        "docs_url": "/docs",
        "config": {
            "redis_stream": _CONFIG.redis.stream,
        },
    }
