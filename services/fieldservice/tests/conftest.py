import os
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from uuid import UUID, uuid4

import pytest
from fastapi.testclient import TestClient
from jose import jwt

SECRET_KEY = os.getenv("SECRET_KEY", "ci-test-secret-with-at-least-32-characters")
ALGORITHM = os.getenv("JWT_ALGORITHM", "HS512")


SERVICE_DIR = Path(__file__).resolve().parents[1]
ROOT_DIR = SERVICE_DIR.parent.parent

service_path = str(SERVICE_DIR)
shared_path = str(ROOT_DIR / "services")
for path in (service_path, shared_path):
    if path in sys.path:
        sys.path.remove(path)
    sys.path.insert(0, path)

for module_name in list(sys.modules):
    if module_name == "app" or module_name.startswith("app."):
        sys.modules.pop(module_name)

# Garante que o app e os testes usem o mesmo segredo/algoritmo
os.environ.setdefault("SECRET_KEY", SECRET_KEY)
os.environ.setdefault("JWT_ALGORITHM", ALGORITHM)

os.environ.setdefault("FIELDSERVICE_DATABASE_URL", f"sqlite:///{SERVICE_DIR / 'test_fieldservice.db'}")
os.environ.setdefault("EVENT_STREAM", "test-stream")
os.environ["REDIS_URL"] = ""

from app.main import app  # noqa: E402
from app.core.database import Base, SessionLocal, engine  # noqa: E402
from app.models.tenant import Tenant  # noqa: E402
from app.models.user import User  # noqa: E402


def make_auth_headers(tenant_id, user_id=None, user_type: str = "admin", is_master_admin: bool = False) -> dict:
    """
    Gera um JWT compatível com o TokenPayload do serviço,
    para ser usado nos headers dos testes.

    O serviço confere usuário e tenant no banco a cada requisição, então o
    tenant (ativo) e o usuário são criados aqui quando ainda não existem.
    """
    tenant_id = UUID(str(tenant_id))
    user_id = UUID(str(user_id)) if user_id else uuid4()

    with SessionLocal() as session:
        if session.get(Tenant, tenant_id) is None:
            session.add(Tenant(id=tenant_id, name="Tenant de Testes", status="active"))
        if session.get(User, user_id) is None:
            session.add(
                User(
                    id=user_id,
                    tenant_id=tenant_id,
                    first_name="Usuário",
                    last_name="Teste",
                    email=f"{user_id}@testes.local",
                    password_hash="!",
                    user_type=user_type,
                    is_master_admin=is_master_admin,
                )
            )
        session.commit()

    exp = datetime.now(timezone.utc) + timedelta(hours=1)
    payload = {
        "sub": str(user_id),
        "tenant_id": str(tenant_id),
        "user_type": user_type,  # admin | supervisor | technician
        "is_master_admin": is_master_admin,
        "exp": int(exp.timestamp()),
    }
    token = jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(autouse=True)
def prepare_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    app.state.event_publisher = None
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def tenant_id() -> UUID:
    return uuid4()


@pytest.fixture
def admin_headers(tenant_id):
    return make_auth_headers(tenant_id, user_type="admin")


def criar_cliente(client, headers, name: str = "ACME Comércio", **extra) -> dict:
    response = client.post("/customers/", json={"name": name, **extra}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def criar_tecnico(client, headers, cpf: str = "123.456.789-00", **extra) -> dict:
    payload = {
        "cpf": cpf,
        "start_date": "2024-01-10",
        "address": {"street": "Rua das Flores", "number": "100", "city": "Recife", "state": "PE"},
        "phone_number": "+55 81 99999-0000",
        **extra,
    }
    response = client.post("/technicians/", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()
