from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from fastapi import status

from app.core.exceptions import DeletionFailedError, TenantNotFoundError
from app.crud.customers import customers
from app.models.catalog import Product, Service
from app.models.contract import Contract
from app.models.customer import Customer
from app.models.event import Event
from app.models.expense import Expense
from app.models.follow_up import FollowUp
from app.models.quote import Quote
from app.models.service_order import ServiceOrder
from app.models.technician import Technician
from app.models.tenant import Tenant
from app.models.user import User
from app.models.vehicle import Vehicle, VehicleUsage
from app.routers.admin import get_tenant_eraser
from app.services.tenant_eraser import CascadeStep, TenantEraser, default_cascade
from conftest import criar_cliente, criar_tecnico, make_auth_headers


class RecordingDeleter:
    def __init__(self, name, calls, count=0):
        self.name = name
        self.calls = calls
        self.count = count

    def delete_all_by_tenant(self, db, tenant_id):
        self.calls.append((self.name, tenant_id))
        return self.count


class FailingDeleter:
    def delete_all_by_tenant(self, db, tenant_id):
        raise RuntimeError("falha simulada")


def _criar_tenant(db_session, name="Clima Frio"):
    tenant = Tenant(name=name, status="active")
    db_session.add(tenant)
    db_session.commit()
    db_session.refresh(tenant)
    return tenant


def test_default_cascade_order():
    assert [step.name for step in default_cascade()] == [
        "service_orders",
        "expenses",
        "vehicle_usages",
        "vehicles",
        "quotes",
        "contracts",
        "follow_ups",
        "events",
        "customers",
        "technicians",
        "services",
        "products",
        "users",
    ]


def test_erase_runs_every_step_in_order_then_tenant(db_session):
    tenant = _criar_tenant(db_session)
    calls = []
    steps = [CascadeStep(name, RecordingDeleter(name, calls, count=2)) for name in ("a", "b", "c")]

    def delete_tenant(db, tenant_id):
        calls.append(("tenant", tenant_id))
        return 1

    eraser = TenantEraser(steps, delete_tenant=delete_tenant)
    result = eraser.erase(db_session, tenant.id)

    assert calls == [("a", tenant.id), ("b", tenant.id), ("c", tenant.id), ("tenant", tenant.id)]
    assert result["id"] == tenant.id
    assert result["name"] == "Clima Frio"
    assert "Clima Frio" in result["message"]


def test_erase_with_empty_cascade_removes_only_tenant(db_session):
    tenant = _criar_tenant(db_session)

    TenantEraser([]).erase(db_session, tenant.id)

    assert db_session.query(Tenant).filter(Tenant.id == tenant.id).count() == 0


def test_erase_unknown_tenant_raises_not_found(db_session):
    calls = []
    eraser = TenantEraser([CascadeStep("a", RecordingDeleter("a", calls))])

    with pytest.raises(TenantNotFoundError):
        eraser.erase(db_session, uuid4())
    assert calls == []


def test_erase_raises_when_tenant_row_is_not_removed(db_session):
    tenant = _criar_tenant(db_session)
    eraser = TenantEraser([], delete_tenant=lambda db, tenant_id: 0)

    with pytest.raises(DeletionFailedError):
        eraser.erase(db_session, tenant.id)


def test_failing_step_rolls_back_previous_steps(db_session):
    tenant = _criar_tenant(db_session)
    db_session.add(Customer(tenant_id=tenant.id, name="ACME"))
    db_session.commit()

    eraser = TenantEraser([CascadeStep("customers", customers), CascadeStep("boom", FailingDeleter())])
    with pytest.raises(RuntimeError):
        eraser.erase(db_session, tenant.id)

    assert db_session.query(Customer).filter(Customer.tenant_id == tenant.id).count() == 1
    assert db_session.query(Tenant).filter(Tenant.id == tenant.id).count() == 1


def test_erase_publishes_tenant_deleted(db_session):
    tenant = _criar_tenant(db_session)
    publisher = MagicMock()

    TenantEraser([], publisher=publisher).erase(db_session, tenant.id)

    publisher.publish.assert_called_once()
    args, kwargs = publisher.publish.call_args
    assert args[0] == "tenant.deleted"
    assert args[1]["tenant_id"] == str(tenant.id)
    assert kwargs["tenant_id"] == tenant.id


def test_erase_does_not_publish_on_failure(db_session):
    tenant = _criar_tenant(db_session)
    publisher = MagicMock()

    with pytest.raises(RuntimeError):
        TenantEraser([CascadeStep("boom", FailingDeleter())], publisher=publisher).erase(db_session, tenant.id)
    publisher.publish.assert_not_called()


TABELAS_DO_TENANT = (
    ServiceOrder, Expense, VehicleUsage, Vehicle, Quote, Contract, FollowUp, Event,
    Customer, Technician, Service, Product, User,
)


def _popular_tenant(client, headers, dominio):
    """Cria ao menos um registro de cada tabela do tenant, com as referências cruzadas."""

    def post(path, payload):
        response = client.post(path, json=payload, headers=headers)
        assert response.status_code == status.HTTP_201_CREATED, response.text
        return response.json()

    customer = criar_cliente(client, headers, name=f"Cliente {dominio}")
    technician = criar_tecnico(client, headers, account={
        "first_name": "Ana", "last_name": "Lima", "email": f"ana@{dominio}", "password": "senha-forte-1",
    })
    service = post("/services/", {"name": "Instalação", "value": 300})
    product = post("/products/", {"name": "Suporte", "value": 50})
    quote = post("/quotes/", {
        "customer_id": customer["id"],
        "services": [{"service_id": service["id"], "quantity": 1, "unit_value": 300}],
        "products": [{"product_id": product["id"], "quantity": 2, "unit_value": 50}],
        "total_value": 400,
        "valid_until": "2030-01-01T00:00:00Z",
    })
    order = post(f"/service-orders/from-quote/{quote['id']}", {"assigned_technician_id": technician["id"]})
    post("/events/", {
        "date": "2024-05-02",
        "start_time": "10:00",
        "end_time": "11:00",
        "customer_id": customer["id"],
        "technician_id": technician["id"],
        "service_order_id": order["id"],
        "title": "Instalação agendada",
    })
    post("/follow-ups/", {"customer_id": customer["id"], "start_date": "2024-05-10T09:00:00Z"})
    post("/contracts/", {
        "customer_id": customer["id"],
        "start_date": "2024-01-01T00:00:00Z",
        "expire_date": "2025-01-01T00:00:00Z",
        "frequency": "monthly",
        "terms": "Manutenção preventiva mensal",
        "value": 350.0,
    })
    post("/expenses/", {"title": "Combustível", "category": "fuel", "amount": 120, "expense_date": "2024-05-02"})
    vehicle = post("/vehicles/", {"name": "Fiorino", "license_plate": "ABC1D23", "year": 2020})
    post("/vehicle-usages/", {
        "vehicle_id": vehicle["id"],
        "technician_id": technician["id"],
        "departure_date": "2024-05-02T08:00:00Z",
        "departure_mileage": 1000,
    })
    return customer


def _contar(db_session, model, tenant_id):
    return db_session.query(model).filter(model.tenant_id == tenant_id).count()


def test_admin_delete_tenant_removes_all_dependent_data(client, db_session):
    alvo = _criar_tenant(db_session, "Alvo Refrigeração")
    outro = _criar_tenant(db_session, "Outro Tenant")
    _popular_tenant(client, make_auth_headers(alvo.id, user_type="admin"), "alvo.com")
    _popular_tenant(client, make_auth_headers(outro.id, user_type="admin"), "outro.com")
    master_headers = make_auth_headers(outro.id, user_type="admin", is_master_admin=True)

    db_session.expire_all()
    outro_antes = {model.__name__: _contar(db_session, model, outro.id) for model in TABELAS_DO_TENANT}
    assert all(_contar(db_session, model, alvo.id) > 0 for model in TABELAS_DO_TENANT)

    response = client.delete(f"/admin/tenants/{alvo.id}", headers=master_headers)

    assert response.status_code == status.HTTP_200_OK, response.text
    body = response.json()
    assert body["id"] == str(alvo.id)
    assert body["name"] == "Alvo Refrigeração"

    db_session.expire_all()
    restantes = {model.__name__: _contar(db_session, model, alvo.id) for model in TABELAS_DO_TENANT}
    assert restantes == {name: 0 for name in restantes}
    assert db_session.query(Tenant).filter(Tenant.id == alvo.id).count() == 0
    assert {model.__name__: _contar(db_session, model, outro.id) for model in TABELAS_DO_TENANT} == outro_antes


def test_token_of_erased_tenant_cannot_write(client, db_session):
    alvo = _criar_tenant(db_session, "Alvo Refrigeração")
    alvo_headers = make_auth_headers(alvo.id, user_type="admin")
    criar_cliente(client, alvo_headers)
    master_headers = make_auth_headers(uuid4(), user_type="admin", is_master_admin=True)

    assert client.delete(f"/admin/tenants/{alvo.id}", headers=master_headers).status_code == status.HTTP_200_OK

    response = client.post("/customers/", json={"name": "Depois da exclusão"}, headers=alvo_headers)
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    db_session.expire_all()
    assert _contar(db_session, Customer, alvo.id) == 0


def test_admin_delete_unknown_tenant_returns_404(client):
    headers = make_auth_headers(uuid4(), is_master_admin=True)
    response = client.delete(f"/admin/tenants/{uuid4()}", headers=headers)

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["error_code"] == "TENANT_NOT_FOUND"


def test_admin_delete_failed_returns_400(client, db_session):
    tenant = _criar_tenant(db_session)
    client.app.dependency_overrides[get_tenant_eraser] = lambda: TenantEraser(
        [], delete_tenant=lambda db, tenant_id: 0
    )

    response = client.delete(f"/admin/tenants/{tenant.id}", headers=make_auth_headers(uuid4(), is_master_admin=True))

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == "Falha ao excluir o tenant"


def test_admin_cannot_delete_own_tenant(client, db_session):
    tenant = _criar_tenant(db_session)
    response = client.delete(
        f"/admin/tenants/{tenant.id}", headers=make_auth_headers(tenant.id, is_master_admin=True)
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_delete_tenant_requires_master_admin(client, db_session):
    tenant = _criar_tenant(db_session)
    response = client.delete(f"/admin/tenants/{tenant.id}", headers=make_auth_headers(uuid4(), user_type="admin"))
    assert response.status_code == status.HTTP_403_FORBIDDEN
