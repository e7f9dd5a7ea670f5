from datetime import date
from uuid import uuid4

from fastapi import status

from app.crud.technicians import technicians
from conftest import criar_cliente, criar_tecnico, make_auth_headers


def test_customer_crud_flow(client, admin_headers):
    customer = criar_cliente(
        client,
        admin_headers,
        name="ACME Comércio",
        email="contato@acme.com",
        type="commercial",
        cnpj="12.345.678/0001-90",
        phone_numbers=["+55 81 3333-0000"],
        address={"street": "Av. Boa Viagem", "number": "1000", "city": "Recife", "state": "PE"},
        equipments=[{"name": "Split sala", "room": "Sala", "btus": 12000}],
    )
    assert customer["address"]["country"] == "Brazil"
    assert customer["equipments"][0]["btus"] == 12000

    updated = client.put(
        f"/customers/{customer['id']}", json={"contact_name": "Pedro"}, headers=admin_headers
    )
    assert updated.status_code == status.HTTP_200_OK
    assert updated.json()["contact_name"] == "Pedro"
    assert updated.json()["name"] == "ACME Comércio"

    filtered = client.get("/customers/", params={"type": "residential"}, headers=admin_headers).json()
    assert filtered["total"] == 0

    assert client.delete(f"/customers/{customer['id']}", headers=admin_headers).status_code == status.HTTP_204_NO_CONTENT
    assert client.get(f"/customers/{customer['id']}", headers=admin_headers).status_code == status.HTTP_404_NOT_FOUND


def test_notes_are_appended_with_author(client, tenant_id):
    admin_headers = make_auth_headers(tenant_id, user_type="admin")
    tech_id = uuid4()
    tech_headers = make_auth_headers(tenant_id, tech_id, user_type="technician")
    customer = criar_cliente(client, admin_headers)

    client.post(f"/customers/{customer['id']}/notes", json={"content": "Primeira visita"}, headers=tech_headers)
    response = client.post(f"/customers/{customer['id']}/notes", json={"content": "Retorno"}, headers=tech_headers)

    assert response.status_code == status.HTTP_200_OK
    history = response.json()["note_history"]
    assert [note["content"] for note in history] == ["Primeira visita", "Retorno"]
    assert history[0]["created_by"] == str(tech_id)


def test_technician_cannot_create_or_delete_customer(client, tenant_id):
    admin_headers = make_auth_headers(tenant_id, user_type="admin")
    tech_headers = make_auth_headers(tenant_id, user_type="technician")
    customer = criar_cliente(client, admin_headers)

    assert client.post("/customers/", json={"name": "X"}, headers=tech_headers).status_code == status.HTTP_403_FORBIDDEN
    assert client.delete(f"/customers/{customer['id']}", headers=tech_headers).status_code == status.HTTP_403_FORBIDDEN


def test_customer_with_quotes_cannot_be_deleted(client, admin_headers):
    customer = criar_cliente(client, admin_headers)
    quote = client.post(
        "/quotes/",
        json={"customer_id": customer["id"], "total_value": 100, "valid_until": "2030-01-01T00:00:00Z"},
        headers=admin_headers,
    )
    assert quote.status_code == status.HTTP_201_CREATED, quote.text

    response = client.delete(f"/customers/{customer['id']}", headers=admin_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_technician_with_account_and_cascade_delete(client, admin_headers):
    technician = criar_tecnico(client, admin_headers, account={
        "first_name": "Ana", "last_name": "Lima", "email": "ana@x.com", "password": "senha-forte-1",
    })
    assert technician["user"]["email"] == "ana@x.com"
    user_id = technician["user_id"]
    assert client.get(f"/users/{user_id}", headers=admin_headers).status_code == status.HTTP_200_OK

    response = client.delete(f"/technicians/{technician['id']}", headers=admin_headers)

    assert response.status_code == status.HTTP_204_NO_CONTENT
    assert client.get(f"/users/{user_id}", headers=admin_headers).status_code == status.HTTP_404_NOT_FOUND


def test_duplicate_technician_cpf_returns_400(client, admin_headers):
    criar_tecnico(client, admin_headers, cpf="999")
    response = client.post(
        "/technicians/",
        json={"cpf": "999", "start_date": "2024-01-01", "address": {"city": "Recife"}, "phone_number": "1"},
        headers=admin_headers,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_catalog_crud(client, admin_headers):
    service = client.post(
        "/services/", json={"name": "Higienização de split", "value": 180}, headers=admin_headers
    ).json()
    product = client.post(
        "/products/",
        json={"name": "Capacitor 35uF", "maker": "WEG", "sku": "CAP-35", "value": 45.5},
        headers=admin_headers,
    ).json()

    assert client.get("/products/", params={"search": "weg"}, headers=admin_headers).json()["total"] == 1
    assert client.get("/services/", params={"search": "split"}, headers=admin_headers).json()["total"] == 1

    updated = client.put(f"/services/{service['id']}", json={"value": 200}, headers=admin_headers)
    assert updated.json()["value"] == 200

    assert client.delete(f"/products/{product['id']}", headers=admin_headers).status_code == status.HTTP_204_NO_CONTENT
    assert client.get(f"/products/{product['id']}", headers=admin_headers).status_code == status.HTTP_404_NOT_FOUND


def test_catalog_writes_are_admin_only(client, tenant_id):
    headers = make_auth_headers(tenant_id, user_type="supervisor")
    response = client.post("/services/", json={"name": "X", "value": 1}, headers=headers)
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_create_with_account_keeps_caller_account_intact(db_session, tenant_id):
    account = {"first_name": "Rui", "last_name": "Costa", "email": "rui@x.com", "password": "senha-forte-1"}
    data = {
        "cpf": "999.888.777-66",
        "start_date": date(2024, 1, 10),
        "address": {"city": "Recife"},
        "phone_number": "+55 81 98888-0000",
    }

    technician = technicians.create_with_account(db_session, tenant_id, data, account)

    assert technician.user_id is not None
    assert account["password"] == "senha-forte-1"
    assert set(account) == {"first_name", "last_name", "email", "password"}
