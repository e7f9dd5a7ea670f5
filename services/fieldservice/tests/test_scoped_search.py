from uuid import uuid4

import pytest
from fastapi import status

from conftest import criar_cliente, criar_tecnico, make_auth_headers


@pytest.fixture
def vinte_e_cinco_clientes(client, admin_headers):
    return [criar_cliente(client, admin_headers, name=f"Cliente {i:02d}") for i in range(25)]


def test_pagination_window_and_totals(client, admin_headers, vinte_e_cinco_clientes):
    response = client.get("/customers/", params={"page": 2, "limit": 10}, headers=admin_headers)

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert len(body["items"]) == 10
    assert body["total"] == 25
    assert body["page"] == 2
    assert body["limit"] == 10
    assert body["total_pages"] == 3


def test_last_page_is_partial(client, admin_headers, vinte_e_cinco_clientes):
    body = client.get("/customers/", params={"page": 3, "limit": 10}, headers=admin_headers).json()
    assert len(body["items"]) == 5
    assert body["total"] == 25


def test_page_beyond_end_is_empty_but_keeps_total(client, admin_headers, vinte_e_cinco_clientes):
    body = client.get("/customers/", params={"page": 9, "limit": 10}, headers=admin_headers).json()
    assert body["items"] == []
    assert body["total"] == 25
    assert body["total_pages"] == 3


@pytest.mark.parametrize(
    "params",
    [
        {"page": "abc", "limit": "xyz"},
        {"page": "0", "limit": "0"},
        {"page": "-3", "limit": "-1"},
        {},
    ],
)
def test_invalid_page_and_limit_fall_back_to_defaults(client, admin_headers, vinte_e_cinco_clientes, params):
    response = client.get("/customers/", params=params, headers=admin_headers)

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["page"] == 1
    assert body["limit"] == 10
    assert len(body["items"]) == 10


def test_search_is_case_insensitive_substring(client, admin_headers):
    criar_cliente(client, admin_headers, name="ACME Comércio")
    criar_cliente(client, admin_headers, name="Padaria Acmel")
    criar_cliente(client, admin_headers, name="Beta Serviços")

    body = client.get("/customers/", params={"search": "acme"}, headers=admin_headers).json()

    assert body["total"] == 2
    assert {item["name"] for item in body["items"]} == {"ACME Comércio", "Padaria Acmel"}


def test_search_by_uuid_matches_primary_key(client, admin_headers):
    alvo = criar_cliente(client, admin_headers, name="Alvo")
    criar_cliente(client, admin_headers, name="Outro")

    body = client.get("/customers/", params={"search": alvo["id"]}, headers=admin_headers).json()

    assert body["total"] == 1
    assert body["items"][0]["id"] == alvo["id"]


def test_search_wildcards_are_literal(client, admin_headers):
    criar_cliente(client, admin_headers, name="Promoção 50% off")
    criar_cliente(client, admin_headers, name="Sem desconto")

    body = client.get("/customers/", params={"search": "%"}, headers=admin_headers).json()

    assert body["total"] == 1
    assert body["items"][0]["name"] == "Promoção 50% off"


def test_blank_search_returns_everything(client, admin_headers):
    criar_cliente(client, admin_headers, name="Um")
    criar_cliente(client, admin_headers, name="Dois")

    body = client.get("/customers/", params={"search": "   "}, headers=admin_headers).json()
    assert body["total"] == 2


def test_list_is_scoped_to_token_tenant(client, admin_headers):
    criar_cliente(client, admin_headers, name="ACME")
    other_headers = make_auth_headers(uuid4(), user_type="admin")

    body = client.get("/customers/", headers=other_headers).json()

    assert body["items"] == []
    assert body["total"] == 0
    assert body["total_pages"] == 0


def test_other_tenant_record_looks_missing(client, admin_headers):
    cliente = criar_cliente(client, admin_headers, name="ACME")
    other_headers = make_auth_headers(uuid4(), user_type="admin")

    assert client.get(f"/customers/{cliente['id']}", headers=other_headers).status_code == status.HTTP_404_NOT_FOUND
    body = client.get("/customers/", params={"search": cliente["id"]}, headers=other_headers).json()
    assert body["total"] == 0


def test_other_tenant_cannot_update_or_delete_record(client, admin_headers):
    cliente = criar_cliente(client, admin_headers, name="ACME", email="contato@acme.com")
    other_headers = make_auth_headers(uuid4(), user_type="admin")

    updated = client.put(f"/customers/{cliente['id']}", json={"name": "Sequestrado"}, headers=other_headers)
    assert updated.status_code == status.HTTP_404_NOT_FOUND
    deleted = client.delete(f"/customers/{cliente['id']}", headers=other_headers)
    assert deleted.status_code == status.HTTP_404_NOT_FOUND

    intacto = client.get(f"/customers/{cliente['id']}", headers=admin_headers)
    assert intacto.status_code == status.HTTP_200_OK
    assert intacto.json()["name"] == "ACME"
    assert intacto.json()["email"] == "contato@acme.com"


def test_other_tenant_cannot_update_or_delete_catalog_item(client, admin_headers):
    service = client.post("/services/", json={"name": "Instalação", "value": 300}, headers=admin_headers).json()
    other_headers = make_auth_headers(uuid4(), user_type="admin")

    assert client.put(
        f"/services/{service['id']}", json={"value": 1}, headers=other_headers
    ).status_code == status.HTTP_404_NOT_FOUND
    assert client.delete(f"/services/{service['id']}", headers=other_headers).status_code == status.HTTP_404_NOT_FOUND

    intacto = client.get(f"/services/{service['id']}", headers=admin_headers).json()
    assert intacto["value"] == 300


def test_newest_first_by_default(client, admin_headers):
    for name in ("Primeiro", "Segundo", "Terceiro"):
        criar_cliente(client, admin_headers, name=name)

    body = client.get("/customers/", headers=admin_headers).json()
    assert [item["name"] for item in body["items"]] == ["Terceiro", "Segundo", "Primeiro"]


def test_contracts_search_by_customer_name(client, admin_headers):
    acme = criar_cliente(client, admin_headers, name="Acme Refrigeração", email="contato@acme.com")
    beta = criar_cliente(client, admin_headers, name="Beta Ltda")
    for customer in (acme, beta):
        response = client.post(
            "/contracts/",
            json={
                "customer_id": customer["id"],
                "start_date": "2024-01-01T00:00:00Z",
                "expire_date": "2025-01-01T00:00:00Z",
                "frequency": "monthly",
                "terms": "Manutenção preventiva mensal",
                "value": 350.0,
            },
            headers=admin_headers,
        )
        assert response.status_code == status.HTTP_201_CREATED, response.text

    body = client.get("/contracts/", params={"search": "acme"}, headers=admin_headers).json()

    assert body["total"] == 1
    assert body["items"][0]["customer"] == {
        "id": acme["id"],
        "name": "Acme Refrigeração",
        "email": "contato@acme.com",
    }


def test_contracts_search_by_customer_email(client, admin_headers):
    acme = criar_cliente(client, admin_headers, name="Acme", email="financeiro@acme.com")
    client.post(
        "/contracts/",
        json={
            "customer_id": acme["id"],
            "start_date": "2024-01-01T00:00:00Z",
            "expire_date": "2024-12-31T00:00:00Z",
            "frequency": "annual",
            "terms": "Contrato anual",
            "value": 1200,
        },
        headers=admin_headers,
    )

    body = client.get("/contracts/", params={"search": "FINANCEIRO@"}, headers=admin_headers).json()
    assert body["total"] == 1


def test_contract_expire_before_start_is_rejected(client, admin_headers):
    acme = criar_cliente(client, admin_headers)
    response = client.post(
        "/contracts/",
        json={
            "customer_id": acme["id"],
            "start_date": "2024-06-01T00:00:00Z",
            "expire_date": "2024-01-01T00:00:00Z",
            "frequency": "monthly",
            "terms": "x",
            "value": 10,
        },
        headers=admin_headers,
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_technician_search_by_linked_user_name(client, admin_headers):
    criar_tecnico(client, admin_headers, cpf="111", account={
        "first_name": "Carlos", "last_name": "Pereira", "email": "carlos@x.com", "password": "senha-forte-1",
    })
    criar_tecnico(client, admin_headers, cpf="222")

    body = client.get("/technicians/", params={"search": "PEREIRA"}, headers=admin_headers).json()

    assert body["total"] == 1
    assert body["items"][0]["user"]["first_name"] == "Carlos"
