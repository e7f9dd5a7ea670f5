import re
from uuid import uuid4

from fastapi import status

from conftest import criar_cliente, criar_tecnico


def _catalogo(client, headers):
    service = client.post("/services/", json={"name": "Instalação", "value": 300}, headers=headers).json()
    product = client.post("/products/", json={"name": "Suporte", "value": 50}, headers=headers).json()
    return service, product


def _orcamento(client, headers, customer, service, product, **extra):
    payload = {
        "customer_id": customer["id"],
        "equipments": [{"name": "Split quarto", "btus": 9000}],
        "services": [{"service_id": service["id"], "quantity": 1, "unit_value": 300}],
        "products": [{"product_id": product["id"], "quantity": 2, "unit_value": 50}],
        "total_value": 400,
        "description": "Instalação completa",
        "valid_until": "2030-01-01T00:00:00Z",
        **extra,
    }
    response = client.post("/quotes/", json=payload, headers=headers)
    assert response.status_code == status.HTTP_201_CREATED, response.text
    return response.json()


def test_quote_embeds_customer_reference(client, admin_headers):
    customer = criar_cliente(client, admin_headers, name="ACME", email="acme@x.com")
    service, product = _catalogo(client, admin_headers)
    quote = _orcamento(client, admin_headers, customer, service, product)

    assert quote["status"] == "draft"
    assert quote["services"][0]["service_id"] == service["id"]

    listed = client.get("/quotes/", params={"search": "acme"}, headers=admin_headers).json()
    assert listed["total"] == 1
    assert listed["items"][0]["customer"]["name"] == "ACME"


def test_quote_with_unknown_service_returns_404(client, admin_headers):
    customer = criar_cliente(client, admin_headers)
    response = client.post(
        "/quotes/",
        json={
            "customer_id": customer["id"],
            "services": [{"service_id": str(uuid4()), "quantity": 1, "unit_value": 10}],
            "total_value": 10,
            "valid_until": "2030-01-01T00:00:00Z",
        },
        headers=admin_headers,
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "Serviço não encontrado"


def test_quote_for_unknown_customer_returns_404(client, admin_headers):
    response = client.post(
        "/quotes/",
        json={"customer_id": str(uuid4()), "total_value": 10, "valid_until": "2030-01-01T00:00:00Z"},
        headers=admin_headers,
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_service_order_from_quote(client, admin_headers):
    customer = criar_cliente(client, admin_headers)
    technician = criar_tecnico(client, admin_headers)
    service, product = _catalogo(client, admin_headers)
    quote = _orcamento(client, admin_headers, customer, service, product)

    response = client.post(
        f"/service-orders/from-quote/{quote['id']}",
        json={"assigned_technician_id": technician["id"], "priority": "high"},
        headers=admin_headers,
    )

    assert response.status_code == status.HTTP_201_CREATED, response.text
    order = response.json()
    assert re.fullmatch(r"OS-\d{8}-[0-9A-F]{6}", order["order_number"])
    assert order["customer_id"] == customer["id"]
    assert order["quote_id"] == quote["id"]
    assert [item["type"] for item in order["items"]] == ["service", "product"]
    assert order["items"][1]["total_value"] == 100
    assert order["subtotal"] == 400
    assert order["total_value"] == 400
    assert order["priority"] == "high"

    quote_after = client.get(f"/quotes/{quote['id']}", headers=admin_headers).json()
    assert quote_after["status"] == "accepted"


def test_rejected_quote_cannot_generate_order(client, admin_headers):
    customer = criar_cliente(client, admin_headers)
    service, product = _catalogo(client, admin_headers)
    quote = _orcamento(client, admin_headers, customer, service, product, status="rejected")

    response = client.post(f"/service-orders/from-quote/{quote['id']}", json={}, headers=admin_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_service_order_search_and_update(client, admin_headers):
    customer = criar_cliente(client, admin_headers, name="Beta Frio")
    service, product = _catalogo(client, admin_headers)
    quote = _orcamento(client, admin_headers, customer, service, product)
    order = client.post(f"/service-orders/from-quote/{quote['id']}", json={}, headers=admin_headers).json()

    by_number = client.get("/service-orders/", params={"search": order["order_number"].lower()}, headers=admin_headers)
    assert by_number.json()["total"] == 1
    by_customer = client.get("/service-orders/", params={"search": "beta"}, headers=admin_headers)
    assert by_customer.json()["items"][0]["customer"]["name"] == "Beta Frio"

    updated = client.put(f"/service-orders/{order['id']}", json={"status": "in_progress"}, headers=admin_headers)
    assert updated.status_code == status.HTTP_200_OK
    assert updated.json()["status"] == "in_progress"

    filtered = client.get("/service-orders/", params={"status": "completed"}, headers=admin_headers).json()
    assert filtered["total"] == 0
