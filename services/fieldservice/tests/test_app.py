import json
import logging

from fastapi import status


def test_root(client):
    response = client.get("/")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["service"] == "fieldservice"


def test_health(client):
    response = client.get("/health")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["status"] == "ok"


def test_ready_with_sqlite_and_no_redis(client):
    response = client.get("/ready")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["status"] == "ready"


def test_request_id_header_is_echoed(client):
    response = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


def test_openapi_version(client):
    response = client.get("/openapi.json")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["openapi"] == "3.0.3"


def _request_logs(caplog, path):
    entries = []
    for record in caplog.records:
        try:
            entry = json.loads(record.getMessage())
        except (json.JSONDecodeError, TypeError):
            continue
        if entry.get("event") == "request_completed" and entry.get("path") == path:
            entries.append(entry)
    return entries


def test_request_log_carries_tenant_from_token(client, tenant_id, admin_headers, caplog):
    caplog.set_level(logging.INFO)

    response = client.get("/customers/", headers=admin_headers)

    assert response.status_code == status.HTTP_200_OK
    entry = _request_logs(caplog, "/customers/")[-1]
    assert entry["tenant_id"] == str(tenant_id)
    assert entry["user_id"]
    assert entry["status_code"] == 200
