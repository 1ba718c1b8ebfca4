import json
import logging

from fastapi import status

from salon_core.utils.logging import JSONFormatter, log_security_event


def _json_lines(caplog):
    formatter = JSONFormatter()
    return [json.loads(formatter.format(record)) for record in caplog.records]


def test_security_events_carry_structured_context(caplog):
    caplog.set_level("WARNING")
    logger = logging.getLogger("salon_core.tests")

    log_security_event("role_denied", {"admin_id": "admin-1", "tenant_id": "tenant-1"}, logger)

    (entry,) = _json_lines(caplog)
    assert entry["message"] == "SECURITY EVENT: role_denied"
    assert entry["event_type"] == "role_denied"
    assert entry["admin_id"] == "admin-1"
    assert entry["tenant_id"] == "tenant-1"
    assert entry["level"] == "WARNING"


def test_failed_login_is_logged_without_revealing_reason_to_client(client, salons, caplog):
    caplog.set_level("WARNING")

    response = client.post("/api/v1/auth/login", json={"email": "nobody@example.com", "password": "x"})
    assert response.json()["detail"] == "Invalid credentials"

    events = [r for r in caplog.records if getattr(r, "event_type", None) == "failed_login"]
    assert events and events[-1].reason == "unknown_email"


def test_super_admin_on_tenant_route_is_logged_as_isolation_event(client, operator_headers, caplog):
    caplog.set_level("WARNING")

    response = client.get("/api/v1/services", headers=operator_headers)
    assert response.status_code == status.HTTP_403_FORBIDDEN

    assert any(getattr(r, "event_type", None) == "tenant_isolation_violation" for r in caplog.records)
    assert any(r.levelno == logging.ERROR and "TENANT ISOLATION" in r.getMessage() for r in caplog.records)


def test_responses_carry_process_time(client):
    response = client.get("/health")
    assert response.status_code == status.HTTP_200_OK
    assert float(response.headers["x-process-time"]) >= 0
