import pytest
from fastapi import status

from salon_core.models import Service

TENANT_ROUTES = [
    "/api/v1/services",
    "/api/v1/specialists",
    "/api/v1/waitlist",
    "/api/v1/consent-templates",
]


@pytest.mark.parametrize("path", TENANT_ROUTES + ["/api/v1/platform/tenants", "/api/v1/auth/me"])
def test_protected_routes_need_a_session(client, salons, path):
    response = client.get(path)
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["type"] == "authentication_error"


def test_invalid_token_is_unauthenticated(client, salons):
    response = client.get("/api/v1/services", headers={"Authorization": "Bearer not.a.token"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_unknown_paths_fail_closed(client, salons):
    assert client.get("/api/v1/nowhere").status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.parametrize("path", ["/", "/health", "/api/v1/auth/logout"])
def test_public_paths_need_no_session(client, path):
    response = client.get(path) if path != "/api/v1/auth/logout" else client.post(path)
    assert response.status_code == status.HTTP_200_OK


@pytest.mark.parametrize("path", TENANT_ROUTES)
def test_tenant_admin_reaches_tenant_routes(client, glow_headers, path):
    assert client.get(path, headers=glow_headers).status_code == status.HTTP_200_OK


def test_tenant_admin_is_forbidden_on_platform_routes(client, glow_headers):
    response = client.get("/api/v1/platform/tenants", headers=glow_headers)
    assert response.status_code == status.HTTP_403_FORBIDDEN

    provision = client.post("/api/v1/platform/tenants", headers=glow_headers, json={
        "salon_name": "Sneaky",
        "slug": "sneaky",
        "email": "x@sneaky.com",
        "password": "long-enough-pw",
    })
    assert provision.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.parametrize("path", TENANT_ROUTES)
def test_super_admin_has_no_salon_data_access(client, operator_headers, path):
    response = client.get(path, headers=operator_headers)
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["type"] == "tenant_isolation_error"


def test_super_admin_lists_and_provisions_salons(client, salons, operator_headers):
    listed = client.get("/api/v1/platform/tenants", headers=operator_headers)
    assert listed.status_code == status.HTTP_200_OK
    assert {t["slug"] for t in listed.json()} == {"glow", "luxe"}

    created = client.post("/api/v1/platform/tenants", headers=operator_headers, json={
        "salon_name": "Nova Nails",
        "slug": "nova",
        "email": "owner@novanails.com",
        "password": "long-enough-pw",
    })
    assert created.status_code == status.HTTP_201_CREATED
    assert created.json()["admin"]["role"] == "tenant_admin"
    assert created.json()["admin"]["tenant_id"] == created.json()["tenant"]["id"]


def test_unauthenticated_write_is_rejected_before_the_handler(client, db, salons):
    response = client.post("/api/v1/services", json={"name": "Free Facial", "tenant_id": salons.glow.id})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert db.query(Service).filter(Service.name == "Free Facial").count() == 0
