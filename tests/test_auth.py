from fastapi import status

from conftest import PASSWORD, make_auth_headers
from salon_core.core.login_throttle import LoginThrottle, get_login_throttle
from salon_core.main import app
from salon_core.models import AdminAccount, Tenant


class FakeRedis:
    """In-memory stand-in for the handful of redis commands the throttle uses."""

    def __init__(self):
        self.values = {}
        self.ttls = {}

    def get(self, key):
        value = self.values.get(key)
        return None if value is None else str(value)

    def ttl(self, key):
        return self.ttls.get(key, -1)

    def incr(self, key):
        self.values[key] = self.values.get(key, 0) + 1
        return self.values[key]

    def expire(self, key, seconds):
        self.ttls[key] = seconds
        return True

    def delete(self, key):
        self.values.pop(key, None)
        self.ttls.pop(key, None)
        return 1


def _login(client, email, password=PASSWORD, **extra):
    return client.post("/api/v1/auth/login", json={"email": email, "password": password, **extra})


def test_login_sets_http_only_cookie_without_token_in_body(client, salons):
    response = _login(client, "owner@glowstudio.com")
    assert response.status_code == status.HTTP_200_OK

    body = response.json()
    assert body["success"] is True
    assert body["admin"]["email"] == "owner@glowstudio.com"
    assert body["admin"]["tenant_id"] == salons.glow.id
    assert "hashed_password" not in body["admin"]

    set_cookie = response.headers["set-cookie"]
    assert set_cookie.startswith("accessToken=")
    assert "HttpOnly" in set_cookie
    assert "samesite=lax" in set_cookie.lower()

    token = response.cookies.get("accessToken")
    assert token and token not in response.text


def test_session_cookie_authenticates_follow_up_requests(client, salons):
    _login(client, "owner@glowstudio.com")

    response = client.get("/api/v1/auth/me")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["admin"]["role"] == "tenant_admin"


def test_login_is_case_insensitive_on_email(client, salons):
    assert _login(client, "Owner@GlowStudio.COM").status_code == status.HTTP_200_OK


def test_login_records_last_login(client, db, salons):
    _login(client, "owner@glowstudio.com")

    db.expire_all()
    account = db.query(AdminAccount).filter(AdminAccount.email == "owner@glowstudio.com").first()
    assert account.last_login_at is not None


def test_login_failures_are_indistinguishable(client, db, salons):
    wrong_password = _login(client, "owner@glowstudio.com", "not-the-password")
    unknown_email = _login(client, "nobody@example.com")

    db.get(AdminAccount, salons.luxe_admin.id).is_active = False
    db.commit()
    inactive_account = _login(client, "owner@luxespa.com")

    for response in (wrong_password, unknown_email, inactive_account):
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["detail"] == "Invalid credentials"
        assert "set-cookie" not in response.headers


def test_login_refused_for_inactive_salon(client, db, salons):
    tenant = db.get(Tenant, salons.glow.id)
    tenant.is_active = False
    db.commit()

    response = _login(client, "owner@glowstudio.com")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["detail"] == "Invalid credentials"


def test_login_ignores_role_and_tenant_in_body(client, salons):
    response = _login(client, "owner@glowstudio.com", role="super_admin", tenant_id=salons.luxe.id)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["admin"]["role"] == "tenant_admin"
    assert response.json()["admin"]["tenant_id"] == salons.glow.id


def test_me_requires_session(client, salons):
    response = client.get("/api/v1/auth/me")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_me_rejects_deactivated_account_with_live_token(client, db, salons, glow_headers):
    account = db.get(AdminAccount, salons.glow_admin.id)
    account.is_active = False
    db.commit()

    response = client.get("/api/v1/auth/me", headers=glow_headers)
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_refresh_issues_new_cookie(client, salons, glow_headers):
    response = client.post("/api/v1/auth/refresh", headers=glow_headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.cookies.get("accessToken")
    assert response.json()["admin"]["tenant_id"] == salons.glow.id


def test_logout_clears_cookie(client, salons):
    _login(client, "owner@glowstudio.com")

    response = client.post("/api/v1/auth/logout")
    assert response.status_code == status.HTTP_200_OK
    assert 'accessToken=""' in response.headers["set-cookie"] or "Max-Age=0" in response.headers["set-cookie"]

    assert client.get("/api/v1/auth/me").status_code == status.HTTP_401_UNAUTHORIZED


def test_signup_creates_salon_and_tenant_admin(client, db):
    response = client.post("/api/v1/auth/signup", json={
        "salon_name": "Bloom Bar",
        "slug": "bloom-bar",
        "email": "hello@bloombar.com",
        "password": "long-enough-pw",
        "role": "super_admin",
    })
    assert response.status_code == status.HTTP_201_CREATED

    admin = response.json()["admin"]
    assert admin["role"] == "tenant_admin"

    tenant = db.query(Tenant).filter(Tenant.slug == "bloom-bar").first()
    assert tenant is not None
    assert admin["tenant_id"] == tenant.id
    assert response.cookies.get("accessToken")


def test_signup_rejects_taken_slug_and_email(client, salons):
    taken_slug = client.post("/api/v1/auth/signup", json={
        "salon_name": "Another Glow",
        "slug": "glow",
        "email": "new@glowstudio.com",
        "password": "long-enough-pw",
    })
    assert taken_slug.status_code == status.HTTP_400_BAD_REQUEST

    taken_email = client.post("/api/v1/auth/signup", json={
        "salon_name": "Fresh",
        "slug": "fresh",
        "email": "owner@glowstudio.com",
        "password": "long-enough-pw",
    })
    assert taken_email.status_code == status.HTTP_400_BAD_REQUEST


def test_repeated_failures_lock_the_email(client, salons):
    throttle = LoginThrottle(redis_client=FakeRedis(), max_attempts=3, lockout_seconds=600)
    app.dependency_overrides[get_login_throttle] = lambda: throttle

    for _ in range(3):
        assert _login(client, "owner@glowstudio.com", "wrong").status_code == status.HTTP_401_UNAUTHORIZED

    locked = _login(client, "owner@glowstudio.com")
    assert locked.status_code == status.HTTP_429_TOO_MANY_REQUESTS
    assert locked.headers["retry-after"] == "600"

    # Unknown emails lock exactly the same way
    for _ in range(3):
        _login(client, "ghost@example.org", "wrong")
    assert _login(client, "ghost@example.org", "wrong").status_code == status.HTTP_429_TOO_MANY_REQUESTS


def test_successful_login_resets_failure_count(client, salons):
    throttle = LoginThrottle(redis_client=FakeRedis(), max_attempts=3, lockout_seconds=600)
    app.dependency_overrides[get_login_throttle] = lambda: throttle

    _login(client, "owner@glowstudio.com", "wrong")
    _login(client, "owner@glowstudio.com", "wrong")
    assert _login(client, "owner@glowstudio.com").status_code == status.HTTP_200_OK

    _login(client, "owner@glowstudio.com", "wrong")
    _login(client, "owner@glowstudio.com", "wrong")
    assert _login(client, "owner@glowstudio.com").status_code == status.HTTP_200_OK


def test_bearer_header_works_for_api_clients(client, salons):
    headers = make_auth_headers(salons.operator)
    response = client.get("/api/v1/auth/me", headers=headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["admin"]["role"] == "super_admin"
