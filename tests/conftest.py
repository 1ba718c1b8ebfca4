import os
from pathlib import Path
from types import SimpleNamespace

TESTS_DIR = Path(__file__).resolve().parent

# Settings are cached on first import, so the environment must be ready
# before anything from salon_core is imported.
os.environ["DATABASE_URL"] = f"sqlite:///{TESTS_DIR / 'test_salon.db'}"
os.environ["REDIS_URL"] = ""  # Login throttle disabled unless a test injects one
os.environ["ENVIRONMENT"] = "test"
os.environ["SESSION_COOKIE_SECURE"] = "false"  # TestClient talks plain http
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ.setdefault("SECRET_KEY", "ci-test-secret")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from salon_core.main import app  # noqa: E402
from salon_core.database import Base, SessionLocal, engine  # noqa: E402
from salon_core.core.security import get_password_hash, issue_session_token  # noqa: E402
from salon_core.models import (  # noqa: E402
    AdminAccount,
    AdminRole,
    Service,
    Specialist,
    Tenant,
    WaitlistEntry,
)

PASSWORD = "correct-horse-battery"


def make_auth_headers(account: AdminAccount) -> dict:
    """Bearer header carrying a real session token for ``account``."""
    return {"Authorization": f"Bearer {issue_session_token(account)}"}


def add_waitlist_entries(db, tenant_id: str, service_id: str, count: int, status: str = "active") -> list[str]:
    entries = [
        WaitlistEntry(
            tenant_id=tenant_id,
            client_name=f"Client {i}",
            client_email=f"client{i}@example.com",
            client_phone=f"+1555000{i:04d}",
            service_id=service_id,
            status=status,
        )
        for i in range(count)
    ]
    db.add_all(entries)
    db.commit()
    return [e.id for e in entries]


@pytest.fixture(autouse=True)
def prepare_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    app.dependency_overrides.clear()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def salons(db):
    """
    Two salons and a platform operator.

    glow: 3 active services, 1 specialist, admin owner@glowstudio.com
    luxe: 1 active service, admin owner@luxespa.com
    """
    glow = Tenant(name="Glow Studio", slug="glow")
    luxe = Tenant(name="Luxe Spa", slug="luxe")
    db.add_all([glow, luxe])
    db.flush()

    glow_admin = AdminAccount(
        email="owner@glowstudio.com",
        hashed_password=get_password_hash(PASSWORD),
        full_name="Glow Owner",
        role=AdminRole.TENANT_ADMIN,
        tenant_id=glow.id,
    )
    luxe_admin = AdminAccount(
        email="owner@luxespa.com",
        hashed_password=get_password_hash(PASSWORD),
        full_name="Luxe Owner",
        role=AdminRole.TENANT_ADMIN,
        tenant_id=luxe.id,
    )
    operator = AdminAccount(
        email="ops@salonplatform.com",
        hashed_password=get_password_hash(PASSWORD),
        role=AdminRole.SUPER_ADMIN,
        tenant_id=None,
    )
    db.add_all([glow_admin, luxe_admin, operator])

    glow_services = [
        Service(tenant_id=glow.id, name="Balayage", category="hair", duration_minutes=180, price=220),
        Service(tenant_id=glow.id, name="Gel Manicure", category="nails", duration_minutes=45, price=40),
        Service(tenant_id=glow.id, name="Hydrafacial", category="skin", duration_minutes=60, price=150),
    ]
    luxe_service = Service(tenant_id=luxe.id, name="Hot Stone Massage", category="body", duration_minutes=90, price=130)
    glow_specialist = Specialist(tenant_id=glow.id, name="Mara Quinn", title="Senior Colorist")
    db.add_all(glow_services + [luxe_service, glow_specialist])
    db.commit()

    return SimpleNamespace(
        glow=glow,
        luxe=luxe,
        glow_admin=glow_admin,
        luxe_admin=luxe_admin,
        operator=operator,
        glow_services=glow_services,
        luxe_service=luxe_service,
        glow_specialist=glow_specialist,
    )


@pytest.fixture
def glow_headers(salons):
    return make_auth_headers(salons.glow_admin)


@pytest.fixture
def luxe_headers(salons):
    return make_auth_headers(salons.luxe_admin)


@pytest.fixture
def operator_headers(salons):
    return make_auth_headers(salons.operator)
