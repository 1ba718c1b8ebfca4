from datetime import datetime, timedelta, timezone

import pytest

from salon_core.core.exceptions import NotFoundError, ServiceNotFoundError, TenantIsolationError
from salon_core.core.principal import Principal
from salon_core.core.tenant_scope import TenantScope
from salon_core.models import AdminAccount, AdminRole, Service


def _principal(role, tenant_id):
    now = datetime.now(timezone.utc)
    return Principal("admin-x", role, tenant_id, now, now + timedelta(hours=1))


def test_query_is_prefiltered(db, salons):
    scope = TenantScope(db, salons.glow.id)
    assert scope.query(Service).count() == 3
    assert {s.tenant_id for s in scope.query(Service)} == {salons.glow.id}


def test_get_outside_scope_raises_not_found(db, salons):
    scope = TenantScope(db, salons.glow.id)

    with pytest.raises(ServiceNotFoundError):
        scope.get(Service, salons.luxe_service.id, ServiceNotFoundError)
    assert scope.find(Service, salons.luxe_service.id) is None


def test_missing_record_uses_generic_not_found_by_default(db, salons):
    with pytest.raises(NotFoundError):
        TenantScope(db, salons.glow.id).get(Service, "missing")


def test_scrub_drops_ownership_fields():
    payload = {"name": "x", "id": "1", "tenant_id": "a", "tenantId": "b", "tenant": "c", "createdAt": "d"}
    assert TenantScope.scrub(payload) == {"name": "x"}


def test_create_stamps_scope_tenant(db, salons):
    scope = TenantScope(db, salons.glow.id)
    service = scope.create(Service, {"name": "Keratin", "tenant_id": salons.luxe.id})
    db.commit()

    assert service.tenant_id == salons.glow.id


def test_add_overwrites_preset_tenant(db, salons):
    scope = TenantScope(db, salons.glow.id)
    service = scope.add(Service(name="Keratin", tenant_id=salons.luxe.id))
    db.commit()

    assert service.tenant_id == salons.glow.id


def test_update_ignores_tenant_in_payload(db, salons):
    scope = TenantScope(db, salons.glow.id)
    service = scope.get(Service, salons.glow_services[0].id)
    scope.update(service, {"name": "Balayage XL", "tenant_id": salons.luxe.id})
    db.commit()

    assert (service.name, service.tenant_id) == ("Balayage XL", salons.glow.id)


def test_writes_to_foreign_records_are_refused(db, salons):
    scope = TenantScope(db, salons.glow.id)
    foreign = db.get(Service, salons.luxe_service.id)

    with pytest.raises(TenantIsolationError):
        scope.update(foreign, {"name": "Hijacked"})
    with pytest.raises(TenantIsolationError):
        scope.delete(foreign)


def test_reassigning_tenant_on_flush_is_refused(db, salons):
    service = db.get(Service, salons.glow_services[0].id)
    service.tenant_id = salons.luxe.id

    with pytest.raises(TenantIsolationError):
        db.flush()
    db.rollback()


def test_owned_ids_keeps_request_order_without_duplicates(db, salons):
    scope = TenantScope(db, salons.glow.id)
    first, second, _ = (s.id for s in salons.glow_services)

    ids = [second, salons.luxe_service.id, first, second, "", "missing"]
    assert scope.owned_ids(Service, ids) == [second, first]
    assert scope.owned_ids(Service, []) == []


def test_update_where_never_touches_foreign_rows(db, salons):
    scope = TenantScope(db, salons.glow.id)
    ids = [s.id for s in salons.glow_services] + [salons.luxe_service.id]

    modified = scope.update_where(Service, ids, {"is_active": False, "tenant_id": salons.luxe.id})
    db.commit()
    db.expire_all()

    assert modified == 3
    assert db.get(Service, salons.luxe_service.id).is_active is True
    assert scope.query(Service).count() == 3


def test_update_where_extra_criteria_narrow_the_set(db, salons):
    scope = TenantScope(db, salons.glow.id)
    ids = [s.id for s in salons.glow_services]

    modified = scope.update_where(Service, ids, {"category": "hair"}, Service.category != "hair")
    assert modified == 2


def test_principal_scope_requires_a_tenant(db, salons):
    scope = TenantScope.for_principal(db, _principal(AdminRole.TENANT_ADMIN, salons.glow.id))
    assert scope.tenant_id == salons.glow.id

    with pytest.raises(TenantIsolationError):
        TenantScope.for_principal(db, _principal(AdminRole.SUPER_ADMIN, None))


def test_public_scope_comes_from_path_tenant(db, salons):
    assert TenantScope.for_public_tenant(db, salons.luxe).tenant_id == salons.luxe.id


def test_scope_rejects_models_that_are_not_tenant_owned(db, salons):
    with pytest.raises(TypeError):
        TenantScope(db, salons.glow.id).query(AdminAccount)


def test_scope_needs_a_tenant_id(db):
    with pytest.raises(TenantIsolationError):
        TenantScope(db, "")


def test_admin_tenant_is_immutable(db, salons):
    account = db.get(AdminAccount, salons.glow_admin.id)
    with pytest.raises(ValueError):
        account.tenant_id = salons.luxe.id
