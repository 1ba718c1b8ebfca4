"""
Tenant Scope Enforcer

Every read and write of a tenant-owned model goes through a TenantScope.
The scope's tenant_id is taken from the resolved Principal (admin routes)
or from the salon addressed in the URL path (public routes). Nothing the
client puts in a body, query string or header can change it.

Rules:
- Reads are always filtered by tenant_id.
- Writes always get tenant_id stamped from the scope. A tenant value in the
  payload is dropped, not merged.
- A by-id lookup outside the scope is a plain 404, the same answer as for
  an id that doesn't exist anywhere.
- Bulk operations intersect the client's id list with the scope; foreign
  ids silently fall out of the affected set.
"""
from typing import Any, Iterable, Mapping, Optional, Type, TypeVar

from sqlalchemy.orm import Query, Session

from salon_core.core.exceptions import NotFoundError, TenantIsolationError
from salon_core.core.principal import Principal
from salon_core.models.tenant import Tenant
from salon_core.models.tenant_owned import TenantOwnedMixin
from salon_core.utils.logging import get_logger, log_security_event

logger = get_logger(__name__)

T = TypeVar("T", bound=TenantOwnedMixin)

# Never writable through a payload, whatever the spelling
PROTECTED_FIELDS = frozenset({
    "id",
    "tenant_id",
    "tenantId",
    "tenant",
    "created_at",
    "createdAt",
})


class TenantScope:
    """Query/write wrapper bound to exactly one tenant."""

    def __init__(self, db: Session, tenant_id: str):
        if not tenant_id:
            raise TenantIsolationError("Tenant context not available")
        self.db = db
        self.tenant_id = tenant_id

    @classmethod
    def for_principal(cls, db: Session, principal: Principal) -> "TenantScope":
        """
        Scope for an authenticated admin.

        Only tenant-bound principals have one. A super_admin reaching a
        tenant route is refused: platform access goes through the
        platform endpoints, never through salon data routes.
        """
        if not principal.tenant_id:
            log_security_event(
                "tenant_isolation_violation",
                {"admin_id": principal.admin_id, "reason": "no_tenant_in_principal"},
                logger
            )
            raise TenantIsolationError("This endpoint is only available to salon admins")
        return cls(db, principal.tenant_id)

    @classmethod
    def for_public_tenant(cls, db: Session, tenant: Tenant) -> "TenantScope":
        """Scope for unauthenticated routes, derived from the salon in the URL path."""
        return cls(db, tenant.id)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def query(self, model: Type[T]) -> Query:
        """Query pre-filtered to this tenant. Further filters are ANDed on."""
        _require_tenant_owned(model)
        return self.db.query(model).filter(model.tenant_id == self.tenant_id)

    def find(self, model: Type[T], record_id: str) -> Optional[T]:
        return self.query(model).filter(model.id == record_id).first()

    def get(self, model: Type[T], record_id: str,
            not_found: Type[NotFoundError] = NotFoundError) -> T:
        record = self.find(model, record_id)
        if record is None:
            raise not_found(record_id)
        return record

    def owned_ids(self, model: Type[T], ids: Iterable[str]) -> list[str]:
        """
        The subset of ids that belong to this tenant, in request order,
        duplicates removed.
        """
        requested = list(dict.fromkeys(i for i in ids if i))
        if not requested:
            return []
        owned = {
            row[0]
            for row in self.db.query(model.id).filter(
                model.tenant_id == self.tenant_id,
                model.id.in_(requested),
            )
        }
        return [i for i in requested if i in owned]

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    @staticmethod
    def scrub(payload: Mapping[str, Any]) -> dict:
        """Drop identity/ownership fields a client might have sent."""
        return {k: v for k, v in payload.items() if k not in PROTECTED_FIELDS}

    def create(self, model: Type[T], payload: Mapping[str, Any]) -> T:
        return self.add(model(**self.scrub(payload)))

    def add(self, record: T) -> T:
        # Overwrite, never merge
        record.tenant_id = self.tenant_id
        self.db.add(record)
        return record

    def update(self, record: T, payload: Mapping[str, Any]) -> T:
        self._assert_owned(record)
        for field, value in self.scrub(payload).items():
            setattr(record, field, value)
        return record

    def delete(self, record: T) -> None:
        self._assert_owned(record)
        self.db.delete(record)

    def update_where(self, model: Type[T], ids: Iterable[str],
                     values: Mapping[str, Any], *criteria) -> int:
        """
        Set ``values`` on every listed id owned by this tenant.

        Issued as one UPDATE whose WHERE clause carries the tenant filter,
        so each row is written atomically and foreign ids never match.
        Extra ``criteria`` narrow the set further (e.g. skip rows already
        in the target state). Returns the number of rows modified.
        """
        _require_tenant_owned(model)
        id_list = list(dict.fromkeys(i for i in ids if i))
        if not id_list:
            return 0

        modified = (
            self.query(model)
            .filter(model.id.in_(id_list), *criteria)
            .update(self.scrub(values), synchronize_session=False)
        )

        skipped = len(id_list) - modified
        if skipped:
            logger.debug(
                f"{model.__name__} bulk update: {modified} modified, {skipped} skipped",
                extra={"tenant_id": self.tenant_id}
            )
        return modified

    def _assert_owned(self, record: TenantOwnedMixin) -> None:
        if record.tenant_id != self.tenant_id:
            logger.error(
                f"Write to foreign {type(record).__name__} {record.id} blocked",
                extra={"tenant_id": self.tenant_id}
            )
            raise TenantIsolationError()


def _require_tenant_owned(model) -> None:
    if not (isinstance(model, type) and issubclass(model, TenantOwnedMixin)):
        raise TypeError(f"{model!r} is not a tenant-owned model")
