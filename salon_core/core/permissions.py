"""
Role Gate

Declarative minimum-role checks. Routers declare their requirement once
when they are mounted (see salon_core.api.router), so the whole map of
"who may call what" lives in one table instead of inside handlers.

Role hierarchy: SUPER_ADMIN > TENANT_ADMIN.

401 and 403 mean different things here:
- 401: no valid session, we don't know who you are (Principal Resolver)
- 403: we know who you are and your role is too low (this module)
"""
from fastapi import Request

from salon_core.core.exceptions import AuthenticationError, ForbiddenError
from salon_core.core.principal import Principal
from salon_core.models.admin import AdminRole
from salon_core.utils.logging import get_logger, log_security_event

logger = get_logger(__name__)


def get_principal(request: Request) -> Principal:
    """
    Principal attached by PrincipalMiddleware.

    The middleware already rejects unauthenticated requests on protected
    paths; this refuses again if a route is ever reached without one.
    """
    principal = getattr(request.state, "principal", None)
    if principal is None:
        raise AuthenticationError("Not authenticated")
    return principal


class RoleGate:
    """
    Dependency enforcing a minimum role.

    Usage:
        api_router.include_router(
            waitlist.router,
            dependencies=[Depends(RoleGate(AdminRole.TENANT_ADMIN))],
        )
    """

    def __init__(self, min_role: AdminRole):
        self.min_role = AdminRole(min_role)

    def __call__(self, request: Request) -> Principal:
        principal = get_principal(request)
        if not principal.has_role(self.min_role):
            log_security_event(
                "role_denied",
                {
                    "admin_id": principal.admin_id,
                    "role": principal.role.value,
                    "required_role": self.min_role.value,
                    "path": request.url.path,
                },
                logger
            )
            raise ForbiddenError(f"This action requires {self.min_role.value} role or higher")
        return principal

    def __repr__(self):
        return f"RoleGate({self.min_role.value})"


require_tenant_admin = RoleGate(AdminRole.TENANT_ADMIN)
require_super_admin = RoleGate(AdminRole.SUPER_ADMIN)
