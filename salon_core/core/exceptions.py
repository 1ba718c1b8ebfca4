"""
Custom Exceptions

Centralized exception definitions. FastAPI turns these into HTTP
responses; main.py adds handlers for the ones that need logging.

Authentication and authorization errors never say anything about records
in other tenants. Lifecycle errors may name the current state.
"""
from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """
    Raised when a record does not exist within the caller's scope.

    A record owned by another tenant is reported exactly like a missing one.
    """

    resource_name = "Record"

    def __init__(self, record_id: str = ""):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{self.resource_name} not found: {record_id}" if record_id else f"{self.resource_name} not found"
        )


class TenantNotFoundError(NotFoundError):
    resource_name = "Salon"


class ServiceNotFoundError(NotFoundError):
    resource_name = "Service"


class SpecialistNotFoundError(NotFoundError):
    resource_name = "Specialist"


class WaitlistEntryNotFoundError(NotFoundError):
    resource_name = "Waitlist entry"


class ConsentTemplateNotFoundError(NotFoundError):
    resource_name = "Consent template"


class AuthenticationError(HTTPException):
    """Raised when the caller's identity cannot be established."""

    def __init__(self, detail: str = "Could not validate credentials"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class ForbiddenError(HTTPException):
    """Raised when a known caller's role is below what the route requires."""

    def __init__(self, detail: str = "Permission denied"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail
        )


class TenantIsolationError(HTTPException):
    """
    Raised when tenant scope cannot be established or would be violated.

    This is a CRITICAL security error and is logged by the app handler.
    """

    def __init__(self, detail: str = "Tenant isolation violation"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail
        )


class InvalidStateTransitionError(HTTPException):
    """Raised when a lifecycle action is not allowed from the record's current status."""

    def __init__(self, action: str, current_status: str, resource: str = "record"):
        self.action = action
        self.current_status = current_status
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Cannot {action} a {current_status} {resource}"
        )


class ConflictError(HTTPException):
    """Raised when a write collides with a record that already exists."""

    def __init__(self, detail: str = "Conflicts with an existing record"):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail
        )


class RateLimitExceeded(HTTPException):
    """Raised when rate limit is exceeded."""

    def __init__(self, retry_after: int = 60):
        super().__init__(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many attempts. Please try again later.",
            headers={"Retry-After": str(retry_after)}
        )


class InvalidInputError(HTTPException):
    """Raised when input validation fails."""

    def __init__(self, detail: str = "Invalid input"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail
        )
