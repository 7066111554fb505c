# app/core/errors.py
"""
Error taxonomy for the authorization and data-access layer.

Services and dependencies raise these; the handlers in app/core/responses.py
turn them into envelopes. Messages passed to the authorization errors are
for the logs only and never reach the client.
"""

from enum import Enum
from typing import List, Optional


class DenyReason(str, Enum):
    Unauthenticated = "Unauthenticated"
    InsufficientRole = "InsufficientRole"
    OutOfScope = "OutOfScope"


class PortalError(Exception):
    status_code: int = 500
    public_message: str = "Internal server error"

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail or self.public_message)
        self.detail = detail


# ------------------------------------------------------------
# Authorization
# ------------------------------------------------------------
class AuthorizationError(PortalError):
    status_code = 403
    public_message = "Not authorized"
    reason: Optional[DenyReason] = None


class Unauthenticated(AuthorizationError):
    status_code = 401
    reason = DenyReason.Unauthenticated


class InsufficientRole(AuthorizationError):
    reason = DenyReason.InsufficientRole


class OutOfScope(AuthorizationError):
    reason = DenyReason.OutOfScope


class ScopeMismatch(AuthorizationError):
    """A write named a department outside the caller's grants."""


class InvalidCredentials(PortalError):
    status_code = 401
    public_message = "Invalid email or password"


DENIAL_ERRORS = {
    DenyReason.Unauthenticated: Unauthenticated,
    DenyReason.InsufficientRole: InsufficientRole,
    DenyReason.OutOfScope: OutOfScope,
}


# ------------------------------------------------------------
# Data access
# ------------------------------------------------------------
class NotFound(PortalError):
    status_code = 404
    public_message = "Resource not found"


class FieldError(dict):
    def __init__(self, field: str, message: str):
        super().__init__(field=field, message=message)


class ValidationError(PortalError):
    status_code = 400
    public_message = "Validation failed"

    def __init__(self, errors: List[FieldError], detail: Optional[str] = None):
        super().__init__(detail or "; ".join(f"{e['field']}: {e['message']}" for e in errors))
        self.errors = errors

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls([FieldError(field, message)])


# ------------------------------------------------------------
# Backends
# ------------------------------------------------------------
class BackendUnavailable(PortalError):
    status_code = 503
    public_message = "Service temporarily unavailable"


class SessionBackendUnavailable(BackendUnavailable):
    pass


class AuthorizationBackendUnavailable(BackendUnavailable):
    pass


class StorageUnavailable(BackendUnavailable):
    pass
