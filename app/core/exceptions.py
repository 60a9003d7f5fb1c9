"""
Error taxonomy for the notes API.

Every failure the core can report is a ``NotesAPIError`` subclass carrying
the HTTP status, a stable machine-readable ``error_code`` and optional
context (usage figures, offending field, ...). ``main.py`` renders them as
``{"detail": ..., "error": ..., **context}``.
"""
from typing import Any, Dict, Optional


class NotesAPIError(Exception):
    """Base exception for all expected API failures."""

    status_code: int = 500
    error_code: str = "INTERNAL_SERVER_ERROR"
    message: str = "An unexpected error occurred"

    def __init__(self, message: Optional[str] = None, **context: Any) -> None:
        self.message = message or self.message
        self.context: Dict[str, Any] = context
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"detail": self.message, "error": self.error_code, **self.context}


# ---------------------------------------------------------------------------
# Authentication
# ---------------------------------------------------------------------------

class AuthenticationError(NotesAPIError):
    status_code = 401
    error_code = "AUTHENTICATION_ERROR"
    message = "Could not validate credentials"


class AuthRequiredError(AuthenticationError):
    error_code = "AUTHENTICATION_REQUIRED"
    message = "Authorization header with Bearer token is required"


class InvalidTokenError(AuthenticationError):
    error_code = "INVALID_TOKEN"
    message = "Invalid or expired token"


class MalformedTokenError(InvalidTokenError):
    error_code = "TOKEN_MALFORMED"
    message = "Token could not be parsed"


class SignatureInvalidError(InvalidTokenError):
    error_code = "TOKEN_SIGNATURE_INVALID"
    message = "Token signature verification failed"


class TokenExpiredError(InvalidTokenError):
    error_code = "TOKEN_EXPIRED"
    message = "Token has expired"


class InvalidCredentialsError(AuthenticationError):
    error_code = "INVALID_CREDENTIALS"
    message = "Invalid email or password"


class PrincipalNotFoundError(AuthenticationError):
    error_code = "USER_NOT_FOUND"
    message = "User not found or inactive"


class TenantNotFoundError(AuthenticationError):
    error_code = "TENANT_NOT_FOUND"
    message = "Tenant not found or inactive"


# ---------------------------------------------------------------------------
# Authorization
# ---------------------------------------------------------------------------

class AuthorizationError(NotesAPIError):
    status_code = 403
    error_code = "ACCESS_DENIED"
    message = "Access denied"


class TenantMismatchError(AuthorizationError):
    error_code = "TENANT_MISMATCH"
    message = "User does not belong to the specified tenant"


class AccessDeniedError(AuthorizationError):
    error_code = "ACCESS_DENIED"
    message = "Resource belongs to another tenant"


class InsufficientPermissionsError(AuthorizationError):
    error_code = "INSUFFICIENT_PERMISSIONS"
    message = "Admin role required for this operation"


# ---------------------------------------------------------------------------
# Resources and input
# ---------------------------------------------------------------------------

class NoteNotFoundError(NotesAPIError):
    status_code = 404
    error_code = "NOTE_NOT_FOUND"
    message = "Note not found or access denied"


class ValidationError(NotesAPIError):
    status_code = 400
    error_code = "VALIDATION_ERROR"
    message = "Invalid input data"


# ---------------------------------------------------------------------------
# Entitlements
# ---------------------------------------------------------------------------

class EntitlementError(NotesAPIError):
    status_code = 403
    error_code = "ENTITLEMENT_ERROR"


class NoteLimitExceededError(EntitlementError):
    error_code = "NOTE_LIMIT_EXCEEDED"
    message = "Note limit reached for your subscription plan"


class CrossTenantUpgradeError(EntitlementError):
    error_code = "UNAUTHORIZED_TENANT_ACCESS"
    message = "You can only upgrade your own tenant"


class AlreadyProError(EntitlementError):
    status_code = 400
    error_code = "ALREADY_PRO_PLAN"
    message = "Tenant is already on Pro plan"
