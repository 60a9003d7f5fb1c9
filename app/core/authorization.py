"""
Authorization guard.

Turns a presented token into a principal and enforces the tenant boundary
and role checks that every note and tenant operation goes through. Tenant
access is a plain equality check: Admins get no cross-tenant override.
"""
from app.core.exceptions import (
    AccessDeniedError,
    InsufficientPermissionsError,
    PrincipalNotFoundError,
    TenantMismatchError,
    TenantNotFoundError,
)
from app.core.logging_config import logger
from app.core.security import TokenService, token_service
from app.crud import tenant as tenant_crud
from app.crud import user as user_crud
from app.database import Store
from app.models.user import UserRole
from app.schemas.auth import Principal


def authenticate(store: Store, token: str, tokens: TokenService = token_service) -> Principal:
    """
    Verify a token and check that its claims still match live records.

    Args:
        store: Datastore holding users and tenants
        token: Encoded JWT presented by the caller
        tokens: Token service used for signature and expiry checks

    Returns:
        Principal embedded in the token

    Raises:
        InvalidTokenError: (subclasses) token malformed, forged or expired
        PrincipalNotFoundError: subject is not an active user
        TenantNotFoundError: tenant claim is not an active tenant
        TenantMismatchError: user's tenant differs from the tenant claim
    """
    principal = tokens.verify(token)

    with store.transaction() as db:
        user = user_crud.get_active(db, principal.user_id)
        if user is None:
            logger.warning(f"Token subject no longer active: user_id={principal.user_id}")
            raise PrincipalNotFoundError()

        tenant = tenant_crud.get_active(db, principal.tenant_slug)
        if tenant is None:
            logger.warning(f"Token tenant no longer active: tenant={principal.tenant_slug}")
            raise TenantNotFoundError()

        if user.tenant_id != tenant.slug:
            logger.warning(
                f"Tenant mismatch: user_id={user.id}, user_tenant={user.tenant_id}, "
                f"token_tenant={tenant.slug}"
            )
            raise TenantMismatchError()

    return principal


def authorize_tenant_access(principal: Principal, resource_tenant_slug: str) -> None:
    """
    Allow access only when the resource lives in the principal's tenant.

    Raises:
        AccessDeniedError: resource belongs to another tenant
    """
    if principal.tenant_slug != resource_tenant_slug:
        raise AccessDeniedError()


def require_role(principal: Principal, role: UserRole) -> None:
    if principal.role != role:
        raise InsufficientPermissionsError(user_role=principal.role.value)
