from fastapi import Depends, Request
from app.core.authorization import authenticate, require_role
from app.core.exceptions import AuthRequiredError, InvalidTokenError
from app.core.logging_config import logger
from app.database import Store, get_store
from app.models.user import UserRole
from app.schemas.auth import Principal


def get_current_principal(
    request: Request,
    store: Store = Depends(get_store)
) -> Principal:
    """
    Extract the Bearer token from the Authorization header and authenticate it.

    Args:
        request: FastAPI Request to extract Authorization header
        store: Datastore used to resolve the token's user and tenant

    Returns:
        Principal asserted by a valid token

    Raises:
        AuthRequiredError: If the header is missing or not a Bearer token
        AuthenticationError: If the token or its principal does not check out
    """
    authorization = request.headers.get("Authorization")
    if not authorization or not authorization.startswith("Bearer "):
        raise AuthRequiredError()

    token = authorization[len("Bearer "):].strip()
    if not token:
        raise AuthRequiredError()

    try:
        return authenticate(store, token)
    except InvalidTokenError as e:
        logger.warning(f"Rejected token: {e.error_code}")
        raise


def require_admin(principal: Principal = Depends(get_current_principal)) -> Principal:
    """
    Dependency that only lets Admin principals through.

    Raises:
        InsufficientPermissionsError: If the principal is not an Admin
    """
    require_role(principal, UserRole.admin)
    return principal
